from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import (
    current_user_id,
    error_response,
    form_value,
    login_required,
    unexpected_error,
)
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        try:
            s_user = container.auth_service.authenticate(form_value("email"), form_value("password"))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error("signing in")

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        app.logger.info("User %s signed in", s_user.user_id)
        return jsonify({"success": True, "user": {"user_id": s_user.user_id, "name": s_user.name, "role": s_user.role.value}})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify({"user_id": session["user_id"], "name": session.get("name"), "role": session.get("role")})

    @app.route("/me/password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        try:
            container.account_service.change_password(
                user_id=current_user_id(),
                current_password=form_value("current_password"),
                new_password=form_value("new_password"),
                confirm_password=form_value("confirm_password"),
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error("changing the password")
        return jsonify({"success": True, "message": "Password updated"})
