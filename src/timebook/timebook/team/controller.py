from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import (
    current_role,
    current_user_id,
    error_response,
    form_value,
    roles_required,
    unexpected_error,
)
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/management/team", methods=["GET"], endpoint="team_overview")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def team_overview():
        return jsonify(container.team_service.overview().to_dict())

    @app.route("/management/team", methods=["POST"], endpoint="team_create")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def team_create():
        try:
            user_id = container.team_service.create_employee(
                current_role=current_role(),
                created_by_id=current_user_id(),
                name=form_value("name"),
                email=form_value("email"),
                password=form_value("password"),
                confirm_password=form_value("confirm_password"),
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error("creating the employee")
        return jsonify({"success": True, "user_id": user_id}), 201

    @app.route("/management/team/<user_id>/deactivate", methods=["POST"], endpoint="team_deactivate")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def team_deactivate(user_id: str):
        try:
            container.team_service.deactivate_employee(
                current_role=current_role(),
                current_user_id=current_user_id(),
                user_id=user_id,
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error("deactivating the employee")
        return jsonify({"success": True})
