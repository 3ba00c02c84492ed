from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import (
    current_role,
    current_user_id,
    error_response,
    form_value,
    login_required,
    roles_required,
    unexpected_error,
)
from ..core.enums import EntrySource, Role
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _interval_fields() -> dict:
        return {
            "block_id": form_value("block_id"),
            "work_date": form_value("date"),
            "start": form_value("start"),
            "end": form_value("end"),
            "note": form_value("note"),
        }

    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        try:
            data = container.dashboard_service.get_dashboard(
                user_id=current_user_id(),
                period=request.args.get("period") or "day",
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error("loading the dashboard")
        return jsonify(data.to_dict())

    @app.route("/entries", methods=["POST"], endpoint="entries_create")
    @login_required
    def entries_create():
        fields = _interval_fields()
        # A quick-select shortcut posts the favorite's block as an override.
        override = form_value("block_id_override")
        source = EntrySource.MANUAL
        if override:
            fields["block_id"] = override
            source = EntrySource.QUICK_SELECT

        try:
            entry_id = container.time_entry_service.create_entry(user_id=current_user_id(), source=source, **fields)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error("saving the time entry")
        return jsonify({"success": True, "entry_id": entry_id}), 201

    @app.route("/entries/<entry_id>", methods=["POST"], endpoint="entries_update")
    @login_required
    def entries_update(entry_id: str):
        try:
            container.time_entry_service.update_entry(user_id=current_user_id(), entry_id=entry_id, **_interval_fields())
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error("updating the time entry")
        return jsonify({"success": True})

    @app.route("/entries/<entry_id>/delete", methods=["POST"], endpoint="entries_delete")
    @login_required
    def entries_delete(entry_id: str):
        try:
            container.time_entry_service.delete_entry(user_id=current_user_id(), entry_id=entry_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error("deleting the time entry")
        return jsonify({"success": True})

    @app.route("/admin/entries/<entry_id>", methods=["POST"], endpoint="admin_entries_adjust")
    @roles_required(Role.ADMIN)
    def admin_entries_adjust(entry_id: str):
        try:
            container.time_entry_service.adjust_entry(
                current_role=current_role(),
                editor_id=current_user_id(),
                entry_id=entry_id,
                **_interval_fields(),
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error("adjusting the time entry")
        return jsonify({"success": True})
