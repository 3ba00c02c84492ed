from __future__ import annotations

from datetime import date

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date
from ..common.web import (
    current_role,
    current_user_id,
    error_response,
    form_value,
    json_error,
    roles_required,
    unexpected_error,
)
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _schedule_dict(s) -> dict:
        return {
            "schedule_id": s.schedule_id,
            "user_id": s.user_id,
            "valid_from": s.valid_from.isoformat(),
            "weekly_minutes": s.weekly_minutes,
            "created_by_id": s.created_by_id,
        }

    @app.route("/management/schedules/<user_id>", methods=["GET"], endpoint="management_schedules")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def management_schedules(user_id: str):
        try:
            schedules = container.schedule_service.list_for_user(current_role=current_role(), user_id=user_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"user_id": user_id, "schedules": [_schedule_dict(s) for s in schedules]})

    @app.route("/management/schedules/<user_id>", methods=["POST"], endpoint="management_schedules_add")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def management_schedules_add(user_id: str):
        valid_from_s = form_value("valid_from") or date.today().isoformat()
        try:
            valid_from = parse_iso_date(valid_from_s)
        except ValueError:
            return json_error("valid_from must be YYYY-MM-DD", 400)

        try:
            schedule_id = container.schedule_service.add_schedule(
                current_role=current_role(),
                created_by_id=current_user_id(),
                user_id=user_id,
                weekly_minutes=form_value("weekly_minutes"),
                valid_from=valid_from,
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error("adding a schedule")
        return jsonify({"success": True, "schedule_id": schedule_id}), 201
