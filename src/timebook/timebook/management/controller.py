from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import roles_required, unexpected_error
from ..core.enums import Role
from ..container import Container
from .export import build_overview_csv, export_filename
from .ranges import determine_range


def register(app: Flask, container: Container) -> None:
    def _overview_from_args():
        range_start, range_end = determine_range(
            request.args.get("period"),
            request.args.get("from"),
            request.args.get("to"),
        )
        # An empty userId means all users.
        user_id = request.args.get("userId") or None
        return container.management_service.get_overview(
            range_start=range_start,
            range_end=range_end,
            user_id=user_id,
        )

    @app.route("/management/overview", methods=["GET"], endpoint="management_overview")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def management_overview():
        try:
            overview = _overview_from_args()
        except Exception:
            return unexpected_error("building the management overview")
        return jsonify(overview.to_dict())

    @app.route("/api/management/export", methods=["GET"], endpoint="management_export")
    @roles_required(Role.MANAGER, Role.ADMIN, denied_status=401)
    def management_export():
        """CSV of the per-user summary for the requested window."""

        try:
            overview = _overview_from_args()
        except Exception:
            return unexpected_error("exporting the management overview")

        csv_bytes = build_overview_csv(overview).encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{export_filename(overview)}"'},
        )
