from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify

from ..common.web import current_role, error_response, form_value, json_error, roles_required, unexpected_error
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container

_TRUE_VALUES = {"1", "true", "on", "yes"}


def register(app: Flask, container: Container) -> None:
    def _flag(name: str) -> bool:
        return form_value(name).strip().lower() in _TRUE_VALUES

    @app.route("/admin/catalog", methods=["GET"], endpoint="admin_catalog")
    @roles_required(Role.ADMIN)
    def admin_catalog():
        try:
            data = container.catalog_service.admin_data(current_role=current_role())
        except DomainError as e:
            return error_response(e)
        return jsonify(asdict(data))

    @app.route("/admin/catalog/categories", methods=["POST"], endpoint="admin_catalog_create_category")
    @roles_required(Role.ADMIN)
    def admin_catalog_create_category():
        try:
            category_id = container.catalog_service.create_category(
                current_role=current_role(),
                name=form_value("name"),
                color=form_value("color"),
                description=form_value("description"),
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error("creating a category")
        return jsonify({"success": True, "category_id": category_id}), 201

    @app.route("/admin/catalog/tags", methods=["POST"], endpoint="admin_catalog_create_tag")
    @roles_required(Role.ADMIN)
    def admin_catalog_create_tag():
        try:
            tag_id = container.catalog_service.create_tag(
                current_role=current_role(),
                name=form_value("name"),
                category_id=form_value("category_id"),
                description=form_value("description"),
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error("creating a tag")
        return jsonify({"success": True, "tag_id": tag_id}), 201

    @app.route("/admin/catalog/blocks", methods=["POST"], endpoint="admin_catalog_create_block")
    @roles_required(Role.ADMIN)
    def admin_catalog_create_block():
        try:
            block_id = container.catalog_service.create_block(
                current_role=current_role(),
                label=form_value("label"),
                category_id=form_value("category_id"),
                tag_id=form_value("tag_id") or None,
                description=form_value("description"),
                is_billable=_flag("is_billable"),
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error("creating an activity block")
        return jsonify({"success": True, "block_id": block_id}), 201

    @app.route("/admin/catalog/<kind>/<int:record_id>/active", methods=["POST"], endpoint="admin_catalog_toggle")
    @roles_required(Role.ADMIN)
    def admin_catalog_toggle(kind: str, record_id: int):
        service = container.catalog_service
        toggles = {
            "categories": lambda active: service.set_category_active(
                current_role=current_role(), category_id=record_id, active=active
            ),
            "tags": lambda active: service.set_tag_active(current_role=current_role(), tag_id=record_id, active=active),
            "blocks": lambda active: service.set_block_active(
                current_role=current_role(), block_id=record_id, active=active
            ),
        }
        toggle = toggles.get(kind)
        if toggle is None:
            return json_error("Unknown catalog record type", 404)

        active = _flag("active")
        try:
            toggle(active)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error("updating the catalog")
        return jsonify({"success": True, "active": active})
