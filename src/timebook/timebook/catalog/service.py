from __future__ import annotations

from typing import Optional

from ..common.validators import optional_text, require_min_length, require_non_empty, require_positive_int
from ..core.constants import MIN_NAME_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import CatalogData
from .repository import CatalogRepository


class CatalogService:
    """Use case: administrators maintain categories, tags and activity blocks."""

    def __init__(self, catalog: CatalogRepository):
        self._catalog = catalog

    @staticmethod
    def _require_admin(current_role: Optional[Role]) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can manage the catalog")

    @staticmethod
    def _require_name(value: str, field_name: str) -> str:
        value = require_non_empty(value, field_name)
        return require_min_length(value, field_name, MIN_NAME_LENGTH)

    def _build(self, *, active_only: bool) -> CatalogData:
        categories = list(self._catalog.list_categories(active_only=active_only))
        blocks = list(self._catalog.list_blocks(active_only=active_only))
        tags = [tag for category in categories for tag in category.tags]
        return CatalogData(categories=categories, blocks=blocks, tags=tags)

    def full_catalog(self) -> CatalogData:
        """Every record, inactive ones included; resolves labels of older entries."""
        return self._build(active_only=False)

    def admin_data(self, *, current_role: Optional[Role]) -> CatalogData:
        self._require_admin(current_role)
        return self.full_catalog()

    def active_catalog(self) -> CatalogData:
        return self._build(active_only=True)

    def create_category(
        self,
        *,
        current_role: Optional[Role],
        name: str,
        color: Optional[str] = None,
        description: Optional[str] = None,
    ) -> int:
        self._require_admin(current_role)
        name = self._require_name(name, "Name")
        return self._catalog.create_category(
            name=name,
            color=optional_text(color),
            description=optional_text(description),
            sort_order=self._catalog.count_categories() + 1,
        )

    def create_tag(
        self,
        *,
        current_role: Optional[Role],
        name: str,
        category_id,
        description: Optional[str] = None,
    ) -> int:
        self._require_admin(current_role)
        name = self._require_name(name, "Name")
        category_id = require_positive_int(category_id, "Category")
        if not self._catalog.get_category(category_id):
            raise ValidationError("Category does not exist")

        return self._catalog.create_tag(
            name=name,
            category_id=category_id,
            description=optional_text(description),
            sort_order=self._catalog.count_tags(category_id=category_id) + 1,
        )

    def create_block(
        self,
        *,
        current_role: Optional[Role],
        label: str,
        category_id,
        tag_id=None,
        description: Optional[str] = None,
        is_billable: bool = False,
    ) -> int:
        self._require_admin(current_role)
        label = self._require_name(label, "Label")
        category_id = require_positive_int(category_id, "Category")
        if not self._catalog.get_category(category_id):
            raise ValidationError("Category does not exist")

        resolved_tag_id = None
        if tag_id not in (None, ""):
            resolved_tag_id = require_positive_int(tag_id, "Tag")
            if not self._catalog.get_tag(resolved_tag_id):
                raise ValidationError("Tag does not exist")

        return self._catalog.create_block(
            label=label,
            category_id=category_id,
            tag_id=resolved_tag_id,
            description=optional_text(description),
            is_billable=bool(is_billable),
            sort_order=self._catalog.count_blocks(category_id=category_id) + 1,
        )

    def set_category_active(self, *, current_role: Optional[Role], category_id: int, active: bool) -> None:
        self._require_admin(current_role)
        if not self._catalog.get_category(int(category_id)):
            raise NotFoundError("Category not found")
        self._catalog.set_category_active(int(category_id), active=bool(active))

    def set_tag_active(self, *, current_role: Optional[Role], tag_id: int, active: bool) -> None:
        self._require_admin(current_role)
        if not self._catalog.get_tag(int(tag_id)):
            raise NotFoundError("Tag not found")
        self._catalog.set_tag_active(int(tag_id), active=bool(active))

    def set_block_active(self, *, current_role: Optional[Role], block_id: int, active: bool) -> None:
        self._require_admin(current_role)
        if not self._catalog.get_block(int(block_id)):
            raise NotFoundError("Activity block not found")
        self._catalog.set_block_active(int(block_id), active=bool(active))
