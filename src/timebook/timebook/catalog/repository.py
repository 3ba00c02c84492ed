from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ActivityBlock, ActivityCategory, ActivityTag


class CatalogRepository(Protocol):
    def list_categories(self, *, active_only: bool = False) -> Sequence[ActivityCategory]:
        """Categories by sort order, each carrying its tags (filtered the same way)."""

        raise NotImplementedError

    def list_blocks(self, *, active_only: bool = False) -> Sequence[ActivityBlock]:
        """Blocks by category sort order, then block sort order."""

        raise NotImplementedError

    def get_category(self, category_id: int) -> Optional[ActivityCategory]:
        raise NotImplementedError

    def get_tag(self, tag_id: int) -> Optional[ActivityTag]:
        raise NotImplementedError

    def get_block(self, block_id: int) -> Optional[ActivityBlock]:
        raise NotImplementedError

    def count_categories(self) -> int:
        raise NotImplementedError

    def count_tags(self, *, category_id: int) -> int:
        raise NotImplementedError

    def count_blocks(self, *, category_id: int) -> int:
        raise NotImplementedError

    def create_category(
        self, *, name: str, color: Optional[str], description: Optional[str], sort_order: int
    ) -> int:
        raise NotImplementedError

    def create_tag(
        self, *, name: str, category_id: int, description: Optional[str], sort_order: int
    ) -> int:
        raise NotImplementedError

    def create_block(
        self,
        *,
        label: str,
        category_id: int,
        tag_id: Optional[int],
        description: Optional[str],
        is_billable: bool,
        sort_order: int,
    ) -> int:
        raise NotImplementedError

    def set_category_active(self, category_id: int, *, active: bool) -> bool:
        raise NotImplementedError

    def set_tag_active(self, tag_id: int, *, active: bool) -> bool:
        raise NotImplementedError

    def set_block_active(self, block_id: int, *, active: bool) -> bool:
        raise NotImplementedError
