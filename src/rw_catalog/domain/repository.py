"""Catalog store Protocol: the Exchange Engine depends on this, not on a concrete store.

Unit tests may inject any object that conforms to it.
"""

from typing import Protocol

from src.rw_catalog.domain.models import Item, ItemFilter
from src.rw_common.enums import ItemSort


class CatalogStoreProtocol(Protocol):
    def get(self, item_id: str) -> Item | None: ...

    def put(self, item: Item) -> None: ...

    def remove(self, item_id: str) -> None: ...

    def query(self, item_filter: ItemFilter | None, sort: ItemSort) -> list[Item]: ...

    def count(self) -> int: ...
