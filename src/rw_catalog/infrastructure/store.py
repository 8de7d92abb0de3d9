"""In-process Catalog Store.

Items live in a dict keyed by stable id, so removing one never shifts another's identity.
Reads hand out copies: a caller holding an Item cannot mutate the store behind the
engine's locks. Writes are plain dict operations and cannot fail part-way.
"""

import copy

from src.rw_catalog.domain.models import Item, ItemFilter
from src.rw_common.enums import ItemSort

_SORT_KEYS = {
    ItemSort.RECENT: (lambda i: i.created_at, True),
    ItemSort.POINTS: (lambda i: i.points, False),
    ItemSort.POPULAR: (lambda i: i.watcher_count, True),
}


class InMemoryCatalogStore:
    def __init__(self) -> None:
        self._items: dict[str, Item] = {}

    def get(self, item_id: str) -> Item | None:
        item = self._items.get(item_id)
        return copy.deepcopy(item) if item is not None else None

    def put(self, item: Item) -> None:
        self._items[item.id] = copy.deepcopy(item)

    def remove(self, item_id: str) -> None:
        self._items.pop(item_id, None)

    def query(
        self, item_filter: ItemFilter | None = None, sort: ItemSort = ItemSort.RECENT
    ) -> list[Item]:
        item_filter = item_filter or ItemFilter()
        key, reverse = _SORT_KEYS[sort]
        found = [i for i in self._items.values() if item_filter.matches(i)]
        return [copy.deepcopy(i) for i in sorted(found, key=key, reverse=reverse)]

    def count(self) -> int:
        return len(self._items)
