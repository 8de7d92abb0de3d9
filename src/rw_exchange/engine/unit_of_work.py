"""UnitOfWork: stage item/member writes, then make them visible together.

All guards run before `commit()`. Commit first hands the staged records to the
optional snapshot writer (one database transaction); only if that succeeds are
they applied to the in-memory stores, using operations that cannot fail.
Either every staged change becomes visible or none does.
"""

from typing import Protocol

from src.rw_catalog.domain.models import Item
from src.rw_catalog.domain.repository import CatalogStoreProtocol
from src.rw_ledger.domain.models import LedgerEntry, Member
from src.rw_ledger.domain.repository import MemberLedgerProtocol


class SnapshotWriterProtocol(Protocol):
    async def write(
        self,
        items: list[Item],
        removed_item_ids: list[str],
        members: list[Member],
        entries: list[LedgerEntry],
    ) -> None: ...


class UnitOfWork:
    def __init__(
        self,
        catalog: CatalogStoreProtocol,
        ledger: MemberLedgerProtocol,
        writer: SnapshotWriterProtocol | None = None,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._writer = writer
        self._items: dict[str, Item] = {}
        self._removed: list[str] = []
        self._members: dict[str, Member] = {}
        self._entries: list[LedgerEntry] = []
        self.committed = False

    def stage_item(self, item: Item) -> None:
        self._items[item.id] = item

    def stage_removal(self, item_id: str) -> None:
        self._items.pop(item_id, None)
        self._removed.append(item_id)

    def stage_member(self, member: Member) -> None:
        self._members[member.id] = member

    def stage_entry(self, entry: LedgerEntry) -> None:
        self._entries.append(entry)

    async def commit(self) -> None:
        if self.committed:
            raise RuntimeError("UnitOfWork already committed")
        items = list(self._items.values())
        members = list(self._members.values())
        if self._writer is not None:
            await self._writer.write(items, list(self._removed), members, list(self._entries))
        for item in items:
            self._catalog.put(item)
        for item_id in self._removed:
            self._catalog.remove(item_id)
        for member in members:
            self._ledger.put(member)
        for entry in self._entries:
            self._ledger.append_entry(entry)
        self.committed = True
