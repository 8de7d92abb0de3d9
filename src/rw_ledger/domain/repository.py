"""Member Ledger Protocol: injected into the Exchange Engine and Moderation Authority."""

from typing import Protocol

from src.rw_ledger.domain.models import LedgerEntry, Member


class MemberLedgerProtocol(Protocol):
    def get(self, member_id: str) -> Member | None: ...

    def put(self, member: Member) -> None: ...

    def append_entry(self, entry: LedgerEntry) -> None: ...

    def entries_for(self, member_id: str) -> list[LedgerEntry]: ...

    def all_members(self) -> list[Member]: ...
