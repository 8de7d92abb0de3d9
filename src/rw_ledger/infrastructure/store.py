"""In-process Member Ledger store.

Holds member records keyed by id plus the append-only point history. This is a
plain get/put store: balance and counter changes are made by the Exchange
Engine under the member's lock and committed through its unit of work, so the
ledger never has a second writer racing the engine.
"""

import copy
from collections import defaultdict

from src.rw_ledger.domain.models import LedgerEntry, Member


class MemberLedger:
    def __init__(self) -> None:
        self._members: dict[str, Member] = {}
        self._entries: dict[str, list[LedgerEntry]] = defaultdict(list)

    def get(self, member_id: str) -> Member | None:
        member = self._members.get(member_id)
        return copy.deepcopy(member) if member is not None else None

    def put(self, member: Member) -> None:
        self._members[member.id] = copy.deepcopy(member)

    def append_entry(self, entry: LedgerEntry) -> None:
        self._entries[entry.member_id].append(entry)

    def entries_for(self, member_id: str) -> list[LedgerEntry]:
        """Point history, newest first."""
        return list(reversed(self._entries.get(member_id, [])))

    def all_members(self) -> list[Member]:
        return [copy.deepcopy(m) for m in self._members.values()]
