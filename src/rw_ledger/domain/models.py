"""Domain models for rw_ledger: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, field
from datetime import datetime

from src.rw_common.enums import Badge, LedgerEntryType, MemberRole, MemberStanding


@dataclass
class Member:
    id: str
    role: MemberRole
    points_balance: int          # never negative
    created_at: datetime
    listings_count: int = 0
    total_swaps: int = 0
    badges: set[Badge] = field(default_factory=set)
    standing: MemberStanding = MemberStanding.ACTIVE
    updated_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN

    @property
    def is_banned(self) -> bool:
        return self.standing == MemberStanding.BANNED


@dataclass(frozen=True)
class LedgerEntry:
    id: str
    member_id: str
    entry_type: LedgerEntryType
    amount: int                  # positive=credit negative=debit
    balance_after: int
    created_at: datetime
    reference_id: str | None = None
