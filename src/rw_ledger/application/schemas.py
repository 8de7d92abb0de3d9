"""Pydantic schemas for rw_ledger responses."""

from pydantic import BaseModel

from src.rw_common.datetime_utils import iso_or_empty
from src.rw_ledger.domain.models import LedgerEntry, Member


class MemberResponse(BaseModel):
    id: str
    role: str
    standing: str
    points_balance: int
    listings_count: int
    total_swaps: int
    badges: list[str]
    created_at: str

    @classmethod
    def from_member(cls, member: Member) -> "MemberResponse":
        return cls(
            id=member.id,
            role=member.role.value,
            standing=member.standing.value,
            points_balance=member.points_balance,
            listings_count=member.listings_count,
            total_swaps=member.total_swaps,
            badges=sorted(b.value for b in member.badges),
            created_at=iso_or_empty(member.created_at),
        )


class LedgerEntryItem(BaseModel):
    id: str
    entry_type: str
    amount: int
    balance_after: int
    reference_id: str | None
    created_at: str

    @classmethod
    def from_entry(cls, entry: LedgerEntry) -> "LedgerEntryItem":
        return cls(
            id=entry.id,
            entry_type=entry.entry_type.value,
            amount=entry.amount,
            balance_after=entry.balance_after,
            reference_id=entry.reference_id,
            created_at=iso_or_empty(entry.created_at),
        )


class LedgerResponse(BaseModel):
    member_id: str
    items: list[LedgerEntryItem]
