"""Durable snapshot of the Catalog Store and Member Ledger.

SqlSnapshotWriter writes one committed unit of work inside a single database
transaction (upsert items/members, delete rejected items, append ledger entries).
load_snapshot() repopulates empty in-memory stores at startup.
"""

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.rw_catalog.domain.models import Item, SwapRequest
from src.rw_catalog.domain.repository import CatalogStoreProtocol
from src.rw_catalog.infrastructure.db_models import ItemORM
from src.rw_common.enums import (
    Badge,
    ExchangeState,
    ItemCategory,
    ItemCondition,
    LedgerEntryType,
    MemberRole,
    MemberStanding,
    SwapRequestStatus,
)
from src.rw_ledger.domain.models import LedgerEntry, Member
from src.rw_ledger.domain.repository import MemberLedgerProtocol
from src.rw_ledger.infrastructure.db_models import LedgerEntryORM, MemberORM

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Row mapping
# ---------------------------------------------------------------------------


def item_to_row(item: Item) -> dict[str, Any]:
    req = item.swap_request
    return {
        "id": item.id,
        "owner_id": item.owner_id,
        "title": item.title,
        "description": item.description,
        "points": item.points,
        "category": item.category.value,
        "size": item.size,
        "condition": item.condition.value,
        "tags": list(item.tags),
        "images": list(item.images),
        "watcher_count": item.watcher_count,
        "exchange_state": item.exchange_state.value,
        "under_review": item.under_review,
        "swap_requester_id": req.requester_id if req else None,
        "swap_status": req.status.value if req else None,
        "swap_requested_at": req.created_at if req else None,
        "created_at": item.created_at,
        "updated_at": item.updated_at,
    }


def row_to_item(row: Any) -> Item:
    swap_request = None
    if row.swap_requester_id is not None:
        swap_request = SwapRequest(
            item_id=row.id,
            requester_id=row.swap_requester_id,
            status=SwapRequestStatus(row.swap_status),
            created_at=row.swap_requested_at,
        )
    return Item(
        id=row.id,
        owner_id=row.owner_id,
        title=row.title,
        points=row.points,
        category=ItemCategory(row.category),
        size=row.size,
        condition=ItemCondition(row.condition),
        created_at=row.created_at,
        description=row.description,
        tags=list(row.tags or []),
        images=list(row.images or []),
        watcher_count=row.watcher_count,
        exchange_state=ExchangeState(row.exchange_state),
        under_review=row.under_review,
        swap_request=swap_request,
        updated_at=row.updated_at,
    )


def member_to_row(member: Member) -> dict[str, Any]:
    return {
        "id": member.id,
        "role": member.role.value,
        "points_balance": member.points_balance,
        "listings_count": member.listings_count,
        "total_swaps": member.total_swaps,
        "badges": sorted(b.value for b in member.badges),
        "standing": member.standing.value,
        "created_at": member.created_at,
        "updated_at": member.updated_at,
    }


def row_to_member(row: Any) -> Member:
    return Member(
        id=row.id,
        role=MemberRole(row.role),
        points_balance=row.points_balance,
        created_at=row.created_at,
        listings_count=row.listings_count,
        total_swaps=row.total_swaps,
        badges={Badge(b) for b in row.badges or []},
        standing=MemberStanding(row.standing),
        updated_at=row.updated_at,
    )


def entry_to_row(entry: LedgerEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "member_id": entry.member_id,
        "entry_type": entry.entry_type.value,
        "amount": entry.amount,
        "balance_after": entry.balance_after,
        "reference_id": entry.reference_id,
        "created_at": entry.created_at,
    }


def row_to_entry(row: Any) -> LedgerEntry:
    return LedgerEntry(
        id=row.id,
        member_id=row.member_id,
        entry_type=LedgerEntryType(row.entry_type),
        amount=row.amount,
        balance_after=row.balance_after,
        created_at=row.created_at,
        reference_id=row.reference_id,
    )


def _upsert(model: Any, row: dict[str, Any]) -> Any:
    stmt = insert(model).values(**row)
    updates = {k: stmt.excluded[k] for k in row if k not in ("id", "created_at")}
    return stmt.on_conflict_do_update(index_elements=[model.id], set_=updates)


# ---------------------------------------------------------------------------
# Writer / loader
# ---------------------------------------------------------------------------


class SqlSnapshotWriter:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def write(
        self,
        items: list[Item],
        removed_item_ids: list[str],
        members: list[Member],
        entries: list[LedgerEntry],
    ) -> None:
        async with self._session_factory() as db:
            async with db.begin():
                for item in items:
                    await db.execute(_upsert(ItemORM, item_to_row(item)))
                if removed_item_ids:
                    await db.execute(delete(ItemORM).where(ItemORM.id.in_(removed_item_ids)))
                for member in members:
                    await db.execute(_upsert(MemberORM, member_to_row(member)))
                if entries:
                    await db.execute(
                        insert(LedgerEntryORM), [entry_to_row(e) for e in entries]
                    )


async def load_snapshot(
    db: AsyncSession, catalog: CatalogStoreProtocol, ledger: MemberLedgerProtocol
) -> tuple[int, int]:
    """Populate the stores from the database. Returns (items, members) loaded."""
    items = (await db.execute(select(ItemORM))).scalars().all()
    members = (await db.execute(select(MemberORM))).scalars().all()
    entries = (
        await db.execute(select(LedgerEntryORM).order_by(LedgerEntryORM.created_at))
    ).scalars().all()

    for row in items:
        catalog.put(row_to_item(row))
    for row in members:
        ledger.put(row_to_member(row))
    for row in entries:
        ledger.append_entry(row_to_entry(row))

    logger.info("Snapshot loaded: items=%d members=%d entries=%d",
                len(items), len(members), len(entries))
    return len(items), len(members)
