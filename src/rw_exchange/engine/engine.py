"""ExchangeEngine: applies swap/redeem/listing transitions against the two stores.

The engine owns no records. Every mutating operation:
  1. takes the per-item / per-member locks it needs (fixed order),
  2. re-reads the records and re-runs the Eligibility Gate inside the lock,
  3. stages the new records in a UnitOfWork and commits them together.
A refused operation raises before anything is staged, so it has no effect.
"""
import logging
from collections.abc import Callable

from src.rw_catalog.domain.models import Item, ItemFilter
from src.rw_catalog.domain.repository import CatalogStoreProtocol
from src.rw_common.datetime_utils import utc_now
from src.rw_common.enums import (
    Badge,
    ItemCategory,
    ItemCondition,
    ItemSort,
    LedgerEntryType,
    MemberRole,
)
from src.rw_common.errors import (
    AppError,
    InvalidListingError,
    InvalidTransitionError,
    ItemNotFoundError,
    MemberExistsError,
    MemberNotFoundError,
    NotSwapOwnerError,
)
from src.rw_common.id_generator import generate_id
from src.rw_eligibility.gate import check_can_redeem, check_can_request_swap
from src.rw_eligibility.rules.member_status import check_member_active
from src.rw_exchange.domain import state_machine
from src.rw_exchange.engine.locks import EntityLockManager, item_key, member_key
from src.rw_exchange.engine.unit_of_work import SnapshotWriterProtocol, UnitOfWork
from src.rw_ledger.domain import operations as ops
from src.rw_ledger.domain.models import LedgerEntry, Member
from src.rw_ledger.domain.repository import MemberLedgerProtocol

logger = logging.getLogger(__name__)

DEFAULT_STARTING_BALANCE = 50
DEFAULT_LISTING_BONUS = 10
DEFAULT_SURPRISE_DROP_LISTINGS = 3


def make_entry(
    member: Member,
    entry_type: LedgerEntryType,
    amount: int,
    reference_id: str | None = None,
) -> LedgerEntry:
    return LedgerEntry(
        id=generate_id("led_"),
        member_id=member.id,
        entry_type=entry_type,
        amount=amount,
        balance_after=member.points_balance,
        created_at=utc_now(),
        reference_id=reference_id,
    )


class ExchangeEngine:
    def __init__(
        self,
        catalog: CatalogStoreProtocol,
        ledger: MemberLedgerProtocol,
        writer: SnapshotWriterProtocol | None = None,
        *,
        starting_balance: int = DEFAULT_STARTING_BALANCE,
        listing_bonus: int = DEFAULT_LISTING_BONUS,
        surprise_drop_listings: int = DEFAULT_SURPRISE_DROP_LISTINGS,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._writer = writer
        self._locks = EntityLockManager()
        self.starting_balance = starting_balance
        self.listing_bonus = listing_bonus
        self.surprise_drop_listings = surprise_drop_listings

    @property
    def catalog(self) -> CatalogStoreProtocol:
        return self._catalog

    @property
    def ledger(self) -> MemberLedgerProtocol:
        return self._ledger

    @property
    def locks(self) -> EntityLockManager:
        return self._locks

    def unit_of_work(self) -> UnitOfWork:
        return UnitOfWork(self._catalog, self._ledger, self._writer)

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    def get_item(self, item_id: str) -> Item:
        item = self._catalog.get(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    def list_items(
        self, item_filter: ItemFilter | None = None, sort: ItemSort = ItemSort.RECENT
    ) -> list[Item]:
        return self._catalog.query(item_filter, sort)

    def get_member(self, member_id: str) -> Member:
        member = self._ledger.get(member_id)
        if member is None:
            raise MemberNotFoundError(member_id)
        return member

    def list_ledger(self, member_id: str) -> list[LedgerEntry]:
        self.get_member(member_id)
        return self._ledger.entries_for(member_id)

    # ------------------------------------------------------------------
    # Member Ledger operations
    # ------------------------------------------------------------------

    async def credit(self, member_id: str, amount: int) -> Member:
        return await self._adjust_member(
            member_id, lambda m: ops.apply_credit(m, amount), LedgerEntryType.CREDIT, amount
        )

    async def debit(self, member_id: str, amount: int) -> Member:
        """Raises InsufficientBalanceError and changes nothing if the balance would go negative."""
        return await self._adjust_member(
            member_id, lambda m: ops.apply_debit(m, amount), LedgerEntryType.DEBIT, -amount
        )

    async def increment_listings(self, member_id: str) -> Member:
        return await self._adjust_member(member_id, ops.increment_listings)

    async def increment_swaps(self, member_id: str) -> Member:
        return await self._adjust_member(member_id, ops.increment_swaps)

    async def _adjust_member(
        self,
        member_id: str,
        apply: Callable[[Member], Member],
        entry_type: LedgerEntryType | None = None,
        amount: int = 0,
    ) -> Member:
        async with self._locks.hold(member_key(member_id)):
            updated = apply(self.get_member(member_id))
            uow = self.unit_of_work()
            uow.stage_member(updated)
            if entry_type is not None:
                uow.stage_entry(make_entry(updated, entry_type, amount))
            await uow.commit()
        logger.info("Ledger updated: member=%s balance=%d listings=%d swaps=%d",
                    member_id, updated.points_balance, updated.listings_count,
                    updated.total_swaps)
        return updated

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def register_member(
        self, member_id: str, role: MemberRole = MemberRole.MEMBER
    ) -> Member:
        async with self._locks.hold(member_key(member_id)):
            if self._ledger.get(member_id) is not None:
                raise MemberExistsError(member_id)
            member = Member(
                id=member_id,
                role=MemberRole(role),
                points_balance=self.starting_balance,
                created_at=utc_now(),
                badges={Badge.NEW_MEMBER},
            )
            uow = self.unit_of_work()
            uow.stage_member(member)
            if self.starting_balance > 0:
                uow.stage_entry(
                    make_entry(member, LedgerEntryType.REGISTRATION_BONUS, self.starting_balance)
                )
            await uow.commit()
        logger.info("Member registered: member=%s role=%s", member.id, member.role.value)
        return member

    async def list_item(
        self,
        owner_id: str,
        title: str,
        points: int,
        category: ItemCategory | str,
        size: str,
        condition: ItemCondition | str,
        tags: list[str] | None = None,
        images: list[str] | None = None,
        description: str = "",
    ) -> Item:
        """Create an AVAILABLE item and credit the owner's listing bonus as one unit."""
        item = _build_item(owner_id, title, points, category, size, condition, tags, images,
                           description)
        async with self._locks.hold(member_key(owner_id)):
            owner = self._ledger.get(owner_id)
            if owner is None:
                raise MemberNotFoundError(owner_id)
            check_member_active(owner)

            owner = ops.increment_listings(owner)
            uow = self.unit_of_work()
            if self.listing_bonus > 0:
                owner = ops.apply_credit(owner, self.listing_bonus)
                uow.stage_entry(
                    make_entry(owner, LedgerEntryType.LISTING_BONUS, self.listing_bonus, item.id)
                )
            if owner.listings_count >= self.surprise_drop_listings:
                owner = ops.award_badge(owner, Badge.SURPRISE_DROP)
            uow.stage_item(item)
            uow.stage_member(owner)
            await uow.commit()
        logger.info(
            "Item listed: item=%s owner=%s points=%d balance=%d",
            item.id, owner.id, item.points, owner.points_balance,
        )
        return item

    async def request_swap(self, requester_id: str, item_id: str) -> Item:
        async with self._locks.hold(item_key(item_id), member_key(requester_id)):
            item = self.get_item(item_id)
            requester = self.get_member(requester_id)
            try:
                check_can_request_swap(requester, item)
            except AppError as e:
                logger.debug("request_swap refused: item=%s member=%s: %s",
                             item_id, requester_id, e.message)
                raise
            updated = state_machine.request_swap(item, requester_id, utc_now())
            uow = self.unit_of_work()
            uow.stage_item(updated)
            await uow.commit()
        logger.info("Swap requested: item=%s requester=%s", item_id, requester_id)
        return updated

    async def redeem(self, requester_id: str, item_id: str) -> tuple[Item, Member]:
        """Debit the requester and mark the item EXCHANGED, or do neither."""
        async with self._locks.hold(item_key(item_id), member_key(requester_id)):
            item = self.get_item(item_id)
            requester = self.get_member(requester_id)
            try:
                check_can_redeem(requester, item)
            except AppError as e:
                logger.debug("redeem refused: item=%s member=%s: %s",
                             item_id, requester_id, e.message)
                raise
            updated_item = state_machine.redeem(item, utc_now())
            updated_member = ops.increment_swaps(ops.apply_debit(requester, item.points))

            uow = self.unit_of_work()
            uow.stage_item(updated_item)
            uow.stage_member(updated_member)
            uow.stage_entry(
                make_entry(updated_member, LedgerEntryType.REDEEM_DEBIT, -item.points, item.id)
            )
            await uow.commit()
        logger.info(
            "Item redeemed: item=%s requester=%s points=%d balance=%d",
            item_id, requester_id, item.points, updated_member.points_balance,
        )
        return updated_item, updated_member

    async def accept_swap(self, owner_id: str, item_id: str) -> Item:
        """Owner accepts the live swap request: item EXCHANGED, both parties +1 swap."""
        pending = self.get_item(item_id)
        if pending.swap_request is None:
            raise InvalidTransitionError(item_id, pending.status.value, "accept_swap")
        requester_id = pending.swap_request.requester_id

        async with self._locks.hold(
            item_key(item_id), member_key(owner_id), member_key(requester_id)
        ):
            item = self.get_item(item_id)
            if item.owner_id != owner_id:
                raise NotSwapOwnerError(item_id)
            owner = check_member_active(self._ledger.get(owner_id))
            if item.swap_request is None or item.swap_request.requester_id != requester_id:
                raise InvalidTransitionError(item_id, item.status.value, "accept_swap")
            requester = self.get_member(requester_id)

            updated = state_machine.accept_swap(item, utc_now())
            uow = self.unit_of_work()
            uow.stage_item(updated)
            uow.stage_member(ops.increment_swaps(owner))
            uow.stage_member(ops.increment_swaps(requester))
            await uow.commit()
        logger.info("Swap accepted: item=%s owner=%s requester=%s",
                    item_id, owner_id, requester_id)
        return updated


def _build_item(
    owner_id: str,
    title: str,
    points: int,
    category: ItemCategory | str,
    size: str,
    condition: ItemCondition | str,
    tags: list[str] | None,
    images: list[str] | None,
    description: str,
) -> Item:
    if not title or not title.strip():
        raise InvalidListingError("title must not be empty")
    if isinstance(points, bool) or not isinstance(points, int) or points <= 0:
        raise InvalidListingError(f"points must be a positive integer, got {points!r}")
    try:
        category = ItemCategory(category)
        condition = ItemCondition(condition)
    except ValueError as e:
        raise InvalidListingError(str(e)) from None
    return Item(
        id=generate_id("itm_"),
        owner_id=owner_id,
        title=title.strip(),
        points=points,
        category=category,
        size=size,
        condition=condition,
        created_at=utc_now(),
        description=description,
        tags=list(tags or []),
        images=list(images or []),
    )
