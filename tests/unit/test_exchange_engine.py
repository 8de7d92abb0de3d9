"""Unit tests for ExchangeEngine: listing, swap requests, redemption, races."""

import asyncio

import pytest

from src.rw_catalog.infrastructure.store import InMemoryCatalogStore
from src.rw_common.enums import (
    Badge,
    ItemCategory,
    ItemCondition,
    ItemStatus,
    LedgerEntryType,
    MemberRole,
    MemberStanding,
    SwapRequestStatus,
)
from src.rw_common.errors import (
    AlreadyExchangedError,
    InsufficientBalanceError,
    InvalidListingError,
    InvalidTransitionError,
    ItemNotFoundError,
    MemberBannedError,
    MemberExistsError,
    MemberNotFoundError,
    NoListingsError,
    NotSwapOwnerError,
    OwnItemError,
)
from src.rw_exchange.engine.engine import ExchangeEngine
from src.rw_ledger.infrastructure.store import MemberLedger
from src.rw_moderation.application.service import ModerationAuthority
from tests.factories import make_item, make_member


class SlowWriter:
    """Yields to the event loop while 'writing' so concurrent callers interleave."""

    def __init__(self) -> None:
        self.calls = 0

    async def write(self, *staged: object) -> None:
        self.calls += 1
        await asyncio.sleep(0.01)


class FailingWriter:
    async def write(self, *staged: object) -> None:
        raise ConnectionError("database unavailable")


def _balance(engine: ExchangeEngine, member_id: str) -> int:
    return engine.get_member(member_id).points_balance


async def _list(engine: ExchangeEngine, owner_id: str, points: int = 45) -> str:
    item = await engine.list_item(
        owner_id, "Vintage Denim Jacket", points, ItemCategory.OUTERWEAR, "M",
        ItemCondition.EXCELLENT,
    )
    return item.id


class TestRegisterMember:
    async def test_starting_balance_and_badge(self, engine: ExchangeEngine) -> None:
        member = await engine.register_member("m-1")
        assert member.points_balance == 50
        assert member.role == MemberRole.MEMBER
        assert member.badges == {Badge.NEW_MEMBER}
        entries = engine.list_ledger("m-1")
        assert [(e.entry_type, e.amount) for e in entries] == [
            (LedgerEntryType.REGISTRATION_BONUS, 50)
        ]

    async def test_duplicate_rejected(self, engine: ExchangeEngine) -> None:
        await engine.register_member("m-1")
        with pytest.raises(MemberExistsError):
            await engine.register_member("m-1")


class TestListItem:
    async def test_listing_bonus(self, engine: ExchangeEngine) -> None:
        await engine.register_member("owner-1")
        item_id = await _list(engine, "owner-1")

        item = engine.get_item(item_id)
        assert item.status == ItemStatus.AVAILABLE
        assert item.owner_id == "owner-1"
        owner = engine.get_member("owner-1")
        assert owner.points_balance == 60
        assert owner.listings_count == 1
        assert engine.list_ledger("owner-1")[0].entry_type == LedgerEntryType.LISTING_BONUS

    async def test_surprise_drop_on_third_listing(self, engine: ExchangeEngine) -> None:
        await engine.register_member("owner-1")
        for _ in range(2):
            await _list(engine, "owner-1")
        assert Badge.SURPRISE_DROP not in engine.get_member("owner-1").badges
        await _list(engine, "owner-1")
        assert Badge.SURPRISE_DROP in engine.get_member("owner-1").badges

    @pytest.mark.parametrize(
        ("title", "points", "category"),
        [
            ("", 10, "tops"),
            ("Shirt", 0, "tops"),
            ("Shirt", -3, "tops"),
            ("Shirt", 10, "hats"),
        ],
    )
    async def test_invalid_listing(
        self, engine: ExchangeEngine, title: str, points: int, category: str
    ) -> None:
        await engine.register_member("owner-1")
        with pytest.raises(InvalidListingError):
            await engine.list_item("owner-1", title, points, category, "M", "good")
        assert engine.list_items() == []
        assert _balance(engine, "owner-1") == 50

    async def test_unknown_owner(self, engine: ExchangeEngine) -> None:
        with pytest.raises(MemberNotFoundError):
            await _list(engine, "ghost")

    async def test_banned_owner(self, engine: ExchangeEngine, ledger: MemberLedger) -> None:
        ledger.put(make_member("owner-1", standing=MemberStanding.BANNED))
        with pytest.raises(MemberBannedError):
            await _list(engine, "owner-1")


class TestRequestSwap:
    async def test_scenario_swap_accepted(
        self, engine: ExchangeEngine, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        ledger.put(make_member("m-1", balance=50, listings=1))
        catalog.put(make_item("itm-1", owner_id="owner-1"))

        updated = await engine.request_swap("m-1", "itm-1")

        assert updated.status == ItemStatus.PENDING
        stored = engine.get_item("itm-1")
        assert stored.swap_request is not None
        assert stored.swap_request.requester_id == "m-1"
        assert stored.swap_request.status == SwapRequestStatus.PENDING
        assert _balance(engine, "m-1") == 50

    async def test_scenario_no_listings(
        self, engine: ExchangeEngine, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        ledger.put(make_member("m-1", balance=50, listings=0))
        catalog.put(make_item("itm-1"))

        with pytest.raises(NoListingsError):
            await engine.request_swap("m-1", "itm-1")
        assert engine.get_item("itm-1").status == ItemStatus.AVAILABLE
        assert engine.get_item("itm-1").swap_request is None

    async def test_owner_cannot_request(
        self, engine: ExchangeEngine, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        ledger.put(make_member("owner-1", listings=3))
        catalog.put(make_item("itm-1", owner_id="owner-1"))
        with pytest.raises(OwnItemError):
            await engine.request_swap("owner-1", "itm-1")

    async def test_single_pending_request(
        self, engine: ExchangeEngine, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        ledger.put(make_member("m-1", listings=1))
        ledger.put(make_member("m-2", listings=1))
        catalog.put(make_item("itm-1"))

        await engine.request_swap("m-1", "itm-1")
        with pytest.raises(InvalidTransitionError):
            await engine.request_swap("m-2", "itm-1")
        stored = engine.get_item("itm-1")
        assert stored.swap_request is not None
        assert stored.swap_request.requester_id == "m-1"

    async def test_unknown_item_and_member(
        self, engine: ExchangeEngine, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        ledger.put(make_member("m-1", listings=1))
        catalog.put(make_item("itm-1"))
        with pytest.raises(ItemNotFoundError):
            await engine.request_swap("m-1", "nope")
        with pytest.raises(MemberNotFoundError):
            await engine.request_swap("ghost", "itm-1")

    async def test_concurrent_requests_one_wins(
        self, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        engine = ExchangeEngine(catalog, ledger, SlowWriter())
        for mid in ("m-1", "m-2", "m-3"):
            ledger.put(make_member(mid, listings=1))
        catalog.put(make_item("itm-1"))

        results = await asyncio.gather(
            *(engine.request_swap(mid, "itm-1") for mid in ("m-1", "m-2", "m-3")),
            return_exceptions=True,
        )
        assert sum(1 for r in results if not isinstance(r, Exception)) == 1
        assert all(
            isinstance(r, InvalidTransitionError) for r in results if isinstance(r, Exception)
        )


class TestRedeem:
    async def test_scenario_redeem(
        self, engine: ExchangeEngine, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        ledger.put(make_member("m-1", balance=60))
        catalog.put(make_item("itm-1", points=45))

        item, member = await engine.redeem("m-1", "itm-1")

        assert item.status == ItemStatus.EXCHANGED
        assert member.points_balance == 15
        assert member.total_swaps == 1
        assert engine.get_item("itm-1").status == ItemStatus.EXCHANGED
        assert _balance(engine, "m-1") == 15
        entry = engine.list_ledger("m-1")[0]
        assert entry.entry_type == LedgerEntryType.REDEEM_DEBIT
        assert entry.amount == -45
        assert entry.reference_id == "itm-1"

    async def test_scenario_insufficient_balance(
        self, engine: ExchangeEngine, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        ledger.put(make_member("m-1", balance=45))
        catalog.put(make_item("itm-1", points=60))

        with pytest.raises(InsufficientBalanceError):
            await engine.redeem("m-1", "itm-1")
        assert _balance(engine, "m-1") == 45
        assert engine.get_item("itm-1").status == ItemStatus.AVAILABLE
        assert engine.list_ledger("m-1") == []

    async def test_scenario_second_redeem(
        self, engine: ExchangeEngine, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        ledger.put(make_member("m-1", balance=60))
        ledger.put(make_member("m-2", balance=100))
        catalog.put(make_item("itm-1", points=45))
        await engine.redeem("m-1", "itm-1")

        with pytest.raises(AlreadyExchangedError):
            await engine.redeem("m-2", "itm-1")
        assert _balance(engine, "m-2") == 100

    async def test_exact_balance_reaches_zero(
        self, engine: ExchangeEngine, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        ledger.put(make_member("m-1", balance=45))
        catalog.put(make_item("itm-1", points=45))
        _, member = await engine.redeem("m-1", "itm-1")
        assert member.points_balance == 0

    async def test_redeem_while_swap_pending(
        self, engine: ExchangeEngine, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        ledger.put(make_member("m-1", listings=1))
        ledger.put(make_member("m-2", balance=60))
        catalog.put(make_item("itm-1", points=45))
        await engine.request_swap("m-1", "itm-1")

        item, _ = await engine.redeem("m-2", "itm-1")
        assert item.status == ItemStatus.EXCHANGED
        assert item.swap_request is not None
        assert item.swap_request.status == SwapRequestStatus.REJECTED

    async def test_owner_cannot_redeem(
        self, engine: ExchangeEngine, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        ledger.put(make_member("owner-1", balance=500))
        catalog.put(make_item("itm-1", owner_id="owner-1"))
        with pytest.raises(OwnItemError):
            await engine.redeem("owner-1", "itm-1")

    async def test_writer_failure_changes_nothing(
        self, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        engine = ExchangeEngine(catalog, ledger, FailingWriter())
        ledger.put(make_member("m-1", balance=60))
        catalog.put(make_item("itm-1", points=45))

        with pytest.raises(ConnectionError):
            await engine.redeem("m-1", "itm-1")
        assert _balance(engine, "m-1") == 60
        assert engine.get_item("itm-1").status == ItemStatus.AVAILABLE
        assert engine.list_ledger("m-1") == []

    async def test_two_members_race_for_one_item(
        self, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        writer = SlowWriter()
        engine = ExchangeEngine(catalog, ledger, writer)
        ledger.put(make_member("m-1", balance=60))
        ledger.put(make_member("m-2", balance=60))
        catalog.put(make_item("itm-1", points=45))

        results = await asyncio.gather(
            engine.redeem("m-1", "itm-1"),
            engine.redeem("m-2", "itm-1"),
            return_exceptions=True,
        )
        winners = [r for r in results if not isinstance(r, Exception)]
        losers = [r for r in results if isinstance(r, Exception)]
        assert len(winners) == 1
        assert len(losers) == 1
        assert isinstance(losers[0], AlreadyExchangedError)
        assert writer.calls == 1
        assert _balance(engine, "m-1") + _balance(engine, "m-2") == 75

    async def test_one_member_races_two_items(
        self, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        engine = ExchangeEngine(catalog, ledger, SlowWriter())
        ledger.put(make_member("m-1", balance=60))
        catalog.put(make_item("itm-1", points=45))
        catalog.put(make_item("itm-2", points=45))

        results = await asyncio.gather(
            engine.redeem("m-1", "itm-1"),
            engine.redeem("m-1", "itm-2"),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], InsufficientBalanceError)
        assert _balance(engine, "m-1") == 15
        statuses = sorted(engine.get_item(i).status.value for i in ("itm-1", "itm-2"))
        assert statuses == [ItemStatus.AVAILABLE.value, ItemStatus.EXCHANGED.value]

    async def test_redeem_flagged_item(
        self, engine: ExchangeEngine, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        authority = ModerationAuthority(engine)
        ledger.put(make_member("admin-1", role=MemberRole.ADMIN))
        ledger.put(make_member("m-1", balance=60))
        catalog.put(make_item("itm-1", points=45))
        await authority.flag("admin-1", "itm-1")
        assert engine.get_item("itm-1").status == ItemStatus.PENDING

        item, member = await engine.redeem("m-1", "itm-1")

        assert item.status == ItemStatus.EXCHANGED
        assert item.under_review is False
        assert engine.get_item("itm-1").under_review is False
        assert member.points_balance == 15
        assert engine.list_ledger("m-1")[0].amount == -45
        with pytest.raises(AlreadyExchangedError):
            await authority.approve("admin-1", "itm-1")

    async def test_credit_during_redeem_is_kept(
        self, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        writer = SlowWriter()
        engine = ExchangeEngine(catalog, ledger, writer)
        ledger.put(make_member("m-1", balance=60))
        catalog.put(make_item("itm-1", points=45))

        await asyncio.gather(engine.redeem("m-1", "itm-1"), engine.credit("m-1", 10))

        assert _balance(engine, "m-1") == 25
        assert engine.list_ledger("m-1")[0].balance_after == 25
        assert writer.calls == 2


class TestAcceptSwap:
    async def test_owner_accepts(
        self, engine: ExchangeEngine, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        ledger.put(make_member("owner-1", listings=1))
        ledger.put(make_member("m-1", balance=50, listings=1))
        catalog.put(make_item("itm-1", owner_id="owner-1"))
        await engine.request_swap("m-1", "itm-1")

        item = await engine.accept_swap("owner-1", "itm-1")

        assert item.status == ItemStatus.EXCHANGED
        assert item.swap_request is not None
        assert item.swap_request.status == SwapRequestStatus.ACCEPTED
        assert engine.get_member("owner-1").total_swaps == 1
        assert engine.get_member("m-1").total_swaps == 1
        assert _balance(engine, "m-1") == 50

    async def test_only_owner_can_accept(
        self, engine: ExchangeEngine, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        ledger.put(make_member("owner-1", listings=1))
        ledger.put(make_member("m-1", listings=1))
        ledger.put(make_member("m-2", listings=1))
        catalog.put(make_item("itm-1", owner_id="owner-1"))
        await engine.request_swap("m-1", "itm-1")

        with pytest.raises(NotSwapOwnerError):
            await engine.accept_swap("m-2", "itm-1")
        assert engine.get_item("itm-1").status == ItemStatus.PENDING

    async def test_nothing_to_accept(
        self, engine: ExchangeEngine, catalog: InMemoryCatalogStore, ledger: MemberLedger
    ) -> None:
        ledger.put(make_member("owner-1"))
        catalog.put(make_item("itm-1", owner_id="owner-1"))
        with pytest.raises(InvalidTransitionError):
            await engine.accept_swap("owner-1", "itm-1")
