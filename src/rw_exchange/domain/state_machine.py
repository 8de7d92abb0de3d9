"""Item status state machine.

Each event is a pure function Item -> Item that raises InvalidTransitionError
(or AlreadyExchangedError for terminal items) when the current state does not
accept it. Callers stage the returned copy; nothing here touches a store.

    AVAILABLE --request_swap--> PENDING_SWAP
    AVAILABLE | PENDING_SWAP --redeem--> EXCHANGED
    PENDING_SWAP --accept_swap--> EXCHANGED
    AVAILABLE --flag--> AVAILABLE + under_review          (observed as PENDING)
    under_review --approve--> under_review cleared
    PENDING_SWAP --approve--> AVAILABLE (request declined)
    AVAILABLE --reserve--> RESERVED --approve--> AVAILABLE
"""

from dataclasses import replace
from datetime import datetime

from src.rw_catalog.domain.models import Item, SwapRequest
from src.rw_common.enums import ExchangeState, ItemStatus, SwapRequestStatus
from src.rw_common.errors import AlreadyExchangedError, InvalidTransitionError


def _refuse(item: Item, event: str) -> InvalidTransitionError:
    if item.exchange_state == ExchangeState.EXCHANGED:
        return AlreadyExchangedError(item.id, event)
    return InvalidTransitionError(item.id, item.status.value, event)


def _closed_request(item: Item, status: SwapRequestStatus) -> SwapRequest | None:
    if item.swap_request is None:
        return None
    return replace(item.swap_request, status=status)


def request_swap(item: Item, requester_id: str, now: datetime) -> Item:
    if item.status != ItemStatus.AVAILABLE:
        raise _refuse(item, "request_swap")
    request = SwapRequest(
        item_id=item.id,
        requester_id=requester_id,
        status=SwapRequestStatus.PENDING,
        created_at=now,
    )
    return replace(
        item, exchange_state=ExchangeState.PENDING_SWAP, swap_request=request, updated_at=now
    )


def redeem(item: Item, now: datetime) -> Item:
    """Allowed while a swap request is outstanding; that request is rejected."""
    if item.exchange_state not in (ExchangeState.AVAILABLE, ExchangeState.PENDING_SWAP):
        raise _refuse(item, "redeem")
    return replace(
        item,
        exchange_state=ExchangeState.EXCHANGED,
        under_review=False,
        swap_request=_closed_request(item, SwapRequestStatus.REJECTED),
        updated_at=now,
    )


def accept_swap(item: Item, now: datetime) -> Item:
    if item.exchange_state != ExchangeState.PENDING_SWAP or item.swap_request is None:
        raise _refuse(item, "accept_swap")
    return replace(
        item,
        exchange_state=ExchangeState.EXCHANGED,
        swap_request=_closed_request(item, SwapRequestStatus.ACCEPTED),
        updated_at=now,
    )


def flag(item: Item, now: datetime) -> Item:
    if item.status != ItemStatus.AVAILABLE:
        raise _refuse(item, "flag")
    return replace(item, under_review=True, updated_at=now)


def approve(item: Item, now: datetime) -> Item:
    if item.under_review:
        return replace(item, under_review=False, updated_at=now)
    if item.exchange_state == ExchangeState.PENDING_SWAP:
        return replace(
            item,
            exchange_state=ExchangeState.AVAILABLE,
            swap_request=_closed_request(item, SwapRequestStatus.REJECTED),
            updated_at=now,
        )
    if item.exchange_state == ExchangeState.RESERVED:
        return replace(item, exchange_state=ExchangeState.AVAILABLE, updated_at=now)
    raise _refuse(item, "approve")


def reserve(item: Item, now: datetime) -> Item:
    if item.status != ItemStatus.AVAILABLE:
        raise _refuse(item, "reserve")
    return replace(item, exchange_state=ExchangeState.RESERVED, updated_at=now)
