from src.rw_catalog.domain.models import Item
from src.rw_common.enums import ItemStatus
from src.rw_common.errors import AlreadyExchangedError, InvalidTransitionError


def check_swappable(item: Item) -> None:
    if item.status == ItemStatus.EXCHANGED:
        raise AlreadyExchangedError(item.id, "request_swap")
    if item.status != ItemStatus.AVAILABLE:
        raise InvalidTransitionError(item.id, item.status.value, "request_swap")


def check_redeemable(item: Item) -> None:
    """Available and Pending items can be redeemed; Reserved ones wait for release."""
    if item.status == ItemStatus.EXCHANGED:
        raise AlreadyExchangedError(item.id, "redeem")
    if item.status == ItemStatus.RESERVED:
        raise InvalidTransitionError(item.id, item.status.value, "redeem")
