"""Eligibility Gate: side-effect-free predicates over a Catalog/Ledger snapshot.

`check_*` raise the typed AppError explaining the refusal; `can_*` answer yes/no.
Passing the gate outside the engine's critical section is only advisory: the
engine re-runs the same checks under its locks before mutating anything.
"""

from src.rw_catalog.domain.models import Item
from src.rw_common.errors import AppError
from src.rw_eligibility.rules.balance_check import check_balance
from src.rw_eligibility.rules.item_state import check_redeemable, check_swappable
from src.rw_eligibility.rules.listing_requirement import check_has_listings
from src.rw_eligibility.rules.member_status import check_member_active
from src.rw_eligibility.rules.owner_exclusion import check_not_owner
from src.rw_ledger.domain.models import Member


def check_can_request_swap(member: Member | None, item: Item) -> Member:
    active = check_member_active(member)
    check_not_owner(active, item)
    check_has_listings(active)
    check_swappable(item)
    return active


def check_can_redeem(member: Member | None, item: Item) -> Member:
    active = check_member_active(member)
    check_not_owner(active, item)
    check_redeemable(item)
    check_balance(active, item)
    return active


def can_request_swap(member: Member | None, item: Item) -> bool:
    try:
        check_can_request_swap(member, item)
    except AppError:
        return False
    return True


def can_redeem(member: Member | None, item: Item) -> bool:
    try:
        check_can_redeem(member, item)
    except AppError:
        return False
    return True
