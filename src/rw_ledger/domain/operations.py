"""Pure balance/counter transitions on a Member.

Each function returns an updated copy and leaves its argument untouched, so the
engine can stage several of them and commit the results together.
"""

from dataclasses import replace

from src.rw_common.datetime_utils import utc_now
from src.rw_common.enums import Badge
from src.rw_common.errors import InsufficientBalanceError, InvalidAmountError
from src.rw_ledger.domain.models import Member


def _check_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmountError(amount)


def apply_credit(member: Member, amount: int) -> Member:
    _check_amount(amount)
    return replace(member, points_balance=member.points_balance + amount, updated_at=utc_now())


def apply_debit(member: Member, amount: int) -> Member:
    """Raise InsufficientBalanceError rather than let the balance go negative."""
    _check_amount(amount)
    if member.points_balance < amount:
        raise InsufficientBalanceError(amount, member.points_balance)
    return replace(member, points_balance=member.points_balance - amount, updated_at=utc_now())


def apply_reset(member: Member) -> Member:
    return replace(member, points_balance=0, updated_at=utc_now())


def increment_listings(member: Member) -> Member:
    return replace(member, listings_count=member.listings_count + 1, updated_at=utc_now())


def increment_swaps(member: Member) -> Member:
    return replace(member, total_swaps=member.total_swaps + 1, updated_at=utc_now())


def award_badge(member: Member, badge: Badge) -> Member:
    if badge in member.badges:
        return member
    return replace(member, badges=member.badges | {badge}, updated_at=utc_now())
