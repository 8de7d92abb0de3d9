from src.rw_catalog.domain.models import Item
from src.rw_common.errors import InsufficientBalanceError
from src.rw_ledger.domain.models import Member


def check_balance(member: Member, item: Item) -> None:
    if member.points_balance < item.points:
        raise InsufficientBalanceError(item.points, member.points_balance)
