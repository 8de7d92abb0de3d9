from src.rw_catalog.domain.models import Item
from src.rw_common.errors import OwnItemError
from src.rw_ledger.domain.models import Member


def check_not_owner(member: Member, item: Item) -> None:
    if item.owner_id == member.id:
        raise OwnItemError(item.id)
