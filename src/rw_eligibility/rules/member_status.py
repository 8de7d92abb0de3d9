from src.rw_common.errors import MemberBannedError, UnauthorizedError
from src.rw_ledger.domain.models import Member


def check_member_active(member: Member | None) -> Member:
    """Raise if there is no authenticated member or the member is banned."""
    if member is None:
        raise UnauthorizedError(1005, "Authenticated member required")
    if member.is_banned:
        raise MemberBannedError(member.id)
    return member
