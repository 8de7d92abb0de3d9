from src.rw_common.errors import NoListingsError
from src.rw_ledger.domain.models import Member


def check_has_listings(member: Member) -> None:
    """Swapping is unlocked by listing at least one item."""
    if member.listings_count <= 0:
        raise NoListingsError(member.id)
