"""Global enums: values must match the CHECK constraints in alembic/versions."""

from enum import Enum


class ItemStatus(str, Enum):
    """Observable item status, derived from ExchangeState plus the review flag."""
    AVAILABLE = "AVAILABLE"
    PENDING = "PENDING"
    EXCHANGED = "EXCHANGED"
    RESERVED = "RESERVED"


class ExchangeState(str, Enum):
    AVAILABLE = "AVAILABLE"
    PENDING_SWAP = "PENDING_SWAP"
    EXCHANGED = "EXCHANGED"
    RESERVED = "RESERVED"


class SwapRequestStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class ItemCategory(str, Enum):
    TOPS = "tops"
    BOTTOMS = "bottoms"
    OUTERWEAR = "outerwear"
    FOOTWEAR = "footwear"


class ItemCondition(str, Enum):
    NEW = "new"
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"


class ItemSort(str, Enum):
    RECENT = "recent"
    POINTS = "points"
    POPULAR = "popular"


class MemberRole(str, Enum):
    MEMBER = "MEMBER"
    ADMIN = "ADMIN"


class MemberStanding(str, Enum):
    ACTIVE = "ACTIVE"
    WARNED = "WARNED"
    BANNED = "BANNED"


class ModerationAction(str, Enum):
    BAN = "BAN"
    WARN = "WARN"
    RESET_POINTS = "RESET_POINTS"
    PROMOTE_TO_ADMIN = "PROMOTE_TO_ADMIN"


class LedgerEntryType(str, Enum):
    REGISTRATION_BONUS = "REGISTRATION_BONUS"
    LISTING_BONUS = "LISTING_BONUS"
    REDEEM_DEBIT = "REDEEM_DEBIT"
    MODERATOR_RESET = "MODERATOR_RESET"
    CREDIT = "CREDIT"
    DEBIT = "DEBIT"


class Badge(str, Enum):
    NEW_MEMBER = "New Member"
    SURPRISE_DROP = "Surprise Drop"
    ADMIN = "Admin"
