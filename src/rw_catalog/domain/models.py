"""Domain models for rw_catalog: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, field
from datetime import datetime

from src.rw_common.enums import (
    ExchangeState,
    ItemCategory,
    ItemCondition,
    ItemStatus,
    SwapRequestStatus,
)


@dataclass(frozen=True)
class SwapRequest:
    item_id: str
    requester_id: str
    status: SwapRequestStatus
    created_at: datetime


@dataclass
class Item:
    id: str
    owner_id: str
    title: str
    points: int                      # cost to redeem, always > 0
    category: ItemCategory
    size: str
    condition: ItemCondition
    created_at: datetime
    description: str = ""
    tags: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
    watcher_count: int = 0
    # Exchange lifecycle and moderation review are tracked independently;
    # `status` folds them into the single observable value.
    exchange_state: ExchangeState = ExchangeState.AVAILABLE
    under_review: bool = False
    swap_request: SwapRequest | None = None
    updated_at: datetime | None = None

    @property
    def status(self) -> ItemStatus:
        if self.exchange_state == ExchangeState.EXCHANGED:
            return ItemStatus.EXCHANGED
        if self.exchange_state == ExchangeState.RESERVED:
            return ItemStatus.RESERVED
        if self.exchange_state == ExchangeState.PENDING_SWAP or self.under_review:
            return ItemStatus.PENDING
        return ItemStatus.AVAILABLE

    @property
    def primary_image(self) -> str | None:
        return self.images[0] if self.images else None


@dataclass(frozen=True)
class ItemFilter:
    category: ItemCategory | None = None
    status: ItemStatus | None = None
    owner_id: str | None = None
    tag: str | None = None

    def matches(self, item: Item) -> bool:
        if self.category is not None and item.category != self.category:
            return False
        if self.status is not None and item.status != self.status:
            return False
        if self.owner_id is not None and item.owner_id != self.owner_id:
            return False
        if self.tag is not None and self.tag not in item.tags:
            return False
        return True
