"""Pydantic schemas for rw_catalog requests and responses."""

from pydantic import BaseModel, Field

from src.rw_catalog.domain.models import Item
from src.rw_common.datetime_utils import iso_or_empty
from src.rw_common.enums import ItemCategory, ItemCondition


class ListItemRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    points: int = Field(..., gt=0)
    category: ItemCategory
    size: str = Field(..., min_length=1, max_length=20)
    condition: ItemCondition
    tags: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)


class SwapRequestOut(BaseModel):
    requester_id: str
    status: str
    created_at: str


class ItemResponse(BaseModel):
    id: str
    owner_id: str
    title: str
    description: str
    points: int
    category: str
    size: str
    condition: str
    tags: list[str]
    images: list[str]
    primary_image: str | None
    watcher_count: int
    status: str
    under_review: bool
    swap_request: SwapRequestOut | None
    created_at: str

    @classmethod
    def from_item(cls, item: Item) -> "ItemResponse":
        req = item.swap_request
        return cls(
            id=item.id,
            owner_id=item.owner_id,
            title=item.title,
            description=item.description,
            points=item.points,
            category=item.category.value,
            size=item.size,
            condition=item.condition.value,
            tags=item.tags,
            images=item.images,
            primary_image=item.primary_image,
            watcher_count=item.watcher_count,
            status=item.status.value,
            under_review=item.under_review,
            swap_request=(
                SwapRequestOut(
                    requester_id=req.requester_id,
                    status=req.status.value,
                    created_at=iso_or_empty(req.created_at),
                )
                if req
                else None
            ),
            created_at=iso_or_empty(item.created_at),
        )


class ItemListResponse(BaseModel):
    items: list[ItemResponse]
    total: int
