"""rw_catalog REST endpoints.

GET  /items            - browse with filter + sort (no auth required)
GET  /items/{item_id}  - item detail
POST /items            - list a new item as the current member (+ listing bonus)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.rw_catalog.application.schemas import ItemListResponse, ItemResponse, ListItemRequest
from src.rw_catalog.domain.models import ItemFilter
from src.rw_common.enums import ItemCategory, ItemSort, ItemStatus
from src.rw_common.response import ApiResponse, success_response
from src.rw_exchange.application.service import get_exchange_engine
from src.rw_exchange.engine.engine import ExchangeEngine
from src.rw_gateway.auth.dependencies import get_current_member
from src.rw_ledger.domain.models import Member

router = APIRouter(prefix="/items", tags=["items"])


@router.get("")
async def list_items(
    request: Request,
    engine: Annotated[ExchangeEngine, Depends(get_exchange_engine)],
    category: ItemCategory | None = Query(None),
    status: ItemStatus | None = Query(None),
    owner_id: str | None = Query(None),
    tag: str | None = Query(None),
    sort: ItemSort = Query(ItemSort.RECENT),
) -> ApiResponse:
    items = engine.list_items(
        ItemFilter(category=category, status=status, owner_id=owner_id, tag=tag), sort
    )
    result = ItemListResponse(items=[ItemResponse.from_item(i) for i in items], total=len(items))
    return success_response(result.model_dump(), request)


@router.get("/{item_id}")
async def get_item(
    item_id: str,
    request: Request,
    engine: Annotated[ExchangeEngine, Depends(get_exchange_engine)],
) -> ApiResponse:
    item = engine.get_item(item_id)
    return success_response(ItemResponse.from_item(item).model_dump(), request)


@router.post("", status_code=201)
async def list_item(
    body: ListItemRequest,
    request: Request,
    current_member: Annotated[Member, Depends(get_current_member)],
    engine: Annotated[ExchangeEngine, Depends(get_exchange_engine)],
) -> ApiResponse:
    item = await engine.list_item(
        owner_id=current_member.id,
        title=body.title,
        points=body.points,
        category=body.category,
        size=body.size,
        condition=body.condition,
        tags=body.tags,
        images=body.images,
        description=body.description,
    )
    return success_response(ItemResponse.from_item(item).model_dump(), request)
