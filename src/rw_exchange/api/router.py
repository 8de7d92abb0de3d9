# src/rw_exchange/api/router.py
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.rw_catalog.application.schemas import ItemResponse
from src.rw_common.response import ApiResponse, success_response
from src.rw_exchange.application.schemas import RedeemResponse
from src.rw_exchange.application.service import get_exchange_engine
from src.rw_exchange.engine.engine import ExchangeEngine
from src.rw_gateway.auth.dependencies import get_current_member
from src.rw_ledger.application.schemas import MemberResponse
from src.rw_ledger.domain.models import Member

router = APIRouter(prefix="/items", tags=["exchange"])


@router.post("/{item_id}/swap-request")
async def request_swap(
    item_id: str,
    request: Request,
    current_member: Annotated[Member, Depends(get_current_member)],
    engine: Annotated[ExchangeEngine, Depends(get_exchange_engine)],
) -> ApiResponse:
    item = await engine.request_swap(current_member.id, item_id)
    return success_response(ItemResponse.from_item(item).model_dump(), request)


@router.post("/{item_id}/swap-request/accept")
async def accept_swap(
    item_id: str,
    request: Request,
    current_member: Annotated[Member, Depends(get_current_member)],
    engine: Annotated[ExchangeEngine, Depends(get_exchange_engine)],
) -> ApiResponse:
    item = await engine.accept_swap(current_member.id, item_id)
    return success_response(ItemResponse.from_item(item).model_dump(), request)


@router.post("/{item_id}/redeem")
async def redeem(
    item_id: str,
    request: Request,
    current_member: Annotated[Member, Depends(get_current_member)],
    engine: Annotated[ExchangeEngine, Depends(get_exchange_engine)],
) -> ApiResponse:
    item, member = await engine.redeem(current_member.id, item_id)
    result = RedeemResponse(
        item=ItemResponse.from_item(item), member=MemberResponse.from_member(member)
    )
    return success_response(result.model_dump(), request)
