# src/rw_moderation/api/router.py
"""Admin REST API. Every route requires the current member to be an ADMIN."""
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.rw_catalog.application.schemas import ItemResponse
from src.rw_common.response import ApiResponse, success_response
from src.rw_exchange.application.service import get_moderation_authority
from src.rw_gateway.auth.dependencies import get_current_member
from src.rw_ledger.application.schemas import MemberResponse
from src.rw_ledger.domain.models import Member
from src.rw_moderation.application.schemas import MemberActionRequest, StatsResponse
from src.rw_moderation.application.service import ModerationAuthority

router = APIRouter(prefix="/admin", tags=["admin"])

CurrentMember = Annotated[Member, Depends(get_current_member)]
Authority = Annotated[ModerationAuthority, Depends(get_moderation_authority)]


@router.post("/items/{item_id}/approve")
async def approve_item(
    item_id: str, request: Request, admin: CurrentMember, authority: Authority
) -> ApiResponse:
    item = await authority.approve(admin.id, item_id)
    return success_response(ItemResponse.from_item(item).model_dump(), request)


@router.post("/items/{item_id}/reject")
async def reject_item(
    item_id: str, request: Request, admin: CurrentMember, authority: Authority
) -> ApiResponse:
    await authority.reject(admin.id, item_id)
    return success_response({"item_id": item_id, "removed": True}, request)


@router.post("/items/{item_id}/flag")
async def flag_item(
    item_id: str, request: Request, admin: CurrentMember, authority: Authority
) -> ApiResponse:
    item = await authority.flag(admin.id, item_id)
    return success_response(ItemResponse.from_item(item).model_dump(), request)


@router.post("/items/{item_id}/reserve")
async def reserve_item(
    item_id: str, request: Request, admin: CurrentMember, authority: Authority
) -> ApiResponse:
    item = await authority.reserve(admin.id, item_id)
    return success_response(ItemResponse.from_item(item).model_dump(), request)


@router.post("/members/{member_id}/actions")
async def adjust_member(
    member_id: str,
    body: MemberActionRequest,
    request: Request,
    admin: CurrentMember,
    authority: Authority,
) -> ApiResponse:
    member = await authority.adjust_member(admin.id, member_id, body.action)
    return success_response(MemberResponse.from_member(member).model_dump(), request)


@router.get("/stats")
async def get_stats(request: Request, admin: CurrentMember, authority: Authority) -> ApiResponse:
    stats = authority.stats(admin.id)
    result = StatsResponse(
        total_items=stats.total_items,
        pending_items=stats.pending_items,
        active_members=stats.active_members,
    )
    return success_response(result.model_dump(), request)
