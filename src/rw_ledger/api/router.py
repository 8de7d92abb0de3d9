"""rw_ledger REST endpoints.

POST /members            - register the token subject (starting balance + New Member badge)
GET  /members/me         - current member
GET  /members/me/ledger  - current member's point history, newest first
GET  /members/{id}       - public member profile
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from config.settings import settings
from src.rw_common.enums import MemberRole
from src.rw_common.response import ApiResponse, success_response
from src.rw_exchange.application.service import get_exchange_engine
from src.rw_exchange.engine.engine import ExchangeEngine
from src.rw_gateway.auth.dependencies import get_current_member, get_token_subject
from src.rw_ledger.application.schemas import LedgerEntryItem, LedgerResponse, MemberResponse
from src.rw_ledger.domain.models import Member

router = APIRouter(prefix="/members", tags=["members"])


@router.post("", status_code=201)
async def register(
    request: Request,
    member_id: Annotated[str, Depends(get_token_subject)],
    engine: Annotated[ExchangeEngine, Depends(get_exchange_engine)],
) -> ApiResponse:
    role = MemberRole.ADMIN if member_id in settings.BOOTSTRAP_ADMIN_IDS else MemberRole.MEMBER
    member = await engine.register_member(member_id, role)
    return success_response(MemberResponse.from_member(member).model_dump(), request)


@router.get("/me")
async def get_me(
    request: Request,
    current_member: Annotated[Member, Depends(get_current_member)],
) -> ApiResponse:
    return success_response(MemberResponse.from_member(current_member).model_dump(), request)


@router.get("/me/ledger")
async def get_my_ledger(
    request: Request,
    current_member: Annotated[Member, Depends(get_current_member)],
    engine: Annotated[ExchangeEngine, Depends(get_exchange_engine)],
) -> ApiResponse:
    entries = engine.list_ledger(current_member.id)
    result = LedgerResponse(
        member_id=current_member.id,
        items=[LedgerEntryItem.from_entry(e) for e in entries],
    )
    return success_response(result.model_dump(), request)


@router.get("/{member_id}")
async def get_member(
    member_id: str,
    request: Request,
    engine: Annotated[ExchangeEngine, Depends(get_exchange_engine)],
) -> ApiResponse:
    member = engine.get_member(member_id)
    return success_response(MemberResponse.from_member(member).model_dump(), request)
