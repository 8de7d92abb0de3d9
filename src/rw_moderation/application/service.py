# src/rw_moderation/application/service.py
"""Moderation Authority: privileged overrides on items and members.

Every operation first requires the caller to be an active ADMIN, then looks up
its target. Item overrides bypass the Eligibility Gate but not the state
machine; member adjustments never drive a balance below zero.
"""
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime

from src.rw_catalog.domain.models import Item
from src.rw_common.datetime_utils import utc_now
from src.rw_common.enums import (
    Badge,
    ItemStatus,
    LedgerEntryType,
    MemberRole,
    MemberStanding,
    ModerationAction,
)
from src.rw_common.errors import AdminRequiredError, UnauthorizedError
from src.rw_eligibility.rules.member_status import check_member_active
from src.rw_exchange.domain import state_machine
from src.rw_exchange.engine.engine import ExchangeEngine, make_entry
from src.rw_exchange.engine.locks import item_key, member_key
from src.rw_ledger.domain import operations as ops
from src.rw_ledger.domain.models import Member

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModerationStats:
    total_items: int
    pending_items: int
    active_members: int


class ModerationAuthority:
    def __init__(self, engine: ExchangeEngine) -> None:
        self._engine = engine

    def _authorize(self, admin_id: str) -> Member:
        caller = self._engine.ledger.get(admin_id)
        if caller is None:
            raise UnauthorizedError(5002, f"Unknown caller: {admin_id}")
        check_member_active(caller)
        if not caller.is_admin:
            raise AdminRequiredError(admin_id)
        return caller

    # --- item overrides ---

    async def approve(self, admin_id: str, item_id: str) -> Item:
        return await self._transition(admin_id, item_id, "approve", state_machine.approve)

    async def flag(self, admin_id: str, item_id: str) -> Item:
        return await self._transition(admin_id, item_id, "flag", state_machine.flag)

    async def reserve(self, admin_id: str, item_id: str) -> Item:
        return await self._transition(admin_id, item_id, "reserve", state_machine.reserve)

    async def reject(self, admin_id: str, item_id: str) -> None:
        """Remove the item from the catalog. Not reversible."""
        async with self._engine.locks.hold(member_key(admin_id), item_key(item_id)):
            self._authorize(admin_id)
            self._engine.get_item(item_id)
            uow = self._engine.unit_of_work()
            uow.stage_removal(item_id)
            await uow.commit()
        self._engine.locks.discard(item_key(item_id))
        logger.info("Item rejected: item=%s admin=%s", item_id, admin_id)

    async def _transition(
        self,
        admin_id: str,
        item_id: str,
        event: str,
        apply: Callable[[Item, datetime], Item],
    ) -> Item:
        async with self._engine.locks.hold(member_key(admin_id), item_key(item_id)):
            self._authorize(admin_id)
            item = self._engine.get_item(item_id)
            updated = apply(item, utc_now())
            uow = self._engine.unit_of_work()
            uow.stage_item(updated)
            await uow.commit()
        logger.info(
            "Item %s: item=%s admin=%s status=%s", event, item_id, admin_id, updated.status.value
        )
        return updated

    # --- member adjustments ---

    async def adjust_member(
        self, admin_id: str, member_id: str, action: ModerationAction | str
    ) -> Member:
        action = ModerationAction(action)
        async with self._engine.locks.hold(member_key(admin_id), member_key(member_id)):
            self._authorize(admin_id)
            member = self._engine.get_member(member_id)
            uow = self._engine.unit_of_work()

            if action == ModerationAction.BAN:
                updated = replace(member, standing=MemberStanding.BANNED, updated_at=utc_now())
            elif action == ModerationAction.WARN:
                # A warning never lifts a ban.
                standing = (
                    member.standing if member.is_banned else MemberStanding.WARNED
                )
                updated = replace(member, standing=standing, updated_at=utc_now())
            elif action == ModerationAction.RESET_POINTS:
                updated = ops.apply_reset(member)
                if member.points_balance > 0:
                    uow.stage_entry(
                        make_entry(updated, LedgerEntryType.MODERATOR_RESET,
                                   -member.points_balance)
                    )
            else:  # PROMOTE_TO_ADMIN
                updated = ops.award_badge(
                    replace(member, role=MemberRole.ADMIN, updated_at=utc_now()), Badge.ADMIN
                )

            uow.stage_member(updated)
            await uow.commit()
        logger.info(
            "Member adjusted: member=%s action=%s admin=%s", member_id, action.value, admin_id
        )
        return updated

    def stats(self, admin_id: str) -> ModerationStats:
        self._authorize(admin_id)
        items = self._engine.list_items()
        members = self._engine.ledger.all_members()
        return ModerationStats(
            total_items=len(items),
            pending_items=sum(1 for i in items if i.status == ItemStatus.PENDING),
            active_members=sum(1 for m in members if not m.is_banned),
        )
