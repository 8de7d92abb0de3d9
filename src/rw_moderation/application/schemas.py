from pydantic import BaseModel

from src.rw_common.enums import ModerationAction


class MemberActionRequest(BaseModel):
    action: ModerationAction


class StatsResponse(BaseModel):
    total_items: int
    pending_items: int
    active_members: int
