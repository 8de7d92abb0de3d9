from pydantic import BaseModel

from src.rw_catalog.application.schemas import ItemResponse
from src.rw_ledger.application.schemas import MemberResponse


class RedeemResponse(BaseModel):
    item: ItemResponse
    member: MemberResponse
