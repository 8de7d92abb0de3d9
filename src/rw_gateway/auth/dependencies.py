"""FastAPI dependencies that turn a Bearer token into an identity.

Usage in any protected router:
    from src.rw_gateway.auth.dependencies import get_current_member

    @router.get("/protected")
    async def protected(member: Annotated[Member, Depends(get_current_member)]):
        ...
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.rw_common.errors import InvalidCredentialsError, MemberNotFoundError
from src.rw_exchange.application.service import get_exchange_engine
from src.rw_exchange.engine.engine import ExchangeEngine
from src.rw_gateway.auth.jwt_handler import decode_token
from src.rw_ledger.domain.models import Member

_bearer = HTTPBearer(auto_error=False)

# Reusable 401 exception with WWW-Authenticate header (OAuth2 standard)
_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_token_subject(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> str:
    """Member id from a valid token, whether or not that member is registered yet."""
    if credentials is None:
        raise _CREDENTIALS_EXCEPTION
    try:
        payload = decode_token(credentials.credentials)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None
    return str(payload["sub"])


async def get_current_member(
    member_id: Annotated[str, Depends(get_token_subject)],
    engine: Annotated[ExchangeEngine, Depends(get_exchange_engine)],
) -> Member:
    """Raises HTTP 401 if the token subject is not a registered member."""
    try:
        return engine.get_member(member_id)
    except MemberNotFoundError:
        raise _CREDENTIALS_EXCEPTION from None
