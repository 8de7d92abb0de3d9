"""Integration-test fixtures.

The app runs over ASGITransport against a fresh in-memory engine per test;
no database is needed because persistence is disabled in tests/conftest.py.
"""

from collections.abc import AsyncIterator, Awaitable, Callable

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.rw_exchange.application.service import get_exchange_engine, get_moderation_authority
from src.rw_exchange.engine.engine import ExchangeEngine
from src.rw_moderation.application.service import ModerationAuthority
from tests.factories import auth_headers


@pytest_asyncio.fixture
async def client(engine: ExchangeEngine) -> AsyncIterator[AsyncClient]:
    app.dependency_overrides[get_exchange_engine] = lambda: engine
    app.dependency_overrides[get_moderation_authority] = lambda: ModerationAuthority(engine)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def register(client: AsyncClient) -> Callable[[str], Awaitable[dict[str, str]]]:
    """Register a member through the API and return its auth headers."""

    async def _register(member_id: str) -> dict[str, str]:
        headers = auth_headers(member_id)
        resp = await client.post("/api/v1/members", headers=headers)
        assert resp.status_code == 201
        return headers

    return _register
