"""Shared test fixtures."""

# ruff: noqa: E402  -- settings are read at import time

import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("PERSISTENCE_ENABLED", "false")

import pytest

from src.rw_catalog.infrastructure.store import InMemoryCatalogStore
from src.rw_exchange.engine.engine import ExchangeEngine
from src.rw_ledger.infrastructure.store import MemberLedger
from src.rw_moderation.application.service import ModerationAuthority


@pytest.fixture
def catalog() -> InMemoryCatalogStore:
    return InMemoryCatalogStore()


@pytest.fixture
def ledger() -> MemberLedger:
    return MemberLedger()


@pytest.fixture
def engine(catalog: InMemoryCatalogStore, ledger: MemberLedger) -> ExchangeEngine:
    return ExchangeEngine(catalog, ledger)


@pytest.fixture
def authority(engine: ExchangeEngine) -> ModerationAuthority:
    return ModerationAuthority(engine)
