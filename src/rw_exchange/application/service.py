# src/rw_exchange/application/service.py
"""Process-wide engine and moderation singletons, built from settings."""
from config.settings import settings
from src.rw_catalog.infrastructure.store import InMemoryCatalogStore
from src.rw_exchange.engine.engine import ExchangeEngine
from src.rw_exchange.engine.unit_of_work import SnapshotWriterProtocol
from src.rw_ledger.infrastructure.store import MemberLedger
from src.rw_moderation.application.service import ModerationAuthority

_engine: ExchangeEngine | None = None


def build_engine(writer: SnapshotWriterProtocol | None = None) -> ExchangeEngine:
    return ExchangeEngine(
        InMemoryCatalogStore(),
        MemberLedger(),
        writer,
        starting_balance=settings.STARTING_BALANCE,
        listing_bonus=settings.LISTING_BONUS,
        surprise_drop_listings=settings.SURPRISE_DROP_LISTINGS,
    )


def get_exchange_engine() -> ExchangeEngine:
    global _engine  # noqa: PLW0603
    if _engine is None:
        writer = None
        if settings.PERSISTENCE_ENABLED:
            from src.rw_common.database import async_session_factory
            from src.rw_exchange.infrastructure.persistence import SqlSnapshotWriter

            writer = SqlSnapshotWriter(async_session_factory)
        _engine = build_engine(writer)
    return _engine


def get_moderation_authority() -> ModerationAuthority:
    return ModerationAuthority(get_exchange_engine())
