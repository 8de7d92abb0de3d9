"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.rw_catalog.api.router import router as catalog_router
from src.rw_common.errors import AppError
from src.rw_common.response import error_response
from src.rw_exchange.api.router import router as exchange_router
from src.rw_exchange.application.service import get_exchange_engine
from src.rw_gateway.middleware.request_log import RequestLogMiddleware
from src.rw_ledger.api.router import router as ledger_router
from src.rw_moderation.api.router import router as moderation_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: with persistence on, verify the DB and load the snapshot. Shutdown: dispose."""
    if not settings.PERSISTENCE_ENABLED:
        logger.info("Persistence disabled: in-memory stores only")
        yield
        return

    from sqlalchemy import text

    from src.rw_common.database import async_session_factory, engine
    from src.rw_exchange.infrastructure.persistence import load_snapshot

    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    exchange = get_exchange_engine()
    async with async_session_factory() as db:
        await load_snapshot(db, exchange.catalog, exchange.ledger)
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(ledger_router, prefix="/api/v1")
app.include_router(catalog_router, prefix="/api/v1")
app.include_router(exchange_router, prefix="/api/v1")
app.include_router(moderation_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
