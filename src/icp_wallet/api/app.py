"""
icp_wallet.api.app

FastAPI app factory for the ICP wallet service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Initialize and dispose shared infrastructure (DB engine, ledger HTTP client).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from icp_wallet import __version__
from icp_wallet.api.routers.health import router as health_router
from icp_wallet.api.routers.users import router as users_router
from icp_wallet.api.routers.wallets import router as wallets_router
from icp_wallet.db.init_db import init_db
from icp_wallet.db.session import create_engine, create_sessionmaker
from icp_wallet.ledger.client import LedgerClient
from icp_wallet.observability.logging import configure_logging, get_logger
from icp_wallet.observability.middleware import RequestContextMiddleware
from icp_wallet.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    ledger_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, account_id_hash=settings.account_id_hash.value)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        app.state.ledger_http = LedgerClient.http_client(settings, transport=ledger_transport)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically. Prod uses Alembic migrations.
            await init_db(engine)
        try:
            yield
        finally:
            await app.state.ledger_http.aclose()
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="ICP Wallet",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(wallets_router)
    app.include_router(users_router)

    return app


# --- Module Notes -----------------------------------------------------------
# `ledger_transport` exists so tests can run the full stack against an
# `httpx.MockTransport` instead of a live Rosetta node.
