"""
icp_wallet.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions, and the ledger client.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from icp_wallet.ledger.client import LedgerClient
from icp_wallet.services.wallet_service import WalletService
from icp_wallet.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Settings are fixed per app instance in `icp_wallet.api.app.create_app`.
    return request.app.state.settings  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit is managed explicitly by the service layer.
    async with session_factory() as session:
        yield session


def ledger_client(
    request: Request,
    settings: Settings = Depends(settings_dep),
) -> LedgerClient:
    return LedgerClient(http=request.app.state.ledger_http, network=settings.ledger_network)


def wallet_service(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
    ledger: LedgerClient = Depends(ledger_client),
) -> WalletService:
    return WalletService(session=session, settings=settings, ledger=ledger)
