"""
icp_wallet.api.routers.health

Process and user-store probes.

`/healthz` only proves the process answers; `/readyz` round-trips the user
store. The Rosetta node is not probed here: a ledger outage degrades balance
sync to 502 but leaves wallet generation and account derivation working.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from icp_wallet.api.deps import db_session
from icp_wallet.db.models import WalletUser

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str]:
    # Counting rows also fails when migrations have not created the table yet.
    await session.execute(select(func.count()).select_from(WalletUser))
    return {"status": "ready"}
