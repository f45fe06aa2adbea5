"""
icp_wallet.db.init_db

DB initialization helper for dev/test; production runs Alembic migrations.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from icp_wallet.db import models  # noqa: F401  # register tables on Base.metadata
from icp_wallet.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
