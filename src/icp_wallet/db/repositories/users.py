"""
icp_wallet.db.repositories.users

Repository for `WalletUser` entities.

Responsibilities:
- Add or update a user keyed by principal in one atomic statement.
- List stored users.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from icp_wallet.db.models import WalletUser, utcnow

# Both dialects expose the same INSERT ... ON CONFLICT DO UPDATE construct.
_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add_or_update(
        self,
        *,
        principal_id: str,
        account_id: str,
        balance_e8s: int,
    ) -> str:
        # Last write wins; concurrent first writes for one principal never collide.
        dialect = self._session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"add_or_update has no upsert for dialect {dialect!r}")

        stmt = insert(WalletUser).values(
            principal_id=principal_id,
            account_id=account_id,
            balance_e8s=balance_e8s,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[WalletUser.principal_id],
            set_={
                "account_id": stmt.excluded.account_id,
                "balance_e8s": stmt.excluded.balance_e8s,
                "updated_at": utcnow(),
            },
        )
        await self._session.execute(stmt)
        return f"User {principal_id} stored successfully"

    async def list_all(self) -> list[WalletUser]:
        stmt = select(WalletUser).order_by(WalletUser.created_at, WalletUser.principal_id)
        return list((await self._session.execute(stmt)).scalars().all())


# --- Module Notes -----------------------------------------------------------
# Commit is owned by the caller (service or router), matching the session scope.
