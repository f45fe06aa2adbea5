"""
icp_wallet.db.models

Persistence schema for the wallet user store.

Responsibilities:
- Define `WalletUser`: one row per principal with its raw account id and
  last observed ledger balance.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import BigInteger, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from icp_wallet.db.base import Base


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


class WalletUser(Base):
    __tablename__ = "wallet_users"

    # Textual principal, e.g. "e73il-iz5tp-...-jae" (max 63 chars for 29 bytes).
    principal_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    # Raw account identifier: 28-byte digest as 56 hex chars, no checksum prefix.
    account_id: Mapped[str] = mapped_column(String(64), index=True)
    balance_e8s: Mapped[int] = mapped_column(BigInteger, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


# --- Module Notes -----------------------------------------------------------
# Balances are u64 e8s on the ledger; BigInteger is signed 64-bit, which covers the
# total ICP supply with ample headroom.
