"""
icp_wallet.services.wallet_service

Wallet lifecycle service (transaction + persistence owner).

Responsibilities:
- Generate a wallet: identity, principal, account identifier views.
- Check an account balance on the ledger and record the user in the store.
- List stored users.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from icp_wallet.core.account_id import ZERO_SUBACCOUNT, AccountIdentifier
from icp_wallet.core.identity import generate_identity
from icp_wallet.core.principal import Principal
from icp_wallet.db.models import WalletUser
from icp_wallet.db.repositories.users import UserRepo
from icp_wallet.ledger.client import Balance, LedgerClient, LedgerError
from icp_wallet.observability.logging import get_logger
from icp_wallet.settings import Settings

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class GeneratedWallet:
    # The seed is shown once to the caller (demo wallet); it is never stored.
    seed_hex: str
    principal: str
    account_id: str
    raw_account_id: str


@dataclass(frozen=True, slots=True)
class BalanceCheck:
    principal: str
    account_id: str
    balance: Balance
    store_message: str


class WalletService:
    def __init__(
        self,
        *,
        session: AsyncSession,
        settings: Settings,
        ledger: LedgerClient,
    ) -> None:
        self._session = session
        self._settings = settings
        self._ledger = ledger
        self._users = UserRepo(session)

    def account_for(
        self, principal: Principal, subaccount: bytes = ZERO_SUBACCOUNT
    ) -> AccountIdentifier:
        return AccountIdentifier.derive(
            principal, subaccount, scheme=self._settings.account_id_hash
        )

    def generate_wallet(self) -> GeneratedWallet:
        identity = generate_identity()
        account = self.account_for(identity.principal)
        log.info(
            "wallet_generated",
            principal=identity.principal.to_text(),
            account_id=account.to_hex(),
        )
        return GeneratedWallet(
            seed_hex=identity.secret_key_hex,
            principal=identity.principal.to_text(),
            account_id=account.to_hex(),
            raw_account_id=account.raw_hex(),
        )

    async def check_balance_and_store(self, principal_text: str) -> BalanceCheck:
        principal = Principal.from_text(principal_text)
        account = self.account_for(principal)

        try:
            balance = await self._ledger.account_balance(account)
        except LedgerError as e:
            log.warning(
                "ledger_balance_failed",
                principal=principal_text,
                account_id=account.to_hex(),
                error=str(e),
            )
            raise

        log.info(
            "ledger_balance",
            principal=principal_text,
            account_id=account.to_hex(),
            balance_e8s=balance.e8s,
            block_index=balance.block_index,
        )

        # The store is keyed by the raw digest (no checksum prefix).
        message = await self._users.add_or_update(
            principal_id=principal_text,
            account_id=account.raw_hex(),
            balance_e8s=balance.e8s,
        )
        await self._session.commit()
        return BalanceCheck(
            principal=principal_text,
            account_id=account.to_hex(),
            balance=balance,
            store_message=message,
        )

    async def list_users(self) -> list[WalletUser]:
        return await self._users.list_all()


# --- Module Notes -----------------------------------------------------------
# Derivation is synchronous and pure; it runs inline inside these async flows, so a
# cancelled balance check leaves nothing to undo.
