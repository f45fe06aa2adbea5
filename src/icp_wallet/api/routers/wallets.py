"""
icp_wallet.api.routers.wallets

Wallet and account endpoints.

Responsibilities:
- Generate a demo wallet (seed, principal, account identifier views).
- Derive account identifiers for a principal and optional subaccount.
- Check a principal's ledger balance and record it in the user store.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_502_BAD_GATEWAY,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from icp_wallet.api.deps import settings_dep, wallet_service
from icp_wallet.core.account_id import ZERO_SUBACCOUNT, AccountIdentifier, subaccount_from_hex
from icp_wallet.core.errors import WalletError
from icp_wallet.core.principal import Principal
from icp_wallet.ledger.client import LedgerError
from icp_wallet.services.wallet_service import WalletService
from icp_wallet.settings import Settings

router = APIRouter(prefix="/v1", tags=["wallets"])


class WalletResponse(BaseModel):
    seed: str
    principal: str
    account_id: str
    raw_account_id: str


class AccountResponse(BaseModel):
    principal: str
    subaccount: str
    account_id: str
    raw_account_id: str
    hash_scheme: str


class BalanceCheckResponse(BaseModel):
    principal: str
    account_id: str
    balance_e8s: int
    balance: str
    block_index: int | None
    status: str


@router.post("/wallets", response_model=WalletResponse)
async def generate_wallet(svc: WalletService = Depends(wallet_service)) -> WalletResponse:
    try:
        wallet = svc.generate_wallet()
    except WalletError as e:
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    return WalletResponse(
        seed=wallet.seed_hex,
        principal=wallet.principal,
        account_id=wallet.account_id,
        raw_account_id=wallet.raw_account_id,
    )


@router.get("/accounts/{principal}", response_model=AccountResponse)
async def get_account(
    principal: str,
    subaccount: str | None = Query(default=None, description="32-byte subaccount as hex"),
    settings: Settings = Depends(settings_dep),
) -> AccountResponse:
    try:
        owner = Principal.from_text(principal)
        # An explicit empty value is a 0-byte subaccount, not the default.
        sub = subaccount_from_hex(subaccount) if subaccount is not None else ZERO_SUBACCOUNT
        account = AccountIdentifier.derive(owner, sub, scheme=settings.account_id_hash)
    except (WalletError, ValueError) as e:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return AccountResponse(
        principal=owner.to_text(),
        subaccount=sub.hex(),
        account_id=account.to_hex(),
        raw_account_id=account.raw_hex(),
        hash_scheme=settings.account_id_hash.value,
    )


@router.post("/wallets/{principal}/sync", response_model=BalanceCheckResponse)
async def check_balance_and_store(
    principal: str,
    svc: WalletService = Depends(wallet_service),
) -> BalanceCheckResponse:
    try:
        result = await svc.check_balance_and_store(principal)
    except WalletError as e:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except LedgerError as e:
        raise HTTPException(status_code=HTTP_502_BAD_GATEWAY, detail=f"Ledger error: {e}") from e
    return BalanceCheckResponse(
        principal=result.principal,
        account_id=result.account_id,
        balance_e8s=result.balance.e8s,
        balance=result.balance.format(),
        block_index=result.balance.block_index,
        status=f"User saved to backend: {result.store_message}",
    )
