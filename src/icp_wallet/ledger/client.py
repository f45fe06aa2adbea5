"""
icp_wallet.ledger.client

HTTP client boundary for ledger balance queries (Rosetta Data API).

Responsibilities:
- Build `/account/balance` requests for a derived account identifier.
- Parse the ICP balance (e8s) and the block height it was read at.
- Convert transport and protocol failures into `LedgerError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from icp_wallet.core.account_id import AccountIdentifier
from icp_wallet.settings import Settings

BLOCKCHAIN = "Internet Computer"


class LedgerError(Exception):
    pass


@dataclass(frozen=True, slots=True)
class Balance:
    e8s: int
    block_index: int | None = None
    symbol: str = "ICP"
    decimals: int = 8

    def format(self) -> str:
        return f"{self.e8s / 10**self.decimals} {self.symbol} ({self.e8s} e8s)"


class LedgerClient:
    """
    Thin async wrapper over a Rosetta node.

    The caller owns the `httpx.AsyncClient` (base_url, timeouts, transport) so tests
    can inject a `MockTransport` and the API can share one pooled client.
    """

    def __init__(self, *, http: httpx.AsyncClient, network: str) -> None:
        self._http = http
        self._network = network

    @classmethod
    def http_client(
        cls,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=settings.ledger_url,
            timeout=settings.ledger_timeout_seconds,
            transport=transport,
        )

    def _network_identifier(self) -> dict[str, str]:
        return {"blockchain": BLOCKCHAIN, "network": self._network}

    async def _send(self, command: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            r = await self._http.post(f"/{command}", json=payload)
        except httpx.HTTPError as e:
            raise LedgerError(f"{command} request failed: {e}") from e
        if r.status_code != 200:
            raise LedgerError(f"{command} returned {r.status_code}: {r.text}")
        try:
            return r.json()
        except ValueError as e:
            raise LedgerError(f"{command} returned invalid JSON") from e

    async def account_balance(self, account: AccountIdentifier) -> Balance:
        ret = await self._send(
            "account/balance",
            {
                "network_identifier": self._network_identifier(),
                "account_identifier": {"address": account.to_hex()},
            },
        )
        try:
            entry = ret["balances"][0]
            currency = entry.get("currency", {})
            block = ret.get("block_identifier") or {}
            return Balance(
                e8s=int(entry["value"]),
                block_index=block.get("index"),
                symbol=currency.get("symbol", "ICP"),
                decimals=int(currency.get("decimals", 8)),
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise LedgerError(f"Malformed balance response: {ret!r}") from e


# --- Module Notes -----------------------------------------------------------
# Retries and backoff are left to the caller; a balance check is safe to repeat.
