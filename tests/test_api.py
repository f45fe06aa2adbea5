"""
tests.test_api

End-to-end API tests over ASGITransport with a mocked ledger.

Responsibilities:
- Ensure the app boots, creates the user store, and serves health probes.
- Exercise wallet generation, account derivation, balance sync, and the user store.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
import pytest

from icp_wallet.api.app import create_app
from icp_wallet.core.account_id import AccountIdentifier, HashScheme
from icp_wallet.core.principal import Principal
from icp_wallet.settings import Settings

ANONYMOUS = "2vxsx-fae"


def _ledger_handler(balances: dict[str, int]):
    def handler(request: httpx.Request) -> httpx.Response:
        address = json.loads(request.content)["account_identifier"]["address"]
        if address not in balances:
            return httpx.Response(500, json={"message": "account not found"})
        return httpx.Response(
            200,
            json={
                "block_identifier": {"index": 7},
                "balances": [
                    {"value": str(balances[address]), "currency": {"symbol": "ICP", "decimals": 8}}
                ],
            },
        )

    return handler


@asynccontextmanager
async def _client(
    tmp_path: Path,
    *,
    balances: dict[str, int] | None = None,
    scheme: HashScheme = HashScheme.blake2b,
) -> AsyncIterator[httpx.AsyncClient]:
    settings = Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'wallet.db'}",
        account_id_hash=scheme,
    )
    app = create_app(
        settings=settings,
        ledger_transport=httpx.MockTransport(_ledger_handler(balances or {})),
    )
    # httpx ASGITransport does not run lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest.mark.asyncio
async def test_health_endpoints(tmp_path: Path) -> None:
    async with _client(tmp_path) as client:
        r = await client.get("/healthz")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"
        assert "x-request-id" in r.headers

        r = await client.get("/healthz", headers={"x-request-id": "abc123"})
        assert r.headers["x-request-id"] == "abc123"

        r = await client.get("/readyz")
        assert r.status_code == 200
        assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_generate_wallet(tmp_path: Path) -> None:
    async with _client(tmp_path) as client:
        r = await client.post("/v1/wallets")
        assert r.status_code == 200
        body = r.json()

    assert len(body["seed"]) == 64
    assert len(body["account_id"]) == 64
    assert body["account_id"][8:] == body["raw_account_id"]
    principal = Principal.from_text(body["principal"])
    assert AccountIdentifier.derive(principal).to_hex() == body["account_id"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("scheme", "expected"),
    [
        (HashScheme.blake2b, "6a47ab2f550839a8c225cc73c6bb62b70c520486f1afb5a0b27696bf16b9ea99"),
        (HashScheme.sha224, "2d0e897f7e862d2b57d9bc9ea5c65f9a24ac6c074575f47898314b8d6cb0929d"),
    ],
)
async def test_get_account_uses_configured_scheme(
    tmp_path: Path, scheme: HashScheme, expected: str
) -> None:
    async with _client(tmp_path, scheme=scheme) as client:
        r = await client.get("/v1/accounts/aaaaa-aa")
    assert r.status_code == 200
    body = r.json()
    assert body["account_id"] == expected
    assert body["raw_account_id"] == expected[8:]
    assert body["subaccount"] == "00" * 32
    assert body["hash_scheme"] == scheme.value


@pytest.mark.asyncio
async def test_get_account_with_subaccount(tmp_path: Path) -> None:
    async with _client(tmp_path) as client:
        r = await client.get("/v1/accounts/aaaaa-aa", params={"subaccount": "00" * 31 + "01"})
        assert r.status_code == 200
        assert (
            r.json()["account_id"]
            == "c51eaa72a6cebdb7d644f5a2f1cad69e6e824f86899ec6f35d8981f7601c21be"
        )

        r = await client.get("/v1/accounts/aaaaa-aa", params={"subaccount": "00" * 31})
        assert r.status_code == 400
        assert "32 bytes" in r.json()["detail"]

        r = await client.get("/v1/accounts/aaaaa-aa", params={"subaccount": ""})
        assert r.status_code == 400
        assert "got 0" in r.json()["detail"]

        r = await client.get("/v1/accounts/not-a-principal")
        assert r.status_code == 400


@pytest.mark.asyncio
async def test_sync_stores_user_with_raw_account_id(tmp_path: Path) -> None:
    account = AccountIdentifier.derive(Principal.from_text(ANONYMOUS))
    async with _client(tmp_path, balances={account.to_hex(): 250_000_000}) as client:
        r = await client.post(f"/v1/wallets/{ANONYMOUS}/sync")
        assert r.status_code == 200
        body = r.json()
        assert body["balance_e8s"] == 250_000_000
        assert body["block_index"] == 7
        assert body["balance"] == "2.5 ICP (250000000 e8s)"
        assert body["account_id"] == account.to_hex()
        assert body["status"] == f"User saved to backend: User {ANONYMOUS} stored successfully"

        r = await client.get("/v1/users")
        assert r.status_code == 200
        assert r.json() == [
            {
                "principal_id": ANONYMOUS,
                "account_id": account.raw_hex(),
                "balance_e8s": 250_000_000,
            }
        ]


@pytest.mark.asyncio
async def test_sync_translates_ledger_failure(tmp_path: Path) -> None:
    async with _client(tmp_path, balances={}) as client:
        r = await client.post(f"/v1/wallets/{ANONYMOUS}/sync")
        assert r.status_code == 502
        assert r.json()["detail"].startswith("Ledger error")

        r = await client.get("/v1/users")
        assert r.json() == []


@pytest.mark.asyncio
async def test_user_store_add_or_update(tmp_path: Path) -> None:
    raw = AccountIdentifier.derive(Principal.anonymous()).raw_hex()
    async with _client(tmp_path) as client:
        r = await client.post(
            "/v1/users",
            json={"principal_id": ANONYMOUS, "account_id": raw, "balance_e8s": 1},
        )
        assert r.status_code == 200
        assert r.json()["message"] == f"User {ANONYMOUS} stored successfully"

        r = await client.post(
            "/v1/users",
            json={"principal_id": ANONYMOUS, "account_id": raw, "balance_e8s": 5},
        )
        assert r.status_code == 200

        r = await client.get("/v1/users")
        users = r.json()
        assert len(users) == 1
        assert users[0]["balance_e8s"] == 5


@pytest.mark.asyncio
async def test_user_store_validates_input(tmp_path: Path) -> None:
    raw = AccountIdentifier.derive(Principal.anonymous()).raw_hex()
    async with _client(tmp_path) as client:
        r = await client.post(
            "/v1/users",
            json={"principal_id": "bogus", "account_id": raw, "balance_e8s": 1},
        )
        assert r.status_code == 400

        # Full 64-char identifiers (with checksum) are not the store key.
        r = await client.post(
            "/v1/users",
            json={"principal_id": ANONYMOUS, "account_id": "00" * 32, "balance_e8s": 1},
        )
        assert r.status_code == 422

        r = await client.post(
            "/v1/users",
            json={"principal_id": ANONYMOUS, "account_id": raw, "balance_e8s": -1},
        )
        assert r.status_code == 422


@pytest.mark.asyncio
async def test_user_store_concurrent_first_writes(tmp_path: Path) -> None:
    raw = AccountIdentifier.derive(Principal.anonymous()).raw_hex()
    async with _client(tmp_path) as client:
        responses = await asyncio.gather(
            *(
                client.post(
                    "/v1/users",
                    json={"principal_id": ANONYMOUS, "account_id": raw, "balance_e8s": n},
                )
                for n in range(4)
            )
        )
        assert [r.status_code for r in responses] == [200] * 4

        users = (await client.get("/v1/users")).json()
        assert len(users) == 1
        assert users[0]["balance_e8s"] in range(4)


@pytest.mark.asyncio
async def test_concurrent_syncs_for_one_principal(tmp_path: Path) -> None:
    account = AccountIdentifier.derive(Principal.from_text(ANONYMOUS))
    async with _client(tmp_path, balances={account.to_hex(): 10}) as client:
        responses = await asyncio.gather(
            *(client.post(f"/v1/wallets/{ANONYMOUS}/sync") for _ in range(4))
        )
        assert [r.status_code for r in responses] == [200] * 4

        users = (await client.get("/v1/users")).json()
        assert users == [
            {"principal_id": ANONYMOUS, "account_id": account.raw_hex(), "balance_e8s": 10}
        ]
