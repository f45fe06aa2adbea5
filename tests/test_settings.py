"""
tests.test_settings

Environment-driven configuration and log scrubbing.
"""

from __future__ import annotations

import pytest

from icp_wallet.core.account_id import HashScheme
from icp_wallet.observability.logging import redact_secrets
from icp_wallet.settings import Settings


def test_defaults() -> None:
    settings = Settings()
    assert settings.account_id_hash is HashScheme.blake2b
    assert settings.ledger_network == "00000000000000020101"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ICPW_ACCOUNT_ID_HASH", "sha224")
    monkeypatch.setenv("ICPW_LEDGER_URL", "http://rosetta:8081")
    settings = Settings()
    assert settings.account_id_hash is HashScheme.sha224
    assert settings.ledger_url == "http://rosetta:8081"


def test_redact_secrets() -> None:
    event = {"event": "wallet_generated", "seed_hex": "9d61", "principal": "2vxsx-fae"}
    assert redact_secrets(None, "info", event) == {
        "event": "wallet_generated",
        "seed_hex": "[redacted]",
        "principal": "2vxsx-fae",
    }
