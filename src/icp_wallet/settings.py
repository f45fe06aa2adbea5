"""
icp_wallet.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Select the account identifier hash scheme for the target ledger.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from icp_wallet.core.account_id import HashScheme


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ICPW_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "icp-wallet"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Persistence (backend user store)
    database_url: str = "sqlite+aiosqlite:///./icp_wallet.db"

    # Ledger (Rosetta node)
    ledger_url: str = "http://localhost:8081"
    ledger_network: str = "00000000000000020101"
    ledger_timeout_seconds: float = Field(default=10.0, gt=0)

    # Account identifiers
    account_id_hash: HashScheme = HashScheme.blake2b


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Set ICPW_ACCOUNT_ID_HASH=sha224 when pointing at the mainnet ICP ledger.
