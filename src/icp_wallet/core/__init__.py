"""
icp_wallet.core

Pure identity and account-identifier primitives.

Responsibilities:
- Principal encoding/decoding and self-authenticating derivation.
- Ed25519 identity generation.
- Ledger account identifier derivation (checksum + digest).
"""

from icp_wallet.core.account_id import (
    ZERO_SUBACCOUNT,
    AccountIdentifier,
    HashScheme,
    derive_account_id,
    subaccount_from_hex,
    subaccount_from_index,
)
from icp_wallet.core.errors import (
    InvalidAccountIdentifier,
    InvalidPrincipal,
    InvalidSeedLength,
    InvalidSubaccountLength,
    RandomSourceExhausted,
    WalletError,
)
from icp_wallet.core.identity import Identity, generate_identity
from icp_wallet.core.principal import Principal, principal_from_public_key

__all__ = [
    "ZERO_SUBACCOUNT",
    "AccountIdentifier",
    "HashScheme",
    "Identity",
    "InvalidAccountIdentifier",
    "InvalidPrincipal",
    "InvalidSeedLength",
    "InvalidSubaccountLength",
    "Principal",
    "RandomSourceExhausted",
    "WalletError",
    "derive_account_id",
    "generate_identity",
    "principal_from_public_key",
    "subaccount_from_hex",
    "subaccount_from_index",
]


# --- Module Notes -----------------------------------------------------------
# Nothing in this package performs I/O or logs; callers own those concerns.
