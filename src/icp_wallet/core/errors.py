"""
icp_wallet.core.errors

Typed errors raised by the core primitives.

Responsibilities:
- Give callers one base class (`WalletError`) to translate into user-facing status.
- Keep each failure mode distinguishable without string matching.
"""

from __future__ import annotations


class WalletError(Exception):
    pass


class InvalidSubaccountLength(WalletError):
    def __init__(self, length: int) -> None:
        super().__init__(f"Subaccount must be 32 bytes, got {length}")
        self.length = length


class RandomSourceExhausted(WalletError):
    pass


class InvalidPrincipal(WalletError):
    pass


class InvalidSeedLength(WalletError):
    def __init__(self, length: int) -> None:
        super().__init__(f"Ed25519 seed must be 32 bytes, got {length}")
        self.length = length


class InvalidAccountIdentifier(WalletError):
    pass


# --- Module Notes -----------------------------------------------------------
# Collaborator failures (ledger, persistence) have their own errors next to the
# adapters that raise them; this module only covers the pure core.
