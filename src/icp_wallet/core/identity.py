"""
icp_wallet.core.identity

Ed25519 identity generation.

Responsibilities:
- Draw a fresh 32-byte seed from the OS CSPRNG.
- Derive the Ed25519 public key (raw + DER/SPKI) via `cryptography`.
- Derive the self-authenticating principal for the key.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field

from cryptography.hazmat.primitives.asymmetric import ed25519
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from icp_wallet.core.errors import InvalidSeedLength, RandomSourceExhausted
from icp_wallet.core.principal import Principal, principal_from_public_key

SEED_LENGTH = 32


@dataclass(frozen=True, slots=True)
class Identity:
    """
    In-memory keypair and principal. The private key is kept out of `repr`.
    """

    private_key: bytes = field(repr=False)
    public_key: bytes
    der_public_key: bytes = field(repr=False)
    principal: Principal

    @classmethod
    def from_seed(cls, seed: bytes) -> Identity:
        if len(seed) != SEED_LENGTH:
            raise InvalidSeedLength(len(seed))

        signing_key = ed25519.Ed25519PrivateKey.from_private_bytes(seed)
        verify_key = signing_key.public_key()
        der = verify_key.public_bytes(Encoding.DER, PublicFormat.SubjectPublicKeyInfo)
        return cls(
            private_key=bytes(seed),
            public_key=verify_key.public_bytes_raw(),
            der_public_key=der,
            principal=principal_from_public_key(der),
        )

    @property
    def secret_key_hex(self) -> str:
        return self.private_key.hex()

    def as_tuple(self) -> tuple[bytes, Principal]:
        return self.private_key, self.principal


def generate_identity() -> Identity:
    try:
        seed = secrets.token_bytes(SEED_LENGTH)
    except OSError as e:
        raise RandomSourceExhausted(f"OS random source failed: {e}") from e
    return Identity.from_seed(seed)


# --- Module Notes -----------------------------------------------------------
# Persisting or exporting key material is the caller's decision; nothing here writes
# keys anywhere.
