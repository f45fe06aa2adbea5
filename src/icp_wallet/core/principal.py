"""
icp_wallet.core.principal

Principal value type (actor identity on the Internet Computer).

Responsibilities:
- Hold the raw principal bytes (at most 29).
- Encode/decode the textual form (CRC-32 prefixed base32, dash-grouped).
- Derive self-authenticating principals from DER-encoded public keys.
"""

from __future__ import annotations

import base64
import hashlib
import zlib
from dataclasses import dataclass

from icp_wallet.core.errors import InvalidPrincipal

MAX_PRINCIPAL_LENGTH = 29

# Trailing class tags for IC principal bytes.
SELF_AUTHENTICATING_SUFFIX = b"\x02"
ANONYMOUS_TAG = b"\x04"

_GROUP = 5


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Opaque principal bytes. Equality and hashing follow the raw bytes.
    """

    bytes: bytes

    def __post_init__(self) -> None:
        if len(self.bytes) > MAX_PRINCIPAL_LENGTH:
            raise InvalidPrincipal(
                f"Principal is at most {MAX_PRINCIPAL_LENGTH} bytes, got {len(self.bytes)}"
            )

    @classmethod
    def management_canister(cls) -> Principal:
        return cls(b"")

    @classmethod
    def anonymous(cls) -> Principal:
        return cls(ANONYMOUS_TAG)

    @classmethod
    def self_authenticating(cls, der_public_key: bytes) -> Principal:
        return cls(hashlib.sha224(der_public_key).digest() + SELF_AUTHENTICATING_SUFFIX)

    @classmethod
    def from_text(cls, text: str) -> Principal:
        cleaned = text.replace("-", "").upper()
        # base64.b32decode requires padding to a multiple of 8 characters.
        padding = "=" * ((8 - len(cleaned) % 8) % 8)
        try:
            decoded = base64.b32decode(cleaned + padding)
        except ValueError as e:
            raise InvalidPrincipal(f"Invalid principal text {text!r}: {e}") from e

        if len(decoded) < 4:
            raise InvalidPrincipal(f"Invalid principal text {text!r}: too short")

        checksum, data = decoded[:4], decoded[4:]
        if checksum != _crc32_be(data):
            raise InvalidPrincipal(f"Invalid principal text {text!r}: checksum mismatch")

        principal = cls(data)
        # Reject non-canonical spellings (wrong grouping, upper case).
        if principal.to_text() != text:
            raise InvalidPrincipal(f"Invalid principal text {text!r}: not in canonical form")
        return principal

    def to_text(self) -> str:
        encoded = base64.b32encode(_crc32_be(self.bytes) + self.bytes).decode("ascii")
        encoded = encoded.rstrip("=").lower()
        return "-".join(encoded[i : i + _GROUP] for i in range(0, len(encoded), _GROUP))

    @property
    def is_anonymous(self) -> bool:
        return self.bytes == ANONYMOUS_TAG

    @property
    def is_self_authenticating(self) -> bool:
        return len(self.bytes) == MAX_PRINCIPAL_LENGTH and self.bytes.endswith(
            SELF_AUTHENTICATING_SUFFIX
        )

    def __str__(self) -> str:
        return self.to_text()


def principal_from_public_key(der_public_key: bytes) -> Principal:
    return Principal.self_authenticating(der_public_key)


def _crc32_be(data: bytes) -> bytes:
    return (zlib.crc32(data) & 0xFFFFFFFF).to_bytes(4, byteorder="big")


# --- Module Notes -----------------------------------------------------------
# `Principal.bytes` shadows the builtin name only as an attribute; it mirrors the
# `.bytes` accessor exposed by other IC client libraries.
