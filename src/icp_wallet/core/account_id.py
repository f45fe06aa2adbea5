"""
icp_wallet.core.account_id

Ledger account identifier derivation.

Responsibilities:
- Derive the 32-byte account identifier for (principal, subaccount).
- Expose the checksummed (64 hex) and raw digest (56 hex) views.
- Parse and verify hex account identifiers received from callers.

Layout:
    account_id = crc32_be(digest) || digest
    digest     = H28(b"\\x0aaccount-id" || principal || subaccount)
"""

from __future__ import annotations

import enum
import hashlib
import zlib
from dataclasses import dataclass

from icp_wallet.core.errors import InvalidAccountIdentifier, InvalidSubaccountLength
from icp_wallet.core.principal import Principal

# Length-prefixed domain separator: 0x0A == len("account-id").
DOMAIN_SEPARATOR = b"\x0aaccount-id"

SUBACCOUNT_LENGTH = 32
DIGEST_LENGTH = 28
CHECKSUM_LENGTH = 4
ACCOUNT_ID_LENGTH = CHECKSUM_LENGTH + DIGEST_LENGTH

ZERO_SUBACCOUNT = bytes(SUBACCOUNT_LENGTH)


class HashScheme(enum.StrEnum):
    # Both produce a 28-byte digest; blake2b must be told so explicitly.
    blake2b = "blake2b"
    sha224 = "sha224"


def _digest(scheme: HashScheme, *chunks: bytes) -> bytes:
    if scheme is HashScheme.sha224:
        hasher = hashlib.sha224()
    else:
        hasher = hashlib.blake2b(digest_size=DIGEST_LENGTH)
    for chunk in chunks:
        hasher.update(chunk)
    return hasher.digest()


def _checksum(digest: bytes) -> bytes:
    # Big-endian: the ledger rejects identifiers with a little-endian prefix.
    return (zlib.crc32(digest) & 0xFFFFFFFF).to_bytes(CHECKSUM_LENGTH, byteorder="big")


def derive_account_id(
    principal: Principal,
    subaccount: bytes = ZERO_SUBACCOUNT,
    *,
    scheme: HashScheme = HashScheme.blake2b,
) -> bytes:
    """
    Return the 32-byte account identifier for `principal` and `subaccount`.

    Raises `InvalidSubaccountLength` before hashing if the subaccount is not 32 bytes.
    """

    if len(subaccount) != SUBACCOUNT_LENGTH:
        raise InvalidSubaccountLength(len(subaccount))

    digest = _digest(scheme, DOMAIN_SEPARATOR, principal.bytes, bytes(subaccount))
    return _checksum(digest) + digest


@dataclass(frozen=True, slots=True)
class AccountIdentifier:
    """
    Checksummed account identifier. Both hex views are computed from `value`.
    """

    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) != ACCOUNT_ID_LENGTH:
            raise InvalidAccountIdentifier(
                f"Account identifier must be {ACCOUNT_ID_LENGTH} bytes, got {len(self.value)}"
            )
        if self.value[:CHECKSUM_LENGTH] != _checksum(self.value[CHECKSUM_LENGTH:]):
            raise InvalidAccountIdentifier("Account identifier checksum mismatch")

    @classmethod
    def derive(
        cls,
        principal: Principal,
        subaccount: bytes = ZERO_SUBACCOUNT,
        *,
        scheme: HashScheme = HashScheme.blake2b,
    ) -> AccountIdentifier:
        return cls(derive_account_id(principal, subaccount, scheme=scheme))

    @classmethod
    def from_hex(cls, text: str) -> AccountIdentifier:
        try:
            value = bytes.fromhex(text)
        except ValueError as e:
            raise InvalidAccountIdentifier(f"Invalid account identifier hex: {e}") from e
        return cls(value)

    @property
    def digest(self) -> bytes:
        return self.value[CHECKSUM_LENGTH:]

    def to_hex(self) -> str:
        return self.value.hex()

    def raw_hex(self) -> str:
        return self.digest.hex()

    def __str__(self) -> str:
        return self.to_hex()


def subaccount_from_index(index: int) -> bytes:
    if not 0 <= index < 1 << (8 * SUBACCOUNT_LENGTH):
        raise ValueError(f"Subaccount index out of range: {index}")
    return index.to_bytes(SUBACCOUNT_LENGTH, byteorder="big")


def subaccount_from_hex(text: str) -> bytes:
    value = bytes.fromhex(text)
    if len(value) != SUBACCOUNT_LENGTH:
        raise InvalidSubaccountLength(len(value))
    return value


# --- Module Notes -----------------------------------------------------------
# The default scheme matches the wallet frontend this service replaces; deployments
# that talk to the mainnet ICP ledger select `sha224` via settings.
