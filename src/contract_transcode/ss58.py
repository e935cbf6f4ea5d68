# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""SS58 text form of 32-byte account ids.

An address is the base58 encoding of ``prefix ++ account ++ checksum``:

- the network prefix takes one byte below 64 and two bytes up to 16383;
- the checksum is the first two bytes of the BLAKE2b-512 hash of
  ``b"SS58PRE" ++ prefix ++ account``.

Prefix 42 is the generic Substrate network, e.g.
``5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY``.
"""

import hashlib

import base58

from contract_transcode.errors import InvalidAddress

DEFAULT_PREFIX = 42

ACCOUNT_ID_IDENTS: frozenset[str] = frozenset({"AccountId", "AccountId32"})
"""Type identifiers whose 32-byte values are shown and accepted as SS58 addresses."""

ACCOUNT_ID_LENGTH = 32

# ###############
# Public Interface
# ###############


def ss58_encode(account: bytes, prefix: int = DEFAULT_PREFIX) -> str:
    """Return the SS58 address of a 32-byte *account* on network *prefix*.

    Raises:
        ValueError: If *account* is not 32 bytes or *prefix* is out of range
            or reserved.
    """
    if len(account) != ACCOUNT_ID_LENGTH:
        raise ValueError(f"An account id has {ACCOUNT_ID_LENGTH} bytes, got {len(account)}")
    if not 0 <= prefix <= _MAX_PREFIX or prefix in _RESERVED_PREFIXES:
        raise ValueError(f"Invalid SS58 prefix {prefix}")
    payload = _prefix_bytes(prefix) + bytes(account)
    return base58.b58encode(payload + _checksum(payload)).decode("ascii")


def ss58_decode(address: str) -> tuple[bytes, int]:
    """Return the account bytes and network prefix encoded in *address*.

    Raises:
        InvalidAddress: If *address* is not base58, has the wrong length, an
            invalid or reserved prefix or a wrong checksum.
    """
    try:
        raw = base58.b58decode(address)
    except ValueError:
        raise InvalidAddress(address, "not base58") from None

    if not raw or raw[0] >= 128:
        raise InvalidAddress(address, "invalid prefix")
    if raw[0] < 64:
        prefix, prefix_length = raw[0], 1
    elif len(raw) >= 2:
        lower = ((raw[0] & 0b0011_1111) << 2) | (raw[1] >> 6)
        prefix, prefix_length = lower | ((raw[1] & 0b0011_1111) << 8), 2
    else:
        raise InvalidAddress(address, "invalid prefix")

    if len(raw) != prefix_length + ACCOUNT_ID_LENGTH + _CHECKSUM_LENGTH:
        raise InvalidAddress(address, f"expected a {ACCOUNT_ID_LENGTH}-byte account")
    if prefix in _RESERVED_PREFIXES:
        raise InvalidAddress(address, f"prefix {prefix} is reserved")
    payload, checksum = raw[:-_CHECKSUM_LENGTH], raw[-_CHECKSUM_LENGTH:]
    if _checksum(payload) != checksum:
        raise InvalidAddress(address, "checksum mismatch")
    return payload[prefix_length:], prefix


# ################
# Implementation
# ################

_CHECKSUM_PREAMBLE = b"SS58PRE"

_CHECKSUM_LENGTH = 2

_MAX_PREFIX = 16383

_RESERVED_PREFIXES = frozenset({46, 47})


def _prefix_bytes(prefix: int) -> bytes:
    if prefix < 64:
        return bytes([prefix])
    first = ((prefix & 0b1111_1100) >> 2) | 0b0100_0000
    second = (prefix >> 8) | ((prefix & 0b11) << 6)
    return bytes([first, second])


def _checksum(payload: bytes) -> bytes:
    return hashlib.blake2b(_CHECKSUM_PREAMBLE + payload, digest_size=64).digest()[:_CHECKSUM_LENGTH]
