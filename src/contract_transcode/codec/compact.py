# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compact (variable-length) integer encoding.

The two low bits of the first byte select the mode:

====  ===================  =============================================
bits  range                layout
====  ===================  =============================================
00    ``n < 2**6``         1 byte, ``n << 2``
01    ``n < 2**14``        2 bytes little-endian, ``(n << 2) | 0b01``
10    ``n < 2**30``        4 bytes little-endian, ``(n << 2) | 0b10``
11    otherwise            ``((len - 4) << 2) | 0b11`` then ``len`` bytes
                           of ``n`` little-endian, minimal, ``len >= 4``
====  ===================  =============================================
"""

from contract_transcode.codec.cursor import Cursor
from contract_transcode.errors import DecodeError, DecodeErrorKind

# Largest byte length expressible in the 6-bit length field of the big mode.
MAX_BIG_MODE_BYTES = 4 + 0b111111

_SINGLE_BYTE_LIMIT = 1 << 6
_TWO_BYTE_LIMIT = 1 << 14
_FOUR_BYTE_LIMIT = 1 << 30


def encode_compact(n: int) -> bytes:
    """Return the compact encoding of the non-negative integer *n*.

    Raises:
        ValueError: If *n* is negative or needs more than 67 bytes.
    """
    if n < 0:
        raise ValueError(f"Compact encoding requires a non-negative integer, got {n}")
    if n < _SINGLE_BYTE_LIMIT:
        return bytes([n << 2])
    if n < _TWO_BYTE_LIMIT:
        return ((n << 2) | 0b01).to_bytes(2, "little")
    if n < _FOUR_BYTE_LIMIT:
        return ((n << 2) | 0b10).to_bytes(4, "little")
    length = max(4, (n.bit_length() + 7) // 8)
    if length > MAX_BIG_MODE_BYTES:
        raise ValueError(f"Integer {n} is too large for compact encoding")
    return bytes([((length - 4) << 2) | 0b11]) + n.to_bytes(length, "little")


def decode_compact(cursor: Cursor) -> int:
    """Read one compact integer from *cursor*.

    Raises:
        DecodeError: ``UNEXPECTED_END`` on truncated input, ``INVALID_COMPACT``
            if the value is not in its shortest encoding.
    """
    start = cursor.offset
    first = cursor.read_byte()
    mode = first & 0b11

    if mode == 0b00:
        return first >> 2

    if mode == 0b01:
        value = int.from_bytes(bytes([first]) + cursor.read(1), "little") >> 2
        if value < _SINGLE_BYTE_LIMIT:
            raise _non_canonical(value, start)
        return value

    if mode == 0b10:
        value = int.from_bytes(bytes([first]) + cursor.read(3), "little") >> 2
        if value < _TWO_BYTE_LIMIT:
            raise _non_canonical(value, start)
        return value

    length = (first >> 2) + 4
    value = int.from_bytes(cursor.read(length), "little")
    if value < _FOUR_BYTE_LIMIT or (length > 4 and value >> (8 * (length - 1)) == 0):
        raise _non_canonical(value, start)
    return value


def _non_canonical(value: int, offset: int) -> DecodeError:
    return DecodeError(
        DecodeErrorKind.INVALID_COMPACT,
        f"{value} is not in its shortest encoding",
        offset=offset,
    )
