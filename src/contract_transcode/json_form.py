# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversion between value trees and JSON-compatible data.

The JSON form is what the command-line tool prints with ``--json`` and what
callers may pass instead of literal text:

- structs with named fields are objects, positional groups are arrays;
- variants are one-key objects ``{"Case": fields}``, ``null`` when fieldless
  and the bare value for a single positional field;
- byte blobs are ``"0x..."`` strings, account ids SS58 address strings;
- integers outside the exactly representable range of a double are decimal
  strings so no precision is lost in JavaScript consumers;
- unit is ``null``.
"""

import re
from collections.abc import Mapping
from typing import Any

from contract_transcode.model.values import (
    Bool,
    Bytes,
    Int,
    Map,
    Seq,
    Str,
    Tuple,
    UInt,
    Unit,
    Value,
    Variant,
)
from contract_transcode.ss58 import ACCOUNT_ID_IDENTS, ACCOUNT_ID_LENGTH, ss58_encode

MAX_SAFE_INTEGER = 2**53 - 1


def to_json(value: Value) -> Any:
    """Return the JSON-compatible form of *value*."""
    if isinstance(value, Unit):
        return None
    if isinstance(value, Bool):
        return value.value
    if isinstance(value, (UInt, Int)):
        if abs(value.value) > MAX_SAFE_INTEGER:
            return str(value.value)
        return value.value
    if isinstance(value, Bytes):
        if value.ident in ACCOUNT_ID_IDENTS and len(value.data) == ACCOUNT_ID_LENGTH:
            return ss58_encode(value.data)
        return "0x" + value.data.hex()
    if isinstance(value, Str):
        return value.value
    if isinstance(value, (Seq, Tuple)):
        return [to_json(item) for item in value]
    if isinstance(value, Map):
        return {str(key): to_json(item) for key, item in value.entries}
    assert isinstance(value, Variant)
    fields = value.fields
    if len(fields) == 0:
        body = None
    elif isinstance(fields, Tuple) and len(fields) == 1:
        body = to_json(fields.items[0])
    else:
        body = to_json(fields)
    return {value.name: body}


def from_json(data: Any) -> Value:
    """Convert decoded JSON data into a value tree.

    ``null`` becomes unit, objects become maps, arrays sequences. Strings
    starting with ``0x`` followed by an even number of hex digits become
    bytes, other strings (SS58 addresses among them) stay strings. Variant
    and integer spellings are resolved by the lenient encoder against the
    target type.

    Raises:
        TypeError: If *data* contains something JSON cannot express.
    """
    if data is None:
        return Unit()
    if isinstance(data, bool):
        return Bool(data)
    if isinstance(data, int):
        return UInt(data) if data >= 0 else Int(data)
    if isinstance(data, str):
        return _string_value(data)
    if isinstance(data, (list, tuple)):
        return Seq(tuple(from_json(item) for item in data))
    if isinstance(data, Mapping):
        return Map(tuple((str(key), from_json(item)) for key, item in data.items()))
    raise TypeError(f"Cannot convert {type(data).__name__} to a value")


_HEX_BYTES = re.compile(r"0[xX](?:[0-9a-fA-F]{2})*")


def _string_value(text: str) -> Value:
    if _HEX_BYTES.fullmatch(text):
        return Bytes(bytes.fromhex(text[2:]))
    return Str(text)
