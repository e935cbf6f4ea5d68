# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Render value trees back into literal syntax.

The output is accepted by :func:`contract_transcode.literal.parse_value`, so
``parse_value(format_value(v)) == v`` for every value the parser produces.
Account ids decoded from an ``AccountId`` type render as bare SS58 addresses,
which parse back as strings.
"""

import json

from contract_transcode.model.values import (
    Bool,
    Bytes,
    Int,
    Map,
    MapKey,
    Seq,
    Str,
    Tuple,
    UInt,
    Unit,
    Value,
    Variant,
)
from contract_transcode.ss58 import ACCOUNT_ID_IDENTS, ACCOUNT_ID_LENGTH, ss58_encode

_RESERVED = frozenset({"true", "false"})


def format_value(value: Value) -> str:
    """Return the literal form of *value*, e.g. ``Some({x: 1, y: 0x00ff})``."""
    if isinstance(value, Unit):
        return "()"
    if isinstance(value, Bool):
        return "true" if value.value else "false"
    if isinstance(value, UInt):
        return str(value.value)
    if isinstance(value, Int):
        # An explicit sign keeps the value signed when parsed back.
        return f"{value.value:+d}"
    if isinstance(value, Bytes):
        if value.ident in ACCOUNT_ID_IDENTS and len(value.data) == ACCOUNT_ID_LENGTH:
            return ss58_encode(value.data)
        return "0x" + value.data.hex()
    if isinstance(value, Str):
        return _quote(value.value)
    if isinstance(value, Seq):
        return "[" + ", ".join(format_value(item) for item in value) + "]"
    if isinstance(value, Tuple):
        return "(" + ", ".join(format_value(item) for item in value) + ")"
    if isinstance(value, Map):
        return _format_entries(value)
    assert isinstance(value, Variant)
    if isinstance(value.fields, Map):
        return f"{value.name} {_format_entries(value.fields)}"
    if len(value.fields) == 0:
        return value.name
    return value.name + format_value(value.fields)


def _format_entries(value: Map) -> str:
    if not value.entries:
        return "{}"
    return "{ " + ", ".join(f"{_format_key(k)}: {format_value(v)}" for k, v in value.entries) + " }"


def _format_key(key: MapKey) -> str:
    if isinstance(key, int):
        return str(key)
    if key.isidentifier() and key not in _RESERVED:
        return key
    return _quote(key)


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)
