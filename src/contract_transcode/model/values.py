# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generic, type-agnostic value tree.

Values are produced by the literal parser and by the decoder and consumed by
the encoder. They are immutable; every transformation builds new values.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from contract_transcode.errors import InvalidAddress
from contract_transcode.ss58 import ss58_decode

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Unit:
    """The empty value ``()``."""


@dataclass(frozen=True)
class Bool:
    value: bool


@dataclass(frozen=True)
class UInt:
    """A non-negative integer.

    Attributes:
        value: The integer.
        width: Bit width of the type it was decoded from; ``None`` for parsed
            literals. Not part of equality.
    """

    value: int
    width: int | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Int:
    """A signed integer literal or a value decoded from a signed type."""

    value: int
    width: int | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Bytes:
    """A byte blob.

    Attributes:
        data: The bytes.
        ident: Identifier of the type it was decoded from, such as
            ``AccountId``; ``None`` otherwise. Not part of equality.
    """

    data: bytes
    ident: str | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Str:
    value: str


@dataclass(frozen=True)
class Seq:
    """A homogeneous list: sequences and arrays."""

    items: tuple[Value, ...] = ()

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class Tuple:
    """A positional group of values: tuples and unnamed fields."""

    items: tuple[Value, ...] = ()

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


MapKey = str | int


@dataclass(frozen=True)
class Map:
    """Ordered key/value entries: structs and named fields.

    Keys are field names or positional indices. Equality is order-sensitive.
    """

    entries: tuple[tuple[MapKey, Value], ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def keys(self) -> list[MapKey]:
        return [key for key, _ in self.entries]

    def values(self) -> list[Value]:
        return [value for _, value in self.entries]

    def get(self, key: MapKey) -> Value | None:
        for k, v in self.entries:
            if k == key:
                return v
        return None


@dataclass(frozen=True)
class Variant:
    """A named constructor such as ``Some(1)``, ``None`` or ``Point { x: 1 }``.

    ``fields`` is a :class:`Tuple` for positional fields (empty for fieldless
    cases) or a :class:`Map` for named fields.
    """

    name: str
    fields: Tuple | Map = field(default_factory=Tuple)


Value = Unit | Bool | UInt | Int | Bytes | Str | Seq | Tuple | Map | Variant


def describe(value: Value) -> str:
    """Return a short human description of a value for error messages."""
    if isinstance(value, Unit):
        return "unit '()'"
    if isinstance(value, Bool):
        return f"bool {str(value.value).lower()}"
    if isinstance(value, UInt):
        return f"unsigned integer {value.value}"
    if isinstance(value, Int):
        return f"integer {value.value}"
    if isinstance(value, Bytes):
        return f"{len(value.data)} byte(s) 0x{value.data.hex()}"
    if isinstance(value, Str):
        return f"string {value.value!r}"
    if isinstance(value, Seq):
        return f"sequence of {len(value)} element(s)"
    if isinstance(value, Tuple):
        return f"tuple of {len(value)} element(s)"
    if isinstance(value, Map):
        return f"map with keys {value.keys()}"
    assert isinstance(value, Variant)
    return f"variant {value.name!r}"


def structurally_equal(left: Value, right: Value) -> bool:
    """Whether two values spell the same data.

    Decoding an encoded value gives back a value structurally equal to it,
    although the spelling can differ:

    - integers compare by number, signed or not;
    - unit and empty tuples, sequences and maps are all empty;
    - tuples and sequences compare item by item;
    - maps compare by key regardless of entry order, and a map keyed by the
      positions ``0..n-1`` equals the tuple of its values;
    - variant names compare case-insensitively, and a variant compared with a
      non-variant stands for its fields, as ``Point { x: 1 }`` does for a struct;
    - an SS58 address string equals the account bytes it encodes.
    """
    if _is_empty(left) and _is_empty(right):
        return True
    if isinstance(left, (UInt, Int)) and isinstance(right, (UInt, Int)):
        return left.value == right.value
    if isinstance(left, Variant) and isinstance(right, Variant):
        return left.name.lower() == right.name.lower() and structurally_equal(left.fields, right.fields)
    if isinstance(left, Variant):
        return structurally_equal(left.fields, right)
    if isinstance(right, Variant):
        return structurally_equal(left, right.fields)
    if isinstance(left, Map) or isinstance(right, Map):
        return _maps_equal(left, right)
    if isinstance(left, (Seq, Tuple)) and isinstance(right, (Seq, Tuple)):
        return len(left) == len(right) and all(structurally_equal(a, b) for a, b in zip(left, right))
    if isinstance(left, Str) and isinstance(right, Bytes):
        return _is_address_of(left.value, right.data)
    if isinstance(left, Bytes) and isinstance(right, Str):
        return _is_address_of(right.value, left.data)
    return left == right


# ################
# Implementation
# ################


def _is_empty(value: Value) -> bool:
    return isinstance(value, Unit) or (isinstance(value, (Tuple, Seq, Map)) and len(value) == 0)


def _maps_equal(left: Value, right: Value) -> bool:
    if not isinstance(left, Map):
        left, right = right, left
    assert isinstance(left, Map)
    entries = dict(left.entries)
    if len(entries) != len(left):
        return False
    if isinstance(right, Map):
        other = dict(right.entries)
        return (
            len(other) == len(right)
            and entries.keys() == other.keys()
            and all(structurally_equal(entries[key], other[key]) for key in entries)
        )
    if isinstance(right, (Seq, Tuple)):
        return entries.keys() == set(range(len(right))) and all(
            structurally_equal(entries[i], item) for i, item in enumerate(right)
        )
    return False


def _is_address_of(text: str, data: bytes) -> bool:
    try:
        account, _ = ss58_decode(text)
    except InvalidAddress:
        return False
    return account == data
