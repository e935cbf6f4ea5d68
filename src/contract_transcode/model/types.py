# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Canonical type definitions held by the type registry.

These are the normalized shapes the encoder and decoder dispatch on. Type
references between definitions are always type ids, never nested objects, so
recursive type graphs stay representable.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PrimitiveKind(Enum):
    """Fixed-size primitives of the wire format."""

    BOOL = "bool"
    CHAR = "char"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    U256 = "u256"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"
    I256 = "i256"

    @property
    def is_integer(self) -> bool:
        return self not in (PrimitiveKind.BOOL, PrimitiveKind.CHAR)

    @property
    def signed(self) -> bool:
        return self.value.startswith("i")

    @property
    def width(self) -> int:
        """Width in bits (8 for bool, 32 for char)."""
        if self is PrimitiveKind.BOOL:
            return 8
        if self is PrimitiveKind.CHAR:
            return 32
        return int(self.value[1:])


class WrapperKind(Enum):
    """Recognized wrapper shapes normalized into variants."""

    OPTION = "option"
    RESULT = "result"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class PrimitiveDef(_Frozen):
    """A boolean, character or fixed-width integer."""

    kind: Literal["primitive"] = "primitive"
    primitive: PrimitiveKind

    @property
    def width(self) -> int:
        return self.primitive.width

    @property
    def signed(self) -> bool:
        return self.primitive.signed


class CompactDef(_Frozen):
    """Variable-length integer wrapper around an unsigned integer type."""

    kind: Literal["compact"] = "compact"
    inner: int


class FieldDef(_Frozen):
    """A field of a composite or of a variant case."""

    name: str | None = None
    type_id: int
    type_name: str | None = None


class CompositeDef(_Frozen):
    """A struct-like type with fields encoded in declaration order."""

    kind: Literal["composite"] = "composite"
    fields: tuple[FieldDef, ...] = ()
    ident: str | None = None

    @property
    def is_named(self) -> bool:
        return bool(self.fields) and self.fields[0].name is not None


class VariantCase(_Frozen):
    """One case of a tagged union."""

    name: str
    index: int
    fields: tuple[FieldDef, ...] = ()

    @property
    def is_named(self) -> bool:
        return bool(self.fields) and self.fields[0].name is not None


class VariantDef(_Frozen):
    """A tagged union written as a 1-byte index followed by the case fields."""

    kind: Literal["variant"] = "variant"
    cases: tuple[VariantCase, ...] = ()
    ident: str | None = None
    wrapper: WrapperKind | None = None

    def case_by_index(self, index: int) -> VariantCase | None:
        for case in self.cases:
            if case.index == index:
                return case
        return None

    @property
    def case_names(self) -> list[str]:
        return [case.name for case in self.cases]


class SequenceDef(_Frozen):
    """A dynamically sized list, prefixed with its compact-encoded length."""

    kind: Literal["sequence"] = "sequence"
    element: int


class ArrayDef(_Frozen):
    """A fixed-size list written without a length prefix."""

    kind: Literal["array"] = "array"
    element: int
    length: int


class TupleDef(_Frozen):
    """An anonymous product type."""

    kind: Literal["tuple"] = "tuple"
    elements: tuple[int, ...] = ()


class BytesDef(_Frozen):
    """A byte blob; compact-length-prefixed unless ``length`` is fixed."""

    kind: Literal["bytes"] = "bytes"
    length: int | None = None
    ident: str | None = None


class StrDef(_Frozen):
    """UTF-8 text, prefixed with its compact-encoded byte length."""

    kind: Literal["str"] = "str"


class UnsupportedDef(_Frozen):
    """A declared type the codec cannot transcode (e.g. bit sequences)."""

    kind: Literal["unsupported"] = "unsupported"
    description: str


# A canonical type definition. The `kind` discriminator keeps the union closed
# and lets definitions round-trip through JSON unambiguously.
TypeDef = Annotated[
    PrimitiveDef
    | CompactDef
    | CompositeDef
    | VariantDef
    | SequenceDef
    | ArrayDef
    | TupleDef
    | BytesDef
    | StrDef
    | UnsupportedDef,
    _Field(discriminator="kind"),
]
