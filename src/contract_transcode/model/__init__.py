# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model: canonical type definitions, call signatures and values."""

from contract_transcode.model.calls import ArgSpec, CallKind, CallSpec
from contract_transcode.model.types import (
    ArrayDef,
    BytesDef,
    CompactDef,
    CompositeDef,
    FieldDef,
    PrimitiveDef,
    PrimitiveKind,
    SequenceDef,
    StrDef,
    TupleDef,
    TypeDef,
    UnsupportedDef,
    VariantCase,
    VariantDef,
    WrapperKind,
)
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
    describe,
    structurally_equal,
)

__all__ = [
    # Type system
    "PrimitiveKind",
    "WrapperKind",
    "PrimitiveDef",
    "CompactDef",
    "FieldDef",
    "CompositeDef",
    "VariantCase",
    "VariantDef",
    "SequenceDef",
    "ArrayDef",
    "TupleDef",
    "BytesDef",
    "StrDef",
    "UnsupportedDef",
    "TypeDef",
    # Calls
    "CallKind",
    "ArgSpec",
    "CallSpec",
    # Values
    "Unit",
    "Bool",
    "UInt",
    "Int",
    "Bytes",
    "Str",
    "Seq",
    "Tuple",
    "Map",
    "Variant",
    "Value",
    "describe",
    "structurally_equal",
]
