# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type-directed encoder from value trees to wire bytes.

The encoder walks a value and the registry definition of its type side by
side. Besides the canonical form the decoder produces it accepts spellings
that decode back to a structurally equal value (see
:func:`contract_transcode.model.values.structurally_equal`):

- signed and unsigned integer values for any integer type in range;
- tuples and sequences for one another, unit or an empty container for types
  without fields;
- maps with integer keys for positional fields;
- a variant literal named after a struct (``Point { x: 1, y: 2 }``);
- an SS58 address string for an ``AccountId``.

With ``lenient=True`` it also accepts spellings that decode to a different
shape, as JSON arguments need:

- integers written as decimal strings (``"1_000"``) or as big-endian byte
  literals (``0xff`` for a ``u8``);
- sequences of integers for byte blobs;
- positional values or integer keys for named fields, and a bare value for a
  single-field struct;
- the JSON spelling of a variant, a one-entry map ``{"Some": 5}``, or a plain
  string naming a fieldless case.
"""

import logging
from collections.abc import Sequence

from contract_transcode.codec.compact import encode_compact
from contract_transcode.codec.limits import MAX_NESTING_DEPTH, MAX_ZERO_SIZED_ELEMENTS, SizeBudget
from contract_transcode.errors import InvalidAddress, TypeMismatch, UnknownVariant
from contract_transcode.metadata.registry import Registry
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
)
from contract_transcode.ss58 import ACCOUNT_ID_IDENTS, ss58_decode

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def encode_value(
    value: Value,
    type_id: int,
    registry: Registry,
    *,
    case_insensitive_variants: bool = True,
    lenient: bool = False,
    path: str = "value",
) -> bytes:
    """Encode *value* as the registry type *type_id*.

    Args:
        value: The value to encode.
        type_id: Id of the target type in *registry*.
        registry: The type registry.
        case_insensitive_variants: Fall back to a case-insensitive match of
            variant names when no case matches exactly and the match is
            unambiguous.
        lenient: Also accept the spellings that decode to a differently
            shaped value, such as integers written as strings.
        path: Name of the root value used in error paths, e.g. an argument label.

    Returns:
        The encoded bytes.

    Raises:
        TypeMismatch: If the value does not fit the type (``UnknownVariant``
            for unknown variant names), or exceeds the nesting or element
            limits in :mod:`contract_transcode.codec.limits`.
        UnknownType: If the type graph references an undeclared type id.
    """
    logger.debug("Encoding %s as type %d (%s)", path, type_id, registry.display_name(type_id))
    out = bytearray()
    try:
        _Encoder(registry, case_insensitive_variants, lenient).encode(value, type_id, path, out)
    except RecursionError:
        raise TypeMismatch(
            path, "a value nested less deeply", "nesting deeper than the interpreter stack allows"
        ) from None
    return bytes(out)


# ################
# Implementation
# ################


class _Encoder:
    """Appends the encoding of values to a shared output buffer."""

    def __init__(self, registry: Registry, case_insensitive_variants: bool, lenient: bool) -> None:
        self._registry = registry
        self._case_insensitive = case_insensitive_variants
        self._lenient = lenient
        self._budget = SizeBudget(registry)
        self._depth = 0

    def encode(self, value: Value, type_id: int, path: str, out: bytearray) -> None:
        if self._depth >= MAX_NESTING_DEPTH:
            raise TypeMismatch(path, f"at most {MAX_NESTING_DEPTH} nested levels", describe(value))
        self._depth += 1
        try:
            self._encode(value, type_id, path, out)
        finally:
            self._depth -= 1

    def _encode(self, value: Value, type_id: int, path: str, out: bytearray) -> None:
        definition = self._registry.resolve(type_id)

        if isinstance(definition, PrimitiveDef):
            self._encode_primitive(value, definition, path, out)
        elif isinstance(definition, CompactDef):
            self._encode_compact(value, definition, path, out)
        elif isinstance(definition, BytesDef):
            self._encode_bytes(value, definition, path, out)
        elif isinstance(definition, StrDef):
            if not isinstance(value, Str):
                raise TypeMismatch(path, "a string", describe(value))
            data = value.value.encode("utf-8")
            out += encode_compact(len(data))
            out += data
        elif isinstance(definition, SequenceDef):
            items = _items(value, path, "a sequence")
            if not self._budget.admit(definition.element, len(items)):
                raise TypeMismatch(
                    path,
                    f"at most {MAX_ZERO_SIZED_ELEMENTS} elements of zero-sized types",
                    describe(value),
                )
            out += encode_compact(len(items))
            for i, item in enumerate(items):
                self.encode(item, definition.element, f"{path}[{i}]", out)
        elif isinstance(definition, ArrayDef):
            items = _items(value, path, f"an array of {definition.length} element(s)")
            if len(items) != definition.length:
                raise TypeMismatch(path, f"an array of {definition.length} element(s)", describe(value))
            for i, item in enumerate(items):
                self.encode(item, definition.element, f"{path}[{i}]", out)
        elif isinstance(definition, TupleDef):
            self._encode_tuple(value, definition, path, out)
        elif isinstance(definition, CompositeDef):
            if isinstance(value, Variant) and definition.ident is not None and value.name == definition.ident:
                value = value.fields
            self._encode_fields(definition.fields, value, path, out)
        elif isinstance(definition, VariantDef):
            self._encode_variant(value, definition, path, out)
        else:
            self._unsupported(definition, path)

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def _encode_primitive(self, value: Value, definition: PrimitiveDef, path: str, out: bytearray) -> None:
        kind = definition.primitive
        if kind is PrimitiveKind.BOOL:
            if not isinstance(value, Bool):
                raise TypeMismatch(path, "a bool", describe(value))
            out.append(1 if value.value else 0)
            return
        if kind is PrimitiveKind.CHAR:
            raise TypeMismatch(path, "a supported type", "char, which cannot be transcoded")
        number = self._integer_in_range(value, kind, path)
        out += number.to_bytes(kind.width // 8, "little", signed=kind.signed)

    def _encode_compact(self, value: Value, definition: CompactDef, path: str, out: bytearray) -> None:
        inner = self._registry.resolve(definition.inner)
        if not (isinstance(inner, PrimitiveDef) and inner.primitive.is_integer and not inner.signed):
            raise TypeMismatch(
                path,
                "a compact unsigned integer type",
                f"Compact<{self._registry.display_name(definition.inner)}>",
            )
        out += encode_compact(self._integer_in_range(value, inner.primitive, path))

    def _encode_bytes(self, value: Value, definition: BytesDef, path: str, out: bytearray) -> None:
        expected = f"{definition.length} bytes" if definition.length is not None else "bytes"
        is_account = definition.ident in ACCOUNT_ID_IDENTS
        if is_account:
            expected = f"an SS58 address or {expected}"

        if isinstance(value, Bytes):
            data = value.data
        elif is_account and isinstance(value, Str):
            try:
                data, _ = ss58_decode(value.value)
            except InvalidAddress as exc:
                raise TypeMismatch(path, expected, f"{describe(value)} ({exc.reason})") from None
        elif self._lenient and isinstance(value, (Seq, Tuple)):
            data = bytes(
                self._integer_in_range(item, PrimitiveKind.U8, f"{path}[{i}]") for i, item in enumerate(value)
            )
        else:
            raise TypeMismatch(path, expected, describe(value))

        if definition.length is None:
            out += encode_compact(len(data))
        elif len(data) != definition.length:
            raise TypeMismatch(path, expected, describe(Bytes(data)))
        out += data

    def _integer_in_range(self, value: Value, kind: PrimitiveKind, path: str) -> int:
        """Return *value* as an int that fits the integer primitive *kind*."""
        if isinstance(value, (UInt, Int)):
            number = value.value
        elif self._lenient and isinstance(value, Str):
            try:
                number = int(value.value.strip(), 10)
            except ValueError:
                raise TypeMismatch(path, f"an integer ({kind.value})", describe(value)) from None
        elif self._lenient and isinstance(value, Bytes) and 0 < len(value.data) <= kind.width // 8:
            number = int.from_bytes(value.data, "big")
        else:
            raise TypeMismatch(path, f"an integer ({kind.value})", describe(value))

        if kind.signed:
            low, high = -(1 << (kind.width - 1)), (1 << (kind.width - 1)) - 1
        else:
            low, high = 0, (1 << kind.width) - 1
        if not low <= number <= high:
            raise TypeMismatch(path, f"an integer in range {low}..={high} ({kind.value})", f"integer {number}")
        return number

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def _encode_tuple(self, value: Value, definition: TupleDef, path: str, out: bytearray) -> None:
        if not definition.elements:
            if not _is_empty(value):
                raise TypeMismatch(path, "unit '()'", describe(value))
            return
        items = _items(value, path, f"a tuple of {len(definition.elements)} element(s)")
        if len(items) != len(definition.elements):
            raise TypeMismatch(path, f"a tuple of {len(definition.elements)} element(s)", describe(value))
        for i, (item, element) in enumerate(zip(items, definition.elements)):
            self.encode(item, element, f"{path}.{i}", out)

    def _encode_fields(self, fields: Sequence[FieldDef], value: Value, path: str, out: bytearray) -> None:
        """Encode the fields of a struct or of a variant case in declared order."""
        if not fields:
            if not _is_empty(value):
                raise TypeMismatch(path, "no fields", describe(value))
            return

        named = fields[0].name is not None
        if isinstance(value, Map):
            self._encode_field_map(fields, value, path, out)
            return

        if isinstance(value, (Tuple, Seq)) and (self._lenient or not named):
            if len(value) != len(fields):
                raise TypeMismatch(path, f"{len(fields)} field(s)", describe(value))
            for i, (item, f) in enumerate(zip(value, fields)):
                self.encode(item, f.type_id, _field_path(path, f, i), out)
            return

        if self._lenient and len(fields) == 1:
            self.encode(value, fields[0].type_id, _field_path(path, fields[0], 0), out)
            return

        shape = "named" if named else "positional"
        raise TypeMismatch(path, f"a struct with {len(fields)} {shape} field(s)", describe(value))

    def _encode_field_map(self, fields: Sequence[FieldDef], value: Map, path: str, out: bytearray) -> None:
        for key in value.keys():
            if not any(self._key_matches(key, f, i) for i, f in enumerate(fields)):
                names = ", ".join(str(f.name) if f.name is not None else str(i) for i, f in enumerate(fields))
                raise TypeMismatch(f"{path}.{key}", f"one of the fields: {names}", f"unknown field {key!r}")

        for i, f in enumerate(fields):
            matches = [v for k, v in value.entries if self._key_matches(k, f, i)]
            field_path = _field_path(path, f, i)
            if not matches:
                raise TypeMismatch(field_path, "a value for this field", "nothing")
            if len(matches) > 1:
                raise TypeMismatch(field_path, "a single value for this field", f"{len(matches)} values")
            self.encode(matches[0], f.type_id, field_path, out)

    def _key_matches(self, key: object, f: FieldDef, position: int) -> bool:
        if isinstance(key, int):
            return key == position and (f.name is None or self._lenient)
        return f.name is not None and key == f.name

    # ------------------------------------------------------------------
    # Variants
    # ------------------------------------------------------------------

    def _encode_variant(self, value: Value, definition: VariantDef, path: str, out: bytearray) -> None:
        name, fields = self._variant_parts(value, path)
        case = self._find_case(definition, name, path)
        if isinstance(value, Map) and case.fields and not case.is_named:
            # JSON spelling: a lone field is written bare, several as an array.
            if len(case.fields) == 1:
                fields = Tuple((fields,))
            elif isinstance(fields, Seq):
                fields = Tuple(fields.items)
        out.append(case.index)
        self._encode_fields(case.fields, fields, path, out)

    def _variant_parts(self, value: Value, path: str) -> tuple[str, Value]:
        """Split a variant spelling into the case name and its field values."""
        if isinstance(value, Variant):
            return value.name, value.fields
        if self._lenient and isinstance(value, Str):
            return value.value, Tuple()
        if self._lenient and isinstance(value, Map) and len(value) == 1:
            ((key, inner),) = value.entries
            if isinstance(key, str):
                return key, inner
        raise TypeMismatch(path, "a variant", describe(value))

    def _find_case(self, definition: VariantDef, name: str, path: str) -> VariantCase:
        for case in definition.cases:
            if case.name == name:
                return case
        if self._case_insensitive:
            folded = [case for case in definition.cases if case.name.lower() == name.lower()]
            if len(folded) == 1:
                return folded[0]
        raise UnknownVariant(path, name, definition.case_names)

    def _unsupported(self, definition: TypeDef, path: str) -> None:
        assert isinstance(definition, UnsupportedDef)
        raise TypeMismatch(path, "a supported type", definition.description)


def _items(value: Value, path: str, expected: str) -> tuple[Value, ...]:
    if isinstance(value, (Seq, Tuple)):
        return value.items
    if isinstance(value, Unit):
        return ()
    raise TypeMismatch(path, expected, describe(value))


def _is_empty(value: Value) -> bool:
    return isinstance(value, Unit) or (isinstance(value, (Tuple, Seq, Map)) and len(value) == 0)


def _field_path(path: str, f: FieldDef, position: int) -> str:
    return f"{path}.{f.name if f.name is not None else position}"
