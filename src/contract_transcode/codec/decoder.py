# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type-directed decoder from wire bytes to value trees.

Decoding mirrors the encoder and always produces the canonical value form:

- structs with named fields become a :class:`Map` keyed by field name, with
  unnamed fields a :class:`Tuple`, without fields :class:`Unit`;
- variants become :class:`Variant` with :class:`Map` or :class:`Tuple` fields;
- sequences and arrays become :class:`Seq`, byte blobs :class:`Bytes`;
- integers carry the bit width of their type.
"""

import logging

from contract_transcode.codec.compact import decode_compact
from contract_transcode.codec.cursor import Cursor
from contract_transcode.codec.limits import MAX_NESTING_DEPTH, MAX_ZERO_SIZED_ELEMENTS, SizeBudget
from contract_transcode.errors import DecodeError, DecodeErrorKind, UnknownType
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
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def decode(cursor: Cursor, type_id: int, registry: Registry) -> Value:
    """Decode one value of type *type_id* starting at the cursor position.

    The cursor is advanced past the decoded value. After a :class:`DecodeError`
    the cursor must be discarded.

    Raises:
        DecodeError: On truncated input, invalid discriminants, unknown type
            ids, invalid UTF-8, non-canonical compact integers, types the
            codec does not support, or input nested or repeated beyond the
            limits in :mod:`contract_transcode.codec.limits`.
    """
    try:
        return _Decoder(registry).decode(cursor, type_id)
    except RecursionError:
        raise DecodeError(
            DecodeErrorKind.NESTING_TOO_DEEP,
            "value nested deeper than the interpreter stack allows",
            type_id=type_id,
            offset=cursor.offset,
        ) from None


def decode_value(data: bytes, type_id: int, registry: Registry, *, allow_trailing: bool = False) -> Value:
    """Decode *data* as one value of type *type_id*.

    Args:
        data: The encoded bytes.
        type_id: Id of the type in *registry*.
        registry: The type registry.
        allow_trailing: Accept unread bytes after the value instead of raising.

    Raises:
        DecodeError: As for :func:`decode`, and ``TRAILING_BYTES`` if input is
            left over and *allow_trailing* is false.
    """
    logger.debug("Decoding %d byte(s) as type %d (%s)", len(data), type_id, registry.display_name(type_id))
    cursor = Cursor(data)
    value = decode(cursor, type_id, registry)
    if not allow_trailing and not cursor.at_end():
        raise DecodeError(
            DecodeErrorKind.TRAILING_BYTES,
            f"{cursor.remaining} byte(s) left after decoding {registry.display_name(type_id)}",
            type_id=type_id,
            offset=cursor.offset,
        )
    return value


# ################
# Implementation
# ################


class _Decoder:
    """Decodes values, tracking nesting depth and the zero-sized element budget."""

    def __init__(self, registry: Registry) -> None:
        self._registry = registry
        self._budget = SizeBudget(registry)
        self._depth = 0

    def decode(self, cursor: Cursor, type_id: int) -> Value:
        if self._depth >= MAX_NESTING_DEPTH:
            raise DecodeError(
                DecodeErrorKind.NESTING_TOO_DEEP,
                f"more than {MAX_NESTING_DEPTH} nested levels",
                type_id=type_id,
                offset=cursor.offset,
            )
        self._depth += 1
        try:
            return self._decode(cursor, type_id)
        finally:
            self._depth -= 1

    def _decode(self, cursor: Cursor, type_id: int) -> Value:
        definition = self._resolve(type_id, cursor)

        if isinstance(definition, PrimitiveDef):
            return self._decode_primitive(cursor, definition, type_id)
        if isinstance(definition, CompactDef):
            return self._decode_compact(cursor, definition, type_id)
        if isinstance(definition, BytesDef):
            length = definition.length if definition.length is not None else decode_compact(cursor)
            return Bytes(cursor.read(length), ident=definition.ident)
        if isinstance(definition, StrDef):
            start = cursor.offset
            raw = cursor.read(decode_compact(cursor))
            try:
                return Str(raw.decode("utf-8"))
            except UnicodeDecodeError as exc:
                raise DecodeError(DecodeErrorKind.INVALID_UTF8, str(exc), type_id=type_id, offset=start) from exc
        if isinstance(definition, SequenceDef):
            count = decode_compact(cursor)
            self._check_count(cursor, count, definition.element, type_id)
            return Seq(tuple(self.decode(cursor, definition.element) for _ in range(count)))
        if isinstance(definition, ArrayDef):
            return Seq(tuple(self.decode(cursor, definition.element) for _ in range(definition.length)))
        if isinstance(definition, TupleDef):
            if not definition.elements:
                return Unit()
            return Tuple(tuple(self.decode(cursor, element) for element in definition.elements))
        if isinstance(definition, CompositeDef):
            return self._decode_fields(cursor, definition.fields, empty=Unit())
        if isinstance(definition, VariantDef):
            return self._decode_variant(cursor, definition, type_id)
        assert isinstance(definition, UnsupportedDef)
        raise DecodeError(DecodeErrorKind.UNSUPPORTED_TYPE, definition.description, type_id=type_id)

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def _decode_primitive(self, cursor: Cursor, definition: PrimitiveDef, type_id: int) -> Value:
        kind = definition.primitive
        if kind is PrimitiveKind.BOOL:
            offset = cursor.offset
            byte = cursor.read_byte()
            if byte > 1:
                raise DecodeError(
                    DecodeErrorKind.INVALID_DISCRIMINANT, "bool", type_id=type_id, byte=byte, offset=offset
                )
            return Bool(byte == 1)
        if kind is PrimitiveKind.CHAR:
            raise DecodeError(DecodeErrorKind.UNSUPPORTED_TYPE, "char", type_id=type_id)
        number = int.from_bytes(cursor.read(kind.width // 8), "little", signed=kind.signed)
        if kind.signed:
            return Int(number, kind.width)
        return UInt(number, kind.width)

    def _decode_compact(self, cursor: Cursor, definition: CompactDef, type_id: int) -> Value:
        inner = self._resolve(definition.inner, cursor)
        if not (isinstance(inner, PrimitiveDef) and inner.primitive.is_integer and not inner.signed):
            raise DecodeError(
                DecodeErrorKind.UNSUPPORTED_TYPE,
                f"Compact<{self._registry.display_name(definition.inner)}>",
                type_id=type_id,
            )
        offset = cursor.offset
        number = decode_compact(cursor)
        if number >> inner.width:
            raise DecodeError(
                DecodeErrorKind.INVALID_COMPACT,
                f"{number} does not fit {inner.primitive.value}",
                type_id=type_id,
                offset=offset,
            )
        return UInt(number, inner.width)

    # ------------------------------------------------------------------
    # Products and sums
    # ------------------------------------------------------------------

    def _decode_fields(self, cursor: Cursor, fields: tuple[FieldDef, ...], empty: Value) -> Value:
        if not fields:
            return empty
        if fields[0].name is not None:
            return Map(tuple((f.name or str(i), self.decode(cursor, f.type_id)) for i, f in enumerate(fields)))
        return Tuple(tuple(self.decode(cursor, f.type_id) for f in fields))

    def _decode_variant(self, cursor: Cursor, definition: VariantDef, type_id: int) -> Value:
        offset = cursor.offset
        index = cursor.read_byte()
        case = definition.case_by_index(index)
        if case is None:
            raise DecodeError(
                DecodeErrorKind.INVALID_DISCRIMINANT,
                f"no case of {definition.ident or 'variant'} has this index",
                type_id=type_id,
                byte=index,
                offset=offset,
            )
        fields = self._decode_fields(cursor, case.fields, empty=Tuple())
        assert isinstance(fields, (Map, Tuple))
        return Variant(case.name, fields)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve(self, type_id: int, cursor: Cursor) -> TypeDef:
        try:
            return self._registry.resolve(type_id)
        except UnknownType:
            raise DecodeError(DecodeErrorKind.UNKNOWN_TYPE, type_id=type_id, offset=cursor.offset) from None

    def _check_count(self, cursor: Cursor, count: int, element: int, type_id: int) -> None:
        """Reject sequence lengths the remaining input or the element budget cannot hold."""
        needed = count * self._budget.min_size(element)
        if needed > cursor.remaining:
            raise DecodeError(
                DecodeErrorKind.UNEXPECTED_END,
                f"sequence of {count} element(s) needs at least {needed} byte(s), {cursor.remaining} remaining",
                type_id=type_id,
                offset=cursor.offset,
            )
        if not self._budget.admit(element, count):
            raise DecodeError(
                DecodeErrorKind.TOO_MANY_ELEMENTS,
                f"more than {MAX_ZERO_SIZED_ELEMENTS} elements of zero-sized types",
                type_id=type_id,
                offset=cursor.offset,
            )
