# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Immutable, id-keyed type registry.

The registry owns every type definition of one metadata document. Definitions
refer to each other only by type id, so indirectly recursive types (a struct
holding a ``Vec`` of itself) are plain entries in a dict and never expanded
eagerly.

Wrapper shapes the codec would otherwise need to special-case by name are
normalized once at load time (see :meth:`Registry.expand_wrapper`). The
normalization of one entry inspects at most its direct children, so it
terminates on cyclic graphs.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from contract_transcode.errors import MetadataError, UnknownType
from contract_transcode.metadata.document import TypeEntry
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

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class RegisteredType:
    """A declared type as it appears in the metadata document.

    Attributes:
        type_id: The id of the type.
        path: Fully qualified path segments, e.g. ``["Option"]``.
        params: Names of generic parameters.
        definition: The definition as declared, before wrapper normalization.
    """

    type_id: int
    path: tuple[str, ...]
    definition: TypeDef
    params: tuple[str, ...] = field(default=())

    @property
    def ident(self) -> str | None:
        return self.path[-1] if self.path else None


class Registry:
    """Type definitions keyed by type id, with canonical wrapper forms.

    Instances are never mutated after construction and may be shared between
    threads.
    """

    def __init__(self, types: Iterable[RegisteredType]) -> None:
        self._types: dict[int, RegisteredType] = {}
        for registered in types:
            if registered.type_id in self._types:
                raise MetadataError(f"Type id {registered.type_id} is declared more than once")
            self._types[registered.type_id] = registered
        self._canonical: dict[int, TypeDef] = {type_id: self.expand_wrapper(type_id) for type_id in self._types}

    @classmethod
    def from_entries(cls, entries: Iterable[TypeEntry]) -> Registry:
        """Build a registry from the ``types`` entries of a metadata document.

        Raises:
            MetadataError: If a definition has an unknown or malformed shape.
        """
        return cls(_registered_type_from_entry(entry) for entry in entries)

    def resolve(self, type_id: int) -> TypeDef:
        """Return the canonical definition of *type_id*.

        Raises:
            UnknownType: If the id is not declared.
        """
        try:
            return self._canonical[type_id]
        except KeyError:
            raise UnknownType(type_id) from None

    def declared(self, type_id: int) -> RegisteredType:
        """Return the type as declared, before normalization."""
        try:
            return self._types[type_id]
        except KeyError:
            raise UnknownType(type_id) from None

    def expand_wrapper(self, type_id: int) -> TypeDef:
        """Normalize a recognized wrapper shape into its canonical definition.

        - ``Option<T>`` and ``Result<T, E>`` become variants tagged with their
          :class:`WrapperKind`.
        - ``Vec<u8>`` becomes :class:`BytesDef`; ``[u8; N]`` becomes a
          fixed-length :class:`BytesDef`.
        - Fixed-size identifiers (``AccountId``, ``Hash``, ...) wrapping
          ``[u8; N]`` become fixed-length :class:`BytesDef` carrying the
          identifier.
        - Big unsigned integers (``U256``, ...) wrapping ``[u64; n]`` become
          the equally wide unsigned :class:`PrimitiveDef`.

        Any other definition is returned unchanged.

        Raises:
            UnknownType: If *type_id* is not declared.
        """
        registered = self.declared(type_id)
        definition = registered.definition
        ident = registered.ident

        if isinstance(definition, VariantDef):
            wrapper = _WRAPPER_IDENTS.get(ident) if ident else None
            if wrapper is not None and _has_cases(definition, _WRAPPER_CASES[wrapper]):
                return definition.model_copy(update={"wrapper": wrapper})
            return definition

        if isinstance(definition, SequenceDef) and self._is_byte(definition.element):
            return BytesDef()

        if isinstance(definition, ArrayDef) and self._is_byte(definition.element):
            return BytesDef(length=definition.length)

        if isinstance(definition, CompositeDef) and len(definition.fields) == 1 and ident:
            inner = self._types.get(definition.fields[0].type_id)
            if inner is not None and isinstance(inner.definition, ArrayDef):
                array = inner.definition
                if ident in _IDENTIFIER_IDENTS and self._is_byte(array.element):
                    return BytesDef(length=array.length, ident=ident)
                if ident in _BIG_UINT_IDENTS and self._is_primitive(array.element, PrimitiveKind.U64):
                    kind = _UNSIGNED_BY_WIDTH.get(64 * array.length)
                    if kind is not None:
                        return PrimitiveDef(primitive=kind)

        return definition

    def display_name(self, type_id: int) -> str:
        """Return a short human-readable name for *type_id*."""
        registered = self._types.get(type_id)
        if registered is None:
            return f"<unknown type {type_id}>"
        if registered.path:
            return "::".join(registered.path)
        definition = registered.definition
        if isinstance(definition, PrimitiveDef):
            return definition.primitive.value
        if isinstance(definition, StrDef):
            return "str"
        if isinstance(definition, SequenceDef):
            return f"Vec<{self.display_name(definition.element)}>"
        if isinstance(definition, ArrayDef):
            return f"[{self.display_name(definition.element)}; {definition.length}]"
        if isinstance(definition, TupleDef):
            return "(" + ", ".join(self.display_name(e) for e in definition.elements) + ")"
        if isinstance(definition, CompactDef):
            return f"Compact<{self.display_name(definition.inner)}>"
        return definition.kind

    def missing_references(self) -> list[int]:
        """Return type ids referenced by some definition but never declared."""
        missing: set[int] = set()
        for registered in self._types.values():
            for ref in _references(registered.definition):
                if ref not in self._types:
                    missing.add(ref)
        return sorted(missing)

    def type_ids(self) -> list[int]:
        return sorted(self._types)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[int]:
        return iter(self.type_ids())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _is_primitive(self, type_id: int, kind: PrimitiveKind) -> bool:
        registered = self._types.get(type_id)
        return (
            registered is not None
            and isinstance(registered.definition, PrimitiveDef)
            and registered.definition.primitive is kind
        )

    def _is_byte(self, type_id: int) -> bool:
        return self._is_primitive(type_id, PrimitiveKind.U8)


# ################
# Implementation
# ################

_WRAPPER_IDENTS: dict[str, WrapperKind] = {
    "Option": WrapperKind.OPTION,
    "Result": WrapperKind.RESULT,
}

_WRAPPER_CASES: dict[WrapperKind, tuple[str, str]] = {
    WrapperKind.OPTION: ("None", "Some"),
    WrapperKind.RESULT: ("Ok", "Err"),
}

_IDENTIFIER_IDENTS: frozenset[str] = frozenset({"AccountId", "AccountId32", "Hash", "H160", "H256"})

_BIG_UINT_IDENTS: frozenset[str] = frozenset({"U128", "U256", "U512"})

_UNSIGNED_BY_WIDTH: dict[int, PrimitiveKind] = {
    kind.width: kind for kind in PrimitiveKind if kind.is_integer and not kind.signed
}

_PRIMITIVES: dict[str, PrimitiveKind] = {kind.value: kind for kind in PrimitiveKind}


def _has_cases(definition: VariantDef, names: tuple[str, str]) -> bool:
    return sorted(definition.case_names) == sorted(names)


def _references(definition: TypeDef) -> list[int]:
    """Return the type ids a definition refers to directly."""
    if isinstance(definition, CompactDef):
        return [definition.inner]
    if isinstance(definition, CompositeDef):
        return [f.type_id for f in definition.fields]
    if isinstance(definition, VariantDef):
        return [f.type_id for case in definition.cases for f in case.fields]
    if isinstance(definition, (SequenceDef, ArrayDef)):
        return [definition.element]
    if isinstance(definition, TupleDef):
        return list(definition.elements)
    return []


def _registered_type_from_entry(entry: TypeEntry) -> RegisteredType:
    info = entry.type
    location = f"type {entry.id}"
    return RegisteredType(
        type_id=entry.id,
        path=tuple(info.path),
        params=tuple(p.name for p in info.params),
        definition=_type_def_from_dict(info.definition, location, info.path[-1] if info.path else None),
    )


def _type_def_from_dict(obj: Mapping[str, Any], location: str, ident: str | None) -> TypeDef:
    """Decode a raw ``def`` object (exactly one key naming the shape)."""
    if len(obj) != 1:
        raise MetadataError(f"{location}: definition must have exactly one key, got {sorted(obj)}")
    ((shape, body),) = obj.items()
    try:
        if shape == "primitive":
            if body == "str":
                return StrDef()
            if body not in _PRIMITIVES:
                raise MetadataError(f"{location}: unknown primitive {body!r}")
            return PrimitiveDef(primitive=_PRIMITIVES[body])
        if shape == "composite":
            fields = _fields_from_list((body or {}).get("fields", []), location)
            return CompositeDef(fields=fields, ident=ident)
        if shape == "variant":
            cases = tuple(
                _case_from_dict(case, position, location)
                for position, case in enumerate((body or {}).get("variants", []))
            )
            return VariantDef(cases=cases, ident=ident)
        if shape == "sequence":
            return SequenceDef(element=body["type"])
        if shape == "array":
            return ArrayDef(element=body["type"], length=body["len"])
        if shape == "tuple":
            return TupleDef(elements=tuple(body))
        if shape == "compact":
            return CompactDef(inner=body["type"])
        if shape in ("bitsequence", "bitSequence"):
            return UnsupportedDef(description="bit sequence")
    except (KeyError, TypeError, AttributeError, ValidationError) as exc:
        raise MetadataError(f"{location}: malformed {shape} definition: {exc}") from exc
    raise MetadataError(f"{location}: unknown type definition {shape!r}")


def _fields_from_list(raw_fields: list[Mapping[str, Any]], location: str) -> tuple[FieldDef, ...]:
    fields = tuple(
        FieldDef(name=f.get("name"), type_id=f["type"], type_name=f.get("typeName")) for f in raw_fields
    )
    named = [f.name is not None for f in fields]
    if any(named) and not all(named):
        raise MetadataError(f"{location}: fields must be either all named or all unnamed")
    return fields


def _case_from_dict(obj: Mapping[str, Any], position: int, location: str) -> VariantCase:
    index = obj.get("index", position)
    if not 0 <= index <= 0xFF:
        raise MetadataError(f"{location}: variant index {index} does not fit in one byte")
    return VariantCase(
        name=obj["name"],
        index=index,
        fields=_fields_from_list(obj.get("fields", []), f"{location} variant {obj['name']!r}"),
    )
