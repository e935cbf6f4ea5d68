# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error taxonomy shared by the parser, codec, resolver and facade.

Every error here describes a caller-correctable input problem. None of them
leaves shared state behind, so the caller can fix its input and retry.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence

# ###############
# Public Interface
# ###############


class TranscodeError(Exception):
    """Base class for all errors raised by contract_transcode."""


class ParseError(TranscodeError):
    """Raised when a literal cannot be parsed.

    Attributes:
        position: UTF-8 byte offset into the literal where parsing failed.
        expected: Description of what the parser expected at that position.
        found: The offending text (empty at end of input).
        source_label: Optional label of the literal, e.g. an argument name.
    """

    def __init__(self, position: int, expected: str, found: str, source_label: str | None = None) -> None:
        where = f"{source_label}: offset {position}" if source_label else f"Offset {position}"
        shown = repr(found) if found else "end of input"
        super().__init__(f"{where}: expected {expected}, found {shown}")
        self.position = position
        self.expected = expected
        self.found = found
        self.source_label = source_label


class TypeMismatch(TranscodeError):
    """Raised when a value does not fit the type it is being encoded as.

    Attributes:
        path: Location of the offending value, e.g. ``point.coords[2]``.
        expected_kind: Description of what the type requires.
        found: Description of the value that was supplied.
    """

    def __init__(self, path: str, expected_kind: str, found: str) -> None:
        super().__init__(f"{path}: expected {expected_kind}, found {found}")
        self.path = path
        self.expected_kind = expected_kind
        self.found = found


class UnknownVariant(TypeMismatch):
    """Raised when a variant name matches none of the declared cases.

    Attributes:
        name: The variant name that was supplied.
        case_names: Every declared case name, in declaration order.
    """

    def __init__(self, path: str, name: str, case_names: Sequence[str]) -> None:
        expected = "one of: " + ", ".join(case_names) if case_names else "no variants (type is uninhabited)"
        super().__init__(path, expected, f"variant {name!r}")
        self.name = name
        self.case_names = list(case_names)


class UnknownType(TranscodeError):
    """Raised when a type id is not declared in the registry."""

    def __init__(self, type_id: int) -> None:
        super().__init__(f"Type id {type_id} is not declared in the type registry")
        self.type_id = type_id


class ArityMismatch(TranscodeError):
    """Raised when a call is given the wrong number of arguments."""

    def __init__(self, name: str, expected: int, found: int) -> None:
        super().__init__(f"Invalid number of arguments for '{name}': expected {expected}, {found} provided")
        self.name = name
        self.expected = expected
        self.found = found


class UnknownCallName(TranscodeError):
    """Raised when no constructor, message or event has the requested name.

    Attributes:
        kind: The call kind that was searched (``"constructor"``, ``"message"``...).
        name: The name that was requested.
        suggestions: Declared names close to ``name``, most similar first.
    """

    def __init__(self, kind: str, name: str, suggestions: Sequence[str], known: Sequence[str] = ()) -> None:
        message = f"No {kind} with the name '{name}' found."
        if suggestions:
            message += " Did you mean " + " or ".join(f"'{s}'" for s in suggestions) + "?"
        elif known:
            message += " Should be one of: " + ", ".join(known)
        super().__init__(message)
        self.kind = kind
        self.name = name
        self.suggestions = list(suggestions)


class DecodeErrorKind(enum.Enum):
    """Reasons a byte buffer can fail to decode."""

    UNEXPECTED_END = "unexpected end of input"
    INVALID_DISCRIMINANT = "invalid discriminant"
    UNKNOWN_TYPE = "unknown type"
    INVALID_UTF8 = "invalid UTF-8"
    INVALID_COMPACT = "invalid compact integer"
    UNSUPPORTED_TYPE = "unsupported type"
    TRAILING_BYTES = "trailing bytes"
    NESTING_TOO_DEEP = "nesting too deep"
    TOO_MANY_ELEMENTS = "too many elements"


class DecodeError(TranscodeError):
    """Raised when wire bytes cannot be decoded as the requested type.

    Attributes:
        kind: The :class:`DecodeErrorKind`.
        type_id: Type id being decoded when the failure happened, if known.
        byte: The offending byte for ``INVALID_DISCRIMINANT``.
        offset: Cursor offset where the failure was detected.
    """

    def __init__(
        self,
        kind: DecodeErrorKind,
        detail: str = "",
        *,
        type_id: int | None = None,
        byte: int | None = None,
        offset: int | None = None,
    ) -> None:
        message = kind.value
        if byte is not None:
            message += f" 0x{byte:02x}"
        if type_id is not None:
            message += f" (type id {type_id})"
        if offset is not None:
            message += f" at offset {offset}"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.kind = kind
        self.detail = detail
        self.type_id = type_id
        self.byte = byte
        self.offset = offset


class SelectorMismatch(TranscodeError):
    """Raised when a declared selector disagrees with the one computed from its label."""

    def __init__(self, name: str, declared: bytes, computed: bytes) -> None:
        super().__init__(
            f"Selector of '{name}' is declared as 0x{declared.hex()} but its label hashes to 0x{computed.hex()}"
        )
        self.name = name
        self.declared = declared
        self.computed = computed


class MetadataError(TranscodeError):
    """Raised when the metadata document cannot be read or has an invalid shape."""


class ConfigError(TranscodeError):
    """Raised when a settings file is invalid or cannot be loaded."""


class InvalidAddress(TranscodeError):
    """Raised when text is not a valid SS58 address of a 32-byte account.

    Attributes:
        address: The text that was supplied.
        reason: Why it was rejected.
    """

    def __init__(self, address: str, reason: str) -> None:
        super().__init__(f"Invalid SS58 address {address!r}: {reason}")
        self.address = address
        self.reason = reason
