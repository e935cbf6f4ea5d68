# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Facade tying metadata, literal parser, codec and resolver together.

A :class:`ContractTranscoder` is built once per metadata document and is
stateless afterwards: every operation reads the registry and the call
signatures and produces fresh bytes or values.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from contract_transcode.calls.resolver import SELECTOR_LENGTH, CallSpecResolver, did_you_mean
from contract_transcode.codec.cursor import Cursor
from contract_transcode.codec.decoder import decode, decode_value
from contract_transcode.errors import DecodeError, DecodeErrorKind, TranscodeError, UnknownCallName
from contract_transcode.metadata.document import ContractMetadata, load_metadata, parse_metadata
from contract_transcode.metadata.registry import Registry
from contract_transcode.model.calls import CallKind, CallSpec
from contract_transcode.model.values import Map, Unit, Value, Variant

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class TranscoderOptions:
    """Behavioural switches of a :class:`ContractTranscoder`.

    Attributes:
        case_insensitive_variants: Match variant names case-insensitively when
            no case matches exactly and the match is unambiguous.
        max_suggestions: Maximum number of close names reported when a
            constructor, message or event name is unknown.
    """

    case_insensitive_variants: bool = True
    max_suggestions: int = 3


class ContractTranscoder:
    """Encodes calls and decodes results of one contract.

    Args:
        metadata: The loaded metadata document.
        options: Behavioural switches; defaults apply when omitted.

    Raises:
        MetadataError: If the type registry or the call signatures are invalid.
    """

    def __init__(self, metadata: ContractMetadata, options: TranscoderOptions | None = None) -> None:
        self._options = options or TranscoderOptions()
        self._metadata = metadata
        self._registry = Registry.from_entries(metadata.types)
        self._resolver = CallSpecResolver.from_spec(
            metadata.spec,
            self._registry,
            case_insensitive_variants=self._options.case_insensitive_variants,
            max_suggestions=self._options.max_suggestions,
        )

    @classmethod
    def load(cls, path: Path, options: TranscoderOptions | None = None) -> ContractTranscoder:
        """Build a transcoder from the metadata file at *path*."""
        return cls(load_metadata(path), options)

    @classmethod
    def from_metadata(
        cls, data: str | Mapping[str, Any], options: TranscoderOptions | None = None
    ) -> ContractTranscoder:
        """Build a transcoder from metadata JSON text or an already-decoded mapping."""
        return cls(parse_metadata(data), options)

    @property
    def metadata(self) -> ContractMetadata:
        return self._metadata

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def resolver(self) -> CallSpecResolver:
        return self._resolver

    @property
    def options(self) -> TranscoderOptions:
        return self._options

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def encode_constructor_call(self, name: str, args: Sequence[str | Value], *, lenient: bool = False) -> bytes:
        """Return the call data invoking constructor *name* with *args*.

        With *lenient*, arguments may use the lenient spellings of
        :func:`contract_transcode.codec.encoder.encode_value`.

        Raises:
            UnknownCallName: If no constructor is called *name*.
            ArityMismatch: If the number of arguments is wrong.
            ParseError: If a literal argument is malformed.
            TypeMismatch: If an argument does not fit its type.
        """
        return self._resolver.encode_call(self._resolver.find(CallKind.CONSTRUCTOR, name), args, lenient=lenient)

    def encode_message_call(self, name: str, args: Sequence[str | Value], *, lenient: bool = False) -> bytes:
        """Return the call data invoking message *name* with *args*.

        *lenient* is as for :meth:`encode_constructor_call`.

        Raises:
            UnknownCallName: If no message is called *name*.
            ArityMismatch: If the number of arguments is wrong.
            ParseError: If a literal argument is malformed.
            TypeMismatch: If an argument does not fit its type.
        """
        return self._resolver.encode_call(self._resolver.find(CallKind.MESSAGE, name), args, lenient=lenient)

    def encode_call(self, name: str, args: Sequence[str | Value], *, lenient: bool = False) -> bytes:
        """Return the call data for the constructor or message called *name*.

        Raises:
            TranscodeError: If both a constructor and a message are called *name*.
            UnknownCallName: If neither is. Suggestions span both kinds.
        """
        return self._resolver.encode_call(self.find_call(name), args, lenient=lenient)

    def find_call(self, name: str) -> CallSpec:
        """Return the constructor or message called *name*."""
        matches = [
            spec
            for kind in (CallKind.CONSTRUCTOR, CallKind.MESSAGE)
            for spec in self._resolver.calls(kind)
            if spec.name == name
        ]
        if len(matches) > 1:
            raise TranscodeError(f"'{name}' is declared as both a constructor and a message")
        if not matches:
            known = self._resolver.names(CallKind.CONSTRUCTOR) + self._resolver.names(CallKind.MESSAGE)
            raise UnknownCallName(
                "constructor or message",
                name,
                did_you_mean(name, known, self._options.max_suggestions),
                known,
            )
        return matches[0]

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def decode_return_value(self, type_id: int, data: bytes) -> Value:
        """Decode *data* as a value of *type_id*, rejecting trailing bytes."""
        return decode_value(data, type_id, self._registry)

    def decode_message_return(self, name: str, data: bytes) -> Value:
        """Decode the return value of message *name*."""
        return self._decode_return(self._resolver.find(CallKind.MESSAGE, name), data)

    def decode_constructor_return(self, name: str, data: bytes) -> Value:
        """Decode the return value of constructor *name*."""
        return self._decode_return(self._resolver.find(CallKind.CONSTRUCTOR, name), data)

    def decode_message_call(self, data: bytes) -> Variant:
        """Decode message call data into ``Variant(name, Map(args))``.

        Raises:
            DecodeError: If no message has the leading selector, if the
                arguments are malformed or if bytes are left over.
        """
        return self._decode_call(CallKind.MESSAGE, data)

    def decode_constructor_call(self, data: bytes) -> Variant:
        """Decode constructor call data into ``Variant(name, Map(args))``."""
        return self._decode_call(CallKind.CONSTRUCTOR, data)

    def decode_event(self, data: bytes, signature_topic: bytes | None = None) -> Variant:
        """Decode an emitted event into ``Variant(event_name, Map(args))``.

        Args:
            data: The event data.
            signature_topic: The event's signature topic. When given, the event
                is looked up by topic and *data* holds only the arguments.
                Otherwise the first byte of *data* is the event index.

        Raises:
            DecodeError: If no event matches, if the arguments are malformed or
                if bytes are left over.
        """
        cursor = Cursor(data)
        if signature_topic is not None:
            spec = self._resolver.find_event_by_topic(signature_topic)
            if spec is None:
                raise DecodeError(
                    DecodeErrorKind.INVALID_DISCRIMINANT,
                    f"no event has the signature topic 0x{signature_topic.hex()}",
                )
        else:
            index = cursor.read_byte()
            spec = self._resolver.find_event_by_index(index)
            if spec is None:
                raise DecodeError(
                    DecodeErrorKind.INVALID_DISCRIMINANT,
                    f"only {len(self._resolver.calls(CallKind.EVENT))} event(s) are declared",
                    byte=index,
                    offset=0,
                )
        logger.debug("Decoding event %r", spec.name)
        return self._decode_args(spec, cursor)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _decode_call(self, kind: CallKind, data: bytes) -> Variant:
        cursor = Cursor(data)
        selector = cursor.read(SELECTOR_LENGTH)
        spec = self._resolver.find_by_selector(kind, selector)
        if spec is None:
            raise DecodeError(
                DecodeErrorKind.INVALID_DISCRIMINANT,
                f"no {kind.value} has the selector 0x{selector.hex()}",
                offset=0,
            )
        logger.debug("Decoding %s call %r", kind.value, spec.name)
        return self._decode_args(spec, cursor)

    def _decode_args(self, spec: CallSpec, cursor: Cursor) -> Variant:
        entries = tuple((arg.label, decode(cursor, arg.type_id, self._registry)) for arg in spec.args)
        _reject_trailing(cursor, f"{spec.kind.value} '{spec.name}'")
        return Variant(spec.name, Map(entries))

    def _decode_return(self, spec: CallSpec, data: bytes) -> Value:
        if spec.return_type is None:
            cursor = Cursor(data)
            _reject_trailing(cursor, f"{spec.kind.value} '{spec.name}' (declares no return type)")
            return Unit()
        logger.debug("Decoding return value of %s %r", spec.kind.value, spec.name)
        return decode_value(data, spec.return_type, self._registry)


# ################
# Implementation
# ################


def _reject_trailing(cursor: Cursor, what: str) -> None:
    if not cursor.at_end():
        raise DecodeError(
            DecodeErrorKind.TRAILING_BYTES,
            f"{cursor.remaining} byte(s) left after decoding {what}",
            offset=cursor.offset,
        )
