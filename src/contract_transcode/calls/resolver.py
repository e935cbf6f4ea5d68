# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolution of constructor, message and event names to call signatures.

The resolver owns the call signatures of one contract. It finds them by name
(suggesting close matches on a miss), by selector or event topic, encodes
call data and checks declared selectors against their labels.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable, Sequence

from contract_transcode.codec.encoder import encode_value
from contract_transcode.errors import ArityMismatch, MetadataError, SelectorMismatch, UnknownCallName
from contract_transcode.literal.parser import parse_value
from contract_transcode.metadata.document import ArgEntry, ContractSpec
from contract_transcode.metadata.registry import Registry
from contract_transcode.model.calls import ArgSpec, CallKind, CallSpec
from contract_transcode.model.values import Value

logger = logging.getLogger(__name__)

SELECTOR_LENGTH = 4
TOPIC_LENGTH = 32

# ###############
# Public Interface
# ###############


def compute_selector(label: str) -> bytes:
    """Return the first four bytes of the BLAKE2b-256 hash of *label*."""
    return hashlib.blake2b(label.encode("utf-8"), digest_size=32).digest()[:SELECTOR_LENGTH]


def did_you_mean(name: str, candidates: Iterable[str], max_suggestions: int = 3) -> list[str]:
    """Return the candidates closest to *name*, most similar first.

    Similarity is the optimal string alignment distance over the lowercased
    names, where a transposition of two adjacent characters counts as a single
    edit. Candidates further away than a third of the name's length (but at
    least two edits) are not suggested.
    """
    limit = max(2, len(name) // 3)
    scored = []
    for position, candidate in enumerate(candidates):
        distance = _osa_distance(name.lower(), candidate.lower())
        if distance <= limit:
            scored.append((distance, position, candidate))
    scored.sort()
    return [candidate for _, _, candidate in scored[:max_suggestions]]


class CallSpecResolver:
    """Call signatures of one contract, keyed by kind and name.

    Args:
        registry: The type registry the argument types refer to.
        calls: All constructor, message and event signatures.
        case_insensitive_variants: Passed on to the encoder.
        max_suggestions: Maximum number of names suggested on a miss.
    """

    def __init__(
        self,
        registry: Registry,
        calls: Iterable[CallSpec],
        *,
        case_insensitive_variants: bool = True,
        max_suggestions: int = 3,
    ) -> None:
        self._registry = registry
        self._case_insensitive = case_insensitive_variants
        self._max_suggestions = max_suggestions
        self._calls: dict[CallKind, list[CallSpec]] = {kind: [] for kind in CallKind}
        for spec in calls:
            self._calls[spec.kind].append(spec)

    @classmethod
    def from_spec(
        cls,
        spec: ContractSpec,
        registry: Registry,
        *,
        case_insensitive_variants: bool = True,
        max_suggestions: int = 3,
    ) -> CallSpecResolver:
        """Build a resolver from the ``spec`` section of a metadata document.

        Raises:
            MetadataError: If a selector or signature topic is not valid hex of
                the expected length.
        """
        calls: list[CallSpec] = []
        for entry in spec.constructors:
            calls.append(
                CallSpec(
                    name=entry.label,
                    kind=CallKind.CONSTRUCTOR,
                    args=_arg_specs(entry.args),
                    selector=_parse_hex(entry.selector, SELECTOR_LENGTH, f"selector of constructor {entry.label!r}"),
                    payable=entry.payable,
                    default=entry.default,
                    return_type=entry.return_type.type if entry.return_type else None,
                    docs=tuple(entry.docs),
                )
            )
        for entry in spec.messages:
            calls.append(
                CallSpec(
                    name=entry.label,
                    kind=CallKind.MESSAGE,
                    args=_arg_specs(entry.args),
                    selector=_parse_hex(entry.selector, SELECTOR_LENGTH, f"selector of message {entry.label!r}"),
                    mutates=entry.mutates,
                    payable=entry.payable,
                    default=entry.default,
                    return_type=entry.return_type.type if entry.return_type else None,
                    docs=tuple(entry.docs),
                )
            )
        if len(spec.events) > 0x100:
            raise MetadataError(f"At most 256 events can be indexed, {len(spec.events)} declared")
        for index, entry in enumerate(spec.events):
            topic = entry.signature_topic
            calls.append(
                CallSpec(
                    name=entry.label,
                    kind=CallKind.EVENT,
                    args=_arg_specs(entry.args),
                    selector=bytes([index]),
                    signature_topic=(
                        _parse_hex(topic, TOPIC_LENGTH, f"signature topic of event {entry.label!r}") if topic else None
                    ),
                    docs=tuple(entry.docs),
                )
            )
        return cls(
            registry,
            calls,
            case_insensitive_variants=case_insensitive_variants,
            max_suggestions=max_suggestions,
        )

    @property
    def registry(self) -> Registry:
        return self._registry

    def calls(self, kind: CallKind) -> list[CallSpec]:
        return list(self._calls[kind])

    def names(self, kind: CallKind) -> list[str]:
        """Return the declared names of *kind*, in declaration order."""
        return [spec.name for spec in self._calls[kind]]

    def find(self, kind: CallKind, name: str) -> CallSpec:
        """Return the signature of the *kind* called *name*.

        Raises:
            UnknownCallName: If no such call is declared. The error carries
                the declared names closest to *name*.
        """
        for spec in self._calls[kind]:
            if spec.name == name:
                return spec
        known = self.names(kind)
        raise UnknownCallName(kind.value, name, did_you_mean(name, known, self._max_suggestions), known)

    def find_by_selector(self, kind: CallKind, selector: bytes) -> CallSpec | None:
        for spec in self._calls[kind]:
            if spec.selector == selector:
                return spec
        return None

    def find_event_by_index(self, index: int) -> CallSpec | None:
        events = self._calls[CallKind.EVENT]
        return events[index] if 0 <= index < len(events) else None

    def find_event_by_topic(self, topic: bytes) -> CallSpec | None:
        for spec in self._calls[CallKind.EVENT]:
            if spec.signature_topic == topic:
                return spec
        return None

    def encode_call(self, spec: CallSpec, args: Sequence[str | Value], *, lenient: bool = False) -> bytes:
        """Return the call data ``selector ++ encode(arg_1) ++ ... ++ encode(arg_n)``.

        Args:
            spec: The constructor or message to call.
            args: One argument per declared argument. Strings are parsed as
                literals; other arguments must already be values.
            lenient: Accept the lenient value spellings of the encoder, as
                arguments converted from JSON need.

        Raises:
            ArityMismatch: If the number of arguments differs from the declaration.
            ParseError: If a literal is malformed; labelled with the argument name.
            TypeMismatch: If an argument does not fit its declared type.
        """
        if len(args) != len(spec.args):
            raise ArityMismatch(spec.name, len(spec.args), len(args))
        logger.debug("Encoding call %s %r with %d argument(s)", spec.kind.value, spec.name, len(args))

        out = bytearray(spec.selector)
        for arg_spec, arg in zip(spec.args, args):
            value = parse_value(arg, source_label=arg_spec.label) if isinstance(arg, str) else arg
            out += encode_value(
                value,
                arg_spec.type_id,
                self._registry,
                case_insensitive_variants=self._case_insensitive,
                lenient=lenient,
                path=arg_spec.label,
            )
        return bytes(out)

    def verify_selector(self, spec: CallSpec) -> None:
        """Check that the declared selector of *spec* is the hash of its label.

        Events are not checked, their selector is the event index.

        Raises:
            SelectorMismatch: If the selectors differ.
        """
        if spec.kind is CallKind.EVENT:
            return
        computed = compute_selector(spec.name)
        if spec.selector != computed:
            raise SelectorMismatch(spec.name, spec.selector, computed)

    def selector_mismatches(self) -> list[SelectorMismatch]:
        """Return a :class:`SelectorMismatch` for every overridden selector.

        Selectors may be set explicitly in the contract source, so a mismatch
        is reported rather than rejected.
        """
        mismatches: list[SelectorMismatch] = []
        for kind in (CallKind.CONSTRUCTOR, CallKind.MESSAGE):
            for spec in self._calls[kind]:
                try:
                    self.verify_selector(spec)
                except SelectorMismatch as exc:
                    mismatches.append(exc)
        return mismatches


# ################
# Implementation
# ################


def _arg_specs(entries: list[ArgEntry]) -> tuple[ArgSpec, ...]:
    return tuple(
        ArgSpec(
            label=entry.label,
            type_id=entry.type.type,
            display_name="::".join(entry.type.display_name) or None,
            indexed=entry.indexed,
        )
        for entry in entries
    )


def _parse_hex(text: str, length: int, what: str) -> bytes:
    digits = text[2:] if text[:2] in ("0x", "0X") else text
    try:
        data = bytes.fromhex(digits)
    except ValueError:
        raise MetadataError(f"The {what} is not valid hex: {text!r}") from None
    if len(data) != length:
        raise MetadataError(f"The {what} must be {length} bytes, got {len(data)}")
    return data


def _osa_distance(a: str, b: str) -> int:
    """Optimal string alignment distance between *a* and *b*."""
    rows = [list(range(len(b) + 1))]
    for i in range(1, len(a) + 1):
        row = [i] + [0] * len(b)
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            row[j] = min(rows[i - 1][j] + 1, row[j - 1] + 1, rows[i - 1][j - 1] + cost)
            if i > 1 and j > 1 and a[i - 1] == b[j - 2] and a[i - 2] == b[j - 1]:
                row[j] = min(row[j], rows[i - 2][j - 2] + 1)
        rows.append(row)
    return rows[len(a)][len(b)]
