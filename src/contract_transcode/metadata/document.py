# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Pydantic models and loader for the contract metadata document.

Only the parts of the document the transcoder consumes are modelled: the
``types`` list and the ``spec`` section with constructors, messages and
events. Unknown keys are ignored so newer documents keep loading.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from contract_transcode.errors import MetadataError

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class TypeParam(BaseModel):
    """A generic parameter of a declared type, e.g. ``T`` of ``Option<T>``."""

    name: str
    type: int | None = None


class TypeInfo(BaseModel):
    """A declared type: its path, generic params and raw definition."""

    model_config = ConfigDict(populate_by_name=True)

    path: list[str] = Field(default_factory=list)
    params: list[TypeParam] = Field(default_factory=list)
    definition: dict[str, Any] = Field(alias="def")
    docs: list[str] = Field(default_factory=list)


class TypeEntry(BaseModel):
    """One ``{id, type}`` entry of the ``types`` list."""

    id: int
    type: TypeInfo = Field(validation_alias=AliasChoices("type", "definition"))


class TypeSpecRef(BaseModel):
    """A reference from the interface section into the type registry."""

    model_config = ConfigDict(populate_by_name=True)

    type: int
    display_name: list[str] = Field(default_factory=list, alias="displayName")


class ArgEntry(BaseModel):
    label: str
    type: TypeSpecRef
    indexed: bool = False
    docs: list[str] = Field(default_factory=list)


class ConstructorEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    label: str
    selector: str
    args: list[ArgEntry] = Field(default_factory=list)
    payable: bool = False
    default: bool = False
    return_type: TypeSpecRef | None = Field(default=None, alias="returnType")
    docs: list[str] = Field(default_factory=list)


class MessageEntry(ConstructorEntry):
    mutates: bool = False


class EventEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    label: str
    args: list[ArgEntry] = Field(default_factory=list)
    docs: list[str] = Field(default_factory=list)
    signature_topic: str | None = Field(
        default=None, validation_alias=AliasChoices("signature_topic", "signatureTopic")
    )


class ContractSpec(BaseModel):
    """The callable interface section of the metadata document."""

    constructors: list[ConstructorEntry] = Field(default_factory=list)
    messages: list[MessageEntry] = Field(default_factory=list)
    events: list[EventEntry] = Field(default_factory=list)


class ContractMetadata(BaseModel):
    """The parts of a contract metadata document used for transcoding."""

    types: list[TypeEntry] = Field(default_factory=list)
    spec: ContractSpec = Field(default_factory=ContractSpec)
    version: str | int | None = None


def parse_metadata(data: str | Mapping[str, Any], source_label: str = "<metadata>") -> ContractMetadata:
    """Parse a metadata document from JSON text or an already-decoded mapping.

    Accepts the bare ABI (``types`` and ``spec`` at the top level), a contract
    bundle carrying the ABI keys beside ``source`` and ``contract``, or an ABI
    wrapped in a single version key such as ``{"V3": {...}}``.

    Args:
        data: JSON text or a mapping.
        source_label: Human-readable label used in error messages.

    Returns:
        The validated :class:`ContractMetadata`.

    Raises:
        MetadataError: If the JSON is invalid or the document has the wrong shape.
    """
    if isinstance(data, str):
        try:
            obj = json.loads(data)
        except json.JSONDecodeError as exc:
            raise MetadataError(f"Invalid JSON in {source_label}: {exc}") from exc
    else:
        obj = data

    if not isinstance(obj, Mapping):
        raise MetadataError(f"{source_label}: metadata document must be a JSON object")

    obj = _unwrap_version(obj)
    try:
        metadata = ContractMetadata.model_validate(obj)
    except ValidationError as exc:
        raise MetadataError(f"Invalid metadata document {source_label}: {exc}") from exc

    logger.debug(
        "Loaded metadata from %s: %d types, %d constructors, %d messages, %d events",
        source_label,
        len(metadata.types),
        len(metadata.spec.constructors),
        len(metadata.spec.messages),
        len(metadata.spec.events),
    )
    return metadata


def load_metadata(path: Path) -> ContractMetadata:
    """Read and parse the metadata document at *path*.

    Raises:
        MetadataError: If the file cannot be read or is not a valid document.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise MetadataError(f"Metadata file not found: {path}") from None
    except OSError as exc:
        raise MetadataError(f"Cannot read metadata file: {exc}") from exc
    return parse_metadata(text, source_label=str(path))


# ################
# Implementation
# ################


def _unwrap_version(obj: Mapping[str, Any]) -> Mapping[str, Any]:
    """Strip a single version wrapper key (``{"V3": {...}}``) if present."""
    if "types" in obj or "spec" in obj:
        return obj
    if len(obj) == 1:
        (inner,) = obj.values()
        if isinstance(inner, Mapping) and ("types" in inner or "spec" in inner):
            return inner
    return obj
