# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolved signatures of contract constructors, messages and events."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class CallKind(Enum):
    CONSTRUCTOR = "constructor"
    MESSAGE = "message"
    EVENT = "event"


class ArgSpec(BaseModel):
    """A labelled, typed argument of a call or event."""

    model_config = ConfigDict(frozen=True)

    label: str
    type_id: int
    display_name: str | None = None
    indexed: bool = False


class CallSpec(BaseModel):
    """A constructor, message or event signature.

    Attributes:
        selector: The call-data prefix. Four bytes for constructors and
            messages; for events, the one-byte event index.
        return_type: Type id of the return value, if declared.
        signature_topic: 32-byte event topic, if declared.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: CallKind
    args: tuple[ArgSpec, ...] = ()
    selector: bytes = b""
    mutates: bool = False
    payable: bool = False
    default: bool = False
    return_type: int | None = None
    signature_topic: bytes | None = None
    docs: tuple[str, ...] = _Field(default_factory=tuple)
