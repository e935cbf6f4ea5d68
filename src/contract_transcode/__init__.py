# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type-directed transcoding between value literals and contract wire bytes."""

from contract_transcode.errors import (
    ArityMismatch,
    ConfigError,
    DecodeError,
    DecodeErrorKind,
    InvalidAddress,
    MetadataError,
    ParseError,
    SelectorMismatch,
    TranscodeError,
    TypeMismatch,
    UnknownCallName,
    UnknownType,
    UnknownVariant,
)
from contract_transcode.json_form import from_json, to_json
from contract_transcode.literal import format_value, parse_value
from contract_transcode.ss58 import ss58_decode, ss58_encode
from contract_transcode.transcoder import ContractTranscoder, TranscoderOptions

__all__ = [
    "ContractTranscoder",
    "TranscoderOptions",
    "parse_value",
    "format_value",
    "to_json",
    "from_json",
    "ss58_encode",
    "ss58_decode",
    # Errors
    "TranscodeError",
    "ParseError",
    "TypeMismatch",
    "UnknownVariant",
    "UnknownType",
    "ArityMismatch",
    "UnknownCallName",
    "DecodeError",
    "DecodeErrorKind",
    "InvalidAddress",
    "SelectorMismatch",
    "MetadataError",
    "ConfigError",
]
