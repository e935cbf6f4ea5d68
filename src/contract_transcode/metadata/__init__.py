# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Metadata document loading and the type registry built from it."""

from contract_transcode.metadata.document import (
    ContractMetadata,
    ContractSpec,
    TypeEntry,
    load_metadata,
    parse_metadata,
)
from contract_transcode.metadata.registry import RegisteredType, Registry

__all__ = [
    "ContractMetadata",
    "ContractSpec",
    "TypeEntry",
    "load_metadata",
    "parse_metadata",
    "RegisteredType",
    "Registry",
]
