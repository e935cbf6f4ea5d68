# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures: a small but complete contract metadata document."""

import json
from pathlib import Path
from typing import Any

import pytest

from contract_transcode.metadata import Registry, parse_metadata
from contract_transcode.transcoder import ContractTranscoder

# ###############
# Helpers
# ###############

# Type ids of the demo metadata document.
BOOL, U8, U32, U128, STR, BYTES, BYTE_ARRAY_32, ACCOUNT_ID = 0, 1, 2, 3, 4, 5, 6, 7
OPTION_U32, POINT, SHAPE, SHAPES, DRAWING, UNIT, RESULT, ERROR = 8, 9, 10, 11, 12, 13, 14, 15
COMPACT_U128, I32 = 16, 17

TOPIC_TRANSFERRED = "0x" + "11" * 32


def _type(type_id: int, definition: dict[str, Any], path: list[str] | None = None) -> dict[str, Any]:
    return {"id": type_id, "type": {"path": path or [], "def": definition}}


def _arg(label: str, type_id: int, display: str, **extra: Any) -> dict[str, Any]:
    return {"label": label, "type": {"type": type_id, "displayName": [display]}, **extra}


def demo_metadata() -> dict[str, Any]:
    """Return a fresh metadata document covering every type shape."""
    types = [
        _type(BOOL, {"primitive": "bool"}),
        _type(U8, {"primitive": "u8"}),
        _type(U32, {"primitive": "u32"}),
        _type(U128, {"primitive": "u128"}),
        _type(STR, {"primitive": "str"}),
        _type(BYTES, {"sequence": {"type": U8}}),
        _type(BYTE_ARRAY_32, {"array": {"len": 32, "type": U8}}),
        _type(
            ACCOUNT_ID,
            {"composite": {"fields": [{"type": BYTE_ARRAY_32, "typeName": "[u8; 32]"}]}},
            ["ink_primitives", "types", "AccountId"],
        ),
        _type(
            OPTION_U32,
            {
                "variant": {
                    "variants": [
                        {"name": "None", "index": 0},
                        {"name": "Some", "index": 1, "fields": [{"type": U32}]},
                    ]
                }
            },
            ["Option"],
        ),
        _type(
            POINT,
            {"composite": {"fields": [{"name": "x", "type": U32}, {"name": "y", "type": U32}]}},
            ["demo", "Point"],
        ),
        _type(
            SHAPE,
            {
                "variant": {
                    "variants": [
                        {"name": "Circle", "index": 0, "fields": [{"type": U32}]},
                        {
                            "name": "Rect",
                            "index": 1,
                            "fields": [{"name": "w", "type": U32}, {"name": "h", "type": U32}],
                        },
                        {"name": "Empty", "index": 2},
                    ]
                }
            },
            ["demo", "Shape"],
        ),
        _type(SHAPES, {"sequence": {"type": SHAPE}}),
        _type(
            DRAWING,
            {"composite": {"fields": [{"name": "origin", "type": POINT}, {"name": "shapes", "type": SHAPES}]}},
            ["demo", "Drawing"],
        ),
        _type(UNIT, {"tuple": []}),
        _type(
            RESULT,
            {
                "variant": {
                    "variants": [
                        {"name": "Ok", "index": 0, "fields": [{"type": UNIT}]},
                        {"name": "Err", "index": 1, "fields": [{"type": ERROR}]},
                    ]
                }
            },
            ["Result"],
        ),
        _type(
            ERROR,
            {"variant": {"variants": [{"name": "NotOwner", "index": 0}, {"name": "InsufficientBalance", "index": 1}]}},
            ["demo", "Error"],
        ),
        _type(COMPACT_U128, {"compact": {"type": U128}}),
        _type(I32, {"primitive": "i32"}),
    ]
    spec = {
        "constructors": [
            {"label": "new", "selector": "0x9bae9d5e", "args": [_arg("init_value", BOOL, "bool")], "payable": False},
            {"label": "default", "selector": "0xed4b9d1b", "args": [], "default": True},
        ],
        "messages": [
            {"label": "flip", "selector": "0x633aa551", "args": [], "mutates": True},
            {
                "label": "get",
                "selector": "0x2f865bd9",
                "args": [],
                "mutates": False,
                "returnType": {"type": BOOL, "displayName": ["bool"]},
            },
            {
                "label": "transfer",
                "selector": "0x00000001",
                "args": [_arg("to", ACCOUNT_ID, "AccountId"), _arg("value", U128, "Balance")],
                "mutates": True,
                "returnType": {"type": RESULT, "displayName": ["Result"]},
            },
            {"label": "draw", "selector": "0x00000002", "args": [_arg("drawing", DRAWING, "Drawing")]},
            {
                "label": "set_option",
                "selector": "0x00000003",
                "args": [_arg("value", OPTION_U32, "Option")],
                "returnType": {"type": OPTION_U32, "displayName": ["Option"]},
            },
        ],
        "events": [
            {
                "label": "Transferred",
                "args": [_arg("to", ACCOUNT_ID, "AccountId", indexed=True), _arg("value", U128, "Balance")],
                "signature_topic": TOPIC_TRANSFERRED,
            },
            {"label": "Flipped", "args": [_arg("new_value", BOOL, "bool")]},
        ],
    }
    return {"version": 5, "types": types, "spec": spec}


# ###############
# Fixtures
# ###############


@pytest.fixture
def metadata_dict() -> dict[str, Any]:
    return demo_metadata()


@pytest.fixture
def registry(metadata_dict: dict[str, Any]) -> Registry:
    return Registry.from_entries(parse_metadata(metadata_dict).types)


@pytest.fixture
def transcoder(metadata_dict: dict[str, Any]) -> ContractTranscoder:
    return ContractTranscoder.from_metadata(metadata_dict)


@pytest.fixture
def metadata_file(tmp_path: Path, metadata_dict: dict[str, Any]) -> Path:
    path = tmp_path / "demo.json"
    path.write_text(json.dumps(metadata_dict), encoding="utf-8")
    return path
