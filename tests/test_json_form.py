# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the JSON form of value trees."""

from typing import Any

import pytest

from contract_transcode.codec import encode_value
from contract_transcode.json_form import MAX_SAFE_INTEGER, from_json, to_json
from contract_transcode.errors import TypeMismatch
from contract_transcode.metadata import Registry
from contract_transcode.model.values import Bool, Bytes, Int, Map, Seq, Str, Tuple, UInt, Unit, Value, Variant

# ###############
# To JSON
# ###############


@pytest.mark.parametrize(
    "value, expected",
    [
        (Unit(), None),
        (Bool(False), False),
        (UInt(7), 7),
        (Int(-7), -7),
        (UInt(MAX_SAFE_INTEGER), MAX_SAFE_INTEGER),
        (UInt(MAX_SAFE_INTEGER + 1), str(MAX_SAFE_INTEGER + 1)),
        (Int(-(2**64)), str(-(2**64))),
        (Bytes(b"\xde\xad"), "0xdead"),
        (Str("hi"), "hi"),
        (Seq((UInt(1), UInt(2))), [1, 2]),
        (Tuple((Bool(True), Str("x"))), [True, "x"]),
        (Map((("x", UInt(1)), (0, UInt(2)))), {"x": 1, "0": 2}),
        (Variant("None"), {"None": None}),
        (Variant("Some", Tuple((UInt(5),))), {"Some": 5}),
        (Variant("Pair", Tuple((UInt(1), UInt(2)))), {"Pair": [1, 2]}),
        (Variant("Rect", Map((("w", UInt(4)), ("h", UInt(5))))), {"Rect": {"w": 4, "h": 5}}),
    ],
)
def test_to_json(value: Value, expected: Any) -> None:
    assert to_json(value) == expected


def test_nested_variant_to_json() -> None:
    value = Variant("Err", Tuple((Variant("NotOwner"),)))
    assert to_json(value) == {"Err": {"NotOwner": None}}


# ###############
# From JSON
# ###############


@pytest.mark.parametrize(
    "data, expected",
    [
        (None, Unit()),
        (True, Bool(True)),
        (5, UInt(5)),
        (-5, Int(-5)),
        ("0x", Bytes(b"")),
        ("0xABcd", Bytes(b"\xab\xcd")),
        ("0xabc", Str("0xabc")),
        ("plain", Str("plain")),
        ([1, "a"], Seq((UInt(1), Str("a")))),
        ({"x": 1}, Map((("x", UInt(1)),))),
    ],
)
def test_from_json(data: Any, expected: Value) -> None:
    assert from_json(data) == expected


def test_from_json_rejects_floats() -> None:
    with pytest.raises(TypeError, match="float"):
        from_json(1.5)


# ###############
# Encoding JSON input
# ###############


@pytest.mark.parametrize(
    "data, type_id, expected",
    [
        ({"Some": 5}, 8, "0105000000"),
        ({"None": None}, 8, "00"),
        ("None", 8, "00"),
        ({"x": 1, "y": 2}, 9, "01000000" "02000000"),
        ({"Rect": {"w": 4, "h": 5}}, 10, "01" "04000000" "05000000"),
        ({"Err": {"NotOwner": None}}, 14, "0100"),
        ("340282366920938463463374607431768211455", 3, "ff" * 16),
        ("0x0102", 5, "080102"),
    ],
)
def test_json_input_encodes(registry: Registry, data: Any, type_id: int, expected: str) -> None:
    assert encode_value(from_json(data), type_id, registry, lenient=True).hex() == expected


@pytest.mark.parametrize(
    "value, type_id",
    [
        (Variant("Some", Tuple((UInt(5, width=32),))), 8),
        (
            Map(
                (
                    ("origin", Map((("x", UInt(1)), ("y", UInt(2))))),
                    ("shapes", Seq((Variant("Circle", Tuple((UInt(3),))),))),
                )
            ),
            12,
        ),
        (Variant("Ok", Tuple((Unit(),))), 14),
        (UInt(2**100), 3),
    ],
)
def test_json_form_survives_encoding(registry: Registry, value: Value, type_id: int) -> None:
    decoded = from_json(to_json(value))
    assert encode_value(decoded, type_id, registry, lenient=True) == encode_value(value, type_id, registry)


@pytest.mark.parametrize("data, type_id", [({"Some": 5}, 8), ("None", 8), ("42", 3)])
def test_json_spellings_need_lenient_mode(registry: Registry, data: Any, type_id: int) -> None:
    with pytest.raises(TypeMismatch):
        encode_value(from_json(data), type_id, registry)


def test_account_ids_round_trip_as_addresses(registry: Registry) -> None:
    alice = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"
    data = bytes.fromhex("d43593c715fdd31c61141abd04a99fd6822c8558854ccde39a5684e7a56da27d")
    account = Bytes(data, ident="AccountId")
    assert to_json(account) == alice
    assert encode_value(from_json(to_json(account)), 7, registry) == data
