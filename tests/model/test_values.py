# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the generic value tree."""

import pytest

from contract_transcode.model.values import (
    Bool,
    Bytes,
    Int,
    Map,
    Seq,
    Str,
    Tuple,
    UInt,
    Unit,
    Value,
    Variant,
    describe,
    structurally_equal,
)

ALICE = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"
ALICE_BYTES = bytes.fromhex("d43593c715fdd31c61141abd04a99fd6822c8558854ccde39a5684e7a56da27d")


def test_width_is_not_part_of_equality() -> None:
    assert UInt(5, width=32) == UInt(5)
    assert Int(-5, width=8) == Int(-5)
    assert UInt(5) != Int(5)


def test_variant_defaults_to_no_fields() -> None:
    assert Variant("None") == Variant("None", Tuple())
    assert Variant("None") != Variant("None", Map(()))


def test_map_is_ordered() -> None:
    first = Map((("x", UInt(1)), ("y", UInt(2))))
    assert first != Map((("y", UInt(2)), ("x", UInt(1))))
    assert first.keys() == ["x", "y"]
    assert first.values() == [UInt(1), UInt(2)]
    assert first.get("y") == UInt(2)
    assert first.get("z") is None


def test_values_are_hashable() -> None:
    values = {Seq((UInt(1),)), Seq((UInt(1),)), Variant("A", Tuple((Str("x"),)))}
    assert len(values) == 2


@pytest.mark.parametrize(
    "value, expected",
    [
        (Unit(), "unit '()'"),
        (Bool(True), "bool true"),
        (UInt(3), "unsigned integer 3"),
        (Int(-3), "integer -3"),
        (Bytes(b"\x01\x02"), "2 byte(s) 0x0102"),
        (Str("a"), "string 'a'"),
        (Seq((UInt(1), UInt(2))), "sequence of 2 element(s)"),
        (Tuple(()), "tuple of 0 element(s)"),
        (Map((("x", UInt(1)),)), "map with keys ['x']"),
        (Variant("Some", Tuple((UInt(1),))), "variant 'Some'"),
    ],
)
def test_describe(value: Value, expected: str) -> None:
    assert describe(value) == expected


def test_bytes_type_name_is_not_part_of_equality() -> None:
    assert Bytes(b"\x01", ident="AccountId") == Bytes(b"\x01")


# ###############
# Structural equality
# ###############


@pytest.mark.parametrize(
    "left, right",
    [
        (UInt(5), Int(5)),
        (Unit(), Tuple()),
        (Seq(()), Map(())),
        (Seq((UInt(1), UInt(2))), Tuple((UInt(1), UInt(2)))),
        (Map((("x", UInt(1)), ("y", UInt(2)))), Map((("y", UInt(2)), ("x", UInt(1))))),
        (Map(((0, UInt(3)), (1, UInt(4)))), Tuple((UInt(3), UInt(4)))),
        (Map(((1, UInt(4)), (0, UInt(3)))), Seq((UInt(3), UInt(4)))),
        (Variant("Some", Tuple((UInt(1),))), Variant("some", Tuple((Int(1),)))),
        (Variant("Point", Map((("x", UInt(1)),))), Map((("x", UInt(1)),))),
        (Map((("x", UInt(1)),)), Variant("Point", Map((("x", UInt(1)),)))),
        (Str(ALICE), Bytes(ALICE_BYTES)),
        (Bytes(ALICE_BYTES, ident="AccountId"), Str(ALICE)),
    ],
)
def test_structurally_equal(left: Value, right: Value) -> None:
    assert structurally_equal(left, right)
    assert structurally_equal(right, left)


@pytest.mark.parametrize(
    "left, right",
    [
        (UInt(5), UInt(6)),
        (UInt(1), Bool(True)),
        (Str("5"), UInt(5)),
        (Seq((UInt(1),)), Seq((UInt(1), UInt(2)))),
        (Map((("x", UInt(1)),)), Map((("y", UInt(1)),))),
        (Map(((1, UInt(3)),)), Tuple((UInt(3),))),
        (Map((("x", UInt(1)), ("x", UInt(1)))), Map((("x", UInt(1)),))),
        (Variant("Some", Tuple((UInt(1),))), Variant("None")),
        (Str(ALICE), Bytes(bytes(32))),
        (Str("not an address"), Bytes(ALICE_BYTES)),
    ],
)
def test_structurally_different(left: Value, right: Value) -> None:
    assert not structurally_equal(left, right)
    assert not structurally_equal(right, left)
