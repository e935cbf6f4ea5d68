# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the literal parser."""

import pytest

from contract_transcode.errors import ParseError
from contract_transcode.literal import parse_value
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
)

# ###############
# Scalars
# ###############


@pytest.mark.parametrize(
    "source, expected",
    [
        ("0", UInt(0)),
        ("42", UInt(42)),
        ("1_000", UInt(1000)),
        ("-42", Int(-42)),
        ("+5", Int(5)),
        ("340282366920938463463374607431768211455", UInt(2**128 - 1)),
        ("true", Bool(True)),
        ("false", Bool(False)),
        ('"text"', Str("text")),
        ("()", Unit()),
    ],
)
def test_scalar_literals(source: str, expected: Value) -> None:
    assert parse_value(source) == expected


@pytest.mark.parametrize(
    "source, expected",
    [
        ("0x", Bytes(b"")),
        ("0x00ff", Bytes(b"\x00\xff")),
        ("0xDEADbeef", Bytes(bytes.fromhex("deadbeef"))),
        ("0xfff", UInt(0xFFF)),
        ("-0x10", Int(-16)),
        ("+0xff", Int(255)),
    ],
)
def test_hex_literals(source: str, expected: Value) -> None:
    assert parse_value(source) == expected


def test_signed_hex_without_digits_is_rejected() -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_value("-0x")
    assert "hex digits" in exc_info.value.expected


# ###############
# Containers
# ###############


def test_tuple() -> None:
    assert parse_value('(1, "a", true)') == Tuple((UInt(1), Str("a"), Bool(True)))


def test_single_element_tuple() -> None:
    assert parse_value("(7)") == Tuple((UInt(7),))


def test_sequence() -> None:
    assert parse_value("[1, 2, 3]") == Seq((UInt(1), UInt(2), UInt(3)))


def test_empty_sequence() -> None:
    assert parse_value("[]") == Seq(())


def test_map_with_identifier_string_and_index_keys() -> None:
    value = parse_value('{x: 1, "two words": 2, 3: 4}')
    assert value == Map((("x", UInt(1)), ("two words", UInt(2)), (3, UInt(4))))


def test_empty_map() -> None:
    assert parse_value("{}") == Map(())


@pytest.mark.parametrize("source", ["[1, 2,]", "(1, 2,)", "{a: 1,}", "Some(1,)", "P{a: 1,}"])
def test_trailing_commas_are_accepted(source: str) -> None:
    parse_value(source)


def test_whitespace_is_insignificant() -> None:
    assert parse_value(" [ 1 ,\n 2 ] ") == parse_value("[1,2]")


# ###############
# Variants
# ###############


def test_fieldless_variant() -> None:
    assert parse_value("None") == Variant("None", Tuple())


def test_tuple_variant() -> None:
    assert parse_value("Some(5)") == Variant("Some", Tuple((UInt(5),)))


def test_tuple_variant_without_fields() -> None:
    assert parse_value("Empty()") == Variant("Empty", Tuple())


def test_struct_variant() -> None:
    value = parse_value("Point { x: 1, y: -2 }")
    assert value == Variant("Point", Map((("x", UInt(1)), ("y", Int(-2)))))


def test_deeply_nested_literal() -> None:
    value = parse_value('Some({origin: (1, 2), shapes: [Circle(3), Rect { w: 4, h: 5 }, Empty], tag: "t"})')
    assert value == Variant(
        "Some",
        Tuple(
            (
                Map(
                    (
                        ("origin", Tuple((UInt(1), UInt(2)))),
                        (
                            "shapes",
                            Seq(
                                (
                                    Variant("Circle", Tuple((UInt(3),))),
                                    Variant("Rect", Map((("w", UInt(4)), ("h", UInt(5))))),
                                    Variant("Empty", Tuple()),
                                )
                            ),
                        ),
                        ("tag", Str("t")),
                    )
                ),
            )
        ),
    )


# ###############
# Errors
# ###############


@pytest.mark.parametrize(
    "source, position, found",
    [
        ("", 0, ""),
        ("[1, 2", 5, ""),
        ("[1 2]", 3, "2"),
        ("{x 1}", 3, "1"),
        ("{-1: 2}", 1, "-1"),
        ("1 2", 2, "2"),
        ("Some(1", 6, ""),
        (")", 0, ")"),
    ],
)
def test_parse_errors_report_position_and_found(source: str, position: int, found: str) -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_value(source)
    assert exc_info.value.position == position
    assert exc_info.value.found == found


def test_missing_comma_names_expected_closer() -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_value("[1 2]")
    assert exc_info.value.expected == "',' or ']'"


def test_error_position_is_utf8_byte_offset() -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_value('["é" "x"]')
    assert exc_info.value.position == 6


def test_source_label_in_message() -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_value("[", source_label="value")
    assert str(exc_info.value) == "value: offset 1: expected a value, found end of input"


def test_excessive_nesting_is_a_parse_error() -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_value("[" * 5000 + "]" * 5000)
    assert exc_info.value.expected == "shallower nesting"


def test_integer_beyond_interpreter_digit_limit_is_a_parse_error() -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_value("1" * 5000)
    assert exc_info.value.position == 0
    assert "digits" in exc_info.value.expected


# ###############
# Bare literals
# ###############


def test_address_parses_as_string() -> None:
    address = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"
    assert parse_value(address) == Str(address)
    assert parse_value(f"{{to: {address}}}") == Map((("to", Str(address)),))
