# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for value literals.

Converts the token stream produced by the lexer into a generic value tree.
The grammar is intentionally small::

    value   := integer | hex | string | bare | "true" | "false"
             | "(" ")" | "(" value ("," value)* ","? ")"
             | "[" (value ("," value)* ","?)? "]"
             | "{" (entry ("," entry)* ","?)? "}"
             | IDENT [ "(" values? ")" | "{" entries? "}" ]
    entry   := (IDENT | string | decimal) ":" value

A bare literal is an unquoted alphanumeric word such as an SS58 address; it
parses as a string.
"""

import sys

from contract_transcode.errors import ParseError
from contract_transcode.literal.lexer import Token, TokenType, tokenize
from contract_transcode.model.values import (
    Bool,
    Bytes,
    Int,
    Map,
    MapKey,
    Seq,
    Str,
    Tuple,
    UInt,
    Unit,
    Value,
    Variant,
)

# ###############
# Public Interface
# ###############


def parse_value(source: str, source_label: str | None = None) -> Value:
    """Parse a literal into a value tree.

    Args:
        source: The literal text, e.g. ``Some({x: 1, y: 0x00ff})``.
        source_label: Optional label included in error messages, typically the
            name of the argument the literal was supplied for.

    Returns:
        The parsed value.

    Raises:
        ParseError: If the literal is malformed, nested deeper than the
            interpreter stack allows or followed by extra input.
    """
    parser = _Parser(tokenize(source, source_label), source_label)
    try:
        return parser.parse()
    except RecursionError:
        raise parser.nesting_error() from None


# ################
# Implementation
# ################

_CLOSERS: dict[TokenType, str] = {
    TokenType.RPAREN: "')'",
    TokenType.RBRACKET: "']'",
    TokenType.RBRACE: "'}'",
}


class _Parser:
    """Recursive-descent parser for literal token streams."""

    def __init__(self, tokens: list[Token], source_label: str | None) -> None:
        self._tokens = tokens
        self._label = source_label
        self._pos = 0

    def parse(self) -> Value:
        """Parse exactly one value followed by end of input."""
        value = self._parse_value()
        if not self._check(TokenType.EOF):
            raise self._error("end of input")
        return value

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        """Consume and return the current token, stopping at EOF."""
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def _check(self, *types: TokenType) -> bool:
        return self._current().type in types

    def _expect(self, token_type: TokenType, description: str) -> Token:
        """Consume the current token if it has *token_type*, else raise ParseError."""
        if not self._check(token_type):
            raise self._error(description)
        return self._advance()

    def _error(self, expected: str, tok: Token | None = None) -> ParseError:
        tok = tok or self._current()
        return ParseError(tok.offset, expected, tok.text, self._label)

    def nesting_error(self) -> ParseError:
        """Error for input nested too deeply, located at the innermost token reached."""
        return self._error("shallower nesting")

    def _decimal(self, tok: Token) -> int:
        try:
            return int(tok.value)
        except ValueError:
            # Only the interpreter's limit on decimal digits can reject lexed digits.
            raise self._error(f"an integer of at most {sys.get_int_max_str_digits()} digits", tok) from None

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _parse_value(self) -> Value:
        tok = self._current()
        if tok.type == TokenType.INTEGER:
            self._advance()
            return _integer(self._decimal(tok), signed=tok.value.startswith(("+", "-")))
        if tok.type == TokenType.HEX:
            self._advance()
            return self._hex_value(tok)
        if tok.type in (TokenType.STRING, TokenType.BARE):
            self._advance()
            return Str(tok.value)
        if tok.type == TokenType.TRUE:
            self._advance()
            return Bool(True)
        if tok.type == TokenType.FALSE:
            self._advance()
            return Bool(False)
        if tok.type == TokenType.LPAREN:
            self._advance()
            if self._check(TokenType.RPAREN):
                self._advance()
                return Unit()
            return Tuple(tuple(self._parse_items(TokenType.RPAREN)))
        if tok.type == TokenType.LBRACKET:
            self._advance()
            return Seq(tuple(self._parse_items(TokenType.RBRACKET)))
        if tok.type == TokenType.LBRACE:
            self._advance()
            return Map(tuple(self._parse_entries()))
        if tok.type == TokenType.IDENTIFIER:
            return self._parse_variant()
        raise self._error("a value")

    def _hex_value(self, tok: Token) -> Value:
        """A ``0x`` literal: bytes when unsigned with an even digit count."""
        signed = tok.value.startswith(("+", "-"))
        digits = tok.value.lstrip("+-")
        if not signed and len(digits) % 2 == 0:
            return Bytes(bytes.fromhex(digits))
        if not digits:
            raise self._error("hex digits after '0x'", tok)
        number = int(digits, 16)
        return _integer(-number if tok.value[0] == "-" else number, signed=signed)

    def _parse_variant(self) -> Variant:
        """Parse: IDENT | IDENT ( values ) | IDENT { entries }"""
        name = self._advance().value
        if self._check(TokenType.LPAREN):
            self._advance()
            if self._check(TokenType.RPAREN):
                self._advance()
                return Variant(name, Tuple())
            return Variant(name, Tuple(tuple(self._parse_items(TokenType.RPAREN))))
        if self._check(TokenType.LBRACE):
            self._advance()
            return Variant(name, Map(tuple(self._parse_entries())))
        return Variant(name)

    def _parse_items(self, closer: TokenType) -> list[Value]:
        """Parse comma-separated values up to and including *closer*.

        The opening bracket has already been consumed. A trailing comma is
        accepted.
        """
        items: list[Value] = []
        while not self._check(closer):
            items.append(self._parse_value())
            if self._check(TokenType.COMMA):
                self._advance()
            elif not self._check(closer):
                raise self._error(f"',' or {_CLOSERS[closer]}")
        self._advance()
        return items

    def _parse_entries(self) -> list[tuple[MapKey, Value]]:
        """Parse ``key: value`` entries up to and including the closing brace."""
        entries: list[tuple[MapKey, Value]] = []
        while not self._check(TokenType.RBRACE):
            key = self._parse_key()
            self._expect(TokenType.COLON, "':'")
            entries.append((key, self._parse_value()))
            if self._check(TokenType.COMMA):
                self._advance()
            elif not self._check(TokenType.RBRACE):
                raise self._error("',' or '}'")
        self._advance()
        return entries

    def _parse_key(self) -> MapKey:
        tok = self._current()
        if tok.type in (TokenType.IDENTIFIER, TokenType.STRING, TokenType.TRUE, TokenType.FALSE):
            self._advance()
            return tok.value
        if tok.type == TokenType.INTEGER and not tok.value.startswith(("+", "-")):
            self._advance()
            return self._decimal(tok)
        raise self._error("a field name or index")


def _integer(number: int, *, signed: bool) -> Value:
    return Int(number) if signed else UInt(number)
