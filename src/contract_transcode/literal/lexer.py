# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for value literals.

Converts raw literal text such as ``Some({x: 1, y: [0x00ff, "a"]})`` into a
sequence of tokens for the literal parser.
"""

import enum
import string
from dataclasses import dataclass

from contract_transcode.errors import ParseError

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the literal lexer."""

    # Keywords
    TRUE = "true"
    FALSE = "false"

    # Symbols
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    LBRACE = "{"
    RBRACE = "}"
    COMMA = ","
    COLON = ":"

    # Literals
    INTEGER = "INTEGER"
    HEX = "HEX"
    STRING = "STRING"
    BARE = "BARE"

    # Identifiers
    IDENTIFIER = "IDENTIFIER"

    # End of input
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with its location.

    Attributes:
        type: The kind of token.
        value: Normalized token text. For INTEGER tokens the decimal digits
            with an optional sign and without ``_`` separators; for HEX tokens
            the hex digits with an optional sign and without ``0x``; for
            STRING tokens the unescaped content; for BARE tokens (unquoted
            alphanumeric literals such as SS58 addresses) the text itself.
        offset: UTF-8 byte offset of the first character of the token.
        text: The raw source text of the token.
    """

    type: TokenType
    value: str
    offset: int
    text: str


def tokenize(source: str, source_label: str | None = None) -> list[Token]:
    """Tokenize a literal into a list of tokens ending with a single EOF token.

    Args:
        source: The literal text.
        source_label: Optional label (e.g. an argument name) for error messages.

    Raises:
        ParseError: On unexpected characters, malformed numbers, invalid
            escapes or unterminated strings.
    """
    return _Lexer(source, source_label).tokenize()


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
}

_SIMPLE_ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_DIGITS = frozenset("0123456789")

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

_ASCII_ALNUM = frozenset(string.ascii_letters + string.digits)

# Longer than any u128 in decimal, so a bare literal never shadows an integer.
_BARE_LITERAL_MIN_LENGTH = 40


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, source: str, source_label: str | None) -> None:
        self._source = source
        self._label = source_label
        self._pos = 0
        self._tokens: list[Token] = []
        # Byte offset of the character at _mark_index.
        self._mark_index = 0
        self._mark_bytes = 0

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens including the terminal EOF."""
        while True:
            self._skip_whitespace()
            if self._pos >= len(self._source):
                break
            self._scan_token()
        self._tokens.append(Token(TokenType.EOF, "", self._byte_offset(self._pos), ""))
        return self._tokens

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self, ahead: int = 1) -> str:
        """Return the character *ahead* positions on, or '' past the end."""
        if self._pos + ahead < len(self._source):
            return self._source[self._pos + ahead]
        return ""

    def _error(self, expected: str, index: int | None = None, found: str | None = None) -> ParseError:
        index = self._pos if index is None else index
        if found is None:
            found = self._source[index : index + 1]
        return ParseError(self._byte_offset(index), expected, found, self._label)

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._source) and self._source[self._pos].isspace():
            self._pos += 1

    def _emit(self, token_type: TokenType, value: str, start: int) -> None:
        text = self._source[start : self._pos]
        self._tokens.append(Token(token_type, value, self._byte_offset(start), text))

    def _byte_offset(self, index: int) -> int:
        """Convert a character index to a UTF-8 byte offset.

        Tokens are emitted left to right, so counting on from the previous
        index keeps lexing linear in the input length.
        """
        if index < self._mark_index:
            self._mark_index, self._mark_bytes = 0, 0
        chunk = self._source[self._mark_index : index]
        self._mark_bytes += len(chunk.encode("utf-8", errors="surrogatepass"))
        self._mark_index = index
        return self._mark_bytes

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()
        start = self._pos

        if ch in _SINGLE_CHAR_TOKENS:
            self._pos += 1
            self._emit(_SINGLE_CHAR_TOKENS[ch], ch, start)
        elif ch in "+-":
            if self._peek() not in _DIGITS:
                raise self._error("a digit after the sign", self._pos + 1, self._peek())
            self._pos += 1
            self._scan_number(start, sign=ch)
        elif ch == '"':
            self._scan_string(start)
        elif ch in _DIGITS or ch.isalpha() or ch == "_":
            self._scan_word(start)
        else:
            raise self._error("a value")

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_word(self, start: int) -> None:
        """Scan a bare literal, an unsigned number, or an identifier or keyword."""
        end = start
        while end < len(self._source) and self._source[end] in _ASCII_ALNUM:
            end += 1
        word = self._source[start:end]
        following = self._source[end : end + 1]
        if _is_bare_literal(word) and not (following.isalnum() or following == "_"):
            self._pos = end
            self._emit(TokenType.BARE, word, start)
        elif self._current() in _DIGITS:
            self._scan_number(start, sign="")
        else:
            self._scan_identifier_or_keyword(start)

    def _scan_number(self, start: int, sign: str) -> None:
        """Scan a decimal or ``0x`` hexadecimal number.

        Decimal numbers may use ``_`` between digits. A hex literal may have no
        digits at all (``0x`` is the empty byte string).
        """
        if self._current() == "0" and self._peek() in ("x", "X"):
            self._pos += 2
            digits_start = self._pos
            while self._current() in _HEX_DIGITS and self._current():
                self._pos += 1
            self._check_number_end()
            self._emit(TokenType.HEX, sign + self._source[digits_start : self._pos], start)
            return

        digits: list[str] = []
        while self._pos < len(self._source):
            ch = self._current()
            if ch in _DIGITS:
                digits.append(ch)
                self._pos += 1
            elif ch == "_" and self._peek() in _DIGITS:
                self._pos += 1
            else:
                break
        self._check_number_end()
        self._emit(TokenType.INTEGER, sign + "".join(digits), start)

    def _check_number_end(self) -> None:
        ch = self._current()
        if ch and (ch.isalnum() or ch == "_"):
            raise self._error("end of number")

    def _scan_string(self, start: int) -> None:
        """Scan a double-quoted string literal with JSON escape sequences."""
        self._pos += 1  # opening "
        chars: list[str] = []
        while self._pos < len(self._source):
            ch = self._current()
            if ch == '"':
                self._pos += 1  # closing "
                self._emit(TokenType.STRING, "".join(chars), start)
                return
            if ord(ch) < 0x20:
                raise self._error("a printable character or escape sequence in string")
            if ch == "\\":
                chars.append(self._scan_escape())
            else:
                chars.append(ch)
                self._pos += 1
        raise self._error('closing \'"\' of string literal', self._pos, "")

    def _scan_escape(self) -> str:
        """Consume one escape sequence starting at the backslash."""
        escape_start = self._pos
        esc = self._peek()
        if esc in _SIMPLE_ESCAPES:
            self._pos += 2
            return _SIMPLE_ESCAPES[esc]
        if esc != "u":
            raise self._error("a valid escape sequence", escape_start, "\\" + esc)
        code = self._scan_unicode_escape()
        if 0xD800 <= code <= 0xDBFF:
            if self._current() != "\\" or self._peek() != "u":
                raise self._error(
                    "a low surrogate escape after high surrogate", escape_start, self._source[escape_start : self._pos]
                )
            low = self._scan_unicode_escape()
            if not 0xDC00 <= low <= 0xDFFF:
                raise self._error(
                    "a low surrogate escape after high surrogate", escape_start, self._source[escape_start : self._pos]
                )
            code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
        elif 0xDC00 <= code <= 0xDFFF:
            raise self._error(
                "a high surrogate before low surrogate", escape_start, self._source[escape_start : self._pos]
            )
        return chr(code)

    def _scan_unicode_escape(self) -> int:
        """Consume ``\\uXXXX`` and return the code unit."""
        start = self._pos
        digits = self._source[self._pos + 2 : self._pos + 6]
        if len(digits) != 4 or not all(d in _HEX_DIGITS for d in digits):
            raise self._error("four hex digits after '\\u'", start, self._source[start : start + 6])
        self._pos += 6
        return int(digits, 16)

    def _scan_identifier_or_keyword(self, start: int) -> None:
        """Scan an identifier and map it to a keyword token type if applicable."""
        while self._pos < len(self._source) and (self._current().isalnum() or self._current() == "_"):
            self._pos += 1
        value = self._source[start : self._pos]
        self._emit(_KEYWORDS.get(value, TokenType.IDENTIFIER), value, start)


def _is_bare_literal(word: str) -> bool:
    """Whether an ASCII word is an unquoted literal such as an SS58 address.

    Bare literals mix letters and digits and are too long to be an integer.
    They never start with ``0``, so ``0x`` byte strings stay hex.
    """
    return (
        len(word) >= _BARE_LITERAL_MIN_LENGTH
        and word[0] != "0"
        and any(ch in _DIGITS for ch in word)
        and not word.isdigit()
    )
