# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Literal syntax: lexer, parser and display form of value trees."""

from contract_transcode.literal.display import format_value
from contract_transcode.literal.lexer import Token, TokenType, tokenize
from contract_transcode.literal.parser import parse_value

__all__ = [
    "Token",
    "TokenType",
    "format_value",
    "parse_value",
    "tokenize",
]
