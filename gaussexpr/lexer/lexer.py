"""
gaussexpr lexer primitives.

The grammar is scannerless: instead of producing a token stream up front,
the parser asks the lexer to recognise one lexeme at a given cursor and
gets back the advanced cursor plus a Token. A primitive that does not match
raises LexerError and leaves nothing consumed, which is what lets the parser
backtrack to the next alternative for free.

Literal rules worth knowing:
- a digit run may carry grouping underscores after any digit ("1_000",
  "1__0_"); they are stripped before conversion
- an imaginary literal is an optional digit run followed by 'i', and must be
  tried before the integer form or "5i" would lex as 5 with a stray 'i'
- literals must fit in a signed 64-bit integer

Author: xwest
"""

import re
from typing import Tuple

from ..values import GaussianInt, INT64_MAX
from .tokens import Token, TokenType, Cursor, RESERVED_WORDS, KEYWORDS, OPERATORS
from .errors import (
    LexerError, create_unexpected_text_error, create_invalid_identifier_error,
    create_invalid_number_error, create_reserved_word_error
)


class Lexer:
    """
    Lexical primitives for the expression grammar.

    Every method takes a Cursor and returns (new cursor, Token), or raises
    LexerError without consuming input.
    """

    def __init__(self):
        self._compile_patterns()

    def _compile_patterns(self):
        """Compile regex patterns used by the lexer."""

        # One or more ASCII digits, each optionally followed by underscores
        self.digit_run_pattern = re.compile(r'(?:[0-9]_*)+')

        # Identifier: ASCII letter or '_' then letters, digits, '_' or prime
        self.identifier_pattern = re.compile(r"[A-Za-z_][A-Za-z0-9_']*")

        # Whitespace between lexemes, newlines included
        self.whitespace_pattern = re.compile(r'[ \t\r\n]*')

    # ------------------------------------------------------------------
    # Whitespace and fixed lexemes
    # ------------------------------------------------------------------

    def skip_whitespace(self, cursor: Cursor) -> Cursor:
        """Consume any whitespace at the cursor. Never fails."""
        match = self.whitespace_pattern.match(cursor.source, cursor.offset)
        return cursor.advance(match.end() - cursor.offset)

    def tag(self, cursor: Cursor, lexeme: str) -> Tuple[Cursor, Token]:
        """Match an exact operator, delimiter or keyword at the cursor."""
        if not cursor.startswith(lexeme):
            raise create_unexpected_text_error(f"'{lexeme}'", cursor.preview(), cursor.location)

        token_type = OPERATORS.get(lexeme) or KEYWORDS[lexeme]
        token = Token(token_type, lexeme, None, cursor.location)
        return cursor.advance(len(lexeme)), token

    # ------------------------------------------------------------------
    # Numeric literals
    # ------------------------------------------------------------------

    def digit_run(self, cursor: Cursor) -> Tuple[Cursor, str]:
        """Match a digit run, returning its raw text (underscores included)."""
        match = self.digit_run_pattern.match(cursor.source, cursor.offset)
        if not match:
            raise create_unexpected_text_error("digit", cursor.preview(), cursor.location)
        lexeme = match.group(0)
        return cursor.advance(len(lexeme)), lexeme

    def _convert(self, lexeme: str, cursor: Cursor) -> int:
        """Convert a digit run to an int, stripping grouping underscores."""
        value = int(lexeme.replace('_', ''))
        if value > INT64_MAX:
            raise create_invalid_number_error(
                lexeme,
                cursor.location,
                "Literal does not fit in a signed 64-bit integer"
            )
        return value

    def integer_literal(self, cursor: Cursor) -> Tuple[Cursor, Token]:
        """Match an integer literal, producing the value (n, 0)."""
        rest, lexeme = self.digit_run(cursor)
        value = GaussianInt.make(self._convert(lexeme, cursor), 0)
        return rest, Token(TokenType.INTEGER, lexeme, value, cursor.location)

    def imaginary_literal(self, cursor: Cursor) -> Tuple[Cursor, Token]:
        """Match an optional digit run followed by 'i'; bare 'i' is (0, 1)."""
        try:
            rest, digits = self.digit_run(cursor)
        except LexerError:
            rest, digits = cursor, ""

        if rest.current_char != 'i':
            raise create_unexpected_text_error("imaginary literal", cursor.preview(), cursor.location)

        if digits:
            value = GaussianInt.make(0, self._convert(digits, cursor))
        else:
            value = GaussianInt.make(0, 1)

        return rest.advance(), Token(TokenType.IMAGINARY, digits + 'i', value, cursor.location)

    def numeric_literal(self, cursor: Cursor) -> Tuple[Cursor, Token]:
        """Match an imaginary literal, falling back to an integer literal."""
        try:
            return self.imaginary_literal(cursor)
        except LexerError:
            return self.integer_literal(cursor)

    # ------------------------------------------------------------------
    # Identifiers
    # ------------------------------------------------------------------

    def identifier(self, cursor: Cursor) -> Tuple[Cursor, Token]:
        """Match an identifier that is not a reserved word."""
        match = self.identifier_pattern.match(cursor.source, cursor.offset)
        if not match:
            raise create_invalid_identifier_error(cursor.preview(), cursor.location)

        name = match.group(0)
        if name in RESERVED_WORDS:
            raise create_reserved_word_error(name, cursor.location)

        return cursor.advance(len(name)), Token(TokenType.IDENTIFIER, name, name, cursor.location)


def is_reserved(word: str) -> bool:
    """Check whether a word is in the reserved-word table."""
    return word in RESERVED_WORDS
