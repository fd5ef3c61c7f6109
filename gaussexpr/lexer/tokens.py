"""
Token definitions and the positioned input cursor for the gaussexpr lexer.

This module defines:
- Token types recognised by the lexer primitives
- The fixed reserved-word table
- Operator and punctuation lexemes
- SourceLocation and the immutable Cursor threaded through the grammar

Author: xwest
"""

from enum import Enum, auto
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Any, FrozenSet, Dict, Optional, Tuple


class TokenType(Enum):
    """
    Enumeration of all token types produced by the lexer primitives.
    """

    # ========================================================================
    # Literals
    # ========================================================================
    INTEGER = auto()                # 42, 1_000
    IMAGINARY = auto()              # 5i, i, 1_0i

    # ========================================================================
    # Identifiers and Keywords
    # ========================================================================
    IDENTIFIER = auto()             # x, _tmp, f'
    IF = auto()                     # if
    THEN = auto()                   # then
    ELSE = auto()                   # else

    # ========================================================================
    # Operators
    # ========================================================================
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /
    MODULO = auto()                 # %
    EQUAL = auto()                  # ==
    NOT_EQUAL = auto()              # !=
    CARET = auto()                  # ^ (postfix conjugate)

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    PIPE = auto()                   # | (modulus delimiter)


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and AST spans.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


def _line_starts(source: str) -> Tuple[int, ...]:
    """Offsets at which each line of source begins."""
    starts = [0]
    index = source.find('\n')
    while index != -1:
        starts.append(index + 1)
        index = source.find('\n', index + 1)
    return tuple(starts)


@dataclass(frozen=True)
class Cursor:
    """
    Immutable position in the source text.

    Every lexer primitive and grammar rule takes a cursor and returns a new
    one, so backtracking is just reusing an older cursor. The line-start
    table is built once for a fresh source and shared by every cursor
    derived from it.
    """
    source: str
    offset: int = 0
    filename: str = "<string>"
    line_starts: Optional[Tuple[int, ...]] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if self.line_starts is None:
            object.__setattr__(self, 'line_starts', _line_starts(self.source))

    @property
    def remaining(self) -> str:
        return self.source[self.offset:]

    def preview(self, length: int = 10) -> str:
        """Up to length characters of input at the cursor."""
        return self.source[self.offset:self.offset + length]

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.source)

    @property
    def current_char(self) -> str:
        """Character under the cursor, '\\0' at end of input."""
        if self.at_end:
            return '\0'
        return self.source[self.offset]

    @property
    def location(self) -> SourceLocation:
        line = bisect_right(self.line_starts, self.offset)
        column = self.offset - self.line_starts[line - 1] + 1
        return SourceLocation(self.filename, line, column, self.offset)

    def startswith(self, text: str) -> bool:
        return self.source.startswith(text, self.offset)

    def advance(self, count: int = 1) -> 'Cursor':
        """Return a cursor moved forward by count characters (clamped to end)."""
        offset = min(self.offset + count, len(self.source))
        return Cursor(self.source, offset, self.filename, self.line_starts)

    def __repr__(self) -> str:
        return f"Cursor(offset={self.offset}, remaining={self.preview()!r})"


@dataclass(frozen=True)
class Token:
    """
    A lexeme recognised at a cursor position.

    Contains the token type, raw text, semantic value and source location.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # Parsed value (GaussianInt for literals, name for identifiers)
    location: SourceLocation

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def is_keyword(self) -> bool:
        return self.lexeme in KEYWORDS


# Words that can never be identifiers. The last four are held back for
# future grammar growth.
RESERVED_WORDS: FrozenSet[str] = frozenset({
    "if",
    "else",
    "then",
    "i",
    "let",
    "print",
    "println",
    "while",
    "fn",
    "mut",
    "break",
    "continue",
    "matrix",
    "return",
    "pi",
    "tau",
})

# Keywords the expression grammar itself consumes
KEYWORDS: Dict[str, TokenType] = {
    "if": TokenType.IF,
    "then": TokenType.THEN,
    "else": TokenType.ELSE,
}

OPERATORS: Dict[str, TokenType] = {
    # Arithmetic
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "%": TokenType.MODULO,

    # Comparison
    "==": TokenType.EQUAL,
    "!=": TokenType.NOT_EQUAL,

    # Postfix
    "^": TokenType.CARET,

    # Punctuation
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "|": TokenType.PIPE,
}
