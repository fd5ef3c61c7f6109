"""
gaussexpr Lexer Package

Lexical primitives for the Gaussian-integer expression grammar. The grammar
is scannerless: the parser drives these primitives one lexeme at a time over
an immutable Cursor.

Key Features:
- Integer and imaginary literals with digit grouping (1_000, 5i, i)
- Identifiers with primes (f', x'') and a fixed reserved-word table
- Source location tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, Cursor, RESERVED_WORDS
from .lexer import Lexer, is_reserved
from .errors import LexerError, Diagnostic

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "Cursor",
    "RESERVED_WORDS",
    "is_reserved",
    "LexerError",
    "Diagnostic",
]
