"""
gaussexpr

The grammar layer of a small expression language over Gaussian integers.
Turns source text into an AST of arithmetic, comparison, conditional and
complex-number operations (negate, conjugate, modulus) for an evaluator to
consume.

Architecture:
    gaussexpr/
    ├── values.py        # GaussianInt value type
    ├── config.py        # Parser settings
    ├── lexer/           # Cursor, tokens and lexical primitives
    └── parser/          # AST, recursive descent parser, printer

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .values import GaussianInt
from .config import ParserConfig
from .lexer import Lexer, Cursor, RESERVED_WORDS, LexerError
from .parser import (
    Parser, parse_expression, parse_file, to_source, dump,
    ParseError, NestingTooDeepError,
    Expression, Value, Identifier, BinaryOp, UnaryOp, Conditional,
    BinaryOperator, UnaryOperator,
)

parse = parse_expression

__all__ = [
    # Core classes
    "Parser",
    "Lexer",
    "Cursor",
    "ParserConfig",
    "GaussianInt",

    # Functions
    "parse",
    "parse_expression",
    "parse_file",
    "to_source",
    "dump",

    # AST
    "Expression", "Value", "Identifier", "BinaryOp", "UnaryOp", "Conditional",
    "BinaryOperator", "UnaryOperator",

    # Errors
    "ParseError",
    "NestingTooDeepError",
    "LexerError",

    "RESERVED_WORDS",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
