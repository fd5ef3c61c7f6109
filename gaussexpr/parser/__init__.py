"""
gaussexpr Parser Package

Recursive descent parser for the Gaussian-integer expression language.
Produces structurally comparable ASTs with source spans.

Key Features:
- Three left-associative binary levels (equality, additive, multiplicative)
- Postfix conjugate marks folded without left recursion
- Backtracking between atom alternatives at the same position
- Configurable nesting-depth limit

Author: xwest
"""

from .ast_nodes import *
from .parser import Parser, parse_expression, parse_file
from .printer import to_source, dump
from .errors import ParseError, NestingTooDeepError

__all__ = [
    # Core parser
    "Parser", "parse_expression", "parse_file",

    # AST nodes
    "Expression", "Value", "Identifier", "BinaryOp", "UnaryOp", "Conditional",
    "BinaryOperator", "UnaryOperator", "SourceSpan", "ASTVisitor", "ASTNodeType",

    # Printing
    "to_source", "dump",

    # Error handling
    "ParseError", "NestingTooDeepError",
]
