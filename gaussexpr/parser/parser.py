"""
gaussexpr recursive descent parser.

Grammar, loosest binding first:

    expression     := ws* equality ws*
    equality       := additive ( ("==" | "!=") additive )*
    additive       := multiplicative ( ("+" | "-") multiplicative )*
    multiplicative := factor ( ("*" | "/" | "%") factor )*
    factor         := atom ("^")*
    atom           := identifier | conditional | numeric-literal
                    | "|" expression "|" | "-" factor | "(" expression ")"
    conditional    := "if" expression "then" expression "else" expression

Atoms are tried in the order above at the same cursor; a failing alternative
is abandoned and the next one tried. Binary levels fold left, so 1-2-3 is
(1-2)-3. The postfix conjugate mark would be left recursive as written in
most grammars (factor := factor "^"), so it is parsed as one atom followed by
a loop that wraps the accumulator once per mark.

Author: xwest
"""

import dataclasses
import logging
from typing import Callable, Dict, List, Optional, Tuple

from ..config import ParserConfig
from ..lexer.lexer import Lexer
from ..lexer.errors import LexerError
from ..lexer.tokens import Cursor
from .ast_nodes import (
    Expression, Value, Identifier, BinaryOp, UnaryOp, Conditional,
    BinaryOperator, UnaryOperator, SourceSpan
)
from .errors import (
    NestingTooDeepError, RECOVERABLE_ERRORS,
    create_no_alternative_error, create_missing_token_error, create_trailing_input_error
)

logger = logging.getLogger(__name__)

ParseResult = Tuple[Cursor, Expression]


class Parser:
    """
    Recursive descent parser for Gaussian-integer expressions.

    A Parser holds only configuration and the current nesting depth, so one
    instance can parse many inputs, one at a time.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        """
        Initialize the parser.

        Args:
            config: Parser settings; defaults to ParserConfig()
        """
        self.config = config or ParserConfig()
        self.lexer = Lexer()
        self.depth = 0

        self._init_parsing_tables()

    def _init_parsing_tables(self):
        """Initialize the atom alternatives and per-level operator tables."""

        # Tried in order at the same position
        self.atom_parsers: List[Tuple[str, Callable[[Cursor], ParseResult]]] = [
            ("identifier", self._parse_identifier),
            ("conditional", self._parse_conditional),
            ("numeric literal", self._parse_numeric_literal),
            ("modulus", self._parse_modulus),
            ("negation", self._parse_negation),
            ("parenthesized expression", self._parse_grouping),
        ]

        self.multiplicative_operators: Dict[str, BinaryOperator] = {
            "*": BinaryOperator.TIMES,
            "/": BinaryOperator.DIVIDE,
            "%": BinaryOperator.REMAINDER,
        }

        self.additive_operators: Dict[str, BinaryOperator] = {
            "+": BinaryOperator.PLUS,
            "-": BinaryOperator.MINUS,
        }

        self.equality_operators: Dict[str, BinaryOperator] = {
            "==": BinaryOperator.EQUALS,
            "!=": BinaryOperator.NOT_EQUALS,
        }

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def parse(self, source: str) -> Expression:
        """
        Parse a complete expression; nothing but whitespace may follow it.

        Raises:
            ParseError: If the input is not exactly one expression
        """
        cursor = Cursor(source, 0, self.config.filename)
        self.depth = 0
        logger.debug("parsing %d characters from %s", len(source), self.config.filename)

        rest, node = self.expression(cursor)
        if not rest.at_end:
            raise create_trailing_input_error(rest.preview(), rest.location)
        return node

    def expression(self, cursor: Cursor) -> ParseResult:
        """
        Parse one expression at the cursor, skipping surrounding whitespace.

        Does not require the input to be fully consumed: the returned cursor
        points at whatever follows the expression.

        Raises:
            ParseError: If no expression can be parsed here
            NestingTooDeepError: If the configured depth limit is exceeded
        """
        self._enter(cursor)
        try:
            start = self.lexer.skip_whitespace(cursor)
            rest, node = self._parse_equality(start)
            return self.lexer.skip_whitespace(rest), node
        finally:
            self.depth -= 1

    def _enter(self, cursor: Cursor):
        """Count one level of nesting, failing hard past the limit."""
        self.depth += 1
        max_depth = self.config.max_depth
        if max_depth is not None and self.depth > max_depth:
            self.depth -= 1
            logger.warning("nesting depth limit %d exceeded at offset %d", max_depth, cursor.offset)
            raise NestingTooDeepError(max_depth, cursor.location)

    # ------------------------------------------------------------------
    # Precedence levels
    # ------------------------------------------------------------------

    def _parse_equality(self, cursor: Cursor) -> ParseResult:
        return self._parse_binary_level(cursor, self.equality_operators, self._parse_additive)

    def _parse_additive(self, cursor: Cursor) -> ParseResult:
        return self._parse_binary_level(cursor, self.additive_operators, self._parse_multiplicative)

    def _parse_multiplicative(self, cursor: Cursor) -> ParseResult:
        return self._parse_binary_level(cursor, self.multiplicative_operators, self._parse_factor)

    def _parse_binary_level(self, cursor: Cursor, operators: Dict[str, BinaryOperator],
                            parse_operand: Callable[[Cursor], ParseResult]) -> ParseResult:
        """
        Parse operand (operator operand)* and fold it into a left-leaning tree.

        An operator whose right operand fails to parse is left unconsumed.
        """
        rest, left = parse_operand(cursor)

        while True:
            matched = self._match_operator(rest, operators)
            if matched is None:
                break
            after_operator, operator = matched

            try:
                after_operand, right = parse_operand(after_operator)
            except NestingTooDeepError:
                raise
            except RECOVERABLE_ERRORS:
                break

            left = BinaryOp(operator, left, right, self._span(cursor, after_operand))
            rest = after_operand

        return rest, left

    def _match_operator(self, cursor: Cursor,
                        operators: Dict[str, BinaryOperator]) -> Optional[Tuple[Cursor, BinaryOperator]]:
        for lexeme, operator in operators.items():
            try:
                rest, _ = self.lexer.tag(cursor, lexeme)
            except LexerError:
                continue
            return rest, operator
        return None

    # ------------------------------------------------------------------
    # Factor: atom followed by postfix conjugate marks
    # ------------------------------------------------------------------

    def _parse_factor(self, cursor: Cursor) -> ParseResult:
        start = self.lexer.skip_whitespace(cursor)
        rest, node = self._parse_atom(start)

        while rest.startswith("^"):
            rest, _ = self.lexer.tag(rest, "^")
            node = UnaryOp(UnaryOperator.CONJUGATE, node, self._span(start, rest))
            rest = self.lexer.skip_whitespace(rest)

        return rest, node

    # ------------------------------------------------------------------
    # Atoms
    # ------------------------------------------------------------------

    def _parse_atom(self, cursor: Cursor) -> ParseResult:
        """Try each atom alternative in turn at the same position."""
        start = self.lexer.skip_whitespace(cursor)
        furthest: Optional[Exception] = None

        for name, parse_alternative in self.atom_parsers:
            try:
                rest, node = parse_alternative(start)
            except NestingTooDeepError:
                raise
            except RECOVERABLE_ERRORS as e:
                logger.debug("%s did not match at offset %d", name, start.offset)
                if furthest is None or e.location.offset > furthest.location.offset:
                    furthest = e
                continue
            return self.lexer.skip_whitespace(rest), node

        raise create_no_alternative_error("atom", start.location, furthest)

    def _parse_identifier(self, cursor: Cursor) -> ParseResult:
        rest, token = self.lexer.identifier(cursor)
        return rest, Identifier(token.value, self._span(cursor, rest))

    def _parse_numeric_literal(self, cursor: Cursor) -> ParseResult:
        rest, token = self.lexer.numeric_literal(cursor)
        return rest, Value(token.value, self._span(cursor, rest))

    def _parse_conditional(self, cursor: Cursor) -> ParseResult:
        """if <expr> then <expr> else <expr>"""
        rest, _ = self.lexer.tag(cursor, "if")
        rest, condition = self.expression(rest)
        rest = self._expect(rest, "then", "after the condition of 'if'")
        rest, then_branch = self.expression(rest)
        rest = self._expect(rest, "else", "after the 'then' branch")
        rest, else_branch = self.expression(rest)
        return rest, Conditional(condition, then_branch, else_branch, self._span(cursor, rest))

    def _parse_modulus(self, cursor: Cursor) -> ParseResult:
        """| <expr> |"""
        rest, _ = self.lexer.tag(cursor, "|")
        rest, operand = self.expression(rest)
        rest = self._expect(rest, "|", "to close the modulus")
        return rest, UnaryOp(UnaryOperator.MODULUS, operand, self._span(cursor, rest))

    def _parse_negation(self, cursor: Cursor) -> ParseResult:
        """- <factor>, binding tighter than any binary operator."""
        rest, _ = self.lexer.tag(cursor, "-")
        self._enter(rest)
        try:
            rest, operand = self._parse_factor(rest)
        finally:
            self.depth -= 1
        return rest, UnaryOp(UnaryOperator.NEGATE, operand, self._span(cursor, rest))

    def _parse_grouping(self, cursor: Cursor) -> ParseResult:
        """( <expr> ), returning the inner expression unwrapped."""
        rest, _ = self.lexer.tag(cursor, "(")
        rest, node = self.expression(rest)
        rest = self._expect(rest, ")", "after expression")
        return rest, node

    # ------------------------------------------------------------------
    # Utility methods
    # ------------------------------------------------------------------

    def _expect(self, cursor: Cursor, lexeme: str, context: str) -> Cursor:
        """Consume a required lexeme or raise a missing-token error."""
        try:
            rest, _ = self.lexer.tag(cursor, lexeme)
        except LexerError:
            raise create_missing_token_error(lexeme, context, cursor.location) from None
        return rest

    def _span(self, start: Cursor, end: Cursor) -> SourceSpan:
        return SourceSpan(start.location, end.location)


def parse_expression(source: str, filename: Optional[str] = None,
                     config: Optional[ParserConfig] = None) -> Expression:
    """
    Convenience function to parse a source string holding one expression.

    Args:
        source: Expression source text
        filename: Filename for error reporting (overrides config.filename)
        config: Optional parser settings

    Returns:
        Expression AST

    Raises:
        ParseError: If parsing fails or input remains after the expression
    """
    config = config or ParserConfig()
    if filename is not None:
        config = dataclasses.replace(config, filename=filename)
    return Parser(config).parse(source)


def parse_file(filepath: str, config: Optional[ParserConfig] = None) -> Expression:
    """
    Convenience function to parse an expression stored in a file.

    Raises:
        ParseError: If parsing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse_expression(source, filepath, config)
