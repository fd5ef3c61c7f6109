"""
Test suite for the gaussexpr parser.

Tests cover:
- Literals, identifiers and every atom form
- Precedence and left associativity of the binary levels
- Postfix conjugate folding
- Whitespace handling and the partial-consumption entry point
- Error reporting and the nesting-depth limit

Author: xwest
"""

import unittest
import os
import sys
import tempfile
import time

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from gaussexpr.config import ParserConfig
from gaussexpr.values import GaussianInt
from gaussexpr.lexer.tokens import Cursor, RESERVED_WORDS
from gaussexpr.parser.parser import Parser, parse_expression, parse_file
from gaussexpr.parser.errors import ParseError, NestingTooDeepError
from gaussexpr.parser.ast_nodes import (
    Value, Identifier, BinaryOp, UnaryOp, Conditional,
    BinaryOperator, UnaryOperator, integer, imaginary
)

PLUS = BinaryOperator.PLUS
MINUS = BinaryOperator.MINUS
TIMES = BinaryOperator.TIMES
DIVIDE = BinaryOperator.DIVIDE
REMAINDER = BinaryOperator.REMAINDER
EQUALS = BinaryOperator.EQUALS
NOT_EQUALS = BinaryOperator.NOT_EQUALS
NEGATE = UnaryOperator.NEGATE
CONJUGATE = UnaryOperator.CONJUGATE
MODULUS = UnaryOperator.MODULUS


def var(name):
    return Identifier(name)


class TestAtoms(unittest.TestCase):
    """Literals, identifiers and the unary/delimited atom forms."""

    def _parse(self, source):
        return parse_expression(source)

    def test_integer(self):
        self.assertEqual(self._parse("42"), Value(GaussianInt(42, 0)))

    def test_imaginary(self):
        self.assertEqual(self._parse("42i"), Value(GaussianInt(0, 42)))

    def test_unit_imaginary(self):
        self.assertEqual(self._parse("i"), Value(GaussianInt(0, 1)))

    def test_grouped_digits(self):
        self.assertEqual(
            self._parse("1_000 + 2_0i"),
            BinaryOp(PLUS, integer(1000), imaginary(20))
        )

    def test_identifier(self):
        self.assertEqual(self._parse("x'"), var("x'"))

    def test_conditional(self):
        self.assertEqual(
            self._parse("if 1==1 then 2 else 3"),
            Conditional(BinaryOp(EQUALS, integer(1), integer(1)), integer(2), integer(3))
        )

    def test_nested_conditionals(self):
        self.assertEqual(
            self._parse("if a then if b then 1 else 2 else 3"),
            Conditional(var("a"), Conditional(var("b"), integer(1), integer(2)), integer(3))
        )
        self.assertEqual(
            self._parse("if if a then b else c then d else e"),
            Conditional(Conditional(var("a"), var("b"), var("c")), var("d"), var("e"))
        )

    def test_conditional_else_branch_extends_right(self):
        self.assertEqual(
            self._parse("if c then 1 else 2 + 3"),
            Conditional(var("c"), integer(1), BinaryOp(PLUS, integer(2), integer(3)))
        )

    def test_conditional_without_spaces_around_parens(self):
        self.assertEqual(
            self._parse("if(x)then(1)else(2)"),
            Conditional(var("x"), integer(1), integer(2))
        )

    def test_modulus(self):
        self.assertEqual(self._parse("|3|"), UnaryOp(MODULUS, integer(3)))

    def test_nested_modulus(self):
        self.assertEqual(
            self._parse("||x||"),
            UnaryOp(MODULUS, UnaryOp(MODULUS, var("x")))
        )
        self.assertEqual(
            self._parse("|x| + |y|"),
            BinaryOp(PLUS, UnaryOp(MODULUS, var("x")), UnaryOp(MODULUS, var("y")))
        )

    def test_double_negation(self):
        self.assertEqual(
            self._parse("--5"),
            UnaryOp(NEGATE, UnaryOp(NEGATE, integer(5)))
        )

    def test_negation_binds_tighter_than_binary(self):
        self.assertEqual(
            self._parse("-1 + 2"),
            BinaryOp(PLUS, UnaryOp(NEGATE, integer(1)), integer(2))
        )
        self.assertEqual(
            self._parse("2 * -3"),
            BinaryOp(TIMES, integer(2), UnaryOp(NEGATE, integer(3)))
        )
        self.assertEqual(
            self._parse("1 - -2"),
            BinaryOp(MINUS, integer(1), UnaryOp(NEGATE, integer(2)))
        )

    def test_parentheses_add_no_node(self):
        self.assertEqual(
            self._parse("(1+2)"),
            BinaryOp(PLUS, integer(1), integer(2))
        )
        self.assertEqual(self._parse("((x))"), var("x"))


class TestConjugate(unittest.TestCase):
    """Postfix conjugate marks."""

    def _parse(self, source):
        return parse_expression(source)

    def test_single_mark(self):
        self.assertEqual(self._parse("z^"), UnaryOp(CONJUGATE, var("z")))

    def test_marks_fold_left(self):
        self.assertEqual(
            self._parse("z^^^"),
            UnaryOp(CONJUGATE, UnaryOp(CONJUGATE, UnaryOp(CONJUGATE, var("z"))))
        )

    def test_marks_with_whitespace(self):
        self.assertEqual(
            self._parse("z ^ ^"),
            UnaryOp(CONJUGATE, UnaryOp(CONJUGATE, var("z")))
        )

    def test_conjugate_is_not_negate(self):
        node = self._parse("3i^")
        self.assertEqual(node.operator, CONJUGATE)
        self.assertNotEqual(node, UnaryOp(NEGATE, imaginary(3)))

    def test_negation_applies_to_conjugated_factor(self):
        self.assertEqual(
            self._parse("-x^"),
            UnaryOp(NEGATE, UnaryOp(CONJUGATE, var("x")))
        )

    def test_conjugate_of_group(self):
        self.assertEqual(
            self._parse("(1 + i)^ * 2"),
            BinaryOp(TIMES, UnaryOp(CONJUGATE, BinaryOp(PLUS, integer(1), imaginary())), integer(2))
        )


class TestPrecedence(unittest.TestCase):
    """Binary levels: precedence and associativity."""

    def _parse(self, source):
        return parse_expression(source)

    def test_subtraction_is_left_associative(self):
        self.assertEqual(
            self._parse("1-2-3"),
            BinaryOp(MINUS, BinaryOp(MINUS, integer(1), integer(2)), integer(3))
        )

    def test_division_is_left_associative(self):
        self.assertEqual(
            self._parse("8/4/2"),
            BinaryOp(DIVIDE, BinaryOp(DIVIDE, integer(8), integer(4)), integer(2))
        )

    def test_multiplicative_binds_tighter(self):
        self.assertEqual(
            self._parse("1+2*3"),
            BinaryOp(PLUS, integer(1), BinaryOp(TIMES, integer(2), integer(3)))
        )
        self.assertEqual(
            self._parse("1 - 7 % 4"),
            BinaryOp(MINUS, integer(1), BinaryOp(REMAINDER, integer(7), integer(4)))
        )

    def test_parentheses_override(self):
        self.assertEqual(
            self._parse("(1+2)*3"),
            BinaryOp(TIMES, BinaryOp(PLUS, integer(1), integer(2)), integer(3))
        )

    def test_equality_is_loosest(self):
        self.assertEqual(
            self._parse("1+2==3"),
            BinaryOp(EQUALS, BinaryOp(PLUS, integer(1), integer(2)), integer(3))
        )

    def test_equality_chain(self):
        self.assertEqual(
            self._parse("1==2!=3"),
            BinaryOp(NOT_EQUALS, BinaryOp(EQUALS, integer(1), integer(2)), integer(3))
        )

    def test_mixed_expression(self):
        self.assertEqual(
            self._parse("a * 2i + |b|^ != -c"),
            BinaryOp(
                NOT_EQUALS,
                BinaryOp(
                    PLUS,
                    BinaryOp(TIMES, var("a"), imaginary(2)),
                    UnaryOp(CONJUGATE, UnaryOp(MODULUS, var("b")))
                ),
                UnaryOp(NEGATE, var("c"))
            )
        )


class TestWhitespace(unittest.TestCase):
    """Whitespace insensitivity."""

    def test_same_ast_regardless_of_spacing(self):
        expected = BinaryOp(PLUS, integer(1), integer(2))
        for source in ("1 + 2", "1+2", " 1+2 ", "\n1\t+\r\n2\n"):
            with self.subTest(source=source):
                self.assertEqual(parse_expression(source), expected)

    def test_space_inside_delimiters(self):
        self.assertEqual(
            parse_expression("( 1 ) * | x |"),
            BinaryOp(TIMES, integer(1), UnaryOp(MODULUS, var("x")))
        )


class TestEntryPoint(unittest.TestCase):
    """Parser.expression does not require full consumption."""

    def setUp(self):
        self.parser = Parser()

    def test_returns_remainder(self):
        rest, node = self.parser.expression(Cursor("1 + 2 ) tail"))
        self.assertEqual(node, BinaryOp(PLUS, integer(1), integer(2)))
        self.assertEqual(rest.remaining, ") tail")

    def test_dangling_operator_is_left_unconsumed(self):
        rest, node = self.parser.expression(Cursor("1 +"))
        self.assertEqual(node, integer(1))
        self.assertEqual(rest.remaining, "+")

    def test_imaginary_requires_adjacent_i(self):
        rest, node = self.parser.expression(Cursor("5 i"))
        self.assertEqual(node, integer(5))
        self.assertEqual(rest.remaining, "i")

    def test_spans(self):
        node = parse_expression("1 +\n  x", filename="expr.gi")
        self.assertEqual(node.span.start.offset, 0)
        self.assertEqual(node.right.span.start.line, 2)
        self.assertEqual(node.right.span.start.column, 3)
        self.assertEqual(node.right.span.start.filename, "expr.gi")

    def test_parse_file(self):
        with tempfile.NamedTemporaryFile("w", suffix=".gi", delete=False, encoding="utf-8") as f:
            f.write("if x == 0 then 1 else x\n")
            path = f.name
        try:
            node = parse_file(path)
        finally:
            os.remove(path)
        self.assertEqual(
            node,
            Conditional(BinaryOp(EQUALS, var("x"), integer(0)), integer(1), var("x"))
        )
        self.assertEqual(node.span.start.filename, path)


class TestErrors(unittest.TestCase):
    """Failure reporting."""

    def test_reserved_words_never_become_identifiers(self):
        for word in RESERVED_WORDS - {"i"}:
            with self.subTest(word=word):
                with self.assertRaises(ParseError):
                    parse_expression(word)

    def test_reserved_word_as_operand(self):
        with self.assertRaises(ParseError) as ctx:
            parse_expression("x + let")
        self.assertEqual(ctx.exception.code, "P003")

    def test_empty_input(self):
        with self.assertRaises(ParseError) as ctx:
            parse_expression("   ")
        self.assertEqual(ctx.exception.code, "P001")

    def test_unbalanced_parenthesis(self):
        with self.assertRaises(ParseError) as ctx:
            parse_expression("(1 + 2")
        self.assertEqual(ctx.exception.code, "P001")
        self.assertEqual(ctx.exception.location.offset, 0)

    def test_trailing_input(self):
        with self.assertRaises(ParseError) as ctx:
            parse_expression("1 + 2 3")
        self.assertEqual(ctx.exception.code, "P003")
        self.assertEqual(ctx.exception.location.offset, 6)

    def test_missing_else_is_reported(self):
        with self.assertRaises(ParseError) as ctx:
            parse_expression("if 1 then 2")
        self.assertIn("else", str(ctx.exception))

    def test_overflowing_literal(self):
        with self.assertRaises(ParseError):
            parse_expression("9223372036854775808")
        self.assertEqual(parse_expression("9223372036854775807"), integer(2 ** 63 - 1))

    def test_single_equals_is_not_an_operator(self):
        with self.assertRaises(ParseError):
            parse_expression("1 = 2")


class TestLongInput(unittest.TestCase):
    """Parse time stays proportional to input length."""

    OPERANDS = 20000
    TIME_LIMIT = 4.0

    def _timed_parse(self, source):
        start = time.perf_counter()
        node = parse_expression(source)
        return node, time.perf_counter() - start

    def test_long_sum(self):
        node, elapsed = self._timed_parse("+".join(["x"] * self.OPERANDS))
        self.assertEqual(node.operator, PLUS)
        self.assertEqual(node.right, var("x"))
        self.assertLess(elapsed, self.TIME_LIMIT)

    def test_long_sum_over_many_lines(self):
        node, elapsed = self._timed_parse(" +\n".join(["x"] * self.OPERANDS))
        self.assertEqual(node.right.span.start.line, self.OPERANDS)
        self.assertEqual(node.right.span.start.column, 1)
        self.assertLess(elapsed, self.TIME_LIMIT)

    def test_trailing_input_message_is_bounded(self):
        with self.assertRaises(ParseError) as ctx:
            parse_expression("1 " + "2" * 5000)
        self.assertEqual(ctx.exception.code, "P003")
        self.assertLess(len(ctx.exception.diagnostic.message), 60)


class TestNestingLimit(unittest.TestCase):
    """Configurable depth limit."""

    def test_within_limit(self):
        parser = Parser(ParserConfig(max_depth=4))
        self.assertEqual(parser.parse("(((1)))"), integer(1))

    def test_exceeding_limit(self):
        parser = Parser(ParserConfig(max_depth=3))
        with self.assertRaises(NestingTooDeepError) as ctx:
            parser.parse("(((1)))")
        self.assertEqual(ctx.exception.code, "P004")
        self.assertEqual(ctx.exception.max_depth, 3)

    def test_limit_is_not_swallowed_by_backtracking(self):
        """A deep operand must not silently end the binary level early."""
        parser = Parser(ParserConfig(max_depth=5))
        with self.assertRaises(NestingTooDeepError):
            parser.parse("1 + " + "(" * 10 + "1" + ")" * 10)

    def test_negation_chain_counts(self):
        with self.assertRaises(NestingTooDeepError):
            parse_expression("-" * 100 + "5")
        self.assertEqual(
            parse_expression("-" * 3 + "5"),
            UnaryOp(NEGATE, UnaryOp(NEGATE, UnaryOp(NEGATE, integer(5))))
        )

    def test_depth_resets_after_failure(self):
        parser = Parser(ParserConfig(max_depth=2))
        with self.assertRaises(NestingTooDeepError):
            parser.parse("((1))")
        self.assertEqual(parser.depth, 0)
        self.assertEqual(parser.parse("(1)"), integer(1))

    def test_default_limit(self):
        source = "(" * 66 + "1" + ")" * 66
        with self.assertRaises(NestingTooDeepError):
            parse_expression(source)
        unlimited = Parser(ParserConfig(max_depth=None))
        self.assertEqual(unlimited.parse(source), integer(1))

    def test_limit_logs_warning(self):
        with self.assertLogs("gaussexpr.parser.parser", level="WARNING") as logs:
            with self.assertRaises(NestingTooDeepError):
                Parser(ParserConfig(max_depth=1)).parse("(1)")
        self.assertTrue(any("depth limit" in line for line in logs.output))

    def test_invalid_limit(self):
        with self.assertRaises(ValueError):
            ParserConfig(max_depth=0)


if __name__ == '__main__':
    unittest.main()
