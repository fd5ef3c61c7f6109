"""
Render ASTs back to text.

to_source() produces expression source that parses back to an equal AST,
adding parentheses only where precedence or the grammar requires them.
dump() produces an indented structural view for debugging.

Author: xwest
"""

from typing import Any, List

from .ast_nodes import (
    ASTVisitor, Expression, Value, Identifier, BinaryOp, UnaryOp, Conditional,
    BinaryOperator, UnaryOperator
)

# Binding strength, loosest first. Anything that is not a binary operation
# parses at factor level.
EQUALITY_LEVEL = 1
ADDITIVE_LEVEL = 2
MULTIPLICATIVE_LEVEL = 3
FACTOR_LEVEL = 4

BINARY_LEVELS = {
    BinaryOperator.EQUALS: EQUALITY_LEVEL,
    BinaryOperator.NOT_EQUALS: EQUALITY_LEVEL,
    BinaryOperator.PLUS: ADDITIVE_LEVEL,
    BinaryOperator.MINUS: ADDITIVE_LEVEL,
    BinaryOperator.TIMES: MULTIPLICATIVE_LEVEL,
    BinaryOperator.DIVIDE: MULTIPLICATIVE_LEVEL,
    BinaryOperator.REMAINDER: MULTIPLICATIVE_LEVEL,
}


def _level(node: Expression) -> int:
    if isinstance(node, BinaryOp):
        return BINARY_LEVELS[node.operator]
    return FACTOR_LEVEL


class SourcePrinter:
    """
    Renders expressions as parseable source.

    The else branch of a conditional runs to the end of the enclosing
    expression, so a conditional is wrapped in parentheses whenever anything
    would follow it (tail=False).
    """

    def render(self, node: Expression, tail: bool = True) -> str:
        if isinstance(node, Value):
            return self._render_value(node)
        if isinstance(node, Identifier):
            return node.name
        if isinstance(node, BinaryOp):
            return self._render_binary(node, tail)
        if isinstance(node, UnaryOp):
            return self._render_unary(node, tail)
        if isinstance(node, Conditional):
            return self._render_conditional(node, tail)
        raise TypeError(f"Cannot render {type(node).__name__}")

    def _render_value(self, node: Value) -> str:
        real, imag = node.value.real, node.value.imag
        if node.value.is_real and real >= 0:
            return str(real)
        if real == 0 and imag > 0:
            return "i" if imag == 1 else f"{imag}i"
        raise ValueError(f"{node.value!r} has no single-literal source form")

    def _render_binary(self, node: BinaryOp, tail: bool) -> str:
        level = BINARY_LEVELS[node.operator]

        if _level(node.left) < level:
            left = f"({self.render(node.left)})"
        else:
            left = self.render(node.left, tail=False)

        # Same-level right operands need parentheses to stay right-nested
        if _level(node.right) <= level:
            right = f"({self.render(node.right)})"
        else:
            right = self.render(node.right, tail)

        return f"{left} {node.operator.symbol} {right}"

    def _render_unary(self, node: UnaryOp, tail: bool) -> str:
        operand = node.operand

        if node.operator == UnaryOperator.MODULUS:
            return f"|{self.render(operand)}|"

        if node.operator == UnaryOperator.NEGATE:
            if isinstance(operand, BinaryOp):
                return f"-({self.render(operand)})"
            return f"-{self.render(operand, tail)}"

        # Conjugate: a negation or conditional would absorb the trailing mark
        if isinstance(operand, (BinaryOp, Conditional)) or (
                isinstance(operand, UnaryOp) and operand.operator == UnaryOperator.NEGATE):
            return f"({self.render(operand)})^"
        return f"{self.render(operand, tail=False)}^"

    def _render_conditional(self, node: Conditional, tail: bool) -> str:
        text = (f"if {self.render(node.condition)} "
                f"then {self.render(node.then_branch)} "
                f"else {self.render(node.else_branch)}")
        if tail:
            return text
        return f"({text})"


class TreeDumper(ASTVisitor):
    """Indented, one-node-per-line view of an AST."""

    def __init__(self, indent: str = "  "):
        self.indent = indent
        self.lines: List[str] = []
        self.level = 0

    def _emit(self, text: str):
        self.lines.append(f"{self.indent * self.level}{text}")

    def _children(self, node: Expression):
        self.level += 1
        for child in node.children():
            child.accept(self)
        self.level -= 1

    def visit_value(self, node: Value) -> Any:
        self._emit(f"Value {node.value}")

    def visit_identifier(self, node: Identifier) -> Any:
        self._emit(f"Identifier {node.name}")

    def visit_binary_op(self, node: BinaryOp) -> Any:
        self._emit(f"BinaryOp {node.operator.name}")
        self._children(node)

    def visit_unary_op(self, node: UnaryOp) -> Any:
        self._emit(f"UnaryOp {node.operator.name}")
        self._children(node)

    def visit_conditional(self, node: Conditional) -> Any:
        self._emit("Conditional")
        self._children(node)


def to_source(node: Expression) -> str:
    """Render an AST as source text that parses back to an equal AST."""
    return SourcePrinter().render(node)


def dump(node: Expression, indent: str = "  ") -> str:
    """Render an AST as an indented tree, one node per line."""
    dumper = TreeDumper(indent)
    node.accept(dumper)
    return "\n".join(dumper.lines)
