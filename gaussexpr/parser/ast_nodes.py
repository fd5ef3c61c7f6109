"""
Abstract Syntax Tree node definitions for gaussexpr.

The tree is strictly owned: every node has exactly one parent, there are no
back references, and nodes are never modified once the parser builds them.
Equality is structural (operators, names, literal values and shape); source
spans are carried for diagnostics but do not take part in comparisons.

Author: xwest
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Any, Tuple
from dataclasses import dataclass
from enum import Enum

from ..lexer.tokens import SourceLocation
from ..values import GaussianInt


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""
    VALUE = "Value"
    IDENTIFIER = "Identifier"
    BINARY_OP = "BinaryOp"
    UNARY_OP = "UnaryOp"
    CONDITIONAL = "Conditional"


class BinaryOperator(Enum):
    """Binary operators, valued by their source symbol."""
    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"
    REMAINDER = "%"
    EQUALS = "=="
    NOT_EQUALS = "!="

    @property
    def symbol(self) -> str:
        return self.value


class UnaryOperator(Enum):
    """Unary operators, valued by their source symbol."""
    NEGATE = "-"
    CONJUGATE = "^"
    MODULUS = "|"

    @property
    def symbol(self) -> str:
        return self.value


@dataclass(frozen=True)
class SourceSpan:
    """Represents a span of source code (start and end locations)."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        if self.start.filename == self.end.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start}-{self.end}"


class ASTVisitor(ABC):
    """
    Visitor interface for traversing AST nodes.

    visit() dispatches to visit_<node type>, e.g. visit_binary_op.
    """

    def visit(self, node: 'Expression') -> Any:
        method = getattr(self, f"visit_{node.node_type.name.lower()}")
        return method(node)

    @abstractmethod
    def visit_value(self, node: 'Value') -> Any:
        pass

    @abstractmethod
    def visit_identifier(self, node: 'Identifier') -> Any:
        pass

    @abstractmethod
    def visit_binary_op(self, node: 'BinaryOp') -> Any:
        pass

    @abstractmethod
    def visit_unary_op(self, node: 'UnaryOp') -> Any:
        pass

    @abstractmethod
    def visit_conditional(self, node: 'Conditional') -> Any:
        pass


class Expression(ABC):
    """Base class for all expression nodes."""

    def __init__(self, node_type: ASTNodeType, span: Optional[SourceSpan] = None):
        self.node_type = node_type
        self.span = span

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['Expression']:
        """Get all child nodes."""
        pass

    @abstractmethod
    def _key(self) -> Tuple:
        """Structural identity used for equality and hashing."""
        pass

    def __eq__(self, other) -> bool:
        if not isinstance(other, Expression):
            return NotImplemented
        return self.node_type == other.node_type and self._key() == other._key()

    def __hash__(self) -> int:
        return hash((self.node_type, self._key()))

    def __str__(self) -> str:
        if self.span is None:
            return self.node_type.value
        return f"{self.node_type.value}@{self.span}"


class Value(Expression):
    """Literal Gaussian integer."""
    value: GaussianInt

    def __init__(self, value: GaussianInt, span: Optional[SourceSpan] = None):
        super().__init__(ASTNodeType.VALUE, span)
        self.value = value

    def children(self) -> List[Expression]:
        return []

    def _key(self) -> Tuple:
        return (self.value,)

    def __repr__(self) -> str:
        return f"Value({self.value.real}, {self.value.imag})"


class Identifier(Expression):
    """Variable reference."""
    name: str

    def __init__(self, name: str, span: Optional[SourceSpan] = None):
        super().__init__(ASTNodeType.IDENTIFIER, span)
        self.name = name

    def children(self) -> List[Expression]:
        return []

    def _key(self) -> Tuple:
        return (self.name,)

    def __repr__(self) -> str:
        return f"Identifier({self.name!r})"


class BinaryOp(Expression):
    """Binary operation expression."""
    operator: BinaryOperator
    left: Expression
    right: Expression

    def __init__(self, operator: BinaryOperator, left: Expression, right: Expression,
                 span: Optional[SourceSpan] = None):
        super().__init__(ASTNodeType.BINARY_OP, span)
        self.operator = operator
        self.left = left
        self.right = right

    def children(self) -> List[Expression]:
        return [self.left, self.right]

    def _key(self) -> Tuple:
        return (self.operator, self.left, self.right)

    def __repr__(self) -> str:
        return f"BinaryOp({self.operator.name}, {self.left!r}, {self.right!r})"


class UnaryOp(Expression):
    """Unary operation expression (negate, conjugate, modulus)."""
    operator: UnaryOperator
    operand: Expression

    def __init__(self, operator: UnaryOperator, operand: Expression,
                 span: Optional[SourceSpan] = None):
        super().__init__(ASTNodeType.UNARY_OP, span)
        self.operator = operator
        self.operand = operand

    def children(self) -> List[Expression]:
        return [self.operand]

    def _key(self) -> Tuple:
        return (self.operator, self.operand)

    def __repr__(self) -> str:
        return f"UnaryOp({self.operator.name}, {self.operand!r})"


class Conditional(Expression):
    """if <condition> then <then_branch> else <else_branch>"""
    condition: Expression
    then_branch: Expression
    else_branch: Expression

    def __init__(self, condition: Expression, then_branch: Expression, else_branch: Expression,
                 span: Optional[SourceSpan] = None):
        super().__init__(ASTNodeType.CONDITIONAL, span)
        self.condition = condition
        self.then_branch = then_branch
        self.else_branch = else_branch

    def children(self) -> List[Expression]:
        return [self.condition, self.then_branch, self.else_branch]

    def _key(self) -> Tuple:
        return (self.condition, self.then_branch, self.else_branch)

    def __repr__(self) -> str:
        return f"Conditional({self.condition!r}, {self.then_branch!r}, {self.else_branch!r})"


# Convenience constructors, mostly for tests and tooling

def integer(n: int) -> Value:
    """Build Value(n, 0)."""
    return Value(GaussianInt.make(n, 0))


def imaginary(n: int = 1) -> Value:
    """Build Value(0, n)."""
    return Value(GaussianInt.make(0, n))
