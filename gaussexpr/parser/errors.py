"""
Error handling for the gaussexpr parser.

ParseError is a backtracking failure like LexerError: the grammar catches it
and tries the next alternative, and only the outermost one reaches the
caller. NestingTooDeepError is the exception to that rule and always aborts
the parse.

Author: xwest
"""

from typing import Optional, List

from ..lexer.tokens import SourceLocation
from ..lexer.errors import Diagnostic, LexerError


class ParseError(Exception):
    """
    Exception raised when the parser cannot match the input.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class NestingTooDeepError(ParseError):
    """Raised when recursive grammar rules nest deeper than the configured limit."""

    def __init__(self, max_depth: int, location: SourceLocation):
        super().__init__(
            message=f"Expression nesting exceeds the maximum depth of {max_depth}",
            location=location,
            code="P004",
            help_text="Deeply nested parentheses, conditionals or unary operators hit the parser's depth limit.",
            suggestions=["Simplify the expression", "Raise ParserConfig.max_depth"]
        )
        self.max_depth = max_depth


# Failures the grammar may recover from by trying another alternative
RECOVERABLE_ERRORS = (LexerError, ParseError)


PARSER_ERROR_CODES = {
    "P001": "No alternative matched",
    "P002": "Expected token not found",
    "P003": "Unexpected trailing input",
    "P004": "Nesting too deep",
}


def create_no_alternative_error(rule: str, location: SourceLocation,
                                cause: Optional[Exception] = None) -> ParseError:
    """Create an error for a rule whose alternatives all failed."""
    help_text = None
    if cause is not None:
        detail = cause.diagnostic.message if hasattr(cause, "diagnostic") else str(cause)
        help_text = f"Last alternative failed with: {detail}"

    return ParseError(
        message=f"No alternative matched while parsing {rule}",
        location=location,
        code="P001",
        help_text=help_text,
        suggestions=["Check for a missing operand or an unbalanced delimiter"]
    )


def create_missing_token_error(expected: str, context: str, location: SourceLocation) -> ParseError:
    """Create an error for a required lexeme that was not found."""
    return ParseError(
        message=f"Expected '{expected}' {context}",
        location=location,
        code="P002",
        help_text=f"The parser expected to see '{expected}' at this position."
    )


def create_trailing_input_error(remaining: str, location: SourceLocation) -> ParseError:
    """Create an error for input left over after a complete expression."""
    preview = remaining[:10]
    return ParseError(
        message=f"Unexpected trailing input: {preview!r}",
        location=location,
        code="P003",
        help_text="A complete expression was parsed but input remains after it.",
        suggestions=["Check for a missing operator between operands"]
    )
