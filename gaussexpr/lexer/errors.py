"""
Error handling for the gaussexpr lexer.

Lexer errors are ordinary backtracking failures: the parser catches them
and tries the next grammar alternative. They still carry full diagnostic
information so the outermost failure can be reported usefully.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass
from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """A single error or warning with its source location."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Raised when a lexer primitive does not match at a cursor position.

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


ERROR_CODES = {
    "L001": "Unexpected text",
    "L002": "Invalid identifier",
    "L003": "Invalid numeric literal",
    "L004": "Reserved word used as identifier",
}


def _describe(text: str) -> str:
    if not text:
        return "end of input"
    return repr(text[:10])


def create_unexpected_text_error(expected: str, found: str, location: SourceLocation) -> LexerError:
    """Create an error for text that does not match an expected lexeme."""
    return LexerError(
        message=f"Expected {expected}, found {_describe(found)}",
        location=location,
        code="L001",
    )


def create_invalid_identifier_error(found: str, location: SourceLocation) -> LexerError:
    """Create an error for text that cannot start an identifier."""
    return LexerError(
        message=f"Expected identifier, found {_describe(found)}",
        location=location,
        code="L002",
        help_text="Identifiers start with a letter or '_' and continue with letters, digits, '_' or \"'\".",
    )


def create_invalid_number_error(lexeme: str, location: SourceLocation, reason: str) -> LexerError:
    """Create an error for an invalid numeric literal."""
    return LexerError(
        message=f"Invalid numeric literal: {_describe(lexeme)}",
        location=location,
        code="L003",
        help_text=reason,
        suggestions=["Literals must fit in a signed 64-bit integer"]
    )


def create_reserved_word_error(word: str, location: SourceLocation) -> LexerError:
    """Create an error for a reserved word in identifier position."""
    return LexerError(
        message=f"'{word}' is a reserved word and cannot be used as an identifier",
        location=location,
        code="L004",
        suggestions=[f"Rename the variable, e.g. '{word}_'"]
    )
