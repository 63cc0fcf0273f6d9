"""
Error types for MiniLang tokenizing, parsing, evaluation, and configuration.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class MiniLangError(Exception):
    """Base exception for all MiniLang errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(MiniLangError):
    """
    Raised when source text cannot be tokenized or parsed.

    Examples:
    - Character no token reader recognizes
    - Unexpected token kind or value
    - Unknown type keyword
    - Malformed multi-character operator
    - Tokens left over after a complete program
    """

    def __init__(
        self,
        message: str,
        pos: int | None = None,
        context: Optional["ErrorContext"] = None,
    ):
        self.pos = pos
        super().__init__(message, context)


class EvaluationError(MiniLangError):
    """
    Raised when a program fails while being evaluated.

    Examples:
    - Duplicate variable or function declaration
    - Assignment to an undeclared variable
    - Call to an undeclared function, wrong arity, wrong argument kind
    - Non-boolean if/while condition
    - Operand kind mismatch or unsupported operator for a kind
    - Function result not matching its declared return kind
    """

    def __init__(
        self,
        message: str,
        pos: int | None = None,
        context: Optional["ErrorContext"] = None,
    ):
        self.pos = pos
        super().__init__(message, context)


class ConfigError(MiniLangError):
    """Raised when minilang.toml contains invalid interpreter settings."""

    pass


@dataclass
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source line the error occurred on
        file: Optional path of the program file
    """

    line: int
    column: int
    snippet: str | None = None
    file: Path | None = None

    @classmethod
    def from_offset(cls, source: str, pos: int, file: Path | None = None) -> "ErrorContext":
        """Build a context from a character offset into ``source``."""
        pos = max(0, min(pos, len(source)))
        line = source.count("\n", 0, pos) + 1
        line_start = source.rfind("\n", 0, pos) + 1
        line_end = source.find("\n", pos)
        if line_end == -1:
            line_end = len(source)
        return cls(
            line=line,
            column=pos - line_start + 1,
            snippet=source[line_start:line_end],
            file=file,
        )

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "program.ml:3:7" followed by the snippet
        """
        location = f"{self.line}:{self.column}"
        if self.file:
            location = f"{self.file}:{location}"

        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format the snippet with its line number and an error marker."""
        if not self.snippet:
            return ""

        prefix = f"{self.line:4d} | "
        marker_pos = len(prefix) + self.column - 1
        return f"{prefix}{self.snippet}\n{' ' * marker_pos}^^^"
