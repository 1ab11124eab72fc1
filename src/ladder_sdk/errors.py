"""
Ladder SDK Error Hierarchy
==========================

This module defines the base exception for the entire Ladder SDK.
All exceptions inherit from LadderError, allowing callers to catch all
SDK-related errors with a single except clause if desired.

Every error carries a kind tag (see ErrorKind) so that tools can tell a
lexical failure from a scope or symbol failure without matching on class
names. Translation is fail-fast: the first error raised aborts the whole
compilation.

Error messages follow this format:
    filename:line:column: error: description
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# Error Kinds
# =============================================================================

class ErrorKind(Enum):
    """Category tag carried by every LadderError."""

    LEXICAL = "lexical"            # malformed number, unknown character
    SYNTAX = "syntax"              # expected-token mismatch
    SCOPE = "scope"                # TASK/ROUTINE/RUNG nesting violations
    SYMBOL = "symbol"              # tags, routines, events, Main
    CONSTRAINT = "constraint"      # numeric limits such as the task period
    TRANSLATION = "translation"    # rung translator misuse
    OUTPUT = "output"              # persisting the generated text failed


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Base Exception Class
# =============================================================================

class LadderError(Exception):
    """
    Base exception for all Ladder SDK errors.

    All exceptions in the SDK inherit from this class, allowing callers
    to catch all SDK-related errors with a single except clause:

        try:
            compile_file("conveyor.rll")
        except LadderError as e:
            print(f"Error: {e}")

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
    """

    kind: ErrorKind = ErrorKind.SYNTAX

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location and hint.

        Example output:
            conveyor.rll:7:5: error: referencing tag motr before assignment
            hint: declare it first, e.g. 'TAG motr = FALSE'
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)
