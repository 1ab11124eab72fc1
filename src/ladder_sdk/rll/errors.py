"""
Ladder Translator Error Hierarchy
=================================

This module defines the exception hierarchy for the relay ladder logic
(RLL) translator. All exceptions inherit from RLLError, which itself
inherits from the base LadderError for consistent error handling across
the SDK.

Exception Hierarchy
-------------------
RLLError (base for all translator errors)
├── LexicalError - tokenizer errors
│   ├── MalformedNumberError - '.' not followed by a digit
│   └── InvalidCharacterError - character outside the language
├── RLLSyntaxError - grammar errors
│   ├── UnexpectedTokenError - expected-token mismatch
│   ├── InvalidStatementError - token cannot start a statement
│   └── InvalidTaskTypeError - bad <...> clause after TASK
├── ScopeError - TASK/ROUTINE/RUNG nesting violations
├── SymbolError - tag, routine and event errors
│   ├── UndeclaredTagError
│   ├── MissingIndexError
│   ├── IndexOutOfBoundsError
│   ├── TagNameTooLongError
│   ├── InvalidArrayLengthError
│   ├── DuplicateMainError
│   ├── MissingMainError
│   ├── UndefinedRoutineError
│   └── UndefinedEventError
├── ConstraintError
│   └── PeriodTooShortError
├── TranslationError - rung translator misuse
│   ├── InputAfterOutputError
│   └── InvalidInstructionError
└── OutputWriteError - the generated text could not be persisted

Error Message Format
--------------------
    conveyor.rll:12:5: error: index 10 is out of bounds for tag array arr of length 10
    hint: valid indices are 0 to 9
"""

from typing import Optional

from ladder_sdk.errors import ErrorKind, LadderError, SourceLocation


# =============================================================================
# Base Translator Exception
# =============================================================================

class RLLError(LadderError):
    """Base exception for all ladder translator errors."""
    pass


# =============================================================================
# Lexical Errors
# =============================================================================

class LexicalError(RLLError):
    """Raised when the tokenizer cannot form a token."""

    kind = ErrorKind.LEXICAL


class MalformedNumberError(LexicalError):
    """
    Illegal character in a number literal.

    A decimal point must be followed by at least one digit:

        TASK<PERIOD=10.> fast    # Error
    """

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
    ):
        self.text = text
        super().__init__(
            f"illegal character in number '{text}'",
            location=location,
            hint="a decimal point must be followed by at least one digit",
        )


class InvalidCharacterError(LexicalError):
    """Character that cannot start any token."""

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
    ):
        self.char = char
        super().__init__(
            f"unknown token: {char}",
            location=location,
        )


# =============================================================================
# Syntax Errors
# =============================================================================

class RLLSyntaxError(RLLError):
    """Raised when the token stream does not match the grammar."""

    kind = ErrorKind.SYNTAX


class UnexpectedTokenError(RLLSyntaxError):
    """
    Expected-token mismatch.

    Raised by the parser when a grammar position requires a specific
    token type and finds another one.
    """

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected {expected}, but found {found}",
            location=location,
        )


class InvalidStatementError(RLLSyntaxError):
    """Token that cannot begin a statement."""

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
    ):
        self.found = found
        super().__init__(
            f"invalid statement at {found}",
            location=location,
            hint="statements start with TASK, ROUTINE, RUNG, TAG, an instruction or an END keyword",
        )


class InvalidTaskTypeError(RLLSyntaxError):
    """Contents of TASK<...> are not PERIOD=, EVENT= or CONTINUOUS."""

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
    ):
        self.found = found
        super().__init__(
            f"invalid task type {found}",
            location=location,
            hint="use TASK<PERIOD=n>, TASK<EVENT=name> or TASK<CONTINUOUS>",
        )


# =============================================================================
# Scope Errors
# =============================================================================

class ScopeError(RLLError):
    """
    TASK/ROUTINE/RUNG opened or closed outside its required nesting.

    Examples:
        - ROUTINE outside of a TASK
        - ENDRUNG without a matching RUNG
        - TASK left open at the end of the source
    """

    kind = ErrorKind.SCOPE


# =============================================================================
# Symbol Errors
# =============================================================================

class SymbolError(RLLError):
    """Raised for undeclared, duplicated or malformed names."""

    kind = ErrorKind.SYMBOL


class UndeclaredTagError(SymbolError):
    """Tag referenced by an instruction before its TAG declaration."""

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
    ):
        self.name = name
        super().__init__(
            f"referencing tag {name} before assignment",
            location=location,
            hint=f"declare it first, e.g. 'TAG {name} = FALSE'",
        )


class MissingIndexError(SymbolError):
    """Tag array referenced without '.index'."""

    def __init__(
        self,
        name: str,
        length: int,
        location: Optional[SourceLocation] = None,
    ):
        self.name = name
        self.length = length
        super().__init__(
            f"tag array {name} requires an index",
            location=location,
            hint=f"write {name}.0 to {name}.{length - 1}",
        )


class IndexOutOfBoundsError(SymbolError):
    """Array index not strictly below the declared length."""

    def __init__(
        self,
        name: str,
        index: str,
        length: int,
        location: Optional[SourceLocation] = None,
    ):
        self.name = name
        self.index = index
        self.length = length
        super().__init__(
            f"index {index} is out of bounds for tag array {name} of length {length}",
            location=location,
            hint=f"valid indices are 0 to {length - 1}",
        )


class TagNameTooLongError(SymbolError):
    """Tag name longer than the character limit."""

    def __init__(
        self,
        name: str,
        limit: int,
        location: Optional[SourceLocation] = None,
    ):
        self.name = name
        self.limit = limit
        super().__init__(
            f"tag name {name} too long. The limit is {limit} characters",
            location=location,
        )


class InvalidArrayLengthError(SymbolError):
    """TAG[n] with n zero or not an integer."""

    def __init__(
        self,
        length: str,
        location: Optional[SourceLocation] = None,
    ):
        self.length = length
        if length.isdigit() and int(length) == 0:
            message = "length of tag array must be greater than zero"
        else:
            message = f"length of tag array must be a positive integer, not {length}"
        super().__init__(message, location=location)


class DuplicateMainError(SymbolError):
    """Second Main routine inside one task."""

    def __init__(
        self,
        name: str = "Main",
        location: Optional[SourceLocation] = None,
    ):
        self.name = name
        super().__init__(
            f"there can only be one {name} routine per task",
            location=location,
        )


class MissingMainError(SymbolError):
    """Task closed without a Main routine."""

    def __init__(
        self,
        name: str = "Main",
        location: Optional[SourceLocation] = None,
    ):
        self.name = name
        super().__init__(
            f"there must be a single {name} routine in every task",
            location=location,
            hint=f"add 'ROUTINE {name}' before ENDTASK",
        )


class UndefinedRoutineError(SymbolError):
    """JSR target never declared anywhere in the source."""

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
    ):
        self.name = name
        super().__init__(
            f"routine {name} does not exist",
            location=location,
        )


class UndefinedEventError(SymbolError):
    """EMIT target that no TASK<EVENT=...> declares."""

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
    ):
        self.name = name
        super().__init__(
            f"emitted event {name} does not correspond to a task",
            location=location,
            hint=f"declare a task with TASK<EVENT={name}>",
        )


# =============================================================================
# Constraint Errors
# =============================================================================

class ConstraintError(RLLError):
    """Raised when a numeric value violates a fixed limit."""

    kind = ErrorKind.CONSTRAINT


class PeriodTooShortError(ConstraintError):
    """Periodic task faster than the allowed minimum."""

    def __init__(
        self,
        period: str,
        minimum: int,
        location: Optional[SourceLocation] = None,
    ):
        self.period = period
        self.minimum = minimum
        super().__init__(
            f"period {period} below allowable limit {minimum}",
            location=location,
        )


# =============================================================================
# Translation Errors
# =============================================================================

class TranslationError(RLLError):
    """Raised by the rung translator."""

    kind = ErrorKind.TRANSLATION


class InputAfterOutputError(TranslationError):
    """Contact instruction placed after an output in the same rung."""

    def __init__(
        self,
        instruction: str,
        location: Optional[SourceLocation] = None,
    ):
        self.instruction = instruction
        super().__init__(
            f"input instruction {instruction} appears after an output instruction",
            location=location,
            hint="all XIC/XIO contacts of a rung must come before its outputs",
        )


class InvalidInstructionError(TranslationError):
    """Instruction kind not valid for the requested operation."""

    def __init__(
        self,
        instruction: str,
        location: Optional[SourceLocation] = None,
    ):
        self.instruction = instruction
        super().__init__(
            f"invalid instruction {instruction}",
            location=location,
        )


# =============================================================================
# Output Errors
# =============================================================================

class OutputWriteError(RLLError):
    """The emitter could not write the generated text."""

    kind = ErrorKind.OUTPUT

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"couldn't write to {path}: {reason}")
