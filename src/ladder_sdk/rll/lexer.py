"""
Ladder Lexer (Tokenizer)
========================

This module implements the tokenizer for the relay ladder logic (RLL)
source language. It converts source text into a lazy stream of tokens
that the parser pulls one at a time.

Token Categories
----------------
- Keywords: TAG, TASK, ENDTASK, PERIOD, EVENT, CONTINUOUS, ROUTINE,
  ENDROUTINE, RUNG, ENDRUNG, TRUE, FALSE and the instructions
  XIC, XIO, OTE, OTL, OTU, JSR, RET, EMIT
- Identifiers: tag, routine, rung, task and event names
- Numbers: 123 or 12.5 (a '.' must be followed by a digit)
- Punctuation: = < > [ ] . and end-of-line

Keywords are case-sensitive: only the exact uppercase spelling is a
keyword, so 'Tag' or 'xic' are ordinary identifiers.

Comments
--------
'#' starts a comment that runs to the end of the line. The newline
itself is still returned as a token, so a commented line terminates
its statement normally.

Example Usage
-------------
>>> from ladder_sdk.rll.lexer import Lexer
>>> lexer = Lexer("TAG[10] lamps = FALSE")
>>> for token in lexer.tokenize():
...     print(token)
Token(TAG, 'TAG', 1:1)
Token(OPEN_BRACKET, '[', 1:4)
Token(NUMBER, '10', 1:5)
Token(CLOSE_BRACKET, ']', 1:7)
Token(IDENTIFIER, 'lamps', 1:9)
Token(EQ, '=', 1:15)
Token(FALSE, 'FALSE', 1:17)
Token(NEWLINE, '\\n', 1:22)
Token(EOF, 2:1)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator
import string

from ladder_sdk.errors import SourceLocation
from ladder_sdk.rll.errors import InvalidCharacterError, MalformedNumberError


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token types for the ladder source language."""

    # === Structural Tokens ===
    EOF = auto()            # End of input
    NEWLINE = auto()        # End of a statement

    # === Literals ===
    NUMBER = auto()         # 20, 10.5
    IDENTIFIER = auto()     # names

    # === Declaration Keywords ===
    TAG = auto()
    TASK = auto()
    ENDTASK = auto()
    PERIOD = auto()
    EVENT = auto()
    CONTINUOUS = auto()
    ROUTINE = auto()
    ENDROUTINE = auto()
    RUNG = auto()
    ENDRUNG = auto()
    TRUE = auto()
    FALSE = auto()

    # === Instructions ===
    XIC = auto()            # examine if closed
    XIO = auto()            # examine if open
    OTE = auto()            # output energize
    OTL = auto()            # output latch
    OTU = auto()            # output unlatch
    JSR = auto()            # jump to subroutine
    RET = auto()            # return from routine
    EMIT = auto()           # signal an event

    # === Punctuation ===
    EQ = auto()             # =
    OPEN_ANGLE = auto()     # <
    CLOSE_ANGLE = auto()    # >
    OPEN_BRACKET = auto()   # [
    CLOSE_BRACKET = auto()  # ]
    INDEXER = auto()        # .


# =============================================================================
# Keyword Mapping
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    "TAG": TokenType.TAG,
    "TASK": TokenType.TASK,
    "ENDTASK": TokenType.ENDTASK,
    "PERIOD": TokenType.PERIOD,
    "EVENT": TokenType.EVENT,
    "CONTINUOUS": TokenType.CONTINUOUS,
    "ROUTINE": TokenType.ROUTINE,
    "ENDROUTINE": TokenType.ENDROUTINE,
    "RUNG": TokenType.RUNG,
    "ENDRUNG": TokenType.ENDRUNG,
    "TRUE": TokenType.TRUE,
    "FALSE": TokenType.FALSE,
    "XIC": TokenType.XIC,
    "XIO": TokenType.XIO,
    "OTE": TokenType.OTE,
    "OTL": TokenType.OTL,
    "OTU": TokenType.OTU,
    "JSR": TokenType.JSR,
    "RET": TokenType.RET,
    "EMIT": TokenType.EMIT,
}

# Tokens made of exactly one character
SINGLE_TOKENS: dict[str, TokenType] = {
    "=": TokenType.EQ,
    "<": TokenType.OPEN_ANGLE,
    ">": TokenType.CLOSE_ANGLE,
    "[": TokenType.OPEN_BRACKET,
    "]": TokenType.CLOSE_BRACKET,
    ".": TokenType.INDEXER,
    "\n": TokenType.NEWLINE,
}

INSTRUCTIONS = frozenset({
    TokenType.XIC,
    TokenType.XIO,
    TokenType.OTE,
    TokenType.OTL,
    TokenType.OTU,
    TokenType.JSR,
    TokenType.RET,
    TokenType.EMIT,
})


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from ladder source.

    Attributes:
        type: The TokenType classification
        text: The literal source text of the token ('' for EOF)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    text: str
    line: int = 1
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.text:
            return f"Token({self.type.name}, {self.text!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_instruction(self) -> bool:
        """Return True if this token is a rung instruction keyword."""
        return self.type in INSTRUCTIONS

    def describe(self) -> str:
        """Human-readable form used in error messages."""
        if self.type == TokenType.NEWLINE:
            return "end of line"
        if self.type == TokenType.EOF:
            return "end of input"
        return f"'{self.text}' ({self.type.name})"


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes ladder source code on demand.

    A newline is appended to the source once, so the last statement is
    always terminated even when the file does not end with one.

    Usage:
        lexer = Lexer(source_text, filename)
        token = lexer.next_token()      # pull one token
        tokens = list(lexer.tokenize()) # or everything up to EOF

    Attributes:
        source: The source code being tokenized (with the trailing newline)
        filename: Name of the source file (for error reporting)
    """

    WHITESPACE = " \t\r"
    DIGITS = string.digits

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer with source code.

        Args:
            source: The ladder source code to tokenize
            filename: Name of the source file (for error messages)
        """
        self.source = source + "\n"
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._column = 1

    @property
    def line_number(self) -> int:
        """Line the cursor is currently on (1-indexed)."""
        return self._line

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens until and including EOF.

        Raises:
            LexicalError: If an invalid number or character is encountered
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Once the end of the source is reached every further call
        returns another EOF token.
        """
        self._skip_whitespace()
        self._skip_comment()

        start_line = self._line
        start_column = self._column
        char = self._peek()

        if not char:
            return self._make_token(TokenType.EOF, "", start_line, start_column)

        if char in SINGLE_TOKENS:
            self._advance()
            return self._make_token(SINGLE_TOKENS[char], char, start_line, start_column)

        if char in self.DIGITS:
            return self._scan_number(start_line, start_column)

        if char.isalpha():
            return self._scan_word(start_line, start_column)

        raise InvalidCharacterError(
            char,
            SourceLocation(self.filename, start_line, start_column),
        )

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _peek(self, offset: int = 0) -> str:
        """Look at a character without consuming it ('' past the end)."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character."""
        if self._pos >= len(self.source):
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    def _make_token(
        self,
        token_type: TokenType,
        text: str,
        line: int,
        column: int,
    ) -> Token:
        return Token(token_type, text, line, column, self.filename)

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace(self) -> None:
        while self._peek() and self._peek() in self.WHITESPACE:
            self._advance()

    def _skip_comment(self) -> None:
        """Skip a '#' comment, leaving the terminating newline in place."""
        if self._peek() == "#":
            while self._peek() and self._peek() != "\n":
                self._advance()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """
        Scan a number: digits, optionally followed by '.' and more digits.

        Raises:
            MalformedNumberError: If the '.' is not followed by a digit
        """
        chars = []
        while self._peek() and self._peek() in self.DIGITS:
            chars.append(self._advance())

        if self._peek() == ".":
            if not (self._peek(1) and self._peek(1) in self.DIGITS):
                raise MalformedNumberError(
                    "".join(chars) + ".",
                    SourceLocation(self.filename, start_line, start_column),
                )
            chars.append(self._advance())
            while self._peek() and self._peek() in self.DIGITS:
                chars.append(self._advance())

        return self._make_token(TokenType.NUMBER, "".join(chars), start_line, start_column)

    def _scan_word(self, start_line: int, start_column: int) -> Token:
        """Scan a keyword or identifier (letter followed by letters/digits)."""
        chars = []
        while self._peek() and (self._peek().isalpha() or self._peek() in self.DIGITS):
            chars.append(self._advance())

        word = "".join(chars)
        token_type = KEYWORDS.get(word, TokenType.IDENTIFIER)
        return self._make_token(token_type, word, start_line, start_column)
