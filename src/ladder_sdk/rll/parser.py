"""
Ladder Recursive Descent Parser
===============================

This module implements the single-pass parser for the ladder source
language. It pulls tokens from the lexer one at a time, checks every
semantic rule as soon as the relevant token is read, and drives the
code generator and the emitter as side effects of parsing. No syntax
tree is built.

Grammar (Simplified EBNF)
-------------------------
program     ::= NEWLINE* (statement NEWLINE+)* EOF
statement   ::= task | routine | rung | instruction | tag
              | 'ENDRUNG' | 'ENDROUTINE' | 'ENDTASK'
task        ::= 'TASK' '<' task_type '>' IDENTIFIER
task_type   ::= 'PERIOD' '=' NUMBER | 'EVENT' '=' IDENTIFIER | 'CONTINUOUS'
routine     ::= 'ROUTINE' IDENTIFIER
rung        ::= 'RUNG' IDENTIFIER?
instruction ::= ('XIC' | 'XIO' | 'OTE' | 'OTL' | 'OTU') operand
              | 'JSR' IDENTIFIER | 'EMIT' IDENTIFIER | 'RET'
operand     ::= IDENTIFIER ('.' NUMBER)?
tag         ::= 'TAG' ('[' NUMBER ']')? IDENTIFIER '=' ('TRUE' | 'FALSE')

Nesting
-------
Blocks must nest as TASK > ROUTINE > RUNG. The parser tracks open
blocks on an explicit scope stack, so a misplaced block shows up as a
mismatch at the top of the stack.

Deferred Checks
---------------
A routine or event may be declared after the JSR or EMIT that names
it. Those references are collected while parsing and checked once the
whole source has been read.

Example Usage
-------------
>>> from ladder_sdk.rll.lexer import Lexer
>>> from ladder_sdk.rll.emitter import Emitter
>>> from ladder_sdk.rll.parser import Parser
>>> emitter = Emitter()
>>> Parser(Lexer(source, "plant.rll"), emitter).parse()
>>> print(emitter.text)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging

from ladder_sdk.rll.codegen import CodeGenerator, Instruction
from ladder_sdk.rll.emitter import Emitter
from ladder_sdk.rll.errors import (
    DuplicateMainError,
    IndexOutOfBoundsError,
    InvalidArrayLengthError,
    InvalidStatementError,
    InvalidTaskTypeError,
    MissingIndexError,
    MissingMainError,
    PeriodTooShortError,
    ScopeError,
    TagNameTooLongError,
    UndeclaredTagError,
    UndefinedEventError,
    UndefinedRoutineError,
    UnexpectedTokenError,
)
from ladder_sdk.rll.lexer import SINGLE_TOKENS, Lexer, Token, TokenType

logger = logging.getLogger(__name__)

# Minimum period of a periodic task
PERIOD_LOWER_BOUND = 20

# Maximum length of a tag name
TAG_CHARACTER_LIMIT = 7

# Routine every task must define; called at the end of each task block
ENTRY_ROUTINE = "Main"


class Scope(Enum):
    """Blocks that can be open on the scope stack, outermost first."""

    TASK = 0
    ROUTINE = 1
    RUNG = 2


@dataclass(frozen=True)
class TagDescriptor:
    """
    A declared tag.

    Attributes:
        name: Tag name
        length: 0 for a scalar tag, otherwise the number of array elements
    """
    name: str
    length: int = 0

    @property
    def is_array(self) -> bool:
        return self.length > 0


_TYPE_NAMES = {
    TokenType.EOF: "end of input",
    TokenType.NEWLINE: "end of line",
    TokenType.NUMBER: "number",
    TokenType.IDENTIFIER: "identifier",
}


def _describe_type(token_type: TokenType) -> str:
    """Name of a token type as written in error messages."""
    if token_type in _TYPE_NAMES:
        return _TYPE_NAMES[token_type]
    for char, single_type in SINGLE_TOKENS.items():
        if single_type == token_type:
            return f"'{char}'"
    return token_type.name


class Parser:
    """
    Single-pass parser and semantic checker for ladder source.

    The parser keeps a three-token window (previous, current, peek) and
    advances it one token at a time. Task headers and tag declarations
    are written to the emitter directly; routine bodies go through the
    code generator and are emitted when their task closes.

    Attributes:
        tags: Declared tags in declaration order
        routines: Names of all declared routines
        events: Names of all events declared by TASK<EVENT=...>
        jumps: JSR operand tokens awaiting validation
        emitted_events: EMIT operand tokens awaiting validation
        scopes: Stack of open blocks
        main_flag: True once the open task has declared its entry routine
        task_count: Number of tasks closed so far
    """

    def __init__(
        self,
        lexer: Lexer,
        emitter: Emitter,
        code_generator: Optional[CodeGenerator] = None,
        min_period: int = PERIOD_LOWER_BOUND,
        tag_name_limit: int = TAG_CHARACTER_LIMIT,
        entry_routine: str = ENTRY_ROUTINE,
    ):
        """
        Initialize the parser and load the first two tokens.

        Args:
            lexer: Token source
            emitter: Destination for the generated program
            code_generator: Rung code generator (a default one if None)
            min_period: Smallest allowed PERIOD value
            tag_name_limit: Longest allowed tag name
            entry_routine: Routine every task must define
        """
        self.lexer = lexer
        self.emitter = emitter
        self.code_generator = code_generator or CodeGenerator(entry_routine=entry_routine)
        self.min_period = min_period
        self.tag_name_limit = tag_name_limit
        self.entry_routine = entry_routine

        # Symbol tables
        self.tags: list[TagDescriptor] = []
        self.routines: set[str] = set()
        self.events: set[str] = set()

        # References checked after the last statement
        self.jumps: list[Token] = []
        self.emitted_events: list[Token] = []

        self.scopes: list[Scope] = []
        self.main_flag: bool = False
        self.task_count: int = 0

        eof = Token(TokenType.EOF, "", filename=lexer.filename)
        self._previous: Token = eof
        self._current: Token = eof
        self._peek: Token = eof

        # Fill the current and peek slots
        self._next_token()
        self._next_token()

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    @property
    def current_token(self) -> Token:
        return self._current

    def _next_token(self) -> None:
        """Shift the window one token forward."""
        self._previous = self._current
        self._current = self._peek
        self._peek = self.lexer.next_token()

    def _check(self, token_type: TokenType) -> bool:
        return self._current.type == token_type

    def _match(self, token_type: TokenType) -> Token:
        """
        Consume the current token, which must be of 'token_type'.

        Returns:
            The consumed token

        Raises:
            UnexpectedTokenError: If the current token has another type
        """
        if not self._check(token_type):
            raise UnexpectedTokenError(
                _describe_type(token_type),
                self._current.describe(),
                self._current.location,
            )
        self._next_token()
        return self._previous

    # =========================================================================
    # Program
    # =========================================================================

    def parse(self) -> None:
        """
        Parse the whole source, run the deferred checks and flush the emitter.

        Raises:
            RLLError: On the first lexical, syntax or semantic error
            OutputWriteError: If the emitter cannot write its output
        """
        # Blank and comment-only lines before the first statement
        while self._check(TokenType.NEWLINE):
            self._next_token()

        while not self._check(TokenType.EOF):
            self._statement()

        if self.scopes:
            raise ScopeError(
                f"missing END{self.scopes[-1].name} at end of input",
                self._current.location,
            )

        logger.debug(
            f"Checking {len(self.emitted_events)} emitted events "
            f"and {len(self.jumps)} jumps"
        )

        for event in self.emitted_events:
            if event.text not in self.events:
                raise UndefinedEventError(event.text, event.location)

        for jump in self.jumps:
            if jump.text not in self.routines:
                raise UndefinedRoutineError(jump.text, jump.location)

        self.emitter.flush()

    def _statement(self) -> None:
        """Parse one statement and the end of line(s) after it."""
        token = self._current

        if token.type == TokenType.TASK:
            self._next_token()
            self._task()
        elif token.type == TokenType.ROUTINE:
            self._next_token()
            self._routine()
        elif token.type == TokenType.RUNG:
            self._next_token()
            self._rung()
        elif token.is_instruction():
            self._next_token()
            self._instruction()
        elif token.type == TokenType.ENDRUNG:
            self._next_token()
            self._end_rung()
        elif token.type == TokenType.ENDROUTINE:
            self._next_token()
            self._end_routine()
        elif token.type == TokenType.ENDTASK:
            self._next_token()
            self._end_task()
        elif token.type == TokenType.TAG:
            self._next_token()
            self._tag()
        else:
            raise InvalidStatementError(token.describe(), token.location)

        self._new_line()

    def _new_line(self) -> None:
        """Every statement ends with one or more newlines."""
        self._match(TokenType.NEWLINE)
        while self._check(TokenType.NEWLINE):
            self._next_token()

    # =========================================================================
    # Scope Handling
    # =========================================================================

    def _require_scope(self, scope: Scope, message: str) -> None:
        """Fail unless 'scope' is the innermost open block."""
        if not self.scopes or self.scopes[-1] != scope:
            raise ScopeError(message, self._previous.location)

    def _close_scope(self, scope: Scope) -> None:
        """Pop the innermost block, which must be 'scope'."""
        end_token = self._previous
        if not self.scopes:
            raise ScopeError(
                f"too many end statements: {end_token.text} without matching {scope.name}",
                end_token.location,
            )

        top = self.scopes.pop()
        if top == scope:
            return
        if top.value > scope.value:
            message = f"missing matching END{top.name} before {end_token.text}"
        else:
            message = f"missing matching {scope.name} for {end_token.text}"
        raise ScopeError(message, end_token.location)

    # =========================================================================
    # Tasks
    # =========================================================================

    def _task(self) -> None:
        if self.scopes:
            raise ScopeError(
                "tasks may not be inside of other structures",
                self._previous.location,
            )
        self.scopes.append(Scope.TASK)
        self.emitter.append("TASK ")

        self._task_type()
        name = self._match(TokenType.IDENTIFIER)
        self.emitter.append(" ")
        self.emitter.append_line(name.text)
        self.emitter.append_line("{")
        logger.debug(f"Task {name.text} opened at line {name.line}")

    def _task_type(self) -> None:
        self._match(TokenType.OPEN_ANGLE)

        if self._check(TokenType.PERIOD):
            self._period_type()
        elif self._check(TokenType.EVENT):
            self._event_type()
        elif self._check(TokenType.CONTINUOUS):
            self._next_token()
            self.emitter.append("CONTINUOUS")
        else:
            raise InvalidTaskTypeError(
                self._current.text or self._current.describe(),
                self._current.location,
            )

        self._match(TokenType.CLOSE_ANGLE)

    def _period_type(self) -> None:
        self._match(TokenType.PERIOD)
        self.emitter.append("PERIOD ")
        self._match(TokenType.EQ)
        period = self._match(TokenType.NUMBER)
        self.emitter.append(period.text)

        if float(period.text) < self.min_period:
            raise PeriodTooShortError(period.text, self.min_period, period.location)

    def _event_type(self) -> None:
        self._match(TokenType.EVENT)
        self.emitter.append("EVENT ")
        self._match(TokenType.EQ)
        event = self._match(TokenType.IDENTIFIER)
        self.emitter.append(event.text)

        self.events.add(event.text)

    def _end_task(self) -> None:
        end_token = self._previous
        self._close_scope(Scope.TASK)

        if not self.main_flag:
            raise MissingMainError(self.entry_routine, end_token.location)
        self.main_flag = False

        self.emitter.append_line(self.code_generator.finish())
        self.emitter.append_line("}")
        self.task_count += 1
        logger.debug(f"Task closed at line {end_token.line}")

    # =========================================================================
    # Routines and Rungs
    # =========================================================================

    def _routine(self) -> None:
        self._require_scope(Scope.TASK, "routines must be defined inside of a task")
        self.scopes.append(Scope.ROUTINE)

        name = self._match(TokenType.IDENTIFIER)
        self.code_generator.begin_routine(name.text)

        if name.text == self.entry_routine:
            if self.main_flag:
                raise DuplicateMainError(self.entry_routine, name.location)
            self.main_flag = True

        self.routines.add(name.text)
        logger.debug(f"Routine {name.text} opened at line {name.line}")

    def _end_routine(self) -> None:
        self._close_scope(Scope.ROUTINE)
        self.code_generator.end_routine()

    def _rung(self) -> None:
        self._require_scope(Scope.ROUTINE, "rungs must be defined inside of a routine")
        self.scopes.append(Scope.RUNG)

        if self._check(TokenType.IDENTIFIER):
            self._next_token()
            self.code_generator.begin_rung(self._previous.text)
        else:
            self.code_generator.begin_rung()

    def _end_rung(self) -> None:
        self._close_scope(Scope.RUNG)
        self.code_generator.end_rung()

    # =========================================================================
    # Instructions
    # =========================================================================

    def _instruction(self) -> None:
        instruction_token = self._previous
        self._require_scope(
            Scope.RUNG,
            f"instruction {instruction_token.text} must be inside of a rung",
        )
        instruction = Instruction(instruction_token.type.name)
        location = instruction_token.location

        if instruction == Instruction.RET:
            self.code_generator.add_instruction(instruction, "", location)
            return

        operand = self._match(TokenType.IDENTIFIER)
        target = operand.text

        if instruction == Instruction.JSR:
            self.jumps.append(operand)
        elif instruction == Instruction.EMIT:
            self.emitted_events.append(operand)
        else:
            target = self._tag_reference(operand)

        self.code_generator.add_instruction(instruction, target, location)

    def _tag_reference(self, operand: Token) -> str:
        """
        Resolve a tag operand, reading '.index' for tag arrays.

        Returns:
            The operand text as written to the output (name or name.index)
        """
        descriptor = self.find_tag(operand.text)
        if descriptor is None:
            raise UndeclaredTagError(operand.text, operand.location)

        if not descriptor.is_array:
            return operand.text

        if not self._check(TokenType.INDEXER):
            raise MissingIndexError(descriptor.name, descriptor.length, self._current.location)
        indexer = self._match(TokenType.INDEXER)
        index = self._match(TokenType.NUMBER)

        if not index.text.isdigit():
            raise UnexpectedTokenError("integer index", index.describe(), index.location)
        if int(index.text) >= descriptor.length:
            raise IndexOutOfBoundsError(
                descriptor.name, index.text, descriptor.length, index.location
            )

        return operand.text + indexer.text + index.text

    def find_tag(self, name: str) -> Optional[TagDescriptor]:
        """
        Return the first tag declared with 'name', or None.

        A name declared more than once keeps the length of its first
        declaration.
        """
        for descriptor in self.tags:
            if descriptor.name == name:
                return descriptor
        return None

    # =========================================================================
    # Tags
    # =========================================================================

    def _tag(self) -> None:
        length = 0
        if self._check(TokenType.OPEN_BRACKET):
            length = self._tag_array()
        else:
            self.emitter.append("TAG ")

        name = self._match(TokenType.IDENTIFIER)
        if len(name.text) > self.tag_name_limit:
            raise TagNameTooLongError(name.text, self.tag_name_limit, name.location)
        self.emitter.append(name.text)

        self.tags.append(TagDescriptor(name.text, length))
        self._match(TokenType.EQ)

        if self._check(TokenType.TRUE):
            self._next_token()
            self.emitter.append_line(" TRUE")
        else:
            self._match(TokenType.FALSE)
            self.emitter.append_line(" FALSE")

    def _tag_array(self) -> int:
        """Parse '[n]' and return the array length."""
        self._match(TokenType.OPEN_BRACKET)
        length = self._match(TokenType.NUMBER)

        if not length.text.isdigit() or int(length.text) == 0:
            raise InvalidArrayLengthError(length.text, length.location)

        self.emitter.append(f"TAG_ARRAY {length.text} ")
        self._match(TokenType.CLOSE_BRACKET)
        return int(length.text)
