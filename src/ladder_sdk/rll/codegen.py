"""
Rung Code Generator
===================

This module renders the routines of one task into the target scripting
form. The parser calls it instruction by instruction while it reads the
source; the generator never sees tokens and knows nothing of the source
grammar.

Code Generation Strategy
------------------------
Every routine becomes a function definition and every rung a boolean
variable that starts out True and is AND-ed with each contact:

    RUNG start              rung_start_entry = True
    XIC button              rung_start_entry &= button
    XIO fault               rung_start_entry &= not fault
    OTE motor               if rung_start_entry:
    OTL seen                    motor = True
    ENDRUNG                     seen = True
                            else:
                                motor = False

Outputs are buffered until the rung ends because the guarded block can
only be written once all outputs are known. OTE tracks the rung state,
so it contributes to both branches; OTL and OTU only act on a true rung.

Instruction Mapping
-------------------
| Instruction | Rung true            | Rung false     |
|-------------|----------------------|----------------|
| XIC t       | (contact) &= t       |                |
| XIO t       | (contact) &= not t   |                |
| OTE t       | t = True             | t = False      |
| OTL t       | t = True             |                |
| OTU t       | t = False            |                |
| JSR r       | r()                  |                |
| RET         | return               |                |
| EMIT e      | EmitEvent('e')       |                |

Example
-------
>>> gen = CodeGenerator()
>>> gen.begin_routine("Main")
>>> gen.end_routine()
>>> print(gen.finish())
def Main():
	pass
Main()
"""

from enum import Enum
from typing import Optional, Union
import logging

from ladder_sdk.errors import SourceLocation
from ladder_sdk.rll.errors import InputAfterOutputError, InvalidInstructionError

logger = logging.getLogger(__name__)


class Instruction(Enum):
    """Rung instructions understood by the generator."""

    XIC = "XIC"
    XIO = "XIO"
    OTE = "OTE"
    OTL = "OTL"
    OTU = "OTU"
    JSR = "JSR"
    RET = "RET"
    EMIT = "EMIT"


INPUT_INSTRUCTIONS = frozenset({Instruction.XIC, Instruction.XIO})
OUTPUT_INSTRUCTIONS = frozenset({
    Instruction.OTE,
    Instruction.OTL,
    Instruction.OTU,
    Instruction.JSR,
    Instruction.RET,
    Instruction.EMIT,
})


class CodeGenerator:
    """
    Generates target code for the routines of one task.

    The generator is reused for every task: finish() returns the text
    accumulated since the last call and resets all state.

    Attributes:
        indent: String written once per indentation level
        entry_routine: Routine invoked at the end of every task block
    """

    def __init__(self, indent: str = "\t", entry_routine: str = "Main"):
        self.indent = indent
        self.entry_routine = entry_routine

        # Output lines of the task being generated
        self._output: list[str] = []
        self._indent_level: int = 0

        # Rung state
        self._rung_name: str = ""
        self._rung_number: int = 0
        self._output_seen: bool = False
        self._if_block: list[str] = []
        self._else_block: list[str] = []

    # =========================================================================
    # Output Methods
    # =========================================================================

    def _emit(self, code: str) -> None:
        """Emit a line at the current indentation level."""
        self._output.append(self.indent * self._indent_level + code)

    def _emit_block(self, header: str, statements: list[str]) -> None:
        self._emit(header)
        self._indent_level += 1
        for statement in statements:
            self._emit(statement)
        self._indent_level -= 1

    # =========================================================================
    # Routines and Rungs
    # =========================================================================

    @property
    def rung_name(self) -> str:
        """Variable name of the active rung ('' before the first rung)."""
        return self._rung_name

    def begin_routine(self, name: str) -> None:
        """Open a function definition for routine 'name'."""
        self._emit(f"def {name}():")
        self._indent_level += 1
        self._rung_number = 0
        self._output_seen = False
        self._if_block.clear()
        self._else_block.clear()

    def end_routine(self) -> None:
        """Close the current routine; an empty routine gets a 'pass' body."""
        if self._rung_number == 0:
            self._emit("pass")
        self._indent_level -= 1
        self._rung_number = 0

    def begin_rung(self, name: Optional[str] = None) -> str:
        """
        Start a rung and return its variable name.

        Named rungs use rung_<name>_entry, anonymous ones the zero-based
        position of the rung in its routine. The position advances for
        named rungs as well.
        """
        if name:
            rung_name = f"rung_{name}_entry"
        else:
            rung_name = f"rung_{self._rung_number}_entry"
        self._rung_number += 1

        self._emit(f"{rung_name} = True")
        self._rung_name = rung_name
        self._output_seen = False
        return rung_name

    def end_rung(self) -> None:
        """Write the buffered outputs as an if/else block guarded by the rung."""
        if self._if_block:
            self._emit_block(f"if {self._rung_name}:", self._if_block)
            self._if_block = []

        if self._else_block:
            self._emit_block("else:", self._else_block)
            self._else_block = []

        self._output_seen = False

    # =========================================================================
    # Instructions
    # =========================================================================

    def add_instruction(
        self,
        instruction: Union[Instruction, str],
        target: str = "",
        location: Optional[SourceLocation] = None,
    ) -> None:
        """
        Add one instruction to the active rung.

        Args:
            instruction: Instruction member or its mnemonic ("XIC", ...)
            target: Tag, routine or event operand ('' for RET)
            location: Source position of the instruction, for errors

        Raises:
            InvalidInstructionError: If the mnemonic is unknown
            InputAfterOutputError: If a contact follows an output
        """
        if isinstance(instruction, str):
            try:
                instruction = Instruction(instruction)
            except ValueError:
                raise InvalidInstructionError(instruction, location) from None

        if instruction in INPUT_INSTRUCTIONS:
            self.add_input(instruction, target, location)
        else:
            self.add_output(instruction, target, location)

    def add_input(
        self,
        instruction: Instruction,
        target: str,
        location: Optional[SourceLocation] = None,
    ) -> None:
        """AND a contact into the rung variable."""
        if instruction not in INPUT_INSTRUCTIONS:
            raise InvalidInstructionError(instruction.value, location)
        if self._output_seen:
            raise InputAfterOutputError(instruction.value, location)

        if instruction == Instruction.XIC:
            self._emit(f"{self._rung_name} &= {target}")
        else:
            self._emit(f"{self._rung_name} &= not {target}")

    def add_output(
        self,
        instruction: Instruction,
        target: str = "",
        location: Optional[SourceLocation] = None,
    ) -> None:
        """Buffer an output statement for the end of the rung."""
        if instruction == Instruction.RET:
            self._if_block.append("return")
        elif instruction == Instruction.JSR:
            self._if_block.append(f"{target}()")
        elif instruction == Instruction.OTL:
            self._if_block.append(f"{target} = True")
        elif instruction == Instruction.OTU:
            self._if_block.append(f"{target} = False")
        elif instruction == Instruction.OTE:
            self._if_block.append(f"{target} = True")
            self._else_block.append(f"{target} = False")
        elif instruction == Instruction.EMIT:
            self._if_block.append(f"EmitEvent('{target}')")
        else:
            raise InvalidInstructionError(instruction.value, location)

        self._output_seen = True

    # =========================================================================
    # Task Output
    # =========================================================================

    def finish(self) -> str:
        """
        Append the call to the entry routine and return the task's code.

        The returned text has no trailing newline. All state is reset so
        the generator can be used for the next task.
        """
        self._indent_level = 0
        self._emit(f"{self.entry_routine}()")
        code = "\n".join(self._output)
        logger.debug(f"Generated {len(self._output)} lines of task code")

        self._output = []
        self._rung_name = ""
        self._rung_number = 0
        self._output_seen = False
        self._if_block = []
        self._else_block = []
        return code
