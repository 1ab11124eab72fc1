# =============================================================================
# test_codegen.py - Rung Code Generator Tests
# =============================================================================
# Tests for the routine and rung rendering of the ladder translator.
#
# Test coverage includes:
#   - Routine definitions and empty routine bodies
#   - Named and anonymous rung variables
#   - Contact instructions (XIC, XIO)
#   - Output instructions and the if/else blocks they produce
#   - Error conditions (input after output, unknown mnemonics)
# =============================================================================

import pytest
from ladder_sdk.rll.codegen import CodeGenerator, Instruction
from ladder_sdk.rll.errors import InputAfterOutputError, InvalidInstructionError


# =============================================================================
# Helper Functions
# =============================================================================

def lines(*parts: str) -> str:
    return "\n".join(parts)


# =============================================================================
# Routine Tests
# =============================================================================

class TestRoutines:
    """Test routine definitions."""

    def test_empty_routine(self):
        """A routine without rungs gets a pass body."""
        gen = CodeGenerator()
        gen.begin_routine("Main")
        gen.end_routine()
        assert gen.finish() == "def Main():\n\tpass\nMain()"

    def test_finish_has_no_trailing_newline(self):
        gen = CodeGenerator()
        gen.begin_routine("Main")
        gen.end_routine()
        assert not gen.finish().endswith("\n")

    def test_finish_resets_state(self):
        """The generator can be reused for the next task."""
        gen = CodeGenerator()
        gen.begin_routine("Main")
        gen.begin_rung()
        gen.end_rung()
        gen.end_routine()
        gen.finish()

        gen.begin_routine("Main")
        gen.begin_rung()
        gen.end_rung()
        gen.end_routine()
        assert gen.finish() == lines(
            "def Main():",
            "\trung_0_entry = True",
            "Main()",
        )

    def test_custom_indent(self):
        gen = CodeGenerator(indent="    ")
        gen.begin_routine("Main")
        gen.begin_rung()
        gen.add_instruction(Instruction.RET)
        gen.end_rung()
        gen.end_routine()
        assert gen.finish() == lines(
            "def Main():",
            "    rung_0_entry = True",
            "    if rung_0_entry:",
            "        return",
            "Main()",
        )

    def test_custom_entry_routine(self):
        gen = CodeGenerator(entry_routine="Start")
        gen.begin_routine("Start")
        gen.end_routine()
        assert gen.finish().endswith("\nStart()")


# =============================================================================
# Rung Tests
# =============================================================================

class TestRungs:
    """Test rung variable naming and blocks."""

    def test_named_rung(self):
        gen = CodeGenerator()
        gen.begin_routine("Main")
        assert gen.begin_rung("start") == "rung_start_entry"
        assert gen.rung_name == "rung_start_entry"

    def test_anonymous_rungs_are_numbered(self):
        gen = CodeGenerator()
        gen.begin_routine("Main")
        assert gen.begin_rung() == "rung_0_entry"
        gen.end_rung()
        assert gen.begin_rung() == "rung_1_entry"

    def test_named_rungs_advance_counter(self):
        """A named rung still takes a position in the routine."""
        gen = CodeGenerator()
        gen.begin_routine("Main")
        gen.begin_rung("first")
        gen.end_rung()
        assert gen.begin_rung() == "rung_1_entry"

    def test_counter_restarts_per_routine(self):
        gen = CodeGenerator()
        gen.begin_routine("Main")
        gen.begin_rung()
        gen.end_rung()
        gen.end_routine()
        gen.begin_routine("other")
        assert gen.begin_rung() == "rung_0_entry"

    def test_inputs_only_rung_has_no_block(self):
        gen = CodeGenerator()
        gen.begin_routine("Main")
        gen.begin_rung()
        gen.add_instruction(Instruction.XIC, "a")
        gen.add_instruction(Instruction.XIO, "b")
        gen.end_rung()
        gen.end_routine()
        assert gen.finish() == lines(
            "def Main():",
            "\trung_0_entry = True",
            "\trung_0_entry &= a",
            "\trung_0_entry &= not b",
            "Main()",
        )


# =============================================================================
# Output Instruction Tests
# =============================================================================

class TestOutputs:
    """Test rendering of output instructions."""

    def render(self, *instructions) -> str:
        gen = CodeGenerator()
        gen.begin_routine("Main")
        gen.begin_rung()
        for instruction, target in instructions:
            gen.add_instruction(instruction, target)
        gen.end_rung()
        gen.end_routine()
        return gen.finish()

    def test_ote_has_else_branch(self):
        assert self.render((Instruction.OTE, "lamp")) == lines(
            "def Main():",
            "\trung_0_entry = True",
            "\tif rung_0_entry:",
            "\t\tlamp = True",
            "\telse:",
            "\t\tlamp = False",
            "Main()",
        )

    def test_latch_and_unlatch_have_no_else(self):
        assert self.render((Instruction.OTL, "a"), (Instruction.OTU, "b")) == lines(
            "def Main():",
            "\trung_0_entry = True",
            "\tif rung_0_entry:",
            "\t\ta = True",
            "\t\tb = False",
            "Main()",
        )

    def test_emit_event(self):
        assert "\t\tEmitEvent('alarm')" in self.render((Instruction.EMIT, "alarm"))

    def test_jump_to_subroutine(self):
        assert "\t\tpump()" in self.render((Instruction.JSR, "pump"))

    def test_string_mnemonics(self):
        """Instructions may be passed by their mnemonic."""
        assert self.render(("OTL", "a")) == self.render((Instruction.OTL, "a"))

    def test_array_element_target(self):
        assert "\t\tlamps.3 = True" in self.render((Instruction.OTL, "lamps.3"))

    def test_reference_translation(self):
        """Full routine pair with every kind of instruction."""
        gen = CodeGenerator()
        gen.begin_routine("Main")
        gen.begin_rung("firstRung")
        gen.add_instruction("XIO", "MyTag1")
        gen.add_instruction("XIC", "MyTag2")
        gen.add_instruction("OTL", "MyTag3")
        gen.add_instruction("OTU", "MyTag4")
        gen.add_instruction("OTE", "MyTag5")
        gen.add_instruction("JSR", "otherRoutine")
        gen.end_rung()
        gen.end_routine()
        gen.begin_routine("otherRoutine")
        gen.begin_rung()
        gen.add_instruction("RET")
        gen.end_rung()
        gen.end_routine()

        assert gen.finish() == lines(
            "def Main():",
            "\trung_firstRung_entry = True",
            "\trung_firstRung_entry &= not MyTag1",
            "\trung_firstRung_entry &= MyTag2",
            "\tif rung_firstRung_entry:",
            "\t\tMyTag3 = True",
            "\t\tMyTag4 = False",
            "\t\tMyTag5 = True",
            "\t\totherRoutine()",
            "\telse:",
            "\t\tMyTag5 = False",
            "def otherRoutine():",
            "\trung_0_entry = True",
            "\tif rung_0_entry:",
            "\t\treturn",
            "Main()",
        )


# =============================================================================
# Error Tests
# =============================================================================

class TestErrors:
    """Test code generator error conditions."""

    def test_input_after_output(self):
        gen = CodeGenerator()
        gen.begin_routine("Main")
        gen.begin_rung()
        gen.add_instruction(Instruction.OTE, "a")
        with pytest.raises(InputAfterOutputError, match="XIC"):
            gen.add_instruction(Instruction.XIC, "b")

    def test_new_rung_accepts_inputs_again(self):
        gen = CodeGenerator()
        gen.begin_routine("Main")
        gen.begin_rung()
        gen.add_instruction(Instruction.OTE, "a")
        gen.end_rung()
        gen.begin_rung()
        gen.add_instruction(Instruction.XIC, "b")

    def test_unknown_mnemonic(self):
        gen = CodeGenerator()
        gen.begin_routine("Main")
        gen.begin_rung()
        with pytest.raises(InvalidInstructionError, match="invalid instruction ADD"):
            gen.add_instruction("ADD", "a")

    def test_output_passed_as_input(self):
        gen = CodeGenerator()
        gen.begin_routine("Main")
        gen.begin_rung()
        with pytest.raises(InvalidInstructionError):
            gen.add_input(Instruction.OTE, "a")
