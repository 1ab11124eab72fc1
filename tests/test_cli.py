# =============================================================================
# test_cli.py - ladc Command-Line Tests
# =============================================================================
# Tests for the ladc command-line tool using Click's CliRunner.
#
# Test coverage includes:
#   - Successful translation and output file naming
#   - Exit codes for translation errors and bad arguments
#   - Token dump mode
#   - Version and verbose output
# =============================================================================

from pathlib import Path

from click.testing import CliRunner
from ladder_sdk.cli.errors import ExitCode
from ladder_sdk.cli.ladc import main


# =============================================================================
# Sample Programs
# =============================================================================

VALID_SOURCE = """\
TAG lamp = FALSE
TASK<CONTINUOUS> blink
ROUTINE Main
RUNG
XIO lamp
OTE lamp
ENDRUNG
ENDROUTINE
ENDTASK
"""

INVALID_SOURCE = """\
TASK<CONTINUOUS> blink
ROUTINE Main
RUNG
XIC ghost
ENDRUNG
ENDROUTINE
ENDTASK
"""


# =============================================================================
# Translation Tests
# =============================================================================

class TestLadcTranslate:
    """Test ladc translation runs."""

    def test_default_output(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("blink.rll").write_text(VALID_SOURCE)

            result = runner.invoke(main, ["blink.rll"])

            assert result.exit_code == ExitCode.SUCCESS
            assert "Compiled blink.rll -> Program.out" in result.output
            output = Path("Program.out").read_text()
            assert output.startswith("TAG lamp FALSE\nTASK CONTINUOUS blink\n{\n")
            assert output.endswith("Main()\n}\n")

    def test_custom_output(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("blink.rll").write_text(VALID_SOURCE)

            result = runner.invoke(main, ["blink.rll", "-o", "blink.out"])

            assert result.exit_code == 0
            assert Path("blink.out").exists()
            assert not Path("Program.out").exists()

    def test_translation_error(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("bad.rll").write_text(INVALID_SOURCE)

            result = runner.invoke(main, ["bad.rll"])

            assert result.exit_code == ExitCode.BUILD_ERROR
            assert "referencing tag ghost before assignment" in result.output
            assert not Path("Program.out").exists()

    def test_missing_source_file(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["missing.rll"])
            assert result.exit_code == 2

    def test_environment_options(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("blink.rll").write_text(VALID_SOURCE)

            result = runner.invoke(main, ["blink.rll"], env={"LADC_INDENT": "  "})

            assert result.exit_code == 0
            assert "\n  rung_0_entry = True\n" in Path("Program.out").read_text()

    def test_verbose(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("blink.rll").write_text(VALID_SOURCE)

            result = runner.invoke(main, ["-v", "blink.rll"])

            assert result.exit_code == 0
            assert "Translating blink.rll" in result.output
            assert "1 tasks, 1 routines, 1 tags" in result.output


# =============================================================================
# Other Options
# =============================================================================

class TestLadcOptions:
    """Test non-translating options."""

    def test_tokens(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("blink.rll").write_text(VALID_SOURCE)

            result = runner.invoke(main, ["--tokens", "blink.rll"])

            assert result.exit_code == 0
            assert "Token(TAG, 'TAG', 1:1)" in result.output
            assert "Token(EOF, " in result.output
            assert not Path("Program.out").exists()

    def test_tokens_lexical_error(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("bad.rll").write_text("TAG my_tag = TRUE\n")

            result = runner.invoke(main, ["--tokens", "bad.rll"])

            assert result.exit_code == ExitCode.BUILD_ERROR
            assert "unknown token: _" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "ladc" in result.output
        assert "1.0.0" in result.output

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "SOURCE_FILE" in result.output
        assert "--out" in result.output
