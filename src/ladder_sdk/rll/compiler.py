"""
Ladder Compiler Main Module
===========================

This module provides the main compiler interface for ladder source.
It wires the lexer, parser, code generator and emitter together:

    Source → Lexer → Parser (+ Code Generator) → Emitter → Output

Translation is a single pass: the parser pulls tokens on demand and the
output is produced while the source is read. Nothing is written to disk
until the whole source has been translated and checked.

Usage
-----
Command line:
    $ ladc plant.rll -o plant.out

Programmatic:
    >>> from ladder_sdk.rll import compile_ladder
    >>> text = compile_ladder(source)

Configuration
-------------
CompilerOptions holds the limits and layout used by the translator.
CompilerOptions.from_env() reads overrides from the environment:

    LADC_INDENT          Indentation string, e.g. "    " (default: tab)
    LADC_MIN_PERIOD      Smallest PERIOD value accepted (default: 20)
    LADC_TAG_NAME_LIMIT  Longest tag name accepted (default: 7)

Error Handling
--------------
The first error aborts translation with an RLLError subclass. There is
no error recovery and no partial output.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
import logging
import os

from ladder_sdk.rll.codegen import CodeGenerator
from ladder_sdk.rll.emitter import Emitter
from ladder_sdk.rll.lexer import Lexer
from ladder_sdk.rll.parser import (
    ENTRY_ROUTINE,
    PERIOD_LOWER_BOUND,
    TAG_CHARACTER_LIMIT,
    Parser,
)

logger = logging.getLogger(__name__)

# Output file used when none is given
DEFAULT_OUTPUT = "Program.out"


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        indent: String written once per indentation level of routine code
        min_period: Smallest PERIOD accepted for periodic tasks
        tag_name_limit: Maximum number of characters in a tag name
        entry_routine: Routine every task must define and call
    """
    indent: str = "\t"
    min_period: int = PERIOD_LOWER_BOUND
    tag_name_limit: int = TAG_CHARACTER_LIMIT
    entry_routine: str = ENTRY_ROUTINE

    @classmethod
    def from_env(cls) -> "CompilerOptions":
        """
        Create CompilerOptions from environment variables.

        Invalid numeric values are ignored and the default is kept.
        """
        options = cls()

        if indent := os.environ.get("LADC_INDENT"):
            options.indent = indent

        if min_period := os.environ.get("LADC_MIN_PERIOD"):
            try:
                options.min_period = int(min_period)
            except ValueError:
                logger.warning(f"Ignoring invalid LADC_MIN_PERIOD={min_period!r}")

        if limit := os.environ.get("LADC_TAG_NAME_LIMIT"):
            try:
                options.tag_name_limit = int(limit)
            except ValueError:
                logger.warning(f"Ignoring invalid LADC_TAG_NAME_LIMIT={limit!r}")

        return options


@dataclass
class CompilerResult:
    """
    Result of a compilation.

    Attributes:
        filename: Source filename
        success: True if compilation succeeded
        output: Generated program text
        output_path: File the program was written to (None if in memory)
        task_count: Number of tasks translated
        tag_count: Number of TAG declarations
        routine_count: Number of distinct routine names
    """
    filename: str = ""
    success: bool = False
    output: str = ""
    output_path: Optional[Path] = None
    task_count: int = 0
    tag_count: int = 0
    routine_count: int = 0


class LadderCompiler:
    """
    Ladder source to target program compiler.

    Example:
        compiler = LadderCompiler()
        result = compiler.compile_file("plant.rll", "plant.out")
        print(result.output)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(
        self,
        source: str,
        filename: str = "<input>",
        output_path: Optional[Union[str, Path]] = None,
    ) -> CompilerResult:
        """
        Compile ladder source code.

        Args:
            source: Ladder source text
            filename: Source filename for error messages
            output_path: File to write the program to (None keeps it in memory)

        Returns:
            CompilerResult with the generated text and statistics

        Raises:
            RLLError: If translation fails or the output cannot be written
        """
        emitter = Emitter(output_path)
        parser = self._make_parser(source, filename, emitter)

        logger.debug(f"Compiling {filename}")
        parser.parse()

        return CompilerResult(
            filename=filename,
            success=True,
            output=emitter.text,
            output_path=emitter.path,
            task_count=parser.task_count,
            tag_count=len(parser.tags),
            routine_count=len(parser.routines),
        )

    def compile_file(
        self,
        filepath: Union[str, Path],
        output_path: Optional[Union[str, Path]] = None,
    ) -> CompilerResult:
        """
        Compile a ladder source file.

        Raises:
            FileNotFoundError: If the source file does not exist
            RLLError: If translation fails or the output cannot be written
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(path), output_path)

    def _make_parser(self, source: str, filename: str, emitter: Emitter) -> Parser:
        code_generator = CodeGenerator(
            indent=self.options.indent,
            entry_routine=self.options.entry_routine,
        )
        return Parser(
            Lexer(source, filename),
            emitter,
            code_generator,
            min_period=self.options.min_period,
            tag_name_limit=self.options.tag_name_limit,
            entry_routine=self.options.entry_routine,
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_ladder(source: str, filename: str = "<input>") -> str:
    """
    Compile ladder source code and return the generated program.

    Example:
        >>> compile_ladder("TASK<CONTINUOUS> t\\nROUTINE Main\\nENDROUTINE\\nENDTASK")
        'TASK CONTINUOUS t\\n{\\ndef Main():\\n\\tpass\\nMain()\\n}\\n'
    """
    return LadderCompiler().compile_source(source, filename).output


def compile_file(
    filepath: Union[str, Path],
    output_path: Optional[Union[str, Path]] = DEFAULT_OUTPUT,
) -> str:
    """
    Compile a ladder source file, writing the program to output_path.

    Returns:
        The generated program text
    """
    result = LadderCompiler().compile_file(filepath, output_path)
    return result.output
