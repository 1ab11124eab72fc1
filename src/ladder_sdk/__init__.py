"""
Ladder SDK - Ladder Logic to Script Translator
==============================================

This package provides a translator for a small structured ladder logic
language. A source file declares boolean tags and scheduled tasks; each
task holds routines made of rungs, and each rung is a series of contact
checks (XIC, XIO) followed by outputs (OTE, OTL, OTU, JSR, RET, EMIT).
The translator turns it into a block-structured scripting form.

Main Components
---------------
- **rll**: the translator itself (lexer, parser, code generator, emitter)
- **cli**: the ``ladc`` command-line tool

Quick Start
-----------
Translate a string:
    >>> from ladder_sdk import compile_ladder
    >>> text = compile_ladder(source)

Translate a file:
    >>> from ladder_sdk import LadderCompiler
    >>> result = LadderCompiler().compile_file("plant.rll", "plant.out")

Or use the command-line tool:
    $ ladc plant.rll -o plant.out
"""

__version__ = "1.0.0"

from ladder_sdk.errors import ErrorKind, LadderError, SourceLocation
from ladder_sdk.rll import (
    LadderCompiler,
    CompilerOptions,
    CompilerResult,
    compile_ladder,
    compile_file,
    RLLError,
)

__all__ = [
    # Version info
    "__version__",
    # Compiler
    "LadderCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_ladder",
    "compile_file",
    # Exception hierarchy
    "ErrorKind",
    "LadderError",
    "SourceLocation",
    "RLLError",
]
