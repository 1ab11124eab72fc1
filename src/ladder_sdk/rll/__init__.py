"""
Relay Ladder Logic Translator
=============================

This package translates ladder logic source, made of scheduled tasks,
routines of boolean rungs and tag declarations, into a block-structured
scripting form.

It provides:

- A lexer (tokenizer) for the ladder source language
- A single-pass parser that checks scopes, tags, routines and events
- A rung code generator that renders contacts and outputs
- An emitter that writes the result once translation has succeeded

Pipeline
--------
    Source → Lexer → Parser (+ Code Generator) → Emitter → Output

Usage
-----
>>> from ladder_sdk.rll import compile_ladder
>>> source = '''
... TAG start = FALSE
... TAG motor = FALSE
... TASK<PERIOD=100> conveyor
... ROUTINE Main
... RUNG
... XIC start
... OTE motor
... ENDRUNG
... ENDROUTINE
... ENDTASK
... '''
>>> print(compile_ladder(source))
TAG start FALSE
TAG motor FALSE
TASK PERIOD 100 conveyor
{
def Main():
	rung_0_entry = True
	rung_0_entry &= start
	if rung_0_entry:
		motor = True
	else:
		motor = False
Main()
}
"""

from ladder_sdk.rll.compiler import (
    LadderCompiler,
    CompilerOptions,
    CompilerResult,
    compile_ladder,
    compile_file,
)
from ladder_sdk.rll.errors import (
    RLLError,
    LexicalError,
    RLLSyntaxError,
    ScopeError,
    SymbolError,
    ConstraintError,
    TranslationError,
    OutputWriteError,
)
from ladder_sdk.rll.lexer import Lexer, Token, TokenType
from ladder_sdk.rll.parser import Parser, TagDescriptor
from ladder_sdk.rll.codegen import CodeGenerator, Instruction
from ladder_sdk.rll.emitter import Emitter

__all__ = [
    # Main API
    "LadderCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_ladder",
    "compile_file",
    # Errors
    "RLLError",
    "LexicalError",
    "RLLSyntaxError",
    "ScopeError",
    "SymbolError",
    "ConstraintError",
    "TranslationError",
    "OutputWriteError",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    # Parser
    "Parser",
    "TagDescriptor",
    # Code Generator
    "CodeGenerator",
    "Instruction",
    # Output
    "Emitter",
]
