"""
ladc - Ladder Logic Translator Command-Line Interface
=====================================================

This module implements the command-line interface for the ladder
translator.

Usage Examples
--------------
Basic translation (writes Program.out):
    $ ladc plant.rll

With output file:
    $ ladc plant.rll -o plant.out

Show the token stream:
    $ ladc --tokens plant.rll

Verbose mode:
    $ ladc -v plant.rll
"""

import logging
from pathlib import Path

import click

from ladder_sdk import __version__
from ladder_sdk.cli.errors import handle_cli_exception
from ladder_sdk.rll import CompilerOptions, LadderCompiler, Lexer
from ladder_sdk.rll.compiler import DEFAULT_OUTPUT

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "source_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--out",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_OUTPUT,
    show_default=True,
    help="Name of the output file",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="ladc")
def main(
    source_file: Path,
    out: Path,
    tokens: bool,
    verbose: bool,
) -> None:
    """
    Translate ladder logic source into a task script.

    SOURCE_FILE is the ladder source file to translate.

    The output is only written when the whole file translates without
    error; the first error stops translation.

    \b
    Examples:
        ladc plant.rll               # Outputs Program.out
        ladc plant.rll -o plant.out  # Specify output file
        ladc --tokens plant.rll      # Dump tokens
        ladc -v plant.rll            # Verbose output

    \b
    Environment:
        LADC_INDENT, LADC_MIN_PERIOD, LADC_TAG_NAME_LIMIT
    """
    setup_logging(verbose)

    try:
        if tokens:
            source = source_file.read_text(encoding="utf-8")
            for token in Lexer(source, str(source_file)).tokenize():
                click.echo(repr(token))
            return

        options = CompilerOptions.from_env()
        if verbose:
            click.echo(f"Translating {source_file}...")

        compiler = LadderCompiler(options)
        result = compiler.compile_file(source_file, out)

        if verbose:
            click.echo(
                f"Translated {result.task_count} tasks, "
                f"{result.routine_count} routines, {result.tag_count} tags"
            )

        click.echo(f"Compiled {source_file} -> {out}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
