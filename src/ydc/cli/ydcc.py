"""
ydcc - YDC Transpiler Command-Line Interface
============================================

This module implements the command-line interface for the transpiler.
It reads a .ydc file, translates it to C, writes output.c and compiles
it with gcc.

Usage Examples
--------------
Basic translation and build:
    $ ydcc hello.ydc
    $ ./output

Translate only:
    $ ydcc --no-compile hello.ydc

Different compiler and file names:
    $ ydcc --cc clang -o hello.c -e hello hello.ydc

Exit Codes
----------
0  - Success (also when the back-end compiler fails)
1  - Usage error, parse error, or output file could not be written
74 - Source file could not be read
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click

from ydc import __version__
from ydc.backend import DEFAULT_CC, DEFAULT_EXECUTABLE
from ydc.cli.errors import ExitCode, echo_text, handle_cli_exception
from ydc.files import read_source
from ydc.transpiler import TranspilerOptions, YdcTranspiler
from ydc.transpiler.compiler import DEFAULT_OUTPUT

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def display_executable(executable: str) -> str:
    """Path to show for the built executable: output -> ./output."""
    if os.path.dirname(executable):
        return executable
    return f"./{executable}"


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument("input_files", nargs=-1, type=click.Path(path_type=Path))
@click.option(
    "-o", "--output",
    default=DEFAULT_OUTPUT,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Translated C output file",
)
@click.option(
    "-e", "--executable",
    default=DEFAULT_EXECUTABLE,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Executable produced by the C compiler",
)
@click.option(
    "--cc",
    default=DEFAULT_CC,
    show_default=True,
    help="Back-end C compiler command",
)
@click.option(
    "--cc-timeout",
    type=float,
    default=None,
    help="Seconds to allow the C compiler before giving up",
)
@click.option(
    "--no-compile",
    is_flag=True,
    help="Write the C output but do not run the compiler",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="ydcc")
def main(
    input_files: tuple[Path, ...],
    output: str,
    executable: str,
    cc: str,
    cc_timeout: Optional[float],
    no_compile: bool,
    verbose: bool,
) -> None:
    """
    Translate a reversed-C .ydc file to C and compile it.

    \b
    Examples:
        ydcc hello.ydc               # Writes output.c, builds ./output
        ydcc --no-compile hello.ydc  # Writes output.c only
        ydcc -v hello.ydc            # Debug logging

    \b
    Dialect:
        (argc int) main int { ... }  ->  int main(int argc) { ... }
        42 = x int ;                 ->  int x = 42;
        (x) print ;                  ->  print(x);
        (x > 0) while { ... }        ->  while (x > 0) { ... }
    """
    if len(input_files) != 1:
        prog = click.get_current_context().info_name
        click.echo(f"Usage: {prog} <filename.ydc>")
        sys.exit(ExitCode.TRANSPILE_ERROR)

    setup_logging(verbose)
    source_file = input_files[0]

    options = TranspilerOptions(
        output_path=output,
        executable=executable,
        cc=cc,
        compile=not no_compile,
        cc_timeout=cc_timeout,
    )
    transpiler = YdcTranspiler(options)

    try:
        source = read_source(source_file)

        click.echo("--- Tokenizing ---")
        tokens = transpiler.tokenize(source)
        if transpiler.diagnostics.has_diagnostics():
            echo_text(transpiler.diagnostics.report())
        logger.debug(f"Tokenized: {len(tokens)} tokens")

        click.echo("\n--- Parsing & Transpiling ---")
        c_source = transpiler.translate(tokens)
        echo_text(f"Transpiled C code:\n---\n{c_source}---")

        click.echo("\n--- Compiling with GCC ---")
        transpiler.emit(c_source)

        if not options.compile:
            click.echo(f"\nWrote {options.output_path}; compilation skipped.")
            return

        result = transpiler.build()
        if result.stdout:
            click.echo(result.stdout, nl=False)
        if result.stderr:
            click.echo(result.stderr, nl=False, err=True)

        if result.success:
            click.echo(
                f"\nSuccess! Compiled to '{display_executable(options.executable)}' executable."
            )
        else:
            click.echo("\nGCC compilation failed.")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
