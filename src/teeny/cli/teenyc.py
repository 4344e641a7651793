"""
teenyc - Teeny Compiler Command-Line Interface
==============================================

This module implements the command-line interface for the Teeny compiler.

Usage Examples
--------------
Basic compilation:
    $ teenyc hello.teeny

With output file:
    $ teenyc hello.teeny -o hello.c

Print the C code instead of writing a file:
    $ teenyc hello.teeny -o -

Full pipeline to an executable:
    $ teenyc hello.teeny && cc hello.c -o hello

Verbose mode:
    $ teenyc -v hello.teeny
"""

import logging
from pathlib import Path
from typing import Optional

import click

from teeny import __version__
from teeny.compiler import TeenyCompiler, CompilerOptions
from teeny.cli.errors import handle_cli_exception


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
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, allow_dash=True, path_type=Path),
    help="Output C file (default: input.c, '-' for stdout)",
)
@click.option(
    "--double",
    is_flag=True,
    help="Use C double instead of float for variables",
)
@click.option(
    "-p", "--precision",
    type=click.IntRange(min=0),
    default=2,
    show_default=True,
    help="Digits printed after the decimal point by PRINT",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="teenyc")
def main(
    input_file: Path,
    output: Optional[Path],
    double: bool,
    precision: int,
    verbose: bool,
) -> None:
    """
    Compile a Teeny program to C.

    INPUT_FILE is the Teeny source file (.teeny) to compile.

    The compiler produces a single C file that can be built with any
    C compiler.

    \b
    Examples:
        teenyc hello.teeny               # Outputs hello.c
        teenyc hello.teeny -o out.c      # Specify output file
        teenyc hello.teeny -o -          # Print C code to stdout
        teenyc --double hello.teeny      # Use double precision

    \b
    Supported statements:
        PRINT, INPUT, LET
        IF ... THEN ... ENDIF
        WHILE ... REPEAT ... ENDWHILE
        LABEL, GOTO
    """
    setup_logging(verbose)

    if output is None:
        output = input_file.with_suffix(".c")
    to_stdout = str(output) == "-"

    try:
        if not to_stdout and output.resolve() == input_file.resolve():
            raise click.BadParameter(
                "output file would overwrite the input file",
                param_hint="'-o' / '--output'",
            )

        options = CompilerOptions(
            numeric_type="double" if double else "float",
            print_precision=precision,
        )

        if verbose:
            click.echo(f"Compiling {input_file}...", err=to_stdout)
            click.echo(f"Numeric type: {options.numeric_type}", err=to_stdout)

        result = TeenyCompiler(options).compile_file(
            str(input_file),
            output_path=None if to_stdout else str(output),
        )

        if to_stdout:
            click.echo(result.code, nl=False)
            return

        if verbose:
            click.echo(f"Scanned: {result.token_count} tokens")
            click.echo(
                f"Declared: {len(result.variables)} variables, "
                f"{len(result.labels)} labels"
            )

        click.echo(f"Compiled {input_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
