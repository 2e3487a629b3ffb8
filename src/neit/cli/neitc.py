"""
neitc - Neit Compiler Command-Line Interface
============================================

Compiles a Neit program to C and builds it with a native C compiler.

Usage Examples
--------------
Basic compilation (writes output.c, builds ./output with clang):
    $ neitc hello.nt

Choose the C compiler and output files:
    $ neitc hello.nt -bc gcc -o hello.c --binary hello

Generate C only:
    $ neitc hello.nt -S

Show the parsed program:
    $ neitc hello.nt --ast -S
"""

import logging
from pathlib import Path

import click

from neit import __version__
from neit.lang import NeitCompiler, CompilerOptions
from neit.lang.ast import ASTPrinter
from neit.cli.errors import handle_cli_exception
from neit.toolchain import write_c_source, build_executable


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
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
    type=click.Path(dir_okay=False, path_type=Path),
    default="output.c",
    show_default=True,
    help="Output file for the generated C code",
)
@click.option(
    "-bc", "--bcompiler",
    default="clang",
    envvar="NEITC_CC",
    show_default=True,
    help="C compiler used to build the executable (env: NEITC_CC)",
)
@click.option(
    "--binary",
    type=click.Path(dir_okay=False, path_type=Path),
    default="output",
    show_default=True,
    help="Path of the executable built from the C code",
)
@click.option(
    "-S", "--no-build",
    is_flag=True,
    help="Only write the C code, do not run the C compiler",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print the parsed program",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="neitc")
def main(
    input_file: Path,
    output: Path,
    bcompiler: str,
    binary: Path,
    no_build: bool,
    ast: bool,
    verbose: bool,
) -> None:
    """
    Compile a Neit program to C.

    INPUT_FILE is the Neit source file to compile.

    \b
    Supported statements:
        cimport cstd
        _wrt(stdout, "text", length)
    """
    setup_logging(verbose)

    options = CompilerOptions(
        c_compiler=bcompiler,
        output_path=str(output),
        binary_path=str(binary),
        build_binary=not no_build,
    )

    try:
        if verbose:
            click.echo(f"Compiling {input_file}...")

        compiler = NeitCompiler(options)
        result = compiler.compile_file(str(input_file))

        if ast:
            click.echo(ASTPrinter().print(result.ast))

        write_c_source(result.c_source, options.output_path)
        if verbose:
            click.echo(f"Wrote {len(result.c_source)} bytes to {options.output_path}")

        if not options.build_binary:
            click.echo(f"Compiled {input_file} -> {options.output_path}")
            return

        build_executable(
            options.output_path,
            options.binary_path,
            compiler=options.c_compiler,
        )
        click.echo(
            f"Compilation successful! Executable created as '{options.binary_path}'."
        )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
