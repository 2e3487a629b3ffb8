"""
Neit - A Tiny Language Compiled to C
====================================

This package translates Neit programs into C source code and builds them
with a native C compiler.

The language has exactly two constructs:

    cimport cstd                      # import the C standard support
    _wrt(stdout, "Hello!\n", 7)       # write bytes to stdout or stderr

Main Components
---------------
- **lang**: lexer, parser (with diagnostics) and C code generator
- **toolchain**: writes the C file and runs clang/gcc on it
- **cli**: the ``neitc`` command

Quick Start
-----------
    >>> from neit import compile_neit
    >>> c_source = compile_neit('cimport cstd\\n_wrt(stdout, "hi", 2)')

Or from the command line:
    $ neitc hello.nt -o hello.c --binary hello
"""

__version__ = "0.1.0"

# =============================================================================
# Public API Exports
# =============================================================================

from neit.errors import NeitError, SourceLocation, BuildError
from neit.lang import (
    NeitCompiler,
    CompilerOptions,
    CompilerResult,
    compile_neit,
    compile_file,
    tokenize,
    parse,
    parse_source,
    generate,
    ParseError,
    NeitCompilationError,
)

__all__ = [
    "__version__",
    # Errors
    "NeitError",
    "SourceLocation",
    "BuildError",
    "ParseError",
    "NeitCompilationError",
    # Pipeline
    "NeitCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_neit",
    "compile_file",
    "tokenize",
    "parse",
    "parse_source",
    "generate",
]
