"""
Neit Compiler Main Module
=========================

This module provides the main compiler interface for Neit. It runs the
three pipeline stages in order:

    Source → Lex → Parse → AST → Code Generator → C source

Usage
-----
Command line:
    $ neitc hello.nt -o hello.c

Programmatic:
    >>> from neit.lang import compile_neit
    >>> c_source = compile_neit('cimport cstd\\n_wrt(stdout, "hi", 2)')

Building the C source into an executable is left to neit.toolchain.

Error Handling
--------------
Parse diagnostics are collected and raised together as a single
NeitCompilationError; code generation never runs for a program with
diagnostics.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from neit.lang.lexer import Lexer
from neit.lang.parser import Parser
from neit.lang.codegen import CodeGenerator
from neit.lang.ast import ASTNode

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        c_compiler: Native C compiler used to build the executable
        output_path: Where the generated C source is written
        binary_path: Where the native compiler puts the executable
        build_binary: If False, stop after writing the C source
    """
    c_compiler: str = "clang"
    output_path: str = "output.c"
    binary_path: str = "output"
    build_binary: bool = True


@dataclass
class CompilerResult:
    """
    Result of a compilation.

    Attributes:
        filename: Source filename
        success: True if compilation succeeded
        c_source: Generated C source code (if successful)
        ast: The parsed program
        token_count: Number of tokens lexed
    """
    filename: str = ""
    success: bool = False
    c_source: str = ""
    ast: list[ASTNode] = field(default_factory=list)
    token_count: int = 0


class NeitCompiler:
    """
    Neit to C compiler.

    Example:
        compiler = NeitCompiler()
        result = compiler.compile_file("hello.nt")
        print(result.c_source)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Compile Neit source code to C.

        Args:
            source: Neit source code string
            filename: Source filename for error messages

        Returns:
            CompilerResult containing the C source and the AST

        Raises:
            NeitCompilationError: If the source has diagnostics
        """
        result = CompilerResult(filename=filename)

        # Stage 1: Lexical analysis
        tokens = list(Lexer(source).tokenize())
        result.token_count = len(tokens)
        logger.debug(f"{filename}: {len(tokens)} tokens")

        # Stage 2: Parsing
        result.ast = Parser(tokens, source, filename).parse()
        logger.debug(f"{filename}: {len(result.ast)} AST nodes")

        # Stage 3: Code generation
        result.c_source = CodeGenerator().generate(result.ast)
        result.success = True

        return result

    def compile_file(self, filepath: str) -> CompilerResult:
        """
        Compile a Neit source file to C.

        Raises:
            NeitCompilationError: If the source has diagnostics
            FileNotFoundError: If source file not found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath))


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_neit(source: str, filename: str = "<input>") -> str:
    """
    Compile Neit source code to C source code.

    Raises:
        NeitCompilationError: If the source has diagnostics
    """
    return NeitCompiler().compile_source(source, filename).c_source


def compile_file(filepath: str, output_path: Optional[str] = None) -> str:
    """
    Compile a Neit source file to C, optionally writing the result.

    Raises:
        NeitCompilationError: If the source has diagnostics
        FileNotFoundError: If source file not found
    """
    result = NeitCompiler().compile_file(filepath)

    if output_path:
        Path(output_path).write_text(result.c_source, encoding="utf-8")

    return result.c_source
