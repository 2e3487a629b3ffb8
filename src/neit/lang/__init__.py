"""
Neit Language Pipeline
======================

Pipeline
--------
    Neit Source → Lexer → Parser → AST → Code Generator → C source

Each stage consumes the output of the previous one:

- ``tokenize(source)`` never fails; unknown characters become CHAR tokens
- ``parse(tokens, source)`` returns the AST or raises
  NeitCompilationError with every diagnostic found
- ``generate(nodes)`` is a pure function of the AST
"""

from neit.lang.lexer import Lexer, Token, TokenType, tokenize
from neit.lang.ast import (
    ASTNode,
    ImportDeclaration,
    WriteStatement,
    ASTVisitor,
    ASTPrinter,
    STREAM_STDOUT,
    STREAM_STDERR,
)
from neit.lang.parser import Parser, ParseContext, parse, parse_source
from neit.lang.codegen import CodeGenerator, generate
from neit.lang.compiler import (
    NeitCompiler,
    CompilerOptions,
    CompilerResult,
    compile_neit,
    compile_file,
)
from neit.lang.errors import (
    ParseError,
    InvalidCharacterError,
    InvalidLibraryError,
    UnexpectedTokenError,
    UnterminatedStringError,
    InvalidFunctionError,
    InvalidArgumentError,
    MissingImportError,
    NeitCompilationError,
)

__all__ = [
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    # AST
    "ASTNode",
    "ImportDeclaration",
    "WriteStatement",
    "ASTVisitor",
    "ASTPrinter",
    "STREAM_STDOUT",
    "STREAM_STDERR",
    # Parser
    "Parser",
    "ParseContext",
    "parse",
    "parse_source",
    # Code Generator
    "CodeGenerator",
    "generate",
    # Driver
    "NeitCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_neit",
    "compile_file",
    # Diagnostics
    "ParseError",
    "InvalidCharacterError",
    "InvalidLibraryError",
    "UnexpectedTokenError",
    "UnterminatedStringError",
    "InvalidFunctionError",
    "InvalidArgumentError",
    "MissingImportError",
    "NeitCompilationError",
]
