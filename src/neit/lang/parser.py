"""
Neit Recursive Descent Parser
=============================

This module turns the token stream from the lexer into a flat list of
AST nodes, collecting diagnostics along the way.

Grammar (Simplified EBNF)
-------------------------
program     ::= (import | call | other)* EOF
import      ::= CIMPORT library (',' library)* EOL
library     ::= CHAR+                    (only 'cstd' is valid)
call        ::= '_' CHAR+ '(' arguments EOL
arguments   ::= stream ',' text ',' length ')'     (for 'wrt')
stream      ::= 'stdout' | 'stderr'      (case-insensitive)
length      ::= [+-]? DIGIT+

Tokens that do not start an import or a call are skipped at the top
level. Each construct is handled by one sub-parser that consumes tokens
up to and including the end of its line, then hands control back.

Error Handling
--------------
Diagnostics are recorded in a ParseContext and parsing carries on, so
every problem in the program is reported in one run. If any diagnostic
was recorded, parse() raises NeitCompilationError once the whole token
stream has been consumed; the AST is only returned for clean programs.

Example Usage
-------------
>>> from neit.lang.parser import parse_source
>>> parse_source('cimport cstd\\n_wrt(stdout, "hi", 2)')
[ImportDeclaration(library='cstd'), WriteStatement(stream=1, text='"hi"', length=2)]
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from neit.errors import SourceLocation
from neit.lang.lexer import Lexer, Token, TokenType
from neit.lang.ast import (
    ASTNode,
    ImportDeclaration,
    WriteStatement,
    STREAM_SELECTORS,
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

logger = logging.getLogger(__name__)


# Libraries that may follow 'cimport'
SUPPORTED_LIBRARIES = ("cstd",)

# Signed 32-bit range for the declared length
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


# =============================================================================
# Parse Context
# =============================================================================

@dataclass
class ParseContext:
    """
    Mutable state for one compilation.

    Created once per parse and passed to every sub-parser. The position
    follows the last token consumed, so diagnostics recorded at the end
    of a statement still point at the statement's line.

    Attributes:
        filename: Source filename for error messages
        source_lines: Source text split into lines for error context
        diagnostics: Diagnostics recorded so far, in source order
        line: Current line (1-indexed)
        column: Current column (1-indexed)
    """
    filename: str = "<input>"
    source_lines: list[str] = field(default_factory=list)
    diagnostics: list[ParseError] = field(default_factory=list)
    line: int = 1
    column: int = 0

    def advance_to(self, token: Token) -> None:
        """Move the current position to a consumed token."""
        self.line = token.line + 1
        self.column = token.column

    def add_error(self, error: ParseError) -> None:
        logger.debug(f"Recorded diagnostic: {error.kind} at line {self.line}")
        self.diagnostics.append(error)

    def has_errors(self) -> bool:
        return len(self.diagnostics) > 0

    def location(self, column: Optional[int] = None) -> SourceLocation:
        """Location on the current line (column 0 = whole line)."""
        return SourceLocation(
            self.filename,
            self.line,
            self.column if column is None else column,
        )

    def current_line(self) -> Optional[str]:
        """Source text of the current line, if available."""
        return self.line_text(self.line)

    def line_text(self, line: int) -> Optional[str]:
        """Source text of a 1-based line, if available."""
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    def raise_if_errors(self) -> None:
        """Raise NeitCompilationError if any diagnostics were recorded."""
        if self.has_errors():
            raise NeitCompilationError(self.diagnostics)


# =============================================================================
# Argument Helpers
# =============================================================================

def split_arguments(args: str) -> list[str]:
    """
    Split a collected argument string on commas outside quotes.

    Single and double quotes are independent: a quoted region only ends
    at the quote character that opened it. Each part is stripped of
    surrounding whitespace; a trailing empty part is dropped.

    >>> split_arguments('stderr,"x,y",3')
    ['stderr', '"x,y"', '3']
    """
    parts = []
    current: list[str] = []
    in_quotes = False
    quote_char = ""

    for c in args:
        if in_quotes:
            current.append(c)
            if c == quote_char:
                in_quotes = False
        elif c in ("\"", "'"):
            in_quotes = True
            quote_char = c
            current.append(c)
        elif c == ",":
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(c)

    if current:
        parts.append("".join(current).strip())

    return parts


def parse_length(text: str) -> Optional[int]:
    """Parse a signed 32-bit integer, returning None if invalid."""
    text = text.strip()
    if not _INTEGER_RE.fullmatch(text):
        return None
    value = int(text)
    if not INT32_MIN <= value <= INT32_MAX:
        return None
    return value


# =============================================================================
# Parser
# =============================================================================

class Parser:
    """
    Recursive descent parser for Neit.

    Usage:
        parser = Parser(tokens, source, "hello.nt")
        nodes = parser.parse()

    Attributes:
        tokens: List of tokens to parse
        source: The program text (for error context)
    """

    def __init__(
        self,
        tokens: list[Token],
        source: str = "",
        filename: str = "<input>",
    ):
        self.tokens = tokens
        self.source = source

        self._pos = 0
        self._nodes: list[ASTNode] = []
        self._ctx = ParseContext(
            filename=filename,
            source_lines=source.replace("\r\n", "\n").split("\n"),
        )

    @property
    def nodes(self) -> list[ASTNode]:
        """Nodes parsed so far (also available after a failed parse)."""
        return self._nodes

    def parse(self) -> list[ASTNode]:
        """
        Parse the token stream.

        Returns:
            The AST nodes in source order

        Raises:
            NeitCompilationError: If any diagnostic was recorded
        """
        while True:
            token = self._advance()
            if token is None or token.type == TokenType.EOF:
                logger.debug(f"Reached EOF at line {self._ctx.line}")
                break

            if token.type == TokenType.CIMPORT:
                self._parse_imports()
            elif token.type == TokenType.UNDERSCORE:
                self._parse_call(token)

        self._ctx.raise_if_errors()
        return self._nodes

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _advance(self) -> Optional[Token]:
        """Consume and return the next token, or None past the end."""
        if self._pos >= len(self.tokens):
            return None
        token = self.tokens[self._pos]
        self._pos += 1
        self._ctx.advance_to(token)
        return token

    def _skip_line(self) -> None:
        """Consume tokens up to and including the end of the line."""
        while True:
            token = self._advance()
            if token is None or token.type in (TokenType.EOL, TokenType.EOF):
                return

    def _error_context(self, column: Optional[int] = None) -> dict:
        return {
            "location": self._ctx.location(column),
            "source_line": self._ctx.current_line(),
        }

    def _token_context(self, token: Token) -> dict:
        return {
            "location": token.location(self._ctx.filename),
            "source_line": self._ctx.line_text(token.line + 1),
        }

    # =========================================================================
    # Import List
    # =========================================================================

    def _parse_imports(self) -> None:
        """Parse the library list after 'cimport'."""
        name: list[str] = []
        name_column = 0

        while True:
            token = self._advance()
            if token is None or token.type == TokenType.EOF:
                logger.debug(f"Reached EOF while parsing import at line {self._ctx.line}")
                break

            if token.type == TokenType.CHAR:
                if not name:
                    name_column = token.column
                name.append(token.value)
            elif token.type in (TokenType.COMMA, TokenType.EOL):
                if name:
                    self._add_import("".join(name), name_column)
                    name = []
                if token.type == TokenType.EOL:
                    break
            elif token.type == TokenType.SPACE:
                continue
            else:
                self._ctx.add_error(InvalidCharacterError(
                    token.text or token.type.name.lower(),
                    **self._token_context(token),
                ))

    def _add_import(self, library: str, column: int) -> None:
        if library in SUPPORTED_LIBRARIES:
            logger.debug(f"Imported library '{library}'")
            self._nodes.append(ImportDeclaration(
                library,
                location=self._ctx.location(column),
            ))
        else:
            self._ctx.add_error(InvalidLibraryError(
                library,
                **self._error_context(column),
            ))

    # =========================================================================
    # Function Calls
    # =========================================================================

    def _parse_call(self, underscore: Token) -> None:
        """Parse a call introduced by '_' and dispatch on its name."""
        name: list[str] = []
        paren: Optional[Token] = None

        while True:
            token = self._advance()
            if token is None or token.type == TokenType.EOF:
                logger.debug(f"Reached EOF while parsing function at line {self._ctx.line}")
                return

            if token.type == TokenType.CHAR:
                name.append(token.value)
            elif token.type == TokenType.LPAREN:
                paren = token
                break
            elif token.type == TokenType.EOL:
                break

        function_name = "".join(name).strip()
        logger.debug(f"Function parsed: '{function_name}'")

        # Required for every call, whatever its name or arguments
        self._check_import(underscore)

        if paren is None:
            self._ctx.add_error(UnexpectedTokenError(
                "end of line",
                expected="'('",
                **self._error_context(),
            ))
            return

        if function_name == "wrt":
            self._parse_write(underscore)
        else:
            self._ctx.add_error(InvalidFunctionError(
                function_name,
                **self._error_context(underscore.column),
            ))
            self._skip_line()

    def _check_import(self, call: Token) -> None:
        has_cstd = any(
            isinstance(node, ImportDeclaration) and node.library == "cstd"
            for node in self._nodes
        )
        if not has_cstd:
            self._ctx.add_error(MissingImportError(**self._error_context(call.column)))

    # =========================================================================
    # wrt(stream, text, length)
    # =========================================================================

    def _parse_write(self, call: Token) -> None:
        """Collect the raw argument text of a 'wrt' call up to end of line."""
        argv: list[str] = []
        in_quotes = False
        quote_char = ""
        opening_quote: Optional[Token] = None

        logger.debug("Parsing write arguments")

        while True:
            token = self._advance()
            if token is None or token.type == TokenType.EOF:
                logger.debug(
                    f"Reached EOF while parsing write arguments at line {self._ctx.line}"
                )
                return

            if token.type in (TokenType.DQUOTE, TokenType.SQUOTE):
                quote = token.text
                if not in_quotes:
                    in_quotes = True
                    quote_char = quote
                    opening_quote = token
                elif quote == quote_char:
                    in_quotes = False
                argv.append(quote)
            elif token.type == TokenType.CHAR:
                argv.append(token.value)
            elif token.type == TokenType.SPACE:
                if in_quotes:
                    argv.append(" ")
            elif token.type == TokenType.COMMA:
                argv.append(",")
            elif token.type == TokenType.EOL:
                break
            elif in_quotes:
                # Brackets, '_' and ';' are text inside a string
                argv.append(token.text)

        if in_quotes:
            self._ctx.add_error(UnterminatedStringError(
                quote_char,
                **self._token_context(opening_quote),
            ))
            return

        self._process_write_args("".join(argv), call)

    def _process_write_args(self, args: str, call: Token) -> None:
        """Validate the three 'wrt' arguments and emit a WriteStatement."""
        parts = split_arguments(args)

        if len(parts) != 3:
            self._invalid_argument("3 arguments", str(len(parts)))
            return

        selector = parts[0].lower()
        stream = STREAM_SELECTORS.get(selector)
        if stream is None:
            self._invalid_argument("stdout or stderr", selector)
            return

        length = parse_length(parts[2])
        if length is None:
            self._invalid_argument("integer", parts[2])
            return

        self._nodes.append(WriteStatement(
            stream,
            parts[1],
            length,
            location=self._ctx.location(call.column),
        ))

    def _invalid_argument(self, expected: str, found: str) -> None:
        self._ctx.add_error(InvalidArgumentError(
            expected,
            found,
            source=self.source,
            **self._error_context(0),
        ))


# =============================================================================
# Convenience Functions
# =============================================================================

def parse(
    tokens: list[Token],
    source: str = "",
    filename: str = "<input>",
) -> list[ASTNode]:
    """Parse a token list into AST nodes (see Parser.parse)."""
    return Parser(tokens, source, filename).parse()


def parse_source(source: str, filename: str = "<input>") -> list[ASTNode]:
    """
    Tokenize and parse Neit source code.

    Raises:
        NeitCompilationError: If the source has diagnostics
    """
    tokens = list(Lexer(source).tokenize())
    return Parser(tokens, source, filename).parse()
