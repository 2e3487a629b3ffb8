"""
Neit Lexer (Tokenizer)
======================

This module converts Neit source text into a stream of tokens for the
parser.

The Neit lexer is deliberately character-oriented: every ordinary
character becomes its own CHAR token carrying its position, and words
are reassembled by the parser from runs of CHAR tokens. The only
multi-character token is the CIMPORT marker, which is emitted *in
addition to* the characters of the word ``cimport`` when that word is
terminated by a space or a newline.

Token Categories
----------------
| Source          | Token                     |
|-----------------|---------------------------|
| ``cimport``     | CHAR x7, then CIMPORT     |
| ``_``           | UNDERSCORE                |
| ``( ) { } [ ]`` | LPAREN ... RBRACKET       |
| space           | SPACE                     |
| ``, ;``         | COMMA, SEMICOLON          |
| ``" '``         | DQUOTE, SQUOTE            |
| newline         | EOL                       |
| anything else   | CHAR                      |

The stream always ends with EOL followed by EOF, so every consumer loop
terminates.

Example Usage
-------------
>>> from neit.lang.lexer import tokenize
>>> [t.type.name for t in tokenize("_wrt")][:3]
['UNDERSCORE', 'CHAR', 'CHAR']
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from neit.errors import SourceLocation


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token types for the Neit language."""

    # === Structural Tokens ===
    EOF = auto()            # End of file
    EOL = auto()            # End of line

    # === Markers ===
    CIMPORT = auto()        # the word 'cimport'
    UNDERSCORE = auto()     # _ (introduces a function call)
    CHAR = auto()           # any other single character

    # === Delimiters ===
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    LBRACKET = auto()       # [
    RBRACKET = auto()       # ]
    SPACE = auto()          # ' '
    COMMA = auto()          # ,
    SEMICOLON = auto()      # ;
    DQUOTE = auto()         # "
    SQUOTE = auto()         # '


# Single characters with a dedicated token type
SPECIAL_CHARS: dict[str, TokenType] = {
    '"': TokenType.DQUOTE,
    "'": TokenType.SQUOTE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "_": TokenType.UNDERSCORE,
}

# Source text of each delimiter, used to rebuild quoted text
TOKEN_TEXT: dict[TokenType, str] = {t: c for c, t in SPECIAL_CHARS.items()}
TOKEN_TEXT[TokenType.SPACE] = " "

KEYWORDS: dict[str, TokenType] = {
    "cimport": TokenType.CIMPORT,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from Neit source code.

    Attributes:
        type: The TokenType classification
        value: The character for CHAR tokens, None otherwise
        line: Line index in source (0-indexed)
        column: Column in source (1-indexed; 0 at the start of a line)
    """
    type: TokenType
    value: Optional[str] = None
    line: int = 0
    column: int = 0

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    def location(self, filename: str = "<input>") -> SourceLocation:
        """Return a 1-based SourceLocation for error reporting."""
        return SourceLocation(filename, self.line + 1, self.column)

    @property
    def text(self) -> str:
        """The source text this token stands for ('' for markers)."""
        if self.type == TokenType.CHAR:
            return self.value
        return TOKEN_TEXT.get(self.type, "")


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes Neit source code.

    The lexer never fails: characters it does not recognize become CHAR
    tokens and validation is left to the parser.

    Usage:
        tokens = list(Lexer(source_text).tokenize())

    Attributes:
        source: The normalized source being tokenized
    """

    def __init__(self, source: str):
        # A trailing space guarantees the last word is flushed
        self.source = source.replace("\r\n", "\n").rstrip() + " "

        self._line = 0
        self._column = 0
        self._word: list[str] = []

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects, always ending with EOL then EOF
        """
        for char in self.source:
            self._column += 1

            if char == "\n":
                yield from self._flush_word()
                yield self._make_token(TokenType.EOL)
                self._line += 1
                self._column = 0
            elif char == " ":
                yield from self._flush_word()
                yield self._make_token(TokenType.SPACE)
            elif char in SPECIAL_CHARS:
                self._word.clear()
                yield self._make_token(SPECIAL_CHARS[char])
            else:
                self._word.append(char)
                yield self._make_token(TokenType.CHAR, char)

        yield self._make_token(TokenType.EOL)
        yield self._make_token(TokenType.EOF)

    def _make_token(self, token_type: TokenType, value: Optional[str] = None) -> Token:
        return Token(token_type, value, self._line, self._column)

    def _flush_word(self) -> Iterator[Token]:
        """Emit a keyword marker if the pending word is a keyword."""
        word = "".join(self._word)
        self._word.clear()
        keyword = KEYWORDS.get(word)
        if keyword is not None:
            yield self._make_token(keyword)


def tokenize(source: str) -> list[Token]:
    """Tokenize Neit source into a list of tokens."""
    return list(Lexer(source).tokenize())
