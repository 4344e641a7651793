"""
Teeny Scanner (Tokenizer)
=========================

This module implements the scanner for the Teeny language. It converts
source text into a lazy stream of classified tokens for the translator,
producing one token per call to ``next_token()``.

Token Categories
----------------
- Keywords: LABEL GOTO PRINT INPUT LET IF THEN ENDIF WHILE REPEAT ENDWHILE
- Identifiers: variable and label names (ASCII letters, then letters/digits)
- Numbers: 42, 3.14 (the lexeme is kept as text)
- Strings: "double quoted", no escapes
- Operators: = + - * / == != < <= > >=
- NEWLINE: statement terminator, significant
- EOF: end of input

Whitespace is space, tab and carriage return. Comments run from '#' to the
end of the line; the newline itself is still a token.

String Restrictions
-------------------
String literals are copied verbatim into a C printf format string, so they
may not contain carriage return, tab, newline, backslash or '%'.

Example Usage
-------------
>>> from teeny.compiler.lexer import Scanner
>>> for token in Scanner('LET a = 5', "test.teeny").tokenize():
...     print(token)
Token(LET, 'LET', 1:1)
Token(IDENT, 'a', 1:5)
Token(EQ, '=', 1:7)
Token(NUMBER, '5', 1:9)
Token(NEWLINE, '\\n', 1:10)
Token(EOF, '', 2:1)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator
import string

from teeny.errors import SourceLocation
from teeny.compiler.errors import (
    IllegalCharacterError,
    MalformedNumberError,
    MalformedOperatorError,
    UnknownTokenError,
)


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """
    Token kinds for the Teeny language.

    Keywords are distinguished from identifiers to simplify parsing.
    """

    # === Structural Tokens ===
    EOF = auto()            # End of input
    NEWLINE = auto()        # Statement terminator

    # === Identifiers and Literals ===
    NUMBER = auto()         # 42, 3.14
    IDENT = auto()          # Variable/label names
    STRING = auto()         # "..."

    # === Keywords ===
    LABEL = auto()
    GOTO = auto()
    PRINT = auto()
    INPUT = auto()
    LET = auto()
    IF = auto()
    THEN = auto()
    ENDIF = auto()
    WHILE = auto()
    REPEAT = auto()
    ENDWHILE = auto()

    # === Operators ===
    EQ = auto()             # =
    PLUS = auto()           # +
    MINUS = auto()          # -
    ASTERISK = auto()       # *
    SLASH = auto()          # /
    EQEQ = auto()           # ==
    NOTEQ = auto()          # !=
    LT = auto()             # <
    LTEQ = auto()           # <=
    GT = auto()             # >
    GTEQ = auto()           # >=


# =============================================================================
# Keyword and Operator Tables
# =============================================================================

# Exact, case-sensitive spelling of every reserved word
KEYWORDS: dict[str, TokenKind] = {
    "LABEL": TokenKind.LABEL,
    "GOTO": TokenKind.GOTO,
    "PRINT": TokenKind.PRINT,
    "INPUT": TokenKind.INPUT,
    "LET": TokenKind.LET,
    "IF": TokenKind.IF,
    "THEN": TokenKind.THEN,
    "ENDIF": TokenKind.ENDIF,
    "WHILE": TokenKind.WHILE,
    "REPEAT": TokenKind.REPEAT,
    "ENDWHILE": TokenKind.ENDWHILE,
}

SINGLE_OPERATORS: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
}

# First character -> (kind alone, kind when followed by '=')
EQUALS_OPERATORS: dict[str, tuple[TokenKind, TokenKind]] = {
    "=": (TokenKind.EQ, TokenKind.EQEQ),
    "<": (TokenKind.LT, TokenKind.LTEQ),
    ">": (TokenKind.GT, TokenKind.GTEQ),
}

COMPARATORS = frozenset({
    TokenKind.EQEQ,
    TokenKind.NOTEQ,
    TokenKind.LT,
    TokenKind.LTEQ,
    TokenKind.GT,
    TokenKind.GTEQ,
})


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single classified lexeme.

    Attributes:
        text: The lexeme (string contents without the quotes)
        kind: The TokenKind classification
        line: Line number of the first character (1-indexed)
        column: Column number of the first character (1-indexed)
        filename: Name of the source file
    """
    text: str
    kind: TokenKind
    line: int = 1
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_comparator(self) -> bool:
        return self.kind in COMPARATORS

    def describe(self) -> str:
        """Human-readable form used in diagnostics."""
        if self.kind == TokenKind.EOF:
            return "end of input"
        if self.kind == TokenKind.NEWLINE:
            return "end of line"
        if self.kind == TokenKind.STRING:
            return f'string "{self.text}"'
        return f"'{self.text}'"


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Pull-based scanner for Teeny source.

    The scanner owns the source text plus a cursor (position and the
    character under it). The cursor only moves forward. A newline is
    appended to the source so every statement is newline terminated, and
    reading past the end yields an internal sentinel rather than failing.

    Usage:
        scanner = Scanner(source_text, filename)
        token = scanner.next_token()

    Attributes:
        source: The source text being scanned (with the trailing newline)
        filename: Name of the source file (for error reporting)
    """

    EOF_CHAR = "\0"

    WHITESPACE = " \t\r"
    DIGITS = string.digits
    IDENT_START = string.ascii_letters
    IDENT_CHARS = string.ascii_letters + string.digits
    STRING_FORBIDDEN = "\r\t\n\\%"

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the scanner with source text.

        Args:
            source: The Teeny source to tokenize
            filename: Name of the source file (for error messages)
        """
        self.source = source + "\n"
        self.filename = filename
        self._lines = self.source.split("\n")

        # Cursor; primed onto the first character below
        self._pos = -1
        self._char = ""
        self._line = 1
        self._column = 0

        self._advance()

    def next_token(self) -> Token:
        """
        Skip whitespace and a comment, then scan exactly one token.

        Once the end of input is reached every further call returns a
        fresh EOF token.

        Raises:
            LexicalError: If the next lexeme is malformed
        """
        self._skip_whitespace()
        self._skip_comment()

        line = self._line
        column = self._column
        char = self._char

        if self._at_end():
            return self._make_token("", TokenKind.EOF, line, column)

        if char == "\n":
            self._advance()
            return self._make_token(char, TokenKind.NEWLINE, line, column)

        if char in SINGLE_OPERATORS:
            self._advance()
            return self._make_token(char, SINGLE_OPERATORS[char], line, column)

        if char in EQUALS_OPERATORS:
            single, double = EQUALS_OPERATORS[char]
            self._advance()
            if self._char == "=":
                self._advance()
                return self._make_token(char + "=", double, line, column)
            return self._make_token(char, single, line, column)

        if char == "!":
            if self._peek() != "=":
                raise MalformedOperatorError(
                    self._peek(),
                    self._location(line, column),
                    self.source_line(line),
                )
            self._advance()
            self._advance()
            return self._make_token("!=", TokenKind.NOTEQ, line, column)

        if char == '"':
            return self._scan_string(line, column)

        if char in self.DIGITS:
            return self._scan_number(line, column)

        if char in self.IDENT_START:
            return self._scan_identifier(line, column)

        raise UnknownTokenError(
            char,
            self._location(line, column),
            self.source_line(line),
        )

    def tokenize(self) -> Iterator[Token]:
        """
        Lazily generate tokens up to and including the first EOF token.

        Raises:
            LexicalError: If invalid input is encountered
        """
        while True:
            token = self.next_token()
            yield token
            if token.kind == TokenKind.EOF:
                return

    def source_line(self, line: int) -> str:
        """Text of a 1-indexed source line, without its line break."""
        if 0 < line <= len(self._lines):
            return self._lines[line - 1]
        return ""

    # =========================================================================
    # Cursor Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _advance(self) -> None:
        """Move the cursor forward one character, tracking line/column."""
        if self._char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        self._pos += 1
        if self._at_end():
            self._char = self.EOF_CHAR
        else:
            self._char = self.source[self._pos]

    def _peek(self) -> str:
        """Character after the cursor, or the sentinel past the end."""
        next_pos = self._pos + 1
        if next_pos >= len(self.source):
            return self.EOF_CHAR
        return self.source[next_pos]

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self._char in self.WHITESPACE:
            self._advance()

    def _skip_comment(self) -> None:
        """Skip '#' up to, but not including, the end of line."""
        if self._char == "#":
            while not self._at_end() and self._char != "\n":
                self._advance()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_string(self, line: int, column: int) -> Token:
        """Scan a double-quoted string literal; text excludes the quotes."""
        self._advance()  # consume opening "
        start = self._pos

        while self._char != '"':
            if self._char in self.STRING_FORBIDDEN:
                raise IllegalCharacterError(
                    self._char,
                    self._location(self._line, self._column),
                    self.source_line(self._line),
                )
            self._advance()

        text = self.source[start:self._pos]
        self._advance()  # consume closing "
        return self._make_token(text, TokenKind.STRING, line, column)

    def _scan_number(self, line: int, column: int) -> Token:
        """
        Scan digits, optionally followed by '.' and at least one digit.

        The value is not converted; the exact lexeme is kept.
        """
        start = self._pos
        while self._char in self.DIGITS:
            self._advance()

        if self._char == ".":
            self._advance()
            if self._char not in self.DIGITS:
                raise MalformedNumberError(
                    self.source[start:self._pos],
                    self._location(line, column),
                    self.source_line(line),
                )
            while self._char in self.DIGITS:
                self._advance()

        return self._make_token(self.source[start:self._pos], TokenKind.NUMBER, line, column)

    def _scan_identifier(self, line: int, column: int) -> Token:
        """Scan an identifier and look it up in the keyword table."""
        start = self._pos
        while self._char in self.IDENT_CHARS:
            self._advance()

        text = self.source[start:self._pos]
        kind = KEYWORDS.get(text, TokenKind.IDENT)
        return self._make_token(text, kind, line, column)

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _make_token(self, text: str, kind: TokenKind, line: int, column: int) -> Token:
        return Token(text=text, kind=kind, line=line, column=column, filename=self.filename)

    def _location(self, line: int, column: int) -> SourceLocation:
        return SourceLocation(self.filename, line, column)
