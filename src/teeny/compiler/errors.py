"""
Teeny Compiler Error Hierarchy
==============================

This module defines the diagnostics raised while translating Teeny source.
Every error is fatal: the translator never recovers or resynchronizes, so
the first error raised is the one reported.

Exception Hierarchy
-------------------
CompileError (base for all translation errors)
├── LexicalError - raised by the scanner
│   ├── IllegalCharacterError - forbidden character inside a string literal
│   ├── MalformedNumberError - decimal point without following digits
│   ├── MalformedOperatorError - '!' not followed by '='
│   └── UnknownTokenError - character that starts no lexeme
├── ParseError - raised by the translator's grammar recognition
│   ├── UnexpectedTokenError - expected-token mismatch
│   ├── MissingComparisonError - comparison without a comparator
│   └── InvalidStatementError - unrecognized statement start
└── SemanticError - raised by the translator's bookkeeping
    ├── DuplicateLabelError - LABEL declared twice
    ├── UseBeforeAssignmentError - variable read before LET/INPUT
    ├── UndeclaredLabelError - GOTO to a label that is never declared
    └── ReservedNameError - name that is a C keyword or library function

Error Message Format
--------------------
    prog.teeny:3:7: semantic error: use before assignment of 'cnt'
        PRINT cnt
              ^
    hint: did you mean 'count'?
"""

from typing import Optional, List

from teeny.errors import TeenyError, SourceLocation


# =============================================================================
# Base Compiler Exception
# =============================================================================

class CompileError(TeenyError):
    """
    Base exception for all Teeny translation errors.

    Attributes:
        stage: Pipeline stage that detected the error ("lexical",
               "syntax" or "semantic")
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    stage = "compile"

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            prog.teeny:1:9: lexical error: expected '!=', got '!x'
                IF a !x 3 THEN
                        ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: {self.stage} error: {self.message}")
        else:
            parts.append(f"{self.stage} error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexical Errors (Scanner)
# =============================================================================

class LexicalError(CompileError):
    """
    Error raised while classifying characters into tokens.

    Examples:
        - '%' or a tab inside a string literal
        - "3." with no digit after the decimal point
        - '!' not followed by '='
        - '$' or any other character that starts no lexeme
    """

    stage = "lexical"


def describe_char(char: str) -> str:
    """Printable form of a single offending character."""
    if char.isprintable() and char != " ":
        return f"'{char}'"
    return repr(char)


class IllegalCharacterError(LexicalError):
    """
    Forbidden character inside a string literal.

    String literals are spliced verbatim into a printf format string in the
    generated C, so carriage return, tab, newline, backslash and '%' are
    rejected. A newline also signals a string left open at end of line.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        hint = None
        if char == "\n":
            hint = "add closing '\"' before the end of the line"
        elif char == "%":
            hint = "'%' is reserved in the generated format string"
        super().__init__(
            f"illegal character in string: {describe_char(char)}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MalformedNumberError(LexicalError):
    """Decimal point not followed by at least one digit."""

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"illegal character in number '{text}'",
            location=location,
            hint="a decimal point must be followed by at least one digit",
            source_line=source_line,
        )


class MalformedOperatorError(LexicalError):
    """'!' followed by anything other than '='."""

    def __init__(
        self,
        follower: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.follower = follower
        super().__init__(
            f"expected '!=', got '!' followed by {describe_char(follower)}",
            location=location,
            source_line=source_line,
        )


class UnknownTokenError(LexicalError):
    """Character that cannot start any token."""

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unknown token {describe_char(char)}",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Syntax Errors (Translator)
# =============================================================================

class ParseError(CompileError):
    """
    Grammar violation detected by the translator.

    Examples:
        - LET without '='
        - IF condition without THEN
        - statement not terminated by a newline
    """

    stage = "syntax"


class UnexpectedTokenError(ParseError):
    """
    Token does not match what the grammar requires at this position.
    """

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected {expected}, got {found}",
            location=location,
            source_line=source_line,
        )


class MissingComparisonError(ParseError):
    """
    Comparison without any comparison operator.

    IF and WHILE conditions need at least one of == != < <= > >=.
    """

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            f"expected comparison operator, got {found}",
            location=location,
            hint="conditions compare two expressions, e.g. 'IF a > 0 THEN'",
            source_line=source_line,
        )


class InvalidStatementError(ParseError):
    """Token that cannot start a statement."""

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            f"invalid statement starting with {found}",
            location=location,
            hint="statements start with PRINT, IF, WHILE, LABEL, GOTO, LET or INPUT",
            source_line=source_line,
        )


# =============================================================================
# Semantic Errors (Translator bookkeeping)
# =============================================================================

class SemanticError(CompileError):
    """
    Program is well formed but misuses variables or labels.
    """

    stage = "semantic"


def _suggest(names: List[str]) -> Optional[str]:
    if not names:
        return None
    suggestions = ", ".join(f"'{n}'" for n in names[:3])
    return f"did you mean {suggestions}?"


class DuplicateLabelError(SemanticError):
    """LABEL declared more than once."""

    def __init__(
        self,
        label: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.label = label
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{label}' was first declared at {original_location}"

        super().__init__(
            f"duplicate label '{label}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UseBeforeAssignmentError(SemanticError):
    """
    Variable read before any LET or INPUT assigned it.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_names: Optional[List[str]] = None,
    ):
        self.name = name
        self.similar_names = similar_names or []
        super().__init__(
            f"use before assignment of '{name}'",
            location=location,
            hint=_suggest(self.similar_names),
            source_line=source_line,
        )


class UndeclaredLabelError(SemanticError):
    """
    GOTO targets that no LABEL declares.

    Detected once, after the whole program has been recognized. All
    offending names are listed; the location is the first GOTO naming the
    first of them.
    """

    def __init__(
        self,
        labels: List[str],
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_names: Optional[List[str]] = None,
    ):
        self.labels = list(labels)
        self.similar_names = similar_names or []

        names = ", ".join(f"'{label}'" for label in self.labels)
        word = "label" if len(self.labels) == 1 else "labels"
        super().__init__(
            f"GOTO to undeclared {word} {names}",
            location=location,
            hint=_suggest(self.similar_names),
            source_line=source_line,
        )


class ReservedNameError(SemanticError):
    """
    Variable or label name that cannot appear verbatim in the generated C.

    Teeny names are copied into C unchanged, so C keywords are rejected for
    both variables and labels, and variables may not shadow the library
    functions the generated code calls.
    """

    def __init__(
        self,
        name: str,
        kind: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.kind = kind
        super().__init__(
            f"{kind} name '{name}' is reserved in C",
            location=location,
            hint=f"rename the {kind}, e.g. '{name}1'",
            source_line=source_line,
        )
