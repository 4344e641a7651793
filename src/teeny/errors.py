"""
Teeny Error Hierarchy
=====================

This module defines the root of the exception hierarchy for the Teeny
compiler. All exceptions inherit from TeenyError, allowing callers to catch
every compiler-related error with a single except clause.

Exception Hierarchy
-------------------
TeenyError (base)
└── CompileError (see teeny.compiler.errors)
    ├── LexicalError - illegal characters, malformed literals/operators
    ├── ParseError - grammar violations
    └── SemanticError - labels and variable usage

Design Philosophy
-----------------
Each exception captures source location information (filename, line, column)
when applicable, so a diagnostic can point straight at the offending text:

    filename:line:column: <stage> error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class TeenyError(Exception):
    """
    Base exception for all Teeny errors.

        try:
            compile_teeny(source)
        except TeenyError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
