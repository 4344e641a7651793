"""
Teeny Compiler
==============

This package implements a single-pass translator from Teeny, a small
imperative language, to C.

- A scanner (tokenizer) for Teeny source
- A recursive descent translator that emits C while parsing
- An emitter collecting the C header and body

Pipeline
--------
    Teeny Source → Scanner → Translator → Emitter → C Source

The generated C can then be built with any C compiler.

Usage
-----
>>> from teeny.compiler import compile_teeny
>>> source = '''
... LET a = 5
... IF a > 3 THEN
...     PRINT "big"
... ENDIF
... '''
>>> c_code = compile_teeny(source)

Language Summary
----------------
- One implicit numeric type (C float by default)
- PRINT, INPUT, LET, IF/THEN/ENDIF, WHILE/REPEAT/ENDWHILE, LABEL, GOTO
- Arithmetic: + - * / and unary + -
- Comparisons: == != < <= > >=
- Comments from '#' to end of line

Author: Teeny Contributors
"""

from teeny.compiler.compiler import (
    TeenyCompiler,
    CompilerOptions,
    CompilerResult,
    compile_teeny,
    compile_file,
)
from teeny.compiler.errors import (
    CompileError,
    LexicalError,
    IllegalCharacterError,
    MalformedNumberError,
    MalformedOperatorError,
    UnknownTokenError,
    ParseError,
    UnexpectedTokenError,
    MissingComparisonError,
    InvalidStatementError,
    SemanticError,
    DuplicateLabelError,
    UseBeforeAssignmentError,
    UndeclaredLabelError,
    ReservedNameError,
)
from teeny.compiler.lexer import Scanner, Token, TokenKind, KEYWORDS
from teeny.compiler.emitter import Emitter
from teeny.compiler.parser import Translator

__all__ = [
    # Main API
    "TeenyCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_teeny",
    "compile_file",
    # Errors
    "CompileError",
    "LexicalError",
    "IllegalCharacterError",
    "MalformedNumberError",
    "MalformedOperatorError",
    "UnknownTokenError",
    "ParseError",
    "UnexpectedTokenError",
    "MissingComparisonError",
    "InvalidStatementError",
    "SemanticError",
    "DuplicateLabelError",
    "UseBeforeAssignmentError",
    "UndeclaredLabelError",
    "ReservedNameError",
    # Scanner
    "Scanner",
    "Token",
    "TokenKind",
    "KEYWORDS",
    # Emitter
    "Emitter",
    # Translator
    "Translator",
]
