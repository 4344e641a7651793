"""
Teeny - Teeny Tiny Compiler
===========================

This package translates programs written in Teeny, a small BASIC-like
language, into C source code ready for a native C compiler.

Main Components
---------------
- **compiler**: scanner, translator and emitter (teeny.compiler)
    Converts Teeny source (.teeny) into C (.c)

- **cli**: the ``teenyc`` command-line tool

Quick Start
-----------
Compile a string:
    >>> from teeny import compile_teeny
    >>> c_code = compile_teeny('PRINT "hello, world"')

Compile a file:
    >>> from teeny import TeenyCompiler
    >>> result = TeenyCompiler().compile_file("hello.teeny")
    >>> print(result.code)

Or use the command-line tool:
    $ teenyc hello.teeny -o hello.c
    $ cc hello.c -o hello

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"
__author__ = "Teeny Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from teeny.errors import TeenyError, SourceLocation
from teeny.compiler import (
    TeenyCompiler,
    CompilerOptions,
    CompilerResult,
    compile_teeny,
    compile_file,
    CompileError,
    LexicalError,
    ParseError,
    SemanticError,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Compiler
    "TeenyCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_teeny",
    "compile_file",
    # Exception hierarchy
    "TeenyError",
    "SourceLocation",
    "CompileError",
    "LexicalError",
    "ParseError",
    "SemanticError",
]
