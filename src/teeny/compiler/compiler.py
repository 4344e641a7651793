"""
Teeny Compiler Main Module
==========================

This module provides the main compiler interface for Teeny. It wires the
three pipeline stages together for one translation run:

    Source → Scanner → Translator → Emitter → C source

Usage
-----
Command line:
    $ teenyc hello.teeny -o hello.c

Programmatic:
    >>> from teeny.compiler import compile_teeny
    >>> c_code = compile_teeny('PRINT "hello"')

The generated C includes stdio.h, declares every variable once at the top
of main(), and can be built with any C compiler:

    $ cc hello.c -o hello

Error Handling
--------------
Translation stops at the first error. The error propagates unchanged to
the caller as a CompileError subclass, and no output is produced.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from teeny.compiler.lexer import Scanner
from teeny.compiler.emitter import Emitter
from teeny.compiler.parser import Translator, SCANF_FORMATS

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        numeric_type: C type used for every variable ("float" or "double")
        print_precision: Digits after the decimal point for PRINT of a number
        indent: Text for one level of nesting in the generated code
    """
    numeric_type: str = "float"
    print_precision: int = 2
    indent: str = "    "

    def __post_init__(self):
        if self.numeric_type not in SCANF_FORMATS:
            supported = ", ".join(SCANF_FORMATS)
            raise ValueError(
                f"unsupported numeric type {self.numeric_type!r} (expected one of: {supported})"
            )
        if self.print_precision < 0:
            raise ValueError(f"print precision must be >= 0, got {self.print_precision}")


@dataclass
class CompilerResult:
    """
    Result of a successful compilation.

    Attributes:
        filename: Source filename
        code: Generated C source
        variables: Declared variables, in declaration order
        labels: Declared labels, in declaration order
        token_count: Number of tokens scanned (excluding EOF)
        output_path: Where the C source was written, if anywhere
    """
    filename: str = ""
    code: str = ""
    variables: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    token_count: int = 0
    output_path: Optional[str] = None


class TeenyCompiler:
    """
    Teeny to C compiler.

    Each call to compile_source() is an independent run with a fresh
    scanner, translator and emitter.

    Example:
        compiler = TeenyCompiler()
        result = compiler.compile_file("hello.teeny", "hello.c")
        print(result.code)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(
        self,
        source: str,
        filename: str = "<input>",
        output_path: Optional[str] = None,
    ) -> CompilerResult:
        """
        Compile Teeny source code to C.

        Args:
            source: Teeny source code string
            filename: Source filename for error messages
            output_path: Optional path the C file is written to once
                translation has succeeded

        Returns:
            CompilerResult containing the generated C

        Raises:
            CompileError: If translation fails (nothing is written)
        """
        logger.debug(f"Compiling {filename} ({len(source)} characters)")

        scanner = Scanner(source, filename)
        emitter = Emitter()
        translator = Translator(
            scanner,
            emitter,
            numeric_type=self.options.numeric_type,
            print_precision=self.options.print_precision,
            indent=self.options.indent,
        )
        translator.run()

        if output_path:
            code = emitter.write_file(output_path)
        else:
            code = emitter.finalize()

        return CompilerResult(
            filename=filename,
            code=code,
            variables=translator.symbols,
            labels=translator.labels_declared,
            token_count=translator.token_count,
            output_path=str(output_path) if output_path else None,
        )

    def compile_file(
        self,
        filepath: str,
        output_path: Optional[str] = None,
    ) -> CompilerResult:
        """
        Compile a Teeny source file to C.

        Raises:
            CompileError: If translation fails
            FileNotFoundError: If source file not found
            UnicodeDecodeError: If the source is not UTF-8
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath), output_path)


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_teeny(
    source: str,
    filename: str = "<input>",
    options: Optional[CompilerOptions] = None,
) -> str:
    """
    Compile Teeny source code to C.

    This is the primary high-level interface.

    Raises:
        CompileError: If translation fails

    Example:
        >>> print(compile_teeny('PRINT "hi"'))
        #include <stdio.h>
        int main(void){
            printf("hi\\n");
            return 0;
        }
    """
    return TeenyCompiler(options).compile_source(source, filename).code


def compile_file(
    filepath: str,
    output_path: Optional[str] = None,
    options: Optional[CompilerOptions] = None,
) -> str:
    """
    Compile a Teeny source file to C.

    Args:
        filepath: Path to the Teeny source file
        output_path: Optional path to write the C output to
        options: Compiler configuration

    Returns:
        Generated C code

    Raises:
        CompileError: If translation fails (nothing is written)
        FileNotFoundError: If source file not found
    """
    return TeenyCompiler(options).compile_file(filepath, output_path).code
