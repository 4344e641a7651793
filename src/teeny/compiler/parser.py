"""
Teeny Recursive Descent Translator
==================================

This module implements a single-pass, syntax-directed translator from Teeny
to C. The parser and code generator are fused: no syntax tree is built.
Each production writes its C text into the Emitter as soon as it is
recognized.

Grammar (EBNF, nl = one or more NEWLINE)
----------------------------------------
program    ::= {statement}
statement  ::= "PRINT" (expression | STRING) nl
             | "IF" comparison "THEN" nl {statement} "ENDIF" nl
             | "WHILE" comparison "REPEAT" nl {statement} "ENDWHILE" nl
             | "LABEL" IDENT nl
             | "GOTO" IDENT nl
             | "LET" IDENT "=" expression nl
             | "INPUT" IDENT nl
comparison ::= expression (comparator expression)+
comparator ::= "==" | "!=" | ">" | ">=" | "<" | "<="
expression ::= term (("+" | "-") term)*
term       ::= unary (("*" | "/") unary)*
unary      ::= ["+" | "-"] primary
primary    ::= NUMBER | IDENT

Bookkeeping
-----------
- symbols: variables written by LET or INPUT. The first write appends a
  declaration to the header; reading a name not yet in the table fails.
- labels declared / referenced: LABEL fails on a duplicate immediately;
  GOTO targets are only checked once the whole program has been read.

Example Usage
-------------
>>> from teeny.compiler.lexer import Scanner
>>> from teeny.compiler.emitter import Emitter
>>> from teeny.compiler.parser import Translator
>>> emitter = Emitter()
>>> Translator(Scanner('LET a = 5'), emitter).run()
>>> print(emitter.finalize())
#include <stdio.h>
int main(void){
    float a;
    a = 5;
    return 0;
}
"""

import logging
from typing import Optional

from teeny.errors import SourceLocation
from teeny.compiler.lexer import Scanner, Token, TokenKind
from teeny.compiler.emitter import Emitter
from teeny.compiler.errors import (
    UnexpectedTokenError,
    MissingComparisonError,
    InvalidStatementError,
    DuplicateLabelError,
    UseBeforeAssignmentError,
    UndeclaredLabelError,
    ReservedNameError,
)

logger = logging.getLogger(__name__)


# scanf conversion for each supported numeric type
SCANF_FORMATS: dict[str, str] = {
    "float": "%f",
    "double": "%lf",
}

# C keywords (C11); names copied into C must avoid them
C_KEYWORDS = frozenset({
    "auto", "break", "case", "char", "const", "continue", "default", "do",
    "double", "else", "enum", "extern", "float", "for", "goto", "if",
    "inline", "int", "long", "register", "restrict", "return", "short",
    "signed", "sizeof", "static", "struct", "switch", "typedef", "union",
    "unsigned", "void", "volatile", "while",
    "_Alignas", "_Alignof", "_Atomic", "_Bool", "_Complex", "_Generic",
    "_Imaginary", "_Noreturn", "_Static_assert", "_Thread_local",
})

# Library functions the generated code calls; a variable would shadow them
C_LIBRARY_NAMES = frozenset({"printf", "scanf"})

RESERVED_VARIABLE_NAMES = C_KEYWORDS | C_LIBRARY_NAMES


class Translator:
    """
    Recursive descent parser that emits C while it parses.

    The translator pulls tokens from the scanner through a two-token
    window (current and peek) and owns the emitter for the whole run.
    Every error is fatal and raised where it is detected.

    Attributes:
        scanner: Token source
        emitter: Output sink
    """

    def __init__(
        self,
        scanner: Scanner,
        emitter: Emitter,
        numeric_type: str = "float",
        print_precision: int = 2,
        indent: str = "    ",
    ):
        """
        Initialize the translator and prime the lookahead window.

        Args:
            scanner: Scanner over the source text
            emitter: Sink receiving the generated C
            numeric_type: C type of every variable ("float" or "double")
            print_precision: Digits after the point when printing numbers
            indent: Text for one level of nesting in the generated code

        Raises:
            ValueError: If numeric_type is not supported or
                print_precision is negative
            LexicalError: If the first tokens cannot be scanned
        """
        if numeric_type not in SCANF_FORMATS:
            raise ValueError(f"unsupported numeric type: {numeric_type!r}")
        if print_precision < 0:
            raise ValueError(f"print precision must be >= 0, got {print_precision}")

        self.scanner = scanner
        self.emitter = emitter
        self._numeric_type = numeric_type
        self._print_precision = print_precision
        self._indent = indent

        # Variable name -> location of its first write
        self._symbols: dict[str, SourceLocation] = {}

        # Label name -> location of its LABEL / first GOTO
        self._labels_declared: dict[str, SourceLocation] = {}
        self._labels_referenced: dict[str, SourceLocation] = {}

        # Nesting depth of the statement being generated (main body is 1)
        self._depth = 1

        self._token_count = 0
        self._finished = False

        # Lookahead window
        self._current: Optional[Token] = None
        self._peek: Optional[Token] = None
        self._advance()
        self._advance()

    # =========================================================================
    # Public Interface
    # =========================================================================

    def run(self) -> None:
        """
        Translate the whole program into the emitter.

        program ::= {statement}

        Raises:
            CompileError: On the first lexical, syntax or semantic error
            RuntimeError: If called a second time
        """
        if self._finished:
            raise RuntimeError("translator has already run")
        self._finished = True

        self.emitter.header_line("#include <stdio.h>")
        self.emitter.header_line("int main(void){")

        # Leading blank lines
        while self._check(TokenKind.NEWLINE):
            self._advance()

        while not self._check(TokenKind.EOF):
            self._statement()

        self._line("return 0;")
        self.emitter.emit_line("}")

        self._resolve_labels()
        logger.debug(
            f"Translated {self._token_count} tokens, "
            f"{len(self._symbols)} variables, {len(self._labels_declared)} labels"
        )

    @property
    def symbols(self) -> list[str]:
        """Declared variables in declaration order."""
        return list(self._symbols)

    @property
    def labels_declared(self) -> list[str]:
        return list(self._labels_declared)

    @property
    def labels_referenced(self) -> list[str]:
        return list(self._labels_referenced)

    @property
    def token_count(self) -> int:
        """Number of tokens pulled from the scanner, excluding EOF."""
        return self._token_count

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _advance(self) -> None:
        """Shift the window and pull exactly one token into peek."""
        self._current = self._peek
        self._peek = self.scanner.next_token()
        if self._peek.kind != TokenKind.EOF:
            self._token_count += 1

    def _check(self, kind: TokenKind) -> bool:
        return self._current.kind == kind

    def _match(self, kind: TokenKind, expected: Optional[str] = None) -> Token:
        """
        Consume the current token, which must be of the given kind.

        Returns:
            The consumed token

        Raises:
            UnexpectedTokenError: If the current token has another kind
        """
        token = self._current
        if token.kind != kind:
            raise UnexpectedTokenError(
                expected or kind.name,
                token.describe(),
                token.location,
                self.scanner.source_line(token.line),
            )
        self._advance()
        return token

    # =========================================================================
    # Output Helpers
    # =========================================================================

    def _begin_line(self) -> None:
        self.emitter.emit(self._indent * self._depth)

    def _line(self, code: str) -> None:
        self._begin_line()
        self.emitter.emit_line(code)

    # =========================================================================
    # Statements
    # =========================================================================

    def _statement(self) -> None:
        """Parse one statement and its terminating newlines."""
        token = self._current

        if token.kind == TokenKind.PRINT:
            self._print_statement()
        elif token.kind == TokenKind.IF:
            self._if_statement()
        elif token.kind == TokenKind.WHILE:
            self._while_statement()
        elif token.kind == TokenKind.LABEL:
            self._label_statement()
        elif token.kind == TokenKind.GOTO:
            self._goto_statement()
        elif token.kind == TokenKind.LET:
            self._let_statement()
        elif token.kind == TokenKind.INPUT:
            self._input_statement()
        else:
            raise InvalidStatementError(
                token.describe(),
                token.location,
                self.scanner.source_line(token.line),
            )

        self._nl()

    def _print_statement(self) -> None:
        """PRINT (expression | STRING)"""
        self._advance()

        if self._check(TokenKind.STRING):
            self._line(f'printf("{self._current.text}\\n");')
            self._advance()
            return

        self._begin_line()
        self.emitter.emit(
            f'printf("%.{self._print_precision}f\\n", ({self._numeric_type})('
        )
        self._expression()
        self.emitter.emit_line("));")

    def _if_statement(self) -> None:
        """IF comparison THEN nl {statement} ENDIF"""
        self._advance()
        self._begin_line()
        self.emitter.emit("if(")
        self._comparison()
        self._match(TokenKind.THEN, "'THEN'")
        self._nl()
        self.emitter.emit_line("){")

        self._block(TokenKind.ENDIF)
        self._match(TokenKind.ENDIF, "'ENDIF'")
        self._line("}")

    def _while_statement(self) -> None:
        """WHILE comparison REPEAT nl {statement} ENDWHILE"""
        self._advance()
        self._begin_line()
        self.emitter.emit("while(")
        self._comparison()
        self._match(TokenKind.REPEAT, "'REPEAT'")
        self._nl()
        self.emitter.emit_line("){")

        self._block(TokenKind.ENDWHILE)
        self._match(TokenKind.ENDWHILE, "'ENDWHILE'")
        self._line("}")

    def _block(self, terminator: TokenKind) -> None:
        """Statements up to (not including) the closing keyword."""
        self._depth += 1
        while not self._check(terminator):
            if self._check(TokenKind.EOF):
                token = self._current
                raise UnexpectedTokenError(
                    f"'{terminator.name}'",
                    token.describe(),
                    token.location,
                    self.scanner.source_line(token.line),
                )
            self._statement()
        self._depth -= 1

    def _label_statement(self) -> None:
        """LABEL IDENT"""
        self._advance()
        token = self._match(TokenKind.IDENT, "label name")
        self._check_c_name(token, C_KEYWORDS, "label")
        name = token.text

        if name in self._labels_declared:
            raise DuplicateLabelError(
                name,
                token.location,
                original_location=self._labels_declared[name],
                source_line=self.scanner.source_line(token.line),
            )
        self._labels_declared[name] = token.location
        logger.debug(f"Declared label '{name}' at {token.location}")

        # Empty statement keeps a label that closes a block valid C
        self._line(f"{name}:;")

    def _goto_statement(self) -> None:
        """GOTO IDENT (target checked after the whole program)"""
        self._advance()
        token = self._match(TokenKind.IDENT, "label name")
        self._check_c_name(token, C_KEYWORDS, "label")
        self._labels_referenced.setdefault(token.text, token.location)
        self._line(f"goto {token.text};")

    def _let_statement(self) -> None:
        """LET IDENT = expression"""
        self._advance()
        target = self._match(TokenKind.IDENT, "variable name")
        self._check_c_name(target, RESERVED_VARIABLE_NAMES, "variable")
        self._match(TokenKind.EQ, "'='")

        self._begin_line()
        self.emitter.emit(f"{target.text} = ")
        # Right-hand side is checked before the target counts as assigned
        self._expression()
        self.emitter.emit_line(";")

        self._declare(target)

    def _input_statement(self) -> None:
        """INPUT IDENT, with a guarded numeric read"""
        self._advance()
        target = self._match(TokenKind.IDENT, "variable name")
        self._check_c_name(target, RESERVED_VARIABLE_NAMES, "variable")
        self._declare(target)

        name = target.text
        self._line(f'if(0 == scanf("{SCANF_FORMATS[self._numeric_type]}", &{name})) {{')
        self._depth += 1
        self._line(f"{name} = 0;")
        self._line('scanf("%*s");')
        self._depth -= 1
        self._line("}")

    def _nl(self) -> None:
        """One or more NEWLINE tokens."""
        self._match(TokenKind.NEWLINE, "newline")
        while self._check(TokenKind.NEWLINE):
            self._advance()

    def _check_c_name(self, token: Token, reserved: frozenset, kind: str) -> None:
        """Reject a name that cannot be used verbatim in the generated C."""
        if token.text in reserved:
            raise ReservedNameError(
                token.text,
                kind,
                token.location,
                self.scanner.source_line(token.line),
            )

    def _declare(self, token: Token) -> None:
        """Record a written variable, declaring it on first write."""
        if token.text in self._symbols:
            return
        self._symbols[token.text] = token.location
        self.emitter.header_line(f"{self._indent}{self._numeric_type} {token.text};")
        logger.debug(f"Declared variable '{token.text}' at {token.location}")

    # =========================================================================
    # Expressions
    # =========================================================================

    def _comparison(self) -> None:
        """expression (comparator expression)+"""
        self._expression()

        if not self._current.is_comparator():
            token = self._current
            raise MissingComparisonError(
                token.describe(),
                token.location,
                self.scanner.source_line(token.line),
            )

        while self._current.is_comparator():
            self.emitter.emit(f" {self._current.text} ")
            self._advance()
            self._expression()

    def _expression(self) -> None:
        """term (("+" | "-") term)*"""
        self._term()
        while self._check(TokenKind.PLUS) or self._check(TokenKind.MINUS):
            self.emitter.emit(f" {self._current.text} ")
            self._advance()
            self._term()

    def _term(self) -> None:
        """unary (("*" | "/") unary)*"""
        self._unary()
        while self._check(TokenKind.ASTERISK) or self._check(TokenKind.SLASH):
            self.emitter.emit(f" {self._current.text} ")
            self._advance()
            self._unary()

    def _unary(self) -> None:
        """["+" | "-"] primary"""
        if self._check(TokenKind.PLUS) or self._check(TokenKind.MINUS):
            self.emitter.emit(self._current.text)
            self._advance()
        self._primary()

    def _primary(self) -> None:
        """NUMBER | IDENT"""
        token = self._current

        if token.kind == TokenKind.NUMBER:
            self.emitter.emit(c_number(token.text))
            self._advance()
        elif token.kind == TokenKind.IDENT:
            if token.text not in self._symbols:
                raise UseBeforeAssignmentError(
                    token.text,
                    token.location,
                    self.scanner.source_line(token.line),
                    similar_names=find_similar_names(token.text, self._symbols),
                )
            self.emitter.emit(token.text)
            self._advance()
        else:
            raise UnexpectedTokenError(
                "number or variable",
                token.describe(),
                token.location,
                self.scanner.source_line(token.line),
            )

    # =========================================================================
    # Label Resolution
    # =========================================================================

    def _resolve_labels(self) -> None:
        """
        Check every GOTO target against the declared labels.

        Raises:
            UndeclaredLabelError: Naming every undeclared target
        """
        missing = [
            name for name in self._labels_referenced
            if name not in self._labels_declared
        ]
        if missing:
            location = self._labels_referenced[missing[0]]
            raise UndeclaredLabelError(
                missing,
                location,
                self.scanner.source_line(location.line),
                similar_names=find_similar_names(missing[0], self._labels_declared),
            )
        logger.debug(f"Resolved {len(self._labels_referenced)} label reference(s)")


# =============================================================================
# Emission and Diagnostic Helpers
# =============================================================================

def c_number(text: str) -> str:
    """
    C spelling of a Teeny number literal.

    C reads a leading zero as an octal prefix, so redundant zeros of the
    integer part are dropped: "010" -> "10", "007.5" -> "7.5", "0" -> "0".
    """
    integer, point, fraction = text.partition(".")
    return (integer.lstrip("0") or "0") + point + fraction


def find_similar_names(name: str, candidates) -> list[str]:
    """
    Known names within a small edit distance of ``name``.

    Names are case-sensitive, so a difference in case counts as an edit.
    Closest names come first; ties keep the order of ``candidates``.
    """
    scored = []
    for candidate in candidates:
        if abs(len(candidate) - len(name)) > 2:
            continue
        distance = _edit_distance(name, candidate)
        if 0 < distance <= 2 and distance < len(name):
            scored.append((distance, candidate))

    scored.sort(key=lambda item: item[0])
    return [candidate for _, candidate in scored[:3]]


def _edit_distance(source: str, target: str) -> int:
    """Levenshtein distance, computed one row at a time."""
    previous = list(range(len(target) + 1))
    for i, source_char in enumerate(source, start=1):
        current = [i]
        for j, target_char in enumerate(target, start=1):
            substitution = previous[j - 1] + (source_char != target_char)
            current.append(min(previous[j] + 1, current[j - 1] + 1, substitution))
        previous = current
    return previous[-1]
