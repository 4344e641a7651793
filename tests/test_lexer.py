# =============================================================================
# test_lexer.py - Scanner Unit Tests
# =============================================================================
# Tests for the Teeny scanner/tokenizer.
#
# Test coverage includes:
#   - Keywords (case-sensitive) and identifiers
#   - Number literals, kept as exact text
#   - String literals and their forbidden characters
#   - One- and two-character operators
#   - Whitespace, comments and significant newlines
#   - EOF behaviour and token locations
#   - Lexical error conditions
# =============================================================================

import pytest
from teeny.compiler.lexer import Scanner, Token, TokenKind, KEYWORDS
from teeny.compiler.errors import (
    LexicalError,
    IllegalCharacterError,
    MalformedNumberError,
    MalformedOperatorError,
    UnknownTokenError,
)


# =============================================================================
# Helper Functions
# =============================================================================

def tokenize(source: str) -> list:
    """Tokenize and drop the structural NEWLINE/EOF tokens."""
    tokens = list(Scanner(source, "<test>").tokenize())
    return [t for t in tokens if t.kind not in (TokenKind.NEWLINE, TokenKind.EOF)]


def kinds(source: str) -> list:
    """All token kinds, structural ones included."""
    return [t.kind for t in Scanner(source, "<test>").tokenize()]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source yields the appended newline, then EOF."""
        assert kinds("") == [TokenKind.NEWLINE, TokenKind.EOF]

    def test_whitespace_only(self):
        """Spaces, tabs and carriage returns produce no tokens."""
        assert kinds(" \t\r ") == [TokenKind.NEWLINE, TokenKind.EOF]

    def test_identifier(self):
        tokens = tokenize("counter")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.IDENT
        assert tokens[0].text == "counter"

    def test_identifier_with_digits(self):
        """Identifiers can contain digits (not at start)."""
        tokens = tokenize("loop1")
        assert tokens[0].kind == TokenKind.IDENT
        assert tokens[0].text == "loop1"

    def test_all_keywords(self):
        """Every reserved word maps to its own kind."""
        for text, kind in KEYWORDS.items():
            tokens = tokenize(text)
            assert len(tokens) == 1
            assert tokens[0].kind == kind
            assert tokens[0].text == text

    def test_keywords_are_case_sensitive(self):
        """Lower-case spellings are plain identifiers."""
        tokens = tokenize("print Print PRINT")
        assert [t.kind for t in tokens] == [
            TokenKind.IDENT,
            TokenKind.IDENT,
            TokenKind.PRINT,
        ]

    def test_keyword_prefix_is_identifier(self):
        """Keywords match the whole word only."""
        tokens = tokenize("LETTER IFFY")
        assert [t.kind for t in tokens] == [TokenKind.IDENT, TokenKind.IDENT]


# =============================================================================
# Number Tests
# =============================================================================

class TestNumbers:
    """Number literals keep their exact text."""

    def test_integer(self):
        tokens = tokenize("123")
        assert tokens[0].kind == TokenKind.NUMBER
        assert tokens[0].text == "123"

    def test_decimal(self):
        tokens = tokenize("3.14159")
        assert tokens[0].kind == TokenKind.NUMBER
        assert tokens[0].text == "3.14159"

    def test_leading_zeros_preserved(self):
        tokens = tokenize("007.50")
        assert tokens[0].text == "007.50"

    def test_number_then_identifier(self):
        tokens = tokenize("12ab")
        assert [(t.kind, t.text) for t in tokens] == [
            (TokenKind.NUMBER, "12"),
            (TokenKind.IDENT, "ab"),
        ]

    def test_decimal_point_without_digits(self):
        with pytest.raises(MalformedNumberError) as exc_info:
            tokenize("LET a = 3.")
        assert exc_info.value.text == "3."
        assert "illegal character in number" in str(exc_info.value)

    def test_decimal_point_followed_by_letter(self):
        with pytest.raises(MalformedNumberError):
            tokenize("3.x")


# =============================================================================
# String Tests
# =============================================================================

class TestStrings:
    """String literals and their restrictions."""

    def test_simple_string(self):
        tokens = tokenize('"hello, world"')
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.STRING
        assert tokens[0].text == "hello, world"

    def test_empty_string(self):
        tokens = tokenize('""')
        assert tokens[0].kind == TokenKind.STRING
        assert tokens[0].text == ""

    def test_string_keeps_keywords_and_symbols(self):
        tokens = tokenize('"PRINT # + ="')
        assert len(tokens) == 1
        assert tokens[0].text == "PRINT # + ="

    @pytest.mark.parametrize("char", ["%", "\\", "\t", "\r"])
    def test_forbidden_characters(self, char):
        with pytest.raises(IllegalCharacterError) as exc_info:
            tokenize(f'"a{char}b"')
        assert exc_info.value.char == char
        assert "illegal character in string" in str(exc_info.value)

    def test_unterminated_string(self):
        """A string left open hits the newline, which is illegal."""
        with pytest.raises(IllegalCharacterError) as exc_info:
            tokenize('PRINT "oops\nPRINT "fine"')
        assert exc_info.value.char == "\n"
        assert exc_info.value.location.line == 1
        assert exc_info.value.location.column == 12

    def test_unterminated_string_at_end_of_input(self):
        with pytest.raises(IllegalCharacterError):
            tokenize('PRINT "oops')


# =============================================================================
# Operator Tests
# =============================================================================

class TestOperators:
    """Operator classification with longest match."""

    @pytest.mark.parametrize("text,kind", [
        ("+", TokenKind.PLUS),
        ("-", TokenKind.MINUS),
        ("*", TokenKind.ASTERISK),
        ("/", TokenKind.SLASH),
        ("=", TokenKind.EQ),
        ("==", TokenKind.EQEQ),
        ("!=", TokenKind.NOTEQ),
        ("<", TokenKind.LT),
        ("<=", TokenKind.LTEQ),
        (">", TokenKind.GT),
        (">=", TokenKind.GTEQ),
    ])
    def test_operator(self, text, kind):
        tokens = tokenize(text)
        assert len(tokens) == 1
        assert tokens[0].kind == kind
        assert tokens[0].text == text

    def test_operators_without_spaces(self):
        tokens = tokenize("a<=b==c")
        assert [t.kind for t in tokens] == [
            TokenKind.IDENT,
            TokenKind.LTEQ,
            TokenKind.IDENT,
            TokenKind.EQEQ,
            TokenKind.IDENT,
        ]

    def test_triple_equals_splits(self):
        """'===' is '==' followed by '='."""
        tokens = tokenize("===")
        assert [t.kind for t in tokens] == [TokenKind.EQEQ, TokenKind.EQ]

    def test_bang_without_equals(self):
        with pytest.raises(MalformedOperatorError) as exc_info:
            tokenize("a ! b")
        assert exc_info.value.follower == " "
        assert "expected '!='" in str(exc_info.value)

    def test_bang_at_end_of_input(self):
        with pytest.raises(MalformedOperatorError):
            tokenize("!")

    @pytest.mark.parametrize("char", ["$", "(", ";", "_", "@", "\0"])
    def test_unknown_character(self, char):
        with pytest.raises(UnknownTokenError) as exc_info:
            tokenize(f"a {char} b")
        assert exc_info.value.char == char
        assert "unknown token" in str(exc_info.value)

    def test_non_ascii_letter_is_unknown(self):
        with pytest.raises(UnknownTokenError):
            tokenize("LET é = 1")


# =============================================================================
# Newline, Comment and EOF Tests
# =============================================================================

class TestStructure:
    """Newlines, comments and end of input."""

    def test_newline_is_a_token(self):
        assert kinds("PRINT a\nPRINT b") == [
            TokenKind.PRINT,
            TokenKind.IDENT,
            TokenKind.NEWLINE,
            TokenKind.PRINT,
            TokenKind.IDENT,
            TokenKind.NEWLINE,
            TokenKind.EOF,
        ]

    def test_trailing_newline_gains_blank_line(self):
        """A source already ending in a newline gains one more blank line."""
        assert kinds("a\n") == [
            TokenKind.IDENT,
            TokenKind.NEWLINE,
            TokenKind.NEWLINE,
            TokenKind.EOF,
        ]

    def test_comment_skipped_newline_kept(self):
        assert kinds("# a comment\nPRINT 1") == [
            TokenKind.NEWLINE,
            TokenKind.PRINT,
            TokenKind.NUMBER,
            TokenKind.NEWLINE,
            TokenKind.EOF,
        ]

    def test_trailing_comment(self):
        tokens = tokenize("LET a = 1   # set a")
        assert [t.text for t in tokens] == ["LET", "a", "=", "1"]

    def test_comment_without_final_newline(self):
        assert kinds("# only a comment") == [TokenKind.NEWLINE, TokenKind.EOF]

    def test_eof_repeats(self):
        """After EOF, every call returns a fresh EOF token."""
        scanner = Scanner("")
        assert scanner.next_token().kind == TokenKind.NEWLINE
        assert scanner.next_token().kind == TokenKind.EOF
        assert scanner.next_token().kind == TokenKind.EOF
        assert scanner.next_token().kind == TokenKind.EOF

    def test_tokenize_stops_after_eof(self):
        tokens = list(Scanner("PRINT 1").tokenize())
        assert tokens[-1].kind == TokenKind.EOF
        assert sum(1 for t in tokens if t.kind == TokenKind.EOF) == 1

    def test_tokenize_is_lazy(self):
        """Errors surface only when the bad token is reached."""
        stream = Scanner("PRINT 1\n$").tokenize()
        assert next(stream).kind == TokenKind.PRINT
        assert next(stream).kind == TokenKind.NUMBER
        assert next(stream).kind == TokenKind.NEWLINE
        with pytest.raises(UnknownTokenError):
            next(stream)


# =============================================================================
# Location and Coverage Tests
# =============================================================================

class TestLocations:
    """Token positions and lossless coverage of the source."""

    def test_token_location(self):
        tokens = tokenize("LET x = 1\n  PRINT x")
        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert (tokens[1].line, tokens[1].column) == (1, 5)
        assert (tokens[4].line, tokens[4].column) == (2, 3)
        assert str(tokens[4].location) == "<test>:2:3"

    def test_error_location_and_context(self):
        with pytest.raises(UnknownTokenError) as exc_info:
            tokenize("LET a = 1\nLET b = a $ 2")
        error = exc_info.value
        assert error.location.line == 2
        assert error.location.column == 11
        assert error.source_line == "LET b = a $ 2"
        assert str(error).startswith("<test>:2:11: lexical error:")

    def test_lexical_errors_share_base(self):
        with pytest.raises(LexicalError):
            tokenize("?")

    def test_lexemes_cover_source(self):
        """Token texts plus skipped whitespace/comments rebuild the source."""
        source = "LET total = 10\n# note\nWHILE total >= 1.5 REPEAT\n\tLET total = total - 1\nENDWHILE"
        scanner = Scanner(source)
        tokens = [t for t in scanner.tokenize() if t.kind != TokenKind.EOF]

        lines = scanner.source.split("\n")
        offsets = [0]
        for line in lines:
            offsets.append(offsets[-1] + len(line) + 1)

        pos = 0
        for token in tokens:
            start = offsets[token.line - 1] + token.column - 1
            gap = scanner.source[pos:start]
            assert gap.strip(" \t\r") == "" or gap.lstrip(" \t\r").startswith("#")
            assert scanner.source[start:start + len(token.text)] == token.text
            pos = start + len(token.text)
        assert pos == len(scanner.source)

    def test_token_is_immutable(self):
        token = Token("a", TokenKind.IDENT)
        with pytest.raises(AttributeError):
            token.text = "b"

    def test_token_helpers(self):
        assert Token(">=", TokenKind.GTEQ).is_comparator()
        assert not Token("=", TokenKind.EQ).is_comparator()
        assert Token("", TokenKind.EOF).describe() == "end of input"
        assert Token("\n", TokenKind.NEWLINE).describe() == "end of line"
