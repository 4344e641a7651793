"""
Teeny Compiler Driver Tests
===========================

End-to-end tests through TeenyCompiler and the convenience functions:
options, results, file handling and the no-output-on-error guarantee.
"""

import pytest
from teeny import (
    TeenyCompiler,
    CompilerOptions,
    compile_teeny,
    compile_file,
    TeenyError,
)
from teeny.compiler.errors import (
    UseBeforeAssignmentError,
    UndeclaredLabelError,
    MissingComparisonError,
)


FIBONACCI = """\
# Print the first terms of the Fibonacci sequence
PRINT "How many fibonacci numbers do you want?"
INPUT nums
PRINT ""

LET a = 0
LET b = 1
WHILE nums > 0 REPEAT
    PRINT a
    LET c = a + b
    LET a = b
    LET b = c
    LET nums = nums - 1
ENDWHILE
"""


# =============================================================================
# Options Tests
# =============================================================================

class TestCompilerOptions:
    """Validation of compiler configuration."""

    def test_defaults(self):
        options = CompilerOptions()
        assert options.numeric_type == "float"
        assert options.print_precision == 2
        assert options.indent == "    "

    def test_rejects_unknown_type(self):
        with pytest.raises(ValueError):
            CompilerOptions(numeric_type="int")

    def test_rejects_negative_precision(self):
        with pytest.raises(ValueError):
            CompilerOptions(print_precision=-1)


# =============================================================================
# Integration Tests
# =============================================================================

class TestIntegration:
    """Complete programs through the public API."""

    def test_fibonacci(self):
        result = TeenyCompiler().compile_source(FIBONACCI, "fib.teeny")

        assert result.filename == "fib.teeny"
        assert result.variables == ["nums", "a", "b", "c"]
        assert result.labels == []
        assert result.token_count > 0
        assert result.code.startswith("#include <stdio.h>\nint main(void){\n")
        assert result.code.endswith("    return 0;\n}\n")
        assert '    printf("\\n");' in result.code
        assert "    while(nums > 0){" in result.code

    def test_declarations_precede_body(self):
        code = compile_teeny(FIBONACCI)
        lines = code.splitlines()
        last_decl = max(i for i, line in enumerate(lines) if line.startswith("    float "))
        first_stmt = next(i for i, line in enumerate(lines) if "printf" in line)
        assert last_decl < first_stmt

    def test_countdown_with_goto(self):
        source = (
            "LET n = 3\n"
            "LABEL loop\n"
            "PRINT n\n"
            "LET n = n - 1\n"
            "IF n > 0 THEN\n"
            "    GOTO loop\n"
            "ENDIF\n"
        )
        result = TeenyCompiler().compile_source(source)
        assert result.labels == ["loop"]
        assert "    loop:;\n" in result.code
        assert "        goto loop;\n" in result.code

    def test_same_source_same_output(self):
        assert compile_teeny(FIBONACCI) == compile_teeny(FIBONACCI)

    def test_independent_runs(self):
        """No state carries over between compilations."""
        compiler = TeenyCompiler()
        compiler.compile_source("LET a = 1")
        with pytest.raises(UseBeforeAssignmentError):
            compiler.compile_source("PRINT a")

    def test_double_option(self):
        code = compile_teeny("INPUT x", options=CompilerOptions(numeric_type="double"))
        assert "    double x;" in code

    def test_errors_share_root(self):
        with pytest.raises(TeenyError):
            compile_teeny("GOTO nowhere")

    def test_undeclared_label(self):
        with pytest.raises(UndeclaredLabelError):
            compile_teeny("GOTO done\n")

    def test_missing_comparison(self):
        with pytest.raises(MissingComparisonError):
            compile_teeny("LET a = 1\nIF a THEN\nENDIF\n")


# =============================================================================
# File Tests
# =============================================================================

class TestFiles:
    """Reading sources and writing the generated C."""

    def test_compile_file_writes_output(self, tmp_path):
        source = tmp_path / "hello.teeny"
        source.write_text('PRINT "hello"\n', encoding="utf-8")
        output = tmp_path / "hello.c"

        code = compile_file(str(source), str(output))

        assert output.read_text(encoding="utf-8") == code
        assert 'printf("hello\\n");' in code

    def test_result_records_output_path(self, tmp_path):
        output = tmp_path / "out.c"
        result = TeenyCompiler().compile_source("PRINT 1", "one.teeny", str(output))

        assert result.output_path == str(output)
        assert output.read_text(encoding="utf-8") == result.code

    def test_result_without_output_path(self):
        assert TeenyCompiler().compile_source("PRINT 1").output_path is None

    def test_compile_file_without_output(self, tmp_path):
        source = tmp_path / "hello.teeny"
        source.write_text("PRINT 1", encoding="utf-8")
        assert "printf" in compile_file(str(source))
        assert list(tmp_path.iterdir()) == [source]

    def test_error_writes_nothing(self, tmp_path):
        source = tmp_path / "bad.teeny"
        source.write_text("PRINT x\n", encoding="utf-8")
        output = tmp_path / "bad.c"

        with pytest.raises(UseBeforeAssignmentError) as exc_info:
            compile_file(str(source), str(output))

        assert not output.exists()
        assert str(exc_info.value).startswith(f"{source}:1:7:")

    def test_missing_source(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TeenyCompiler().compile_file(str(tmp_path / "missing.teeny"))

    def test_utf8_string_literal(self, tmp_path):
        source = tmp_path / "greet.teeny"
        source.write_text('PRINT "héllo wörld"\n', encoding="utf-8")
        assert 'printf("héllo wörld\\n");' in compile_file(str(source))
