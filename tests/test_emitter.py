# =============================================================================
# test_emitter.py - Emitter Unit Tests
# =============================================================================
# Tests for the two-buffer output sink used by the translator.
# =============================================================================

from teeny.compiler.emitter import Emitter


class TestEmitter:
    """Header/body buffering and final assembly."""

    def test_empty(self):
        assert Emitter().finalize() == ""

    def test_emit_fragments_join_on_one_line(self):
        emitter = Emitter()
        emitter.emit("a = ")
        emitter.emit("1")
        emitter.emit_line(";")
        assert emitter.body == "a = 1;\n"

    def test_emit_line_without_text(self):
        emitter = Emitter()
        emitter.emit_line()
        assert emitter.body == "\n"

    def test_header_precedes_body(self):
        """Header lines come first even when appended after body text."""
        emitter = Emitter()
        emitter.emit_line("x = 1;")
        emitter.header_line("#include <stdio.h>")
        emitter.emit_line("y = 2;")
        emitter.header_line("float x;")
        assert emitter.finalize() == (
            "#include <stdio.h>\n"
            "float x;\n"
            "x = 1;\n"
            "y = 2;\n"
        )

    def test_finalize_does_not_consume(self):
        emitter = Emitter()
        emitter.header_line("h")
        emitter.emit_line("b")
        assert emitter.finalize() == emitter.finalize() == "h\nb\n"

    def test_write_file(self, tmp_path):
        emitter = Emitter()
        emitter.header_line("int main(void){")
        emitter.emit_line("}")
        target = tmp_path / "out.c"

        code = emitter.write_file(target)

        assert code == "int main(void){\n}\n"
        assert target.read_text(encoding="utf-8") == code
