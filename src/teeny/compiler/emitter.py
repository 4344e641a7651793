"""
C Code Emitter
==============

Output accumulator for the translator. Generated code is collected in two
append-only buffers:

- header: the fixed preamble plus one declaration per variable
- body: the translated statements, in source order

The final C file is the header followed by the body. The emitter performs
no validation; it only preserves append order.
"""

import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


class Emitter:
    """
    Two-buffer, append-only text sink owned by one translation run.

    Example:
        emitter = Emitter()
        emitter.header_line("#include <stdio.h>")
        emitter.emit("a = ")
        emitter.emit_line("5;")
        code = emitter.finalize()
    """

    def __init__(self) -> None:
        self._header: list[str] = []
        self._body: list[str] = []

    def emit(self, code: str) -> None:
        """Append a fragment to the body."""
        self._body.append(code)

    def emit_line(self, code: str = "") -> None:
        """Append a fragment to the body and end the line."""
        self._body.append(code)
        self._body.append("\n")

    def header_line(self, code: str) -> None:
        """Append a complete line to the header."""
        self._header.append(code)
        self._header.append("\n")

    @property
    def header(self) -> str:
        return "".join(self._header)

    @property
    def body(self) -> str:
        return "".join(self._body)

    def finalize(self) -> str:
        """Return the generated file: header, then body."""
        return self.header + self.body

    def write_file(self, path: Union[str, Path]) -> str:
        """
        Write the generated file to ``path`` and return its text.

        Only call this after the translator finished without error.
        """
        code = self.finalize()
        Path(path).write_text(code, encoding="utf-8")
        logger.debug(f"Wrote {len(code)} bytes to {path}")
        return code
