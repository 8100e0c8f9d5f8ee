"""Shared backend helpers: the line-buffer emitter and literal quoting."""

from __future__ import annotations

import re
from collections.abc import Iterator
from contextlib import contextmanager

_HASH_RUN = re.compile(r'["\\](#*)')


def needs_raw_literal(value: str) -> bool:
    """True if value must be written as a raw `#"..."#` literal."""
    return '"' in value or "\\" in value


def quote_string(value: str) -> str:
    """Quote value as a Swift string literal without escaping its content.

    Content containing a quote or backslash uses the raw form so it reads
    back verbatim. The raw delimiter carries one more `#` than the longest
    run of `#` following a quote or backslash in the content.
    """
    if needs_raw_literal(value):
        hashes = "#" * (max(len(run) for run in _HASH_RUN.findall(value)) + 1)
        return hashes + '"' + value + '"' + hashes
    return '"' + value + '"'


def split_lines(text: str) -> list[str]:
    """Split on newlines, keeping empty lines (including a trailing one)."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


class Emitter:
    """Base class for code emitters with indentation tracking.

    Lines are stored complete. Setting the continuation flag with
    continue_line() makes the next line() call extend the last stored line
    instead of starting a new one, so separate emit routines can build a
    single output line together. The flag is reset by every line() call.
    """

    def __init__(self, indent_str: str = "    ") -> None:
        self.indent: int = 0
        self.lines: list[str] = []
        self.append_next: bool = False
        self._indent_str = indent_str

    def line(self, text: str = "") -> None:
        """Emit a line with current indentation, or extend the last line."""
        if self.append_next and self.lines:
            self.lines[-1] = self.lines[-1] + text
        elif text:
            self.lines.append(self._indent_str * self.indent + text)
        else:
            self.lines.append("")
        self.append_next = False

    def continue_line(self) -> None:
        """Make the next line() call append to the last stored line."""
        self.append_next = True

    def push(self) -> None:
        self.indent += 1

    def pop(self) -> None:
        if self.indent <= 0:
            raise RuntimeError("cannot pop indentation below 0")
        self.indent -= 1

    @contextmanager
    def nested(self) -> Iterator[None]:
        """Run the body one level deeper; the level is restored on any exit."""
        self.push()
        try:
            yield
        finally:
            self.pop()

    def output(self) -> str:
        """Return the accumulated output as a string."""
        return "\n".join(self.lines)
