"""Line cursor over a source buffer.

Feeds the block processor one line at a time. Each line is exposed twice:
``raw_line`` is the whole line, ``line`` starts after the indentation, which
is where block markers are recognized.

CommonMark line endings (``\\n``, ``\\r\\n``, ``\\r``) are all accepted; the
terminator is never part of a line's slice.

Thread Safety:
Cursor instances are single-use and local to one parse.

"""

from __future__ import annotations

import re

from leafmark.lines import WHITESPACE, StringLine, StringSlice

_LINE_ENDING = re.compile(r"\r\n|\r|\n")

# Indentation at which a line becomes indented code
CODE_INDENT = 4


def split_lines(source: str) -> list[tuple[int, int]]:
    """Return ``(start, end)`` offsets for every line in ``source``.

    A trailing line terminator does not produce an extra empty line.
    """
    spans: list[tuple[int, int]] = []
    start = 0
    for match in _LINE_ENDING.finditer(source):
        spans.append((start, match.start()))
        start = match.end()
    if start < len(source):
        spans.append((start, len(source)))
    return spans


class LineCursor:
    """Pull-based cursor over the lines of a source buffer.

    Usage:
            >>> cursor = LineCursor("  Hello\\n====\\n")
            >>> cursor.indent, str(cursor.line)
            (2, 'Hello')
            >>> cursor.advance()
            True
            >>> cursor.line_number
            2

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_lines",
        "_index",
        "_tab_size",
        "_indent",
        "_content_start",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        *,
        tab_size: int = 4,
    ) -> None:
        self._source = source
        self._source_file = source_file
        self._lines = split_lines(source)
        self._index = 0
        self._tab_size = tab_size
        self._indent = 0
        self._content_start = 0
        self._measure()

    def _measure(self) -> None:
        """Compute indentation of the current line (tabs to the next tab stop)."""
        if self._index >= len(self._lines):
            return
        start, end = self._lines[self._index]
        source = self._source
        pos = start
        columns = 0
        while pos < end and source[pos] in WHITESPACE:
            if source[pos] == "\t":
                columns += self._tab_size - (columns % self._tab_size)
            else:
                columns += 1
            pos += 1
        self._indent = columns
        self._content_start = pos

    @property
    def source(self) -> str:
        return self._source

    @property
    def source_file(self) -> str | None:
        return self._source_file

    @property
    def at_end(self) -> bool:
        return self._index >= len(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def line_number(self) -> int:
        """Current line number (1-indexed)."""
        return self._index + 1

    @property
    def line_start(self) -> int:
        return self._lines[self._index][0]

    @property
    def line_end(self) -> int:
        """Offset just past the last character of the line (terminator excluded)."""
        return self._lines[self._index][1]

    @property
    def raw_line(self) -> StringSlice:
        start, end = self._lines[self._index]
        return StringSlice(self._source, start, end)

    @property
    def line(self) -> StringSlice:
        """Current line from its first non-indent character."""
        return StringSlice(self._source, self._content_start, self.line_end)

    @property
    def indent(self) -> int:
        """Indentation width of the current line in columns."""
        return self._indent

    @property
    def column(self) -> int:
        return self._indent

    @property
    def current_char(self) -> str:
        return self.line.current_char

    @property
    def is_blank_line(self) -> bool:
        return self._content_start >= self.line_end

    @property
    def is_code_indent(self) -> bool:
        return self._indent >= CODE_INDENT

    def current_line(self) -> StringLine:
        """The whole current line as a region entry."""
        return StringLine(self.raw_line, self.line_number)

    def advance(self) -> bool:
        """Move to the next line. Returns False once past the last line."""
        if self._index < len(self._lines):
            self._index += 1
            self._measure()
        return not self.at_end

    def peek(self, offset: int = 1) -> StringSlice | None:
        """Raw slice of the line ``offset`` lines ahead, or None past the end."""
        index = self._index + offset
        if 0 <= index < len(self._lines):
            start, end = self._lines[index]
            return StringSlice(self._source, start, end)
        return None
