"""Line slices and line regions.

A LineRegion is the text a candidate block has accumulated so far: an
ordered run of StringLine entries, each pointing at a slice of the source
buffer. Slices are views (start/end offsets), so trimming and prefix removal
never copy the source.

Joined text:
    Grammar code works on ``region.text``, the slices joined with ``"\\n"``.
    ``source_offset()`` maps an offset in that joined text back to an
    absolute source offset, and ``remove_prefix()`` drops a consumed prefix
    of the joined text, returning the remainder as a new region.

Thread Safety:
StringSlice and StringLine are frozen. LineRegion is mutable and owned by
a single candidate block at a time.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from leafmark.errors import RegionError

# Characters removed by trimming (CommonMark "spaces or tabs")
WHITESPACE = " \t"


@dataclass(frozen=True, slots=True)
class StringSlice:
    """View of ``text[start:end]``.

    Attributes:
        text: The full source buffer (shared, never copied)
        start: Start offset (inclusive)
        end: End offset (exclusive)

    """

    text: str
    start: int
    end: int

    def __str__(self) -> str:
        return self.text[self.start : self.end]

    def __len__(self) -> int:
        return self.end - self.start

    def __repr__(self) -> str:
        return f"StringSlice({str(self)!r}, {self.start}:{self.end})"

    @property
    def is_empty(self) -> bool:
        return self.start >= self.end

    @property
    def current_char(self) -> str:
        """First character of the slice, or ``""`` when empty."""
        if self.start < self.end:
            return self.text[self.start]
        return ""

    def advance(self, count: int = 1) -> StringSlice:
        return StringSlice(self.text, min(self.start + count, self.end), self.end)

    def trim_start(self) -> StringSlice:
        start = self.start
        end = self.end
        text = self.text
        while start < end and text[start] in WHITESPACE:
            start += 1
        return StringSlice(text, start, end)

    def trim_end(self) -> StringSlice:
        start = self.start
        end = self.end
        text = self.text
        while end > start and text[end - 1] in WHITESPACE:
            end -= 1
        return StringSlice(text, start, end)

    def is_blank(self) -> bool:
        """True if the slice holds only spaces and tabs (or nothing)."""
        return self.trim_start().is_empty


@dataclass(frozen=True, slots=True)
class StringLine:
    """One source line (or the tail of one) inside a region.

    Attributes:
        slice: Text of the line, without its line terminator
        line: Source line number (1-indexed)
        column: Column of the slice start within the source line (0-indexed)

    """

    slice: StringSlice
    line: int
    column: int = 0

    def __str__(self) -> str:
        return str(self.slice)

    @property
    def position(self) -> int:
        """Absolute source offset of the slice start."""
        return self.slice.start


class LineRegion:
    """Ordered, mutable run of source lines owned by one candidate block.

    Invariant: slices never overlap and are strictly increasing in source
    position. ``append`` enforces it.

    Usage:
            >>> src = "alpha\\nbeta"
            >>> region = LineRegion([
            ...     StringLine(StringSlice(src, 0, 5), 1),
            ...     StringLine(StringSlice(src, 6, 10), 2),
            ... ])
            >>> region.text
            'alpha\\nbeta'
            >>> region.remove_prefix(6).text
            'beta'

    """

    __slots__ = ("_lines",)

    def __init__(self, lines: Iterable[StringLine] = ()) -> None:
        self._lines: list[StringLine] = []
        for line in lines:
            self.append(line)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[StringLine]:
        return iter(self._lines)

    def __getitem__(self, index: int) -> StringLine:
        return self._lines[index]

    def __repr__(self) -> str:
        return f"LineRegion({self.text!r})"

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def lines(self) -> tuple[StringLine, ...]:
        return tuple(self._lines)

    @property
    def first(self) -> StringLine:
        return self._lines[0]

    @property
    def last(self) -> StringLine:
        return self._lines[-1]

    @property
    def text(self) -> str:
        """Slices joined with newlines."""
        return "\n".join(str(line.slice) for line in self._lines)

    def append(self, line: StringLine) -> None:
        """Add a line after the current last line.

        Raises:
            RegionError: If the line starts before the previous one ends.
        """
        if self._lines and line.slice.start < self._lines[-1].slice.end:
            raise RegionError(
                f"line at offset {line.slice.start} overlaps or precedes "
                f"previous line ending at {self._lines[-1].slice.end}",
                lineno=line.line,
            )
        self._lines.append(line)

    def trim_start(self) -> None:
        """Strip leading spaces and tabs from the first line."""
        if self._lines:
            first = self._lines[0]
            trimmed = first.slice.trim_start()
            self._lines[0] = StringLine(
                trimmed, first.line, first.column + (trimmed.start - first.slice.start)
            )

    def trim_end(self) -> None:
        """Strip trailing spaces and tabs from the last line."""
        if self._lines:
            last = self._lines[-1]
            self._lines[-1] = StringLine(last.slice.trim_end(), last.line, last.column)

    def trim(self) -> None:
        self.trim_start()
        self.trim_end()

    def source_offset(self, offset: int) -> int:
        """Map an offset in ``text`` to an absolute source offset.

        An offset sitting on a joining newline maps to the end of the line
        before it.

        Raises:
            RegionError: If the offset lies outside the joined text.
        """
        if offset < 0:
            raise RegionError(f"negative region offset {offset}")
        remaining = offset
        for line in self._lines:
            length = len(line.slice)
            if remaining <= length:
                return line.slice.start + remaining
            remaining -= length + 1
        raise RegionError(f"offset {offset} is past the end of the region")

    def remove_prefix(self, consumed: int) -> LineRegion:
        """Return the region left after dropping ``consumed`` chars of ``text``.

        Lines fully covered by the prefix disappear. A line that is only
        partly covered keeps its tail, with start and column moved forward.
        A line whose remaining tail is empty is dropped together with its
        joining newline.

        Raises:
            RegionError: If ``consumed`` is longer than ``text``.
        """
        if consumed < 0:
            raise RegionError(f"negative prefix length {consumed}")
        if not self._lines:
            if consumed:
                raise RegionError(f"prefix of {consumed} chars removed from an empty region")
            return LineRegion()
        remaining = consumed
        for index, line in enumerate(self._lines):
            length = len(line.slice)
            if remaining < length:
                head = StringLine(line.slice.advance(remaining), line.line, line.column + remaining)
                return LineRegion([head, *self._lines[index + 1 :]])
            if remaining == length:
                return LineRegion(self._lines[index + 1 :])
            remaining -= length + 1
        raise RegionError(f"prefix of {consumed} chars is longer than the region")
