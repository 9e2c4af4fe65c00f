"""Source positions for blocks and reference definitions.

Provides SourceLocation (line/column, for messages and debugging) and Span
(half-open absolute offsets into the source buffer).

Thread Safety:
Both types are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open ``[start, end)`` offset range into the source text.
    
    Examples:
            >>> Span(4, 9).slice("abc [foo] def")
            '[foo]'
            >>> len(Span(4, 9))
            5
    
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            msg = f"Span start {self.start} is after end {self.end}"
            raise ValueError(msg)

    def __len__(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def with_end(self, end: int) -> Span:
        """Same start, new end."""
        return Span(self.start, end)

    def slice(self, source: str) -> str:
        """Text this span covers in ``source``."""
        return source[self.start : self.end]


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages and debugging.
    
    All positions are 1-indexed (lineno and col_offset start at 1).
    
    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        offset: Absolute start offset in source buffer
        end_offset: Absolute end offset in source buffer
        end_lineno: Ending line number (optional)
        end_col_offset: Ending column offset (optional)
        source_file: Source file path (optional)
    
    Examples:
            >>> loc = SourceLocation(1, 1, source_file="docs/guide.md")
            >>> str(loc)
            'docs/guide.md:1:1'
    
    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    end_lineno: int | None = None
    end_col_offset: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.md:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @property
    def span(self) -> Span:
        """Absolute offsets as a Span."""
        return Span(self.offset, max(self.offset, self.end_offset))

