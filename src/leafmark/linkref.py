"""Link reference definitions.

CommonMark 4.7:
A link reference definition consists of:
1. A link label (indented by up to 3 spaces)
2. A colon (:)
3. Optional whitespace (including up to one line ending)
4. A link destination
5. Optional whitespace (including up to one line ending)
6. An optional link title

Only spaces or tabs may follow on the final line. The grammar here parses a
single definition from the start of a text (normally ``LineRegion.text``)
and reports spans relative to that text; callers move them into source
coordinates with ``LinkReferenceDefinition.relocate()``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import NamedTuple

from leafmark.lines import LineRegion
from leafmark.location import Span

# Labels may not exceed this many characters between the brackets
MAX_LABEL_LENGTH = 999

# Pattern to find backslash escapes (CommonMark ASCII punctuation)
_ESCAPE_PATTERN = re.compile(r"\\([!\"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~])")

# Pattern for whitespace normalization
_WHITESPACE_PATTERN = re.compile(r"[ \t\r\n]+")

_TITLE_CLOSERS = {'"': '"', "'": "'", "(": ")"}


def process_escapes(text: str) -> str:
    """Replace a backslash followed by ASCII punctuation with the literal char."""
    return _ESCAPE_PATTERN.sub(r"\1", text)


def normalize_label(label: str) -> str:
    """Normalize a link label for matching.

    CommonMark 4.7: "Label matching is case-insensitive and Unicode case fold
    equivalent. Spaces, tabs, and line endings are normalized to single space."
    Backslash escapes stay literal, so ``[foo\\!]`` does not match ``[foo!]``.

    """
    return _WHITESPACE_PATTERN.sub(" ", label.strip()).casefold()


@dataclass(frozen=True, slots=True)
class LinkReferenceDefinition:
    """A parsed ``[label]: url "title"`` definition.

    Attributes:
        label: Normalized label (table key)
        url: Destination with backslash escapes processed
        title: Title with backslash escapes processed, or None
        span: Whole definition, from ``[`` to the end of the title or url
        label_span: Raw label text between the brackets
        url_span: Raw destination (inside ``<>`` when bracketed)
        title_span: Raw title inside its delimiters, or None
        line: Source line the definition starts on (0 until relocated)
        raw_label: Label exactly as written

    """

    label: str
    url: str
    title: str | None
    span: Span
    label_span: Span
    url_span: Span
    title_span: Span | None = None
    line: int = 0
    raw_label: str = ""

    def relocate(self, region: LineRegion) -> LinkReferenceDefinition:
        """Move spans from region-text offsets into absolute source offsets.

        Every offset goes through ``region.source_offset()``, so spans stay
        exact when the definition crosses a line boundary. The source line
        becomes the region's first line number.
        """

        def move(span: Span) -> Span:
            return Span(region.source_offset(span.start), region.source_offset(span.end))

        return replace(
            self,
            span=move(self.span),
            label_span=move(self.label_span),
            url_span=move(self.url_span),
            title_span=move(self.title_span) if self.title_span is not None else None,
            line=region.first.line,
        )


class LinkReferenceMatch(NamedTuple):
    """A definition plus how much of the input it consumed.

    ``consumed`` includes trailing whitespace and the line ending, so
    ``text[consumed:]`` starts at the next line.
    """

    definition: LinkReferenceDefinition
    consumed: int


def parse_link_reference_definition(text: str) -> LinkReferenceMatch | None:
    """Try to parse one link reference definition at the start of ``text``.

    Args:
        text: Candidate text; lines separated by ``"\\n"``

    Returns:
        LinkReferenceMatch on success, None if ``text`` does not start with
        a definition.
    """
    text_len = len(text)

    # Up to 3 spaces of indentation
    pos = 0
    while pos < text_len and text[pos] == " ":
        pos += 1
    if pos > 3 or pos >= text_len or text[pos] != "[":
        return None
    start = pos

    # 1. Label
    label_end = _scan_label(text, start + 1)
    if label_end is None:
        return None
    if label_end + 1 >= text_len or text[label_end + 1] != ":":
        return None
    raw_label = text[start + 1 : label_end]

    # 2. Destination
    dest_pos = _skip_whitespace(text, label_end + 2)
    if dest_pos is None or dest_pos >= text_len:
        return None
    destination = _scan_destination(text, dest_pos)
    if destination is None:
        return None
    url_start, url_end, dest_end = destination

    # 3. Optional title, which must be separated from the destination
    title_span: Span | None = None
    title: str | None = None
    end = dest_end
    title_pos = _skip_whitespace(text, dest_end)
    if title_pos is not None and title_pos > dest_end and title_pos < text_len:
        scanned = _scan_title(text, title_pos)
        if scanned is not None:
            title_start, title_end, after_title = scanned
            line_end = _clean_line_end(text, after_title)
            if line_end is not None:
                title_span = Span(title_start, title_end)
                title = process_escapes(text[title_start:title_end])
                end = after_title
                consumed = line_end

    if title_span is None:
        # No usable title: the destination line must end cleanly.
        line_end = _clean_line_end(text, dest_end)
        if line_end is None:
            return None
        consumed = line_end

    definition = LinkReferenceDefinition(
        label=normalize_label(raw_label),
        url=process_escapes(text[url_start:url_end]),
        title=title,
        span=Span(start, end),
        label_span=Span(start + 1, label_end),
        url_span=Span(url_start, url_end),
        title_span=title_span,
        raw_label=raw_label,
    )
    return LinkReferenceMatch(definition, consumed)


def _scan_label(text: str, pos: int) -> int | None:
    """Scan a label body starting after ``[``; return the index of ``]``."""
    text_len = len(text)
    has_content = False
    curr = pos
    while curr < text_len:
        char = text[curr]
        if char == "\\" and curr + 1 < text_len:
            has_content = True
            curr += 2
            continue
        if char == "[":
            # Nested unescaped '[' is not allowed in link labels
            return None
        if char == "]":
            if not has_content or curr - pos > MAX_LABEL_LENGTH:
                return None
            return curr
        if char == "\n":
            if _next_line_is_blank(text, curr + 1):
                return None
        elif char not in " \t":
            has_content = True
        curr += 1
    return None


def _skip_whitespace(text: str, pos: int) -> int | None:
    """Skip spaces, tabs and at most one line ending.

    Returns the new position, or None if a blank line is reached.
    """
    text_len = len(text)
    newline_found = False
    while pos < text_len:
        char = text[pos]
        if char in " \t":
            pos += 1
        elif char == "\n":
            if newline_found:
                return None
            if _next_line_is_blank(text, pos + 1):
                return None
            newline_found = True
            pos += 1
        else:
            break
    return pos


def _scan_destination(text: str, pos: int) -> tuple[int, int, int] | None:
    """Scan a link destination.

    Returns:
        (url_start, url_end, position after the destination), or None.
    """
    text_len = len(text)
    if text[pos] == "<":
        # Angle-bracketed destination
        curr = pos + 1
        while curr < text_len:
            c = text[curr]
            if c == "\\" and curr + 1 < text_len and text[curr + 1] != "\n":
                curr += 2
            elif c in "\n<":
                return None
            elif c == ">":
                return pos + 1, curr, curr + 1
            else:
                curr += 1
        return None

    # Bare destination: no spaces or control chars, balanced parentheses
    curr = pos
    depth = 0
    while curr < text_len:
        c = text[curr]
        if c == "\\" and curr + 1 < text_len and text[curr + 1] not in " \t\n":
            curr += 2
            continue
        if c in " \t\n" or ord(c) < 32 or ord(c) == 127:
            break
        if c == "(":
            depth += 1
        elif c == ")":
            if depth == 0:
                break
            depth -= 1
        curr += 1

    if curr == pos or depth != 0:
        return None
    return pos, curr, curr


def _scan_title(text: str, pos: int) -> tuple[int, int, int] | None:
    """Scan a quoted or parenthesized title.

    Returns:
        (title_start, title_end, position after the closing delimiter), or None.
    """
    opener = text[pos]
    closer = _TITLE_CLOSERS.get(opener)
    if closer is None:
        return None
    text_len = len(text)
    curr = pos + 1
    while curr < text_len:
        c = text[curr]
        if c == "\\" and curr + 1 < text_len:
            curr += 2
        elif c == closer:
            return pos + 1, curr, curr + 1
        elif opener == "(" and c == "(":
            return None
        elif c == "\n":
            if _next_line_is_blank(text, curr + 1):
                return None
            curr += 1
        else:
            curr += 1
    return None


def _clean_line_end(text: str, pos: int) -> int | None:
    """Position after the line ending, if only spaces/tabs remain on the line."""
    text_len = len(text)
    while pos < text_len and text[pos] in " \t":
        pos += 1
    if pos >= text_len:
        return text_len
    if text[pos] == "\n":
        return pos + 1
    return None


def _next_line_is_blank(text: str, pos: int) -> bool:
    """True if the line starting at ``pos`` is empty or all spaces/tabs."""
    text_len = len(text)
    while pos < text_len and text[pos] in " \t":
        pos += 1
    return pos >= text_len or text[pos] == "\n"
