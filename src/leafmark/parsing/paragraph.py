"""Paragraph block parser: paragraphs, setext headings, reference definitions.

Lifecycle of a candidate block:

    Absent --try_open--> Open --try_continue--> ... --> Closed

- ``try_open`` starts a candidate on any non-blank line.
- ``try_continue`` ends it on a blank line (BREAK), appends ordinary lines
  (CONTINUE), or, when the line is a setext underline, replaces the
  candidate with a Heading (DISCARD_AND_BREAK).
- ``close`` strips leading link reference definitions into the label table,
  drops the candidate if nothing is left, and trims the edge lines.

Definitions are only recognized as a contiguous run at the very start of a
paragraph. The extraction loop threads a LineRegion through by value: each
match produces a new, smaller region.

Heading conversion is abandoned when the definitions consume the whole
paragraph; the underline then becomes ordinary paragraph text::

    [foo]: /url
    ===

parses as one definition plus a paragraph containing ``===``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from leafmark.config import get_parse_config
from leafmark.errors import ParseError
from leafmark.linkref import LinkReferenceDefinition, parse_link_reference_definition
from leafmark.lines import LineRegion, StringLine
from leafmark.location import SourceLocation, Span
from leafmark.nodes import ContainerKind, Heading, Paragraph
from leafmark.parsing.setext import setext_marker_level
from leafmark.parsing.states import BlockState
from leafmark.utils.logger import get_logger

if TYPE_CHECKING:
    from leafmark.parsing.protocols import ProcessorHost
    from leafmark.references import LabelTable

logger = get_logger(__name__)


class ExtractionResult(NamedTuple):
    """Region left after extraction, and the definitions taken from it."""

    region: LineRegion
    definitions: tuple[LinkReferenceDefinition, ...]

    @property
    def found(self) -> bool:
        return bool(self.definitions)


def extract_link_reference_definitions(
    region: LineRegion,
    labels: LabelTable | None = None,
) -> ExtractionResult:
    """Strip consecutive link reference definitions off the start of ``region``.

    Each definition is moved into source coordinates, stamped with the
    region's first line number, and registered in ``labels`` (when given)
    before the next one is tried. Stops at the first position that is not a
    definition; the rest of the region is left untouched.

    Args:
        region: Accumulated paragraph lines (not modified)
        labels: Table to register definitions into, in source order

    Returns:
        ExtractionResult with the remaining region and the definitions found.
    """
    definitions: list[LinkReferenceDefinition] = []
    while not region.is_empty:
        match = parse_link_reference_definition(region.text)
        if match is None:
            break
        definition = match.definition.relocate(region)
        if labels is not None:
            labels.register(definition.label, definition)
        logger.debug(
            "Registered reference %r -> %r on line %d",
            definition.label,
            definition.url,
            definition.line,
        )
        definitions.append(definition)
        region = region.remove_prefix(match.consumed)
    return ExtractionResult(region, tuple(definitions))


@dataclass(slots=True)
class CandidateBlock:
    """A paragraph under construction.

    Attributes:
        region: Lines accumulated so far
        column: Indentation of the first line
        span: Source range claimed so far; the end follows appended lines
        line: Line number of the first line (1-indexed)
        container: Kind of the enclosing container
        closed: Set once ``close`` has run

    """

    region: LineRegion
    column: int
    span: Span
    line: int
    container: ContainerKind = ContainerKind.DOCUMENT
    closed: bool = False

    def append(self, line: StringLine) -> None:
        if self.region.is_empty:
            self.span = Span(line.position, line.slice.end)
            self.line = line.line
            self.column = _indent_of(line)
        else:
            self.span = self.span.with_end(line.slice.end)
        self.region.append(line)

    def adopt(self, region: LineRegion) -> None:
        """Replace the region with what extraction left over.

        The span start moves to the first remaining line so the span keeps
        covering exactly the text this block claims.
        """
        self.region = region
        if region.is_empty:
            self.span = Span(self.span.end, self.span.end)
            return
        first = region.first
        self.span = Span(first.position, self.span.end)
        self.line = first.line
        self.column = _indent_of(first)

    def _location(self, span: Span, source_file: str | None) -> SourceLocation:
        return SourceLocation(
            lineno=self.line,
            col_offset=self.column + 1,
            offset=span.start,
            end_offset=span.end,
            end_lineno=self.region.last.line,
            source_file=source_file,
        )

    def to_paragraph(self, source_file: str | None = None) -> Paragraph:
        return Paragraph(
            location=self._location(self.span, source_file),
            span=self.span,
            lines=self.region.lines,
            column=self.column,
        )

    def to_heading(self, level: int, end: int, source_file: str | None = None) -> Heading:
        """Build a setext heading ending just before the underline at ``end``."""
        self.region.trim()
        span = self.span.with_end(max(end, self.span.start))
        return Heading(
            location=self._location(span, source_file),
            span=span,
            lines=self.region.lines,
            level=1 if level == 1 else 2,
            column=self.column,
        )


def _indent_of(line: StringLine) -> int:
    return line.column + len(line.slice) - len(line.slice.trim_start())


class ParagraphBlockParser:
    """Block parser for paragraphs and setext headings.

    Setext detection defaults to the active ParseConfig; pass
    ``setext_headings`` to override it for this parser.

    Usage:
            >>> processor = BlockProcessor("Hello\\n=====", parser=ParagraphBlockParser())
            >>> processor.process().children[0].level
            1

    """

    __slots__ = ("_setext_headings",)

    def __init__(self, *, setext_headings: bool | None = None) -> None:
        self._setext_headings = setext_headings

    @property
    def setext_headings(self) -> bool:
        if self._setext_headings is None:
            return get_parse_config().setext_headings
        return self._setext_headings

    def try_open(self, processor: ProcessorHost) -> BlockState:
        cursor = processor.cursor
        if cursor.is_blank_line:
            return BlockState.SKIP

        processor.open(
            CandidateBlock(
                region=LineRegion([cursor.current_line()]),
                column=cursor.column,
                span=Span(cursor.line_start, cursor.line_end),
                line=cursor.line_number,
                container=processor.container,
            )
        )
        return BlockState.CONTINUE

    def try_continue(self, processor: ProcessorHost, candidate: CandidateBlock) -> BlockState:
        cursor = processor.cursor
        if cursor.is_blank_line:
            return BlockState.BREAK

        if (
            self.setext_headings
            and not cursor.is_code_indent
            and candidate.container is not ContainerKind.BLOCK_QUOTE
        ):
            return self._try_setext_heading(processor, candidate)

        candidate.append(cursor.current_line())
        return BlockState.CONTINUE

    def close(self, processor: ProcessorHost, candidate: CandidateBlock) -> bool:
        """Finish a candidate. Returns False if nothing is left to emit.

        Raises:
            ParseError: If the candidate was already closed.
        """
        if candidate.closed:
            raise ParseError(
                "paragraph candidate closed twice",
                lineno=candidate.line,
                source_file=processor.source_file,
            )
        candidate.closed = True

        result = extract_link_reference_definitions(candidate.region, processor.labels)
        if result.found:
            candidate.adopt(result.region)

        # Only definitions: nothing to emit
        if candidate.region.is_empty:
            return False

        candidate.region.trim_start()
        candidate.region.trim_end()
        return True

    def _try_setext_heading(
        self, processor: ProcessorHost, candidate: CandidateBlock
    ) -> BlockState:
        cursor = processor.cursor
        level = setext_marker_level(str(cursor.line))

        if level is not None:
            result = extract_link_reference_definitions(candidate.region, processor.labels)
            if result.found:
                candidate.adopt(result.region)
            if not (result.found and candidate.region.is_empty):
                processor.discard(candidate)
                heading = candidate.to_heading(level, cursor.line_start, processor.source_file)
                logger.debug(
                    "Paragraph on line %d became a level %d heading", candidate.line, level
                )
                processor.emit(heading)
                return BlockState.DISCARD_AND_BREAK
            logger.debug(
                "Underline on line %d follows only definitions; kept as text",
                cursor.line_number,
            )

        candidate.append(cursor.current_line())
        return BlockState.CONTINUE
