"""Line-driven block processor.

Feeds a source buffer to a ParagraphBlockParser one line at a time and
collects the finished blocks into a Document.

Architecture:
    The processor owns the LineCursor, the LabelTable and the output list.
    The parser decides what each line means and reports a BlockState:

    - no candidate: ``try_open`` (SKIP on blank lines, else CONTINUE)
    - candidate open: ``try_continue``
        CONTINUE           line consumed, keep going
        BREAK              close the candidate, offer the line again
        DISCARD_AND_BREAK  candidate replaced by an emitted heading
    - end of input: close any open candidate

Thread Safety:
    Processor instances are single-use and not thread-safe. Create one per
    parse operation. Configuration is read from ContextVar (thread-local).

"""

from __future__ import annotations

from leafmark.config import get_parse_config
from leafmark.cursor import LineCursor
from leafmark.errors import ParseError
from leafmark.location import SourceLocation
from leafmark.nodes import Block, ContainerKind, Document
from leafmark.parsing.paragraph import CandidateBlock, ParagraphBlockParser
from leafmark.parsing.states import BlockState
from leafmark.references import LabelTable
from leafmark.utils.logger import get_logger

logger = get_logger(__name__)


class BlockProcessor:
    """Drives the paragraph parser over every line of a source buffer.

    Usage:
            >>> doc = BlockProcessor("[foo]: /url\\nSome text\\n").process()
            >>> doc.children[0].content
            'Some text'
            >>> doc.reference("FOO").url
            '/url'

    Args:
        source: Markdown source text
        source_file: Optional source file path for locations and errors
        container: Kind of container the source sits in; setext headings
            are not recognized inside block quotes
        labels: Label table to register definitions into. Pass the parent
            document's table when parsing nested content.
        parser: Paragraph parser to use (default: a new ParagraphBlockParser)

    """

    __slots__ = (
        "_cursor",
        "_labels",
        "_container",
        "_parser",
        "_blocks",
        "_candidate",
    )

    def __init__(
        self,
        source: str,
        *,
        source_file: str | None = None,
        container: ContainerKind = ContainerKind.DOCUMENT,
        labels: LabelTable | None = None,
        parser: ParagraphBlockParser | None = None,
    ) -> None:
        config = get_parse_config()
        self._cursor = LineCursor(source, source_file, tab_size=config.tab_size)
        self._labels = labels if labels is not None else LabelTable(config.duplicate_labels)
        self._container = container
        self._parser = parser or ParagraphBlockParser()
        self._blocks: list[Block] = []
        self._candidate: CandidateBlock | None = None

    @property
    def cursor(self) -> LineCursor:
        return self._cursor

    @property
    def labels(self) -> LabelTable:
        return self._labels

    @property
    def container(self) -> ContainerKind:
        return self._container

    @property
    def source_file(self) -> str | None:
        return self._cursor.source_file

    @property
    def candidate(self) -> CandidateBlock | None:
        """The open candidate, if any."""
        return self._candidate

    @property
    def blocks(self) -> tuple[Block, ...]:
        """Blocks emitted so far."""
        return tuple(self._blocks)

    def open(self, candidate: CandidateBlock) -> None:
        if self._candidate is not None:
            raise ParseError(
                "cannot open a candidate while another is open",
                lineno=candidate.line,
                source_file=self.source_file,
            )
        self._candidate = candidate

    def emit(self, block: Block) -> None:
        self._blocks.append(block)

    def discard(self, candidate: CandidateBlock) -> None:
        if candidate is not self._candidate:
            raise ParseError(
                "discarded candidate is not the open one",
                lineno=candidate.line,
                source_file=self.source_file,
            )
        self._candidate = None

    def process(self) -> Document:
        """Parse every remaining line and return the Document."""
        cursor = self._cursor
        parser = self._parser

        while not cursor.at_end:
            candidate = self._candidate
            if candidate is None:
                parser.try_open(self)
                cursor.advance()
                continue

            match parser.try_continue(self, candidate):
                case BlockState.CONTINUE | BlockState.DISCARD_AND_BREAK:
                    cursor.advance()
                case BlockState.BREAK:
                    self._close_candidate()
                case state:
                    raise ParseError(
                        f"unexpected block state {state.name} while continuing",
                        lineno=cursor.line_number,
                        source_file=self.source_file,
                    )

        if self._candidate is not None:
            self._close_candidate()

        source = cursor.source
        logger.debug(
            "Parsed %d lines into %d blocks and %d references",
            cursor.line_count,
            len(self._blocks),
            len(self._labels),
        )
        return Document(
            location=SourceLocation(
                lineno=1,
                col_offset=1,
                offset=0,
                end_offset=len(source),
                end_lineno=max(cursor.line_count, 1),
                source_file=self.source_file,
            ),
            children=tuple(self._blocks),
            definitions=self._labels.snapshot(),
        )

    def _close_candidate(self) -> None:
        candidate = self._candidate
        if candidate is None:
            raise ParseError(
                "no open candidate to close",
                lineno=self._cursor.line_number,
                source_file=self.source_file,
            )
        self._candidate = None
        if self._parser.close(self, candidate):
            self._blocks.append(candidate.to_paragraph(self.source_file))
