"""Protocols defining the contract between block parsers and the processor.

A block parser never walks the source itself. The processor owns the line
cursor, the label table and the output list; parsers see it through
``ProcessorHost`` and report what happened with a BlockState.

Thread Safety:
    Protocols are purely structural, with no runtime overhead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from leafmark.cursor import LineCursor
    from leafmark.nodes import Block, ContainerKind
    from leafmark.parsing.paragraph import CandidateBlock
    from leafmark.references import LabelTable


@runtime_checkable
class ProcessorHost(Protocol):
    """Contract offered by the block processor to block parsers.

    Provided by: BlockProcessor
    Required by: ParagraphBlockParser
    """

    @property
    def cursor(self) -> LineCursor: ...
    @property
    def labels(self) -> LabelTable: ...
    @property
    def container(self) -> ContainerKind: ...
    @property
    def source_file(self) -> str | None: ...

    def open(self, candidate: CandidateBlock) -> None: ...
    def emit(self, block: Block) -> None: ...
    def discard(self, candidate: CandidateBlock) -> None: ...
