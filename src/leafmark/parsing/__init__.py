"""Block parsers for Leafmark.

Each block parser follows the open/continue/close protocol driven by
``leafmark.processor.BlockProcessor``.
"""

from leafmark.parsing.paragraph import (
    CandidateBlock,
    ExtractionResult,
    ParagraphBlockParser,
    extract_link_reference_definitions,
)
from leafmark.parsing.protocols import ProcessorHost
from leafmark.parsing.setext import setext_marker_level
from leafmark.parsing.states import BlockState

__all__ = [
    "BlockState",
    "CandidateBlock",
    "ExtractionResult",
    "ParagraphBlockParser",
    "ProcessorHost",
    "extract_link_reference_definitions",
    "setext_marker_level",
]
