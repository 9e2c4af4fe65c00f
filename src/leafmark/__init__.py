"""
Leafmark: paragraph, setext heading and link reference parsing

Turns runs of non-blank Markdown lines into paragraphs or setext headings,
pulling link reference definitions off the front of each paragraph into a
document-wide label table.

Quick Start:
    >>> from leafmark import parse
    >>> doc = parse("Hello\\n=====\\n\\n[foo]: /url \\"title\\"\\n")
    >>> doc.children[0].level, doc.children[0].content
    (1, 'Hello')
    >>> doc.reference("foo").title
    'title'

Configuration:
    >>> from leafmark import ParseConfig, parse_config_context
    >>> with parse_config_context(ParseConfig(setext_headings=False)):
    ...     doc = parse("Hello\\n=====")
"""

from leafmark.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from leafmark.cursor import LineCursor
from leafmark.errors import ConfigError, LeafmarkError, ParseError, RegionError
from leafmark.linkref import (
    LinkReferenceDefinition,
    normalize_label,
    parse_link_reference_definition,
)
from leafmark.lines import LineRegion, StringLine, StringSlice
from leafmark.location import SourceLocation, Span
from leafmark.nodes import Block, ContainerKind, Document, Heading, Paragraph
from leafmark.parsing import (
    BlockState,
    ParagraphBlockParser,
    extract_link_reference_definitions,
    setext_marker_level,
)
from leafmark.processor import BlockProcessor
from leafmark.references import DuplicatePolicy, LabelTable
from leafmark.serialization import to_dict, to_json

__version__ = "0.1.0"


def parse(
    source: str,
    *,
    source_file: str | None = None,
    container: ContainerKind = ContainerKind.DOCUMENT,
    labels: LabelTable | None = None,
) -> Document:
    """Parse Markdown source into paragraphs and setext headings.

    Uses the active ParseConfig (see ``parse_config_context``).

    Args:
        source: Markdown source text
        source_file: Optional source file path for locations and errors
        container: Kind of container the source sits in
        labels: Shared label table (a new one is created if None)

    Returns:
        Document with the emitted blocks and winning reference definitions

    Example:
        >>> doc = parse("[foo]: /url\\nSome text\\n")
        >>> [block.content for block in doc.children]
        ['Some text']
    """
    processor = BlockProcessor(
        source,
        source_file=source_file,
        container=container,
        labels=labels,
    )
    return processor.process()


__all__ = [
    # Entry points
    "parse",
    "BlockProcessor",
    "ParagraphBlockParser",
    # Nodes
    "Block",
    "ContainerKind",
    "Document",
    "Heading",
    "Paragraph",
    # Text model
    "LineCursor",
    "LineRegion",
    "SourceLocation",
    "Span",
    "StringLine",
    "StringSlice",
    # References
    "DuplicatePolicy",
    "LabelTable",
    "LinkReferenceDefinition",
    "normalize_label",
    "parse_link_reference_definition",
    "extract_link_reference_definitions",
    # Parsing helpers
    "BlockState",
    "setext_marker_level",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
    # Serialization
    "to_dict",
    "to_json",
    # Errors
    "ConfigError",
    "LeafmarkError",
    "ParseError",
    "RegionError",
    "__version__",
]
