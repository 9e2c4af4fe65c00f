"""Block nodes produced by Leafmark.

All nodes are frozen dataclasses with slots. Blocks keep the source lines
they claim (as StringLine views) instead of parsed inline content; inline
parsing is left to the consumer.

Node Hierarchy:
Node (base)
├── Document
└── Block
    ├── Paragraph
    └── Heading (setext, level 1 or 2)

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Literal, TypeAlias

from leafmark.linkref import LinkReferenceDefinition, normalize_label
from leafmark.lines import StringLine
from leafmark.location import SourceLocation, Span


class ContainerKind(Enum):
    """Kind of container enclosing the blocks being parsed."""

    DOCUMENT = auto()
    BLOCK_QUOTE = auto()
    LIST_ITEM = auto()


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all nodes.

    All nodes track their source location for error messages and debugging.

    """

    location: SourceLocation


@dataclass(frozen=True, slots=True)
class LeafBlock(Node):
    """Block whose content is a run of source lines."""

    span: Span
    lines: tuple[StringLine, ...]

    @property
    def content(self) -> str:
        """Text of the block, lines joined with newlines."""
        return "\n".join(str(line.slice) for line in self.lines)


@dataclass(frozen=True, slots=True)
class Paragraph(LeafBlock):
    """Paragraph block.

    Markdown: Text separated by blank lines

    """

    column: int = 0


@dataclass(frozen=True, slots=True)
class Heading(LeafBlock):
    """Setext heading.

    Markdown: Heading\\n======= (level 1) or Heading\\n------- (level 2)

    """

    level: Literal[1, 2] = 1
    column: int = 0
    style: Literal["setext"] = "setext"


Block: TypeAlias = Paragraph | Heading


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root node.

    Holds the emitted blocks and a snapshot of the label table taken when
    the parse finished: normalized label to the definition it resolves to.

    """

    children: tuple[Block, ...]
    definitions: Mapping[str, LinkReferenceDefinition] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def references(self) -> tuple[LinkReferenceDefinition, ...]:
        """Resolved definitions in registration order."""
        return tuple(self.definitions.values())

    def reference(self, label: str) -> LinkReferenceDefinition | None:
        """Look up a definition by label (any case or spacing)."""
        return self.definitions.get(normalize_label(label))
