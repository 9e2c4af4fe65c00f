"""Outcomes a block parser reports back to the block processor."""

from enum import Enum, auto


class BlockState(Enum):
    """Result of ``try_open`` / ``try_continue``.

    SKIP: the line does not open a block (blank line); it is consumed.
    CONTINUE: the line belongs to the candidate; it is consumed.
    BREAK: the candidate ends before this line; the processor closes it and
        offers the same line again.
    DISCARD_AND_BREAK: the candidate was replaced by another block (a setext
        heading); the line is consumed and the candidate is not closed.

    """

    SKIP = auto()
    CONTINUE = auto()
    BREAK = auto()
    DISCARD_AND_BREAK = auto()
