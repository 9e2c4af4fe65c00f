"""Document-wide table of link reference definitions.

The paragraph parser only ever writes to the table (``register``); inline
link resolution reads it back later. The table keeps every registered
definition in source order, and resolves duplicate labels with a fixed
policy:

- ``DuplicatePolicy.FIRST`` (default): the first definition wins, as
  CommonMark 4.7 requires
- ``DuplicatePolicy.LAST``: each registration overwrites the previous one

"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from leafmark.utils.logger import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

    from leafmark.linkref import LinkReferenceDefinition

logger = get_logger(__name__)


class DuplicatePolicy(Enum):
    """Which definition a repeated label resolves to."""

    FIRST = "first"
    LAST = "last"


class LabelTable:
    """Mapping of normalized label to LinkReferenceDefinition.

    Lifetime is one document parse. Nested parses of the same document
    share one table.

    Usage:
            >>> table = LabelTable()
            >>> table.register("foo", first_def)
            True
            >>> table.register("foo", second_def)
            False
            >>> table.get("foo") is first_def
            True

    """

    __slots__ = ("_entries", "_definitions", "_policy")

    def __init__(self, policy: DuplicatePolicy | str = DuplicatePolicy.FIRST) -> None:
        self._policy = DuplicatePolicy(policy)
        self._entries: dict[str, LinkReferenceDefinition] = {}
        self._definitions: list[LinkReferenceDefinition] = []

    @property
    def policy(self) -> DuplicatePolicy:
        return self._policy

    def register(self, label: str, definition: LinkReferenceDefinition) -> bool:
        """Record a definition under ``label``.

        Returns:
            True if the definition is now the one ``label`` resolves to.
        """
        self._definitions.append(definition)
        if label in self._entries and self._policy is DuplicatePolicy.FIRST:
            logger.debug("Ignoring duplicate reference %r on line %d", label, definition.line)
            return False
        self._entries[label] = definition
        return True

    def get(self, label: str) -> LinkReferenceDefinition | None:
        return self._entries.get(label)

    def __contains__(self, label: object) -> bool:
        return label in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    @property
    def definitions(self) -> tuple[LinkReferenceDefinition, ...]:
        """Every registered definition in source order, shadowed ones included."""
        return tuple(self._definitions)

    def snapshot(self) -> Mapping[str, LinkReferenceDefinition]:
        """Read-only copy of the current label mapping."""
        return MappingProxyType(dict(self._entries))
