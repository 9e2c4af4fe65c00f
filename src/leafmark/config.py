"""ContextVar-based parse configuration for Leafmark.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per parse call, read by the block processor and the
paragraph parser in the same context.

Usage:
    # Direct processor usage
    from leafmark.config import set_parse_config, reset_parse_config, ParseConfig

    set_parse_config(ParseConfig(setext_headings=False))
    try:
        doc = BlockProcessor(source).process()
    finally:
        reset_parse_config()

    # Or use the context manager
    with parse_config_context(ParseConfig(duplicate_labels="last")):
        doc = parse(source)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from leafmark.errors import ConfigError

DUPLICATE_LABEL_POLICIES = ("first", "last")


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        setext_headings: Reclassify a paragraph as a heading when the next
            line is a ``===`` or ``---`` marker
        duplicate_labels: Which definition wins when a label is registered
            twice, ``"first"`` (CommonMark) or ``"last"``
        tab_size: Tab stop width used when measuring indentation

    """

    setext_headings: bool = True
    duplicate_labels: str = "first"
    tab_size: int = 4

    def __post_init__(self) -> None:
        if self.duplicate_labels not in DUPLICATE_LABEL_POLICIES:
            raise ConfigError(
                "duplicate_labels",
                f"expected one of {DUPLICATE_LABEL_POLICIES}, got {self.duplicate_labels!r}",
            )
        if self.tab_size < 1:
            raise ConfigError("tab_size", f"must be positive, got {self.tab_size}")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                ParseConfig attribute names.

        Returns:
            New ParseConfig instance with values from dict.

        Raises:
            ConfigError: If a known key holds an invalid value.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "setext_headings": False,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.setext_headings
            False

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "leafmark_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Args:
        config: ParseConfig instance to use for this context.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: ParseConfig to use within the context.

    Yields:
        None

    Example:
        >>> with parse_config_context(ParseConfig(setext_headings=False)):
        ...     doc = parse("Title\\n=====")
        >>> # Automatically reset to previous config

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "DUPLICATE_LABEL_POLICIES",
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
