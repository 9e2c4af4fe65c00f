"""Exception classes for Leafmark.

Block parsing itself never raises for any input text: "no match",
"vacuous paragraph" and "heading conversion abandoned" are ordinary
outcomes. These exceptions guard the data-structure seams instead.
"""

from __future__ import annotations


class LeafmarkError(Exception):
    """Base exception for all Leafmark errors.
    
    Subclass this for specific error categories.
    """

    pass


class ParseError(LeafmarkError):
    """Error during block parsing.
    
    Raised when a parser component is driven in a way that breaks
    its invariants.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.
        
        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        # Build formatted message
        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class RegionError(ParseError):
    """Line region invariant violated.
    
    Raised when a line is appended out of source order, or when a
    consumed prefix is longer than the region it is removed from.
    """

    pass


class ConfigError(LeafmarkError):
    """Invalid configuration value."""

    def __init__(self, key: str, message: str) -> None:
        """Initialize config error.
        
        Args:
            key: Name of the offending ParseConfig field
            message: Description of the problem
        """
        self.key = key
        super().__init__(f"Config '{key}': {message}")
