"""Serialization of Leafmark documents to JSON-compatible dicts.

Useful for debugging, snapshot tests and inspecting spans. Output is
deterministic (sorted keys). Line slices are written out as their text plus
offsets, so the result does not need the source buffer to be read.

Example:
    from leafmark import parse
    from leafmark.serialization import to_json

    print(to_json(parse("Title\\n====="), indent=2))

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Mapping
from dataclasses import fields
from typing import Any

from leafmark.linkref import LinkReferenceDefinition
from leafmark.lines import StringLine
from leafmark.location import SourceLocation, Span
from leafmark.nodes import Document, Node


def to_dict(node: Node | LinkReferenceDefinition) -> dict[str, Any]:
    """Convert a node (or reference definition) to a JSON-compatible dict.

    Includes a ``_type`` discriminator field naming the class.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))

    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, Node | LinkReferenceDefinition):
        return to_dict(value)
    if isinstance(value, Span):
        return {"_type": "Span", "start": value.start, "end": value.end}
    if isinstance(value, StringLine):
        return {
            "_type": "StringLine",
            "line": value.line,
            "column": value.column,
            "start": value.slice.start,
            "end": value.slice.end,
            "text": str(value.slice),
        }
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            "lineno": value.lineno,
            "col_offset": value.col_offset,
            "offset": value.offset,
            "end_offset": value.end_offset,
            "end_lineno": value.end_lineno,
            "end_col_offset": value.end_col_offset,
            "source_file": value.source_file,
        }
    if isinstance(value, Mapping):
        return {key: _serialize_value(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, bool, None
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document to a JSON string.

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent)
