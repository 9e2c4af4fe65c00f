"""Dump a parsed document as JSON to inspect block and reference spans."""

from leafmark import parse
from leafmark.serialization import to_json

source = "[a]: /one\n[b]: /two 'Two'\nTitle\n-----\n"
print(to_json(parse(source), indent=2))
