"""Paragraphs, setext headings and reference definitions in one pass."""

from leafmark import parse

doc = parse("Hello\n=====\n\n[docs]: https://example.com \"Docs\"\nSee the docs.\n")
for block in doc.children:
    print(type(block).__name__, repr(block.content))
print(doc.reference("DOCS"))
