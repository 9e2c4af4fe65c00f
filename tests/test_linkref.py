"""Tests for the link reference definition grammar."""

import pytest

from leafmark.cursor import split_lines
from leafmark.linkref import (
    normalize_label,
    parse_link_reference_definition,
    process_escapes,
)
from leafmark.lines import LineRegion, StringLine, StringSlice
from leafmark.location import Span


class TestValidDefinitions:
    """Inputs that parse as a definition."""

    def test_url_and_title(self) -> None:
        match = parse_link_reference_definition('[foo]: /url "title"')
        assert match is not None
        d = match.definition
        assert (d.label, d.url, d.title) == ("foo", "/url", "title")
        assert d.span == Span(0, 19)
        assert d.label_span == Span(1, 4)
        assert d.url_span == Span(7, 11)
        assert d.title_span == Span(13, 18)
        assert match.consumed == 19

    def test_no_title(self) -> None:
        match = parse_link_reference_definition("[foo]: /url\nnext")
        assert match is not None
        assert match.definition.title is None
        assert match.definition.title_span is None
        assert match.consumed == 12

    @pytest.mark.parametrize(
        ("source", "title"),
        [
            ("[a]: /u 'single'", "single"),
            ("[a]: /u (parens)", "parens"),
            ('[a]: /u "with \\" escape"', 'with " escape'),
        ],
    )
    def test_title_delimiters(self, source: str, title: str) -> None:
        match = parse_link_reference_definition(source)
        assert match is not None
        assert match.definition.title == title

    def test_angle_destination(self) -> None:
        match = parse_link_reference_definition("[a]: <my url>")
        assert match is not None
        assert match.definition.url == "my url"
        assert match.definition.url_span == Span(6, 12)

    def test_empty_angle_destination(self) -> None:
        match = parse_link_reference_definition("[a]: <>")
        assert match is not None
        assert match.definition.url == ""

    def test_balanced_parens_in_destination(self) -> None:
        match = parse_link_reference_definition("[a]: /u(x(y))")
        assert match is not None
        assert match.definition.url == "/u(x(y))"

    def test_escapes_in_url(self) -> None:
        match = parse_link_reference_definition("[a]: /u\\*rl")
        assert match is not None
        assert match.definition.url == "/u*rl"

    def test_indent_up_to_three_spaces(self) -> None:
        match = parse_link_reference_definition("   [a]: /u")
        assert match is not None
        assert match.definition.span.start == 3

    def test_destination_on_next_line(self) -> None:
        match = parse_link_reference_definition("[a]:\n/u\n'title'")
        assert match is not None
        assert match.definition.url == "/u"
        assert match.definition.title == "title"

    def test_label_spans_lines(self) -> None:
        match = parse_link_reference_definition("[Foo\nbar]: /u")
        assert match is not None
        assert match.definition.label == "foo bar"
        assert match.definition.raw_label == "Foo\nbar"

    def test_trailing_whitespace_allowed(self) -> None:
        match = parse_link_reference_definition("[a]: /u 't'  \t\nrest")
        assert match is not None
        assert match.consumed == len("[a]: /u 't'  \t\n")

    def test_title_with_junk_falls_back_to_destination_line(self) -> None:
        match = parse_link_reference_definition("[a]: /u\n't' junk")
        assert match is not None
        assert match.definition.title is None
        assert match.consumed == 8


class TestInvalidDefinitions:
    """Inputs that are not a definition."""

    @pytest.mark.parametrize(
        "source",
        [
            "plain text",
            "    [a]: /u",
            "[a] /u",
            "[a]:",
            "[a]:\n\n/u",
            "[]: /u",
            "[ ]: /u",
            "[a[b]]: /u",
            "[a]: /u junk",
            "[a]: /u 'title' junk",
            "[a]: <bad\n>",
            "[a]: /u(",
            "[a]: <x>'t'",
            "[a]: /u 'one\n\ntwo'",
            "[a\n\nb]: /u",
        ],
    )
    def test_rejected(self, source: str) -> None:
        assert parse_link_reference_definition(source) is None

    def test_label_too_long(self) -> None:
        assert parse_link_reference_definition("[" + "x" * 1000 + "]: /u") is None
        assert parse_link_reference_definition("[" + "x" * 999 + "]: /u") is not None


class TestNormalization:
    """Label normalization and escape processing."""

    def test_case_fold_and_whitespace(self) -> None:
        assert normalize_label("  Foo \t\n BAR ") == "foo bar"

    def test_unicode_case_fold(self) -> None:
        assert normalize_label("STRASSE") == normalize_label("straße")

    def test_escapes_stay_literal_in_labels(self) -> None:
        assert normalize_label("foo\\!") != normalize_label("foo!")

    def test_process_escapes(self) -> None:
        assert process_escapes("a\\*b\\\\c\\q") == "a*b\\c\\q"


class TestRelocate:
    """Moving region-relative spans into source coordinates."""

    def test_relocate_offsets_and_line(self) -> None:
        source = "intro\n[foo]: /url 'hi'\n"
        spans = split_lines(source)
        region = LineRegion([StringLine(StringSlice(source, *spans[1]), 2)])
        match = parse_link_reference_definition(region.text)
        assert match is not None
        moved = match.definition.relocate(region)
        assert moved.line == 2
        assert moved.span.slice(source) == "[foo]: /url 'hi'"
        assert moved.url_span.slice(source) == "/url"
        assert moved.title_span is not None
        assert moved.title_span.slice(source) == "hi"
