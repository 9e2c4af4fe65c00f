"""Tests for StringSlice, StringLine and LineRegion."""

import pytest

from leafmark.cursor import split_lines
from leafmark.errors import RegionError
from leafmark.lines import LineRegion, StringLine, StringSlice


def _region(source: str) -> LineRegion:
    return LineRegion(
        StringLine(StringSlice(source, start, end), number)
        for number, (start, end) in enumerate(split_lines(source), start=1)
    )


class TestStringSlice:
    """Slices are views into the source buffer."""

    def test_str_and_len(self) -> None:
        s = StringSlice("hello world", 6, 11)
        assert str(s) == "world"
        assert len(s) == 5

    def test_trim_start(self) -> None:
        s = StringSlice(" \t abc ", 0, 7).trim_start()
        assert str(s) == "abc "
        assert s.start == 3

    def test_trim_end(self) -> None:
        s = StringSlice(" abc \t", 0, 6).trim_end()
        assert str(s) == " abc"
        assert s.end == 4

    def test_trim_all_whitespace_is_empty(self) -> None:
        s = StringSlice("   ", 0, 3)
        assert s.trim_start().is_empty
        assert s.trim_end().is_empty
        assert s.is_blank()

    def test_current_char(self) -> None:
        assert StringSlice("abc", 1, 3).current_char == "b"
        assert StringSlice("abc", 3, 3).current_char == ""

    def test_advance_stops_at_end(self) -> None:
        s = StringSlice("abc", 0, 3).advance(10)
        assert s.is_empty
        assert s.start == 3


class TestLineRegion:
    """Region text, trimming and prefix removal."""

    def test_text_joins_with_newlines(self) -> None:
        assert _region("one\ntwo\nthree").text == "one\ntwo\nthree"

    def test_crlf_lines_join_with_newline(self) -> None:
        assert _region("one\r\ntwo").text == "one\ntwo"

    def test_empty_region(self) -> None:
        region = LineRegion()
        assert region.is_empty
        assert len(region) == 0
        assert region.text == ""

    def test_append_out_of_order_raises(self) -> None:
        source = "one\ntwo"
        region = LineRegion([StringLine(StringSlice(source, 4, 7), 2)])
        with pytest.raises(RegionError):
            region.append(StringLine(StringSlice(source, 0, 3), 1))

    def test_append_overlapping_raises(self) -> None:
        source = "abcdef"
        region = LineRegion([StringLine(StringSlice(source, 0, 4), 1)])
        with pytest.raises(RegionError):
            region.append(StringLine(StringSlice(source, 2, 6), 1))

    def test_trim_only_touches_edges(self) -> None:
        region = _region("  a  \n  b  \n  c  ")
        region.trim_start()
        region.trim_end()
        assert region.text == "a  \n  b  \n  c"

    def test_trim_start_moves_column(self) -> None:
        region = _region("   a")
        region.trim_start()
        assert region.first.column == 3

    def test_source_offset_single_line(self) -> None:
        source = "xx\nabc"
        region = LineRegion([StringLine(StringSlice(source, 3, 6), 2)])
        assert region.source_offset(0) == 3
        assert region.source_offset(3) == 6

    def test_source_offset_skips_gaps(self) -> None:
        """Offsets follow the slices even when lines were trimmed."""
        source = "ab\n  cd"
        region = LineRegion(
            [
                StringLine(StringSlice(source, 0, 2), 1),
                StringLine(StringSlice(source, 5, 7), 2, column=2),
            ]
        )
        assert region.text == "ab\ncd"
        assert region.source_offset(3) == 5
        assert region.source_offset(5) == 7

    def test_source_offset_out_of_range(self) -> None:
        with pytest.raises(RegionError):
            _region("abc").source_offset(4)
        with pytest.raises(RegionError):
            _region("abc").source_offset(-1)

    def test_remove_whole_lines(self) -> None:
        region = _region("one\ntwo\nthree")
        rest = region.remove_prefix(4)
        assert rest.text == "two\nthree"
        assert rest.first.line == 2
        assert rest.first.position == 4

    def test_remove_partial_line(self) -> None:
        rest = _region("one\ntwo").remove_prefix(1)
        assert rest.text == "ne\ntwo"
        assert rest.first.column == 1

    def test_remove_line_without_newline_drops_it(self) -> None:
        rest = _region("one\ntwo").remove_prefix(3)
        assert rest.text == "two"

    def test_remove_everything(self) -> None:
        region = _region("one\ntwo")
        assert region.remove_prefix(len(region.text)).is_empty

    def test_remove_too_much_raises(self) -> None:
        with pytest.raises(RegionError):
            _region("one\ntwo").remove_prefix(8)

    def test_remove_from_empty_region(self) -> None:
        assert LineRegion().remove_prefix(0).is_empty
        with pytest.raises(RegionError):
            LineRegion().remove_prefix(1)

    def test_remove_prefix_leaves_original(self) -> None:
        region = _region("one\ntwo")
        region.remove_prefix(4)
        assert region.text == "one\ntwo"
