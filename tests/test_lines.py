# File: tests/test_lines.py
import pytest

from keyscout.lines import LineMapper, map_lines


def test_offset_zero_is_line_one():
    assert LineMapper("abc\ndef").line_of(0) == 1
    assert LineMapper("").line_of(0) == 1


@pytest.mark.parametrize(
    "text,offset,expected",
    [
        ("ab\ncd\nef", 2, 1),   # the newline belongs to its line
        ("ab\ncd\nef", 3, 2),   # first character of a line
        ("ab\ncd\nef", 6, 3),
        ("ab\r\ncd", 2, 1),     # \r before \n
        ("ab\r\ncd", 4, 2),
        ("ab\rcd", 3, 1),       # lone \r is not a boundary
    ],
)
def test_line_boundaries(text, offset, expected):
    assert LineMapper(text).line_of(offset) == expected


def test_offset_past_end_maps_to_last_line():
    text = "a\nb\nc"
    assert LineMapper(text).line_of(len(text)) == 3
    assert LineMapper(text).line_of(10_000) == 3


def test_negative_offset_maps_to_first_line():
    assert LineMapper("a\nb").line_of(-5) == 1


def test_map_lines_large_text():
    text = "x\n" * 100_000
    offsets = [0, 2, 199_998, 10**9]
    assert map_lines(text, offsets) == [1, 2, 100_000, 100_001]
    assert LineMapper(text).line_count == 100_001
