"""
Tests for the output normalizer.
"""

import pytest

from ascii_studio.core.normalizer import (
    normalize_art,
    repair_centering,
    strip_code_fences,
    trim_edges
)


def _line(lead, width, char="#"):
    return " " * lead + char * width


def test_fence_stripping_plain():
    assert normalize_art("```\nX\nY\n```") == "X\nY"


def test_fence_stripping_with_language_tag():
    raw = "\n  ```text\n /\\\n/__\\\n```\n"
    assert normalize_art(raw) == " /\\ \n/__\\"


def test_nested_fences_are_all_removed():
    assert strip_code_fences("```\n```ascii\nA\n```\n```") == "A"


def test_inline_backticks_are_kept():
    assert normalize_art("a `b` c\nd e f g") == "a `b` c\nd e f g"


def test_trim_edges_drops_blank_edges_and_trailing_space():
    assert trim_edges("\n\n  ab  \r\n\n cd\t\n   \n") == ["  ab", "", " cd"]


def test_tabs_are_expanded():
    result = normalize_art("\tA\n\tB")
    assert "\t" not in result
    assert result == "A\nB"


@pytest.mark.parametrize("raw, expected", [
    ("", ""),
    ("   \n\n  ", ""),
    ("   hello   ", "hello"),
    ("\n\n   hello world  \n", "hello world"),
    ("```\n   lone line\n```", "lone line"),
])
def test_degenerate_input_is_trimmed(raw, expected):
    assert normalize_art(raw) == expected


def test_none_input():
    assert normalize_art(None) == ""


def test_first_line_centering_repair():
    # Centers: 10, 20, 20, 21
    lines = [_line(5, 10), _line(10, 20), _line(10, 20), _line(11, 20)]

    repaired = repair_centering(lines)

    first = repaired[0]
    lead = len(first) - len(first.lstrip(" "))
    center = lead + len(first.lstrip(" ")) / 2
    assert abs(center - 20) <= 3
    assert repaired[1:] == lines[1:]


def test_centering_keeps_relative_alignment_after_normalize():
    lines = [_line(5, 10), _line(10, 20), _line(10, 20), _line(11, 20)]

    result = normalize_art("\n".join(lines)).split("\n")

    assert result[1].rstrip() == "#" * 20
    assert result[2].rstrip() == "#" * 20
    assert result[3].rstrip() == " " + "#" * 20
    assert result[0].strip() == "#" * 10
    assert result[0].index("#") == 5


def test_lines_within_tolerance_are_untouched():
    lines = [_line(8, 6), _line(7, 6), _line(8, 6), _line(9, 6)]
    assert repair_centering(lines) == lines


def test_repair_needs_three_content_lines():
    lines = [_line(0, 4), _line(20, 4)]
    assert repair_centering(lines) == lines


def test_blank_interior_lines_are_preserved():
    raw = "  ##\n\n  ##\n  ##"
    assert normalize_art(raw) == "##\n  \n##\n##"


def test_output_is_rectangular():
    raw = "    /\\\n   /  \\\n  /____\\\n    ||"
    lines = normalize_art(raw).split("\n")
    assert len({len(line) for line in lines}) == 1


def test_no_common_leading_indent():
    raw = "      ___\n     (o o)\n    (  V  )\n   --m-m--"
    lines = normalize_art(raw).split("\n")
    assert any(line and not line.startswith(" ") for line in lines)


@pytest.mark.parametrize("raw", [
    "```\nX\nY\n```",
    "     *\n    ***\n   *****\n  *******\n    | |",
    "          far off first line\n  ####\n  ####\n  ####\n  ####",
    "\t/\\\n\t\\/\n",
    "```python\n  a\n\n    b\n  c\n      d\n```",
    "single",
    "",
])
def test_normalize_is_idempotent(raw):
    once = normalize_art(raw)
    assert normalize_art(once) == once


def test_shared_indentation_is_removed_from_every_line():
    raw = "  \n\n  ab\n  cd\n  ef  \n\n"
    assert normalize_art(raw) == "ab\ncd\nef"
    assert normalize_art("  ab\n  cd\n  ef") == "ab\ncd\nef"


def test_first_line_indentation_is_kept_relative_to_the_rest():
    raw = "   /\\\n  /  \\\n /    \\\n/______\\"
    assert normalize_art(raw).split("\n")[0] == "   /\\   "
