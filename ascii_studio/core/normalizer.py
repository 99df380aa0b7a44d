"""
Output normalizer for model-generated ASCII art.

Turns raw provider text into a clean rectangular block:

1. strip code fences,
2. drop blank edge lines and trailing whitespace,
3. leave fewer than two lines untouched (trimmed),
4. re-center lines whose horizontal center is far off the median,
5. strip the common indentation,
6. pad every line to the same width.

The centering repair targets a common model artifact: the first line of
otherwise consistently placed output comes back mis-indented. The median is
therefore taken over every non-blank line except the first, and only lines
deviating by more than CENTER_TOLERANCE columns are moved. The threshold and
the first-line exclusion are empirical heuristics.

normalize_art is idempotent.
"""

import math
import re
from typing import List, Optional

CENTER_TOLERANCE = 3
MIN_LINES_FOR_REPAIR = 3
MAX_REPAIR_PASSES = 8

_FENCE_OPEN_RE = re.compile(r"\A\s*```[\w+-]*[ \t]*\r?\n")
_FENCE_CLOSE_RE = re.compile(r"\r?\n?```\s*\Z")


def strip_code_fences(text: str) -> str:
    """Remove a leading ```lang line and a trailing ``` marker."""
    previous = None
    while text != previous:
        previous = text
        text = _FENCE_OPEN_RE.sub("", text, count=1)
        text = _FENCE_CLOSE_RE.sub("", text, count=1)
    return text


def trim_edges(text: str) -> List[str]:
    """Split into right-trimmed lines without blank leading/trailing lines."""
    lines = [line.rstrip().expandtabs() for line in text.splitlines()]

    start = 0
    while start < len(lines) and not lines[start]:
        start += 1
    end = len(lines)
    while end > start and not lines[end - 1]:
        end -= 1

    return lines[start:end]


def _leading_spaces(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _center(line: str) -> float:
    lead = _leading_spaces(line)
    return lead + (len(line) - lead) / 2


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _median_center(lines: List[str], indices: List[int]) -> float:
    centers = sorted(_center(lines[i]) for i in indices)
    return centers[len(centers) // 2]


def repair_centering(lines: List[str]) -> List[str]:
    """
    Re-indent lines whose center deviates from the median center.

    Args:
        lines: Right-trimmed lines; empty strings are blank lines

    Returns:
        New list of lines
    """
    lines = list(lines)
    content_indices = [i for i, line in enumerate(lines) if line]
    if len(content_indices) < MIN_LINES_FOR_REPAIR:
        return lines

    # A moved line can nudge the median; repeat until nothing moves so
    # that a second normalization finds nothing left to repair.
    for _ in range(MAX_REPAIR_PASSES):
        median = _median_center(lines, content_indices[1:])
        moved = False

        for i in content_indices:
            line = lines[i]
            if abs(_center(line) - median) <= CENTER_TOLERANCE:
                continue

            content = line.lstrip(" ")
            new_lead = max(0, _round_half_up(median - len(content) / 2))
            if new_lead != _leading_spaces(line):
                lines[i] = " " * new_lead + content
                moved = True

        if not moved:
            break

    return lines


def strip_common_indent(lines: List[str]) -> List[str]:
    indents = [_leading_spaces(line) for line in lines if line]
    indent = min(indents) if indents else 0
    if indent == 0:
        return list(lines)
    return [line[indent:] for line in lines]


def pad_to_width(lines: List[str], width: Optional[int] = None) -> List[str]:
    if width is None:
        width = max((len(line) for line in lines), default=0)
    return [line.ljust(width) for line in lines]


def normalize_art(raw: str) -> str:
    """
    Normalize raw model output into a rectangular ASCII-art block.

    Args:
        raw: Text returned by the provider

    Returns:
        Lines joined with newlines, all of equal length
    """
    lines = trim_edges(strip_code_fences(raw or ""))

    if len(lines) < 2:
        return "\n".join(line.strip() for line in lines)

    lines = repair_centering(lines)
    lines = strip_common_indent(lines)
    lines = pad_to_width(lines)

    return "\n".join(lines)
