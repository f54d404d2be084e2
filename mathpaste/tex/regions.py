"""Line region classification.

The line-wise stages of the pipeline must leave fenced code and multi-line
``$$`` math alone. This module decides, for every line of a document, which
of those regions it belongs to.
"""
from __future__ import annotations

import enum
import re
from typing import List, Sequence, Tuple


class LineRegion(str, enum.Enum):
    TEXT = "text"
    CODE = "code"
    MATH = "math"


_CODE_FENCE_RE = re.compile(r"^\s*(```|~~~)")

# Unescaped `$$` tokens.
_BLOCK_TOKEN_RE = re.compile(r"(?<!\\)\$\$")


def _pair_up(indices: Sequence[int]) -> List[Tuple[int, int]]:
    # An opener without a partner is plain text, matching how unmatched
    # delimiters are treated everywhere else.
    return [(indices[i], indices[i + 1]) for i in range(0, len(indices) - 1, 2)]


def code_ranges(lines: Sequence[str]) -> List[Tuple[int, int]]:
    """Inclusive (start, end) line indices of every closed fenced code block."""
    fences = [i for i, line in enumerate(lines) if _CODE_FENCE_RE.match(line)]
    return _pair_up(fences)


def classify_lines(lines: Sequence[str]) -> List[LineRegion]:
    """Return the region of each line.

    Code fences are resolved first; `$$` blocks are then paired among the
    remaining lines. A line toggles the math state when it holds an odd
    number of `$$` tokens, so a single-line ``$$ x $$`` stays TEXT.
    """

    regions = [LineRegion.TEXT] * len(lines)

    for start, end in code_ranges(lines):
        for i in range(start, end + 1):
            regions[i] = LineRegion.CODE

    toggles = [
        i
        for i, line in enumerate(lines)
        if regions[i] is LineRegion.TEXT
        and len(_BLOCK_TOKEN_RE.findall(line)) % 2 == 1
    ]
    for start, end in _pair_up(toggles):
        for i in range(start, end + 1):
            if regions[i] is LineRegion.TEXT:
                regions[i] = LineRegion.MATH

    return regions


def split_code_chunks(text: str) -> List[Tuple[bool, str]]:
    """Split a document into alternating (is_code, chunk) pieces.

    Joining the chunks with newlines reproduces the input exactly.
    """

    lines = text.split("\n")
    chunks: List[Tuple[bool, str]] = []
    cursor = 0
    for start, end in code_ranges(lines):
        if start > cursor:
            chunks.append((False, "\n".join(lines[cursor:start])))
        chunks.append((True, "\n".join(lines[start : end + 1])))  # noqa E203
        cursor = end + 1
    if cursor < len(lines):
        chunks.append((False, "\n".join(lines[cursor:])))
    return chunks
