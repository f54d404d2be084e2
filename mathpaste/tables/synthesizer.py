"""Comma-separated runs to GFM pipe tables.

A single fold over the lines of a document. The accumulator is a
``TableCandidateBuffer``; whenever a line breaks the run the buffer is
flushed, either as a Markdown table or verbatim.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Sequence

from loguru import logger

from mathpaste.models import Line, TableCandidateBuffer
from mathpaste.tables.tokenizer import split_columns
from mathpaste.tex.regions import LineRegion, classify_lines

ALIGN_LEFT = ":---"

_LATEX_COMMAND_RE = re.compile(r"\\[A-Za-z]+")
_MATH_EDGE_TOKENS = ("$", "\\[", "\\]", "\\(", "\\)")

# A cell made only of numbers joined by arithmetic or comparison operators,
# e.g. "2x" does not qualify but "3 + 4 = 7" does.
_ARITHMETIC_CELL_RE = re.compile(
    r"^[\d\s.()]+(?:[+\-*/^×÷±=<>≤≥≠][\d\s.()]+)+$"
)

_UNESCAPED_PIPE_RE = re.compile(r"(?<!\\)\|")


@dataclass(frozen=True)
class SynthesisResult:
    lines: List[str]
    tables: int


def looks_like_math(trimmed: str) -> bool:
    """True for lines that must never be split into columns."""
    if trimmed.startswith(_MATH_EDGE_TOKENS) or trimmed.endswith(_MATH_EDGE_TOKENS):
        return True
    return bool(_LATEX_COMMAND_RE.search(trimmed))


def _is_math_heavy_row(line: Line) -> bool:
    if _LATEX_COMMAND_RE.search(line.raw):
        return True
    cells = [t for t in line.tokens if t]
    return bool(cells) and all(_ARITHMETIC_CELL_RE.match(c) for c in cells)


def is_math_heavy(buffer: TableCandidateBuffer) -> bool:
    heavy = sum(1 for line in buffer.lines if _is_math_heavy_row(line))
    return heavy * 2 > len(buffer.lines)


def _escape_cell(cell: str) -> str:
    return _UNESCAPED_PIPE_RE.sub(r"\\|", cell)


def _format_row(cells: Sequence[str]) -> str:
    return "| " + " | ".join(_escape_cell(c) for c in cells) + " |"


def _fit_row(tokens: List[str], baseline: int) -> List[str]:
    if len(tokens) < baseline:
        return tokens + [""] * (baseline - len(tokens))
    if len(tokens) > baseline:
        overflow = ", ".join(tokens[baseline - 1 :])  # noqa E203
        return tokens[: baseline - 1] + [overflow]
    return tokens


def render_table(buffer: TableCandidateBuffer) -> List[str]:
    """Render a buffer as header, left-aligned separator and data rows."""
    header = _fit_row(list(buffer.lines[0].tokens), buffer.baseline)
    rows = [_format_row(header), _format_row([ALIGN_LEFT] * buffer.baseline)]
    for line in buffer.lines[1:]:
        rows.append(_format_row(_fit_row(list(line.tokens), buffer.baseline)))
    return rows


class TableSynthesizer:
    """Fold over document lines, turning comma-separated runs into tables."""

    def __init__(self, tolerance: int = 1, separator: str = ","):
        self.tolerance = tolerance
        self.separator = separator
        self._buffer = TableCandidateBuffer(tolerance=tolerance)
        self._out: List[str] = []
        self._tables = 0

    def _flush(self, before_blank: bool = False) -> None:
        buffer = self._buffer
        if not buffer.lines:
            return

        if buffer.has_table_shape and not is_math_heavy(buffer):
            self._out.extend(render_table(buffer))
            if not before_blank:
                self._out.append("")
            self._tables += 1
            logger.debug(
                f"Emitted table: {len(buffer)} rows x {buffer.baseline} columns"
            )
        else:
            self._out.extend(line.raw for line in buffer.lines)
            logger.debug(
                f"Kept {len(buffer)} candidate line(s) verbatim "
                f"(baseline={buffer.baseline})"
            )
        buffer.clear()

    def _pass_through(self, raw: str, blank: bool = False) -> None:
        self._flush(before_blank=blank)
        self._out.append(raw)

    def _add(self, line: Line) -> None:
        buffer = self._buffer
        count = len(line.tokens)
        if not buffer.lines:
            buffer.start(line)
            return

        # A trailing comma yields one extra, empty column.
        if count == buffer.baseline + 1 and line.tokens[-1] == "":
            line.tokens.pop()
            count -= 1

        if buffer.accepts(count):
            buffer.lines.append(line)
        else:
            self._flush()
            buffer.start(line)

    def run(self, lines: Sequence[str]) -> SynthesisResult:
        self._buffer.clear()
        self._out = []
        self._tables = 0

        for raw, region in zip(lines, classify_lines(lines)):
            line = Line(raw=raw)
            trimmed = line.trimmed
            if region is not LineRegion.TEXT:
                self._pass_through(raw)
            elif not trimmed:
                self._pass_through(raw, blank=True)
            elif trimmed.startswith("|") or looks_like_math(trimmed):
                self._pass_through(raw)
            else:
                line.tokens = split_columns(raw, self.separator)
                if len(line.tokens) > 1:
                    self._add(line)
                else:
                    self._pass_through(raw)

        self._flush()
        return SynthesisResult(lines=self._out, tables=self._tables)


def synthesize_tables(lines: Sequence[str], tolerance: int = 1) -> SynthesisResult:
    return TableSynthesizer(tolerance=tolerance).run(lines)
