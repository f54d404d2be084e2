from dataclasses import dataclass, field
from enum import Enum
from typing import List


class MathPasteError(Exception):
    """Custom exception for errors raised by the mathpaste front ends."""
    pass


class SpanKind(Enum):
    """How a math span is delimited in the canonical document."""
    INLINE = "inline"
    BLOCK = "block"


@dataclass(frozen=True)
class MathSpan:
    """A delimited piece of math found in the document."""
    kind: SpanKind
    content: str
    start: int
    end: int


@dataclass
class Line:
    """One newline-delimited unit of a document."""
    raw: str
    tokens: List[str] = field(default_factory=list)

    @property
    def trimmed(self) -> str:
        return self.raw.strip()


@dataclass
class TableCandidateBuffer:
    """
    Lines accumulated while their column counts stay within tolerance
    of the first buffered line.
    """
    baseline: int = 0
    tolerance: int = 1
    lines: List[Line] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.lines)

    def accepts(self, column_count: int) -> bool:
        return abs(column_count - self.baseline) <= self.tolerance

    def start(self, line: Line) -> None:
        self.baseline = len(line.tokens)
        self.lines = [line]

    def clear(self) -> None:
        self.baseline = 0
        self.lines = []

    @property
    def has_table_shape(self) -> bool:
        rows = len(self.lines)
        return (rows >= 2 and self.baseline >= 2) or (rows == 1 and self.baseline >= 3)


@dataclass(frozen=True)
class NormalizationResult:
    content: str
    changed: bool
    tables: int = 0
    expanded_lines: int = 0

    def to_dict(self) -> dict:
        return {
            "content": self.content,
            "changed": self.changed,
            "tables": self.tables,
            "expandedLines": self.expanded_lines,
        }
