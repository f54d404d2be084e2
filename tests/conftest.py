import pytest

from mathpaste.config import NormalizerSettings
from mathpaste.models import Line, TableCandidateBuffer


@pytest.fixture
def default_settings():
    return NormalizerSettings()


@pytest.fixture
def sample_buffer():
    buffer = TableCandidateBuffer()
    buffer.start(Line(raw="a,b,c", tokens=["a", "b", "c"]))
    buffer.lines.append(Line(raw="1,2,3", tokens=["1", "2", "3"]))
    return buffer


@pytest.fixture
def mixed_document():
    return "\n".join(
        [
            r"Here is the result: \(x^2\) and \[\int_0^1 f(x)\,dx\]",
            "name, score, grade",
            '"Doe, John", 91, A',
            "Jane, 85",
            "vtAB = vtAC + vtCB",
            "",
            "```python",
            "print(1, 2, 3)",
            "```",
        ]
    )
