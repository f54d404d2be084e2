import pytest

from mathpaste import normalize, normalize_document
from mathpaste.config import NormalizerSettings


def test_table_synthesis():
    out = normalize("a,b,c\n1,2,3\n4,5,6")
    lines = out.split("\n")
    assert lines[0] == "| a | b | c |"
    assert lines[1] == "| :--- | :--- | :--- |"
    assert lines[2] == "| 1 | 2 | 3 |"
    assert lines[3] == "| 4 | 5 | 6 |"


def test_currency_cells_keep_their_columns():
    out = normalize("Product, Price, Qty\nApple, $1.50, 3\nPear, 2.00, 5")
    lines = out.split("\n")
    assert lines[0] == "| Product | Price | Qty |"
    assert lines[2] == "| Apple | $1.50 | 3 |"
    assert lines[3] == "| Pear | 2.00 | 5 |"


def test_below_threshold_is_passed_through():
    assert normalize("x,y") == "x,y"


def test_math_protection():
    assert normalize(r"\int_0^1 x^2, dx") == r"\int_0^1 x^2, dx"


def test_delimiter_conversion():
    assert normalize(r"\[x+y=z\]") == "$$\nx+y=z\n$$"
    assert normalize(r"\(a+b\)") == "$ a+b $"


def test_adjacent_span_splitting():
    assert normalize("$a$$b$") == "$ a $\n\n$ b $"


def test_shorthand_expansion():
    assert normalize("∫ab f(x)dx") == r"$$ \int_{a}^{b} f(x)dx $$"
    assert r"\sqrt{x}" in normalize("√x")
    assert r"\overrightarrow{AB}" in normalize("vtAB")


def test_exponents_inside_converted_block_are_not_rewrapped():
    assert normalize(r"\[x^2 + √y\]") == "$$\nx^2 + √y\n$$"


def test_conservation_of_plain_text():
    text = "Just some prose.\nAnother line, with one comma.\n\n- a list item"
    result = normalize_document(text)
    assert result.content == text
    assert result.changed is False
    assert result.tables == 0
    assert result.expanded_lines == 0


def test_empty_document():
    result = normalize_document("")
    assert result.content == ""
    assert result.changed is False


def test_mixed_document(mixed_document):
    result = normalize_document(mixed_document)
    lines = result.content.split("\n")

    assert lines[0] == "Here is the result: $ x^2 $ and"
    assert lines[1:4] == ["$$", r"\int_0^1 f(x)\,dx", "$$"]
    assert lines[4:8] == [
        "| name | score | grade |",
        "| :--- | :--- | :--- |",
        "| Doe, John | 91 | A |",
        "| Jane | 85 |  |",
    ]
    assert (
        r"$$ \overrightarrow{AB} = \overrightarrow{AC} + \overrightarrow{CB} $$"
        in lines
    )
    assert "print(1, 2, 3)" in lines
    assert result.tables == 1
    assert result.expanded_lines == 1


def test_stages_can_be_disabled():
    settings = NormalizerSettings(expand_shorthand=False, synthesize_tables=False)
    text = "a,b,c\n1,2,3\nvtAB"
    assert normalize_document(text, settings).content == text


def test_column_tolerance_setting():
    strict = NormalizerSettings(column_tolerance=0)
    result = normalize_document("a,b,c\n1,2,3\n1,2", strict)
    # The two-column row no longer joins the table.
    assert result.content.split("\n")[-1] == "1,2"


@pytest.mark.parametrize(
    "text",
    [
        "a,b,c\n1,2,3\n4,5,6",
        "x,y",
        r"\int_0^1 x^2, dx",
        r"\[x+y=z\]",
        "$a$$b$",
        "∫ab f(x)dx\n√x\nvtAB\ngABC",
        "a,b,c\n1,2\n1,2,3,4\n1,2,3,4,5,6",
        "Solve \\[\n x^2 \n\\] and \\(y\\), then:\n\nname, age\nAnn, 3\n",
        "$$\n1, 2, 3\n4, 5, 6\n$$",
        "```\na,b\nc,d\n```\n√2, 3, 4",
        '"q, r", s, t\n1, 2\n| kept | table |',
        "costs $5, $6 and $7\nmore, text",
        r"\[a \[b\] c\]",
        r"\(a \(b\) c\)",
        "\\[\n\\[x\\]\n\\]",
        "Product, Price, Qty\nApple, $1.50, 3\nPear, 2.00, 5",
    ],
)
def test_normalize_is_idempotent(text):
    once = normalize(text)
    assert normalize(once) == once


def test_idempotent_on_mixed_document(mixed_document):
    once = normalize(mixed_document)
    assert normalize(once) == once
