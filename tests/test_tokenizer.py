import pytest

from mathpaste.tables.tokenizer import split_columns


@pytest.mark.parametrize(
    "line, expected",
    [
        ("a, b, c", ["a", "b", "c"]),
        ("a,b,", ["a", "b", ""]),
        ("no separators here", ["no separators here"]),
        ('f(x, y), "1,5", $a,b$', ["f(x, y)", "1,5", "$a,b$"]),
        ("{a,b},[c,d],e", ["{a,b}", "[c,d]", "e"]),
        ("g(h(1, 2), 3), 4", ["g(h(1, 2), 3)", "4"]),
        ("Apple, $1.50, 3", ["Apple", "$1.50", "3"]),
    ],
)
def test_split_columns(line, expected):
    assert split_columns(line) == expected


def test_stray_closers_do_not_go_negative():
    # The ")" is floored at depth zero, so the comma still splits.
    assert split_columns("a), b") == ["a)", "b"]


def test_unclosed_opener_swallows_rest_of_line():
    assert split_columns("(a, b, c") == ["(a, b, c"]


def test_escaped_quotes_are_kept_verbatim():
    assert split_columns(r'say \"hi\", there') == [r'say \"hi\"', "there"]


def test_custom_separator():
    assert split_columns("a; b; c", separator=";") == ["a", "b", "c"]
