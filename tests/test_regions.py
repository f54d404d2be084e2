from mathpaste.tex.regions import LineRegion, classify_lines, code_ranges, split_code_chunks

T, C, M = LineRegion.TEXT, LineRegion.CODE, LineRegion.MATH


def test_classify_lines_code_and_math():
    lines = ["a", "```", "x", "```", "$$", "b", "$$", "$$ c $$"]
    assert classify_lines(lines) == [T, C, C, C, M, M, M, T]


def test_unclosed_regions_are_plain_text():
    assert classify_lines(["$$", "a"]) == [T, T]
    assert classify_lines(["```", "a"]) == [T, T]


def test_block_dollars_inside_code_do_not_toggle_math():
    lines = ["```", "$$", "```", "a", "$$"]
    assert classify_lines(lines) == [C, C, C, T, T]


def test_code_ranges_pair_fences_in_order():
    assert code_ranges(["```", "a", "~~~", "```", "```"]) == [(0, 2), (3, 4)]


def test_split_code_chunks_round_trips():
    text = "a\n```\nb\n```\nc"
    chunks = split_code_chunks(text)
    assert chunks == [(False, "a"), (True, "```\nb\n```"), (False, "c")]
    assert "\n".join(chunk for _, chunk in chunks) == text
