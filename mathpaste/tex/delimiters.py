from __future__ import annotations

import re
from typing import Callable, List, Optional

from loguru import logger

from mathpaste.models import MathSpan, SpanKind
from mathpaste.tex.regions import split_code_chunks

# `\\[2pt]` is a LaTeX line break, not a display delimiter, hence the
# lookbehinds. Horizontal whitespace around display delimiters is absorbed.
_DISPLAY_OPEN_RE = re.compile(r"[ \t]*(?<!\\)\\\[")
_DISPLAY_CLOSE_RE = re.compile(r"(?<!\\)\\\][ \t]*")
_INLINE_OPEN_RE = re.compile(r"(?<!\\)\\\(")
_INLINE_CLOSE_RE = re.compile(r"(?<!\\)\\\)")


def _convert_pairs(
    text: str,
    open_re: re.Pattern,
    close_re: re.Pattern,
    render: Callable[[str, str, str], Optional[str]],
) -> str:
    """Replace every matched open/close pair using ``render``.

    ``render`` receives the emitted text so far (only its last character
    matters), the span body and the remaining text; returning ``None`` keeps
    the span as written, and so does a body holding another opener of the
    same kind. Scanning stops at the first opener without a closer, since no
    later opener can have one either.
    """

    out: List[str] = []
    tail = ""
    pos = 0
    while True:
        m_open = open_re.search(text, pos)
        if not m_open:
            break
        m_close = close_re.search(text, m_open.end())
        if not m_close:
            break

        before = text[pos : m_open.start()]  # noqa E203
        if before:
            out.append(before)
            tail = before[-1]

        body = text[m_open.end() : m_close.start()]  # noqa E203
        if open_re.search(text, m_open.end(), m_close.start()):
            rendered = None
        else:
            rendered = render(tail, body, text[m_close.end() :])  # noqa E203
        if rendered is None:
            rendered = text[m_open.start() : m_close.end()]  # noqa E203
        out.append(rendered)
        if rendered:
            tail = rendered[-1]
        pos = m_close.end()

    out.append(text[pos:])
    return "".join(out)


def _render_display(tail: str, body: str, rest: str) -> str:
    body = body.strip()
    block = f"$$\n{body}\n$$" if body else "$$\n$$"
    if tail and tail != "\n":
        block = "\n" + block
    if rest and not rest.startswith("\n"):
        block = block + "\n"
    return block


def _render_inline(tail: str, body: str, rest: str) -> Optional[str]:
    body = body.strip()
    if not body:
        return None
    return f"$ {body} $"


def convert_display_brackets(text: str) -> str:
    r"""Turn every matched ``\[ ... \]`` into a ``$$`` block on its own lines."""
    return _convert_pairs(text, _DISPLAY_OPEN_RE, _DISPLAY_CLOSE_RE, _render_display)


def convert_inline_parens(text: str) -> str:
    r"""Turn every matched ``\( ... \)`` into ``$ ... $``."""
    return _convert_pairs(text, _INLINE_OPEN_RE, _INLINE_CLOSE_RE, _render_inline)


def _find_unescaped(text: str, token: str, start: int, end: Optional[int] = None) -> int:
    end = len(text) if end is None else end
    idx = text.find(token, start, end)
    while idx != -1 and idx > 0 and text[idx - 1] == "\\":
        idx = text.find(token, idx + 1, end)
    return idx


def find_math_spans(text: str) -> List[MathSpan]:
    """Locate dollar-delimited math in ``text``.

    ``$$`` opens a block that may span lines; a single ``$`` opens an inline
    span that must close on the same line. Delimiters without a partner are
    literal text, and ``\\$`` is always literal.
    """

    spans: List[MathSpan] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch != "$":
            i += 1
            continue

        if text.startswith("$$", i):
            close = _find_unescaped(text, "$$", i + 2)
            if close == -1:
                i += 2
                continue
            spans.append(MathSpan(SpanKind.BLOCK, text[i + 2 : close], i, close + 2))  # noqa E203
            i = close + 2
            continue

        line_end = text.find("\n", i)
        if line_end == -1:
            line_end = n
        close = _find_unescaped(text, "$", i + 1, line_end)
        if close == -1:
            i += 1
            continue
        spans.append(MathSpan(SpanKind.INLINE, text[i + 1 : close], i, close + 1))  # noqa E203
        i = close + 1

    return spans


def _pad(content: str) -> str:
    if not content[0].isspace():
        content = " " + content
    if not content[-1].isspace():
        content = content + " "
    return content


def fix_dollar_spans(text: str) -> str:
    """Pad inline spans with one space and split adjacent inline spans.

    ``$$`` blocks are copied through unchanged.
    """

    out: List[str] = []
    cursor = 0
    prev_inline_end = -1
    for span in find_math_spans(text):
        out.append(text[cursor : span.start])  # noqa E203
        if span.kind is SpanKind.INLINE:
            if span.start == prev_inline_end:
                out.append("\n\n")
            out.append("$" + _pad(span.content) + "$")
            prev_inline_end = span.end
        else:
            out.append(text[span.start : span.end])  # noqa E203
        cursor = span.end
    out.append(text[cursor:])
    return "".join(out)


def _canonicalize_chunk(text: str) -> str:
    text = convert_display_brackets(text)
    text = convert_inline_parens(text)
    return fix_dollar_spans(text)


def canonicalize_delimiters(text: str) -> str:
    """Rewrite every math delimiter style into the canonical ``$``/``$$`` form.

    Fenced code blocks are copied through untouched. Malformed input never
    raises; unmatched delimiters stay as literal text. The function is
    idempotent.
    """

    if not text:
        return text

    pieces = []
    for is_code, chunk in split_code_chunks(text):
        pieces.append(chunk if is_code else _canonicalize_chunk(chunk))
    out = "\n".join(pieces)

    if out != text:
        logger.debug(f"Canonicalized math delimiters ({len(text)} -> {len(out)} chars)")
    return out
