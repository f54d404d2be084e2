from __future__ import annotations

from typing import Dict, List

from mathpaste.tex.delimiters import find_math_spans

_OPENERS = {"{": "}", "[": "]", "(": ")"}
_CLOSERS = {v: k for k, v in _OPENERS.items()}


def split_columns(line: str, separator: str = ",") -> List[str]:
    """
    Split a line into trimmed column tokens.

    A separator only splits when it sits outside double quotes, outside a
    ``$...$`` span and at bracket depth zero for each of ``{}``, ``[]`` and
    ``()``. A ``$`` without a partner on the line is plain text. Unescaped
    double quotes are dropped from the tokens; a backslash keeps the
    character after it verbatim.

    Examples:
        - 'a, b, c'              -> ['a', 'b', 'c']
        - 'f(x, y), "1,5", $a,b$' -> ['f(x, y)', '1,5', '$a,b$']
        - 'Apple, $1.50, 3'      -> ['Apple', '$1.50', '3']
    """
    tokens: List[str] = []
    current: List[str] = []
    depth = {opener: 0 for opener in _OPENERS}
    in_quotes = False
    span_ends: Dict[int, int] = {s.start: s.end for s in find_math_spans(line)}

    i = 0
    n = len(line)
    while i < n:
        ch = line[i]

        if not in_quotes and i in span_ends:
            current.append(line[i : span_ends[i]])  # noqa E203
            i = span_ends[i]
            continue

        if ch == "\\" and i + 1 < n:
            current.append(line[i : i + 2])  # noqa E203
            i += 2
            continue

        if ch == '"':
            in_quotes = not in_quotes
            i += 1
            continue

        if not in_quotes:
            if ch in _OPENERS:
                depth[ch] += 1
            elif ch in _CLOSERS:
                opener = _CLOSERS[ch]
                depth[opener] = max(0, depth[opener] - 1)
            elif ch == separator and not any(depth.values()):
                tokens.append("".join(current).strip())
                current = []
                i += 1
                continue

        current.append(ch)
        i += 1

    tokens.append("".join(current).strip())
    return tokens
