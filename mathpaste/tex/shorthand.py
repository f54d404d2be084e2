"""Expansion of ad hoc math shorthand into LaTeX.

Chat assistants and people typing on a phone write ``∫ab f(x)dx``, ``√x``,
``vtAB`` (vector AB) or ``gABC`` (angle ABC). Each physical line is expanded
on its own so that the bounds of an integral can never be captured from the
next line.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from loguru import logger

from mathpaste.tex.regions import LineRegion, classify_lines

_BOUND = r"[0-9A-Za-z∞π]"

# Ordered rules: the bounded integral must run before the bare one.
_RULES: List[Tuple[str, re.Pattern, Callable[[re.Match], str]]] = [
    (
        "integral",
        re.compile(rf"∫\s*({_BOUND})({_BOUND})(?=\s|$)[ \t]*([^=]*)"),
        lambda m: f"\\int_{{{m.group(1)}}}^{{{m.group(2)}}} {m.group(3)}",
    ),
    (
        "sqrt",
        # Parenthesised radicands may nest one level: √(a(b)).
        re.compile(r"√\s*(?:\(((?:[^()]|\([^()]*\))*)\)|([0-9A-Za-z.]+))"),
        lambda m: f"\\sqrt{{{m.group(1) if m.group(1) is not None else m.group(2)}}}",
    ),
    (
        "vector",
        re.compile(r"\bvt([A-Z]{1,2})\b"),
        lambda m: f"\\overrightarrow{{{m.group(1)}}}",
    ),
    (
        "angle",
        re.compile(r"\bg([A-Z]{3})\b"),
        lambda m: f"\\widehat{{{m.group(1)}}}",
    ),
    (
        "bare_integral",
        re.compile(r"∫"),
        lambda m: "\\int ",
    ),
]

# Literal symbols translated once a line is known to be math.
SYMBOL_COMMANDS = {
    "∞": "\\infty",
    "π": "\\pi",
    "±": "\\pm",
    "∓": "\\mp",
    "×": "\\times",
    "÷": "\\div",
    "·": "\\cdot",
    "≤": "\\leq",
    "≥": "\\geq",
    "≠": "\\neq",
    "≈": "\\approx",
    "→": "\\to",
    "∈": "\\in",
    "∑": "\\sum",
    "∆": "\\Delta",
    "′": "'",
    "α": "\\alpha",
    "β": "\\beta",
    "γ": "\\gamma",
    "δ": "\\delta",
    "ε": "\\varepsilon",
    "θ": "\\theta",
    "λ": "\\lambda",
    "μ": "\\mu",
    "σ": "\\sigma",
    "φ": "\\varphi",
    "ω": "\\omega",
    "Δ": "\\Delta",
    "Ω": "\\Omega",
}


@dataclass(frozen=True)
class ExpansionResult:
    lines: List[str]
    expanded: int


def translate_symbols(text: str) -> str:
    """Replace literal math symbols with LaTeX commands.

    A command directly followed by a letter gets a separating space so that
    ``2πr`` becomes ``2\\pi r`` rather than ``2\\pir``.
    """

    out: List[str] = []
    for i, ch in enumerate(text):
        cmd = SYMBOL_COMMANDS.get(ch)
        if cmd is None:
            out.append(ch)
            continue
        nxt = text[i + 1] if i + 1 < len(text) else ""
        if cmd.startswith("\\") and nxt.isalpha():
            cmd += " "
        out.append(cmd)
    return "".join(out)


def expand_line(line: str) -> str:
    """Expand the shorthand in one line, wrapping it as ``$$ ... $$`` if anything fired.

    Lines already containing ``$`` and existing Markdown table rows are
    returned unchanged, which keeps the expansion idempotent.
    """

    if "$" in line or line.lstrip().startswith("|"):
        return line

    out = line
    fired = False
    for name, pattern, repl in _RULES:
        out, count = pattern.subn(repl, out)
        if count:
            fired = True
            logger.debug(f"Shorthand rule '{name}' fired {count}x")

    if not fired:
        return line

    out = translate_symbols(out)
    out = re.sub(r"[ \t]+", " ", out).strip()
    return f"$$ {out} $$"


def expand_shorthand(lines: Sequence[str]) -> ExpansionResult:
    """Expand every TEXT line; code and multi-line math are copied through."""

    regions = classify_lines(lines)
    out: List[str] = []
    expanded = 0
    for line, region in zip(lines, regions):
        if region is not LineRegion.TEXT:
            out.append(line)
            continue
        new = expand_line(line)
        if new != line:
            expanded += 1
        out.append(new)
    return ExpansionResult(lines=out, expanded=expanded)
