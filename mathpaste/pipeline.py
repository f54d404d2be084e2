"""The document normalization pipeline.

Canonicalize delimiters, expand shorthand line by line, then synthesize
tables. Every stage is a pure function, so the composition is too; it is
safe to call on every keystroke and from any number of threads.
"""
from __future__ import annotations

from typing import Optional

from loguru import logger

from mathpaste.config import NormalizerSettings
from mathpaste.models import NormalizationResult
from mathpaste.tables.synthesizer import synthesize_tables
from mathpaste.tex.delimiters import canonicalize_delimiters
from mathpaste.tex.shorthand import expand_shorthand


def normalize_document(
    content: str, settings: Optional[NormalizerSettings] = None
) -> NormalizationResult:
    settings = settings or NormalizerSettings()

    if not content:
        return NormalizationResult(content="", changed=False)

    text = canonicalize_delimiters(content)
    lines = text.split("\n")

    expanded = 0
    if settings.expand_shorthand:
        expansion = expand_shorthand(lines)
        lines, expanded = expansion.lines, expansion.expanded

    tables = 0
    if settings.synthesize_tables:
        synthesis = synthesize_tables(lines, tolerance=settings.column_tolerance)
        lines, tables = synthesis.lines, synthesis.tables

    out = "\n".join(lines)
    changed = out != content
    logger.debug(
        f"Normalized document: {len(content)} -> {len(out)} chars, "
        f"tables={tables}, expanded_lines={expanded}, changed={changed}"
    )
    return NormalizationResult(
        content=out, changed=changed, tables=tables, expanded_lines=expanded
    )


def normalize(content: str) -> str:
    """Return the canonical Markdown+LaTeX form of ``content``."""
    return normalize_document(content).content
