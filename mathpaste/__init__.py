"""Normalize pasted AI-assistant output into canonical Markdown + LaTeX."""

from mathpaste.pipeline import normalize, normalize_document

__all__ = ["normalize", "normalize_document"]
