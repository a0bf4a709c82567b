"""Generic-source transform (PHP and other ``//``/``/* */`` languages)."""

from __future__ import annotations

from .base import C_STYLE_COMMENTS, collapse_whitespace, compact, compact_pattern, strip_comments

PUNCTUATION = "(){}[],;:=><"
_PUNCTUATION = compact_pattern(PUNCTUATION)


def minify_source(text: str) -> str:
    """Strip comments, collapse whitespace and tighten punctuation."""
    text = strip_comments(text, C_STYLE_COMMENTS)
    text = collapse_whitespace(text)
    return compact(text, _PUNCTUATION).strip()


__all__ = ["PUNCTUATION", "minify_source"]
