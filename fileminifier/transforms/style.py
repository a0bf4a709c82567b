"""Style (CSS) transform."""

from __future__ import annotations

import re

from .base import BLOCK_COMMENTS, collapse_whitespace, compact, compact_pattern, strip_comments

_COLON = compact_pattern(":")
_OPEN_BRACE = compact_pattern("{")
_PUNCTUATION = compact_pattern("{};,")
_TRAILING_SEMICOLON = re.compile(r";(?=\s*})")


def minify_style(text: str) -> str:
    """Strip CSS comments and compact whitespace around punctuation."""
    text = strip_comments(text, BLOCK_COMMENTS)
    text = compact(text, _COLON)
    text = compact(text, _OPEN_BRACE)
    text = collapse_whitespace(text)
    text = compact(text, _PUNCTUATION)
    text = _TRAILING_SEMICOLON.sub("", text)
    return text.strip()


__all__ = ["minify_style"]
