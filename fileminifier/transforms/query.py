"""Structured-query (SQL) transform.

Operators keep their surrounding spaces, so ``status = 'active'`` survives
as written.
"""

from __future__ import annotations

import re

from .base import BLOCK_COMMENT, collapse_whitespace, comment_pattern, strip_comments

# Only a ``--`` that opens a line counts as a comment.
DASH_LINE_COMMENT = r"^[ \t]*--[^\n]*"

_COMMENTS = comment_pattern(DASH_LINE_COMMENT, BLOCK_COMMENT, flags=re.MULTILINE)


def minify_query(text: str) -> str:
    """Strip SQL comments and collapse whitespace runs to one space."""
    text = strip_comments(text, _COMMENTS)
    return collapse_whitespace(text)


__all__ = ["minify_query"]
