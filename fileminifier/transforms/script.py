"""Script (JavaScript) transform.

Line breaks are deleted outright rather than collapsed, so statements
that rely on automatic semicolon insertion run together.
"""

from __future__ import annotations

import re

from .base import C_STYLE_COMMENTS, WHITESPACE_RUN, compact, compact_pattern, strip_comments

# Compacting around "/" can join a division and a regex literal into a new
# "//", which the next run then reads as a line comment.
OPERATORS = "=+-*/%&|^!<>{}()[];:,."
KEYWORDS: tuple[str, ...] = ("if", "else", "for", "while", "switch", "catch", "function")

_LINE_EDGES = re.compile(r"^\s+|\s+$", re.MULTILINE)
_NEWLINES = re.compile(r"\n+")
_OPERATORS = compact_pattern(OPERATORS)
_KEYWORD_PAREN = re.compile(r"\b(" + "|".join(KEYWORDS) + r")\(")


def minify_script(text: str) -> str:
    """Strip comments, join lines and compact operators in JavaScript."""
    text = strip_comments(text, C_STYLE_COMMENTS)
    text = _LINE_EDGES.sub("", text)
    text = _NEWLINES.sub("", text)
    text = WHITESPACE_RUN.sub(" ", text)
    text = compact(text, _OPERATORS)
    text = _KEYWORD_PAREN.sub(r"\1 (", text)
    return text.strip()


__all__ = ["KEYWORDS", "OPERATORS", "minify_script"]
