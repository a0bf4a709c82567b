"""Regex primitives shared by the per-kind transforms.

These are pattern based, not tokenizer based: a comment marker inside a
string, regex or template literal is indistinguishable from a real
comment and is stripped like one.
"""

from __future__ import annotations

import re
from typing import Callable, Pattern

Transform = Callable[[str], str]

# An unterminated block comment runs to the end of the text.
BLOCK_COMMENT = r"/\*[\s\S]*?(?:\*/|\Z)"
SLASH_LINE_COMMENT = r"//[^\n]*"

WHITESPACE_RUN = re.compile(r"\s+")


def comment_pattern(*alternatives: str, flags: int = 0) -> Pattern[str]:
    """Join comment regexes into one alternation so the leftmost marker wins."""
    return re.compile("|".join(alternatives), flags)


C_STYLE_COMMENTS = comment_pattern(BLOCK_COMMENT, SLASH_LINE_COMMENT)
BLOCK_COMMENTS = comment_pattern(BLOCK_COMMENT)


def strip_comments(text: str, pattern: Pattern[str]) -> str:
    return pattern.sub("", text)


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs (newlines included) to one space and trim."""
    return WHITESPACE_RUN.sub(" ", text).strip()


def compact_pattern(characters: str) -> Pattern[str]:
    """Build a pattern matching any of ``characters`` with its surrounding whitespace."""
    return re.compile(r"\s*([" + re.escape(characters) + r"])\s*")


def compact(text: str, pattern: Pattern[str]) -> str:
    """Remove whitespace on both sides of the punctuation matched by ``pattern``."""
    return pattern.sub(r"\1", text)


__all__ = [
    "BLOCK_COMMENT",
    "BLOCK_COMMENTS",
    "C_STYLE_COMMENTS",
    "SLASH_LINE_COMMENT",
    "Transform",
    "collapse_whitespace",
    "comment_pattern",
    "compact",
    "compact_pattern",
    "strip_comments",
]
