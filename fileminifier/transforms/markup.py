"""Composite-markup (Vue single-file component) transform.

Only the template edges and inter-tag gaps are squeezed; the script and
style blocks are handed to their own transforms.
"""

from __future__ import annotations

import re

from .script import minify_script
from .style import minify_style

_TEMPLATE_OPEN = re.compile(r"<template>\s*")
_TEMPLATE_CLOSE = re.compile(r"\s*</template>")
_BETWEEN_TAGS = re.compile(r">\s+<")
_SCRIPT_BLOCK = re.compile(r"<script>(.*?)</script>", re.DOTALL)
_STYLE_BLOCK = re.compile(r"<style[^>]*>(.*?)</style>", re.DOTALL)


def minify_markup(text: str) -> str:
    """Squeeze a Vue component and minify its script and style blocks."""
    text = _TEMPLATE_OPEN.sub("<template>", text)
    text = _TEMPLATE_CLOSE.sub("</template>", text)
    text = _BETWEEN_TAGS.sub("><", text)
    text = _SCRIPT_BLOCK.sub(
        lambda match: f"<script>{minify_script(match.group(1))}</script>", text, count=1
    )
    # Attributes such as ``scoped`` or ``lang`` are dropped from the rewritten tag.
    text = _STYLE_BLOCK.sub(
        lambda match: f"<style>{minify_style(match.group(1))}</style>", text
    )
    return text.strip()


__all__ = ["minify_markup"]
