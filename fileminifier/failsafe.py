"""Fail-safe wrapper used when a transform raises unexpectedly."""

from __future__ import annotations

from .logging import get_logger
from .models import FileKind
from .transforms import minify

logger = get_logger("failsafe")


def safe_minify(kind: FileKind, text: str, *, label: str | None = None) -> str:
    """Return minified ``text``, or ``text`` unchanged if the transform fails."""
    try:
        return minify(kind, text)
    except Exception as exc:
        logger.warning(
            "Minification failed for %s (%s); keeping original content",
            label or kind.value,
            exc,
        )
        logger.debug("Transform failure details", exc_info=True)
        return text


__all__ = ["safe_minify"]
