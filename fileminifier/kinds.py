"""Extension lookup for supported file kinds."""

from __future__ import annotations

from pathlib import Path

from .models import FileKind

KIND_BY_SUFFIX: dict[str, FileKind] = {
    ".php": FileKind.GENERIC_SOURCE,
    ".sql": FileKind.STRUCTURED_QUERY,
    ".js": FileKind.SCRIPT,
    ".css": FileKind.STYLE,
    ".vue": FileKind.COMPOSITE_MARKUP,
}

SUPPORTED_SUFFIXES: tuple[str, ...] = tuple(KIND_BY_SUFFIX)


def detect_kind(path: Path | str) -> FileKind | None:
    """Return the kind for ``path`` based on its extension, or None when unsupported."""
    suffix = Path(path).suffix.lower()
    return KIND_BY_SUFFIX.get(suffix)


__all__ = ["KIND_BY_SUFFIX", "SUPPORTED_SUFFIXES", "detect_kind"]
