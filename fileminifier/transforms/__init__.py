"""Per-kind text transforms and the kind-keyed dispatch table."""

from __future__ import annotations

from typing import Mapping

from ..models import FileKind
from .base import Transform
from .markup import minify_markup
from .query import minify_query
from .script import minify_script
from .source import minify_source
from .style import minify_style


class UnsupportedKindError(ValueError):
    """Raised when no transform is registered for a kind."""


TRANSFORMS: Mapping[FileKind, Transform] = {
    FileKind.GENERIC_SOURCE: minify_source,
    FileKind.STRUCTURED_QUERY: minify_query,
    FileKind.SCRIPT: minify_script,
    FileKind.STYLE: minify_style,
    FileKind.COMPOSITE_MARKUP: minify_markup,
}


def resolve_kind(kind: FileKind | str) -> FileKind:
    """Coerce ``kind`` to a :class:`FileKind`, raising for unknown values."""
    if isinstance(kind, FileKind):
        return kind
    try:
        return FileKind(kind)
    except ValueError as exc:
        known = ", ".join(item.value for item in FileKind)
        raise UnsupportedKindError(f"Unsupported file kind '{kind}' (expected one of: {known})") from exc


def minify(kind: FileKind | str, text: str) -> str:
    """Return ``text`` minified with the transform registered for ``kind``."""
    return TRANSFORMS[resolve_kind(kind)](text)


__all__ = [
    "TRANSFORMS",
    "UnsupportedKindError",
    "minify",
    "minify_markup",
    "minify_query",
    "minify_script",
    "minify_source",
    "minify_style",
    "resolve_kind",
]
