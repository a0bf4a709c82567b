"""Path based keep/drop decisions and post-minification content cleanup."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional, Pattern, Sequence, Union

from ..logging import get_logger
from ..models import FileKind
from ..transforms import minify

PatternLike = Union[Pattern[str], str]

logger = get_logger("rules")


@dataclass(frozen=True)
class GroupRule:
    """Named bucket claimed by paths matching ``pattern``."""

    name: str
    pattern: Pattern[str]

    def matches(self, relative_path: str) -> bool:
        return self.pattern.search(normalise_path(relative_path)) is not None


@dataclass(frozen=True)
class RuleSet:
    """Immutable include/exclude/cleanup/group configuration for one framework."""

    name: str
    include: tuple[Pattern[str], ...] = ()
    exclude: tuple[Pattern[str], ...] = ()
    content_cleanup: tuple[Pattern[str], ...] = ()
    groups: tuple[GroupRule, ...] = ()
    kind: FileKind = FileKind.GENERIC_SOURCE
    extensions: tuple[str, ...] = (".php",)
    strip_prefix: Optional[Pattern[str]] = None
    header_template: Optional[str] = None
    default_combined_name: str = "combined.min.txt"

    def with_overrides(
        self,
        *,
        include: Sequence[str] | None = None,
        exclude: Sequence[str] | None = None,
        content_cleanup: Sequence[str] | None = None,
        groups: Sequence[tuple[str, str]] | None = None,
    ) -> "RuleSet":
        """Return a copy with the given pattern lists replaced."""
        changes: dict[str, object] = {}
        if include is not None:
            changes["include"] = compile_patterns(include)
        if exclude is not None:
            changes["exclude"] = compile_patterns(exclude)
        if content_cleanup is not None:
            changes["content_cleanup"] = compile_patterns(content_cleanup)
        if groups is not None:
            changes["groups"] = compile_groups(groups)
        return replace(self, **changes) if changes else self


def normalise_path(relative_path: str) -> str:
    return relative_path.replace("\\", "/")


def compile_patterns(sources: Iterable[PatternLike]) -> tuple[Pattern[str], ...]:
    """Compile pattern strings, dropping (and logging) any that are malformed."""
    compiled: List[Pattern[str]] = []
    for source in sources:
        if isinstance(source, re.Pattern):
            compiled.append(source)
            continue
        try:
            compiled.append(re.compile(source))
        except re.error as exc:
            logger.warning("Ignoring malformed pattern %r: %s", source, exc)
    return tuple(compiled)


def compile_groups(definitions: Iterable[tuple[str, PatternLike]]) -> tuple[GroupRule, ...]:
    """Compile ``(name, pattern)`` pairs, keeping their priority order."""
    groups: List[GroupRule] = []
    for name, source in definitions:
        patterns = compile_patterns([source])
        if not patterns:
            continue
        groups.append(GroupRule(name=name, pattern=patterns[0]))
    return tuple(groups)


def select(
    relative_path: str,
    include: Iterable[PatternLike],
    exclude: Iterable[PatternLike],
) -> bool:
    """Return True when ``relative_path`` matches an include and no exclude pattern."""
    path = normalise_path(relative_path)

    keep = False
    for pattern in compile_patterns(include):
        if pattern.search(path):
            keep = True
            break

    if not keep:
        return False

    for pattern in compile_patterns(exclude):
        if pattern.search(path):
            logger.debug("Excluded %s by %s", path, pattern.pattern)
            return False
    return True


def clean_content(text: str, patterns: Iterable[PatternLike]) -> str:
    """Delete every match of each cleanup pattern from ``text``, in order."""
    for pattern in compile_patterns(patterns):
        text = pattern.sub("", text)
    return text


def evaluate(
    relative_path: str,
    text: str,
    rules: RuleSet,
    *,
    transform: Callable[[str], str] | None = None,
) -> str | None:
    """Select, minify and clean one file; return None when the file is dropped."""
    if not select(relative_path, rules.include, rules.exclude):
        return None
    if transform is None:
        minified = minify(rules.kind, text)
    else:
        minified = transform(text)
    return clean_content(minified, rules.content_cleanup)


__all__ = [
    "GroupRule",
    "PatternLike",
    "RuleSet",
    "clean_content",
    "compile_groups",
    "compile_patterns",
    "evaluate",
    "normalise_path",
    "select",
]
