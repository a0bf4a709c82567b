"""Grouping and ordering of minified files into one combined artifact."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Pattern, Sequence, Tuple

from jinja2 import Environment, FileSystemLoader

from .models import CombinedArtifact, FileKind
from .rules import OTHER_GROUP, GroupRule, RuleSet

CHUNK_SEPARATOR = "\n"
_TEMPLATES_DIR = Path(__file__).with_name("templates")


def file_label(relative_path: str) -> str:
    """Single-line comment naming the file a combined chunk came from."""
    return f"/* File: {relative_path} */"


def classify(relative_path: str, groups: Sequence[GroupRule]) -> str:
    """Return the first group whose pattern matches, or the catch-all group."""
    for group in groups:
        if group.matches(relative_path):
            return group.name
    return OTHER_GROUP


def group_files(
    files: Iterable[Tuple[str, str]], groups: Sequence[GroupRule]
) -> Dict[str, List[Tuple[str, str]]]:
    """Bucket ``(path, content)`` pairs in group priority order, keeping discovery order."""
    buckets: Dict[str, List[Tuple[str, str]]] = {group.name: [] for group in groups}
    buckets.setdefault(OTHER_GROUP, [])
    for relative_path, content in files:
        buckets[classify(relative_path, groups)].append((relative_path, content))
    return buckets


def combine(
    files: Iterable[Tuple[str, str]],
    groups: Sequence[GroupRule],
    *,
    header: str = "",
    strip_prefix: Optional[Pattern[str]] = None,
) -> CombinedArtifact:
    """Concatenate files group by group under ``// <group>`` and per-file labels."""
    buckets = group_files(files, groups)
    chunks: List[str] = []
    if header:
        chunks.append(header.rstrip("\n"))

    for name, members in buckets.items():
        if not members:
            continue
        chunks.append(f"\n// {name}")
        for relative_path, content in members:
            if strip_prefix is not None:
                content = strip_prefix.sub("", content, count=1)
            chunks.append(file_label(relative_path))
            chunks.append(content)

    counts = {name: len(members) for name, members in buckets.items()}
    return CombinedArtifact(text=CHUNK_SEPARATOR.join(chunks), group_counts=counts)


def combine_by_kind(files: Iterable[Tuple[str, FileKind, str]]) -> CombinedArtifact:
    """Concatenate files grouped by kind, in order of each kind's first appearance."""
    buckets: Dict[FileKind, List[Tuple[str, str]]] = {}
    for relative_path, kind, content in files:
        buckets.setdefault(kind, []).append((relative_path, content))

    chunks = [
        f"{file_label(relative_path)}{content}"
        for members in buckets.values()
        for relative_path, content in members
    ]
    counts = {kind.value: len(members) for kind, members in buckets.items()}
    return CombinedArtifact(text=CHUNK_SEPARATOR.join(chunks), group_counts=counts)


def create_environment(templates_dir: Path | None = None) -> Environment:
    directories = [str(templates_dir)] if templates_dir else []
    directories.append(str(_TEMPLATES_DIR))
    return Environment(
        loader=FileSystemLoader(directories),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_header(
    rules: RuleSet,
    *,
    generated_at: datetime | None = None,
    env: Environment | None = None,
) -> str:
    """Render the rule set's combined-file header, or an empty string when it has none."""
    if not rules.header_template:
        return ""
    env = env or create_environment()
    template = env.get_template(rules.header_template)
    return template.render(
        title=rules.name.capitalize(),
        rules=rules,
        generated_at=generated_at or datetime.now(UTC),
    )


__all__ = [
    "CHUNK_SEPARATOR",
    "classify",
    "combine",
    "combine_by_kind",
    "create_environment",
    "file_label",
    "group_files",
    "render_header",
]
