"""Directory scanning for supported source files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Collection, Iterator, List, Sequence

from .kinds import SUPPORTED_SUFFIXES, detect_kind
from .logging import get_logger
from .models import SourceFile

# Never descended into, whatever the configured globs say.
ALWAYS_SKIPPED = frozenset({".git", ".hg", ".svn", "node_modules"})


@dataclass(frozen=True)
class ExcludeGlob:
    """One ``exclude_paths`` entry from .fileminifier.yml.

    A trailing ``/`` limits the glob to directories. A glob that is rooted
    (leading ``/``) or contains a ``/`` is matched against the whole
    relative path; otherwise any single path segment may match.
    """

    glob: str
    dirs_only: bool = False
    whole_path: bool = False

    @classmethod
    def parse(cls, raw: str) -> "ExcludeGlob | None":
        text = raw.strip()
        dirs_only = text.endswith("/")
        text = text.rstrip("/")
        rooted = text.startswith("/")
        text = text.lstrip("/")
        if not text:
            return None
        return cls(glob=text, dirs_only=dirs_only, whole_path=rooted or "/" in text)

    def excludes(self, relative_path: str, *, is_dir: bool) -> bool:
        if self.dirs_only and not is_dir:
            return False
        if self.whole_path:
            return fnmatchcase(relative_path, self.glob)
        return any(fnmatchcase(segment, self.glob) for segment in relative_path.split("/"))


def parse_excludes(patterns: Sequence[str]) -> List[ExcludeGlob]:
    globs = (ExcludeGlob.parse(pattern) for pattern in patterns)
    return [glob for glob in globs if glob is not None]


def _walk(root: Path, excludes: Sequence[ExcludeGlob], skip_dirs: Collection[Path]) -> Iterator[Path]:
    """Yield files under ``root`` depth first, siblings in sorted order."""

    def excluded(relative_path: str, is_dir: bool) -> bool:
        return any(glob.excludes(relative_path, is_dir=is_dir) for glob in excludes)

    for dirpath, dirnames, filenames in os.walk(root):
        here = Path(dirpath)
        prefix = here.relative_to(root).as_posix()
        prefix = "" if prefix == "." else f"{prefix}/"

        dirnames[:] = [
            name
            for name in sorted(dirnames)
            if name not in ALWAYS_SKIPPED
            and (here / name).resolve() not in skip_dirs
            and not excluded(prefix + name, True)
        ]
        for filename in sorted(filenames):
            if not excluded(prefix + filename, False):
                yield here / filename


class SourceScanner:
    """Walks a directory tree and returns supported files in a stable order."""

    def __init__(self, exclude_paths: Sequence[str] = ()) -> None:
        self.logger = get_logger("scanner")
        self.excludes = parse_excludes(exclude_paths)

    def scan(
        self,
        root: str | Path,
        *,
        suffixes: Collection[str] = SUPPORTED_SUFFIXES,
        skip_dirs: Collection[Path] = (),
    ) -> List[SourceFile]:
        """Return supported files under ``root`` whose extension is in ``suffixes``."""
        base = Path(root).expanduser().resolve()
        if not base.exists():
            raise FileNotFoundError(f"Source directory not found: {root}")
        if not base.is_dir():
            raise NotADirectoryError(f"Source path is not a directory: {root}")

        wanted = {suffix.lower() for suffix in suffixes}
        skipped = {Path(path).resolve() for path in skip_dirs}
        found: List[SourceFile] = []
        for path in _walk(base, self.excludes, skipped):
            kind = detect_kind(path) if path.suffix.lower() in wanted else None
            if kind is not None:
                found.append(SourceFile(path=path, relative_path=path.relative_to(base).as_posix(), kind=kind))

        self.logger.debug("Discovered %d supported files under %s", len(found), base)
        return found


__all__ = ["ALWAYS_SKIPPED", "ExcludeGlob", "SourceScanner", "parse_excludes"]
