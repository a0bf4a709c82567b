"""Core data models shared across fileminifier components."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Optional


class FileKind(str, Enum):
    """Source formats understood by the transform engine."""

    GENERIC_SOURCE = "generic-source"
    STRUCTURED_QUERY = "structured-query"
    SCRIPT = "script"
    STYLE = "style"
    COMPOSITE_MARKUP = "composite-markup"


@dataclass(frozen=True)
class SourceFile:
    """A file discovered under a source root."""

    path: Path
    relative_path: str
    kind: FileKind


@dataclass
class FileResult:
    """Outcome of minifying a single file."""

    relative_path: str
    original_size: int
    minified_size: int
    output_path: Optional[Path] = None

    @property
    def bytes_saved(self) -> int:
        return self.original_size - self.minified_size


@dataclass
class CombinedArtifact:
    """Concatenated output plus per-group file counts."""

    text: str
    group_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def file_count(self) -> int:
        return sum(self.group_counts.values())


@dataclass
class RunSummary:
    """Counters reported after a minification run."""

    total: int = 0
    succeeded: int = 0
    skipped: int = 0
    bytes_saved: int = 0
    output_path: Optional[Path] = None
    output_size: Optional[int] = None
    group_counts: Dict[str, int] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def failed(self) -> int:
        return self.total - self.succeeded - self.skipped

    @property
    def ok(self) -> bool:
        return self.error is None and self.total > 0 and self.failed == 0
