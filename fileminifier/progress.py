"""Progress reporting collaborators injected into the orchestrator."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import TextIO


class ProgressReporter(ABC):
    """Receives file-level progress from a minification run."""

    @abstractmethod
    def start(self, total: int) -> None:
        """Reset counters for a run over ``total`` files."""

    @abstractmethod
    def advance(self, label: str = "") -> None:
        """Record that one more file has been handled."""

    def finish(self) -> None:
        """Called once after the last file."""


class NullProgress(ProgressReporter):
    """Counts progress without drawing anything."""

    def __init__(self) -> None:
        self.total = 0
        self.processed = 0

    def start(self, total: int) -> None:
        self.total = total
        self.processed = 0

    def advance(self, label: str = "") -> None:
        self.processed += 1


class ConsoleProgress(NullProgress):
    """Redraws a single-line progress bar on a terminal stream."""

    def __init__(self, stream: TextIO | None = None, width: int = 50) -> None:
        super().__init__()
        self.stream = stream or sys.stdout
        self.width = width

    def advance(self, label: str = "") -> None:
        super().advance(label)
        self._draw(label)

    def finish(self) -> None:
        if self.total and self.processed < self.total:
            self.stream.write("\n")
            self.stream.flush()

    def _draw(self, label: str) -> None:
        if self.total == 0:
            return
        percentage = min(self.processed / self.total, 1.0) * 100
        filled = round(percentage * self.width / 100)
        bar = "█" * filled + "░" * (self.width - filled)
        self.stream.write(
            f"\rProgress: [{bar}] {percentage:.1f}% ({self.processed}/{self.total}) {label}"
        )
        if self.processed >= self.total:
            self.stream.write("\n")
        self.stream.flush()


def format_bytes(size: int) -> str:
    """Return ``size`` as a short human readable string (B, KB or MB)."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{_trim(size / 1024)} KB"
    return f"{_trim(size / (1024 * 1024))} MB"


def _trim(value: float) -> str:
    return f"{round(value, 2):.2f}".rstrip("0").rstrip(".")


__all__ = ["ConsoleProgress", "NullProgress", "ProgressReporter", "format_bytes"]
