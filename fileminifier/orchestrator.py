"""Run orchestration for single-file, directory, combined and framework flows."""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import List, Optional, Tuple

from .combine import combine, combine_by_kind, render_header
from .config import MinifyConfig, load_config
from .failsafe import safe_minify
from .kinds import SUPPORTED_SUFFIXES, detect_kind
from .logging import get_logger
from .models import FileKind, FileResult, RunSummary, SourceFile
from .progress import NullProgress, ProgressReporter
from .rules import RuleSet, evaluate
from .scanner import SourceScanner

_OUTPUT_DIRNAME = "minified"
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def _decode(data: bytes) -> str:
    return data.decode(_ENCODING, _ERRORS)


def _encode(text: str) -> bytes:
    return text.encode(_ENCODING, _ERRORS)


class Orchestrator:
    """Coordinates scanning, selection, minification and output writing."""

    def __init__(
        self,
        scanner: SourceScanner | None = None,
        progress: ProgressReporter | None = None,
        config: MinifyConfig | None = None,
    ) -> None:
        self._scanner = scanner
        self.progress = progress or NullProgress()
        self._config = config
        self.logger = get_logger("orchestrator")

    def process(
        self,
        source: str | Path,
        output: str | Path | None = None,
        *,
        combine: bool = False,
        framework: str | None = None,
    ) -> RunSummary:
        """Dispatch to the flow matching ``source`` and the requested options."""
        source_path = Path(source).expanduser()
        config = self._load_config(source_path)
        output_path = Path(output).expanduser() if output is not None else config.output

        if framework:
            rules = config.rule_set(framework)
            if combine:
                return self.process_framework_combined(source_path, output_path, rules=rules)
            return self.process_framework_directory(source_path, output_path, rules=rules)

        if source_path.is_dir():
            if combine:
                return self.process_directory_combined(source_path, output_path)
            return self.process_directory(source_path, output_path)

        return self.process_file(source_path, output_path)

    def process_file(self, source: Path, output: Path | None = None) -> RunSummary:
        """Minify one file into ``output`` (a directory), defaulting to ``<dir>/minified``."""
        source = Path(source).expanduser()
        if not source.is_file():
            return self._fail(f"Source file not found: {source}")

        kind = detect_kind(source)
        if kind is None:
            extension = source.suffix.lstrip(".") or "(none)"
            return self._fail(f"Unsupported file type: {extension}")

        output_dir = Path(output) if output is not None else source.parent / _OUTPUT_DIRNAME
        target = output_dir / source.name
        original = self._read(source)
        if original is None:
            return RunSummary(total=1, error=f"Failed to read source file: {source}")
        result = self._minify_to(original, kind, target, label=source.name)
        if result is None:
            return RunSummary(total=1, error=f"Failed to write minified file: {target}")

        self.logger.info(
            "Minified %s (%d -> %d bytes)", source.name, result.original_size, result.minified_size
        )
        return RunSummary(
            total=1,
            succeeded=1,
            bytes_saved=result.bytes_saved,
            output_path=target,
            output_size=result.minified_size,
        )

    def process_directory(self, source: Path, output: Path | None = None) -> RunSummary:
        """Minify every supported file, mirroring the tree under ``output``."""
        source = Path(source).expanduser()
        output_dir = self._default_output_dir(source, output)
        files, error = self._discover(source, skip_dirs=(output_dir,))
        if error:
            return self._fail(error)

        summary = RunSummary(total=len(files), output_path=output_dir)
        self.progress.start(summary.total)
        for file in files:
            original = self._read(file.path)
            result = None
            if original is not None:
                result = self._minify_to(
                    original, file.kind, output_dir / file.relative_path, label=file.relative_path
                )
            if result is not None:
                summary.succeeded += 1
                summary.bytes_saved += result.bytes_saved
            self.progress.advance(file.path.name)
        self.progress.finish()

        self.logger.info("Minified %d of %d files into %s", summary.succeeded, summary.total, output_dir)
        return summary

    def process_directory_combined(self, source: Path, output: Path | None = None) -> RunSummary:
        """Minify every supported file and concatenate them into one output file."""
        source = Path(source).expanduser()
        default_dir = self._default_output_dir(source, None)
        if output is not None:
            output_file = Path(output)
        else:
            output_file = default_dir / f"{source.resolve().name}.combined.min.js"
        files, error = self._discover(source, skip_dirs=(default_dir,), skip_files=(output_file,))
        if error:
            return self._fail(error)

        summary = RunSummary(total=len(files))
        entries: List[Tuple[str, FileKind, str]] = []
        self.progress.start(summary.total)
        for file in files:
            loaded = self._read(file.path)
            if loaded is not None:
                minified = safe_minify(file.kind, loaded, label=file.relative_path)
                entries.append((file.relative_path, file.kind, minified))
                summary.succeeded += 1
                summary.bytes_saved += len(_encode(loaded)) - len(_encode(minified))
            self.progress.advance(file.path.name)
        self.progress.finish()

        artifact = combine_by_kind(entries)
        summary.group_counts = artifact.group_counts
        return self._write_combined(summary, output_file, artifact.text)

    def process_framework_directory(
        self, source: Path, output: Path | None = None, *, rules: RuleSet
    ) -> RunSummary:
        """Minify the files a framework rule set keeps, mirroring the tree under ``output``."""
        source = Path(source).expanduser()
        output_dir = self._default_output_dir(source, output)
        files, error = self._discover(source, suffixes=rules.extensions, skip_dirs=(output_dir,))
        if error:
            return self._fail(error)

        summary = RunSummary(total=len(files), output_path=output_dir)
        self.progress.start(summary.total)
        for file in files:
            content = self._evaluate(file, rules)
            if content is None:
                summary.skipped += 1
            else:
                original, minified = content
                target = output_dir / file.relative_path
                if self._write(target, minified):
                    summary.succeeded += 1
                    summary.bytes_saved += len(_encode(original)) - len(_encode(minified))
            self.progress.advance(file.path.name)
        self.progress.finish()

        self.logger.info(
            "%s: kept %d, skipped %d of %d files",
            rules.name,
            summary.succeeded,
            summary.skipped,
            summary.total,
        )
        return summary

    def process_framework_combined(
        self, source: Path, output: Path | None = None, *, rules: RuleSet
    ) -> RunSummary:
        """Combine the files a framework rule set keeps, grouped in priority order."""
        source = Path(source).expanduser()
        default_dir = self._default_output_dir(source, None)
        if output is not None:
            output_file = Path(output)
        else:
            output_file = default_dir / rules.default_combined_name
        files, error = self._discover(
            source,
            suffixes=rules.extensions,
            skip_dirs=(default_dir,),
            skip_files=(output_file,),
        )
        if error:
            return self._fail(error)

        summary = RunSummary(total=len(files))
        entries: List[Tuple[str, str]] = []
        self.progress.start(summary.total)
        for file in files:
            content = self._evaluate(file, rules)
            if content is None:
                summary.skipped += 1
            else:
                original, minified = content
                entries.append((file.relative_path, minified))
                summary.succeeded += 1
                summary.bytes_saved += len(_encode(original)) - len(_encode(minified))
            self.progress.advance(file.path.name)
        self.progress.finish()

        artifact = combine(
            entries,
            rules.groups,
            header=render_header(rules),
            strip_prefix=rules.strip_prefix,
        )
        summary.group_counts = artifact.group_counts
        return self._write_combined(summary, output_file, artifact.text)

    def _load_config(self, source: Path) -> MinifyConfig:
        if self._config is not None:
            return self._config
        config_dir = source if source.is_dir() else source.parent
        self._config = load_config(config_dir)
        return self._config

    def _resolve_scanner(self) -> SourceScanner:
        if self._scanner is None:
            exclude_paths = self._config.exclude_paths if self._config is not None else []
            self._scanner = SourceScanner(exclude_paths=exclude_paths)
        return self._scanner

    def _discover(
        self,
        source: Path,
        *,
        suffixes: Tuple[str, ...] = SUPPORTED_SUFFIXES,
        skip_dirs: Tuple[Path, ...] = (),
        skip_files: Tuple[Path, ...] = (),
    ) -> Tuple[List[SourceFile], Optional[str]]:
        scanner = self._resolve_scanner()
        try:
            files = scanner.scan(source, suffixes=suffixes, skip_dirs=skip_dirs)
        except (FileNotFoundError, NotADirectoryError):
            return [], f"Source directory not found: {source}"

        # A combined output written inside the source tree is not an input.
        skipped = {path.resolve() for path in skip_files}
        files = [file for file in files if file.path.resolve() not in skipped]

        if not files:
            return [], "No supported files found in directory."
        self.logger.info("Found %d files to process in %s", len(files), source)
        return files, None

    def _evaluate(self, file: SourceFile, rules: RuleSet) -> Optional[Tuple[str, str]]:
        original = self._read(file.path)
        if original is None:
            return None
        transform = partial(safe_minify, rules.kind, label=file.relative_path)
        minified = evaluate(file.relative_path, original, rules, transform=transform)
        if minified is None:
            self.logger.debug("Skipped %s (not selected by %s rules)", file.relative_path, rules.name)
            return None
        return original, minified

    def _minify_to(
        self, original: str, kind: FileKind, target: Path, *, label: str
    ) -> FileResult | None:
        minified = safe_minify(kind, original, label=label)
        if not self._write(target, minified):
            return None
        return FileResult(
            relative_path=label,
            original_size=len(_encode(original)),
            minified_size=len(_encode(minified)),
            output_path=target,
        )

    def _read(self, path: Path) -> str | None:
        try:
            return _decode(path.read_bytes())
        except OSError as exc:
            self.logger.warning("Failed to read %s: %s", path, exc)
            return None

    def _write(self, target: Path, content: str) -> bool:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(_encode(content))
        except OSError as exc:
            self.logger.error("Failed to write %s: %s", target, exc)
            return False
        return True

    def _write_combined(self, summary: RunSummary, output_file: Path, text: str) -> RunSummary:
        if not self._write(output_file, text):
            summary.error = f"Failed to write combined file: {output_file}"
            return summary
        summary.output_path = output_file
        summary.output_size = output_file.stat().st_size
        self.logger.info("Combined %d files into %s", summary.succeeded, output_file)
        return summary

    @staticmethod
    def _default_output_dir(source: Path, output: Path | None) -> Path:
        if output is not None:
            return Path(output)
        return source.resolve().parent / _OUTPUT_DIRNAME

    def _fail(self, message: str) -> RunSummary:
        self.logger.error(message)
        return RunSummary(error=message)


__all__ = ["Orchestrator"]
