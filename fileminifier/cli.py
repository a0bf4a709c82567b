"""CLI entrypoints for fileminifier commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, MinifyConfig, load_config
from .logging import configure_logging
from .models import RunSummary
from .orchestrator import Orchestrator
from .progress import ConsoleProgress, NullProgress, format_bytes
from .rules import RULE_SETS


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fileminifier",
        description="Minify PHP, SQL, JavaScript, CSS and Vue files by stripping comments and whitespace.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    minify_parser = subparsers.add_parser(
        "minify",
        help="Minify a file or every supported file under a directory.",
    )
    _add_verbose_option(minify_parser, suppress_default=True)
    minify_parser.add_argument(
        "source",
        help="File or directory to minify.",
    )
    minify_parser.add_argument(
        "-c",
        "--combine",
        action="store_true",
        help="Combine all minified files into a single output file.",
    )
    minify_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output directory (or output file when combining).",
    )
    framework_group = minify_parser.add_mutually_exclusive_group()
    framework_group.add_argument(
        "-l",
        "--laravel",
        dest="framework",
        action="store_const",
        const="laravel",
        help="Apply the Laravel selection rules (only .php files are considered).",
    )
    framework_group.add_argument(
        "--framework",
        dest="framework",
        choices=sorted(RULE_SETS),
        help="Apply the named framework selection rules.",
    )
    minify_parser.add_argument(
        "--config",
        default=None,
        help="Path to a .fileminifier.yml file (defaults to the one beside the source).",
    )
    minify_parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not draw the progress bar.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing minification endpoints.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Interface to bind (defaults to 127.0.0.1).",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to listen on (defaults to 8000).",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for fileminifier commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "minify":
        source = Path(args.source).expanduser()
        try:
            config = _load_config(source, args.config)
        except ConfigError as exc:
            parser.exit(1, f"fileminifier: {exc}\n")

        configure_logging(verbose=bool(args.verbose), log_file=config.log_file)
        progress = NullProgress() if args.no_progress else ConsoleProgress()
        orchestrator = Orchestrator(progress=progress, config=config)
        summary = orchestrator.process(
            source,
            args.output,
            combine=bool(args.combine),
            framework=args.framework,
        )
        if summary.error is not None and summary.total == 0:
            parser.exit(1, f"{summary.error}\n")
        _print_summary(summary, combine=bool(args.combine), framework=args.framework)
        if not summary.ok:
            parser.exit(1, f"{summary.error or 'Some files could not be minified.'}\n")
    elif args.command == "serve":
        configure_logging(verbose=bool(args.verbose))
        from .service.app import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _load_config(source: Path, config_path: str | None) -> MinifyConfig:
    if config_path is not None:
        return load_config(Path(config_path))
    return load_config(source if source.is_dir() else source.parent)


def _print_summary(summary: RunSummary, *, combine: bool, framework: str | None) -> None:
    if framework:
        title = f"{framework.capitalize()} {'Combination' if combine else 'Minification'} Summary:"
    else:
        title = "Combination Summary:" if combine else "Minification Summary:"
    action = "combined" if combine else "minified"

    print()
    print(title)
    print(f"Total files found: {summary.total}")
    print(f"Successfully {action}: {summary.succeeded}")
    if framework:
        print(f"Skipped (excluded): {summary.skipped}")
    print(f"Failed: {summary.failed}")
    print(f"Total space saved: {format_bytes(summary.bytes_saved)}")
    if combine and summary.output_size is not None:
        print(f"Combined file size: {format_bytes(summary.output_size)}")
    if summary.output_path is not None:
        label = "Output directory" if summary.output_path.is_dir() else "Output file"
        print(f"{label}: {_relativize(summary.output_path)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
