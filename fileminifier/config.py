"""Configuration loading for fileminifier (.fileminifier.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from .rules import RuleSet, get_rule_set

CONFIG_FILENAME = ".fileminifier.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class RuleOverride:
    """Replacement pattern lists for a built-in framework rule set."""

    include: Optional[List[str]] = None
    exclude: Optional[List[str]] = None
    content_cleanup: Optional[List[str]] = None
    groups: Optional[List[Tuple[str, str]]] = None


@dataclass
class MinifyConfig:
    """Represents the settings defined in .fileminifier.yml."""

    root: Path
    exclude_paths: List[str] = field(default_factory=list)
    output: Optional[Path] = None
    log_file: Optional[Path] = None
    rules: Dict[str, RuleOverride] = field(default_factory=dict)

    def rule_set(self, name: str) -> RuleSet:
        """Return the built-in rule set ``name`` with any configured overrides applied."""
        base = get_rule_set(name)
        override = self.rules.get(base.name)
        if override is None:
            return base
        return base.with_overrides(
            include=override.include,
            exclude=override.exclude,
            content_cleanup=override.content_cleanup,
            groups=override.groups,
        )


def load_config(config_path: Path) -> MinifyConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return MinifyConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    output_str = _as_str(data.get("output"))
    log_file_str = _as_str(data.get("log_file"))

    rules: Dict[str, RuleOverride] = {}
    for name, raw in _as_dict(data.get("rules")).items():
        rule_data = _as_dict(raw)
        if not rule_data:
            continue
        rules[str(name).lower()] = RuleOverride(
            include=_optional_str_list(rule_data, "include"),
            exclude=_optional_str_list(rule_data, "exclude"),
            content_cleanup=_optional_str_list(rule_data, "content_cleanup"),
            groups=_as_groups(rule_data.get("groups")),
        )

    return MinifyConfig(
        root=root,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        output=root / output_str if output_str else None,
        log_file=root / log_file_str if log_file_str else None,
        rules=rules,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


def _optional_str_list(data: Dict[str, Any], key: str) -> Optional[List[str]]:
    if key not in data:
        return None
    return _as_str_list(data.get(key))


def _as_groups(value: Any) -> Optional[List[Tuple[str, str]]]:
    if value is None:
        return None
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise ConfigError("groups must be a list of {name, pattern} mappings")
    groups: List[Tuple[str, str]] = []
    for item in value:
        entry = _as_dict(item)
        name = _as_str(entry.get("name"))
        pattern = _as_str(entry.get("pattern"))
        if not name or not pattern:
            raise ConfigError("each group needs a name and a pattern")
        groups.append((name, pattern))
    return groups


__all__ = ["CONFIG_FILENAME", "ConfigError", "MinifyConfig", "RuleOverride", "load_config"]
