"""Framework-aware selection rules and the built-in rule set registry."""

from __future__ import annotations

import re
from typing import Dict

from ..models import FileKind
from .constants import (
    LARAVEL_CONTENT_CLEANUP,
    LARAVEL_EXCLUDE,
    LARAVEL_GROUPS,
    LARAVEL_INCLUDE,
    OTHER_GROUP,
)
from .selection import (
    GroupRule,
    RuleSet,
    clean_content,
    compile_groups,
    compile_patterns,
    evaluate,
    normalise_path,
    select,
)

LARAVEL_RULES = RuleSet(
    name="laravel",
    include=compile_patterns(LARAVEL_INCLUDE),
    exclude=compile_patterns(LARAVEL_EXCLUDE),
    content_cleanup=compile_patterns(LARAVEL_CONTENT_CLEANUP),
    groups=compile_groups(LARAVEL_GROUPS),
    kind=FileKind.GENERIC_SOURCE,
    extensions=(".php",),
    strip_prefix=re.compile(r"^<\?php\s*"),
    header_template="laravel_header.j2",
    default_combined_name="combined.laravel.php",
)

RULE_SETS: Dict[str, RuleSet] = {
    LARAVEL_RULES.name: LARAVEL_RULES,
}


def get_rule_set(name: str) -> RuleSet:
    """Return the registered rule set called ``name``."""
    try:
        return RULE_SETS[name.lower()]
    except KeyError as exc:
        known = ", ".join(sorted(RULE_SETS))
        raise ValueError(f"Unknown framework rule set '{name}' (available: {known})") from exc


__all__ = [
    "GroupRule",
    "LARAVEL_RULES",
    "OTHER_GROUP",
    "RULE_SETS",
    "RuleSet",
    "clean_content",
    "compile_groups",
    "compile_patterns",
    "evaluate",
    "get_rule_set",
    "normalise_path",
    "select",
]
