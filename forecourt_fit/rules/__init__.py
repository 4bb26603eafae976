"""Rules loading and management."""

from .loader import (
    get_default_ruleset,
    get_ruleset_path,
    list_rulesets,
    load_ruleset,
    validate_ruleset_yaml,
)

__all__ = [
    "load_ruleset",
    "list_rulesets",
    "get_ruleset_path",
    "get_default_ruleset",
    "validate_ruleset_yaml",
]
