"""Forecourt ruleset files.

Rulesets are YAML documents under ``forecourt_fit/rulesets``; the first
comment line of each file doubles as its description. A request may carry
an override dict that is merge-patched onto the named ruleset before the
result is validated.
"""

import logging
import re
from functools import lru_cache
from pathlib import Path

import yaml

from ..models.rules import RuleSet

logger = logging.getLogger(__name__)

# Shipped as package data so installed wheels can find them
RULESETS_DIR = Path(__file__).parent.parent / "rulesets"
_RULESET_NAME = re.compile(r"[A-Za-z0-9_-]+")


def get_ruleset_path(name: str = "default") -> Path:
    """Resolve a ruleset name to its YAML file.

    Raises:
        FileNotFoundError: If the name is not a plain file stem or no
            ``<name>.yaml`` exists in RULESETS_DIR
    """
    if not _RULESET_NAME.fullmatch(name):
        raise FileNotFoundError(f"Ruleset '{name}' not found: names are letters, digits, _ and -")
    path = RULESETS_DIR / f"{name}.yaml"
    if not path.is_file():
        raise FileNotFoundError(f"Ruleset '{name}' not found at {path}")
    return path


def _describe(path: Path) -> str:
    header = path.read_text().splitlines()[:1]
    if header and header[0].startswith("#"):
        return header[0].lstrip("# ").strip()
    return f"Forecourt rules from {path.name}"


def list_rulesets() -> list[dict[str, str]]:
    """Name and description of every shipped ruleset, sorted by name."""
    if not RULESETS_DIR.is_dir():
        logger.warning(f"No rulesets directory at {RULESETS_DIR}")
        return []

    return [
        {"name": path.stem, "description": _describe(path)}
        for path in sorted(RULESETS_DIR.glob("*.yaml"))
    ]


def load_ruleset(
    name: str = "default",
    override: dict | None = None,
) -> RuleSet:
    """Read a ruleset and apply request-level overrides.

    Args:
        name: Ruleset name, without the .yaml suffix
        override: Nested partial rule dict, e.g. ``{"mpds": {"min_to_sales_building": 6}}``

    Returns:
        Validated RuleSet

    Raises:
        FileNotFoundError: Unknown ruleset name
        yaml.YAMLError: Malformed YAML
        pydantic.ValidationError: Values outside their allowed ranges
    """
    rules = RuleSet.from_yaml(get_ruleset_path(name).read_text())
    if not override:
        return rules

    logger.debug(f"Overriding ruleset '{name}' keys: {sorted(override)}")
    return rules.merge_override(override)


@lru_cache(maxsize=1)
def get_default_ruleset() -> RuleSet:
    """The default ruleset, read once and shared by every request."""
    rules = load_ruleset("default")
    logger.info(f"Default forecourt ruleset loaded from {RULESETS_DIR}")
    return rules


def validate_ruleset_yaml(yaml_content: str) -> tuple[bool, str | None]:
    """Check whether YAML text parses into a valid RuleSet.

    Returns:
        (True, None) when valid, otherwise (False, error message)
    """
    try:
        RuleSet.from_yaml(yaml_content)
    except (yaml.YAMLError, ValueError, TypeError) as e:
        return False, str(e)
    return True, None
