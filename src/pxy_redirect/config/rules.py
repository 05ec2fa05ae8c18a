"""Loading of the per-major exception table from settings or YAML."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

import yaml
from pydantic import TypeAdapter, ValidationError

from ..resolver.rules import VersionRule, VersionRuleTable
from .settings import RedirectSettings, VersionRuleSettings

_RULE_LIST = TypeAdapter(list[VersionRuleSettings])


def load_rule_settings(path: str | Path) -> list[VersionRuleSettings]:
    """Read rules from a YAML document.

    The document is either a list of rule mappings or a mapping with a
    ``rules`` key holding that list::

        rules:
          - {max_major: 16}
          - {min_major: 17, max_major: 17, patch: 1}
          - {min_major: 18, minor: 1}
    """
    target = Path(path)
    payload = yaml.safe_load(target.read_text(encoding="utf-8")) or []
    if isinstance(payload, Mapping):
        payload = payload.get("rules", [])
    if not isinstance(payload, list):
        raise ValueError(f"Invalid version rule structure in {target}")
    try:
        return _RULE_LIST.validate_python(payload)
    except ValidationError as err:
        raise ValueError(f"Invalid version rule in {target}: {err}") from err


def to_rules(rows: Iterable[VersionRuleSettings]) -> list[VersionRule]:
    return [
        VersionRule.between(row.min_major, row.max_major, minor=row.minor, patch=row.patch)
        for row in rows
    ]


def build_rule_table(settings: RedirectSettings) -> VersionRuleTable:
    """Return the rule table configured by ``settings``."""
    rows = settings.version_rules
    if settings.rules_path is not None:
        rows = load_rule_settings(settings.rules_path)
    return VersionRuleTable(to_rules(rows))


__all__ = ["build_rule_table", "load_rule_settings", "to_rules"]
