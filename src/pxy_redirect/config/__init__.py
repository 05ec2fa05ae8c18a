"""Lightweight configuration package exports."""

from __future__ import annotations

from .rules import build_rule_table, load_rule_settings
from .settings import (
    ENVIRONMENT_DEFAULTS,
    AppSettings,
    Environment,
    HeartbeatSettings,
    LoggingSettings,
    MetricsSettings,
    ObservabilitySettings,
    RedirectSettings,
    VersionRuleSettings,
    get_settings,
    load_settings,
)

__all__ = [
    "ENVIRONMENT_DEFAULTS",
    "AppSettings",
    "Environment",
    "HeartbeatSettings",
    "LoggingSettings",
    "MetricsSettings",
    "ObservabilitySettings",
    "RedirectSettings",
    "VersionRuleSettings",
    "build_rule_table",
    "get_settings",
    "load_rule_settings",
]
