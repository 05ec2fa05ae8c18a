"""Configuration system for the redirect service."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, Field, SecretStr, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..resolver.messages import (
    DEFAULT_DOCUMENTATION_URL,
    DEFAULT_EXAMPLE_PATH,
    DEFAULT_PUBLIC_BASE_URL,
)
from ..resolver.resolver import DEFAULT_TARGET_TEMPLATE

logger = structlog.get_logger(__name__)

REDIRECT_STATUSES = frozenset({301, 302, 307, 308})


class Environment(str, Enum):
    """Deployment environments supported by the service."""

    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class LoggingSettings(BaseModel):
    """Structured logging configuration."""

    level: str = Field(default="INFO", description="Log level for application output")
    request_id_header: str = Field(
        default="X-Request-ID", description="Header carrying the inbound request identifier"
    )
    scrub_fields: Sequence[str] = Field(
        default_factory=lambda: ["password", "token", "secret", "authorization"],
        description="Fields that should be redacted in logs",
    )


class MetricsSettings(BaseModel):
    """Prometheus metrics configuration."""

    enabled: bool = True
    path: str = Field(default="/metrics", description="HTTP path for Prometheus metrics")


class ObservabilitySettings(BaseModel):
    """Aggregate observability configuration."""

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    metrics: MetricsSettings = Field(default_factory=MetricsSettings)


class HeartbeatSettings(BaseModel):
    """Outbound liveness ping to an uptime monitoring service."""

    target: str = Field(default="", description="Base URL the token is appended to")
    token: SecretStr | None = Field(default=None, description="Monitor token; disabled when unset")
    timeout_seconds: float = Field(default=10.0, gt=0, description="HTTP timeout for the ping")

    @property
    def enabled(self) -> bool:
        return bool(self.token and self.token.get_secret_value())

    def url(self) -> str:
        token = self.token.get_secret_value() if self.token else ""
        return f"{self.target}{token}"


class VersionRuleSettings(BaseModel):
    """One row of the per-major exception table."""

    min_major: int | None = Field(default=None, ge=0)
    max_major: int | None = Field(default=None, ge=0)
    minor: int = Field(default=0, ge=0)
    patch: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> VersionRuleSettings:
        if (
            self.min_major is not None
            and self.max_major is not None
            and self.min_major > self.max_major
        ):
            raise ValueError("min_major must not exceed max_major")
        return self


def _default_version_rules() -> list[VersionRuleSettings]:
    return [
        VersionRuleSettings(max_major=16),
        VersionRuleSettings(min_major=17, max_major=17, patch=1),
        VersionRuleSettings(min_major=18, minor=1),
    ]


class RedirectSettings(BaseModel):
    """Target composition and error page details."""

    target_template: str = Field(default=DEFAULT_TARGET_TEMPLATE)
    status_code: int = Field(default=308, description="Status used for successful redirects")
    public_base_url: str = Field(default=DEFAULT_PUBLIC_BASE_URL)
    documentation_url: str = Field(default=DEFAULT_DOCUMENTATION_URL)
    example_path: str = Field(default=DEFAULT_EXAMPLE_PATH)
    version_rules: list[VersionRuleSettings] = Field(default_factory=_default_version_rules)
    rules_path: Path | None = Field(
        default=None, description="Optional YAML file replacing ``version_rules``"
    )

    @field_validator("status_code")
    @classmethod
    def _check_status(cls, value: int) -> int:
        if value not in REDIRECT_STATUSES:
            raise ValueError(f"status_code must be one of {sorted(REDIRECT_STATUSES)}")
        return value

    @model_validator(mode="after")
    def _check_template(self) -> RedirectSettings:
        try:
            self.target_template.format(
                major=0, minor=0, patch=0, version="0.0.0", fragment="probe"
            )
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(f"invalid target_template: {exc}") from exc
        return self


class AppSettings(BaseSettings):
    """Top-level application settings."""

    environment: Environment = Environment.DEV
    debug: bool = False
    service_name: str = "pxy-redirect"
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)
    heartbeat: HeartbeatSettings = Field(default_factory=HeartbeatSettings)
    redirect: RedirectSettings = Field(default_factory=RedirectSettings)

    model_config = SettingsConfigDict(env_prefix="PXY_", env_nested_delimiter="__")


ENVIRONMENT_DEFAULTS: Mapping[Environment, dict[str, Any]] = {
    Environment.DEV: {
        "debug": True,
        "observability": {"logging": {"level": "DEBUG"}},
    },
    Environment.STAGING: {
        "observability": {"logging": {"level": "INFO"}},
    },
    Environment.PROD: {
        "observability": {"logging": {"level": "INFO"}},
    },
}


def _deep_update(target: dict[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    for key, value in updates.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            target[key] = _deep_update(dict(current), value)
        else:
            target[key] = value
    return target


def legacy_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Translate the variables understood by the original function deployment."""
    overrides: dict[str, Any] = {}
    level = environ.get("LOG_LEVEL", "")
    if level:
        overrides["observability"] = {"logging": {"level": level.upper()}}

    heartbeat: dict[str, Any] = {}
    if environ.get("HEARTBEAT_TARGET"):
        heartbeat["target"] = environ["HEARTBEAT_TARGET"]
    if environ.get("HEARTBEAT_TOKEN"):
        heartbeat["token"] = environ["HEARTBEAT_TOKEN"]
    raw_timeout = environ.get("HEARTBEAT_TARGET_TIMEOUT", "")
    if raw_timeout:
        try:
            timeout = int(raw_timeout)
        except ValueError:
            timeout = 0
        if timeout > 0:
            heartbeat["timeout_seconds"] = timeout
        else:
            logger.warning(
                "settings.heartbeat.invalid_timeout",
                value=raw_timeout,
                default=HeartbeatSettings().timeout_seconds,
            )
    if heartbeat:
        overrides["heartbeat"] = heartbeat
    return overrides


def load_settings(environment: str | None = None) -> AppSettings:
    """Load application settings with environment specific defaults applied.

    Precedence, lowest first: field defaults, environment presets, ``PXY_*``
    variables, legacy function variables.
    """
    env_value = (environment or os.getenv("PXY_ENV", "dev")).lower()
    try:
        env = Environment(env_value)
        base_settings = AppSettings()
    except ValueError as err:
        raise RuntimeError(f"Invalid configuration: {err}") from err

    merged = _deep_update({}, ENVIRONMENT_DEFAULTS.get(env, {}))
    merged = _deep_update(merged, base_settings.model_dump(exclude_unset=True))
    merged = _deep_update(merged, legacy_overrides(os.environ))
    merged["environment"] = env
    try:
        return AppSettings.model_validate(merged)
    except ValidationError as err:
        raise RuntimeError(f"Invalid configuration: {err}") from err


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Cached accessor used by production code."""
    return load_settings()
