"""Pure resolution of ``/<major>/<fragment>`` paths into documentation URLs."""

from __future__ import annotations

from .fragment import (
    MAX_FRAGMENT_LENGTH,
    MAX_VERSION_LENGTH,
    normalize_fragment,
    validate_fragment,
    validate_version,
)
from .messages import MessageCatalog
from .models import (
    ErrorKind,
    Home,
    ParsedSegments,
    Redirect,
    ResolveOutcome,
    ValidationError,
    VersionSpec,
)
from .resolver import DEFAULT_TARGET_TEMPLATE, HOME_PATHS, PathResolver, decode_path
from .rules import DEFAULT_VERSION_RULES, VersionRule, VersionRuleTable

__all__ = [
    "DEFAULT_TARGET_TEMPLATE",
    "DEFAULT_VERSION_RULES",
    "HOME_PATHS",
    "MAX_FRAGMENT_LENGTH",
    "MAX_VERSION_LENGTH",
    "ErrorKind",
    "Home",
    "MessageCatalog",
    "ParsedSegments",
    "PathResolver",
    "Redirect",
    "ResolveOutcome",
    "ValidationError",
    "VersionRule",
    "VersionRuleTable",
    "VersionSpec",
    "decode_path",
    "normalize_fragment",
    "validate_fragment",
    "validate_version",
]
