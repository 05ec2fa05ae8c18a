"""Request path to documentation URL resolution.

Key Responsibilities:
    - Decode the inbound path and detect the landing page
    - Split ``/<major>/<fragment>`` and validate both segments
    - Apply the per-major exception table and compose the target URL
    - Convert every failure into a :class:`ValidationError` outcome

Collaborators:
    - Upstream: gateway service, serverless action, CLI
    - Downstream: :mod:`.rules`, :mod:`.fragment`, :mod:`.messages`

Side Effects:
    - None; no I/O and no logging

Thread Safety:
    - Thread-safe: resolvers hold only immutable configuration

Example:
    >>> PathResolver().resolve("/13/wall").target
    'https://releases.llvm.org/13.0.0/tools/clang/docs/DiagnosticsReference.html#wall'
"""

from __future__ import annotations

import re
from urllib.parse import unquote

from .fragment import SegmentError, normalize_fragment, validate_fragment, validate_version
from .messages import MessageCatalog
from .models import (
    ErrorKind,
    Home,
    ParsedSegments,
    Redirect,
    ResolveOutcome,
    ValidationError,
)
from .rules import DEFAULT_VERSION_RULES, VersionRuleTable

# ==============================================================================
# CONSTANTS
# ==============================================================================

DEFAULT_TARGET_TEMPLATE = (
    "https://releases.llvm.org/{major}.{minor}.{patch}"
    "/tools/clang/docs/DiagnosticsReference.html#{fragment}"
)

HOME_PATHS = frozenset({"/", "/index.html"})

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_QUERY_OR_ANCHOR = re.compile(r"[?#]")


class MalformedPathError(ValueError):
    """The raw path cannot be decoded as a URL path."""


# ==============================================================================
# PARSING
# ==============================================================================


def decode_path(path: str) -> str:
    """Return the percent-decoded path component of ``path``.

    Raises:
        MalformedPathError: invalid UTF-8, control characters or a broken
            percent escape.
    """
    try:
        path.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise MalformedPathError("path contains invalid UTF-8 characters") from exc
    if _CONTROL_CHARS.search(path):
        raise MalformedPathError("path contains control characters")

    raw = _QUERY_OR_ANCHOR.split(path, maxsplit=1)[0]
    if _INVALID_ESCAPE.search(raw):
        raise MalformedPathError("path contains an invalid percent escape")
    try:
        decoded = unquote(raw, errors="strict")
    except UnicodeDecodeError as exc:
        raise MalformedPathError("path decodes to invalid UTF-8") from exc

    if decoded and not decoded.startswith("/"):
        decoded = "/" + decoded
    return decoded


def _printable(value: str) -> str:
    value = value.encode("utf-8", "backslashreplace").decode("utf-8")
    return _CONTROL_CHARS.sub(lambda match: f"\\x{ord(match.group()):02x}", value)


# ==============================================================================
# RESOLVER
# ==============================================================================


class PathResolver:
    """Pure resolver from request paths to documentation URLs."""

    def __init__(
        self,
        rules: VersionRuleTable | None = None,
        messages: MessageCatalog | None = None,
        target_template: str = DEFAULT_TARGET_TEMPLATE,
    ) -> None:
        self.rules = rules if rules is not None else VersionRuleTable(DEFAULT_VERSION_RULES)
        self.messages = messages if messages is not None else MessageCatalog()
        self.target_template = target_template

    def parse_path(self, path: str) -> ParsedSegments | Home | ValidationError:
        """Decode ``path`` and split it into version and fragment candidates."""
        try:
            decoded = decode_path(path)
        except MalformedPathError:
            return self._error(ErrorKind.MALFORMED_INPUT, path=_printable(path))

        if decoded in HOME_PATHS:
            return Home(path=decoded)

        # 0 is empty because the path begins with "/", 1 is the version and
        # 2 is the fragment, which keeps any further "/" characters
        parts = decoded.split("/", 2)
        if len(parts) < 3:
            version = parts[1] if len(parts) > 1 else ""
            return self._error(ErrorKind.INSUFFICIENT_PARTS, path=decoded, version=version)
        return ParsedSegments(version=parts[1], fragment=parts[2])

    def resolve(self, path: str) -> ResolveOutcome:
        """Resolve ``path`` into a redirect, the home page or a validation error."""
        parsed = self.parse_path(path)
        if not isinstance(parsed, ParsedSegments):
            return parsed

        try:
            major = validate_version(parsed.version)
        except SegmentError:
            return self._error(
                ErrorKind.INVALID_VERSION,
                path=path,
                version=parsed.version,
                fragment=parsed.fragment,
            )

        fragment = normalize_fragment(parsed.fragment)
        try:
            validate_fragment(fragment)
        except SegmentError:
            return self._error(
                ErrorKind.INVALID_FRAGMENT,
                path=path,
                version=parsed.version,
                fragment=fragment,
            )

        spec = self.rules.spec_for(major)
        target = self.target_template.format(
            major=spec.major,
            minor=spec.minor,
            patch=spec.patch,
            version=spec,
            fragment=fragment,
        )
        return Redirect(target=target, version=spec, fragment=fragment)

    def _error(
        self,
        kind: ErrorKind,
        *,
        path: str,
        version: str = "",
        fragment: str = "",
    ) -> ValidationError:
        message = self.messages.render(kind, version=version, fragment=fragment, path=path)
        return ValidationError(
            kind=kind,
            message=message,
            path=path,
            version=version,
            fragment=fragment,
        )


__all__ = [
    "DEFAULT_TARGET_TEMPLATE",
    "HOME_PATHS",
    "MalformedPathError",
    "PathResolver",
    "decode_path",
]
