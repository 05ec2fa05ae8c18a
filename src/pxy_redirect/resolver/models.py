"""Value objects produced by the path resolver.

Every outcome of :meth:`PathResolver.resolve` is one of the frozen variants
defined here. None of them is mutated after construction and none carries
state across calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ==============================================================================
# ERROR TAXONOMY
# ==============================================================================


class ErrorKind(str, Enum):
    """Reasons a request path cannot be turned into a redirect."""

    MALFORMED_INPUT = "malformed_input"
    INSUFFICIENT_PARTS = "insufficient_parts"
    INVALID_VERSION = "invalid_version"
    INVALID_FRAGMENT = "invalid_fragment"

    @property
    def status(self) -> int:
        """HTTP status code reported for this kind of failure."""
        if self is ErrorKind.MALFORMED_INPUT:
            return 500
        return 400


# ==============================================================================
# PARSED VALUES
# ==============================================================================


@dataclass(frozen=True, slots=True)
class ParsedSegments:
    """Version and fragment candidates taken from a request path."""

    version: str
    fragment: str


@dataclass(frozen=True, slots=True)
class VersionSpec:
    """Documentation release number for a major version."""

    major: int
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


# ==============================================================================
# OUTCOMES
# ==============================================================================


@dataclass(frozen=True, slots=True)
class Redirect:
    """Successful resolution to an external documentation anchor."""

    target: str
    version: VersionSpec
    fragment: str


@dataclass(frozen=True, slots=True)
class Home:
    """The path addresses the informational landing page."""

    path: str


@dataclass(frozen=True, slots=True)
class ValidationError:
    """Structured resolution failure with an HTML-safe explanation."""

    kind: ErrorKind
    message: str
    path: str
    version: str = ""
    fragment: str = ""

    @property
    def status(self) -> int:
        return self.kind.status


ResolveOutcome = Redirect | Home | ValidationError


__all__ = [
    "ErrorKind",
    "Home",
    "ParsedSegments",
    "Redirect",
    "ResolveOutcome",
    "ValidationError",
    "VersionSpec",
]
