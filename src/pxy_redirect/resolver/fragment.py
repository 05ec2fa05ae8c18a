"""Sanitisation and validation of the version and fragment segments."""

from __future__ import annotations

import re

MAX_VERSION_LENGTH = 100
MAX_FRAGMENT_LENGTH = 50

_FRAGMENT_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")
_VERSION_PATTERN = re.compile(r"[0-9]+")
_DASH_RUN = re.compile(r"-{2,}")


class SegmentError(ValueError):
    """A path segment failed validation."""


class VersionError(SegmentError):
    """The version segment is not a usable major version."""


class FragmentError(SegmentError):
    """The fragment segment cannot be used as a documentation anchor."""


def normalize_fragment(raw: str) -> str:
    """Rewrite a compiler flag spelling into the upstream anchor spelling.

    The flag ``-Wc++98-c++11-compat-binary-literal`` has the anchor
    ``wc-98-c-11-compat-binary-literal``: every ``+`` becomes ``-`` and runs
    of dashes collapse into one.
    """
    return _DASH_RUN.sub("-", raw.replace("+", "-"))


def validate_fragment(fragment: str) -> str:
    if not fragment:
        raise FragmentError("fragment cannot be empty")
    if len(fragment) > MAX_FRAGMENT_LENGTH:
        raise FragmentError(
            f"fragment exceeds maximum length of {MAX_FRAGMENT_LENGTH} characters"
        )
    if not _FRAGMENT_PATTERN.fullmatch(fragment):
        raise FragmentError(
            "fragment contains invalid characters - only alphanumeric, hyphens, "
            "and underscores are allowed"
        )
    return fragment


def validate_version(raw: str) -> int:
    """Return the major version encoded by ``raw``."""
    if not raw:
        raise VersionError("version cannot be empty")
    if len(raw) > MAX_VERSION_LENGTH:
        raise VersionError(f"version exceeds maximum length of {MAX_VERSION_LENGTH} characters")
    # str.isdigit and int() also accept non-ASCII digits and underscores
    if not _VERSION_PATTERN.fullmatch(raw):
        raise VersionError("version must be a non-negative base-10 integer")
    return int(raw, 10)


__all__ = [
    "MAX_FRAGMENT_LENGTH",
    "MAX_VERSION_LENGTH",
    "FragmentError",
    "SegmentError",
    "VersionError",
    "normalize_fragment",
    "validate_fragment",
    "validate_version",
]
