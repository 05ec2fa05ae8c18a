"""Per-major exception table for documentation release numbers.

Upstream does not publish every major as ``<major>.0.0``: 17 shipped its
documentation as 17.0.1 and from 18 onwards the docs live under ``<major>.1.0``.
The table below captures these quirks as ordered rules so that new majors only
need a new row.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from .models import VersionSpec

Predicate = Callable[[int], bool]


@dataclass(frozen=True, slots=True)
class VersionRule:
    """Maps the majors accepted by ``predicate`` to a minor and patch level."""

    predicate: Predicate
    minor: int = 0
    patch: int = 0
    description: str = ""

    def matches(self, major: int) -> bool:
        return self.predicate(major)

    @classmethod
    def between(
        cls,
        min_major: int | None = None,
        max_major: int | None = None,
        *,
        minor: int = 0,
        patch: int = 0,
    ) -> VersionRule:
        """Build a rule for an inclusive major range, open on a missing bound."""

        def predicate(major: int) -> bool:
            if min_major is not None and major < min_major:
                return False
            if max_major is not None and major > max_major:
                return False
            return True

        return cls(
            predicate=predicate,
            minor=minor,
            patch=patch,
            description=_describe(min_major, max_major),
        )


def _describe(min_major: int | None, max_major: int | None) -> str:
    if min_major is None and max_major is None:
        return "any"
    if min_major is None:
        return f"<= {max_major}"
    if max_major is None:
        return f">= {min_major}"
    if min_major == max_major:
        return f"== {min_major}"
    return f"{min_major}..{max_major}"


# HACK: 17.0.0 was replaced by 17.0.1 and 18.0.0 was released as 18.1.0.
# Upstream has published minor-level docs since then (19, 20, 21, ...).
DEFAULT_VERSION_RULES: tuple[VersionRule, ...] = (
    VersionRule.between(max_major=16),
    VersionRule.between(17, 17, patch=1),
    VersionRule.between(min_major=18, minor=1),
)


class VersionRuleTable:
    """Ordered rule list evaluated top to bottom; the first match wins."""

    def __init__(self, rules: Iterable[VersionRule] = DEFAULT_VERSION_RULES) -> None:
        self._rules = tuple(rules)

    def __iter__(self) -> Iterator[VersionRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def spec_for(self, major: int) -> VersionSpec:
        for rule in self._rules:
            if rule.matches(major):
                return VersionSpec(major=major, minor=rule.minor, patch=rule.patch)
        return VersionSpec(major=major)


__all__ = ["DEFAULT_VERSION_RULES", "Predicate", "VersionRule", "VersionRuleTable"]
