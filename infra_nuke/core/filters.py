"""
Inclusion Filters
=================

Predicates that decide whether a listed resource is a deletion candidate.

The selector only depends on :class:`InclusionFilter`. :class:`ResourceFilter`
is the default implementation used by the command line: name regexes and
an age window, nothing more.

Matching rules for :class:`ResourceFilter`
------------------------------------------
1. A name matching any ``exclude_names`` pattern is excluded.
2. If ``include_names`` is set, the name must match at least one pattern.
3. ``older_than``: created strictly before ``now - older_than``.
4. ``newer_than``: created strictly after ``now - newer_than``.

A resource without a display name never matches an include pattern. A
resource without a creation time is excluded whenever an age window is
set. Patterns use :func:`re.search`, so anchor them (``^drop``) for
prefix matches.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Pattern, Sequence

from infra_nuke.core.base_resource import ResourceDescriptor
from infra_nuke.core.exceptions import ConfigError


class InclusionFilter(ABC):
    """Decides whether a resource should be nuked."""

    @abstractmethod
    def should_include(self, descriptor: ResourceDescriptor) -> bool:
        """Return True if the resource is a deletion candidate."""


class IncludeAll(InclusionFilter):
    """Filter that selects every resource."""

    def should_include(self, descriptor: ResourceDescriptor) -> bool:
        return True


def _compile(patterns: Sequence[str]) -> List[Pattern[str]]:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise ConfigError(
                f"Invalid name pattern '{pattern}': {e}",
                details={"pattern": pattern},
            ) from e
    return compiled


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps from providers are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ResourceFilter(InclusionFilter):
    """
    Name and age based inclusion filter.

    Parameters
    ----------
    include_names : sequence of str, optional
        Regexes; when given, a name must match at least one.
    exclude_names : sequence of str, optional
        Regexes; a name matching any of them is excluded.
    older_than : timedelta, optional
        Only include resources older than this.
    newer_than : timedelta, optional
        Only include resources newer than this.
    clock : callable, optional
        Returns the current time; defaults to ``datetime.now(timezone.utc)``.

    Raises
    ------
    ConfigError
        If a pattern does not compile.

    Example
    -------
    >>> f = ResourceFilter(include_names=["^drop"], older_than=timedelta(days=1))
    >>> f.should_include(ResourceDescriptor("id-1", "drop-me", two_days_ago))
    True
    """

    def __init__(
        self,
        include_names: Optional[Sequence[str]] = None,
        exclude_names: Optional[Sequence[str]] = None,
        older_than: Optional[timedelta] = None,
        newer_than: Optional[timedelta] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.include_names = _compile(include_names or [])
        self.exclude_names = _compile(exclude_names or [])
        self.older_than = older_than
        self.newer_than = newer_than
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def has_age_window(self) -> bool:
        return self.older_than is not None or self.newer_than is not None

    def should_include(self, descriptor: ResourceDescriptor) -> bool:
        return self._matches_name(descriptor.display_name) and self._matches_age(
            descriptor.creation_time
        )

    def _matches_name(self, name: Optional[str]) -> bool:
        if name is not None and any(p.search(name) for p in self.exclude_names):
            return False
        if not self.include_names:
            return True
        if name is None:
            return False
        return any(p.search(name) for p in self.include_names)

    def _matches_age(self, created: Optional[datetime]) -> bool:
        if not self.has_age_window:
            return True
        if created is None:
            return False

        created = _as_utc(created)
        now = _as_utc(self._clock())
        if self.older_than is not None and not created < now - self.older_than:
            return False
        if self.newer_than is not None and not created > now - self.newer_than:
            return False
        return True

    def __repr__(self) -> str:
        return (
            f"ResourceFilter(include={[p.pattern for p in self.include_names]}, "
            f"exclude={[p.pattern for p in self.exclude_names]}, "
            f"older_than={self.older_than}, newer_than={self.newer_than})"
        )
