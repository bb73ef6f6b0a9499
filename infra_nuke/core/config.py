"""
Runtime configuration for a nuke run.

Values come from command line options (or their ``INFRA_NUKE_*``
environment variables, see :mod:`infra_nuke.main`).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, Optional

from infra_nuke.core.exceptions import ConfigError

# AWS has no bulk delete for most resource types, so every identifier is
# one API call; more than this in one batch invites throttling.
DEFAULT_SAFETY_CEILING = 100

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw])\s*$")
_DURATION_UNITS = {
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration such as ``"90s"``, ``"30m"``, ``"24h"``, ``"7d"`` or ``"2w"``.

    Raises
    ------
    ConfigError
        If the value is not a positive integer followed by one unit.
    """
    match = _DURATION_RE.match(value or "")
    if not match:
        raise ConfigError(
            f"Invalid duration '{value}'",
            details={"hint": "Use a number followed by s, m, h, d or w, e.g. 24h"},
        )
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


@dataclass
class NukeConfig:
    """
    Settings shared by every region and resource type of a run.

    Attributes:
        safety_ceiling: Default maximum batch size per resource type and region
        ceilings: Per resource type overrides of the safety ceiling
        max_workers: Maximum number of regions processed in parallel
        max_retries: botocore retry attempts per API call
        timeout: botocore connect/read timeout in seconds
        profile: AWS profile name
    """

    safety_ceiling: int = DEFAULT_SAFETY_CEILING
    ceilings: Dict[str, int] = field(default_factory=dict)
    max_workers: int = 10
    max_retries: int = 3
    timeout: int = 30
    profile: Optional[str] = None

    def __post_init__(self) -> None:
        if self.safety_ceiling < 1:
            raise ConfigError(
                "Safety ceiling must be at least 1",
                details={"safety_ceiling": self.safety_ceiling},
            )
        for resource_type, ceiling in self.ceilings.items():
            if ceiling < 1:
                raise ConfigError(
                    f"Safety ceiling for {resource_type} must be at least 1",
                    details={"resource_type": resource_type, "ceiling": ceiling},
                )
        if self.max_workers < 1:
            raise ConfigError("max_workers must be at least 1")

    def ceiling_for(self, resource_type: str) -> int:
        """Safety ceiling for one resource type."""
        return self.ceilings.get(resource_type, self.safety_ceiling)
