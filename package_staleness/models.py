"""
Core data models for the staleness report.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Manifest:
    """Declared runtime dependencies of a project."""

    name: Optional[str]
    dependencies: Dict[str, str] = field(default_factory=dict)

    @property
    def dependency_names(self) -> List[str]:
        # Constraint values are ignored, only the names matter.
        return list(self.dependencies)


@dataclass(frozen=True)
class StaleDependency:
    """A dependency whose newest release is older than the threshold."""

    name: str
    last_release: datetime
    months_since_release: float
    url: str


@dataclass
class Report:
    """Outcome of checking every dependency of a manifest."""

    checked: int
    threshold_months: int
    stale: List[StaleDependency] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

