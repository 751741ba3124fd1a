from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PostCoverage:
    """Coverage record for a single service post."""

    post_id: str
    name: str
    shift_type: Optional[str]
    planned_headcount: Optional[int]
    active: int
    required: int
    considered: int  # min(active, required)
    surplus: int  # max(active - required, 0)
    is_covered: bool

    @property
    def deficit(self) -> int:
        return self.required - self.considered


@dataclass(frozen=True)
class CoverageSummary:
    """Totals across all posts in a coverage table."""

    posts: int
    covered_posts: int
    required_total: int
    considered_total: int
    active_total: int
    deficit_total: int
    coverage_ratio: float  # considered_total / required_total
