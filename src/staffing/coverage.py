# staffing/coverage.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

ROTATION_12X36_LABEL = "12x36"

# A 12h-on / 36h-off rotation needs four people to keep the post staffed.
MIN_HEADCOUNT_12X36 = 4


@dataclass(frozen=True)
class PostInfo:
    """Staffing configuration of a service post at evaluation time."""

    shift_type: Optional[str] = None
    planned_headcount: Optional[int] = None


@dataclass(frozen=True)
class CoverageResult:
    """Required vs considered headcount for a single post."""

    required: int
    considered: int  # min(active, required)
    is_covered: bool


def is_twelve_by_thirty_six(
    shift_type: Any, *, label: str = ROTATION_12X36_LABEL
) -> bool:
    """
    Return True when `shift_type` names the 12x36 rotation (trimmed, any case).

    Anything that is not a non-empty string (None, NaN from a table) is False.
    """
    if not isinstance(shift_type, str) or not shift_type:
        return False
    return shift_type.strip().lower() == label.strip().lower()


def adjusted_planned_headcount(
    post: PostInfo,
    *,
    min_12x36: int = MIN_HEADCOUNT_12X36,
    label: str = ROTATION_12X36_LABEL,
) -> int:
    """
    Effective minimum headcount for a post.

    Unset, zero or negative planned headcount counts as 1. Posts on the 12x36
    rotation are raised to at least `min_12x36`, which can only tighten the
    floor of MIN_HEADCOUNT_12X36.
    """
    planned = post.planned_headcount
    base = planned if planned is not None and planned > 0 else 1
    if is_twelve_by_thirty_six(post.shift_type, label=label):
        return max(base, min_12x36, MIN_HEADCOUNT_12X36)
    return base


def evaluate_coverage(
    active_collaborator_count: int,
    post: PostInfo,
    *,
    min_12x36: int = MIN_HEADCOUNT_12X36,
    label: str = ROTATION_12X36_LABEL,
) -> CoverageResult:
    """
    Compare active collaborators on a post against its adjusted requirement.

    `considered` is capped at `required`, so surplus staff do not show up in it.
    """
    required = adjusted_planned_headcount(post, min_12x36=min_12x36, label=label)
    return CoverageResult(
        required=required,
        considered=min(active_collaborator_count, required),
        is_covered=active_collaborator_count >= required,
    )
