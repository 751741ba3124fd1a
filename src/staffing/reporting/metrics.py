from __future__ import annotations

from typing import Any, Mapping, Optional

import numpy as np
import pandas as pd

from staffing.coverage import PostInfo, evaluate_coverage

from .adapters import PandasPostAdapter, PostTableAdapter
from .data_models import CoverageSummary, PostCoverage

COVERAGE_COLUMNS = [
    "post_id",
    "name",
    "shift_type",
    "planned_headcount",
    "active",
    "required",
    "considered",
    "surplus",
    "deficit",
    "is_covered",
]


def _text_or_none(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    return None


def _int_or_none(value: Any) -> Optional[int]:
    if value is None or pd.isna(value):
        return None
    return int(value)


def post_coverage_table(
    posts: pd.DataFrame,
    active_counts: Mapping[str, int],
    adapter: PostTableAdapter | None = None,
    cfg: Any = None,
) -> pd.DataFrame:
    """
    One row per post with required/considered headcount and coverage flag.

    `active_counts` maps post id -> active collaborators; posts missing from it
    have no active staff. `cfg` may override the 12x36 label and floor.
    """
    adapter = adapter or PandasPostAdapter()
    norm = adapter.posts(posts)

    kwargs: dict[str, Any] = {}
    if cfg is not None:
        kwargs["min_12x36"] = int(cfg.MIN_HEADCOUNT_12X36)
        kwargs["label"] = str(cfg.ROTATION_12X36_LABEL)

    rows = []
    for r in norm.itertuples(index=False):
        post_id = str(r.post_id)
        shift_type = _text_or_none(r.shift_type)
        planned = _int_or_none(r.planned_headcount)
        active = max(int(active_counts.get(post_id, 0)), 0)
        res = evaluate_coverage(
            active,
            PostInfo(shift_type=shift_type, planned_headcount=planned),
            **kwargs,
        )
        rows.append(
            {
                "post_id": post_id,
                "name": r.name,
                "shift_type": shift_type,
                "planned_headcount": planned,
                "active": active,
                "required": res.required,
                "considered": res.considered,
                "is_covered": res.is_covered,
            }
        )

    if not rows:
        return pd.DataFrame(columns=COVERAGE_COLUMNS)

    df = pd.DataFrame(rows)
    # keep missing rotations as None rather than NaN
    df["shift_type"] = pd.Series([r["shift_type"] for r in rows], dtype=object)
    active_arr = df["active"].to_numpy(dtype=int)
    required_arr = df["required"].to_numpy(dtype=int)
    df["surplus"] = np.maximum(active_arr - required_arr, 0)
    df["deficit"] = required_arr - df["considered"].to_numpy(dtype=int)
    df["planned_headcount"] = df["planned_headcount"].astype("Int64")
    df["is_covered"] = df["is_covered"].astype(bool)
    return df[COVERAGE_COLUMNS]


def summarize_coverage(table: pd.DataFrame) -> CoverageSummary:
    """Aggregate a coverage table into totals."""
    if table.empty:
        return CoverageSummary(
            posts=0,
            covered_posts=0,
            required_total=0,
            considered_total=0,
            active_total=0,
            deficit_total=0,
            coverage_ratio=1.0,
        )
    required_total = int(table["required"].sum())
    considered_total = int(table["considered"].sum())
    return CoverageSummary(
        posts=int(len(table)),
        covered_posts=int(table["is_covered"].sum()),
        required_total=required_total,
        considered_total=considered_total,
        active_total=int(table["active"].sum()),
        deficit_total=int(table["deficit"].sum()),
        coverage_ratio=considered_total / required_total,
    )


def uncovered_posts(table: pd.DataFrame, top: int | None = None) -> list[PostCoverage]:
    """Posts below requirement, largest deficit first (ties by name)."""
    if table.empty:
        return []
    gaps = table[~table["is_covered"]].sort_values(
        ["deficit", "name"], ascending=[False, True], kind="mergesort"
    )
    if top is not None:
        gaps = gaps.head(top)
    return [
        PostCoverage(
            post_id=str(r.post_id),
            name=str(r.name),
            shift_type=_text_or_none(r.shift_type),
            planned_headcount=_int_or_none(r.planned_headcount),
            active=int(r.active),
            required=int(r.required),
            considered=int(r.considered),
            surplus=int(r.surplus),
            is_covered=bool(r.is_covered),
        )
        for r in gaps.itertuples(index=False)
    ]
