from __future__ import annotations

from typing import Any, Optional, Protocol

import pandas as pd

from staffing.records import shift_type_of

POST_COLUMNS = ["post_id", "name", "shift_type", "planned_headcount"]


class PostTableAdapter(Protocol):
    """Minimal interface the coverage metrics need from a posts table."""

    def posts(self, df: pd.DataFrame) -> pd.DataFrame: ...


def _shift_label(value: Any) -> Optional[str]:
    label = shift_type_of(value)
    return label if isinstance(label, str) else None


def _headcount_column(raw: pd.Series, column: str) -> pd.Series:
    nums = pd.to_numeric(raw, errors="coerce")
    blank = raw.map(lambda v: isinstance(v, str) and not v.strip()).astype(bool)
    invalid = raw.notna() & ~blank & nums.isna()
    if invalid.any():
        bad = raw[invalid].iloc[0]
        raise ValueError(f"Column '{column}' has a non-numeric headcount: {bad!r}")
    fractional = nums.notna() & (nums % 1 != 0)
    if fractional.any():
        bad = nums[fractional].iloc[0]
        raise ValueError(f"Column '{column}' has a non-integral headcount: {bad!r}")
    return nums.astype("Int64")


class PandasPostAdapter:
    """
    Default adapter: accepts English or hosted-table (Portuguese) column names.

    The rotation column may hold plain labels or embedded `escala` rows
    ({nome, tipo}); anything that is not a label becomes None.
    """

    ALIASES: dict[str, tuple[str, ...]] = {
        "post_id": ("post_id", "id", "posto_servico_id", "posto_id"),
        "name": ("name", "nome"),
        "shift_type": ("shift_type", "escala", "tipo_escala"),
        "planned_headcount": ("planned_headcount", "efetivo_planejado"),
    }

    def posts(self, df: pd.DataFrame) -> pd.DataFrame:
        if df.empty:
            return pd.DataFrame(columns=POST_COLUMNS)

        sc = {str(c).lower(): c for c in df.columns}
        picked: dict[str, object] = {}
        for target, aliases in self.ALIASES.items():
            picked[target] = next((sc[a] for a in aliases if a in sc), None)

        if picked["post_id"] is None:
            raise ValueError("Posts table needs an id column (post_id/id).")

        out = pd.DataFrame(index=df.index)
        out["post_id"] = df[picked["post_id"]].astype(str)
        out["name"] = (
            df[picked["name"]].fillna("").astype(str)
            if picked["name"] is not None
            else out["post_id"]
        )
        if picked["shift_type"] is not None:
            labels = [_shift_label(v) for v in df[picked["shift_type"]]]
        else:
            labels = [None] * len(df)
        out["shift_type"] = pd.Series(labels, index=df.index, dtype=object)
        if picked["planned_headcount"] is not None:
            out["planned_headcount"] = _headcount_column(
                df[picked["planned_headcount"]], str(picked["planned_headcount"])
            )
        else:
            out["planned_headcount"] = pd.array([pd.NA] * len(df), dtype="Int64")
        return out.reset_index(drop=True)
