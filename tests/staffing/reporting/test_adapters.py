from __future__ import annotations

import pandas as pd
import pytest

from staffing.reporting.adapters import POST_COLUMNS, PandasPostAdapter


def test_portuguese_columns_are_renamed() -> None:
    df = pd.DataFrame(
        {
            "id": [1, 2],
            "nome": ["Portaria", None],
            "escala": ["12x36", None],
            "efetivo_planejado": ["2", None],
        }
    )
    out = PandasPostAdapter().posts(df)
    assert list(out.columns) == POST_COLUMNS
    assert out["post_id"].tolist() == ["1", "2"]
    assert out["name"].tolist() == ["Portaria", ""]
    assert out.loc[0, "planned_headcount"] == 2
    assert pd.isna(out.loc[1, "planned_headcount"])


def test_missing_optional_columns_are_filled() -> None:
    out = PandasPostAdapter().posts(pd.DataFrame({"post_id": ["p1"]}))
    assert out.loc[0, "name"] == "p1"
    assert out.loc[0, "shift_type"] is None
    assert pd.isna(out.loc[0, "planned_headcount"])


def test_empty_table_and_missing_id() -> None:
    assert PandasPostAdapter().posts(pd.DataFrame()).empty
    with pytest.raises(ValueError):
        PandasPostAdapter().posts(pd.DataFrame({"nome": ["x"]}))


def test_embedded_rotation_rows_are_unwrapped() -> None:
    df = pd.DataFrame(
        {
            "id": ["p1", "p2", "p3"],
            "escala": [{"nome": "Noturna", "tipo": "12x36"}, float("nan"), "5x2"],
            "efetivo_planejado": [1, 1, None],
        }
    )
    out = PandasPostAdapter().posts(df)
    assert out["shift_type"].tolist() == ["12x36", None, "5x2"]


@pytest.mark.parametrize("bad", [2.5, "muitos"])
def test_invalid_headcount_names_the_column(bad) -> None:
    df = pd.DataFrame({"id": ["p1", "p2"], "efetivo_planejado": [1, bad]})
    with pytest.raises(ValueError, match="efetivo_planejado"):
        PandasPostAdapter().posts(df)


def test_blank_headcount_counts_as_missing() -> None:
    df = pd.DataFrame({"id": ["p1"], "efetivo_planejado": ["  "]})
    assert pd.isna(PandasPostAdapter().posts(df).loc[0, "planned_headcount"])
