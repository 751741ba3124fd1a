from __future__ import annotations

from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import pandas as pd

from .text_report import get_active_report


def _save_and_show(fig: plt.Figure, out_dir: Path, filename: str) -> None:
    """Persist the plot under the output dir and show it."""
    out_dir.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_dir / filename, dpi=fig.dpi, bbox_inches="tight")
    plt.show()


def show_coverage_chart(
    table: pd.DataFrame,
    cfg: Any,
    max_posts: int = 30,
    enable_plot: bool = True,
) -> None:
    """Bar chart of required vs active headcount per post, worst gaps first."""
    if not enable_plot or table.empty:
        return

    data = table.sort_values(
        ["deficit", "name"], ascending=[False, True], kind="mergesort"
    ).head(max_posts)
    labels = [str(n) if n else str(p) for n, p in zip(data["name"], data["post_id"])]
    positions = list(range(len(data)))
    width = 0.4

    fig, ax = plt.subplots(figsize=(max(6.0, 0.45 * len(data) + 2), 4), dpi=150)
    ax.bar(
        [p - width / 2 for p in positions],
        data["required"].tolist(),
        width=width,
        label="Required",
        color="#94a3b8",
        edgecolor="none",
    )
    colors = ["#34D399" if ok else "#F87171" for ok in data["is_covered"]]
    ax.bar(
        [p + width / 2 for p in positions],
        data["active"].tolist(),
        width=width,
        label="Active",
        color=colors,
        edgecolor="none",
    )
    ax.set_xticks(positions, labels, rotation=60, ha="right", fontsize=7)
    ax.set_ylabel("Headcount")
    ax.set_title(f"Post coverage (up to {len(data)} posts)", fontsize=11)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.legend(frameon=False)
    fig.tight_layout()

    _save_and_show(fig, Path(cfg.OUTPUT_DIR), "coverage.png")
    report = get_active_report()
    if report is not None:
        report.add_figure(fig)
