from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Iterator, Optional

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.backends.backend_pdf import PdfPages

from staffing.collaborators import rotation_label

from .data_models import CoverageSummary
from .metrics import uncovered_posts

LINES_PER_PAGE = 72
_A4_PORTRAIT = (8.27, 11.69)


class CoverageReportPdf:
    """
    Collects what a report run prints, plus its charts, and writes them to a
    PDF: the console text split over A4 pages, then one page per chart.
    """

    def __init__(self, path: Path, title: str = "Post coverage report") -> None:
        self.path = Path(path)
        self.title = title
        self.lines: list[str] = []
        self.figures: list[plt.Figure] = []

    def add_line(self, line: str) -> None:
        self.lines.append(line)

    def add_figure(self, fig: plt.Figure) -> None:
        self.figures.append(fig)

    def text_pages(self) -> list[list[str]]:
        if not self.lines:
            return [] if self.figures else [["Report contains no data."]]
        return [
            self.lines[i : i + LINES_PER_PAGE]
            for i in range(0, len(self.lines), LINES_PER_PAGE)
        ]

    def _render_page(self, lines: list[str], page: int, total: int) -> plt.Figure:
        fig, ax = plt.subplots(figsize=_A4_PORTRAIT)
        ax.axis("off")
        ax.set_title(f"{self.title} ({page}/{total})", loc="left", fontsize=9)
        ax.text(
            0.0,
            1.0,
            "\n".join(lines),
            ha="left",
            va="top",
            fontsize=8,
            family="monospace",
            transform=ax.transAxes,
        )
        return fig

    def write(self) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        pages = self.text_pages()
        with PdfPages(self.path) as pdf:
            pdf.infodict()["Title"] = self.title
            for number, lines in enumerate(pages, start=1):
                fig = self._render_page(lines, number, len(pages))
                pdf.savefig(fig)
                plt.close(fig)
            for fig in self.figures:
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
        return self.path


_collector: ContextVar[Optional[CoverageReportPdf]] = ContextVar(
    "coverage_report_collector", default=None
)


@contextmanager
def collecting_into(doc: CoverageReportPdf) -> Iterator[CoverageReportPdf]:
    """Route report output (text and charts) into `doc` while the block runs."""
    token = _collector.set(doc)
    try:
        yield doc
    finally:
        _collector.reset(token)


def get_active_report() -> Optional[CoverageReportPdf]:
    return _collector.get()


def _echo(text: str = "") -> None:
    print(text)
    doc = _collector.get()
    if doc is not None:
        for line in text.split("\n"):
            doc.add_line(line)


def _fmt_pct(x: float | None, nd: int = 1) -> str:
    if x is None or pd.isna(x):
        return "nan"
    return f"{100 * float(x):.{nd}f}%"


def _print_rotation_breakdown(table: pd.DataFrame, label: str) -> None:
    if table.empty:
        return
    rotations = [rotation_label(v, label) for v in table["shift_type"]]
    grouped = (
        table.assign(rotation=rotations)
        .groupby("rotation")
        .agg(
            posts=("post_id", "count"),
            covered=("is_covered", "sum"),
            required=("required", "sum"),
            active=("active", "sum"),
        )
        .sort_index()
    )
    _echo("\nBy rotation:")
    for rotation, row in grouped.iterrows():
        _echo(
            f"  {rotation:<14} posts={int(row['posts']):>4} "
            f"covered={int(row['covered']):>4} "
            f"required={int(row['required']):>5} active={int(row['active']):>5}"
        )


def render_text_report(
    cfg: Any,
    table: pd.DataFrame,
    summary: CoverageSummary,
    num_print_examples: int = 6,
) -> None:
    """Print coverage totals, a per-rotation breakdown and the worst posts."""
    label = str(cfg.ROTATION_12X36_LABEL)
    _echo("\n=== Post coverage ===")
    if summary.posts == 0:
        _echo("No posts to evaluate.")
        return

    _echo(
        f"Posts: {summary.posts} | covered: {summary.covered_posts} "
        f"| uncovered: {summary.posts - summary.covered_posts}"
    )
    _echo(
        f"Headcount required: {summary.required_total} | "
        f"considered: {summary.considered_total} | "
        f"active: {summary.active_total} | deficit: {summary.deficit_total}"
    )
    _echo(
        "Coverage ratio (considered / required): "
        f"{_fmt_pct(summary.coverage_ratio)}"
    )
    _echo(f"{label} posts are held to at least {cfg.MIN_HEADCOUNT_12X36} people.")

    _print_rotation_breakdown(table, label)

    gaps = uncovered_posts(table, top=num_print_examples)
    if not gaps:
        _echo("\nAll posts covered.")
        return

    _echo(f"\nLargest gaps (top {len(gaps)}):")
    for g in gaps:
        _echo(
            f"  {g.name or g.post_id:<30} [{rotation_label(g.shift_type, label)}] "
            f"active={g.active} required={g.required} deficit={g.deficit}"
        )
