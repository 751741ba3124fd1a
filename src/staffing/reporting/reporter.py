from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from staffing.reporting.metrics import summarize_coverage
from staffing.reporting.plots import show_coverage_chart
from staffing.reporting.text_report import (
    CoverageReportPdf,
    collecting_into,
    render_text_report,
)


class Reporter:
    """High-level orchestrator: prints the coverage report and exports artifacts."""

    def __init__(
        self,
        cfg: Any,
        num_print_examples: int | None = None,
        enable_plots: bool | None = None,
    ) -> None:
        """
        cfg must expose:
          - OUTPUT_DIR
          - MIN_HEADCOUNT_12X36 / ROTATION_12X36_LABEL
          - NUM_PRINT_EXAMPLES / ENABLE_PLOTS (used when not overridden)
        """
        self.cfg = cfg
        self.num_print_examples = (
            num_print_examples
            if num_print_examples is not None
            else int(getattr(cfg, "NUM_PRINT_EXAMPLES", 6))
        )
        self.enable_plots = (
            enable_plots
            if enable_plots is not None
            else bool(getattr(cfg, "ENABLE_PLOTS", True))
        )

    @property
    def output_dir(self) -> Path:
        return Path(getattr(self.cfg, "OUTPUT_DIR", "outputs"))

    def export_csv(self, table: pd.DataFrame) -> Path:
        out_path = self.output_dir / "post_coverage.csv"
        out_path.parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(out_path, index=False)
        return out_path

    def report(self, table: pd.DataFrame) -> None:
        """Render the text report, export the table and (optionally) plot it."""
        summary = summarize_coverage(table)
        report_doc = CoverageReportPdf(self.output_dir / "coverage_report.pdf")
        try:
            with collecting_into(report_doc):
                render_text_report(
                    self.cfg,
                    table,
                    summary,
                    num_print_examples=self.num_print_examples,
                )
                if not table.empty:
                    out_path = self.export_csv(table)
                    print(f"\nCoverage table written to {out_path}")
                if self.enable_plots:
                    show_coverage_chart(table, self.cfg, enable_plot=True)
        finally:
            report_doc.write()
