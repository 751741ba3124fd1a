from .config import Config, cfg
from .coverage import (
    CoverageResult,
    PostInfo,
    adjusted_planned_headcount,
    evaluate_coverage,
    is_twelve_by_thirty_six,
)
from .main import run_coverage_report

__all__ = [
    "Config",
    "cfg",
    "CoverageResult",
    "PostInfo",
    "adjusted_planned_headcount",
    "evaluate_coverage",
    "is_twelve_by_thirty_six",
    "run_coverage_report",
]
