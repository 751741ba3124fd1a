from __future__ import annotations

from .adapters import PandasPostAdapter, PostTableAdapter
from .data_models import CoverageSummary, PostCoverage
from .reporter import Reporter

__all__ = [
    "Reporter",
    "PostTableAdapter",
    "PandasPostAdapter",
    "CoverageSummary",
    "PostCoverage",
]
