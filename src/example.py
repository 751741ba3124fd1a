"""
Module with example code for running the coverage report.

Builds a handful of posts and collaborators in code and prints the report.

Usage via cli:
    python3 -m src.example --no-plots
"""

from __future__ import annotations

import argparse

from staffing import Config, run_coverage_report
from staffing.records import Collaborator, ServicePost

POSTS = [
    ServicePost(
        id="p1", name="Portaria Norte", shift_type="12x36", planned_headcount=1
    ),
    ServicePost(id="p2", name="Recepcao", shift_type="diarista", planned_headcount=2),
    ServicePost(id="p3", name="Ronda", shift_type=None, planned_headcount=None),
    ServicePost(
        id="p4", name="Portaria Sul", shift_type=" 12X36 ", planned_headcount=6
    ),
]

COLLABORATORS = [
    Collaborator(id="c1", full_name="Ana Souza", post_id="p1"),
    Collaborator(id="c2", full_name="Bruno Lima", post_id="p1"),
    Collaborator(id="c3", full_name="Carla Dias", post_id="p1"),
    Collaborator(id="c4", full_name="Diego Alves", post_id="p2"),
    Collaborator(id="c5", full_name="Elisa Rocha", post_id="p2"),
    Collaborator(id="c6", full_name="Fabio Nunes", post_id="p4", status="ferias"),
    Collaborator(id="c7", full_name="Gabi Reis", post_id=None),
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the coverage example.")
    parser.add_argument("--no-plots", action="store_true", help="Skip the chart.")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    run_coverage_report(
        config=Config(ENABLE_PLOTS=not args.no_plots),
        posts=POSTS,
        collaborators=COLLABORATORS,
    )
