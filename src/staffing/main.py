from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

import pandas as pd

from staffing.collaborators import active_count_by_post
from staffing.config import Config, cfg
from staffing.loaders import posts_to_dataframe, records_from_json
from staffing.records import Collaborator, ServicePost
from staffing.reporting import Reporter
from staffing.reporting.metrics import post_coverage_table


def run_coverage_report(
    config: Config | None = None,
    posts: Sequence[ServicePost] | pd.DataFrame | None = None,
    collaborators: Sequence[Collaborator] | None = None,
    reporter: Reporter | None = None,
    validate_config: bool = True,
    enable_reporting: bool = True,
) -> pd.DataFrame:
    """
    Evaluate coverage for every post and optionally report on it.

    Parameters
    ----------
    config:
        The configuration for the run. Defaults to `staffing.config.cfg` when omitted.
    posts:
        Service posts, either as `ServicePost` records or as a DataFrame using
        English or hosted-table column names.
    collaborators:
        Collaborators used to count active staff per post. Only those whose
        status matches `Config.ACTIVE_STATUS` and that hold a post are counted.
    reporter:
        Custom reporter instance. Defaults to `Reporter(config)` when reporting is
        enabled.
    validate_config:
        Toggle to run `Config.validate()` first.
    enable_reporting:
        When False, only the coverage table is computed and returned.

    Returns
    -------
    pd.DataFrame
        One row per post (see `staffing.reporting.metrics.COVERAGE_COLUMNS`).
    """
    cfg_obj = config or cfg
    if validate_config:
        cfg_obj.validate()

    if posts is None:
        posts_df = posts_to_dataframe([])
    elif isinstance(posts, pd.DataFrame):
        posts_df = posts
    else:
        posts_df = posts_to_dataframe(list(posts))

    counts = active_count_by_post(collaborators or [], cfg_obj.ACTIVE_STATUS)
    table = post_coverage_table(posts_df, counts, cfg=cfg_obj)

    if enable_reporting:
        active_reporter = reporter or Reporter(cfg_obj)
        active_reporter.report(table)

    return table


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Report staffing coverage of service posts."
    )
    parser.add_argument(
        "--posts", type=Path, required=True, help="JSON export of service posts."
    )
    parser.add_argument(
        "--collaborators",
        type=Path,
        required=True,
        help="JSON export of collaborators.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for CSV/PDF/PNG outputs (default: outputs/).",
    )
    parser.add_argument(
        "--no-plots", action="store_true", help="Skip the coverage chart."
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> pd.DataFrame:
    """CLI entry point."""
    args = parse_args(argv)
    run_cfg = Config(
        ROTATION_12X36_LABEL=cfg.ROTATION_12X36_LABEL,
        MIN_HEADCOUNT_12X36=cfg.MIN_HEADCOUNT_12X36,
        ACTIVE_STATUS=cfg.ACTIVE_STATUS,
        OUTPUT_DIR=args.output_dir or cfg.OUTPUT_DIR,
        ENABLE_PLOTS=not args.no_plots and cfg.ENABLE_PLOTS,
        NUM_PRINT_EXAMPLES=cfg.NUM_PRINT_EXAMPLES,
    )
    posts = records_from_json(args.posts, "posts")
    collaborators = records_from_json(args.collaborators, "collaborators")
    print(
        f"Loaded {len(posts)} posts and {len(collaborators)} collaborators "
        f"from {args.posts.name} / {args.collaborators.name}"
    )
    return run_coverage_report(
        config=run_cfg, posts=posts, collaborators=collaborators
    )


if __name__ == "__main__":
    main()
