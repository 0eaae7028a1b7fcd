"""batch command CLI parsing and control flow."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from jobs import load_job_file, run_jobs

logger = logging.getLogger(__name__)


def add_batch_subparser(subparsers: argparse._SubParsersAction) -> None:
    batch_parser = subparsers.add_parser(
        "batch",
        help="Render every job listed in a YAML job file",
    )
    batch_parser.add_argument(
        "job_file",
        help="YAML file with a 'jobs' list",
    )
    batch_parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the progress bar",
    )
    batch_parser.set_defaults(_cmd=cmd_batch)


def cmd_batch(args: argparse.Namespace) -> int:
    path = Path(args.job_file)
    try:
        job_file = load_job_file(path)
    except (OSError, ValueError) as e:
        logger.error("Cannot load job file %s: %s", path, e)
        return 1

    outcomes = run_jobs(
        job_file,
        base_dir=path.resolve().parent,
        show_progress=not args.no_progress,
    )

    failed = [o for o in outcomes if not o.ok]
    for outcome in failed:
        logger.error("%s: %s", outcome.job.input, outcome.error)
    return 1 if failed else 0
