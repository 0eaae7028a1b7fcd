#!/usr/bin/env python3
"""
Unified CLI for pencil sketch rendering.

Usage:
    psk pencil <in> <out>                  # Grayscale pencil sketch
    psk pencil <in> <out> -k 21 -s 12      # ... with explicit blur kernel and sigma
    psk color <in> <out> -c 0.7            # Color pencil sketch
    psk render <in> <out> -p soft_pencil   # Render with a named preset
    psk presets                            # List presets and their parameters
    psk batch jobs.yaml                    # Run a YAML job file
"""

import argparse
import logging
import sys

from logging_utils import configure_logging, add_logging_args
from cli.render import add_render_subparsers
from cli.presets import add_presets_subparser
from cli.batch import add_batch_subparser

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="psk",
        description="Pencil Sketch - turn photos into pencil and color pencil sketches",
    )
    add_logging_args(parser)
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    add_render_subparsers(subparsers)
    add_presets_subparser(subparsers)
    add_batch_subparser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)

    cmd = getattr(args, "_cmd", None)
    if cmd is None:
        parser.print_help()
        return 1
    return cmd(args)


if __name__ == "__main__":
    sys.exit(main())
