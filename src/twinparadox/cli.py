"""Command-line options for launching the visualizer."""
from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from twinparadox import __version__, config

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="twinparadox",
        description="Interactive space-time diagram of the twin paradox.",
    )
    parser.add_argument(
        "--distance", type=float, default=config.DEFAULT_DISTANCE,
        help=f"distance to the star in light-years ({config.DISTANCE_MIN}-{config.DISTANCE_MAX})",
    )
    parser.add_argument(
        "--velocity", type=float, default=config.DEFAULT_VELOCITY,
        help=f"traveler speed as a fraction of c ({config.VELOCITY_MIN}-{config.VELOCITY_MAX})",
    )
    parser.add_argument(
        "--log-level", choices=LOG_LEVELS, default="INFO", type=str.upper,
        help="console and file log level",
    )
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse the command line; `log_level` is returned as a logging constant."""
    args = build_parser().parse_args(argv)
    args.log_level = getattr(logging, args.log_level)
    return args
