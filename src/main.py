"""Command-line Entry Point.

This module provides a command-line front end for the viewer.
It's a thin wrapper that loads configuration, runs one fetch through the
orchestrator and prints the list view, optionally writing the map image.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from src.core.formatter import format_list_item, format_summary
from src.core.state import FetchStatus
from src.orchestrator import Orchestrator
from src.shell.config_loader import load_config, load_config_from_env


logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging from LOG_LEVEL."""
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _get_config(config_path: str | None = None):
    """Load configuration from file or environment."""
    config_path = config_path or os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif os.environ.get("FEED_URL"):
        return load_config_from_env()
    else:
        return load_config()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show earthquakes from the past 24 hours (USGS feed)",
    )
    parser.add_argument(
        "--config",
        help="Path to YAML config file (default: CONFIG_PATH or config/config.yaml)",
    )
    parser.add_argument(
        "--min-magnitude",
        type=float,
        default=None,
        help="Minimum magnitude to show, 0-6 (default: from config)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Print at most this many list entries",
    )
    parser.add_argument(
        "--map",
        dest="map_path",
        help="Write a PNG map of the shown earthquakes to this path",
    )
    return parser


def run(args: argparse.Namespace, orchestrator: Orchestrator | None = None) -> int:
    """Run one fetch and print the result.

    Args:
        args: Parsed command-line arguments
        orchestrator: Orchestrator to use (created from config if not provided)

    Returns:
        Process exit code
    """
    if orchestrator is None:
        orchestrator = Orchestrator(_get_config(args.config))

    if args.min_magnitude is not None:
        orchestrator.set_threshold(args.min_magnitude)

    state = orchestrator.load()
    view = orchestrator.view()

    if state.status is FetchStatus.FAILED:
        print(view.message)
        orchestrator.close()
        return 1

    print(format_summary(view.total, view.showing, view.threshold))

    if view.message:
        print(view.message)

    entries = view.sorted if args.limit is None else view.sorted[: args.limit]
    for quake in entries:
        print(format_list_item(quake))

    exit_code = 0
    if args.map_path:
        result = orchestrator.render_map(view)
        if result.success:
            Path(args.map_path).write_bytes(result.image_bytes)
            print(f"Map written to {args.map_path}")
        else:
            print(f"Failed to render map: {result.error}")
            exit_code = 1

    orchestrator.close()
    return exit_code


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
