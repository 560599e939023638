"""Command-line entry point for the remote picture sync."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from .config import DEFAULT_CONFIG_FILE, ConfigError, dev_mode_from_env, load_config
from .sync import run_sync
from .utils import InvalidPictureURL

logger = logging.getLogger("remote_pictures.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Mirror remote pictures locally and generate modules that re-export them."
        ),
    )
    parser.add_argument(
        "config",
        nargs="?",
        default=DEFAULT_CONFIG_FILE,
        type=Path,
        help=f"YAML or JSON file listing the collections (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "--force-refresh",
        "--skip-cache",
        dest="force_refresh",
        action="store_true",
        help="Download every picture even when a local copy exists",
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Print usage banners (also enabled by MODE=development)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log errors",
    )
    argv = list(sys.argv[1:] if argv is None else argv)
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.INFO
    if args.quiet and not args.verbose:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    try:
        config = load_config(
            args.config,
            force_refresh=args.force_refresh,
            dev_mode=args.dev or dev_mode_from_env(),
        )
    except ConfigError as exc:
        logger.error("%s", exc)
        return 1

    overall_start = time.perf_counter()
    try:
        results = run_sync(config)
    except InvalidPictureURL as exc:
        logger.error("Sync aborted: %s", exc)
        return 1
    total_elapsed = time.perf_counter() - overall_start

    downloaded = sum(len(result.downloaded) for result in results)
    skipped = sum(len(result.skipped) for result in results)
    failed = sum(len(result.failed) for result in results)
    logger.info(
        "Finished in %.2fs (%d collections: %d downloaded, %d skipped, %d failed)",
        total_elapsed,
        len(results),
        downloaded,
        skipped,
        failed,
    )
    if args.verbose:
        for result in results:
            for picture_id in result.failed:
                logger.debug("Missing %s in %s", picture_id, result.collection_id)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
