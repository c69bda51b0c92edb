#!/usr/bin/env python
"""CLI for serpcheck search-result retrieval."""

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

from pydantic import BaseModel, field_validator

from serpcheck.cancel import CancelToken
from serpcheck.config import SerpcheckConfig, get_default_config_path, load_config
from serpcheck.data import SearchStatus
from serpcheck.factory import create_from_config

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    keywords: list[str]
    config: Path
    quota: bool = False

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


async def run(args: CLIArgs, config: SerpcheckConfig) -> int:
    """Search the given keywords with the given configuration.

    Args:
        args: Validated CLI arguments.
        config: Loaded root configuration.

    Returns:
        Process exit code.
    """
    app = create_from_config(config)
    settings = app.load_settings()

    if args.quota:
        print(
            f"API queries today: {app.quota.today_count()} / {settings.max_daily_api_queries}"
        )
        if not args.keywords:
            return 0

    cancel = CancelToken()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel.cancel)
    except NotImplementedError:
        # Windows event loops: Ctrl-C falls back to KeyboardInterrupt.
        pass

    logger.info(f"Searching {len(args.keywords)} keyword(s)")
    logger.info(f"Config: {args.config}")

    results = await app.runner.run(args.keywords, cancel=cancel)

    interrupted = False
    for query, result in results:
        print(f"\n{query.keyword} [{result.status}] ~{result.total_results:,} results")
        for i, url in enumerate(result.urls, 1):
            print(f"  {i}. {url}")
        interrupted = interrupted or result.status is SearchStatus.INTERRUPTED

    logger.info(
        f"API queries today: {app.quota.today_count()} / {settings.max_daily_api_queries}"
    )
    return 130 if interrupted else 0


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Fetch search-engine result URLs for keywords.")
    parser.add_argument(
        "keywords",
        nargs="*",
        help="Keywords to search",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--quota",
        action="store_true",
        default=False,
        help="Print today's Custom Search API usage",
    )

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            keywords=ns.keywords,
            config=config_path,
            quota=ns.quota,
        )
    except Exception as e:
        logging.basicConfig(level=logging.INFO, format="%(message)s")
        logger.error(str(e))
        sys.exit(1)

    if not args.keywords and not args.quota:
        parser.error("at least one keyword is required unless --quota is given")

    config = load_config(args.config)
    logging.basicConfig(level=config.logging.level, format=config.logging.format)

    try:
        sys.exit(asyncio.run(run(args, config)))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
