from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date

from loguru import logger

from stardash.config import Config
from stardash.dashboard import Dashboard
from stardash.github import GitHubClient
from stardash.render import dashboard_to_dict, render_dashboard


def cmd_show(
    config: Config,
    *,
    week: int | None = None,
    as_json: bool = False,
    width: int = 40,
) -> int:
    """Fetch the most-starred repository and print its dashboard."""
    dashboard = Dashboard()

    if not config.github_token:
        logger.warning("GITHUB_TOKEN is not set, using unauthenticated requests")

    with GitHubClient(
        config.github_token,
        base_url=config.github_api_url,
        timeout=config.request_timeout,
        max_polls=config.stats_max_polls,
        poll_delay=config.stats_poll_delay,
    ) as github:
        logger.info("Fetching the most-starred repository from GitHub…")
        result = dashboard.load(github)

    if not result.ok:
        return 1

    if week is not None:
        dashboard.select_week(week - 1)

    today = date.today()
    if as_json:
        print(json.dumps(dashboard_to_dict(dashboard, today), indent=2, ensure_ascii=False))
    else:
        print(render_dashboard(dashboard, today, width=width))
    return 0


class _InterceptHandler(logging.Handler):
    """Route stdlib logging (httpx, httpcore) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _setup_logging(verbose: bool = False) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> — "
            "<level>{message}</level>"
        ),
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def _week_number(raw: str) -> int:
    value = int(raw)
    if not 1 <= value <= 4:
        raise argparse.ArgumentTypeError(f"week must be between 1 and 4, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stardash",
        description="Dashboard of the most-starred repository on GitHub",
    )
    parser.add_argument(
        "--week",
        type=_week_number,
        default=None,
        help="Only show the daily commits of week N (1 = oldest, 4 = current)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the snapshot and chart series as JSON",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=40,
        help="Width of the longest bar in the text charts (default: 40)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    config = Config.from_env()
    sys.exit(cmd_show(config, week=args.week, as_json=args.json, width=args.width))
