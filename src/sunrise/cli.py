"""Command-line entry point.

Run:
    sunrise --config /etc/sunrise/sunrise.cfg
    python -m sunrise --once
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Sequence

from sunrise.core.config import CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH, load_config
from sunrise.core.errors import ConfigError, LogReadError
from sunrise.core.orchestrator import RecoveryOrchestrator

LOG_LEVEL_ENV = "SUNRISE_LOG_LEVEL"

logger = logging.getLogger(__name__)


def _configure_logging(level_name: str | None = None) -> None:
    """Configure root logging; --log-level wins over $SUNRISE_LOG_LEVEL."""
    name = (level_name or os.getenv(LOG_LEVEL_ENV, "INFO")).upper()
    level = getattr(logging, name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="sunrise",
        description="Wake the monitor when Sunshine logs that it is missing.",
    )
    p.add_argument(
        "--config",
        default=None,
        help=f"Path to the sunrise config file (default: ${CONFIG_PATH_ENV} or {DEFAULT_CONFIG_PATH})",
    )
    p.add_argument("--log-level", default=None, help=f"Logging level (default: ${LOG_LEVEL_ENV} or INFO)")
    p.add_argument("--once", action="store_true", help="Run a single check immediately and exit")
    return p


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_level)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    orchestrator = RecoveryOrchestrator(config)
    try:
        if args.once:
            asyncio.run(orchestrator.tick())
        else:
            asyncio.run(orchestrator.run_forever())
    except LogReadError as e:
        logger.critical("%s", e)
        raise SystemExit(1)
    except KeyboardInterrupt:
        logger.info("Stopping sunrise monitoring service")


if __name__ == "__main__":
    main()
