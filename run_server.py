#!/usr/bin/env python3
"""Serve the tower puzzle API with uvicorn."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from core.settings import Settings

logger = logging.getLogger("run_server")

ENV_FILE = Path(__file__).parent / ".env"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tower puzzle web API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument(
        "--log-level",
        choices=["critical", "error", "warning", "info", "debug"],
        default="info",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    # Must happen before web.api is imported, it reads the environment at import
    if load_dotenv(ENV_FILE):
        logger.info("Loaded environment from %s", ENV_FILE)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        parser.error(str(e))

    logger.info(
        "Serving on %s:%d (hints: %s, tick: %.1fs)",
        args.host,
        args.port,
        settings.hint_strategy,
        settings.tick_seconds,
    )
    uvicorn.run(
        "web.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
