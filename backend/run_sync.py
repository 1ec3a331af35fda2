from __future__ import annotations
import argparse

from jobsync.core.logging import configure_logging
from jobsync.crawlers.registry import ADAPTERS, DEFAULT_ROTATION, MANUAL_SOURCES, build_adapters
from jobsync.db.database import SessionLocal
from jobsync.db.init_db import init_db
from jobsync.services.sync_service import run_sync


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run one job sync pass and print the summary.")
    parser.add_argument(
        "--source",
        action="append",
        choices=sorted(ADAPTERS),
        help=f"source to run, repeatable (default: {', '.join(DEFAULT_ROTATION)})",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help=f"default rotation plus quota-limited sources ({', '.join(MANUAL_SOURCES)})",
    )
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> dict:
    args = parse_args(argv)
    configure_logging(args.log_level)
    names = args.source
    if args.all:
        names = DEFAULT_ROTATION + MANUAL_SOURCES

    init_db()
    db = SessionLocal()
    try:
        summary = run_sync(db, build_adapters(names))
    finally:
        db.close()
    return summary.as_dict()


if __name__ == "__main__":
    print(main())
