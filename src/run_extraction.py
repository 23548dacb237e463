from __future__ import annotations

import argparse
import logging
from pathlib import Path

from extraction.pipeline import run_extraction


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Parse the free-text notes of imported contacts into structured records."
    )
    parser.add_argument(
        "--db-path",
        type=Path,
        default=Path("data/contacts.db"),
        help="SQLite database file produced by run_import (default: data/contacts.db)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Optional limit on number of contacts to process",
    )
    parser.add_argument(
        "--retry-errors",
        action="store_true",
        help="Re-parse contacts whose previous extraction failed",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level))
    processed = run_extraction(
        db_path=args.db_path, limit=args.limit, retry_errors=args.retry_errors
    )
    print(f"Processed notes for {processed} contact(s)")


if __name__ == "__main__":
    main()

