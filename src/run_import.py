from __future__ import annotations

import argparse
import logging
from pathlib import Path

from ingestion.pipeline import import_command


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Import contact CSV exports into the local SQLite store."
    )
    parser.add_argument(
        "--source",
        type=Path,
        default=Path("samples"),
        help="CSV file or directory of .csv files (default: ./samples)",
    )
    parser.add_argument(
        "--db-path",
        type=Path,
        default=Path("data/contacts.db"),
        help="SQLite database file (default: data/contacts.db)",
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

    summary = import_command(source=args.source, db_path=args.db_path)
    print(
        f"Imported {summary.imported} new contact(s) from {args.source} "
        f"({summary.skipped} already present, {summary.errors} rejected)"
    )


if __name__ == "__main__":
    main()
