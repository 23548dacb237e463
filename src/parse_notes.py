from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from extraction.summary import render_summary
from parsers.contact_notes import parse_contact_notes


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Parse a single free-text contact note and print the structured result."
    )
    parser.add_argument(
        "source",
        help="Text file containing the note, or '-' to read from stdin",
    )
    parser.add_argument(
        "--format",
        default="json",
        choices=["json", "text"],
        help="Output as JSON (default) or as a plain-text summary",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    note = parse_contact_notes(read_source(args.source))
    if args.format == "text":
        print(render_summary(note))
    else:
        print(json.dumps(note.to_dict(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
