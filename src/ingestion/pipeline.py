from __future__ import annotations

import json
import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path

from parsers.contact_csv import ContactRow, load_contacts

LOGGER = logging.getLogger(__name__)
IMPORTER_VERSION = "contacts-csv-v1"


@dataclass
class ImportSummary:
    imported: int = 0
    skipped: int = 0
    errors: int = 0

    def __add__(self, other: "ImportSummary") -> "ImportSummary":
        return ImportSummary(
            imported=self.imported + other.imported,
            skipped=self.skipped + other.skipped,
            errors=self.errors + other.errors,
        )


class ContactImportPipeline:
    """
    Loads contact CSV exports into SQLite, skipping rows that were already imported.
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.conn = sqlite3.connect(self.db_path)
        self.conn.execute("PRAGMA foreign_keys = ON;")
        self._ensure_schema()

    def close(self) -> None:
        self.conn.close()

    def _ensure_schema(self) -> None:
        self.conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS contacts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                first_name TEXT NOT NULL,
                last_name TEXT,
                email TEXT,
                phone TEXT,
                company TEXT,
                job_title TEXT,
                job_function TEXT,
                stage TEXT,
                owner_email TEXT,
                tags TEXT,
                notes TEXT,
                sha256 TEXT UNIQUE,
                importer_version TEXT,
                source_filename TEXT,
                source_line INTEGER,
                import_ts TEXT DEFAULT CURRENT_TIMESTAMP
            );
            """
        )
        self.conn.commit()

    def import_directory(self, source_dir: Path) -> ImportSummary:
        """
        Import all .csv files under the provided directory (non-recursive).
        """
        summary = ImportSummary()
        for csv_path in sorted(source_dir.glob("*.csv")):
            summary = summary + self.import_file(csv_path)
        return summary

    def import_file(self, csv_path: Path) -> ImportSummary:
        contacts, errors = load_contacts(csv_path)
        summary = ImportSummary(errors=len(errors))

        for error in errors:
            LOGGER.warning(
                "Rejected %s line %d: %s", csv_path.name, error.line_number, error.message
            )

        for contact in contacts:
            if self._contact_exists(contact.sha256):
                LOGGER.info(
                    "Skipping %s from %s (already imported)",
                    contact.display_name,
                    csv_path.name,
                )
                summary.skipped += 1
                continue
            self._insert_contact(contact, csv_path.name)
            summary.imported += 1

        self.conn.commit()
        LOGGER.info(
            "Imported %d contact(s) from %s (%d skipped, %d rejected)",
            summary.imported,
            csv_path.name,
            summary.skipped,
            summary.errors,
        )
        return summary

    def _contact_exists(self, sha256: str) -> bool:
        cur = self.conn.execute(
            "SELECT 1 FROM contacts WHERE sha256 = ? LIMIT 1", (sha256,)
        )
        return cur.fetchone() is not None

    def _insert_contact(self, contact: ContactRow, source_filename: str) -> int:
        cur = self.conn.execute(
            """
            INSERT INTO contacts (
                first_name, last_name, email, phone, company, job_title,
                job_function, stage, owner_email, tags, notes, sha256,
                importer_version, source_filename, source_line
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                contact.first_name,
                contact.last_name,
                contact.email,
                contact.phone,
                contact.company,
                contact.job_title,
                contact.job_function,
                contact.stage,
                contact.owner_email,
                json.dumps(contact.tags),
                contact.notes,
                contact.sha256,
                IMPORTER_VERSION,
                source_filename,
                contact.line_number,
            ),
        )
        return cur.lastrowid


def import_command(source: Path, db_path: Path) -> ImportSummary:
    if not source.exists():
        raise FileNotFoundError(source)

    pipeline = ContactImportPipeline(db_path=db_path)
    try:
        if source.is_dir():
            return pipeline.import_directory(source)
        return pipeline.import_file(source)
    finally:
        pipeline.close()
