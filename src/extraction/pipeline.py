from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Optional

from extraction.note_fields import derive_canonical
from extraction.summary import structured_sections
from parsers.contact_notes import parse_contact_notes

LOGGER = logging.getLogger(__name__)
EXTRACTOR_VERSION = "contact-notes-v1"


def _to_json(value):
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=False)


class NoteExtractionPipeline:
    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA foreign_keys = ON;")
        self._ensure_schema()

    def close(self) -> None:
        self.conn.close()

    def _ensure_schema(self) -> None:
        self.conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS processed_notes (
                contact_id INTEGER PRIMARY KEY,
                note_id INTEGER,
                status TEXT NOT NULL,
                error TEXT,
                extractor_version TEXT,
                processed_at TEXT DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY(contact_id) REFERENCES contacts(id) ON DELETE CASCADE
            );

            CREATE TABLE IF NOT EXISTS contact_notes (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                contact_id INTEGER UNIQUE NOT NULL,
                estimate_number TEXT,
                estimate_date TEXT,
                customer_name TEXT,
                customer_address TEXT,
                job_location TEXT,
                signature TEXT,
                subtotal_amount REAL,
                sales_tax_amount REAL,
                total_amount REAL,
                line_item_count INTEGER,
                parsed_json TEXT NOT NULL,
                created_at TEXT DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY(contact_id) REFERENCES contacts(id) ON DELETE CASCADE
            );
            """
        )
        self.conn.commit()

    def process_all(self, limit: Optional[int] = None, retry_errors: bool = False) -> int:
        params: tuple = (1 if retry_errors else 0,)
        limit_clause = ""
        if limit is not None:
            limit_clause = "LIMIT ?"
            params = params + (limit,)

        rows = self.conn.execute(
            f"""
            SELECT c.id, c.notes
            FROM contacts c
            LEFT JOIN processed_notes pn ON pn.contact_id = c.id
            WHERE pn.contact_id IS NULL OR (pn.status = 'error' AND ? = 1)
            ORDER BY c.id
            {limit_clause}
            """,
            params,
        ).fetchall()

        processed = 0
        for row in rows:
            processed += 1
            contact_id = row["id"]
            if not row["notes"]:
                self._record_status(contact_id, None, "skipped", "no notes")
                continue

            try:
                note = structured_sections(parse_contact_notes(row["notes"]))
                if note is None:
                    self._record_status(contact_id, None, "skipped", "no structured content")
                    continue
                note_id = self._insert_note(contact_id, derive_canonical(note), note.to_dict())
                self._record_status(contact_id, note_id, "success", None)
            except Exception as exc:  # pylint: disable=broad-except
                LOGGER.warning("Failed to extract notes for contact %s: %s", contact_id, exc)
                self._record_status(contact_id, None, "error", str(exc))

        self.conn.commit()
        LOGGER.info("Processed notes for %d contact(s)", processed)
        return processed

    def _record_status(
        self,
        contact_id: int,
        note_id: Optional[int],
        status: str,
        error: Optional[str],
    ) -> None:
        self.conn.execute(
            """
            INSERT INTO processed_notes (contact_id, note_id, status, error, extractor_version)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(contact_id) DO UPDATE SET
                note_id=excluded.note_id,
                status=excluded.status,
                error=excluded.error,
                extractor_version=excluded.extractor_version,
                processed_at=CURRENT_TIMESTAMP
            """,
            (contact_id, note_id, status, error, EXTRACTOR_VERSION),
        )

    def _insert_note(self, contact_id: int, canonical: dict, parsed: dict) -> int:
        columns = [
            "contact_id",
            "estimate_number",
            "estimate_date",
            "customer_name",
            "customer_address",
            "job_location",
            "signature",
            "subtotal_amount",
            "sales_tax_amount",
            "total_amount",
            "line_item_count",
            "parsed_json",
        ]
        values = [
            contact_id,
            canonical.get("estimate_number"),
            canonical.get("estimate_date"),
            canonical.get("customer_name"),
            canonical.get("customer_address"),
            canonical.get("job_location"),
            canonical.get("signature"),
            canonical.get("subtotal_amount"),
            canonical.get("sales_tax_amount"),
            canonical.get("total_amount"),
            canonical.get("line_item_count"),
            _to_json(parsed),
        ]
        placeholder = ", ".join(["?"] * len(columns))
        self.conn.execute("DELETE FROM contact_notes WHERE contact_id = ?", (contact_id,))
        cur = self.conn.execute(
            f"INSERT INTO contact_notes ({', '.join(columns)}) VALUES ({placeholder})",
            values,
        )
        return cur.lastrowid


def run_extraction(
    db_path: Path, limit: Optional[int] = None, retry_errors: bool = False
) -> int:
    pipeline = NoteExtractionPipeline(db_path)
    try:
        return pipeline.process_all(limit=limit, retry_errors=retry_errors)
    finally:
        pipeline.close()
