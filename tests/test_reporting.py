from __future__ import annotations

from pathlib import Path

import pytest

duckdb = pytest.importorskip("duckdb")

from analytics.reporting import generate_reports
from .sample_data import build_sample_database


def test_generate_reports(tmp_path, samples_dir: Path):
    db_path = build_sample_database(tmp_path, samples_dir)
    output_dir = tmp_path / "reports"

    outputs = generate_reports(db_path, output_dir)

    assert set(outputs) == {
        "contacts",
        "contact_notes",
        "estimate_totals_by_stage",
        "extraction_status_summary",
    }
    assert all(path.exists() for path in outputs.values())

    con = duckdb.connect()

    contact_count = con.execute(
        "SELECT COUNT(*) FROM read_parquet(?)", [str(outputs["contacts"])]
    ).fetchone()[0]
    assert contact_count == 4

    stage_row = con.execute(
        """
        SELECT estimate_count, total_sum, line_item_sum
        FROM read_parquet(?)
        WHERE stage = 'Estimate Sent'
        """,
        [str(outputs["estimate_totals_by_stage"])],
    ).fetchone()
    assert stage_row is not None
    assert stage_row[0] == 1
    assert stage_row[1] == pytest.approx(1102.03)
    assert stage_row[2] == 2

    lead_row = con.execute(
        "SELECT estimate_count FROM read_parquet(?) WHERE stage = 'Lead'",
        [str(outputs["estimate_totals_by_stage"])],
    ).fetchone()
    assert lead_row[0] == 1

    statuses = dict(
        con.execute(
            "SELECT status, contact_count FROM read_parquet(?)",
            [str(outputs["extraction_status_summary"])],
        ).fetchall()
    )
    assert statuses == {"skipped": 1, "success": 3}

    con.close()
