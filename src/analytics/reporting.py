from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

import duckdb


LOGGER = logging.getLogger(__name__)

RAW_EXPORTS = {
    "contacts": "SELECT * FROM source.contacts",
    "contact_notes": "SELECT * FROM source.contact_notes",
}

ANALYTIC_QUERIES = {
    "estimate_totals_by_stage": """
        SELECT
            COALESCE(c.stage, 'Unassigned') AS stage,
            COUNT(*) AS estimate_count,
            SUM(n.subtotal_amount) AS subtotal_sum,
            SUM(n.sales_tax_amount) AS sales_tax_sum,
            SUM(n.total_amount) AS total_sum,
            AVG(n.total_amount) AS avg_total,
            SUM(n.line_item_count) AS line_item_sum
        FROM source.contact_notes n
        JOIN source.contacts c ON c.id = n.contact_id
        GROUP BY COALESCE(c.stage, 'Unassigned')
        ORDER BY stage
    """,
    "extraction_status_summary": """
        SELECT
            status,
            COUNT(*) AS contact_count,
            LIST(DISTINCT error) AS reasons
        FROM source.processed_notes
        GROUP BY status
        ORDER BY status
    """,
}


def _copy_to_parquet(con: duckdb.DuckDBPyConnection, query: str, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.exists():
        output_path.unlink()
    con.execute(
        f"COPY ({query}) TO '{output_path}' (FORMAT 'parquet', COMPRESSION 'zstd')"
    )


def generate_reports(sqlite_path: Path, output_dir: Path) -> Dict[str, Path]:
    """
    Produce Parquet exports of contacts and their parsed notes.
    Returns mapping of report name -> file path.
    """
    sqlite_path = sqlite_path.resolve()
    output_dir.mkdir(parents=True, exist_ok=True)

    con = duckdb.connect()
    con.execute("INSTALL sqlite;")
    con.execute("LOAD sqlite;")
    con.execute(f"ATTACH '{sqlite_path}' AS source (TYPE SQLITE);")

    report_paths: Dict[str, Path] = {}

    try:
        for name, query in RAW_EXPORTS.items():
            dest = (output_dir / f"{name}.parquet").resolve()
            LOGGER.info("Exporting %s to %s", name, dest)
            _copy_to_parquet(con, query, dest)
            report_paths[name] = dest

        for name, query in ANALYTIC_QUERIES.items():
            dest = (output_dir / f"{name}.parquet").resolve()
            LOGGER.info("Exporting analytic view %s", name)
            _copy_to_parquet(con, query, dest)
            report_paths[name] = dest
    finally:
        con.close()

    return report_paths
