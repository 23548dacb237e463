from __future__ import annotations

from pathlib import Path

from extraction.pipeline import run_extraction
from ingestion.pipeline import import_command

SAMPLE_CSV = "contacts.csv"

ESTIMATE_NOTE = """Estimate
Estimate #: 1042
Date: 01/02/2024
Name Address:
John Smith
123 Main St
Springfield, IL 62701
Job Location:
123 Main St
DescriptionQtyRateTotal
Seamless gutter install 120 $8.00 $960.00
Downspout extension 4 $25.00 $100.00
Subtotal: $1,060.00
Sales Tax (3.965%): $42.03
Total: $1,102.03
Signature
A. Contractor"""


def build_sample_database(tmp_path: Path, samples_dir: Path) -> Path:
    """
    Create a SQLite DB populated from the sample contacts CSV with notes extracted.
    Returns the database path.
    """
    db_path = tmp_path / "contacts.db"
    import_command(samples_dir / SAMPLE_CSV, db_path)
    run_extraction(db_path)
    return db_path
