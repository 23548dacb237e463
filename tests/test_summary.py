from __future__ import annotations

from extraction.note_fields import derive_canonical
from extraction.summary import render_summary, structured_sections
from parsers.contact_notes import ParsedNote, parse_contact_notes


def test_structured_sections_none_for_empty_note():
    assert structured_sections(None) is None
    assert structured_sections(ParsedNote()) is None
    note = parse_contact_notes("Total: $1")
    assert structured_sections(note) is note


def test_render_summary_sections(estimate_note):
    summary = render_summary(parse_contact_notes(estimate_note))
    blocks = summary.split("\n\n")
    assert [block.splitlines()[0] for block in blocks] == [
        "Estimate",
        "Customer",
        "Location",
        "Vendor",
        "Financials",
        "Line Items",
    ]
    assert "  Estimate #: 1042" in summary
    assert "    - Springfield, IL 62701" in summary
    assert "  - Downspout extension 4 $25.00 $100.00" in summary


def test_render_summary_empty():
    assert render_summary(parse_contact_notes("")) == ""


def test_derive_canonical(estimate_note):
    canonical = derive_canonical(parse_contact_notes(estimate_note))
    assert canonical == {
        "estimate_number": "1042",
        "estimate_date": "2024-01-02",
        "customer_name": "John Smith",
        "customer_address": "123 Main St\nSpringfield, IL 62701",
        "job_location": "123 Main St",
        "signature": "A. Contractor",
        "subtotal_amount": 1060.0,
        "sales_tax_amount": 42.03,
        "total_amount": 1102.03,
        "line_item_count": 2,
    }


def test_derive_canonical_keeps_unparsed_date_and_skips_missing():
    canonical = derive_canonical(parse_contact_notes("Date: sometime soon\nTotal: TBD"))
    assert canonical == {"estimate_date": "sometime soon", "line_item_count": 0}
