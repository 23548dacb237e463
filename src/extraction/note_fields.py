from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from parsers.contact_notes import Entry, ParsedNote
from parsers.value_normalizers import entry_text, parse_date, parse_money


@dataclass(frozen=True)
class FieldMapping:
    canonical_key: str
    group: str
    labels: Tuple[str, ...]
    value_type: str  # text, date, money, first_line, rest_lines


CANONICAL_FIELDS = (
    FieldMapping("estimate_number", "estimate", ("Estimate #", "Estimate"), "text"),
    FieldMapping("estimate_date", "estimate", ("Date",), "date"),
    FieldMapping("customer_name", "customer", ("Customer",), "first_line"),
    FieldMapping("customer_address", "customer", ("Customer",), "rest_lines"),
    FieldMapping("job_location", "location", ("Job Location",), "text"),
    FieldMapping("signature", "vendor", ("Signature",), "text"),
    FieldMapping("subtotal_amount", "totals", ("Subtotal",), "money"),
    FieldMapping(
        "sales_tax_amount", "totals", ("Sales Tax (3.965%)", "Sales Tax"), "money"
    ),
    FieldMapping("total_amount", "totals", ("Total",), "money"),
)


def _as_lines(value) -> List[str]:
    if isinstance(value, list):
        return value
    return [value]


def _find_entry(entries: List[Entry], labels: Tuple[str, ...]) -> Optional[Entry]:
    for label in labels:
        for entry in entries:
            if entry.label == label:
                return entry
    return None


def _transform_value(entry: Entry, value_type: str) -> Any:
    if value_type == "text":
        return entry_text(entry.value)
    if value_type == "date":
        text = entry_text(entry.value)
        return parse_date(text) or text
    if value_type == "money":
        return parse_money(entry_text(entry.value))
    if value_type == "first_line":
        return _as_lines(entry.value)[0]
    if value_type == "rest_lines":
        rest = _as_lines(entry.value)[1:]
        return "\n".join(rest) if rest else None
    return entry.value


def derive_canonical(note: ParsedNote) -> Dict[str, Any]:
    """
    Flatten the well-known entries of a parsed note into typed columns.
    Missing or unparseable values are left out.
    """
    canonical: Dict[str, Any] = {}

    for mapping in CANONICAL_FIELDS:
        entry = _find_entry(note.group(mapping.group), mapping.labels)
        if entry is None:
            continue
        transformed = _transform_value(entry, mapping.value_type)
        if transformed is not None:
            canonical[mapping.canonical_key] = transformed

    canonical["line_item_count"] = len(note.line_items)
    return canonical
