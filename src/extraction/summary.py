from __future__ import annotations

from typing import List, Optional

from parsers.contact_notes import GROUP_NAMES, Entry, ParsedNote

SECTION_TITLES = {
    "estimate": "Estimate",
    "customer": "Customer",
    "location": "Location",
    "vendor": "Vendor",
    "totals": "Financials",
    "other": "Additional Details",
}
LINE_ITEMS_TITLE = "Line Items"


def structured_sections(note: Optional[ParsedNote]) -> Optional[ParsedNote]:
    """
    Return the note only when there is something structured to show.
    """
    if note is None or note.is_empty():
        return None
    return note


def _render_entry(entry: Entry) -> List[str]:
    if isinstance(entry.value, list):
        return [f"  {entry.label}:"] + [f"    - {line}" for line in entry.value]
    return [f"  {entry.label}: {entry.value}"]


def render_summary(note: Optional[ParsedNote]) -> str:
    sections = structured_sections(note)
    if sections is None:
        return ""

    blocks: List[str] = []
    for name in GROUP_NAMES:
        entries = sections.group(name)
        if not entries:
            continue
        lines = [SECTION_TITLES[name]]
        for entry in entries:
            lines.extend(_render_entry(entry))
        blocks.append("\n".join(lines))

    if sections.line_items:
        lines = [LINE_ITEMS_TITLE] + [f"  - {item}" for item in sections.line_items]
        blocks.append("\n".join(lines))

    return "\n\n".join(blocks)
