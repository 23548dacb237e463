from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

LOGGER = logging.getLogger(__name__)

# Whitespace as ECMAScript trim() defines it: includes U+FEFF, excludes \x1c-\x1f.
TRIM_CHARS = (
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)
_TRIM_CLASS = "[" + re.escape(TRIM_CHARS) + "]"

KEY_VALUE_RE = re.compile(r"^([^:]+):" + _TRIM_CLASS + r"*([^\r\n\u2028\u2029]*)$")
LINE_BREAK_RE = re.compile(r"\r?\n")
NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
WHITESPACE_RE = re.compile(r"\s+")

GROUP_NAMES = ("estimate", "customer", "location", "vendor", "totals", "other")
LEFTOVER_LABEL = "Additional Details"

EntryValue = Union[str, List[str]]


@dataclass(frozen=True)
class FieldMeta:
    label: str
    group: str
    multi_line: bool = False
    treat_as_line_items: bool = False


@dataclass
class Entry:
    label: str
    value: EntryValue

    def to_dict(self) -> Dict[str, Any]:
        value = list(self.value) if isinstance(self.value, list) else self.value
        return {"label": self.label, "value": value}


@dataclass
class ParsedNote:
    """
    Structured view of a free-text contact note.
    Every group is always present, in source order, even when empty.
    """

    estimate: List[Entry] = field(default_factory=list)
    customer: List[Entry] = field(default_factory=list)
    location: List[Entry] = field(default_factory=list)
    vendor: List[Entry] = field(default_factory=list)
    totals: List[Entry] = field(default_factory=list)
    other: List[Entry] = field(default_factory=list)
    line_items: List[str] = field(default_factory=list)

    def group(self, name: str) -> List[Entry]:
        if name not in GROUP_NAMES:
            raise KeyError(name)
        return getattr(self, name)

    def is_empty(self) -> bool:
        return not self.line_items and not any(self.group(name) for name in GROUP_NAMES)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            name: [entry.to_dict() for entry in self.group(name)] for name in GROUP_NAMES
        }
        data["lineItems"] = list(self.line_items)
        return data


FIELD_METADATA: Dict[str, FieldMeta] = {
    "estimate": FieldMeta("Estimate", "estimate"),
    "estimate number": FieldMeta("Estimate #", "estimate"),
    "date": FieldMeta("Date", "estimate"),
    "name address": FieldMeta("Customer", "customer", multi_line=True),
    "job location": FieldMeta("Job Location", "location", multi_line=True),
    "signature": FieldMeta("Signature", "vendor", multi_line=True),
    "total": FieldMeta("Total", "totals"),
    "subtotal": FieldMeta("Subtotal", "totals"),
    "sales tax 3 965": FieldMeta("Sales Tax (3.965%)", "totals"),
    "sales tax": FieldMeta("Sales Tax", "totals"),
    "line items": FieldMeta("Line Items", "other", multi_line=True),
    "descriptionqtyratetotal": FieldMeta(
        "Line Items", "other", multi_line=True, treat_as_line_items=True
    ),
}


def trim(value: str) -> str:
    return value.strip(TRIM_CHARS)


def split_lines(text: Optional[str]) -> List[str]:
    if not text:
        return []
    lines = [trim(line) for line in LINE_BREAK_RE.split(text)]
    return [line for line in lines if line]


def normalize_key(label: str) -> str:
    """
    Canonical lookup key for a field label.
    Example: "Estimate #" -> "estimate number", "Sales Tax 3.965%" -> "sales tax 3 965"
    """
    key = trim(label).lower().replace("#", " number ")
    key = NON_ALNUM_RE.sub(" ", key)
    return WHITESPACE_RE.sub(" ", key).strip()


def _strip_trailing_colon(line: str) -> str:
    return line[:-1] if line.endswith(":") else line


def lookup_field(label: str) -> Optional[FieldMeta]:
    return FIELD_METADATA.get(normalize_key(label))


def _is_field_boundary(line: str) -> bool:
    if KEY_VALUE_RE.match(line):
        return True
    return lookup_field(_strip_trailing_colon(line)) is not None


def collect_value_lines(lines: List[str], start: int) -> Tuple[List[str], int]:
    """
    Gather the lines that belong to the field whose header precedes ``start``.
    Returns (collected lines, index of the first line not consumed).
    """
    collected: List[str] = []
    index = start

    while index < len(lines):
        candidate = lines[index]
        if not candidate:
            index += 1
            continue
        if _is_field_boundary(candidate):
            break
        collected.append(candidate)
        index += 1

    return collected, index


class _NoteBuilder:
    def __init__(self) -> None:
        self.note = ParsedNote()
        self.leftover: List[str] = []

    def flush_leftover(self) -> None:
        if not self.leftover:
            return
        LOGGER.debug("Flushing %d unrecognised line(s)", len(self.leftover))
        self.note.other.append(Entry(LEFTOVER_LABEL, list(self.leftover)))
        self.leftover = []

    def add(self, meta: Optional[FieldMeta], fallback_label: str, values: List[str]) -> None:
        if meta is not None and meta.treat_as_line_items:
            self.note.line_items.extend(values)
            return

        label = meta.label if meta is not None else fallback_label
        if not label:
            return

        group = meta.group if meta is not None else "other"
        if (meta is not None and meta.multi_line) or len(values) > 1:
            value: EntryValue = list(values)
        else:
            value = values[0] if values else ""

        if not value:
            return
        self.note.group(group).append(Entry(label, value))


def parse_contact_notes(notes: Optional[str]) -> ParsedNote:
    """
    Turn an OCR'd estimate form (or any loosely labelled note) into grouped entries.
    Unrecognised lines between fields are kept under "Additional Details".
    """
    lines = split_lines(notes)
    builder = _NoteBuilder()

    index = 0
    while index < len(lines):
        line = lines[index]
        match = KEY_VALUE_RE.match(line)

        if match:
            builder.flush_leftover()
            raw_label = trim(match.group(1))
            meta = lookup_field(raw_label)
            inline_value = trim(match.group(2))

            if inline_value:
                builder.add(meta, raw_label, [inline_value])
                index += 1
            else:
                values, index = collect_value_lines(lines, index + 1)
                builder.add(meta, raw_label, values)
            continue

        header = _strip_trailing_colon(line)
        meta = lookup_field(header)
        if meta is not None:
            builder.flush_leftover()
            values, index = collect_value_lines(lines, index + 1)
            builder.add(meta, trim(header), values)
            continue

        builder.leftover.append(line)
        index += 1

    builder.flush_leftover()
    return builder.note
