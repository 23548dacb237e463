from __future__ import annotations

import csv
import hashlib
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .value_normalizers import split_tags

CONTACT_COLUMNS: Dict[str, Tuple[str, ...]] = {
    "first_name": ("First Name", "first_name", "firstName"),
    "last_name": ("Last Name", "last_name", "lastName"),
    "email": ("Email", "email"),
    "phone": ("Phone", "Phone Number", "phone"),
    "company": ("Company", "Organization", "company"),
    "job_title": ("Job Title", "job_title", "Title"),
    "job_function": ("Function", "Job Function", "jobFunction"),
    "stage": ("Stage", "Pipeline Stage", "stage"),
    "owner_email": ("Owner", "Owner Email", "owner"),
    "tags": ("Tags", "labels", "tags"),
    "notes": ("Notes", "notes"),
}


@dataclass
class ContactRow:
    line_number: int
    sha256: str
    first_name: str
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    job_title: Optional[str] = None
    job_function: Optional[str] = None
    stage: Optional[str] = None
    owner_email: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    notes: Optional[str] = None

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


@dataclass(frozen=True)
class RowError:
    line_number: int
    message: str


def find_value(row: Dict[str, Optional[str]], aliases: Tuple[str, ...]) -> Optional[str]:
    """
    Return the first value among the column aliases that is not an empty string.
    Values are returned as written; whitespace-only cells count as present.
    """
    for alias in aliases:
        value = row.get(alias)
        if value is not None and value != "":
            return value
    return None


def _row_digest(row: Dict[str, Optional[str]]) -> str:
    canonical = json.dumps(
        {k: (v or "") for k, v in row.items() if k is not None},
        sort_keys=True,
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def parse_contact_row(
    row: Dict[str, Optional[str]], line_number: int
) -> Tuple[Optional[ContactRow], Optional[RowError]]:
    values = {name: find_value(row, aliases) for name, aliases in CONTACT_COLUMNS.items()}

    if not values["first_name"] and not values["last_name"]:
        return None, RowError(line_number, "First or last name required")

    tags = split_tags(values.pop("tags"))
    first_name = values.pop("first_name") or ""
    return (
        ContactRow(
            line_number=line_number,
            sha256=_row_digest(row),
            first_name=first_name,
            tags=tags,
            **values,
        ),
        None,
    )


def load_contacts(path: Path) -> Tuple[List[ContactRow], List[RowError]]:
    """
    Parse a contacts CSV export. Rows that cannot become contacts are returned
    as RowError values rather than raised.
    """
    contacts: List[ContactRow] = []
    errors: List[RowError] = []

    with path.open(newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise ValueError(f"{path.name} has no header row")

        for row in reader:
            contact, error = parse_contact_row(row, reader.line_num)
            if error:
                errors.append(error)
            elif contact:
                contacts.append(contact)

    return contacts, errors
