from __future__ import annotations

import re
from datetime import datetime
from typing import List, Optional, Sequence, Union

_NUMBER = r"\d[\d,]*(?:\.\d+)?|\.\d+"
AMOUNT_RE = re.compile(
    r"\(\s*(?P<paren_currency>\$)?\s*(?P<paren_amount>" + _NUMBER + r")\s*\)"
    r"|(?P<minus>-)?(?P<currency>\$)?\s*(?P<amount>" + _NUMBER + r")"
)

DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%y",
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
)


def normalize_whitespace(value: str) -> str:
    return re.sub(r"\s+", " ", value or "").strip()


def entry_text(value: Union[str, Sequence[str], None]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return "\n".join(value)


def parse_date(value: str | None) -> Optional[str]:
    if not value:
        return None
    value = normalize_whitespace(value)
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date().isoformat()
        except ValueError:
            continue
    return None


def parse_money(value: str | None) -> Optional[float]:
    """
    Amount in the text, preferring the first one marked with a dollar sign:
    "$1,234.50" -> 1234.5, "($12.00)" -> -12.0, "(2 coats) $450" -> 450.0.
    """
    if not value:
        return None

    amounts = []
    for match in AMOUNT_RE.finditer(value):
        if match.group("paren_amount"):
            number, negative = match.group("paren_amount"), True
            has_currency = match.group("paren_currency") is not None
        else:
            number, negative = match.group("amount"), match.group("minus") is not None
            has_currency = match.group("currency") is not None
        amount = float(number.replace(",", ""))
        amounts.append((has_currency, -amount if negative else amount))

    if not amounts:
        return None
    for has_currency, amount in amounts:
        if has_currency:
            return amount
    return amounts[0][1]


def split_tags(value: str | None) -> List[str]:
    if not value:
        return []
    return [tag.strip() for tag in value.split(",") if tag.strip()]
