"""Loose GEDCOM date handling.

Dates in the wild look like ``ABT 1890``, ``BET 1850 AND 1855``, ``3 FEB 1902``
or ``12 March 1911``. Nothing here validates a calendar; the helpers only pull
out whatever day/month/year they can find.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date

UNKNOWN_DATE_SORT_KEY = 9999.0
UNDATED_LABEL = "Undated"

MONTHS = ["JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC"]
MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

_MONTH_LOOKUP: dict[str, int] = {abbr: idx + 1 for idx, abbr in enumerate(MONTHS)}
_MONTH_LOOKUP.update({name.upper(): idx + 1 for idx, name in enumerate(MONTH_NAMES)})

_QUALIFIER_RE = re.compile(r"\b(?:ABT|ABOUT|EST|BEF|AFT|BET|AND)\b|/")
_YEAR_RE = re.compile(r"\b(\d{4})\b")
_DAY_RE = re.compile(r"\d{1,2}", re.ASCII)
# Longest alternatives first so "MARCH" wins over "MAR".
_MONTH_RE = re.compile(
    r"\b(" + "|".join(sorted(_MONTH_LOOKUP, key=len, reverse=True)) + r")\b"
)


@dataclass(frozen=True)
class PartialDate:
    day: int | None = None
    month: int | None = None
    year: int | None = None

    @property
    def is_complete(self) -> bool:
        return self.day is not None and self.month is not None and self.year is not None


def _clean(raw: str) -> str:
    return " ".join(_QUALIFIER_RE.sub(" ", raw.upper()).split())


def extract_year(raw: str | None) -> str | None:
    """First standalone four-digit run in ``raw``, as text."""
    if not raw:
        return None
    match = _YEAR_RE.search(raw)
    return match.group(1) if match else None


def parse_month_day_year(raw: str | None) -> PartialDate:
    if not raw:
        return PartialDate()
    cleaned = _clean(raw)

    year_match = _YEAR_RE.search(cleaned)
    year = int(year_match.group(1)) if year_match else None

    month_match = _MONTH_RE.search(cleaned)
    if not month_match:
        return PartialDate(year=year)
    month = _MONTH_LOOKUP[month_match.group(1)]

    day = None
    tokens = cleaned.split(" ")
    if month_match.group(1) in tokens:
        position = tokens.index(month_match.group(1))
        if position > 0:
            candidate = tokens[position - 1]
            if _DAY_RE.fullmatch(candidate) and 1 <= int(candidate) <= 31:
                day = int(candidate)
    return PartialDate(day=day, month=month, year=year)


def parse_gedcom_date(raw: str | None) -> float:
    """Comparable number for ordering events: ``year + (month - 1) / 12``.

    Strings without a four-digit year map to ``UNKNOWN_DATE_SORT_KEY`` so they
    sort after every real date.
    """
    parts = parse_month_day_year(raw)
    if parts.year is None:
        return UNKNOWN_DATE_SORT_KEY
    if parts.month is None:
        return float(parts.year)
    return parts.year + (parts.month - 1) / 12


def format_full_date(raw: str | None) -> str:
    fallback = raw or UNDATED_LABEL
    parts = parse_month_day_year(raw)
    if not parts.is_complete:
        return fallback
    try:
        resolved = date(parts.year, parts.month, parts.day)
    except ValueError:
        return fallback
    return f"{MONTH_NAMES[resolved.month - 1]} {resolved.day}, {resolved.year}"
