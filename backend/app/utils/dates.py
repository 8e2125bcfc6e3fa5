"""Date helpers: naive UTC clock and tolerant date-range parsing."""

import re
from datetime import date, datetime, timezone

_RANGE_SEPARATORS = re.compile(r"\s+(?:-|–|—|to)\s+", re.IGNORECASE)
# "June 10-16, 2026"
_SAME_MONTH_RANGE = re.compile(r"^([A-Za-z]+)\s+(\d{1,2})\s*[-–]\s*(\d{1,2}),?\s+(\d{4})$")

_FULL_FORMATS = ("%Y-%m-%d", "%B %d, %Y", "%b %d, %Y", "%B %d %Y", "%b %d %Y", "%d %B %Y", "%d %b %Y", "%m/%d/%Y")


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (matches the DB columns)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _parse_one(text: str, formats: tuple[str, ...]) -> date | None:
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_date_range(dates: str) -> tuple[date, date] | None:
    """Parse a free-text date range into (start, end).

    Accepts ISO ranges ("2026-11-01 - 2026-11-07"), " to " separators,
    month-name ranges ("Nov 1, 2026 - Nov 7, 2026", "Nov 1 - Nov 7, 2026")
    and same-month ranges ("November 1-7, 2026").

    Returns:
        (start, end) or None when the text cannot be parsed or end < start.
    """
    text = dates.strip()
    if not text:
        return None

    match = _SAME_MONTH_RANGE.match(text)
    if match:
        month, first, last, year = match.groups()
        start = _parse_one(f"{month} {first}, {year}", _FULL_FORMATS)
        end = _parse_one(f"{month} {last}, {year}", _FULL_FORMATS)
    else:
        parts = _RANGE_SEPARATORS.split(text, maxsplit=1)
        if len(parts) != 2:
            return None
        left, right = (p.strip().rstrip(",") for p in parts)
        end = _parse_one(right, _FULL_FORMATS)
        if end is None:
            return None
        start = _parse_one(left, _FULL_FORMATS)
        if start is None:
            # Borrow the end year so leap days parse; a start after the end belongs to the year before
            start = _parse_one(f"{left} {end.year}", _FULL_FORMATS)
            if start is not None and start > end:
                start = _parse_one(f"{left} {end.year - 1}", _FULL_FORMATS)

    if start is None or end is None or end < start:
        return None
    return start, end


def trip_length_days(start: date, end: date) -> int:
    """Inclusive number of days between start and end."""
    return (end - start).days + 1
