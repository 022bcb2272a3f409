"""Date translation between Python values and the host's AppleScript date forms.

Writing never passes a formatted date literal to the host: a date literal is
parsed with the host's locale settings, so the same text can mean different
days on different machines. Instead a temporary is set to ``current date`` and
its components are overwritten one by one.

Reading goes the other way: the host renders dates as
``"Wednesday 6 August 2025 at 20:45:46"`` and :func:`parse_applescript_date`
turns that text back into a naive local ``datetime``.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any

from things_cli.constants import (
    DATE_VAR_NAME,
    DUE_DATE_PATTERN,
    HOST_DATE_FORMATS,
    HOST_DATE_PATTERN,
    MISSING_VALUE,
    MONTH_NAMES,
    WEEKDAY_NAMES,
)
from things_cli.models import ValidationError

_LEADING_WEEKDAY = re.compile(r"^[A-Za-z]+ ")


def validate_date_string(text: str | None) -> date:
    if not text:
        raise ValidationError("Date cannot be empty")
    if not DUE_DATE_PATTERN.match(text):
        raise ValidationError("Due date must be in YYYY-MM-DD format")
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError("Invalid due date provided") from exc


def date_statements(value: date, var_name: str = DATE_VAR_NAME) -> list[str]:
    """Return the statements that leave ``var_name`` holding ``value`` at midnight.

    The caller binds the temporary to a property afterwards.
    """
    return [
        f"set {var_name} to current date",
        # day 1 first: changing month from the 31st would otherwise overflow
        f"set day of {var_name} to 1",
        f"set year of {var_name} to {value.year}",
        f"set month of {var_name} to {value.month}",
        f"set day of {var_name} to {value.day}",
        f"set time of {var_name} to 0",
    ]


def format_applescript_date(value: datetime) -> str:
    weekday = WEEKDAY_NAMES[value.weekday()]
    month = MONTH_NAMES[value.month - 1]
    return (
        f"{weekday} {value.day} {month} {value.year} "
        f"at {value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )


def parse_applescript_date(text: Any) -> datetime | None:
    """Parse the host's date rendering; ``None`` when the text is empty, missing, or unreadable."""
    if not text or text == MISSING_VALUE:
        return None
    raw = str(text)
    cleaned = _LEADING_WEEKDAY.sub("", raw).replace(" at ", " ")
    for fmt in HOST_DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt)
        except ValueError:
            continue

    # strptime honours the process locale for month names; the table does not.
    match = HOST_DATE_PATTERN.search(raw)
    if match is None:
        return None
    day, month_name, year, hour, minute, second = match.groups()
    if month_name not in MONTH_NAMES:
        return None
    try:
        return datetime(
            int(year),
            MONTH_NAMES.index(month_name) + 1,
            int(day),
            int(hour),
            int(minute),
            int(second),
        )
    except ValueError:
        return None


def to_iso_utc(value: datetime) -> str:
    """Render ``value`` (naive values are local time) as UTC ISO-8601 text."""
    return value.astimezone(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
