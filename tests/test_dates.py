from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from things_cli.dates import (
    date_statements,
    format_applescript_date,
    parse_applescript_date,
    to_iso_utc,
    validate_date_string,
)
from things_cli.models import ValidationError


def test_validate_date_string_accepts_strict_iso_day() -> None:
    assert validate_date_string("2024-01-15") == date(2024, 1, 15)


@pytest.mark.parametrize("text", ["2024-1-15", "15-01-2024", "2024/01/15", "2024-01-15T00:00", "tomorrow"])
def test_validate_date_string_rejects_wrong_shape(text: str) -> None:
    with pytest.raises(ValidationError, match="YYYY-MM-DD"):
        validate_date_string(text)


def test_validate_date_string_rejects_impossible_calendar_day() -> None:
    with pytest.raises(ValidationError, match="Invalid due date provided"):
        validate_date_string("2023-02-29")


def test_validate_date_string_rejects_empty() -> None:
    with pytest.raises(ValidationError, match="cannot be empty"):
        validate_date_string("")


def test_date_statements_pin_day_before_setting_month() -> None:
    assert date_statements(date(2024, 2, 29), "dueVar") == [
        "set dueVar to current date",
        "set day of dueVar to 1",
        "set year of dueVar to 2024",
        "set month of dueVar to 2",
        "set day of dueVar to 29",
        "set time of dueVar to 0",
    ]


def test_format_applescript_date_matches_host_rendering() -> None:
    rendered = format_applescript_date(datetime(2025, 8, 6, 20, 45, 46))
    assert rendered == "Wednesday 6 August 2025 at 20:45:46"


def test_parse_applescript_date_reads_host_rendering() -> None:
    parsed = parse_applescript_date("Wednesday 6 August 2025 at 20:45:46")
    assert parsed == datetime(2025, 8, 6, 20, 45, 46)


@pytest.mark.parametrize(
    "value",
    [
        datetime(2025, 8, 6, 20, 45, 46),
        datetime(2024, 2, 29, 0, 0, 0),
        datetime(1999, 12, 31, 23, 59, 59),
        datetime(2030, 1, 1, 7, 5, 9),
    ],
)
def test_display_format_round_trips_to_the_second(value: datetime) -> None:
    assert parse_applescript_date(format_applescript_date(value)) == value


def test_parse_applescript_date_falls_back_to_month_table() -> None:
    # the comma keeps the weekday attached, so only the regex path can read it
    parsed = parse_applescript_date("Wednesday, 6 August 2025 at 9:05:07")
    assert parsed == datetime(2025, 8, 6, 9, 5, 7)


@pytest.mark.parametrize(
    "text",
    [
        None,
        "",
        "missing value",
        "not a date",
        "Friday 31 February 2025 at 10:00:00",
        "Montag, 6. Augustus 2025 um 20:45:46",
    ],
)
def test_parse_applescript_date_returns_none_when_unreadable(text: str | None) -> None:
    assert parse_applescript_date(text) is None


def test_to_iso_utc_renders_z_suffix() -> None:
    value = datetime(2025, 8, 6, 20, 45, 46, tzinfo=timezone.utc)
    assert to_iso_utc(value) == "2025-08-06T20:45:46Z"


def test_to_iso_utc_treats_naive_values_as_local_time() -> None:
    value = datetime(2025, 8, 6, 20, 45, 46)
    expected = value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    assert to_iso_utc(value) == expected
