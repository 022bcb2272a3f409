"""Decoding of raw host results into clean Python values."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from things_cli.constants import DATE_FIELDS, SENTINEL_VALUES, TAG_SEPARATOR
from things_cli.dates import parse_applescript_date, to_iso_utc
from things_cli.models import TodoRecord

logger = logging.getLogger(__name__)


def coerce_list(raw: Any) -> list[Any]:
    if not raw or not isinstance(raw, (list, tuple)):
        return []
    return list(raw)


def normalize_sentinels(raw: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: None if isinstance(value, str) and value in SENTINEL_VALUES else value
        for key, value in raw.items()
    }


def split_tag_names(text: Any) -> list[str]:
    if not text or not isinstance(text, str):
        return []
    return text.split(TAG_SEPARATOR)


def _decode_date_field(field: str, value: Any) -> Any:
    if not value:
        return None
    parsed = parse_applescript_date(value)
    if parsed is None:
        # keep the raw text so one bad field does not drop the whole record
        logger.warning("Failed to parse date %s: %s", field, value)
        return value
    return to_iso_utc(parsed)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def decode_todo_record(raw: Mapping[str, Any]) -> TodoRecord:
    cleaned = normalize_sentinels(raw)
    dates = {field: _decode_date_field(field, cleaned.get(field)) for field in DATE_FIELDS}
    return TodoRecord(
        id=_text(cleaned.get("id")),
        name=_text(cleaned.get("name")),
        notes=_text(cleaned.get("notes")),
        status=_text(cleaned.get("status")),
        tags=tuple(split_tag_names(cleaned.get("tagNames"))),
        creation_date=dates["creationDate"],
        modification_date=dates["modificationDate"],
        due_date=dates["dueDate"],
        activation_date=dates["activationDate"],
        completion_date=dates["completionDate"],
        cancellation_date=dates["cancellationDate"],
        project=cleaned.get("project"),
        area=cleaned.get("area"),
    )


def decode_todo_records(raw: Any) -> list[TodoRecord]:
    records: list[TodoRecord] = []
    for entry in coerce_list(raw):
        if not isinstance(entry, Mapping):
            logger.warning("Skipping non-record entry in to-do listing: %r", entry)
            continue
        records.append(decode_todo_record(entry))
    return records
