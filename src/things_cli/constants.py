"""List names, host sentinels, container fallback policies, and defaults."""

from __future__ import annotations

import re
from pathlib import Path

APP_NAME = "Things3"
APP_DISPLAY_NAME = "Things 3"

NAMED_LISTS = ("Inbox", "Today", "Anytime", "Someday", "Upcoming", "Logbook")
# Logbook only holds finished items; a new to-do cannot be placed there.
ATTACHABLE_LISTS = ("Inbox", "Today", "Anytime", "Someday", "Upcoming")
DEFAULT_LIST = "Inbox"

MISSING_VALUE = "missing value"
NULL_SENTINEL = "null"
SENTINEL_VALUES = frozenset({MISSING_VALUE, NULL_SENTINEL})

TAG_SEPARATOR = ", "
TAG_INPUT_SEPARATOR = ","

TODO_STATUSES = ("open", "completed", "canceled")
REQUIRED_DATE_FIELDS = ("creationDate", "modificationDate")
OPTIONAL_DATE_FIELDS = ("dueDate", "activationDate", "completionDate", "cancellationDate")
DATE_FIELDS = REQUIRED_DATE_FIELDS + OPTIONAL_DATE_FIELDS

MONTH_NAMES = (
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
)
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

DUE_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
HOST_DATE_PATTERN = re.compile(r"(\d{1,2}) ([A-Za-z]+) (\d{4}) at (\d{1,2}):(\d{2}):(\d{2})")
HOST_DATE_FORMATS = (
    "%d %B %Y %H:%M:%S",
    "%B %d, %Y %H:%M:%S",
    "%d %B %Y",
)

# Container kinds, in the vocabulary shared by the resolver and the script builder.
CONTAINER_LIST = "list"
CONTAINER_PROJECT_ID = "project_id"
CONTAINER_PROJECT = "project"
CONTAINER_AREA_ID = "area_id"
CONTAINER_AREA = "area"
CONTAINER_KINDS = (
    CONTAINER_LIST,
    CONTAINER_PROJECT_ID,
    CONTAINER_PROJECT,
    CONTAINER_AREA_ID,
    CONTAINER_AREA,
)

# Plain listings try ids before names; the JSON listing only tries names.
LIST_FALLBACK_ORDER = (
    CONTAINER_PROJECT_ID,
    CONTAINER_PROJECT,
    CONTAINER_AREA_ID,
    CONTAINER_AREA,
)
LIST_JSON_FALLBACK_ORDER = (CONTAINER_PROJECT, CONTAINER_AREA)
ATTACH_PRECEDENCE = CONTAINER_KINDS

DATE_VAR_NAME = "tempDate"
SCRIPT_INDENT = "  "

DEFAULT_CONFIG_PATH = Path("~/.things-cli/config.yaml")
CONFIG_PATH_ENV = "THINGS_CLI_CONFIG"
LOG_LEVEL_ENV = "THINGS_CLI_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_OSASCRIPT_BIN = "osascript"
DEFAULT_SCRIPT_TIMEOUT_SECONDS = 30.0
URL_SCHEME_BASE = "things:///"
