"""Exceptions, command objects, and decoded records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any


class ThingsCliError(RuntimeError):
    """Base class for every error surfaced to the caller."""


class ValidationError(ThingsCliError):
    """Raised when caller input is rejected before any script is built."""


class ConfigError(ThingsCliError):
    """Raised when the configuration file cannot be written."""


class ScriptExecutionError(ThingsCliError):
    """Raised when the host rejects a script; unclassified messages pass through verbatim."""

    category = "passthrough"

    def __init__(self, message: str, *, raw_message: str = "") -> None:
        super().__init__(message)
        self.raw_message = raw_message or message


class NotFoundError(ScriptExecutionError):
    category = "not_found"


class AppNotRunningError(ScriptExecutionError):
    category = "app_not_running"


class AppError(ScriptExecutionError):
    category = "app_error"


@dataclass(frozen=True)
class ContainerRef:
    """A home for a to-do: a named list, or a project/area addressed by id or name."""

    kind: str
    value: str


@dataclass(frozen=True)
class CreateTodo:
    title: str
    notes: str | None = None
    tags: tuple[str, ...] = ()
    due_date: date | None = None
    target: ContainerRef | None = None


@dataclass(frozen=True)
class UpdateTodo:
    todo_id: str
    title: str | None = None
    notes: str | None = None
    tags: tuple[str, ...] | None = None
    due_date: date | None = None
    project: ContainerRef | None = None
    area: ContainerRef | None = None
    remove_project: bool = False
    remove_area: bool = False


@dataclass(frozen=True)
class CompleteTodo:
    todo_id: str


@dataclass(frozen=True)
class ListTodos:
    sources: tuple[ContainerRef, ...]
    include_ids: bool = False


@dataclass(frozen=True)
class ListTodosJson:
    sources: tuple[ContainerRef, ...]


@dataclass(frozen=True)
class CreateProject:
    name: str
    notes: str | None = None
    area: str | None = None


@dataclass(frozen=True)
class ListProjects:
    include_ids: bool = False


@dataclass(frozen=True)
class CreateArea:
    name: str


@dataclass(frozen=True)
class ListAreas:
    include_ids: bool = False


@dataclass(frozen=True)
class CreateTag:
    name: str


@dataclass(frozen=True)
class ListTags:
    pass


@dataclass(frozen=True)
class QuickEntry:
    title: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class TodoRecord:
    """One to-do from the metadata listing; dates are ISO text, raw text, or None."""

    id: str
    name: str
    notes: str
    status: str
    tags: tuple[str, ...]
    creation_date: str | None
    modification_date: str | None
    due_date: str | None = None
    activation_date: str | None = None
    completion_date: str | None = None
    cancellation_date: str | None = None
    project: str | None = None
    area: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "notes": self.notes,
            "status": self.status,
            "tags": list(self.tags),
            "creationDate": self.creation_date,
            "modificationDate": self.modification_date,
            "dueDate": self.due_date,
            "activationDate": self.activation_date,
            "completionDate": self.completion_date,
            "cancellationDate": self.cancellation_date,
            "project": self.project,
            "area": self.area,
        }
