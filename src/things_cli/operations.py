"""One function per Things operation.

Each call validates its input, renders a single script, runs it through the
given runner in one round trip, and decodes the answer. ``runner`` is any
object with an ``app_name`` attribute and an ``execute(script)`` method.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote, urlencode

from things_cli.constants import DEFAULT_LIST, URL_SCHEME_BASE
from things_cli.decoding import coerce_list, decode_todo_records
from things_cli.models import ListAreas, ListProjects, ListTags, TodoRecord
from things_cli.scripts import render_script
from things_cli.validators import (
    _require_text,
    build_complete_todo,
    build_create_area,
    build_create_project,
    build_create_tag,
    build_create_todo,
    build_list_todos,
    build_list_todos_json,
    build_quick_entry,
    build_update_todo,
)


def _execute(runner: Any, command: Any) -> Any:
    return runner.execute(render_script(command, runner.app_name))


def _result_text(result: Any) -> str:
    return "" if result is None else str(result)


def add_todo(runner: Any, title: str, **options: Any) -> None:
    """Create a to-do; ``options`` are the keyword arguments of ``build_create_todo``."""
    _execute(runner, build_create_todo(title, **options))


def update_todo(runner: Any, todo_id: str, **options: Any) -> str:
    """Apply the supplied changes and return the to-do's (possibly new) name."""
    return _result_text(_execute(runner, build_update_todo(todo_id, **options)))


def complete_todo(runner: Any, todo_id: str) -> str:
    """Mark a to-do completed and return the name it had."""
    return _result_text(_execute(runner, build_complete_todo(todo_id)))


def list_todos(runner: Any, container: str = DEFAULT_LIST, *, include_ids: bool = False) -> list[Any]:
    return coerce_list(_execute(runner, build_list_todos(container, include_ids=include_ids)))


def list_todos_json(runner: Any, container: str = DEFAULT_LIST) -> list[TodoRecord]:
    return decode_todo_records(_execute(runner, build_list_todos_json(container)))


def add_project(runner: Any, name: str, *, notes: str | None = None, area: str | None = None) -> None:
    _execute(runner, build_create_project(name, notes=notes, area=area))


def list_projects(runner: Any, *, include_ids: bool = False) -> list[Any]:
    return coerce_list(_execute(runner, ListProjects(include_ids=include_ids)))


def add_area(runner: Any, name: str) -> None:
    _execute(runner, build_create_area(name))


def list_areas(runner: Any, *, include_ids: bool = False) -> list[Any]:
    return coerce_list(_execute(runner, ListAreas(include_ids=include_ids)))


def add_tag(runner: Any, name: str) -> None:
    _execute(runner, build_create_tag(name))


def list_tags(runner: Any) -> list[Any]:
    return coerce_list(_execute(runner, ListTags()))


def show_quick_entry(runner: Any, title: str | None = None, notes: str | None = None) -> None:
    _execute(runner, build_quick_entry(title, notes))


def build_things_url(command: str, params: dict[str, str]) -> str:
    query = urlencode(params, quote_via=quote)
    return f"{URL_SCHEME_BASE}{command}?{query}" if query else f"{URL_SCHEME_BASE}{command}"


def show_item(runner: Any, item_id: str) -> str:
    """Reveal a to-do, project, area, or built-in list in the app via the URL scheme."""
    url = build_things_url("show", {"id": _require_text(item_id, "Item ID")})
    runner.open_url(url)
    return url
