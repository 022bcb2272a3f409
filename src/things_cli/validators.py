"""Input validation: turn raw caller arguments into command objects.

Every check here runs before a script is rendered, so a rejected request
never reaches the host.
"""

from __future__ import annotations

from things_cli.constants import (
    ATTACHABLE_LISTS,
    CONTAINER_AREA,
    CONTAINER_AREA_ID,
    CONTAINER_PROJECT,
    CONTAINER_PROJECT_ID,
    LIST_FALLBACK_ORDER,
    LIST_JSON_FALLBACK_ORDER,
    TAG_INPUT_SEPARATOR,
)
from things_cli.containers import resolve_attachment, resolve_list_sources
from things_cli.dates import validate_date_string
from things_cli.models import (
    CompleteTodo,
    ContainerRef,
    CreateArea,
    CreateProject,
    CreateTag,
    CreateTodo,
    ListTodos,
    ListTodosJson,
    QuickEntry,
    UpdateTodo,
    ValidationError,
)


def _require_text(value: str | None, label: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{label} cannot be empty")
    return str(value)


def _optional_text(value: str | None) -> str | None:
    """Blank optional values count as not supplied."""
    if value is None or not str(value).strip():
        return None
    return str(value)


def parse_tags(text: str | None) -> tuple[str, ...]:
    """Split a comma separated tag string, keeping entry order and dropping blanks."""
    if not text:
        return ()
    return tuple(part.strip() for part in text.split(TAG_INPUT_SEPARATOR) if part.strip())


def _validate_list_name(list_name: str | None) -> str | None:
    list_name = _optional_text(list_name)
    if list_name is not None and list_name not in ATTACHABLE_LISTS:
        raise ValidationError(f"Invalid list. Valid lists are: {', '.join(ATTACHABLE_LISTS)}")
    return list_name


def build_create_todo(
    title: str | None,
    *,
    notes: str | None = None,
    due: str | None = None,
    tags: str | None = None,
    list_name: str | None = None,
    project: str | None = None,
    project_id: str | None = None,
    area: str | None = None,
    area_id: str | None = None,
) -> CreateTodo:
    title = _require_text(title, "To-do title")
    due_date = validate_date_string(due) if due else None
    target = resolve_attachment(
        list_name=_validate_list_name(list_name),
        project_id=_optional_text(project_id),
        project=_optional_text(project),
        area_id=_optional_text(area_id),
        area=_optional_text(area),
    )
    return CreateTodo(
        title=title,
        notes=_optional_text(notes),
        tags=parse_tags(tags),
        due_date=due_date,
        target=target,
    )


def _pick_target(id_value: str | None, name_value: str | None, id_kind: str, name_kind: str) -> ContainerRef | None:
    id_value = _optional_text(id_value)
    if id_value is not None:
        return ContainerRef(id_kind, id_value)
    name_value = _optional_text(name_value)
    if name_value is not None:
        return ContainerRef(name_kind, name_value)
    return None


def build_update_todo(
    todo_id: str | None,
    *,
    title: str | None = None,
    notes: str | None = None,
    tags: str | None = None,
    due: str | None = None,
    project: str | None = None,
    project_id: str | None = None,
    area: str | None = None,
    area_id: str | None = None,
    remove_project: bool = False,
    remove_area: bool = False,
) -> UpdateTodo:
    todo_id = _require_text(todo_id, "To-do ID")
    due_date = validate_date_string(due) if due else None
    # explicit removal wins over any move target for the same container
    project_ref = None if remove_project else _pick_target(project_id, project, CONTAINER_PROJECT_ID, CONTAINER_PROJECT)
    area_ref = None if remove_area else _pick_target(area_id, area, CONTAINER_AREA_ID, CONTAINER_AREA)
    return UpdateTodo(
        todo_id=todo_id,
        title=_optional_text(title),
        notes=_optional_text(notes),
        tags=parse_tags(tags) if _optional_text(tags) is not None else None,
        due_date=due_date,
        project=project_ref,
        area=area_ref,
        remove_project=bool(remove_project),
        remove_area=bool(remove_area),
    )


def build_complete_todo(todo_id: str | None) -> CompleteTodo:
    return CompleteTodo(todo_id=_require_text(todo_id, "To-do ID"))


def build_list_todos(container: str, *, include_ids: bool = False) -> ListTodos:
    container = _require_text(container, "Container")
    return ListTodos(
        sources=resolve_list_sources(container, LIST_FALLBACK_ORDER),
        include_ids=include_ids,
    )


def build_list_todos_json(container: str) -> ListTodosJson:
    container = _require_text(container, "Container")
    return ListTodosJson(sources=resolve_list_sources(container, LIST_JSON_FALLBACK_ORDER))


def build_create_project(name: str | None, *, notes: str | None = None, area: str | None = None) -> CreateProject:
    return CreateProject(
        name=_require_text(name, "Project name"),
        notes=_optional_text(notes),
        area=_optional_text(area),
    )


def build_create_area(name: str | None) -> CreateArea:
    return CreateArea(name=_require_text(name, "Area name"))


def build_create_tag(name: str | None) -> CreateTag:
    return CreateTag(name=_require_text(name, "Tag name"))


def build_quick_entry(title: str | None = None, notes: str | None = None) -> QuickEntry:
    return QuickEntry(title=_optional_text(title), notes=_optional_text(notes))
