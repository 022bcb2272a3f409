"""AppleScript rendering for every Things operation.

Each command object from :mod:`things_cli.models` maps to exactly one script.
All quoting goes through :func:`things_cli.escaping.quote` and every ordering
rule (property order, attachment clause, date binding after creation) lives
here rather than at the call sites.
"""

from __future__ import annotations

from typing import Any, Callable

from things_cli.constants import APP_NAME, DATE_VAR_NAME, SCRIPT_INDENT, TAG_SEPARATOR
from things_cli.containers import container_specifier, render_source_fallback
from things_cli.dates import date_statements
from things_cli.escaping import quote
from things_cli.models import (
    CompleteTodo,
    CreateArea,
    CreateProject,
    CreateTag,
    CreateTodo,
    ListAreas,
    ListProjects,
    ListTags,
    ListTodos,
    ListTodosJson,
    QuickEntry,
    UpdateTodo,
)

# (record key, AppleScript expression) pairs for the metadata listing.
_REQUIRED_RECORD_FIELDS = (
    ("id", "id of aTodo"),
    ("name", "name of aTodo"),
    ("notes", "notes of aTodo"),
    ("status", "status of aTodo as string"),
    ("tagNames", "tag names of aTodo"),
    ("creationDate", "creation date of aTodo as string"),
    ("modificationDate", "modification date of aTodo as string"),
)
_OPTIONAL_RECORD_FIELDS = (
    ("dueDate", "due date of aTodo as string"),
    ("activationDate", "activation date of aTodo as string"),
    ("completionDate", "completion date of aTodo as string"),
    ("cancellationDate", "cancellation date of aTodo as string"),
    ("project", "name of project of aTodo"),
    ("area", "name of area of aTodo"),
)


def _indent(lines: list[str], depth: int = 1) -> list[str]:
    pad = SCRIPT_INDENT * depth
    return [f"{pad}{line}" if line else line for line in lines]


def _tell(app_name: str, body: list[str]) -> str:
    return "\n".join([f"tell application {quote(app_name)}", *body, "end tell"])


def _property_list(pairs: list[tuple[str, str | None]]) -> str:
    rendered = [f"{key}:{quote(value)}" for key, value in pairs if value]
    return "{" + ", ".join(rendered) + "}"


def _bind_date(value: Any, target: str) -> list[str]:
    return [*date_statements(value, DATE_VAR_NAME), f"set {target} to {DATE_VAR_NAME}"]


def _enumerate_names(source: str, data_var: str, item_var: str, include_ids: bool) -> list[str]:
    if include_ids:
        entry = f"{{name:(name of {item_var}), id:(id of {item_var})}}"
    else:
        entry = f"name of {item_var}"
    return [
        f"set {data_var} to {{}}",
        f"repeat with {item_var} in {source}",
        f"{SCRIPT_INDENT}set end of {data_var} to {entry}",
        "end repeat",
        f"return {data_var}",
    ]


def _render_create_todo(command: CreateTodo) -> list[str]:
    properties = _property_list(
        [
            ("name", command.title),
            ("notes", command.notes),
            ("tag names", TAG_SEPARATOR.join(command.tags)),
        ]
    )
    statement = f"set newToDo to make new to do with properties {properties}"
    if command.target is not None:
        statement += f" at beginning of {container_specifier(command.target)}"
    lines = [statement]
    # the due date property cannot be passed at creation time
    if command.due_date is not None:
        lines.extend(_bind_date(command.due_date, "due date of newToDo"))
    return _indent(lines)


def _render_update_todo(command: UpdateTodo) -> list[str]:
    lines = [
        f"set aTodo to to do id {quote(command.todo_id)}",
        "set todoName to name of aTodo",
    ]
    if command.title is not None:
        lines.append(f"set name of aTodo to {quote(command.title)}")
        lines.append(f"set todoName to {quote(command.title)}")
    if command.notes is not None:
        lines.append(f"set notes of aTodo to {quote(command.notes)}")
    if command.tags is not None:
        lines.append(f"set tag names of aTodo to {quote(TAG_SEPARATOR.join(command.tags))}")
    if command.due_date is not None:
        lines.extend(_bind_date(command.due_date, "due date of aTodo"))

    if command.remove_project:
        lines.append("delete project of aTodo")
    elif command.project is not None:
        lines.append(f"set project of aTodo to {container_specifier(command.project)}")
    if command.remove_area:
        lines.append("delete area of aTodo")
    elif command.area is not None:
        lines.append(f"set area of aTodo to {container_specifier(command.area)}")

    lines.append("return todoName")
    return _indent(lines)


def _render_complete_todo(command: CompleteTodo) -> list[str]:
    return _indent(
        [
            f"set aTodo to to do id {quote(command.todo_id)}",
            "set todoName to name of aTodo",
            "set status of aTodo to completed",
            "return todoName",
        ]
    )


def _render_list_todos(command: ListTodos) -> list[str]:
    data_var = "todoData" if command.include_ids else "todoNames"
    return [
        *render_source_fallback(command.sources, "todoList"),
        *_indent(_enumerate_names("todoList", data_var, "aTodo", command.include_ids)),
    ]


def _render_list_todos_json(command: ListTodosJson) -> list[str]:
    loop = ["set todoRecord to {}"]
    for key, expression in _REQUIRED_RECORD_FIELDS:
        loop.append(f"set todoRecord to todoRecord & {{{key}:({expression})}}")
    # an unset optional property raises; substitute null instead of losing the record
    for key, expression in _OPTIONAL_RECORD_FIELDS:
        loop.extend(
            [
                "try",
                f"{SCRIPT_INDENT}set todoRecord to todoRecord & {{{key}:({expression})}}",
                "on error",
                f"{SCRIPT_INDENT}set todoRecord to todoRecord & {{{key}:null}}",
                "end try",
            ]
        )
    loop.append("set end of todoData to todoRecord")
    body = [
        "set todoData to {}",
        "repeat with aTodo in todoList",
        *_indent(loop),
        "end repeat",
        "return todoData",
    ]
    return [*render_source_fallback(command.sources, "todoList"), *_indent(body)]


def _render_create_project(command: CreateProject) -> list[str]:
    properties = _property_list([("name", command.name), ("notes", command.notes)])
    lines = [f"set newProject to make new project with properties {properties}"]
    if command.area:
        lines.append(f"set area of newProject to area {quote(command.area)}")
    return _indent(lines)


def _render_list_projects(command: ListProjects) -> list[str]:
    data_var = "projectData" if command.include_ids else "projectNames"
    return _indent(
        [
            "set projectList to projects",
            *_enumerate_names("projectList", data_var, "aProject", command.include_ids),
        ]
    )


def _render_create_area(command: CreateArea) -> list[str]:
    return _indent([f"make new area with properties {_property_list([('name', command.name)])}"])


def _render_list_areas(command: ListAreas) -> list[str]:
    data_var = "areaData" if command.include_ids else "areaNames"
    return _indent(
        [
            "set areaList to areas",
            *_enumerate_names("areaList", data_var, "anArea", command.include_ids),
        ]
    )


def _render_create_tag(command: CreateTag) -> list[str]:
    return _indent([f"make new tag with properties {_property_list([('name', command.name)])}"])


def _render_list_tags(command: ListTags) -> list[str]:
    return _indent(["set tagList to tags", *_enumerate_names("tagList", "tagNames", "aTag", False)])


def _render_quick_entry(command: QuickEntry) -> list[str]:
    if command.title or command.notes:
        properties = _property_list([("name", command.title), ("notes", command.notes)])
        return _indent([f"show quick entry panel with properties {properties}"])
    return _indent(["show quick entry panel"])


_RENDERERS: dict[type, Callable[[Any], list[str]]] = {
    CreateTodo: _render_create_todo,
    UpdateTodo: _render_update_todo,
    CompleteTodo: _render_complete_todo,
    ListTodos: _render_list_todos,
    ListTodosJson: _render_list_todos_json,
    CreateProject: _render_create_project,
    ListProjects: _render_list_projects,
    CreateArea: _render_create_area,
    ListAreas: _render_list_areas,
    CreateTag: _render_create_tag,
    ListTags: _render_list_tags,
    QuickEntry: _render_quick_entry,
}


def render_script(command: Any, app_name: str = APP_NAME) -> str:
    renderer = _RENDERERS.get(type(command))
    if renderer is None:
        raise TypeError(f"no script renderer for {type(command).__name__}")
    return _tell(app_name, renderer(command))
