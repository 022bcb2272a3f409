from __future__ import annotations

import re
from datetime import date

import pytest

from things_cli.escaping import escape_applescript_string, quote
from things_cli.models import (
    CompleteTodo,
    ContainerRef,
    CreateArea,
    CreateProject,
    CreateTag,
    ListAreas,
    ListProjects,
    ListTags,
    QuickEntry,
    UpdateTodo,
)
from things_cli.scripts import render_script
from things_cli.validators import build_create_todo, build_list_todos, build_list_todos_json

_UNESCAPED_QUOTE = re.compile(r'(?<!\\)"')


def test_escape_replaces_only_double_quotes() -> None:
    assert escape_applescript_string('Say "hi" to C:\\temp & co') == 'Say \\"hi\\" to C:\\temp & co'


@pytest.mark.parametrize("text", ['"', 'a"b', '""', 'quote " in "middle"', 'tail"'])
def test_escaped_text_has_no_bare_quotes(text: str) -> None:
    assert _UNESCAPED_QUOTE.search(escape_applescript_string(text)) is None


def test_quote_wraps_escaped_text() -> None:
    assert quote('The "Plan"') == '"The \\"Plan\\""'


def test_create_todo_script_orders_properties_attachment_and_due_date() -> None:
    command = build_create_todo("Buy milk", due="2024-01-15", tags="Home,Urgent", list_name="Today")

    assert render_script(command) == "\n".join(
        [
            'tell application "Things3"',
            '  set newToDo to make new to do with properties {name:"Buy milk", tag names:"Home, Urgent"}'
            ' at beginning of list "Today"',
            "  set tempDate to current date",
            "  set day of tempDate to 1",
            "  set year of tempDate to 2024",
            "  set month of tempDate to 1",
            "  set day of tempDate to 15",
            "  set time of tempDate to 0",
            "  set due date of newToDo to tempDate",
            "end tell",
        ]
    )


def test_create_todo_script_escapes_every_user_value() -> None:
    command = build_create_todo('Read "Dune"', notes='Chapter "1"', tags='Books,"Sci-Fi"', project='The "Reading" List')
    script = render_script(command)

    assert 'name:"Read \\"Dune\\""' in script
    assert 'notes:"Chapter \\"1\\""' in script
    assert 'tag names:"Books, \\"Sci-Fi\\""' in script
    assert 'at beginning of project "The \\"Reading\\" List"' in script


def test_create_todo_script_without_options_has_no_clause_or_date() -> None:
    script = render_script(build_create_todo("Call mom"))
    assert 'set newToDo to make new to do with properties {name:"Call mom"}\n' in script
    assert "at beginning of" not in script
    assert "tempDate" not in script


def test_update_script_emits_only_supplied_fields() -> None:
    script = render_script(UpdateTodo(todo_id="T1", notes="new notes"))
    lines = script.splitlines()

    assert lines[1:3] == ['  set aTodo to to do id "T1"', "  set todoName to name of aTodo"]
    assert '  set notes of aTodo to "new notes"' in lines
    assert not any("set name of aTodo" in line for line in lines)
    assert not any("project" in line or "area" in line for line in lines)
    assert lines[-2:] == ["  return todoName", "end tell"]


def test_update_script_renames_and_reports_new_name() -> None:
    script = render_script(UpdateTodo(todo_id="T1", title="Renamed"))
    assert '  set name of aTodo to "Renamed"\n  set todoName to "Renamed"' in script


def test_update_script_moves_and_detaches_independently() -> None:
    command = UpdateTodo(
        todo_id="T1",
        tags=("Work", "Urgent"),
        due_date=date(2025, 3, 9),
        area=ContainerRef("area_id", "A9"),
        remove_project=True,
    )
    script = render_script(command)

    assert '  set tag names of aTodo to "Work, Urgent"' in script
    assert "  set due date of aTodo to tempDate" in script
    assert "  delete project of aTodo" in script
    assert '  set area of aTodo to area id "A9"' in script
    assert script.index("set due date of aTodo") < script.index("delete project of aTodo")


def test_complete_script_captures_name_before_status_change() -> None:
    script = render_script(CompleteTodo(todo_id='odd"id'))
    assert script.splitlines() == [
        'tell application "Things3"',
        '  set aTodo to to do id "odd\\"id"',
        "  set todoName to name of aTodo",
        "  set status of aTodo to completed",
        "  return todoName",
        "end tell",
    ]


def test_list_script_for_named_list_reads_list_directly() -> None:
    script = render_script(build_list_todos("Today"))
    assert '  set todoList to to dos of list "Today"' in script
    assert "try" not in script
    assert "project" not in script
    assert "area" not in script


def test_list_script_for_other_names_nests_four_fallbacks() -> None:
    script = render_script(build_list_todos("Errands", include_ids=True))

    assert script == "\n".join(
        [
            'tell application "Things3"',
            "  try",
            '    set todoList to to dos of project id "Errands"',
            "  on error",
            "    try",
            '      set todoList to to dos of project "Errands"',
            "    on error",
            "      try",
            '        set todoList to to dos of area id "Errands"',
            "      on error",
            '        set todoList to to dos of area "Errands"',
            "      end try",
            "    end try",
            "  end try",
            "  set todoData to {}",
            "  repeat with aTodo in todoList",
            "    set end of todoData to {name:(name of aTodo), id:(id of aTodo)}",
            "  end repeat",
            "  return todoData",
            "end tell",
        ]
    )


def test_list_json_script_tries_names_only_and_guards_optional_fields() -> None:
    script = render_script(build_list_todos_json("Errands"))

    assert '    set todoList to to dos of project "Errands"' in script
    assert '    set todoList to to dos of area "Errands"' in script
    assert "project id" not in script
    assert "area id" not in script
    for key in ("dueDate", "activationDate", "completionDate", "cancellationDate", "project", "area"):
        assert f"set todoRecord to todoRecord & {{{key}:null}}" in script
    assert "set todoRecord to todoRecord & {creationDate:(creation date of aTodo as string)}" in script
    assert "{creationDate:null}" not in script


def test_project_area_and_tag_scripts() -> None:
    project = render_script(CreateProject(name="Garden", notes="Spring", area="Home"))
    assert 'make new project with properties {name:"Garden", notes:"Spring"}' in project
    assert '  set area of newProject to area "Home"' in project

    assert 'make new area with properties {name:"Health"}' in render_script(CreateArea(name="Health"))
    assert 'make new tag with properties {name:"Urgent"}' in render_script(CreateTag(name="Urgent"))


def test_enumeration_scripts_optionally_include_ids() -> None:
    assert "set end of projectNames to name of aProject" in render_script(ListProjects())
    assert "{name:(name of aProject), id:(id of aProject)}" in render_script(ListProjects(include_ids=True))
    assert "{name:(name of anArea), id:(id of anArea)}" in render_script(ListAreas(include_ids=True))
    assert "set end of tagNames to name of aTag" in render_script(ListTags())


def test_quick_entry_values_are_escaped() -> None:
    script = render_script(QuickEntry(title='Idea "X"', notes="details"))
    assert 'show quick entry panel with properties {name:"Idea \\"X\\"", notes:"details"}' in script
    assert "  show quick entry panel\n" in render_script(QuickEntry())


def test_render_script_uses_given_app_name() -> None:
    assert render_script(ListTags(), app_name="Things").startswith('tell application "Things"\n')


def test_render_script_rejects_unknown_command() -> None:
    with pytest.raises(TypeError):
        render_script(object())
