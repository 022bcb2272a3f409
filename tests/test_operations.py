from __future__ import annotations

from typing import Any

import pytest

from things_cli import operations
from things_cli.models import NotFoundError, ValidationError


class _FakeRunner:
    def __init__(self, result: Any = None, *, app_name: str = "Things3") -> None:
        self.app_name = app_name
        self.result = result
        self.scripts: list[str] = []
        self.urls: list[str] = []

    def execute(self, script: str) -> Any:
        self.scripts.append(script)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result

    def open_url(self, url: str) -> None:
        self.urls.append(url)


def test_add_todo_runs_one_script() -> None:
    runner = _FakeRunner()
    operations.add_todo(runner, "Buy milk", list_name="Today", tags="Home")
    assert len(runner.scripts) == 1
    assert 'at beginning of list "Today"' in runner.scripts[0]


def test_validation_failure_runs_nothing() -> None:
    runner = _FakeRunner()
    with pytest.raises(ValidationError):
        operations.add_todo(runner, "Buy milk", due="2024-02-30")
    with pytest.raises(ValidationError):
        operations.complete_todo(runner, " ")
    assert runner.scripts == []


def test_complete_and_update_return_host_name() -> None:
    runner = _FakeRunner("Write report")
    assert operations.complete_todo(runner, "T1") == "Write report"
    assert operations.update_todo(runner, "T1", notes="draft", remove_area=True) == "Write report"
    assert "delete area of aTodo" in runner.scripts[1]


def test_list_todos_normalizes_empty_results() -> None:
    assert operations.list_todos(_FakeRunner(None), "Today") == []
    assert operations.list_todos(_FakeRunner(""), "Today") == []
    assert operations.list_todos(_FakeRunner(["A", "B"]), "Today") == ["A", "B"]


def test_list_todos_with_ids_returns_records() -> None:
    runner = _FakeRunner([{"name": "Buy milk", "id": "A1"}])
    assert operations.list_todos(runner, "Errands", include_ids=True) == [{"name": "Buy milk", "id": "A1"}]
    assert 'project id "Errands"' in runner.scripts[0]


def test_list_todos_json_decodes_records() -> None:
    raw = [
        {
            "id": "T1",
            "name": "Write report",
            "notes": "",
            "status": "open",
            "tagNames": "Work, Urgent",
            "creationDate": "Wednesday 6 August 2025 at 20:45:46",
            "modificationDate": "Wednesday 6 August 2025 at 20:45:46",
            "dueDate": "missing value",
            "activationDate": "null",
            "completionDate": "null",
            "cancellationDate": "null",
            "project": "null",
            "area": "Work",
        }
    ]
    [record] = operations.list_todos_json(_FakeRunner(raw), "Today")
    assert record.tags == ("Work", "Urgent")
    assert record.due_date is None
    assert record.project is None
    assert record.area == "Work"


def test_list_todos_json_empty_result_is_empty_list() -> None:
    assert operations.list_todos_json(_FakeRunner(None)) == []


def test_enumerations_use_runner_app_name() -> None:
    runner = _FakeRunner(["Home", "Work"], app_name="Things")
    assert operations.list_areas(runner) == ["Home", "Work"]
    assert operations.list_projects(runner, include_ids=True) == ["Home", "Work"]
    assert operations.list_tags(runner) == ["Home", "Work"]
    assert all(script.startswith('tell application "Things"') for script in runner.scripts)


def test_create_operations_render_expected_scripts() -> None:
    runner = _FakeRunner()
    operations.add_project(runner, "Garden", area="Home")
    operations.add_area(runner, "Health")
    operations.add_tag(runner, "Urgent")
    operations.show_quick_entry(runner, "Idea")
    assert "make new project" in runner.scripts[0]
    assert "make new area" in runner.scripts[1]
    assert "make new tag" in runner.scripts[2]
    assert 'show quick entry panel with properties {name:"Idea"}' in runner.scripts[3]


def test_host_errors_propagate_unchanged() -> None:
    runner = _FakeRunner(NotFoundError("Item not found. Please check the name and try again."))
    with pytest.raises(NotFoundError):
        operations.complete_todo(runner, "missing")


def test_show_item_opens_url_scheme() -> None:
    runner = _FakeRunner()
    assert operations.show_item(runner, "A B") == "things:///show?id=A%20B"
    assert runner.urls == ["things:///show?id=A%20B"]
    assert runner.scripts == []


def test_build_things_url_without_params() -> None:
    assert operations.build_things_url("show", {}) == "things:///show"
