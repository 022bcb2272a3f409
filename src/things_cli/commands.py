from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any

from things_cli.config import (
    load_config,
    resolve_config_path,
    save_config,
    with_auth_token,
)
from things_cli.constants import (
    APP_DISPLAY_NAME,
    ATTACHABLE_LISTS,
    DEFAULT_LIST,
    DEFAULT_LOG_LEVEL,
    LOG_LEVEL_ENV,
)
from things_cli.models import ThingsCliError
from things_cli.operations import (
    add_area,
    add_project,
    add_tag,
    add_todo,
    complete_todo,
    list_areas,
    list_projects,
    list_tags,
    list_todos,
    list_todos_json,
    show_item,
    show_quick_entry,
    update_todo,
)
from things_cli.runners import OsascriptRunner

logger = logging.getLogger(__name__)


def _make_runner(args: argparse.Namespace) -> Any:
    config = load_config(resolve_config_path(args.config))
    return OsascriptRunner.from_config(config)


def _print_entries(heading: str, entries: list[Any], *, include_ids: bool) -> None:
    print(f"\n{heading}:")
    for index, entry in enumerate(entries, start=1):
        if include_ids and isinstance(entry, dict):
            print(f"{index}. {entry.get('name', '')} [{entry.get('id', '')}]")
        else:
            print(f"{index}. {entry}")


# ---------------------------------------------------------------------------
# To-do commands
# ---------------------------------------------------------------------------


def _cmd_add(args: argparse.Namespace) -> int:
    add_todo(
        _make_runner(args),
        args.title,
        notes=args.notes,
        due=args.due,
        tags=args.tags,
        list_name=args.list_name,
        project=args.project,
        project_id=args.project_id,
        area=args.area,
        area_id=args.area_id,
    )
    print(f"Added to-do: {args.title}")
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    todos = list_todos(_make_runner(args), args.container, include_ids=args.ids)
    if not todos:
        print(f"No to-dos found in {args.container}")
        return 0
    _print_entries(f"{args.container} ({len(todos)} items)", todos, include_ids=args.ids)
    return 0


def _cmd_list_json(args: argparse.Namespace) -> int:
    records = list_todos_json(_make_runner(args), args.container)
    print(json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False))
    return 0


def _cmd_complete(args: argparse.Namespace) -> int:
    name = complete_todo(_make_runner(args), args.todo_id)
    print(f"Completed: {name}")
    return 0


def _cmd_update(args: argparse.Namespace) -> int:
    name = update_todo(
        _make_runner(args),
        args.todo_id,
        title=args.title,
        notes=args.notes,
        tags=args.tags,
        due=args.due,
        project=args.project,
        project_id=args.project_id,
        area=args.area,
        area_id=args.area_id,
        remove_project=args.no_project,
        remove_area=args.no_area,
    )
    print(f"Updated: {name}")
    return 0


# ---------------------------------------------------------------------------
# Project / area / tag commands
# ---------------------------------------------------------------------------


def _cmd_project_add(args: argparse.Namespace) -> int:
    add_project(_make_runner(args), args.name, notes=args.notes, area=args.area)
    print(f"Added project: {args.name}")
    return 0


def _cmd_project_list(args: argparse.Namespace) -> int:
    projects = list_projects(_make_runner(args), include_ids=args.ids)
    if not projects:
        print("No projects found")
        return 0
    _print_entries(f"Projects ({len(projects)})", projects, include_ids=args.ids)
    return 0


def _cmd_area_add(args: argparse.Namespace) -> int:
    add_area(_make_runner(args), args.name)
    print(f"Added area: {args.name}")
    return 0


def _cmd_area_list(args: argparse.Namespace) -> int:
    areas = list_areas(_make_runner(args), include_ids=args.ids)
    if not areas:
        print("No areas found")
        return 0
    _print_entries(f"Areas ({len(areas)})", areas, include_ids=args.ids)
    return 0


def _cmd_tag_add(args: argparse.Namespace) -> int:
    add_tag(_make_runner(args), args.name)
    print(f"Added tag: {args.name}")
    return 0


def _cmd_tag_list(args: argparse.Namespace) -> int:
    tags = list_tags(_make_runner(args))
    if not tags:
        print("No tags found")
        return 0
    _print_entries(f"Tags ({len(tags)})", tags, include_ids=False)
    return 0


# ---------------------------------------------------------------------------
# App commands
# ---------------------------------------------------------------------------


def _cmd_quick(args: argparse.Namespace) -> int:
    show_quick_entry(_make_runner(args), args.title, args.notes)
    print("Opened Quick Entry panel")
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    url = show_item(_make_runner(args), args.item_id)
    print(f"Opened {url}")
    return 0


def _cmd_launch(args: argparse.Namespace) -> int:
    runner = _make_runner(args)
    if runner.is_running():
        print(f"{APP_DISPLAY_NAME} is already running")
        return 0
    runner.launch()
    print(f"Launched {APP_DISPLAY_NAME}")
    return 0


def _cmd_config_show(args: argparse.Namespace) -> int:
    path = resolve_config_path(args.config)
    config = load_config(path)
    token = config.auth_token
    print(f"config_file: {path}")
    print(f"auth_token: {token[:4] + '...' if token else '<not set>'}")
    print(f"app_name: {config.app_name}")
    print(f"timeout_seconds: {config.timeout_seconds:g}")
    return 0


def _cmd_config_path(args: argparse.Namespace) -> int:
    print(resolve_config_path(args.config))
    return 0


def _cmd_config_set_token(args: argparse.Namespace) -> int:
    path = resolve_config_path(args.config)
    save_config(with_auth_token(load_config(path), args.token), path)
    print(f"Saved auth token to {path}")
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _add_ids_flag(parser: argparse.ArgumentParser, noun: str) -> None:
    parser.add_argument("--ids", action="store_true", help=f"Show IDs for each {noun}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="things", description="CLI for Things 3 task management")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the config file (default: $THINGS_CLI_CONFIG or ~/.things-cli/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL),
        help=f"Logging level (default: {DEFAULT_LOG_LEVEL})",
    )
    subparsers = parser.add_subparsers(dest="command")

    add = subparsers.add_parser("add", help="Add a new to-do")
    add.add_argument("title", help="To-do title")
    add.add_argument("-n", "--notes", help="Add notes to the to-do")
    add.add_argument("-d", "--due", help="Set due date (YYYY-MM-DD)")
    add.add_argument("-t", "--tags", help="Add tags (comma-separated)")
    add.add_argument(
        "-l",
        "--list",
        dest="list_name",
        help=f"Add to a specific list ({', '.join(ATTACHABLE_LISTS)})",
    )
    add.add_argument("-p", "--project", help="Add to a specific project (by name)")
    add.add_argument("--project-id", help="Add to a specific project (by ID)")
    add.add_argument("-a", "--area", help="Add to a specific area (by name)")
    add.add_argument("--area-id", help="Add to a specific area (by ID)")
    add.set_defaults(handler=_cmd_add, label="add")

    list_cmd = subparsers.add_parser("list", help="List to-dos from a list, project, or area")
    list_cmd.add_argument("container", nargs="?", default=DEFAULT_LIST, help="List name, project/area name or ID")
    _add_ids_flag(list_cmd, "to-do")
    list_cmd.set_defaults(handler=_cmd_list, label="list")

    list_json = subparsers.add_parser("list-json", help="List to-dos as JSON with full metadata")
    list_json.add_argument("container", nargs="?", default=DEFAULT_LIST, help="List, project, or area name")
    list_json.set_defaults(handler=_cmd_list_json, label="list-json")

    complete = subparsers.add_parser("complete", help="Mark a to-do as complete by ID")
    complete.add_argument("todo_id", metavar="id", help="To-do ID")
    complete.set_defaults(handler=_cmd_complete, label="complete")

    update = subparsers.add_parser("update", help="Update an existing to-do by ID")
    update.add_argument("todo_id", metavar="id", help="To-do ID")
    update.add_argument("-t", "--title", help="Update the title")
    update.add_argument("-n", "--notes", help="Update the notes")
    update.add_argument("--tags", help="Update tags (comma-separated)")
    update.add_argument("-d", "--due", help="Update due date (YYYY-MM-DD)")
    update.add_argument("--project", help="Move to project (by name)")
    update.add_argument("--project-id", help="Move to project (by ID)")
    update.add_argument("--area", help="Move to area (by name)")
    update.add_argument("--area-id", help="Move to area (by ID)")
    update.add_argument("--no-project", action="store_true", help="Remove from project")
    update.add_argument("--no-area", action="store_true", help="Remove from area")
    update.set_defaults(handler=_cmd_update, label="update")

    project = subparsers.add_parser("project", help="Project management commands")
    project_sub = project.add_subparsers(dest="project_command")
    project_add = project_sub.add_parser("add", help="Add a new project")
    project_add.add_argument("name", help="Project name")
    project_add.add_argument("-n", "--notes", help="Add notes to the project")
    project_add.add_argument("-a", "--area", help="Add to a specific area")
    project_add.set_defaults(handler=_cmd_project_add, label="project add")
    project_list = project_sub.add_parser("list", help="List all projects")
    _add_ids_flag(project_list, "project")
    project_list.set_defaults(handler=_cmd_project_list, label="project list")

    area = subparsers.add_parser("area", help="Area management commands")
    area_sub = area.add_subparsers(dest="area_command")
    area_add = area_sub.add_parser("add", help="Add a new area")
    area_add.add_argument("name", help="Area name")
    area_add.set_defaults(handler=_cmd_area_add, label="area add")
    area_list = area_sub.add_parser("list", help="List all areas")
    _add_ids_flag(area_list, "area")
    area_list.set_defaults(handler=_cmd_area_list, label="area list")

    tag = subparsers.add_parser("tag", help="Tag management commands")
    tag_sub = tag.add_subparsers(dest="tag_command")
    tag_add = tag_sub.add_parser("add", help="Add a new tag")
    tag_add.add_argument("name", help="Tag name")
    tag_add.set_defaults(handler=_cmd_tag_add, label="tag add")
    tag_list = tag_sub.add_parser("list", help="List all tags")
    tag_list.set_defaults(handler=_cmd_tag_list, label="tag list")

    quick = subparsers.add_parser("quick", help="Open the Quick Entry panel")
    quick.add_argument("-t", "--title", help="Pre-fill title")
    quick.add_argument("-n", "--notes", help="Pre-fill notes")
    quick.set_defaults(handler=_cmd_quick, label="quick")

    show = subparsers.add_parser("show", help="Reveal a to-do, project, area, or list in the app")
    show.add_argument("item_id", metavar="id", help="Item ID or built-in list id (e.g. today)")
    show.set_defaults(handler=_cmd_show, label="show")

    launch = subparsers.add_parser("launch", help=f"Start {APP_DISPLAY_NAME} if it is not running")
    launch.set_defaults(handler=_cmd_launch, label="launch")

    config = subparsers.add_parser("config", help="Inspect or update the local configuration")
    config_sub = config.add_subparsers(dest="config_command")
    config_show = config_sub.add_parser("show", help="Show the effective configuration")
    config_show.set_defaults(handler=_cmd_config_show, label="config show")
    config_path = config_sub.add_parser("path", help="Print the config file path")
    config_path.set_defaults(handler=_cmd_config_path, label="config path")
    config_token = config_sub.add_parser("set-token", help="Store the Things URL scheme auth token")
    config_token.add_argument("token", help="Auth token from Things settings")
    config_token.set_defaults(handler=_cmd_config_set_token, label="config set-token")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 2
    try:
        return int(handler(args))
    except ThingsCliError as exc:
        logger.debug("%s failed", args.label, exc_info=True)
        print(f"things {args.label}: ERROR {exc}", file=sys.stderr)
        return 1
