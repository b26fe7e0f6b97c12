#!/usr/bin/env python3
"""
TODOLIST - CLI Interface
========================
Command-line tool for managing a single task list.

Usage:
    todolist list
    todolist add "buy milk"
    todolist done <id>
    todolist undone <id>
    todolist delete <id>
    todolist edit <id> "buy oat milk"
    todolist version
"""

import argparse
import logging
import re
import sys
from typing import List, NoReturn, Optional

from .errors import InvalidCommand, InvalidId, MissingArgument, TodoError
from .schema import (
    AddCommand, Command, CommandResult, CompleteCommand, DeleteCommand,
    EditCommand, ListCommand, Task, TasksResult, UncompleteCommand,
    VersionCommand,
)
from .state import AppContext
from .storage import TaskStore, default_store_path, load_or_empty, tasks_to_json

COMMANDS = ("list", "add", "done", "undone", "delete", "edit", "version")
TASK_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")
EMPTY_LIST_MESSAGE = "No tasks yet! Add one with the 'add' command."


class _Parser(argparse.ArgumentParser):
    """Raises usage errors instead of exiting with status 2"""

    def error(self, message: str) -> NoReturn:
        raise InvalidCommand(self.prog, detail=message)


def _global_options() -> argparse.ArgumentParser:
    options = _Parser(prog="todolist", add_help=False)
    options.add_argument("-v", "--version", action="store_true", help="Print version and exit")
    options.add_argument("--file", default=None,
                         help="Task store (default: $TODOLIST_FILE or ./tasks.json)")
    options.add_argument("--verbose", action="store_true", help="Log store activity to stderr")
    return options


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="todolist",
        parents=[_global_options()],
        description="TODOLIST - Single-user task list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  todolist add "buy milk"          Add a new task
  todolist list                    List all tasks with their IDs
  todolist list --json             List tasks as JSON
  todolist done <ID>               Complete a task by its ID
  todolist undone <ID>             Mark a task as incomplete by its ID
  todolist delete <ID>             Delete a task by its ID
  todolist edit <ID> "new text"    Edit a task by its ID
  todolist --file work.json list   Use another store
        """
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands", parser_class=_Parser)

    # LIST command
    list_parser = subparsers.add_parser("list", help="List all tasks")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # ADD command
    add_parser = subparsers.add_parser("add", help="Add a new task")
    add_parser.add_argument("description", nargs="?", help="Task description")

    # DONE / UNDONE / DELETE commands
    done_parser = subparsers.add_parser("done", help="Complete a task by its ID")
    done_parser.add_argument("task_id", nargs="?", help="Task ID")

    undone_parser = subparsers.add_parser("undone", help="Mark a task as incomplete by its ID")
    undone_parser.add_argument("task_id", nargs="?", help="Task ID")

    delete_parser = subparsers.add_parser("delete", help="Delete a task by its ID")
    delete_parser.add_argument("task_id", nargs="?", help="Task ID")

    # EDIT command
    edit_parser = subparsers.add_parser("edit", help="Edit a task by its ID")
    edit_parser.add_argument("task_id", nargs="?", help="Task ID")
    edit_parser.add_argument("description", nargs="?", help="New description")

    # VERSION command
    subparsers.add_parser("version", help="Print version")

    return parser


def _require(value: Optional[str], argument: str) -> str:
    if value is None:
        raise MissingArgument(argument)
    return value


def _task_id(value: Optional[str]) -> str:
    task_id = _require(value, "task ID")
    if not TASK_ID_RE.match(task_id):
        raise InvalidId(task_id)
    return task_id


def to_command(args: argparse.Namespace) -> Command:
    """Translate parsed arguments into a Command"""
    if args.version or args.command == "version":
        return VersionCommand()
    if args.command == "list":
        return ListCommand()
    if args.command == "add":
        return AddCommand(description=_require(args.description, "description"))
    if args.command == "done":
        return CompleteCommand(task_id=_task_id(args.task_id))
    if args.command == "undone":
        return UncompleteCommand(task_id=_task_id(args.task_id))
    if args.command == "delete":
        return DeleteCommand(task_id=_task_id(args.task_id))
    if args.command == "edit":
        task_id = _task_id(args.task_id)
        return EditCommand(task_id=task_id, description=_require(args.description, "description"))
    raise InvalidCommand(str(args.command))


def parse_args(parser: argparse.ArgumentParser, argv: List[str]) -> argparse.Namespace:
    # Unknown subcommands get the dedicated message rather than argparse's choice list
    _, rest = _global_options().parse_known_args(argv)
    if rest and not rest[0].startswith("-") and rest[0] not in COMMANDS:
        raise InvalidCommand(rest[0])
    return parser.parse_args(argv)


# ========================================
# RENDERING
# ========================================

def render_tasks(tasks: List[Task]) -> str:
    """Human-readable task list"""
    if not tasks:
        return EMPTY_LIST_MESSAGE

    lines = ["--- Your Tasks ---"]
    for position, task in enumerate(tasks, start=1):
        status = "[x]" if task.completed else "[ ]"
        lines.append(f"{position}. {status} {task.description}  ({task.id})")
    return "\n".join(lines)


def render(result: CommandResult, as_json: bool = False) -> str:
    if isinstance(result, TasksResult):
        return tasks_to_json(result.tasks) if as_json else render_tasks(result.tasks)
    return result.text


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        parser.print_help()
        return 1

    try:
        args = parse_args(parser, argv)
        command = to_command(args)
    except TodoError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s:%(name)s: %(message)s",
    )

    # Initialize store and context
    store = TaskStore(args.file or default_store_path())
    app = AppContext(load_or_empty(store), store)

    # Execute command
    try:
        result = app.execute(command)
    except TodoError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(render(result, as_json=getattr(args, "json", False)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
