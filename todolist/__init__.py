"""
TODOLIST - Single-User Task List
================================

A command-line task list persisted to a local JSON file.

Usage:
    from todolist import AppContext, TaskStore, AddCommand, ListCommand, load_or_empty

    store = TaskStore("tasks.json")
    app = AppContext(load_or_empty(store), store)

    app.execute(AddCommand(description="buy milk"))   # MessageResult("Task added.")
    app.execute(ListCommand())                        # TasksResult([...])
"""

from ._version import __version__

from .errors import (
    TodoError,
    IoError,
    ParseError,
    InvalidCommand,
    MissingArgument,
    InvalidId,
    TaskNotFound,
)

from .schema import (
    Task,
    Command,
    ListCommand,
    AddCommand,
    CompleteCommand,
    UncompleteCommand,
    DeleteCommand,
    EditCommand,
    VersionCommand,
    CommandResult,
    MessageResult,
    TasksResult,
)

from .state import AppContext, MachineState, StateKind
from .storage import TaskGateway, TaskStore, load_or_empty

__all__ = [
    "__version__",
    "AppContext",
    "MachineState",
    "StateKind",
    "TaskGateway",
    "TaskStore",
    "load_or_empty",
    "Task",
    "Command",
    "ListCommand",
    "AddCommand",
    "CompleteCommand",
    "UncompleteCommand",
    "DeleteCommand",
    "EditCommand",
    "VersionCommand",
    "CommandResult",
    "MessageResult",
    "TasksResult",
    "TodoError",
    "IoError",
    "ParseError",
    "InvalidCommand",
    "MissingArgument",
    "InvalidId",
    "TaskNotFound",
]
