"""
TODOLIST - Persistent Binding
=============================
String-in/string-out entry points for hosts that keep one task list alive
across many calls (e.g. an embedding app).

One process-wide execution context, created by init(), guarded by one lock.
Every call holds the lock for the whole command, so concurrent callers
serialize completely.

Usage:
    from todolist import binding

    binding.init("/data/app")
    binding.add("buy milk")
    binding.list_tasks()   # '[{"id": "...", "description": "buy milk", "completed": false}]'
"""

import logging
import threading
from pathlib import Path
from typing import Optional, Union

from .errors import TodoError
from .schema import (
    AddCommand, Command, CompleteCommand, DeleteCommand, EditCommand,
    ListCommand, TasksResult, UncompleteCommand, VersionCommand,
)
from .state import AppContext
from .storage import DEFAULT_STORE_NAME, TaskStore, load_or_empty, tasks_to_json

logger = logging.getLogger("todolist")

NOT_INITIALIZED = "Error: task list not initialized. Call init() first."

_lock = threading.Lock()
_context: Optional[AppContext] = None


def init(path: Union[str, Path]) -> None:
    """(Re)create the shared context from <path>/tasks.json"""
    global _context

    store = TaskStore(Path(path) / DEFAULT_STORE_NAME)
    with _lock:
        _context = AppContext(load_or_empty(store), store)
    logger.info(f"🚀 Binding initialized at {store.path}")


def reset() -> None:
    """Drop the shared context"""
    global _context

    with _lock:
        _context = None


def _execute(command: Command) -> str:
    with _lock:
        if _context is None:
            return NOT_INITIALIZED
        try:
            result = _context.execute(command)
        except TodoError as e:
            return f"Error: {e}"

    if isinstance(result, TasksResult):
        return tasks_to_json(result.tasks, indent=None)
    return result.text


def list_tasks() -> str:
    return _execute(ListCommand())


def add(description: str) -> str:
    return _execute(AddCommand(description=description))


def complete(task_id: str) -> str:
    return _execute(CompleteCommand(task_id=task_id))


def uncomplete(task_id: str) -> str:
    return _execute(UncompleteCommand(task_id=task_id))


def delete(task_id: str) -> str:
    return _execute(DeleteCommand(task_id=task_id))


def edit(task_id: str, description: str) -> str:
    return _execute(EditCommand(task_id=task_id, description=description))


def version() -> str:
    return _execute(VersionCommand())
