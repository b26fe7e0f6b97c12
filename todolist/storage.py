"""
TODOLIST - Task Storage
=======================
File-based persistence for the task collection.
The whole collection is written on every save as a pretty-printed JSON array.
"""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Protocol, Union

from pydantic import TypeAdapter, ValidationError

from .errors import IoError, ParseError, TodoError
from .schema import Task, generate_task_id

logger = logging.getLogger("todolist")

DEFAULT_STORE_NAME = "tasks.json"
STORE_ENV_VAR = "TODOLIST_FILE"

_TASKS_ADAPTER = TypeAdapter(List[Task])


def tasks_to_json(tasks: List[Task], indent: Optional[int] = 2) -> str:
    """Serialize tasks as a JSON array of records"""
    return json.dumps(
        [task.model_dump(mode='json') for task in tasks],
        indent=indent,
        ensure_ascii=False,
    )


class TaskGateway(Protocol):
    """Load/save contract the execution context persists through"""

    def load(self) -> List[Task]:
        ...

    def save(self, tasks: List[Task]) -> None:
        ...


def default_store_path() -> Path:
    """Store path from $TODOLIST_FILE, else tasks.json in the working directory"""
    return Path(os.environ.get(STORE_ENV_VAR) or DEFAULT_STORE_NAME)


class TaskStore:
    """
    JSON file store

    Record shape: {"id": str, "description": str, "completed": bool}
    """

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path) if path is not None else default_store_path()

    def load(self) -> List[Task]:
        """Read the entire collection. Raises IoError or ParseError."""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise IoError(e) from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseError(e) from e

        try:
            tasks = _TASKS_ADAPTER.validate_python(data)
        except ValidationError as e:
            raise ParseError(e) from e

        if self._repair_ids(data, tasks):
            logger.warning(f"Assigned missing or duplicate task ids in {self.path}")
            self.save(tasks)

        logger.info(f"📂 Loaded {len(tasks)} tasks from {self.path}")
        return tasks

    @staticmethod
    def _repair_ids(data: List[dict], tasks: List[Task]) -> bool:
        """
        Give later duplicates a fresh id. Returns True when any id was
        generated during this load, so the caller can write it back.
        """
        repaired = any("id" not in raw for raw in data)
        seen = set()
        for task in tasks:
            if task.id in seen:
                task.id = generate_task_id()
                repaired = True
            seen.add(task.id)
        return repaired

    def save(self, tasks: List[Task]) -> None:
        """Overwrite the store with the full collection"""
        payload = tasks_to_json(tasks)
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                f.write(payload)
        except OSError as e:
            raise IoError(e) from e

        logger.info(f"✅ Saved {len(tasks)} tasks to {self.path}")


def load_or_empty(gateway: TaskGateway) -> List[Task]:
    """Load the collection, falling back to an empty one if the store is unusable"""
    try:
        return gateway.load()
    except TodoError as e:
        logger.warning(f"Could not load tasks: {e}. Starting with an empty list.")
        return []
