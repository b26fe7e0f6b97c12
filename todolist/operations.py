"""
TODOLIST - Task Operations
==========================
Mutators over a task collection. Lookups are linear scans by id.
"""

from typing import List
import logging

from .errors import TaskNotFound
from .schema import Task

logger = logging.getLogger("todolist")


def _find_index(tasks: List[Task], task_id: str) -> int:
    """Position of the task with this id, or TaskNotFound"""
    for index, task in enumerate(tasks):
        if task.id == task_id:
            return index
    raise TaskNotFound(task_id)


def add_task(tasks: List[Task], description: str) -> Task:
    """Append a new, not yet completed task"""
    task = Task(description=description)
    tasks.append(task)
    logger.debug(f"Added task {task.id}")
    return task


def complete_task(tasks: List[Task], task_id: str) -> Task:
    task = tasks[_find_index(tasks, task_id)]
    task.completed = True
    return task


def uncomplete_task(tasks: List[Task], task_id: str) -> Task:
    task = tasks[_find_index(tasks, task_id)]
    task.completed = False
    return task


def delete_task(tasks: List[Task], task_id: str) -> Task:
    """
    Remove the task with this id.

    The last task is swapped into the freed slot, so the order of the
    remaining tasks is not preserved.
    """
    index = _find_index(tasks, task_id)
    last = len(tasks) - 1
    tasks[index], tasks[last] = tasks[last], tasks[index]
    removed = tasks.pop()
    logger.debug(f"Deleted task {removed.id}")
    return removed


def edit_task(tasks: List[Task], task_id: str, description: str) -> Task:
    task = tasks[_find_index(tasks, task_id)]
    task.description = description
    return task
