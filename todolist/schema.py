"""
TODOLIST - Schema Definition
============================
Persisted task record, the closed set of commands, and command results.
"""

from typing import List, Literal, Union
from pydantic import BaseModel, ConfigDict, Field
import uuid


def generate_task_id() -> str:
    """Fresh opaque task id (128-bit random)"""
    return str(uuid.uuid4())


class Task(BaseModel):
    """Individual task record"""
    id: str = Field(default_factory=generate_task_id)  # Older stores have no ids
    description: str
    completed: bool = False


# ============================================================
# COMMANDS
# ============================================================

class _Command(BaseModel):
    model_config = ConfigDict(frozen=True)


class ListCommand(_Command):
    kind: Literal["list"] = "list"


class AddCommand(_Command):
    kind: Literal["add"] = "add"
    description: str


class CompleteCommand(_Command):
    kind: Literal["complete"] = "complete"
    task_id: str


class UncompleteCommand(_Command):
    kind: Literal["uncomplete"] = "uncomplete"
    task_id: str


class DeleteCommand(_Command):
    kind: Literal["delete"] = "delete"
    task_id: str


class EditCommand(_Command):
    kind: Literal["edit"] = "edit"
    task_id: str
    description: str


class VersionCommand(_Command):
    kind: Literal["version"] = "version"


Command = Union[
    ListCommand,
    AddCommand,
    CompleteCommand,
    UncompleteCommand,
    DeleteCommand,
    EditCommand,
    VersionCommand,
]


# ============================================================
# RESULTS
# ============================================================

class MessageResult(BaseModel):
    """Plain confirmation text for the caller to print"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["message"] = "message"
    text: str


class TasksResult(BaseModel):
    """Snapshot of the task collection at the time of listing"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["tasks"] = "tasks"
    tasks: List[Task] = Field(default_factory=list)


CommandResult = Union[MessageResult, TasksResult]
