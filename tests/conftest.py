"""Shared fixtures for the task list tests."""

from typing import List

import pytest

from todolist.schema import Task
from todolist.state import AppContext
from todolist.storage import TaskStore


class RecordingStore:
    """In-memory gateway that remembers every save"""

    def __init__(self, tasks: List[Task] = None):
        self.tasks = list(tasks or [])
        self.saves: List[List[Task]] = []

    def load(self) -> List[Task]:
        return [task.model_copy() for task in self.tasks]

    def save(self, tasks: List[Task]) -> None:
        self.saves.append([task.model_copy() for task in tasks])
        self.tasks = [task.model_copy() for task in tasks]


class FailingStore(RecordingStore):
    """Gateway whose save always fails at the OS level"""

    def save(self, tasks: List[Task]) -> None:
        raise PermissionError("read-only file system")


@pytest.fixture
def sample_tasks() -> List[Task]:
    return [
        Task(id="a1", description="buy milk"),
        Task(id="b2", description="walk dog", completed=True),
        Task(id="c3", description="write report"),
    ]


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "tasks.json"


@pytest.fixture
def store(store_path) -> TaskStore:
    return TaskStore(store_path)


@pytest.fixture
def recording_store(sample_tasks) -> RecordingStore:
    return RecordingStore(sample_tasks)


@pytest.fixture
def app(recording_store) -> AppContext:
    return AppContext(recording_store.load(), recording_store)
