"""Tests for the JSON task store."""

import json

import pytest

from todolist.errors import IoError, ParseError
from todolist.schema import DeleteCommand, Task
from todolist.state import AppContext
from todolist.storage import (
    STORE_ENV_VAR, TaskStore, default_store_path, load_or_empty,
)


class TestTaskStore:
    """Test TaskStore load/save."""

    def test_save_then_load_round_trip(self, store, sample_tasks):
        store.save(sample_tasks)

        loaded = store.load()

        assert [t.model_dump() for t in loaded] == [t.model_dump() for t in sample_tasks]

    def test_save_writes_pretty_json_array(self, store, store_path, sample_tasks):
        store.save(sample_tasks[:1])

        text = store_path.read_text(encoding="utf-8")
        assert text.startswith("[\n  {")
        assert json.loads(text) == [
            {"id": "a1", "description": "buy milk", "completed": False},
        ]

    def test_save_replaces_whole_file(self, store, store_path, sample_tasks):
        store.save(sample_tasks)
        store.save([])

        assert json.loads(store_path.read_text(encoding="utf-8")) == []

    def test_load_generates_missing_ids(self, store, store_path):
        store_path.write_text(
            json.dumps([
                {"description": "legacy one", "completed": True},
                {"description": "legacy two", "completed": False},
            ]),
            encoding="utf-8",
        )

        tasks = store.load()

        assert [t.description for t in tasks] == ["legacy one", "legacy two"]
        assert all(t.id for t in tasks)
        assert tasks[0].id != tasks[1].id

    def test_generated_ids_are_written_back(self, store, store_path):
        """Ids filled in for legacy records survive the next load."""
        store_path.write_text(
            json.dumps([{"description": "legacy", "completed": False}]),
            encoding="utf-8",
        )

        first = store.load()

        on_disk = json.loads(store_path.read_text(encoding="utf-8"))
        assert on_disk[0]["id"] == first[0].id
        assert store.load()[0].id == first[0].id

    def test_duplicate_ids_are_reassigned(self, store, store_path):
        """Later records sharing an id get a fresh one, saved back."""
        store_path.write_text(
            json.dumps([
                {"id": "a1", "description": "first", "completed": False},
                {"id": "a1", "description": "second", "completed": True},
            ]),
            encoding="utf-8",
        )

        tasks = store.load()

        assert tasks[0].id == "a1"
        assert tasks[1].id != "a1"
        assert tasks[1].description == "second"
        assert [t["id"] for t in json.loads(store_path.read_text(encoding="utf-8"))] == \
            [t.id for t in tasks]

    def test_delete_after_duplicate_repair_removes_id(self, store, store_path):
        store_path.write_text(
            json.dumps([
                {"id": "a1", "description": "first", "completed": False},
                {"id": "a1", "description": "second", "completed": False},
            ]),
            encoding="utf-8",
        )
        app = AppContext(store.load(), store)

        app.execute(DeleteCommand(task_id="a1"))

        assert "a1" not in {t.id for t in app.tasks}
        assert len(app.tasks) == 1

    def test_clean_store_is_not_rewritten(self, store, store_path, sample_tasks):
        store.save(sample_tasks)
        store_path.write_text(store_path.read_text(encoding="utf-8") + "\n", encoding="utf-8")

        store.load()

        assert store_path.read_text(encoding="utf-8").endswith("]\n")

    def test_missing_file_raises_io_error(self, store):
        with pytest.raises(IoError) as exc_info:
            store.load()
        assert isinstance(exc_info.value.cause, FileNotFoundError)
        assert str(exc_info.value).startswith("IO Error:")

    def test_malformed_json_raises_parse_error(self, store, store_path):
        store_path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ParseError):
            store.load()

    def test_wrong_shape_raises_parse_error(self, store, store_path):
        store_path.write_text(json.dumps({"tasks": []}), encoding="utf-8")
        with pytest.raises(ParseError) as exc_info:
            store.load()
        assert str(exc_info.value).startswith("Parse Error:")

    def test_unwritable_location_raises_io_error(self, tmp_path):
        store = TaskStore(tmp_path / "missing-dir" / "tasks.json")
        with pytest.raises(IoError):
            store.save([Task(description="x")])


class TestLoadOrEmpty:
    def test_returns_loaded_tasks(self, store, sample_tasks):
        store.save(sample_tasks)
        assert len(load_or_empty(store)) == 3

    def test_falls_back_to_empty_list(self, store, store_path, caplog):
        store_path.write_text("garbage", encoding="utf-8")

        with caplog.at_level("WARNING", logger="todolist"):
            tasks = load_or_empty(store)

        assert tasks == []
        assert "Starting with an empty list" in caplog.text


class TestDefaultStorePath:
    def test_defaults_to_tasks_json(self, monkeypatch):
        monkeypatch.delenv(STORE_ENV_VAR, raising=False)
        assert str(default_store_path()) == "tasks.json"

    def test_env_var_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv(STORE_ENV_VAR, str(tmp_path / "work.json"))
        assert default_store_path() == tmp_path / "work.json"
        assert TaskStore().path == tmp_path / "work.json"
