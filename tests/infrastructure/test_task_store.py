"""Task Store — tests for whole-collection JSON file persistence.

Tests cover:
    - Missing file → empty collection, file not created
    - Save/load round trip, insertion order, on-disk layout (camelCase, 2-space indent)
    - Corruption detection (malformed JSON, wrong shape, invalid records, unknown keys)
    - File mode preserved across saves; new files honour the umask
    - OS failures mapped to PersistenceError, atomic replace leaves no debris
"""

import json
import os
import stat

import pytest

from tasktracker.core.errors import CorruptedStoreError, PersistenceError
from tasktracker.infrastructure.task_store import TaskStore
from tasktracker.schemas.task import Task


def _task(n: int, priority: str = "low") -> Task:
    return Task(
        task_id=f"TASK-{1700000000000 + n}",
        title=f"Task {n}",
        description="",
        priority=priority,
        status="pending",
        created_at="2026-10-19T12:00:00.123Z",
    )


def test_missing_file_loads_empty_without_creating_it(store, tasks_file):
    assert store.load() == []
    assert not tasks_file.exists()


def test_save_creates_parent_directory(store, tasks_file):
    store.save([_task(1)])
    assert tasks_file.is_file()


def test_round_trip_preserves_order_and_fields(store):
    tasks = [_task(1, "high"), _task(2, "urgent"), _task(3)]
    store.save(tasks)
    assert store.load() == tasks


def test_file_is_pretty_printed_camel_case_array(store, tasks_file):
    store.save([_task(1)])
    text = tasks_file.read_text(encoding="utf-8")
    data = json.loads(text)
    assert isinstance(data, list)
    assert set(data[0]) == {
        "taskId", "title", "description", "priority", "status", "createdAt",
    }
    assert text.startswith("[\n  {\n    \"taskId\"")


def test_empty_collection_round_trips(store, tasks_file):
    store.save([])
    assert json.loads(tasks_file.read_text()) == []
    assert store.load() == []


def test_save_replaces_previous_contents(store):
    store.save([_task(1), _task(2)])
    store.save([_task(3)])
    assert [t.task_id for t in store.load()] == ["TASK-1700000000003"]


def test_save_leaves_no_temp_files(store, tasks_file):
    store.save([_task(1)])
    store.save([_task(1), _task(2)])
    assert os.listdir(tasks_file.parent) == ["tasks.json"]


@pytest.mark.parametrize("content", [
    "",
    "not json",
    "[{\"taskId\": \"TASK-1\"",
    "{}",
    "{\"tasks\": []}",
    "\"tasks\"",
    "null",
    "[1, 2]",
    "[{\"taskId\": \"TASK-1\"}]",
])
def test_malformed_content_is_corruption(store, tasks_file, content):
    tasks_file.parent.mkdir(parents=True)
    tasks_file.write_text(content, encoding="utf-8")
    with pytest.raises(CorruptedStoreError):
        store.load()


def test_unknown_priority_is_corruption(store, tasks_file):
    record = _task(1).model_dump(by_alias=True, mode="json")
    record["priority"] = "critical"
    tasks_file.parent.mkdir(parents=True)
    tasks_file.write_text(json.dumps([record]), encoding="utf-8")
    with pytest.raises(CorruptedStoreError) as exc_info:
        store.load()
    assert "0.priority" in exc_info.value.message


def test_externally_written_records_load(store, tasks_file):
    tasks_file.parent.mkdir(parents=True)
    tasks_file.write_text(json.dumps([{
        "taskId": "TASK-1",
        "title": "Fix bug",
        "description": "",
        "priority": "high",
        "status": "pending",
        "createdAt": "2025-01-01T00:00:00.000Z",
    }]), encoding="utf-8")
    [task] = store.load()
    assert task.task_id == "TASK-1"
    assert task.created_at == "2025-01-01T00:00:00.000Z"


def test_unreadable_path_is_persistence_error(tmp_path):
    directory = tmp_path / "tasks.json"
    directory.mkdir()
    with pytest.raises(PersistenceError) as exc_info:
        TaskStore(directory).load()
    assert exc_info.value.operation == "read"


def test_unwritable_location_is_persistence_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("i am a file")
    with pytest.raises(PersistenceError) as exc_info:
        TaskStore(blocker / "tasks.json").save([_task(1)])
    assert exc_info.value.operation == "write"


def test_failed_replace_keeps_old_file_and_cleans_temp(store, tasks_file, monkeypatch):
    store.save([_task(1)])

    def broken_replace(src, dst):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(os, "replace", broken_replace)
    with pytest.raises(PersistenceError):
        store.save([_task(1), _task(2)])
    monkeypatch.undo()

    assert [t.task_id for t in store.load()] == ["TASK-1700000000001"]
    assert os.listdir(tasks_file.parent) == ["tasks.json"]


def test_record_with_unknown_key_is_corruption(store, tasks_file):
    record = _task(1).model_dump(by_alias=True, mode="json")
    record["assignee"] = "bob"
    original = json.dumps([record])
    tasks_file.parent.mkdir(parents=True)
    tasks_file.write_text(original, encoding="utf-8")
    with pytest.raises(CorruptedStoreError) as exc_info:
        store.load()
    assert "0.assignee" in exc_info.value.message
    assert tasks_file.read_text(encoding="utf-8") == original


def _mode(path) -> int:
    return stat.S_IMODE(os.stat(path).st_mode)


def test_new_file_mode_follows_umask(store, tasks_file):
    umask = os.umask(0o022)
    try:
        store.save([_task(1)])
    finally:
        os.umask(umask)
    assert _mode(tasks_file) == 0o644


def test_save_keeps_existing_file_mode(store, tasks_file):
    store.save([_task(1)])
    os.chmod(tasks_file, 0o640)
    store.save([_task(1), _task(2)])
    assert _mode(tasks_file) == 0o640
