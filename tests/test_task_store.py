"""
Tests for the task store backends.
"""

import threading

import pytest

from todo_manager.models import Task
from todo_manager.storage import (
    FlatFileTaskStore,
    InMemoryTaskStore,
    create_store,
)
from todo_manager.utils.exceptions import ConfigurationError, StorageError

TS = "2024-05-01T12:00:00.000Z"


class TestFlatFileTaskStore:
    """Snapshot persistence in a pipe-delimited file."""

    def test_missing_file_loads_empty(self, file_store, data_file):
        assert not data_file.exists()
        assert file_store.load() == []

    def test_directory_in_place_of_file_loads_empty(self, tmp_path):
        store = FlatFileTaskStore(str(tmp_path))
        assert store.load() == []

    def test_save_then_load(self, file_store):
        tasks = [Task(id=1, text="a", created_at=TS), Task(id=5, text="b", completed=True, created_at=TS)]
        file_store.save(tasks)
        assert file_store.load() == tasks

    def test_save_overwrites_whole_file(self, file_store, data_file):
        file_store.save([Task(id=1, text="a", created_at=TS), Task(id=2, text="b", created_at=TS)])
        file_store.save([Task(id=2, text="b", created_at=TS)])
        assert data_file.read_text(encoding="utf-8") == f"2|b|false|{TS}"

    def test_save_of_load_keeps_content(self, file_store, data_file):
        content = f"1|buy milk|false|{TS}\n2|walk dog|true|{TS}"
        data_file.write_text(content, encoding="utf-8")
        file_store.save(file_store.load())
        assert data_file.read_text(encoding="utf-8") == content

    def test_save_creates_parent_directory(self, tmp_path):
        store = FlatFileTaskStore(str(tmp_path / "nested" / "data.txt"))
        store.save([Task(id=1, text="a", created_at=TS)])
        assert (tmp_path / "nested" / "data.txt").exists()

    def test_save_failure_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = FlatFileTaskStore(str(blocker / "data.txt"))
        with pytest.raises(StorageError):
            store.save([Task(id=1, text="a", created_at=TS)])

    def test_mutate_saves_when_changed(self, file_store):
        def _add(tasks):
            tasks.append(Task(id=1, text="a", created_at=TS))
            return True, "added"

        assert file_store.mutate(_add) == "added"
        assert [t.id for t in file_store.load()] == [1]

    def test_mutate_skips_save_when_unchanged(self, file_store, data_file):
        data_file.write_text(f"1|a|false|{TS}\n\n", encoding="utf-8")

        def _noop(tasks):
            tasks.clear()
            return False, None

        file_store.mutate(_noop)
        assert data_file.read_text(encoding="utf-8") == f"1|a|false|{TS}\n\n"

    def test_concurrent_mutations_are_not_lost(self, file_store):
        def _append(tasks):
            new_id = max((t.id for t in tasks), default=0) + 1
            tasks.append(Task(id=new_id, text=f"task {new_id}", created_at=TS))
            return True, new_id

        threads = [threading.Thread(target=file_store.mutate, args=(_append,)) for _ in range(25)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [t.id for t in file_store.load()]
        assert sorted(ids) == list(range(1, 26))

    def test_snapshot_waits_for_writer(self, file_store):
        tasks = [Task(id=1, text="a", created_at=TS)]
        file_store.save(tasks)
        seen = []

        with file_store._lock:
            reader = threading.Thread(target=lambda: seen.append(file_store.snapshot()))
            reader.start()
            reader.join(timeout=0.2)
            assert reader.is_alive()
            assert seen == []

        reader.join(timeout=5)
        assert seen == [tasks]


class TestInMemoryTaskStore:
    """Process-local backend."""

    def test_starts_empty(self):
        assert InMemoryTaskStore().load() == []

    def test_load_returns_copies(self):
        store = InMemoryTaskStore([Task(id=1, text="a", created_at=TS)])
        snapshot = store.load()
        snapshot[0].text = "changed"
        snapshot.append(Task(id=2, text="b", created_at=TS))
        assert store.load() == [Task(id=1, text="a", created_at=TS)]

    def test_mutate_persists(self):
        store = InMemoryTaskStore()

        def _add(tasks):
            tasks.append(Task(id=1, text="a", created_at=TS))
            return True, None

        store.mutate(_add)
        assert len(store.load()) == 1


class TestCreateStore:
    """Backend selection."""

    def test_file_backend(self, data_file):
        store = create_store("file", str(data_file))
        assert isinstance(store, FlatFileTaskStore)
        assert store.path == data_file

    def test_memory_backend(self):
        assert isinstance(create_store("memory"), InMemoryTaskStore)

    def test_unknown_backend(self):
        with pytest.raises(ConfigurationError) as exc_info:
            create_store("postgres")
        assert exc_info.value.setting_name == "storage.backend"
