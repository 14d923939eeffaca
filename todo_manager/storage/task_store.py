"""
Task Store - Persistence of the task list.

Every store exposes the same three operations:

- ``load()`` returns a fresh snapshot of all tasks
- ``save(tasks)`` replaces the stored list with *tasks*
- ``mutate(fn)`` runs load -> fn -> save while holding the store lock
- ``snapshot()`` runs ``load()`` while holding the store lock

Requests never share an in-memory list; each one reads a snapshot, changes
it and writes it back inside ``mutate``. The lock serialises writers within
one process. Separate processes writing the same file are not coordinated.
"""

import copy
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, List, Optional, Tuple, TypeVar

from ..models.task import Task
from ..utils.exceptions import ConfigurationError, StorageError
from ..utils.logger import get_logger
from .record_codec import decode_records, encode_records

logger = get_logger(__name__)

T = TypeVar("T")

# A mutation receives the loaded list and returns (changed, result).
# The list is written back only when changed is True.
Mutation = Callable[[List[Task]], Tuple[bool, T]]


class TaskStore(ABC):
    """Base class for task persistence backends."""

    def __init__(self):
        self._lock = threading.Lock()

    @abstractmethod
    def load(self) -> List[Task]:
        """Return every stored task in stored order."""

    @abstractmethod
    def save(self, tasks: List[Task]) -> None:
        """Replace the stored list with *tasks*."""

    def mutate(self, fn: Mutation[T]) -> T:
        """Apply *fn* to a fresh snapshot and persist the result under the store lock."""
        with self._lock:
            tasks = self.load()
            changed, result = fn(tasks)
            if changed:
                self.save(tasks)
            return result

    def snapshot(self) -> List[Task]:
        """Load under the store lock so a read never overlaps a save."""
        with self._lock:
            return self.load()


class FlatFileTaskStore(TaskStore):
    """
    Stores tasks in a pipe-delimited text file.

    The file is rewritten in place on every save. A crash during the write
    can leave it truncated.
    """

    def __init__(self, path: str = "data.txt", encoding: str = "utf-8"):
        super().__init__()
        self.path = Path(path)
        self.encoding = encoding

    def load(self) -> List[Task]:
        try:
            content = self.path.read_text(encoding=self.encoding)
        except FileNotFoundError:
            logger.debug(f"Data file {self.path} not found, starting empty")
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read data file {self.path}: {e}")
            return []
        return decode_records(content)

    def save(self, tasks: List[Task]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(encode_records(tasks), encoding=self.encoding)
        except OSError as e:
            raise StorageError(str(self.path), "write", "could not write data file", original_error=e)


class InMemoryTaskStore(TaskStore):
    """Keeps tasks in process memory. Useful for tests and throwaway runs."""

    def __init__(self, tasks: Optional[List[Task]] = None):
        super().__init__()
        self._tasks: List[Task] = copy.deepcopy(tasks or [])

    def load(self) -> List[Task]:
        return copy.deepcopy(self._tasks)

    def save(self, tasks: List[Task]) -> None:
        self._tasks = copy.deepcopy(tasks)


STORE_BACKENDS = ("file", "memory")


def create_store(backend: str = "file", data_file: str = "data.txt") -> TaskStore:
    """Build the store named by *backend*."""
    if backend == "file":
        return FlatFileTaskStore(data_file)
    if backend == "memory":
        return InMemoryTaskStore()
    raise ConfigurationError(
        "storage.backend",
        f"unknown backend, expected one of: {', '.join(STORE_BACKENDS)}",
        actual_value=backend,
    )
