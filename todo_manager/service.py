"""
Todo Service - list, create, update and delete operations over a TaskStore.

Each write operation is one ``store.mutate`` transaction: read the full list,
change it, write the full list back.
"""

from typing import Any, Dict, List, Tuple

from .models.task import Task, utc_timestamp
from .storage.task_store import TaskStore
from .utils.exceptions import TodoNotFoundError
from .utils.logger import get_logger

logger = get_logger(__name__)

# Fields a client may change after creation
UPDATABLE_FIELDS = ("text", "completed")


def next_id(tasks: List[Task]) -> int:
    """One past the highest id in use, or 1 for an empty list."""
    return max((t.id for t in tasks), default=0) + 1


class TodoService:
    """Task operations backed by a store."""

    def __init__(self, store: TaskStore):
        self.store = store

    def list_todos(self) -> List[Task]:
        return self.store.snapshot()

    def create_todo(self, text: str) -> Task:
        def _create(tasks: List[Task]) -> Tuple[bool, Task]:
            task = Task(id=next_id(tasks), text=text, completed=False, created_at=utc_timestamp())
            tasks.append(task)
            return True, task

        task = self.store.mutate(_create)
        logger.info(f"Created todo {task.id}")
        return task

    def update_todo(self, todo_id: int, changes: Dict[str, Any]) -> Task:
        """
        Merge *changes* into the task with *todo_id*.

        Only ``text`` and ``completed`` are applied. ``id`` and ``createdAt``
        never change; other keys are ignored.

        Raises:
            TodoNotFoundError: no task has *todo_id*
        """
        updates = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}

        def _update(tasks: List[Task]) -> Tuple[bool, Any]:
            for task in tasks:
                if task.id == todo_id:
                    for key, value in updates.items():
                        setattr(task, key, value)
                    return True, task
            return False, None

        task = self.store.mutate(_update)
        if task is None:
            raise TodoNotFoundError(todo_id)
        logger.info(f"Updated todo {todo_id} fields={sorted(updates)}")
        return task

    def delete_todo(self, todo_id: int) -> None:
        """
        Remove the task with *todo_id*. The file is left untouched when the
        id is unknown.

        Raises:
            TodoNotFoundError: no task has *todo_id*
        """
        def _delete(tasks: List[Task]) -> Tuple[bool, bool]:
            for index, task in enumerate(tasks):
                if task.id == todo_id:
                    del tasks[index]
                    return True, True
            return False, False

        if not self.store.mutate(_delete):
            raise TodoNotFoundError(todo_id)
        logger.info(f"Deleted todo {todo_id}")
