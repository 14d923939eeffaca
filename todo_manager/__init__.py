"""
Todo Manager - task list persisted to a flat pipe-delimited file

Provides the Task model, swappable storage backends and the service layer
used by the HTTP server in the ``ui`` package.

Example:
    >>> from todo_manager import TodoService, FlatFileTaskStore
    >>>
    >>> service = TodoService(FlatFileTaskStore("data.txt"))
    >>> task = service.create_todo("buy milk")
    >>> service.update_todo(task.id, {"completed": True})
"""

__version__ = "1.0.0"
__all__ = [
    'Task',
    'TodoService',
    'TaskStore',
    'FlatFileTaskStore',
    'InMemoryTaskStore',
    'create_store',
    'ConfigProperties',
    'ServerSettings',
]

from todo_manager.models import Task
from todo_manager.service import TodoService
from todo_manager.storage import TaskStore, FlatFileTaskStore, InMemoryTaskStore, create_store
from todo_manager.config import ConfigProperties, ServerSettings
