"""
Models module - Data structures for the Todo Manager
"""

from .task import Task, utc_timestamp

__all__ = [
    'Task',
    'utc_timestamp',
]
