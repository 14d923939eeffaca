"""
Utilities module - Logging and the exception hierarchy
"""

from .logger import get_logger, setup_logging
from .exceptions import (
    TodoManagerError,
    ConfigurationError,
    StorageError,
    ValidationError,
    RecordFormatError,
    InvalidTodoDataError,
    TodoNotFoundError,
)

__all__ = [
    'get_logger',
    'setup_logging',
    'TodoManagerError',
    'ConfigurationError',
    'StorageError',
    'ValidationError',
    'RecordFormatError',
    'InvalidTodoDataError',
    'TodoNotFoundError',
]
