"""
Exception hierarchy for the Todo Manager

Every error raised by the domain package derives from TodoManagerError so the
HTTP layer can map the whole family onto responses in one place.

Exception Categories:
- Configuration Errors: invalid settings in config.properties
- Storage Errors: failures reading or writing the data file
- Validation Errors: malformed client input or persisted records
- Lookup Errors: requests for tasks that do not exist

Usage:
    from todo_manager.utils.exceptions import TodoNotFoundError

    if task is None:
        raise TodoNotFoundError(todo_id)
"""

from typing import Optional, Any, Dict


# ============================================================================
# Base Exception
# ============================================================================

class TodoManagerError(Exception):
    """
    Base exception for all Todo Manager errors.

    Carries a human-readable message, a short error code and an optional
    details dictionary for logging.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigurationError(TodoManagerError):
    """Raised when a configuration value is missing or unusable."""

    def __init__(
        self,
        setting_name: str,
        message: str,
        actual_value: Optional[Any] = None
    ):
        details = {"setting_name": setting_name}
        if actual_value is not None:
            details["actual_value"] = str(actual_value)

        super().__init__(
            message=f"Configuration error for '{setting_name}': {message}",
            error_code="CONFIG_ERROR",
            details=details
        )
        self.setting_name = setting_name


# ============================================================================
# Storage Errors
# ============================================================================

class StorageError(TodoManagerError):
    """Raised when the task store cannot complete a read or write."""

    def __init__(
        self,
        path: str,
        operation: str,
        message: str,
        original_error: Optional[Exception] = None
    ):
        full_message = f"Storage {operation} failed for '{path}': {message}"
        if original_error:
            full_message += f"\nCaused by: {original_error}"

        super().__init__(
            message=full_message,
            error_code="STORAGE_ERROR",
            details={
                "path": path,
                "operation": operation,
                "original_error": str(original_error) if original_error else None
            }
        )
        self.path = path
        self.operation = operation
        self.original_error = original_error


# ============================================================================
# Validation Errors
# ============================================================================

class ValidationError(TodoManagerError):
    """Base class for validation errors."""
    pass


class RecordFormatError(ValidationError):
    """Raised when a persisted line cannot be decoded into a task."""

    def __init__(self, line: str, reason: str):
        super().__init__(
            message=f"Malformed task record: {reason}",
            error_code="RECORD_FORMAT",
            details={"line": line, "reason": reason}
        )
        self.line = line
        self.reason = reason


class InvalidTodoDataError(ValidationError):
    """Raised when a request body does not describe a valid task."""

    def __init__(self, message: str = "Invalid data", errors: Optional[list] = None):
        super().__init__(
            message=message,
            error_code="INVALID_DATA",
            details={"errors": errors} if errors else None
        )
        self.errors = errors or []


# ============================================================================
# Lookup Errors
# ============================================================================

class TodoNotFoundError(TodoManagerError):
    """Raised when no task has the requested id."""

    def __init__(self, todo_id: Any):
        super().__init__(
            message="Todo not found",
            error_code="NOT_FOUND",
            details={"todo_id": str(todo_id)}
        )
        self.todo_id = todo_id
