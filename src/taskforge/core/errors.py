"""Typed errors raised by the core and mapped to HTTP responses at the edge."""

from typing import Any, Dict, Optional


class TaskforgeError(Exception):
    """Base class for all errors the API turns into a JSON failure body."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message or self.message
        self.detail = detail
        self.headers = headers
        super().__init__(self.message)


class InvalidQueryParameter(TaskforgeError):
    status_code = 400
    message = "Invalid query parameter"

    def __init__(self, name: str, value: Any, reason: str):
        self.name = name
        self.value = value
        super().__init__(f"Invalid value for '{name}': {reason}", detail={"param": name, "value": value})


class NotAuthenticated(TaskforgeError):
    status_code = 401
    message = "Not authorized to access this route"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class TaskNotFound(TaskforgeError):
    status_code = 404
    message = "Task not found"

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(detail={"id": task_id})


class StoreUnavailable(TaskforgeError):
    """The backing store failed; never retried here."""

    status_code = 503
    message = "Database operation failed"
