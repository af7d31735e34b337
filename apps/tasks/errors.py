"""
Error types raised by the task services.

Each error carries the HTTP status it maps to and a message that is safe to
show to API clients. The API layer renders them as `{"message": ...}`.
"""


class TaskError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class TaskValidationError(TaskError):
    """Missing or invalid title, unrecognized status, malformed body."""
    status_code = 400
    default_message = "Invalid task data"


class TaskConflictError(TaskError):
    """Another task already uses the title (case-insensitive)."""
    status_code = 400
    default_message = "A task with this title already exists."


class TaskNotFoundError(TaskError):
    status_code = 404
    default_message = "Task not found"


class TaskStoreError(TaskError):
    """The database failed underneath a service call."""
    status_code = 500
    default_message = "Server error"
