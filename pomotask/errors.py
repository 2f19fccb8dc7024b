"""Exception types raised by PomoTask."""


class PomoTaskError(Exception):
    """Base exception for PomoTask."""


class InvalidOperation(PomoTaskError):
    """Raised when a command is not allowed in the current run state."""


class InvalidArgument(PomoTaskError, ValueError):
    """Raised when a configuration or input value is out of range."""


class TaskNotFound(PomoTaskError, LookupError):
    """Raised when a task id does not exist in the store."""
