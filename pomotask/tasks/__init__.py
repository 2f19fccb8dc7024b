"""Task storage and statistics."""

from .store import TaskStore, TaskRecord
from .stats import TaskStats, summarize

__all__ = ["TaskStore", "TaskRecord", "TaskStats", "summarize"]
