"""SQLite-backed task store.

Every write emits ``tasks_changed`` so views can refresh.  Writes may
come from worker threads (pomodoro increments); Qt queues the signal to
receivers on the GUI thread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime

from PyQt6.QtCore import QObject, pyqtSignal

from ..database.db import get_session
from ..database.models import Task
from ..errors import InvalidArgument, TaskNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskRecord:
    """Detached copy of a ``Task`` row."""

    id: str
    title: str
    due_date: date | None
    completed: bool
    created_at: datetime
    completed_at: datetime | None
    pomodoros: int

    @classmethod
    def from_model(cls, task: Task) -> TaskRecord:
        return cls(
            id=task.id,
            title=task.title,
            due_date=task.due_date,
            completed=bool(task.completed),
            created_at=task.created_at,
            completed_at=task.completed_at,
            pomodoros=task.pomodoros or 0,
        )


def sort_key(task: TaskRecord) -> tuple:
    """Incomplete first; then earliest due date; undated tasks last,
    newest first."""
    if task.due_date is not None:
        return (task.completed, 0, task.due_date.toordinal(), 0.0)
    created = task.created_at.timestamp() if task.created_at else 0.0
    return (task.completed, 1, 0, -created)


class TaskStore(QObject):
    """CRUD plus pomodoro bookkeeping for tasks."""

    tasks_changed = pyqtSignal()

    # ── reads ─────────────────────────────────────────────────────────

    def get_task(self, task_id: str) -> TaskRecord | None:
        with get_session() as db:
            task = db.get(Task, task_id)
            return TaskRecord.from_model(task) if task else None

    def list_tasks(self) -> list[TaskRecord]:
        with get_session() as db:
            records = [TaskRecord.from_model(t) for t in db.query(Task).all()]
        return sorted(records, key=sort_key)

    def incomplete_tasks(self) -> list[TaskRecord]:
        """Candidates for the active task."""
        return [t for t in self.list_tasks() if not t.completed]

    def pomodoro_count(self, task_id: str) -> int:
        with get_session() as db:
            return self._require(db, task_id).pomodoros or 0

    # ── writes ────────────────────────────────────────────────────────

    def add_task(self, title: str, due_date: date | None = None) -> TaskRecord:
        title = (title or "").strip()
        if not title:
            raise InvalidArgument("Task title must not be empty")
        with get_session() as db:
            task = Task(title=title, due_date=due_date)
            db.add(task)
            db.flush()
            record = TaskRecord.from_model(task)
        logger.debug("Added task %s", record.id)
        self.tasks_changed.emit()
        return record

    def toggle_task(self, task_id: str) -> bool:
        """Flip the completed flag; returns the new value."""
        with get_session() as db:
            task = self._require(db, task_id)
            task.completed = not task.completed
            task.completed_at = datetime.utcnow() if task.completed else None
            completed = task.completed
        self.tasks_changed.emit()
        return completed

    def update_task(
        self, task_id: str, title: str, due_date: date | None = None,
    ) -> None:
        title = (title or "").strip()
        if not title:
            raise InvalidArgument("Task title must not be empty")
        with get_session() as db:
            task = self._require(db, task_id)
            task.title = title
            task.due_date = due_date
        self.tasks_changed.emit()

    def delete_task(self, task_id: str) -> None:
        with get_session() as db:
            db.delete(self._require(db, task_id))
        logger.debug("Deleted task %s", task_id)
        self.tasks_changed.emit()

    def increment_pomodoro_count(self, task_id: str, current_count: int) -> None:
        """Store ``current_count + 1`` as the task's pomodoro count."""
        with get_session() as db:
            task = self._require(db, task_id)
            task.pomodoros = current_count + 1
        self.tasks_changed.emit()

    # ── internal ──────────────────────────────────────────────────────

    @staticmethod
    def _require(db, task_id: str) -> Task:
        task = db.get(Task, task_id)
        if task is None:
            raise TaskNotFound(f"No task with id {task_id!r}")
        return task
