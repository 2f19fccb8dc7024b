"""Summary numbers for the task list."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from .store import TaskRecord


@dataclass(frozen=True)
class TaskStats:
    total: int = 0
    completed: int = 0
    incomplete: int = 0
    total_pomodoros: int = 0
    completion_rate: int = 0        # percent
    average_pomodoros: float = 0.0
    overdue: int = 0
    due_today: int = 0


def summarize(tasks: Iterable[TaskRecord], today: date | None = None) -> TaskStats:
    tasks = list(tasks)
    if not tasks:
        return TaskStats()
    today = today or date.today()

    completed = sum(1 for t in tasks if t.completed)
    total_pomodoros = sum(t.pomodoros for t in tasks)
    return TaskStats(
        total=len(tasks),
        completed=completed,
        incomplete=len(tasks) - completed,
        total_pomodoros=total_pomodoros,
        completion_rate=math.floor(completed * 100 / len(tasks) + 0.5),
        average_pomodoros=math.floor(total_pomodoros * 10 / len(tasks) + 0.5) / 10,
        overdue=sum(
            1 for t in tasks
            if not t.completed and t.due_date is not None and t.due_date < today
        ),
        due_today=sum(1 for t in tasks if t.due_date == today),
    )
