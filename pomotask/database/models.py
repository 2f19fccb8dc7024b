"""SQLAlchemy ORM models for PomoTask."""

import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Date
from sqlalchemy.orm import DeclarativeBase


def _new_task_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class Task(Base):
    """A to-do item that completed work phases are credited to."""

    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=_new_task_id)
    title = Column(String(255), nullable=False)
    due_date = Column(Date, nullable=True)
    completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    completed_at = Column(DateTime, nullable=True)
    pomodoros = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return (
            f"<Task id={self.id} title={self.title!r} "
            f"completed={self.completed} pomodoros={self.pomodoros}>"
        )
