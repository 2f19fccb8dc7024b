"""PomoTask: a Pomodoro timer that credits focus sessions to tasks."""

__version__ = "0.1.0"
