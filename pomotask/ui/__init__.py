"""UI package."""

from .timer_widget import TimerWidget
from .task_list import TaskListWidget
from .settings_dialog import SettingsDialog

__all__ = [
    "TimerWidget",
    "TaskListWidget",
    "SettingsDialog",
]
