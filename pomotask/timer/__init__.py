"""Timer package."""

from .engine import (
    TimerEngine,
    Phase,
    DurationConfig,
    TimerSnapshot,
    format_clock,
)
from .attributor import SessionAttributor, thread_pool_dispatch
from .driver import TickDriver

__all__ = [
    "TimerEngine",
    "Phase",
    "DurationConfig",
    "TimerSnapshot",
    "format_clock",
    "SessionAttributor",
    "thread_pool_dispatch",
    "TickDriver",
]
