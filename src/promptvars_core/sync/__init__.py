"""Debounced synchronization of local edits with owner state."""

from .debounce import DEFAULT_DELAY_MS, DEFAULT_MAX_WAIT_MS, Debouncer
from .input import STATUS_MODIFIED, STATUS_TYPING, InputStatus, VariableInput, status_message
from .scheduler import AsyncioScheduler, Scheduler, TimerHandle

__all__ = [
    "Debouncer",
    "VariableInput",
    "InputStatus",
    "status_message",
    "Scheduler",
    "TimerHandle",
    "AsyncioScheduler",
    "DEFAULT_DELAY_MS",
    "DEFAULT_MAX_WAIT_MS",
    "STATUS_TYPING",
    "STATUS_MODIFIED",
]
