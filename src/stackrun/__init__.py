"""
stackrun: cooperative, single-threaded task sequencing.

Queue bound method invocations with Scheduler.push(), run them in order with
Scheduler.exec(), and let running tasks defer() follow-up work right after themselves.
"""

from .core.errors import DeferOutsideRunError, StackrunError
from .core.ports import ErrorHook, Scope
from .core.scheduler import Scheduler
from .core.task import DirectRef, NamedLookup, Task

__all__ = [
    "DeferOutsideRunError",
    "DirectRef",
    "ErrorHook",
    "NamedLookup",
    "Scheduler",
    "Scope",
    "StackrunError",
    "Task",
]
