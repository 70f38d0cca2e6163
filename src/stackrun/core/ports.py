# src/stackrun/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

Any object can own a task; names are looked up on it as attributes (or keys,
for mappings). Owners that want full control over name lookup subclass Scope.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Protocol


class Scope(ABC):
    """
    Name-resolution capability for tasks queued by name.

    Opt-in: only subclasses are asked to resolve(), so an owner that merely has
    an unrelated resolve() method still gets plain attribute lookup.
    resolve() is called at execution time, not at enqueue time. Returning None
    (or anything non-callable) makes the task a silent no-op.
    """

    @abstractmethod
    def resolve(self, name: Any) -> Callable[..., Any] | None: ...


class ErrorHook(Protocol):
    """Receives exceptions raised by tasks inside the run loop."""
    def __call__(self, error: BaseException) -> None: ...
