# src/stackrun/cli/actions.py

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..core.ports import Scope
from ..core.scheduler import Scheduler

logger = logging.getLogger(__name__)

ActionEmitter = Callable[[str], None]


class ConsoleActions(Scope):
    """
    Owner object for tasks queued from the console.

    Commands queue actions by name (/push echo hi), so the method is looked up
    only when the task runs. resolve() limits lookups to the public actions.
    """

    ACTIONS = ("echo", "upper", "fail", "later", "stop")

    def __init__(self, scheduler: Scheduler, emit: ActionEmitter | None = None) -> None:
        self._scheduler = scheduler
        self._emit = emit or print

    def resolve(self, name: Any) -> Callable[..., Any] | None:
        if name not in self.ACTIONS:
            logger.debug("Unknown console action: %r", name)
            return None
        return getattr(self, name)

    def echo(self, *words: Any) -> str:
        text = " ".join(str(w) for w in words)
        self._emit(text)
        return text

    def upper(self, *words: Any) -> str:
        return self.echo(*(str(w).upper() for w in words))

    def fail(self, *words: Any) -> None:
        raise RuntimeError(" ".join(str(w) for w in words) or "action failed")

    def later(self, action: str = "", *args: Any) -> bool:
        """Run another action right after this one, before the rest of the queue."""
        return self._scheduler.defer(self, action, list(args))

    def stop(self) -> str:
        self._scheduler.kill()
        return "killed"
