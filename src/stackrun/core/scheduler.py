# src/stackrun/core/scheduler.py

from __future__ import annotations

"""
Scheduler: ordered, non-overlapping execution of queued tasks.

One exec() call drains the queue task by task ("a batch"):
- push()/push_once() append to the end of the queue,
- defer()/defer_once() (only while a batch runs) insert right after the current task,
- kill() stops the batch after the current task and drops whatever is left,
- a task that raises is reported to onerror and the batch goes on.

Everything runs on the caller's thread. Re-entrant exec() calls do not start a second
loop; their task simply joins the active batch.
"""

import functools
import logging
from collections import deque
from collections.abc import Callable
from typing import Any

from .errors import DeferOutsideRunError
from .ports import ErrorHook
from .task import DirectRef, Task

logger = logging.getLogger(__name__)


class Scheduler:
    def __init__(self, *, on_error: ErrorHook | None = None, log_tracebacks: bool = True) -> None:
        self._pending: deque[Task] = deque()
        self._deferred: list[Task] = []
        self._running = False
        self._cancelled = False
        self._last_value: Any = None
        self._log_tracebacks = log_tracebacks

        # Public and assignable: set to None (or a no-op) to silence error reporting.
        self.onerror: ErrorHook | None = on_error if on_error is not None else self._log_error

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._running

    @property
    def pending(self) -> tuple[Task, ...]:
        return tuple(self._pending)

    def __len__(self) -> int:
        return len(self._pending)

    def value(self) -> Any:
        """Return value of the last executed task (None after an error or clear())."""
        return self._last_value

    # ------------------------------------------------------------------
    # Enqueue
    # ------------------------------------------------------------------

    def push(self, owner: Any = None, fn: Any = None, args: Any = None) -> bool:
        """
        Append a task to the end of the queue processed by exec().

        Unlike defer(), the task lands after everything already queued, including
        tasks deferred by the currently running task. Returns False (and queues
        nothing) if the target can never be called.
        """
        task = Task.build(owner, fn, args)
        if not task.is_callable():
            return False

        self._pending.append(task)
        return True

    def push_once(self, owner: Any = None, fn: Any = None, args: Any = None) -> bool:
        """Like push(), but drops earlier push_once() entries for the same target first."""
        task = Task.build(owner, fn, args, once=True)
        if not task.is_callable():
            return False

        self._pending = deque(t for t in self._pending if not (t.once and t.same_target(task)))
        self._pending.append(task)
        return True

    def defer(self, owner: Any = None, fn: Any = None, args: Any = None) -> bool:
        """
        Run a task right after the current one, ahead of anything already queued.

        Only valid from inside a running exec(). Non-callable targets are rejected
        with False before that check, so defer(None) is always silent.
        """
        task = Task.build(owner, fn, args)
        if not task.is_callable():
            return False

        if not self._running:
            raise DeferOutsideRunError(task.target)

        self._deferred.append(task)
        return True

    def defer_once(self, owner: Any = None, fn: Any = None, args: Any = None) -> bool:
        task = Task.build(owner, fn, args, once=True)
        if not task.is_callable():
            return False

        if not self._running:
            raise DeferOutsideRunError(task.target)

        self._deferred = [t for t in self._deferred if not (t.once and t.same_target(task))]
        self._deferred.append(task)
        return True

    # ------------------------------------------------------------------
    # Run loop
    # ------------------------------------------------------------------

    def exec(self, owner: Any = None, fn: Any = None, args: Any = None) -> bool:
        """
        Drain the queue. Arguments, if given, are push()ed first.

        Returns False when called while a batch is already running: the pushed task
        is picked up by the active loop instead.
        """
        self.push(owner, fn, args)

        if self._running:
            return False

        self._running = True
        self._deferred.clear()
        self._last_value = None
        logger.debug("exec: starting batch (%d queued)", len(self._pending))

        executed = 0
        while self._pending and not self._cancelled:
            task = self._pending.popleft()
            try:
                self._last_value = task.invoke()
            except Exception as err:
                self._last_value = None
                # A raising hook escapes exec() and leaves running set; clear() recovers.
                if self.onerror is not None:
                    self.onerror(err)
            executed += 1

            if self._deferred:
                self._pending.extendleft(reversed(self._deferred))
                self._deferred.clear()

        self._running = False
        if self._cancelled:
            logger.debug("exec: batch killed after %d task(s), dropping %d", executed, len(self._pending))
            self.clear()
            self._cancelled = False
        else:
            logger.debug("exec: batch done (%d task(s))", executed)

        return True

    def kill(self) -> None:
        """Stop the running batch once the current task returns; remaining tasks are dropped."""
        self._cancelled = True

    def clear(self) -> None:
        """
        Drop all queued tasks and the saved value.

        Also resets the running flag, which recovers a scheduler whose loop was
        aborted by an exception escaping onerror.
        """
        self._pending.clear()
        self._running = False
        self._last_value = None

    def invoked(self, owner: Any = None, fn: Any = None, args: Any = None) -> Callable[..., Any]:
        """
        Wrap a target into a function that runs it through this scheduler.

        Calling the wrapper queues the target (call-time arguments first, then the
        preset ones) and runs exec(). Typical use: event handlers that should be
        able to defer(). If the wrapper is called from inside a running batch, the
        task only runs later and the wrapper returns None.
        """
        preset = Task.build(owner, fn, args)

        def stack_root(*call_args: Any) -> Any:
            task = Task(preset.owner, preset.target, preset.args)
            task.prepend_args(call_args)
            self._pending.append(task)
            self.exec()
            return task.last_result

        if isinstance(preset.target, DirectRef):
            return functools.wraps(preset.target.fn)(stack_root)
        return stack_root

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def _log_error(self, error: BaseException) -> None:
        if self._log_tracebacks:
            logger.error("Task failed: %s", error, exc_info=(type(error), error, error.__traceback__))
        else:
            logger.error("Task failed: %s", error)
