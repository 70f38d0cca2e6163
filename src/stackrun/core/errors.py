# src/stackrun/core/errors.py

from __future__ import annotations


class StackrunError(Exception):
    """Base class for errors raised by stackrun."""


class DeferOutsideRunError(StackrunError, RuntimeError):
    """
    defer()/defer_once() was called with a callable target while no exec() loop is active.

    This is a logic bug in the host code: there is no running batch for the deferred
    task to join, so it would never be called.
    """

    def __init__(self, target: object = None) -> None:
        self.target = target
        super().__init__(
            "defer() called outside of a running exec() loop; the deferred task will not be called."
        )
