# src/stackrun/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- builds the Scheduler (error reporting configured from settings),
- wires the console owner object into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import ErrorHook
from ..core.scheduler import Scheduler
from ..core.state import AppState
from .actions import ActionEmitter, ConsoleActions

logger = logging.getLogger(__name__)


def create_scheduler(*, settings=None, on_error: ErrorHook | None = None) -> Scheduler:
    """
    Build a Scheduler from settings.

    There is no process-wide scheduler: callers own the instance and pass it around.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    tracebacks = bool(getattr(settings, "error_tracebacks", True))
    return Scheduler(on_error=on_error, log_tracebacks=tracebacks)


def create_initial_state(*, settings=None, emit: ActionEmitter | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    """
    if settings is None:
        settings = get_settings()

    scheduler = create_scheduler(settings=settings)
    state = AppState(
        settings=settings,
        scheduler=scheduler,
        actions=ConsoleActions(scheduler, emit=emit),
    )
    logger.debug("Initial state created (tracebacks=%s)", getattr(settings, "error_tracebacks", True))
    return state
