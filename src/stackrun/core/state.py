# src/stackrun/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .scheduler import Scheduler

if TYPE_CHECKING:
    from ..cli.actions import ConsoleActions


@dataclass
class AppState:
    # Settings object (stackrun.config.Settings or a test stand-in).
    settings: object

    scheduler: Scheduler
    actions: ConsoleActions

    # Number of exec() batches started from the console.
    batches: int = 0
