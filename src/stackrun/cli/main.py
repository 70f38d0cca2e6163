# src/stackrun/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = settings.log_dir if settings.log_to_file else None
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    if not settings.console_enabled:
        logger.info("Console disabled (STACKRUN_CONSOLE_ENABLED=false); nothing to do.")
        return 0

    try:
        run_console_loop(state)
    finally:
        dropped = len(state.scheduler)
        if dropped:
            logger.info("Dropping %d queued task(s) on exit.", dropped)
        state.scheduler.clear()
        logger.info("Bye.")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
