# src/stackrun/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

InputReader = Callable[[str], str]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def run_console_loop(state: AppState, read: InputReader = input) -> None:
    """
    Interactive REPL around one Scheduler.

    Slash commands queue and run actions; any other line is executed
    immediately as "echo <line>".
    """
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Use /help for commands, /push + /exec to build a batch, /exit to quit.")

    while True:
        try:
            user_input = read(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            cmd_response = command_registry.handle(state, user_input, emit=_print_ts)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response is not None:
            _print_ts(cmd_response)
            continue

        try:
            if state.scheduler.exec(state.actions, "echo", user_input.split()):
                state.batches += 1
        except Exception:
            logger.exception("Console exec crashed.")
            # An exception escaping exec() can leave the scheduler marked as running.
            state.scheduler.clear()
            _print_ts("Internal error while running the batch.")

    logger.info("Console connector finished.")
