# src/stackrun/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /push, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _actions_help(state: AppState) -> str:
    return ", ".join(state.actions.ACTIONS)


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help() + f"\nActions: {_actions_help(state)}"


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    scheduler = state.scheduler
    return (
        "Status:\n"
        f"  Queued tasks: {len(scheduler)}\n"
        f"  Running: {'yes' if scheduler.running else 'no'}\n"
        f"  Batches run: {state.batches}\n"
        f"  Last value: {scheduler.value()!r}"
    )


def _enqueue(state: AppState, args: list[str], *, once: bool) -> str:
    usage = "/once <action> [args...]" if once else "/push <action> [args...]"
    if not args:
        return f"Usage: {usage}. Actions: {_actions_help(state)}"

    action, rest = args[0].lower(), args[1:]
    if action not in state.actions.ACTIONS:
        return f"Unknown action: {action}. Actions: {_actions_help(state)}"

    enqueue = state.scheduler.push_once if once else state.scheduler.push
    enqueue(state.actions, action, rest)
    logger.debug("Queued action=%s args=%s once=%s", action, rest, once)
    return f"Queued {action} ({len(state.scheduler)} task(s) waiting)."


def cmd_push(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /push echo hello   -> queue ConsoleActions.echo("hello")
    """
    return _enqueue(state, args, once=False)


def cmd_once(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /once echo hello   -> queue echo, replacing an earlier /once echo still waiting
    """
    return _enqueue(state, args, once=True)


def cmd_exec(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    queued = len(state.scheduler)
    if not state.scheduler.exec():
        return "A batch is already running; queued work will run in it."
    state.batches += 1
    return f"Batch done ({queued} task(s) queued at start). Last value: {state.scheduler.value()!r}"


def cmd_kill(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    state.scheduler.kill()
    if state.scheduler.running:
        return "Kill requested: the batch stops after the current task."
    return "Kill requested: the next /exec drops the queue without running it."


def cmd_clear(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    dropped = len(state.scheduler)
    state.scheduler.clear()
    return f"Queue cleared ({dropped} task(s) dropped)."


def cmd_value(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return f"Last value: {state.scheduler.value()!r}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show queue size, batch count and last value.")
registry.register("push", cmd_push, help_text="Queue an action: /push <action> [args...].")
registry.register("once", cmd_once, help_text="Queue an action once: /once <action> [args...].")
registry.register("exec", cmd_exec, help_text="Run all queued actions.", aliases=["run"])
registry.register("kill", cmd_kill, help_text="Stop the current batch / drop the queue on next /exec.")
registry.register("clear", cmd_clear, help_text="Drop queued actions and the last value.")
registry.register("value", cmd_value, help_text="Show the value returned by the last action.")
