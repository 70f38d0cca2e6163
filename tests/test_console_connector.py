# tests/test_console_connector.py

from __future__ import annotations

from collections.abc import Iterator

import pytest

from stackrun.connectors.console_connector import run_console_loop
from stackrun.core.state import AppState

from .fakes import OutputSink


def _reader(lines: list[str]):
    it: Iterator[str] = iter(lines)

    def read(prompt: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read


def test_plain_text_is_echoed_immediately(state: AppState, output: OutputSink) -> None:
    run_console_loop(state, read=_reader(["hello there", "", "/exit", "ignored"]))
    assert output.lines == ["hello there"]
    assert state.batches == 1
    assert state.scheduler.value() == "hello there"


def test_commands_drive_the_scheduler(
    state: AppState, output: OutputSink, capsys: pytest.CaptureFixture[str]
) -> None:
    run_console_loop(state, read=_reader(["/push echo a", "/push later upper b", "/exec"]))
    assert output.lines == ["a", "B"]

    printed = capsys.readouterr().out
    assert "Queued echo" in printed
    assert "Batch done" in printed


def test_escaping_hook_error_is_recovered(state: AppState, capsys: pytest.CaptureFixture[str]) -> None:
    def hook(err):
        raise RuntimeError("hook failed")

    state.scheduler.onerror = hook
    run_console_loop(state, read=_reader(["/push fail x", "/exec", "/status"]))

    printed = capsys.readouterr().out
    assert "Internal error while handling a command." in printed
    # The command crash leaves the loop marked as running until cleared.
    assert "Running: yes" in printed

    run_console_loop(state, read=_reader(["/clear", "/status"]))
    assert "Running: no" in capsys.readouterr().out


def test_keyboard_interrupt_exits(state: AppState) -> None:
    def read(prompt: str) -> str:
        raise KeyboardInterrupt

    run_console_loop(state, read=read)
    assert state.batches == 0
