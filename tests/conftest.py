# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from stackrun.cli.bootstrap import create_initial_state
from stackrun.core.scheduler import Scheduler
from stackrun.core.state import AppState

from .fakes import ErrorSink, OutputSink


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the console.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the process environment.
    """
    return SimpleNamespace(
        app_name="stackrun-test",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        log_to_file=False,
        error_tracebacks=False,
        console_enabled=True,
    )


@pytest.fixture()
def errors() -> ErrorSink:
    return ErrorSink()


@pytest.fixture()
def scheduler(errors: ErrorSink) -> Scheduler:
    """A fresh scheduler per test; task errors are recorded instead of logged."""
    return Scheduler(on_error=errors)


@pytest.fixture()
def output() -> OutputSink:
    return OutputSink()


@pytest.fixture()
def state(settings: SimpleNamespace, output: OutputSink) -> AppState:
    return create_initial_state(settings=settings, emit=output)
