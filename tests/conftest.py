# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import stat
from collections.abc import Callable
from pathlib import Path

import pytest

from diagbridge.config import Config


class FakeTimer:
    """Timer handle that only fires when a test says so."""

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if self.cancelled or self.fired:
            return
        self.fired = True
        self.callback()


class FakeTimers:
    """Timer factory recording every timer the scheduler arms."""

    def __init__(self) -> None:
        self.created: list[FakeTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.created.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [timer for timer in self.created if not timer.cancelled and not timer.fired]

    def fire_pending(self) -> None:
        for timer in list(self.pending):
            timer.fire()


class FakeProbe:
    """Probe reporting availability from a mutable set of paths."""

    def __init__(self, available: set[str] | None = None) -> None:
        self.available = set(available or ())
        self.calls: list[str] = []

    def is_available(self, path: str) -> bool:
        self.calls.append(path)
        return path in self.available


@pytest.fixture
def timers() -> FakeTimers:
    return FakeTimers()


@pytest.fixture
def fake_probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Return a workspace directory nested a few levels below ``tmp_path``."""
    root = tmp_path / "outer" / "middle" / "project"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def config(workspace: Path) -> Config:
    return Config(workspace_root=workspace)


@pytest.fixture
def write_script() -> Callable[[Path, str], Path]:
    """Return a helper writing an executable ``/bin/sh`` script."""

    def _write(path: Path, body: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _write
