# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for debounced validation scheduling."""

from __future__ import annotations

from pathlib import Path

from diagbridge.diagnostics import DiagnosticPublisher
from diagbridge.errors import ProcessTimeoutError, ToolNotFoundError
from diagbridge.models import Diagnostic, TextRange
from diagbridge.scheduling import ValidationPhase, ValidationScheduler


def _diagnostic(message: str, line: int = 0) -> Diagnostic:
    return Diagnostic(range=TextRange.on_line(line, 0, 1), message=message)


class RecordingValidator:
    def __init__(self, *results: list[Diagnostic]) -> None:
        self.results = list(results)
        self.calls: list[Path] = []

    def __call__(self, path: Path) -> list[Diagnostic]:
        self.calls.append(path)
        if self.results:
            return self.results.pop(0)
        return []


def _scheduler(validate, timers, publisher=None, **kwargs) -> tuple[ValidationScheduler, DiagnosticPublisher]:
    publisher = publisher or DiagnosticPublisher()
    scheduler = ValidationScheduler(validate, publisher, debounce=0.5, timer_factory=timers, **kwargs)
    return scheduler, publisher


def test_rapid_changes_collapse_into_one_run(timers, tmp_path: Path) -> None:
    path = tmp_path / "main.vey"
    validate = RecordingValidator([_diagnostic("boom")])
    scheduler, publisher = _scheduler(validate, timers)

    for _ in range(3):
        scheduler.changed("doc", path)

    assert len(timers.created) == 3
    assert len(timers.pending) == 1
    assert timers.created[-1].delay == 0.5
    assert scheduler.phase("doc") is ValidationPhase.SCHEDULED

    timers.fire_pending()

    assert validate.calls == [path]
    assert [item.message for item in publisher.get("doc")] == ["boom"]
    assert scheduler.phase("doc") is ValidationPhase.IDLE


def test_open_and_save_do_not_rearm_a_pending_timer(timers, tmp_path: Path) -> None:
    scheduler, _ = _scheduler(RecordingValidator(), timers)

    scheduler.opened("doc", tmp_path / "main.vey")
    scheduler.saved("doc")
    assert len(timers.created) == 1

    scheduler.changed("doc")
    assert len(timers.created) == 2
    assert timers.created[0].cancelled


def test_phase_is_running_while_validating(timers, tmp_path: Path) -> None:
    seen: list[ValidationPhase | None] = []
    scheduler: ValidationScheduler

    def validate(path: Path) -> list[Diagnostic]:
        seen.append(scheduler.phase("doc"))
        return []

    scheduler, _ = _scheduler(validate, timers)
    scheduler.opened("doc", tmp_path / "main.vey")
    timers.fire_pending()

    assert seen == [ValidationPhase.RUNNING]
    assert scheduler.phase("doc") is ValidationPhase.IDLE


def test_edit_during_run_schedules_exactly_one_follow_up(timers, tmp_path: Path) -> None:
    path = tmp_path / "main.vey"
    calls: list[Path] = []
    scheduler: ValidationScheduler

    def validate(target: Path) -> list[Diagnostic]:
        calls.append(target)
        if len(calls) == 1:
            scheduler.changed("doc")
            scheduler.changed("doc")
            assert not timers.pending
            return [_diagnostic("stale")]
        return [_diagnostic("fresh")]

    scheduler, publisher = _scheduler(validate, timers)
    scheduler.opened("doc", path)
    timers.fire_pending()

    assert len(calls) == 1
    assert scheduler.phase("doc") is ValidationPhase.SCHEDULED
    assert len(timers.pending) == 1

    timers.fire_pending()

    assert len(calls) == 2
    assert [item.message for item in publisher.get("doc")] == ["fresh"]
    assert scheduler.phase("doc") is ValidationPhase.IDLE


def test_missing_tool_clears_and_notifies(timers, tmp_path: Path) -> None:
    publisher = DiagnosticPublisher()
    publisher.set("doc", [_diagnostic("old")])
    missing: list[ToolNotFoundError] = []

    def validate(path: Path) -> list[Diagnostic]:
        raise ToolNotFoundError("compiler", ("veyc",))

    scheduler, _ = _scheduler(validate, timers, publisher, on_tool_missing=missing.append)
    scheduler.saved("doc", tmp_path / "main.vey")
    timers.fire_pending()

    assert "doc" not in publisher
    assert [error.logical_name for error in missing] == ["compiler"]
    assert scheduler.phase("doc") is ValidationPhase.IDLE


def test_timeout_clears_diagnostics(timers, tmp_path: Path) -> None:
    publisher = DiagnosticPublisher()
    publisher.set("doc", [_diagnostic("old")])

    def validate(path: Path) -> list[Diagnostic]:
        raise ProcessTimeoutError(["veyc"], 5.0)

    scheduler, _ = _scheduler(validate, timers, publisher)
    scheduler.changed("doc", tmp_path / "main.vey")
    timers.fire_pending()

    assert publisher.get("doc") == ()
    assert scheduler.last_diagnostics("doc") == ()


def test_document_without_file_is_not_validated(timers) -> None:
    validate = RecordingValidator([_diagnostic("never")])
    scheduler, publisher = _scheduler(validate, timers)

    scheduler.opened("untitled:1")
    timers.fire_pending()

    assert validate.calls == []
    assert publisher.get("untitled:1") == ()


def test_close_cancels_pending_work_and_clears(timers, tmp_path: Path) -> None:
    validate = RecordingValidator([_diagnostic("late")])
    publisher = DiagnosticPublisher()
    publisher.set("doc", [_diagnostic("old")])
    scheduler, _ = _scheduler(validate, timers, publisher)

    scheduler.changed("doc", tmp_path / "main.vey")
    scheduler.closed("doc")

    assert timers.created[0].cancelled
    timers.created[0].callback()

    assert validate.calls == []
    assert "doc" not in publisher
    assert scheduler.phase("doc") is None
    assert scheduler.documents() == ()


def test_reopen_during_run_waits_and_discards_old_result(timers, tmp_path: Path) -> None:
    path = tmp_path / "main.vey"
    calls: list[Path] = []
    scheduler: ValidationScheduler

    def validate(target: Path) -> list[Diagnostic]:
        calls.append(target)
        if len(calls) == 1:
            scheduler.closed("doc")
            assert scheduler.phase("doc") is None
            scheduler.opened("doc", target)
            assert scheduler.flush("doc") is False
            assert not timers.pending
            return [_diagnostic("stale")]
        return [_diagnostic("fresh")]

    scheduler, publisher = _scheduler(validate, timers)
    scheduler.opened("doc", path)
    timers.fire_pending()

    assert len(calls) == 1
    assert publisher.get("doc") == ()
    assert scheduler.phase("doc") is ValidationPhase.SCHEDULED

    timers.fire_pending()

    assert len(calls) == 2
    assert [item.message for item in publisher.get("doc")] == ["fresh"]
    assert [item.message for item in scheduler.last_diagnostics("doc")] == ["fresh"]


def test_close_during_run_drops_state_when_run_finishes(timers, tmp_path: Path) -> None:
    scheduler: ValidationScheduler

    def validate(target: Path) -> list[Diagnostic]:
        scheduler.closed("doc")
        scheduler.changed("doc", target)
        scheduler.closed("doc")
        return [_diagnostic("late")]

    scheduler, publisher = _scheduler(validate, timers)
    scheduler.opened("doc", tmp_path / "main.vey")
    timers.fire_pending()

    assert "doc" not in publisher
    assert scheduler.documents() == ()
    assert scheduler.phase("doc") is None
    assert not timers.pending


def test_failing_tool_missing_handler_does_not_wedge_document(timers, tmp_path: Path) -> None:
    calls: list[Path] = []

    def validate(path: Path) -> list[Diagnostic]:
        calls.append(path)
        raise ToolNotFoundError("compiler", ("veyc",))

    def handler(error: ToolNotFoundError) -> None:
        raise RuntimeError("notification failed")

    scheduler, _ = _scheduler(validate, timers, on_tool_missing=handler)
    scheduler.opened("doc", tmp_path / "main.vey")
    timers.fire_pending()

    assert scheduler.phase("doc") is ValidationPhase.IDLE

    scheduler.changed("doc")
    timers.fire_pending()

    assert len(calls) == 2


def test_unexpected_validator_error_clears_and_allows_next_run(timers, tmp_path: Path) -> None:
    outcomes: list[Exception | list[Diagnostic]] = [ValueError("bad output"), [_diagnostic("second")]]
    publisher = DiagnosticPublisher()
    publisher.set("doc", [_diagnostic("old")])

    def validate(path: Path) -> list[Diagnostic]:
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    scheduler, _ = _scheduler(validate, timers, publisher)
    scheduler.saved("doc", tmp_path / "main.vey")
    timers.fire_pending()

    assert "doc" not in publisher
    assert scheduler.phase("doc") is ValidationPhase.IDLE

    scheduler.changed("doc")
    timers.fire_pending()

    assert [item.message for item in publisher.get("doc")] == ["second"]
    assert outcomes == []


def test_documents_are_validated_independently(timers, tmp_path: Path) -> None:
    results = {
        tmp_path / "a.vey": [_diagnostic("in a")],
        tmp_path / "b.vey": [],
    }
    scheduler, publisher = _scheduler(lambda path: results[path], timers)

    scheduler.opened("a", tmp_path / "a.vey")
    scheduler.opened("b", tmp_path / "b.vey")
    timers.fire_pending()

    assert [item.message for item in publisher.get("a")] == ["in a"]
    assert "b" not in publisher


def test_flush_without_pending_timer_is_a_no_op(timers) -> None:
    scheduler, _ = _scheduler(RecordingValidator(), timers)

    assert scheduler.flush("doc") is False


def test_close_all_drops_every_document(timers, tmp_path: Path) -> None:
    scheduler, publisher = _scheduler(RecordingValidator(), timers)
    scheduler.opened("a", tmp_path / "a.vey")
    scheduler.opened("b", tmp_path / "b.vey")

    scheduler.close_all()

    assert scheduler.documents() == ()
    assert all(timer.cancelled for timer in timers.created)
