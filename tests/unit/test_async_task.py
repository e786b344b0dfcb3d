from __future__ import annotations

import threading

from PySide6.QtCore import QObject

from symptom_map.ui.widgets.async_task import CancellationToken, run_async


def test_run_async_delivers_result_on_caller_thread(qapp, wait_until) -> None:  # noqa: ARG001
    owner = QObject()
    results: list[tuple[int, threading.Thread]] = []
    finished: list[bool] = []

    run_async(
        owner,
        lambda: 21 * 2,
        on_success=lambda value: results.append((value, threading.current_thread())),
        on_finished=lambda: finished.append(True),
    )

    assert wait_until(lambda: bool(finished))
    assert results == [(42, threading.main_thread())]


def test_run_async_reports_errors(qapp, wait_until) -> None:  # noqa: ARG001
    owner = QObject()
    errors: list[Exception] = []

    def _boom() -> None:
        raise OSError("disk gone")

    run_async(owner, _boom, on_error=errors.append)

    assert wait_until(lambda: bool(errors))
    assert isinstance(errors[0], OSError)


def test_cancelled_token_drops_callbacks(qapp, wait_until) -> None:  # noqa: ARG001
    owner = QObject()
    token = CancellationToken(owner)
    gate = threading.Event()
    calls: list[str] = []
    done = threading.Event()

    def _work() -> str:
        gate.wait(2)
        done.set()
        return "late"

    run_async(
        owner,
        _work,
        on_success=lambda _value: calls.append("success"),
        on_finished=lambda: calls.append("finished"),
        token=token,
    )
    token.cancel()
    gate.set()

    assert wait_until(done.is_set)
    wait_until(lambda: False, timeout_ms=100)
    assert calls == []


def test_token_timeout_cancels_and_signals(qapp, wait_until) -> None:  # noqa: ARG001
    token = CancellationToken()
    fired: list[bool] = []
    token.timedOut.connect(lambda: fired.append(True))

    token.start_timer(10)

    assert wait_until(lambda: bool(fired))
    assert token.is_cancelled
    assert token.timed_out


def test_cancel_is_idempotent_and_stops_timer(qapp, wait_until) -> None:  # noqa: ARG001
    token = CancellationToken()
    cancelled: list[bool] = []
    timed_out: list[bool] = []
    token.cancelled.connect(lambda: cancelled.append(True))
    token.timedOut.connect(lambda: timed_out.append(True))
    token.start_timer(20)

    token.cancel()
    token.cancel()
    wait_until(lambda: False, timeout_ms=80)

    assert cancelled == [True]
    assert timed_out == []
    assert not token.timed_out
