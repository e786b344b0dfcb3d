from __future__ import annotations

from collections.abc import Callable
from typing import Any

from PySide6.QtCore import QObject, QRunnable, QThreadPool, QTimer, Signal, Slot


class CancellationToken(QObject):
    """Main-thread flag shared between a widget and the work it started.

    Once cancelled (explicitly or by the timer) the token stays cancelled and
    ``run_async`` drops every callback still pending for it.
    """

    cancelled = Signal()
    timedOut = Signal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._cancelled = False
        self._timed_out = False
        self._timer: QTimer | None = None

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    @property
    def timed_out(self) -> bool:
        return self._timed_out

    def start_timer(self, timeout_ms: int) -> None:
        if self._cancelled or timeout_ms <= 0:
            return
        if self._timer is None:
            self._timer = QTimer(self)
            self._timer.setSingleShot(True)
            self._timer.timeout.connect(self._on_timeout)
        self._timer.start(timeout_ms)

    def stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.stop()

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self.stop_timer()
        self.cancelled.emit()

    def _on_timeout(self) -> None:
        if self._cancelled:
            return
        self._timed_out = True
        self.cancel()
        self.timedOut.emit()


class TaskSignals(QObject):
    success = Signal(object)
    error = Signal(Exception)
    finished = Signal()


class AsyncTask(QRunnable):
    def __init__(self, fn: Callable[[], Any]) -> None:
        super().__init__()
        self.fn = fn
        self.signals = TaskSignals()

    def run(self) -> None:
        try:
            result = self.fn()
        except Exception as exc:  # noqa: BLE001
            self.signals.error.emit(exc)
        else:
            self.signals.success.emit(result)
        finally:
            self.signals.finished.emit()


class _CallbackRelay(QObject):
    # Created in the caller's thread, so its slots run there while the task
    # emits from a pool thread.
    def __init__(
        self,
        parent: QObject,
        token: CancellationToken | None,
        on_success: Callable[[Any], None] | None,
        on_error: Callable[[Exception], None] | None,
        on_finished: Callable[[], None] | None,
    ) -> None:
        super().__init__(parent)
        self._token = token
        self._on_success = on_success
        self._on_error = on_error
        self._on_finished = on_finished

    def _dropped(self) -> bool:
        return self._token is not None and self._token.is_cancelled

    def _stop_timer(self) -> None:
        if self._token is not None:
            self._token.stop_timer()

    @Slot(object)
    def deliver_success(self, result: Any) -> None:
        if self._on_success and not self._dropped():
            self._stop_timer()
            self._on_success(result)

    @Slot(Exception)
    def deliver_error(self, exc: Exception) -> None:
        if self._on_error and not self._dropped():
            self._stop_timer()
            self._on_error(exc)

    @Slot()
    def deliver_finished(self) -> None:
        try:
            if self._on_finished and not self._dropped():
                self._on_finished()
        finally:
            self.deleteLater()


def run_async(
    parent: QObject,
    fn: Callable[[], Any],
    on_success: Callable[[Any], None] | None = None,
    on_error: Callable[[Exception], None] | None = None,
    on_finished: Callable[[], None] | None = None,
    token: CancellationToken | None = None,
) -> AsyncTask:
    task = AsyncTask(fn)
    relay = _CallbackRelay(parent, token, on_success, on_error, on_finished)
    task.signals.success.connect(relay.deliver_success)
    task.signals.error.connect(relay.deliver_error)
    task.signals.finished.connect(relay.deliver_finished)
    QThreadPool.globalInstance().start(task)
    return task
