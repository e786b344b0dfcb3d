"""CanvasSurface: a fixed-size drawing surface showing a body diagram.

The base image is read off the GUI thread (local files) or through
QNetworkAccessManager (http/https), scaled to cover the viewport and placed
behind every overlay. Each load owns a CancellationToken; tearing the surface
down or starting another load cancels it, so late results are dropped.
"""
from __future__ import annotations

import logging
from functools import partial
from pathlib import Path

from PySide6.QtCore import QEvent, QPointF, QRectF, Qt, QTimer, QUrl, Signal
from PySide6.QtGui import QImage, QMouseEvent, QPainter, QPixmap
from PySide6.QtNetwork import QNetworkAccessManager, QNetworkReply, QNetworkRequest
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsPixmapItem,
    QGraphicsScene,
    QGraphicsView,
    QLabel,
    QStackedLayout,
    QWidget,
)

from symptom_map.application.errors import CanvasLoadError
from symptom_map.config import settings
from symptom_map.domain.geometry import CoverFit, NormalizedBox, compute_cover_fit
from symptom_map.ui.widgets.async_task import CancellationToken, run_async

LOADING_TEXT = "Loading interactive diagram..."
IMAGE_Z_VALUE = -1000.0


def _read_bytes(path: str) -> bytes:
    return Path(path).read_bytes()


class _SurfaceView(QGraphicsView):
    pressed = Signal(QPointF)
    moved = Signal(QPointF)
    left = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        self.viewport().setMouseTracking(True)

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if event.button() == Qt.MouseButton.LeftButton and self.scene() is not None:
            self.pressed.emit(self.mapToScene(event.position().toPoint()))
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if self.scene() is not None:
            self.moved.emit(self.mapToScene(event.position().toPoint()))
        super().mouseMoveEvent(event)

    def leaveEvent(self, event: QEvent) -> None:  # noqa: N802
        self.left.emit()
        super().leaveEvent(event)


class CanvasSurface(QWidget):
    canvasReady = Signal(object)
    imageLoaded = Signal(object, object)
    loadFailed = Signal(str)
    clicked = Signal(float, float)
    hovered = Signal(float, float)
    hoverLeft = Signal()

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        init_delay_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self._init_delay_ms = settings.canvas_init_delay_ms if init_delay_ms is None else init_delay_ms
        self._timeout_ms = settings.image_timeout_ms if timeout_ms is None else timeout_ms
        self._source: tuple[str, int, int] | None = None
        self._scene: QGraphicsScene | None = None
        self._pixmap_item: QGraphicsPixmapItem | None = None
        self._fit: CoverFit | None = None
        self._token: CancellationToken | None = None
        self._reply: QNetworkReply | None = None
        self._network: QNetworkAccessManager | None = None

        self._init_timer = QTimer(self)
        self._init_timer.setSingleShot(True)
        self._init_timer.timeout.connect(self._begin_load)

        self._status_label = QLabel(LOADING_TEXT)
        self._status_label.setObjectName("canvasStatus")
        self._status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._status_label.setWordWrap(True)
        self._view = _SurfaceView()
        self._view.pressed.connect(self._on_pressed)
        self._view.moved.connect(self._on_moved)
        self._view.left.connect(self.hoverLeft)

        self._stack = QStackedLayout(self)
        self._stack.setContentsMargins(0, 0, 0, 0)
        self._stack.addWidget(self._status_label)
        self._stack.addWidget(self._view)

    # ── State ────────────────────────────────────────────────────────────────

    @property
    def scene(self) -> QGraphicsScene | None:
        return self._scene

    @property
    def pixmap_item(self) -> QGraphicsPixmapItem | None:
        return self._pixmap_item

    @property
    def fit(self) -> CoverFit | None:
        return self._fit

    @property
    def is_ready(self) -> bool:
        return self._scene is not None

    @property
    def is_loading(self) -> bool:
        return self._token is not None and not self._token.is_cancelled and self._scene is None

    @property
    def status_text(self) -> str:
        return self._status_label.text()

    @property
    def view(self) -> QGraphicsView:
        return self._view

    def map_box(self, box: NormalizedBox) -> QRectF:
        """Viewport rectangle of a normalized image box under the current fit."""
        if self._fit is None:
            return QRectF()
        left, top = self._fit.to_viewport(box.x1, box.y1)
        right, bottom = self._fit.to_viewport(box.x2, box.y2)
        return QRectF(QPointF(left, top), QPointF(right, bottom))

    # ── Lifecycle ────────────────────────────────────────────────────────────

    def set_source(self, image_url: str, width: int, height: int) -> None:
        source = (str(image_url), int(width), int(height))
        if source == self._source and (self.is_ready or self.is_loading):
            return
        self._teardown()
        self._source = source
        if width > 0 and height > 0:
            self.setFixedSize(int(width), int(height))
        self._show_status(LOADING_TEXT)
        token = CancellationToken(self)
        token.timedOut.connect(partial(self._on_timeout, token))
        self._token = token
        QTimer.singleShot(0, self, partial(self._arm_init, token))

    def dispose(self) -> None:
        self._teardown()
        self._source = None

    def _arm_init(self, token: CancellationToken) -> None:
        if token.is_cancelled or token is not self._token:
            return
        self._init_timer.start(max(0, self._init_delay_ms))

    def _begin_load(self) -> None:
        token = self._token
        if token is None or token.is_cancelled or self._source is None:
            return
        image_url, width, height = self._source
        if width <= 0 or height <= 0:
            self._fail(token, f"Viewport has zero size: {width}x{height}")
            return
        token.start_timer(self._timeout_ms)
        url = QUrl(image_url)
        if url.scheme() in {"http", "https"}:
            self._fetch_remote(token, url)
            return
        path = url.toLocalFile() if url.isLocalFile() else image_url
        run_async(
            self,
            partial(_read_bytes, path),
            on_success=partial(self._on_bytes, token),
            on_error=partial(self._on_read_error, token),
            token=token,
        )

    def _fetch_remote(self, token: CancellationToken, url: QUrl) -> None:
        if self._network is None:
            self._network = QNetworkAccessManager(self)
        reply = self._network.get(QNetworkRequest(url))
        self._reply = reply
        reply.finished.connect(partial(self._on_reply_finished, token, reply))

    def _on_reply_finished(self, token: CancellationToken, reply: QNetworkReply) -> None:
        if self._reply is reply:
            self._reply = None
        reply.deleteLater()
        if token.is_cancelled:
            return
        if reply.error() != QNetworkReply.NetworkError.NoError:
            self._fail(token, reply.errorString())
            return
        self._on_bytes(token, reply.readAll().data())

    def _on_read_error(self, token: CancellationToken, exc: Exception) -> None:
        if token.is_cancelled:
            return
        self._fail(token, str(exc) or exc.__class__.__name__)

    def _on_timeout(self, token: CancellationToken) -> None:
        if token is not self._token:
            return
        self._abort_reply()
        self._fail(token, f"Timed out after {self._timeout_ms} ms")

    def _on_bytes(self, token: CancellationToken, data: bytes) -> None:
        if token.is_cancelled or token is not self._token or self._source is None:
            return
        token.stop_timer()
        try:
            scene, item, fit = self._build_scene(data)
        except CanvasLoadError as exc:
            self._fail(token, str(exc))
            return
        self._scene = scene
        self._pixmap_item = item
        self._fit = fit
        self._view.setScene(scene)
        self._stack.setCurrentWidget(self._view)
        self._logger.info("Canvas ready: %s", self._source[0])
        self.canvasReady.emit(scene)
        self.imageLoaded.emit(scene, item)

    def _build_scene(self, data: bytes) -> tuple[QGraphicsScene, QGraphicsPixmapItem, CoverFit]:
        if self._source is None:
            raise CanvasLoadError("Canvas has no image source")
        image_url, width, height = self._source
        image = QImage.fromData(data)
        if image.isNull():
            raise CanvasLoadError(f"Could not decode image: {image_url}")
        try:
            fit = compute_cover_fit(width, height, image.width(), image.height())
        except ValueError as exc:
            raise CanvasLoadError(str(exc)) from exc

        scene = QGraphicsScene(0, 0, width, height, self)
        item = QGraphicsPixmapItem(QPixmap.fromImage(image))
        item.setTransformationMode(Qt.TransformationMode.SmoothTransformation)
        item.setScale(fit.scale)
        item.setPos(fit.left, fit.top)
        item.setZValue(IMAGE_Z_VALUE)
        item.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        item.setAcceptHoverEvents(False)
        scene.addItem(item)
        return scene, item, fit

    def _fail(self, token: CancellationToken, message: str) -> None:
        if token is not self._token:
            return
        self._logger.warning("Canvas load failed for %s: %s", self._source[0] if self._source else "", message)
        token.cancel()
        self._release_scene()
        self._show_status(f"Error loading canvas: {message}")
        self.loadFailed.emit(message)

    def _teardown(self) -> None:
        self._init_timer.stop()
        if self._token is not None:
            self._token.cancel()
            self._token.deleteLater()
            self._token = None
        self._abort_reply()
        self._release_scene()

    def _abort_reply(self) -> None:
        reply = self._reply
        self._reply = None
        if reply is not None:
            reply.abort()
            reply.deleteLater()

    def _release_scene(self) -> None:
        scene = self._scene
        self._scene = None
        self._pixmap_item = None
        self._fit = None
        self._view.setScene(None)
        if scene is not None:
            scene.clear()
            scene.deleteLater()

    def _show_status(self, text: str) -> None:
        self._status_label.setText(text)
        self._stack.setCurrentWidget(self._status_label)

    def _on_pressed(self, pos: QPointF) -> None:
        if self._fit is None:
            return
        nx, ny = self._fit.to_normalized(pos.x(), pos.y())
        self.clicked.emit(nx, ny)

    def _on_moved(self, pos: QPointF) -> None:
        if self._fit is None:
            return
        nx, ny = self._fit.to_normalized(pos.x(), pos.y())
        self.hovered.emit(nx, ny)
