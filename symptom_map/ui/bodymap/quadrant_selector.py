from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QBrush, QColor, QPen
from PySide6.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSimpleTextItem,
    QVBoxLayout,
    QWidget,
)

from symptom_map.config import settings
from symptom_map.domain.constants import BodyView, normalize_gender, normalize_view
from symptom_map.domain.quadrants import Quadrant, get_quadrants, quadrant_at
from symptom_map.ui.bodymap.body_assets import resolve_body_image
from symptom_map.ui.bodymap.canvas_surface import CanvasSurface

OVERLAY_ALPHA = 48


class QuadrantSelector(QWidget):
    """First phase: five coarse zones drawn over the body diagram."""

    quadrantSelected = Signal(str)

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        assets_dir: Path | None = None,
        canvas_size: tuple[int, int] | None = None,
        init_delay_ms: int | None = None,
    ) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self._assets_dir = assets_dir
        self._canvas_size = canvas_size or (settings.canvas_width, settings.canvas_height)
        self._view = BodyView.FRONT
        self._gender = "M"
        self._quadrants: tuple[Quadrant, ...] = get_quadrants(self._view, self._gender)
        self._overlays: dict[str, QGraphicsRectItem] = {}

        self.canvas = CanvasSurface(self, init_delay_ms=init_delay_ms)
        self.canvas.canvasReady.connect(self._draw_overlays)
        self.canvas.clicked.connect(self._on_canvas_clicked)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.canvas, 0, Qt.AlignmentFlag.AlignHCenter)

    @property
    def quadrants(self) -> tuple[Quadrant, ...]:
        return self._quadrants

    @property
    def overlay_ids(self) -> list[str]:
        return list(self._overlays)

    def set_view(self, view: BodyView | str, gender: str) -> None:
        self._view = normalize_view(view)
        self._gender = normalize_gender(gender)
        self._quadrants = get_quadrants(self._view, self._gender)
        width, height = self._canvas_size
        image = resolve_body_image(self._gender, self._view, self._assets_dir)
        self.canvas.set_source(image, width, height)
        if self.canvas.is_ready:
            # Same picture already on screen: canvasReady will not fire again.
            self._draw_overlays(self.canvas.scene)
        else:
            self._overlays = {}

    def dispose(self) -> None:
        self._overlays = {}
        self.canvas.dispose()

    def _draw_overlays(self, scene: QGraphicsScene) -> None:
        for item in self._overlays.values():
            if item.scene() is scene:
                scene.removeItem(item)
        self._overlays = {}
        for quadrant in self._quadrants:
            color = QColor(quadrant.color)
            fill = QColor(color)
            fill.setAlpha(OVERLAY_ALPHA)
            rect = self.canvas.map_box(quadrant.box)
            item = QGraphicsRectItem(rect)
            item.setPen(QPen(color, 2, Qt.PenStyle.DashLine))
            item.setBrush(QBrush(fill))
            item.setToolTip(f"{quadrant.name}\n{quadrant.description}")
            item.setData(0, quadrant.id)
            scene.addItem(item)

            label = QGraphicsSimpleTextItem(quadrant.name, item)
            label.setBrush(QBrush(color.darker(140)))
            label_rect = label.boundingRect()
            label.setPos(
                rect.center().x() - label_rect.width() / 2,
                rect.center().y() - label_rect.height() / 2,
            )
            self._overlays[quadrant.id] = item

    def _on_canvas_clicked(self, x: float, y: float) -> None:
        quadrant_id = quadrant_at(self._quadrants, x, y)
        if quadrant_id is None:
            return
        self._logger.info("Quadrant selected: %s (%s)", quadrant_id, self._view.value)
        self.quadrantSelected.emit(quadrant_id)
