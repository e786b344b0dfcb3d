from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from PySide6.QtCore import QRectF, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QPen
from PySide6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsRectItem,
    QGraphicsScene,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QVBoxLayout,
    QWidget,
)

from symptom_map.application.dto.symptom_dto import SymptomContentDto, SymptomRegionDto
from symptom_map.config import settings
from symptom_map.domain.constants import BodyView, normalize_view
from symptom_map.domain.detailed_parts import DetailedPart, detailed_parts, part_at, part_regions, place_parts
from symptom_map.domain.geometry import NormalizedBox
from symptom_map.domain.quadrants import get_quadrants, quadrant_title
from symptom_map.ui.bodymap.body_assets import find_quadrant_image, resolve_body_image
from symptom_map.ui.bodymap.canvas_surface import CanvasSurface

REGION_COLOR = "#2563eb"
PART_COLOR = "#ef4444"
PART_HOVER_COLOR = "#3b82f6"
PART_SELECTED_COLOR = "#22c55e"
PART_DOT_SIZE = 10.0
EMPTY_TEXT = "No symptoms recorded for this area"
LOADING_SYMPTOMS_TEXT = "Loading symptoms..."
PART_HINT_TEXT = "Click on the specific body part where you have symptoms"

_ENTRY_ID_ROLE = Qt.ItemDataRole.UserRole
_WHOLE_IMAGE = NormalizedBox(0.0, 0.0, 1.0, 1.0)


def region_box(region: SymptomRegionDto) -> NormalizedBox:
    coords = region.coordinates
    return NormalizedBox(
        coords.x_pct / 100.0,
        coords.y_pct / 100.0,
        (coords.x_pct + coords.w_pct) / 100.0,
        (coords.y_pct + coords.h_pct) / 100.0,
    )


class RegionPanel(QWidget):
    """Detailed phase: sub-parts of a quadrant and the symptoms of the chosen part.

    Symptom check boxes are keyed by entry id (region id or ``fallback_{i}``);
    several entries may share a display text. ``symptomsChanged`` carries the
    selected texts, one per distinct text, across every part visited so far.
    """

    partSelected = Signal(str)
    symptomsChanged = Signal(list)

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        assets_dir: Path | None = None,
        canvas_size: tuple[int, int] | None = None,
        init_delay_ms: int | None = None,
    ) -> None:
        super().__init__(parent)
        self._assets_dir = assets_dir
        self._canvas_size = canvas_size or (settings.canvas_width, settings.canvas_height)
        self._body_part = ""
        self._content = SymptomContentDto()
        self._checked: list[str] = []
        self._checked_ids: set[str] = set()
        self._region_items: dict[str, QGraphicsRectItem] = {}
        self._parts: tuple[DetailedPart, ...] = ()
        self._part_items: dict[str, QGraphicsRectItem] = {}
        self._hovered_part: str | None = None
        self._selected_parts: set[str] = set()
        self._updating = False

        self.title_label = QLabel()
        self.title_label.setObjectName("regionPanelTitle")

        self.parts_canvas = CanvasSurface(self, init_delay_ms=init_delay_ms)
        self.parts_canvas.canvasReady.connect(self._draw_parts)
        self.parts_canvas.clicked.connect(self._on_parts_clicked)
        self.parts_canvas.hovered.connect(self._on_parts_hovered)
        self.parts_canvas.hoverLeft.connect(self._on_parts_left)
        self.hover_label = QLabel(PART_HINT_TEXT)
        self.hover_label.setObjectName("partHover")

        self.parts_list = QListWidget()
        self.parts_list.setObjectName("detailedParts")
        self.parts_list.itemClicked.connect(self._on_part_clicked)

        self.canvas = CanvasSurface(self, init_delay_ms=init_delay_ms)
        self.canvas.canvasReady.connect(self._draw_regions)
        self.canvas.clicked.connect(self._on_canvas_clicked)

        self.part_label = QLabel()
        self.symptom_list = QListWidget()
        self.symptom_list.setObjectName("symptomList")
        self.symptom_list.itemChanged.connect(self._on_symptom_item_changed)

        left = QVBoxLayout()
        left.addWidget(self.parts_canvas, 0, Qt.AlignmentFlag.AlignHCenter)
        left.addWidget(self.hover_label)
        left.addWidget(self.parts_list, 1)

        right = QVBoxLayout()
        right.addWidget(self.part_label)
        right.addWidget(self.symptom_list, 1)

        body = QHBoxLayout()
        body.addLayout(left, 1)
        body.addWidget(self.canvas, 0, Qt.AlignmentFlag.AlignTop)
        body.addLayout(right, 2)

        layout = QVBoxLayout(self)
        layout.addWidget(self.title_label)
        layout.addLayout(body, 1)

    @property
    def body_part(self) -> str:
        return self._body_part

    @property
    def content(self) -> SymptomContentDto:
        return self._content

    @property
    def region_ids(self) -> list[str]:
        return list(self._region_items)

    @property
    def part_ids(self) -> list[str]:
        return list(self._part_items)

    @property
    def parts(self) -> tuple[DetailedPart, ...]:
        return self._parts

    @property
    def hovered_part(self) -> str | None:
        return self._hovered_part

    def show_quadrant(self, quadrant_id: str, view: BodyView | str, gender: str) -> None:
        normalized = normalize_view(view)
        self.title_label.setText(quadrant_title(quadrant_id, normalized))
        self.parts_list.clear()
        for name in detailed_parts(quadrant_id, normalized, gender):
            self.parts_list.addItem(QListWidgetItem(name))

        body_image = resolve_body_image(gender, normalized, self._assets_dir)
        parts = part_regions(quadrant_id, normalized, gender)
        parts_image = find_quadrant_image(quadrant_id, gender, normalized, self._assets_dir)
        if parts_image is None:
            # No close-up: place the parts inside the quadrant on the body diagram.
            frame = next(
                (q.box for q in get_quadrants(normalized, gender) if q.id == quadrant_id),
                _WHOLE_IMAGE,
            )
            parts = place_parts(parts, frame)
            parts_image = body_image
        self._parts = parts
        self._set_hovered(None)

        width, height = self._canvas_size
        self.parts_canvas.set_source(parts_image, width, height)
        if self.parts_canvas.is_ready:
            self._draw_parts(self.parts_canvas.scene)
        else:
            self._part_items = {}
        self.canvas.set_source(body_image, width, height)
        if not self.canvas.is_ready:
            self._region_items = {}

    def mark_selected_parts(self, names: Iterable[str]) -> None:
        self._selected_parts = set(names)
        self._refresh_part_styles()

    def set_loading(self, body_part: str) -> None:
        self._body_part = body_part
        self._content = SymptomContentDto()
        self._checked_ids = set()
        self._clear_region_items()
        self.part_label.setText(body_part)
        self._fill_symptom_list([], placeholder=LOADING_SYMPTOMS_TEXT)

    def set_content(self, body_part: str, content: SymptomContentDto) -> None:
        if body_part != self._body_part and self._body_part:
            # A newer part was picked while this one was still resolving.
            return
        self._body_part = body_part
        self._content = content
        self.part_label.setText(body_part)
        self.canvas.setVisible(bool(content.regions))
        entries = self._entries()
        self._checked_ids = {entry_id for entry_id, text in entries if text in self._checked}
        self._fill_symptom_list(entries, placeholder=EMPTY_TEXT)
        scene = self.canvas.scene
        if scene is not None:
            self._draw_regions(scene)

    def set_checked_symptoms(self, symptoms: Iterable[str]) -> None:
        self._checked = list(dict.fromkeys(symptoms))
        self._checked_ids = {entry_id for entry_id, text in self._entries() if text in self._checked}
        self._updating = True
        try:
            for row in range(self.symptom_list.count()):
                item = self.symptom_list.item(row)
                if item.flags() & Qt.ItemFlag.ItemIsUserCheckable:
                    checked = item.data(_ENTRY_ID_ROLE) in self._checked_ids
                    item.setCheckState(Qt.CheckState.Checked if checked else Qt.CheckState.Unchecked)
        finally:
            self._updating = False
        self._refresh_region_styles()

    def checked_symptoms(self) -> list[str]:
        return list(self._checked)

    def checked_ids(self) -> set[str]:
        return set(self._checked_ids)

    def toggle_symptom(self, entry_id: str) -> None:
        for row in range(self.symptom_list.count()):
            item = self.symptom_list.item(row)
            if item.data(_ENTRY_ID_ROLE) == entry_id and item.flags() & Qt.ItemFlag.ItemIsUserCheckable:
                checked = item.checkState() == Qt.CheckState.Checked
                item.setCheckState(Qt.CheckState.Unchecked if checked else Qt.CheckState.Checked)
                return

    def clear(self) -> None:
        self._body_part = ""
        self._content = SymptomContentDto()
        self._checked_ids = set()
        self._selected_parts = set()
        self._clear_region_items()
        self.title_label.clear()
        self.part_label.clear()
        self.parts_list.clear()
        self._fill_symptom_list([], placeholder="")

    def dispose(self) -> None:
        self._region_items = {}
        self._part_items = {}
        self.parts_canvas.dispose()
        self.canvas.dispose()

    # ── Internals ────────────────────────────────────────────────────────────

    def _entries(self) -> list[tuple[str, str]]:
        if self._content.regions:
            return [(region.id, region.text) for region in self._content.regions]
        return [(item.id, item.text) for item in self._content.fallback_symptoms]

    def _fill_symptom_list(self, entries: list[tuple[str, str]], *, placeholder: str) -> None:
        self._updating = True
        try:
            self.symptom_list.clear()
            for entry_id, text in entries:
                item = QListWidgetItem(text)
                item.setData(_ENTRY_ID_ROLE, entry_id)
                item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
                checked = entry_id in self._checked_ids
                item.setCheckState(Qt.CheckState.Checked if checked else Qt.CheckState.Unchecked)
                self.symptom_list.addItem(item)
            if not entries and placeholder:
                item = QListWidgetItem(placeholder)
                item.setFlags(Qt.ItemFlag.NoItemFlags)
                self.symptom_list.addItem(item)
        finally:
            self._updating = False

    def _clear_region_items(self) -> None:
        scene = self.canvas.scene
        for item in self._region_items.values():
            if scene is not None and item.scene() is scene:
                scene.removeItem(item)
        self._region_items = {}

    def _draw_regions(self, scene: QGraphicsScene) -> None:
        self._clear_region_items()
        color = QColor(REGION_COLOR)
        for region in self._content.regions:
            item = QGraphicsRectItem(self.canvas.map_box(region_box(region)))
            item.setPen(QPen(color, 1.5))
            item.setToolTip(region.summary or region.text)
            item.setData(0, region.id)
            scene.addItem(item)
            self._region_items[region.id] = item
        self._refresh_region_styles()

    def _refresh_region_styles(self) -> None:
        for region_id, item in self._region_items.items():
            fill = QColor(REGION_COLOR)
            fill.setAlpha(110 if region_id in self._checked_ids else 30)
            item.setBrush(QBrush(fill))

    def _draw_parts(self, scene: QGraphicsScene) -> None:
        for item in self._part_items.values():
            if item.scene() is scene:
                scene.removeItem(item)
        self._part_items = {}
        for part in self._parts:
            rect = self.parts_canvas.map_box(part.box)
            item = QGraphicsRectItem(rect)
            item.setToolTip(part.name)
            item.setData(0, part.name)
            dot = QGraphicsEllipseItem(
                QRectF(
                    rect.center().x() - PART_DOT_SIZE / 2,
                    rect.center().y() - PART_DOT_SIZE / 2,
                    PART_DOT_SIZE,
                    PART_DOT_SIZE,
                ),
                item,
            )
            dot.setPen(QPen(QColor("#ffffff"), 2))
            scene.addItem(item)
            self._part_items.setdefault(part.name, item)
        self._refresh_part_styles()

    def _refresh_part_styles(self) -> None:
        for name, item in self._part_items.items():
            if name == self._hovered_part:
                color = QColor(PART_HOVER_COLOR)
            elif name in self._selected_parts:
                color = QColor(PART_SELECTED_COLOR)
            else:
                color = QColor(PART_COLOR)
            hovered = name == self._hovered_part
            fill = QColor(color)
            fill.setAlpha(40 if hovered else 0)
            item.setPen(QPen(color, 1.5, Qt.PenStyle.DashLine) if hovered else QPen(Qt.PenStyle.NoPen))
            item.setBrush(QBrush(fill))
            item.setZValue(1.0 if hovered else 0.0)
            for child in item.childItems():
                if isinstance(child, QGraphicsEllipseItem):
                    child.setBrush(QBrush(color))

    def _set_hovered(self, name: str | None) -> None:
        if name == self._hovered_part:
            return
        self._hovered_part = name
        self.hover_label.setText(name or PART_HINT_TEXT)
        self._refresh_part_styles()

    def _on_parts_hovered(self, x: float, y: float) -> None:
        self._set_hovered(part_at(self._parts, x, y))

    def _on_parts_left(self) -> None:
        self._set_hovered(None)

    def _on_parts_clicked(self, x: float, y: float) -> None:
        name = part_at(self._parts, x, y)
        if name is not None:
            self.partSelected.emit(name)

    def _on_part_clicked(self, item: QListWidgetItem) -> None:
        name = item.text().strip()
        if name:
            self.partSelected.emit(name)

    def _on_canvas_clicked(self, x: float, y: float) -> None:
        # Later regions are drawn on top, so they win.
        for region in reversed(self._content.regions):
            if region_box(region).contains(x, y):
                self.toggle_symptom(region.id)
                return

    def _on_symptom_item_changed(self, item: QListWidgetItem) -> None:
        if self._updating or not item.flags() & Qt.ItemFlag.ItemIsUserCheckable:
            return
        entry_id = item.data(_ENTRY_ID_ROLE)
        if item.checkState() == Qt.CheckState.Checked:
            self._checked_ids.add(entry_id)
        else:
            self._checked_ids.discard(entry_id)
        entries = self._entries()
        shown = {text for _, text in entries}
        still_checked = [text for eid, text in entries if eid in self._checked_ids]
        # A shared text stays selected while any entry carrying it is checked.
        kept = [text for text in self._checked if text not in shown or text in still_checked]
        self._checked = kept + [text for text in dict.fromkeys(still_checked) if text not in kept]
        self._refresh_region_styles()
        self.symptomsChanged.emit(list(self._checked))
