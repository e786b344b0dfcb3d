"""Two-phase body selection: coarse quadrant first, then detailed body parts.

The wizard owns the SelectionState for its session. Symptom lookups run in the
thread pool; each one gets its own CancellationToken with the query timeout,
and starting another lookup (or leaving the detailed page) cancels the previous
one so a late result never overwrites a newer selection.
"""
from __future__ import annotations

import logging
from functools import partial
from pathlib import Path

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QButtonGroup,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QPlainTextEdit,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from symptom_map.application.dto.symptom_dto import SymptomContentDto
from symptom_map.application.services.symptom_resolver_service import SymptomResolverService
from symptom_map.config import settings
from symptom_map.domain.constants import (
    GENDER_LABELS,
    GENDERS,
    VIEW_LABELS,
    BodyView,
    SelectionStep,
    normalize_gender,
)
from symptom_map.domain.models.selection_state import SelectionState
from symptom_map.domain.quadrants import get_quadrants
from symptom_map.infrastructure.session_store.selection_store import SelectionStore
from symptom_map.ui.bodymap.quadrant_selector import QuadrantSelector
from symptom_map.ui.bodymap.region_panel import RegionPanel
from symptom_map.ui.widgets.async_task import CancellationToken, run_async
from symptom_map.ui.widgets.notifications import clear_status, set_status


class BodySelectionWizard(QWidget):
    selectionChanged = Signal(object)

    def __init__(
        self,
        resolver: SymptomResolverService,
        store: SelectionStore | None = None,
        parent: QWidget | None = None,
        *,
        assets_dir: Path | None = None,
        canvas_size: tuple[int, int] | None = None,
        init_delay_ms: int | None = None,
        query_timeout_ms: int | None = None,
        persist: bool | None = None,
    ) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self._resolver = resolver
        self._store = store
        self._persist = settings.persist_selection if persist is None else persist
        self._query_timeout_ms = settings.query_timeout_ms if query_timeout_ms is None else query_timeout_ms
        self._query_token: CancellationToken | None = None
        self._active_quadrant: str | None = None
        self._gender = "M"
        self.state = self._load_state()

        self.gender_combo = QComboBox()
        for code in GENDERS:
            self.gender_combo.addItem(GENDER_LABELS[code], code)
        self.gender_combo.currentIndexChanged.connect(self._on_gender_changed)

        self.front_btn = QPushButton(VIEW_LABELS[BodyView.FRONT])
        self.back_view_btn = QPushButton(VIEW_LABELS[BodyView.BACK])
        self._view_group = QButtonGroup(self)
        self._view_group.setExclusive(True)
        for button, view in ((self.front_btn, BodyView.FRONT), (self.back_view_btn, BodyView.BACK)):
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, value=view: self.set_view(value))
            self._view_group.addButton(button)

        self.back_btn = QPushButton("Back to body areas")
        self.back_btn.clicked.connect(self.go_back)
        self.reset_btn = QPushButton("Reset")
        self.reset_btn.clicked.connect(self.reset)

        toolbar = QHBoxLayout()
        toolbar.addWidget(QLabel("Gender:"))
        toolbar.addWidget(self.gender_combo)
        toolbar.addWidget(self.front_btn)
        toolbar.addWidget(self.back_view_btn)
        toolbar.addStretch(1)
        toolbar.addWidget(self.back_btn)
        toolbar.addWidget(self.reset_btn)

        self.quadrant_selector = QuadrantSelector(
            assets_dir=assets_dir, canvas_size=canvas_size, init_delay_ms=init_delay_ms
        )
        self.quadrant_selector.quadrantSelected.connect(self.select_quadrant)
        self.region_panel = RegionPanel(assets_dir=assets_dir, canvas_size=canvas_size, init_delay_ms=init_delay_ms)
        self.region_panel.partSelected.connect(self.select_body_part)
        self.region_panel.symptomsChanged.connect(self._on_symptoms_changed)

        self.pages = QStackedWidget()
        self.pages.addWidget(self.quadrant_selector)
        self.pages.addWidget(self.region_panel)

        self.notes_edit = QPlainTextEdit()
        self.notes_edit.setPlaceholderText("Describe your symptoms in your own words")
        self.notes_edit.setMaximumHeight(90)
        self.notes_edit.textChanged.connect(self._on_notes_changed)

        self.summary_label = QLabel()
        self.summary_label.setObjectName("selectionSummary")
        self.status_label = QLabel()
        self.status_label.setObjectName("statusLabel")

        layout = QVBoxLayout(self)
        layout.addLayout(toolbar)
        layout.addWidget(self.pages, 1)
        layout.addWidget(self.notes_edit)
        layout.addWidget(self.summary_label)
        layout.addWidget(self.status_label)

        self._restore()

    # ── Public API ───────────────────────────────────────────────────────────

    @property
    def gender(self) -> str:
        return self._gender

    @property
    def active_quadrant(self) -> str | None:
        return self._active_quadrant

    def set_gender(self, gender: str) -> None:
        index = self.gender_combo.findData(normalize_gender(gender))
        if index >= 0 and index != self.gender_combo.currentIndex():
            self.gender_combo.setCurrentIndex(index)

    def set_view(self, view: BodyView | str) -> None:
        previous = self.state.current_view
        self.state.set_view(view)
        self._sync_view_buttons()
        if self.state.selection_step == SelectionStep.DETAILED:
            self.go_back()
        if previous != self.state.current_view or not self.quadrant_selector.canvas.is_ready:
            self.quadrant_selector.set_view(self.state.current_view, self._gender)
        self._emit_changed()

    def select_quadrant(self, quadrant_id: str) -> None:
        self.state.select_quadrant(quadrant_id)
        self._active_quadrant = quadrant_id
        self.region_panel.set_checked_symptoms(self.state.selected_symptoms)
        self.region_panel.show_quadrant(quadrant_id, self.state.current_view, self._gender)
        self.region_panel.mark_selected_parts(self.state.selected_body_parts)
        self.pages.setCurrentWidget(self.region_panel)
        self.back_btn.setEnabled(True)
        self._resolve(quadrant_id)
        self._save()
        self._emit_changed()

    def select_body_part(self, body_part: str) -> None:
        self.state.add_body_parts([body_part])
        self.region_panel.mark_selected_parts(self.state.selected_body_parts)
        self._resolve(body_part)
        self._save()
        self._emit_changed()

    def go_back(self) -> None:
        self._cancel_query()
        self.state.return_to_quadrants()
        self._active_quadrant = None
        self.pages.setCurrentWidget(self.quadrant_selector)
        self.back_btn.setEnabled(False)
        clear_status(self.status_label)
        self._save()
        self._emit_changed()

    def reset(self) -> None:
        self._cancel_query()
        self.state.reset()
        self._active_quadrant = None
        self.region_panel.clear()
        self.region_panel.set_checked_symptoms([])
        self.notes_edit.blockSignals(True)
        self.notes_edit.clear()
        self.notes_edit.blockSignals(False)
        self.pages.setCurrentWidget(self.quadrant_selector)
        self.back_btn.setEnabled(False)
        self._sync_view_buttons()
        self.quadrant_selector.set_view(self.state.current_view, self._gender)
        clear_status(self.status_label)
        self._save()
        self._emit_changed()

    def dispose(self) -> None:
        self._cancel_query()
        self._save()
        self.quadrant_selector.dispose()
        self.region_panel.dispose()

    # ── Symptom lookup ───────────────────────────────────────────────────────

    def _resolve(self, body_part: str) -> None:
        self._cancel_query()
        token = CancellationToken(self)
        token.timedOut.connect(partial(self._on_query_timeout, token, body_part))
        self._query_token = token
        self.region_panel.set_loading(body_part)
        set_status(self.status_label, f"Looking up symptoms for {body_part}...", "info")
        token.start_timer(self._query_timeout_ms)
        run_async(
            self,
            partial(self._resolver.resolve, body_part),
            on_success=partial(self._on_content, token, body_part),
            on_error=partial(self._on_resolve_error, token, body_part),
            token=token,
        )

    def _cancel_query(self) -> None:
        token = self._query_token
        self._query_token = None
        if token is not None:
            token.cancel()
            token.deleteLater()

    def _on_content(self, token: CancellationToken, body_part: str, content: SymptomContentDto) -> None:
        if token is not self._query_token:
            return
        self._apply_content(body_part, content)
        if content.is_empty():
            set_status(self.status_label, f"No symptoms recorded for {body_part}", "warning")
        else:
            clear_status(self.status_label)

    def _on_resolve_error(self, token: CancellationToken, body_part: str, exc: Exception) -> None:
        if token is not self._query_token:
            return
        self._logger.warning("Symptom lookup failed for %r: %s", body_part, exc)
        self._apply_content(body_part, self._resolver.static_fallback(body_part))
        set_status(self.status_label, "Symptom data is unavailable, showing general content", "warning")

    def _on_query_timeout(self, token: CancellationToken, body_part: str) -> None:
        if token is not self._query_token:
            return
        self._logger.warning("Symptom lookup for %r timed out after %s ms", body_part, self._query_timeout_ms)
        self._apply_content(body_part, self._resolver.static_fallback(body_part))
        set_status(self.status_label, "Symptom lookup timed out, showing general content", "warning")

    def _apply_content(self, body_part: str, content: SymptomContentDto) -> None:
        self.region_panel.set_content(body_part, content)
        self.region_panel.set_checked_symptoms(self.state.selected_symptoms)

    # ── State plumbing ───────────────────────────────────────────────────────

    def _load_state(self) -> SelectionState:
        if not self._persist or self._store is None:
            return SelectionState()
        return self._store.load()

    def _save(self) -> None:
        if not self._persist or self._store is None:
            return
        try:
            self._store.save(self.state)
        except OSError:
            self._logger.warning("Failed to save selection state", exc_info=True)

    def _restore(self) -> None:
        self.notes_edit.blockSignals(True)
        self.notes_edit.setPlainText(self.state.symptom_notes)
        self.notes_edit.blockSignals(False)
        self.region_panel.set_checked_symptoms(self.state.selected_symptoms)
        self._sync_view_buttons()
        self.quadrant_selector.set_view(self.state.current_view, self._gender)
        quadrant_ids = {item.id for item in get_quadrants(self.state.current_view, self._gender)}
        restored = next(
            (part for part in reversed(self.state.selected_body_parts) if part in quadrant_ids),
            None,
        )
        if self.state.selection_step == SelectionStep.DETAILED and restored is not None:
            self.select_quadrant(restored)
        else:
            self.state.return_to_quadrants()
            self.pages.setCurrentWidget(self.quadrant_selector)
            self.back_btn.setEnabled(False)
        self._refresh_summary()

    def _sync_view_buttons(self) -> None:
        self.front_btn.setChecked(self.state.current_view == BodyView.FRONT)
        self.back_view_btn.setChecked(self.state.current_view == BodyView.BACK)

    def _on_gender_changed(self, _index: int) -> None:
        self._gender = normalize_gender(self.gender_combo.currentData())
        self.quadrant_selector.set_view(self.state.current_view, self._gender)
        if self._active_quadrant is not None:
            self.region_panel.show_quadrant(self._active_quadrant, self.state.current_view, self._gender)

    def _on_symptoms_changed(self, symptoms: list) -> None:
        self.state.set_symptoms(symptoms)
        self._save()
        self._emit_changed()

    def _on_notes_changed(self) -> None:
        self.state.set_notes(self.notes_edit.toPlainText())
        self._emit_changed()

    def _refresh_summary(self) -> None:
        self.summary_label.setText(self.state.summary())

    def _emit_changed(self) -> None:
        self._refresh_summary()
        self.selectionChanged.emit(self.state)
