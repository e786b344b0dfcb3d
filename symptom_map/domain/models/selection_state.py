from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from symptom_map.domain.constants import BodyView, SelectionStep, normalize_view


def _unique(items: Iterable[str]) -> list[str]:
    result: list[str] = []
    for item in items:
        value = str(item).strip()
        if value and value not in result:
            result.append(value)
    return result


@dataclass(slots=True)
class SelectionState:
    """Wizard selection: phase, active view, chosen body parts and symptoms.

    Owned by a single wizard session. Every mutator except ``reset`` is
    idempotent: repeating a call with the same input leaves the state as it was
    after the first call.
    """

    current_view: BodyView = BodyView.FRONT
    selection_step: SelectionStep = SelectionStep.QUADRANT
    selected_body_parts: list[str] = field(default_factory=list)
    selected_symptoms: list[str] = field(default_factory=list)
    symptom_notes: str = ""

    def add_body_parts(self, parts: Iterable[str]) -> None:
        self.selected_body_parts = _unique([*self.selected_body_parts, *parts])

    def set_body_parts(self, parts: Iterable[str]) -> None:
        self.selected_body_parts = _unique(parts)

    def set_symptoms(self, symptoms: Iterable[str]) -> None:
        self.selected_symptoms = _unique(symptoms)

    def set_notes(self, text: str) -> None:
        self.symptom_notes = text or ""

    def set_view(self, view: BodyView | str) -> None:
        self.current_view = normalize_view(view, default=self.current_view)

    def select_quadrant(self, quadrant_id: str) -> None:
        self.add_body_parts([quadrant_id])
        self.selection_step = SelectionStep.DETAILED

    def return_to_quadrants(self) -> None:
        self.selection_step = SelectionStep.QUADRANT

    def reset(self) -> None:
        defaults = SelectionState()
        self.current_view = defaults.current_view
        self.selection_step = defaults.selection_step
        self.selected_body_parts = defaults.selected_body_parts
        self.selected_symptoms = defaults.selected_symptoms
        self.symptom_notes = defaults.symptom_notes

    def is_default(self) -> bool:
        return self == SelectionState()

    def summary(self) -> str:
        parts = ", ".join(self.selected_body_parts) or "none"
        return (
            f"View: {self.current_view.value}. Areas: {parts}. "
            f"Symptoms selected: {len(self.selected_symptoms)}."
        )
