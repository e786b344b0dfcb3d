from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from symptom_map.domain.constants import BodyView, SelectionStep
from symptom_map.domain.models.selection_state import SelectionState


class SelectionStateDto(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_view: BodyView = Field(default=BodyView.FRONT, alias="currentView")
    selection_step: SelectionStep = Field(default=SelectionStep.QUADRANT, alias="selectionStep")
    selected_body_parts: list[str] = Field(default_factory=list, alias="selectedBodyParts")
    selected_symptoms: list[str] = Field(default_factory=list, alias="selectedSymptoms")
    symptom_notes: str = Field(default="", alias="symptomNotes")

    @classmethod
    def from_state(cls, state: SelectionState) -> SelectionStateDto:
        return cls(
            current_view=state.current_view,
            selection_step=state.selection_step,
            selected_body_parts=list(state.selected_body_parts),
            selected_symptoms=list(state.selected_symptoms),
            symptom_notes=state.symptom_notes,
        )

    def to_state(self) -> SelectionState:
        state = SelectionState(current_view=self.current_view, selection_step=self.selection_step)
        state.set_body_parts(self.selected_body_parts)
        state.set_symptoms(self.selected_symptoms)
        state.set_notes(self.symptom_notes)
        return state
