from __future__ import annotations

from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from symptom_map.application.dto.selection_dto import SelectionStateDto
from symptom_map.application.dto.symptom_dto import (
    RegionCoordinatesDto,
    SymptomContentDto,
    SymptomRegionDto,
    SymptomRowDto,
)
from symptom_map.domain.constants import BodyView, SelectionStep
from symptom_map.domain.models.selection_state import SelectionState


def test_row_dto_accepts_sheet_captions_and_normalizes_none() -> None:
    row = SymptomRowDto.model_validate(
        {
            "Part of body_and general full body symptom": " EAR HEARING ",
            "Symptoms": None,
            "Short Summary": "  Blocked ear ",
            "Probable Diagnosis": None,
        }
    )

    assert row.body_part == "EAR HEARING"
    assert row.symptoms == ""
    assert row.short_summary == "Blocked ear"
    assert row.probable_diagnosis == ""


def test_row_dto_reads_orm_like_objects() -> None:
    record = SimpleNamespace(
        body_part="NECK",
        symptoms="Stiff neck",
        short_summary=None,
        probable_diagnosis="Muscle strain",
    )

    row = SymptomRowDto.model_validate(record)

    assert row.symptoms == "Stiff neck"
    assert row.short_summary == ""


def test_coordinates_serialize_with_camel_case_keys() -> None:
    coords = RegionCoordinatesDto(x_pct=5, y_pct=10, w_pct=20, h_pct=30)

    assert coords.model_dump(by_alias=True) == {"xPct": 5.0, "yPct": 10.0, "wPct": 20.0, "hPct": 30.0}
    assert RegionCoordinatesDto.model_validate({"xPct": 1, "yPct": 2, "wPct": 3, "hPct": 4}).w_pct == 3.0


def test_coordinates_outside_percent_range_are_rejected() -> None:
    with pytest.raises(ValidationError):
        RegionCoordinatesDto(x_pct=-1, y_pct=0, w_pct=10, h_pct=10)


def test_region_text_must_not_be_empty() -> None:
    coords = RegionCoordinatesDto(x_pct=0, y_pct=0, w_pct=10, h_pct=10)

    with pytest.raises(ValidationError):
        SymptomRegionDto(id="r0", text="", coordinates=coords)


def test_content_dump_uses_fallback_symptoms_alias() -> None:
    content = SymptomContentDto()

    assert content.is_empty()
    assert content.model_dump(by_alias=True) == {"regions": [], "fallbackSymptoms": []}


def test_selection_dto_round_trip_keeps_notes_verbatim() -> None:
    state = SelectionState()
    state.set_view("back")
    state.select_quadrant("legs")
    state.set_symptoms(["Knee pain"])
    state.set_notes("  started after running \n")

    payload = SelectionStateDto.from_state(state).model_dump(mode="json", by_alias=True)
    restored = SelectionStateDto.model_validate(payload).to_state()

    assert payload["currentView"] == "back"
    assert payload["selectionStep"] == "detailed"
    assert restored == state


def test_selection_dto_rejects_unknown_step() -> None:
    with pytest.raises(ValidationError):
        SelectionStateDto.model_validate({"selectionStep": "summary"})


def test_selection_dto_defaults() -> None:
    state = SelectionStateDto.model_validate({}).to_state()

    assert state.current_view == BodyView.FRONT
    assert state.selection_step == SelectionStep.QUADRANT
