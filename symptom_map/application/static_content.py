"""Bundled symptom content used when the symptom database has nothing to offer.

Region boxes were laid out on an 860x680 reference diagram and are stored here
in pixels for readability; they are converted to percent coordinates once, at
import time.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from symptom_map.application.dto.symptom_dto import (
    FallbackSymptomDto,
    RegionCoordinatesDto,
    SymptomContentDto,
    SymptomRegionDto,
)
from symptom_map.domain.geometry import RegionBox
from symptom_map.domain.rules.region_layout import fallback_text, region_text

_REFERENCE_WIDTH = 860.0
_REFERENCE_HEIGHT = 680.0


class _StaticEntry(NamedTuple):
    id: str
    text: str
    box_px: tuple[int, int, int, int]
    summary: str = ""
    diagnosis: str = ""


def _to_percent(box_px: tuple[int, int, int, int]) -> RegionBox:
    x, y, w, h = box_px
    return RegionBox(
        x_pct=round(x / _REFERENCE_WIDTH * 100, 1),
        y_pct=round(y / _REFERENCE_HEIGHT * 100, 1),
        w_pct=round(w / _REFERENCE_WIDTH * 100, 1),
        h_pct=round(h / _REFERENCE_HEIGHT * 100, 1),
    )


def _build(entries: Sequence[_StaticEntry]) -> SymptomContentDto:
    regions = [
        SymptomRegionDto(
            id=entry.id,
            text=region_text(entry.text, entry.summary),
            diagnosis=entry.diagnosis,
            summary=entry.summary,
            coordinates=RegionCoordinatesDto.from_box(_to_percent(entry.box_px)),
        )
        for entry in entries
    ]
    fallback = [
        FallbackSymptomDto(id=f"fallback_{index}", text=fallback_text(entry.text, entry.summary))
        for index, entry in enumerate(entries)
    ]
    return SymptomContentDto(regions=regions, fallback_symptoms=fallback)


_NAUSEA_AND_VOMITING = (
    _StaticEntry(
        "nausea_general",
        "Nausea, usually with earache, dizziness, and reduced hearing. Nausea, usually with dizziness "
        "and vertigo, ringing in ears and pain. Dizziness, tinnitus (ringing sounds) in both ears, and "
        "hearing loss, with feelings of nausea. Usually a long-term condition, with recurrent episodes.",
        (430, 10, 200, 120),
        summary="Nausea with dizziness or hearing changes",
    ),
    _StaticEntry(
        "gastroenteritis",
        "Often one-sided headache, with blurred vision, and flashing lights. Rash, fever, headache, stiff "
        "neck, and generally unwell. Can rapidly result in unconsciousness if untreated. This is a "
        "medical emergency; dial 999",
        (104, 20, 180, 100),
        summary="Nausea with headache, rash or stiff neck",
    ),
    _StaticEntry(
        "abdominal_pain",
        "Pain that comes and goes, beginning in the lower back and moving to the abdomen. May need to pass "
        "urine frequently or notice blood in urine. More common in hot climates.",
        (8, 200, 150, 120),
        summary="Colicky pain moving from back to abdomen",
    ),
    _StaticEntry(
        "stomach_pain",
        "Often cramping in children. Most common in the developing world. Chronic constipation causes a "
        "build-up in bowel and affects children. Failure to grow and put on weight. Abdominal pain and "
        "diarrhoea, with rash, tiredness. Common in the developing world.",
        (650, 200, 180, 150),
        summary="Cramping stomach pain",
    ),
    _StaticEntry(
        "blood_symptoms",
        "Vomiting with flu-like symptoms, blood in urine, and back pain. More common in women. Seek medical "
        "attention soon if symptoms severe.",
        (650, 400, 200, 180),
        summary="Vomiting with blood in urine",
    ),
    _StaticEntry(
        "appetite_loss",
        "Loss of appetite, nausea, vomiting, fatigue, weakness, itching, lethargy, swelling, shortness of "
        "breath, muscle cramps, and headache.",
        (650, 580, 180, 80),
        summary="Loss of appetite with fatigue",
    ),
)

_WEIGHT_LOSS = (
    _StaticEntry(
        "unintentional_weight_loss",
        "Unexpected weight loss without changes in diet or exercise. Could indicate underlying medical "
        "conditions that require evaluation.",
        (100, 50, 200, 100),
        summary="Unexplained weight loss",
    ),
    _StaticEntry(
        "appetite_changes",
        "Changes in appetite leading to weight loss. May be accompanied by fatigue, weakness, or changes in "
        "eating patterns.",
        (400, 80, 180, 120),
        summary="Loss of appetite",
    ),
    _StaticEntry(
        "metabolic_changes",
        "Metabolic changes causing rapid weight loss. May include symptoms like increased thirst, frequent "
        "urination, or changes in energy levels.",
        (50, 250, 220, 140),
        summary="Weight loss with thirst and frequent urination",
    ),
    _StaticEntry(
        "digestive_issues",
        "Digestive problems affecting food absorption and leading to weight loss. May include nausea, "
        "changes in bowel habits, or abdominal discomfort.",
        (500, 300, 200, 150),
        summary="Weight loss with digestive upset",
    ),
)

STATIC_SYMPTOM_CONTENT: dict[str, SymptomContentDto] = {
    "NAUSEA AND VOMITING": _build(_NAUSEA_AND_VOMITING),
    "WEIGHT LOSS": _build(_WEIGHT_LOSS),
}
