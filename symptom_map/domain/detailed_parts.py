"""Specific body parts offered inside each quadrant during the detailed phase.

Every part carries a box on the dedicated quadrant picture, in fractions of
that picture. Boxes of one quadrant overlap on purpose (FACE sits inside
HEAD FRONT), so hit-testing prefers the smallest box under the pointer.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Literal

from symptom_map.domain.constants import BodyView, normalize_gender, normalize_view
from symptom_map.domain.geometry import NormalizedBox

GenderRule = Literal["both", "male", "female"]


@dataclass(frozen=True, slots=True)
class DetailedPart:
    name: str
    box: NormalizedBox | None = None
    rule: GenderRule = "both"

    def shown_to(self, gender: str) -> bool:
        if self.rule == "both":
            return True
        return (self.rule == "male") == (normalize_gender(gender) == "M")


def _part(name: str, x1: float, y1: float, x2: float, y2: float, rule: GenderRule = "both") -> DetailedPart:
    return DetailedPart(name, NormalizedBox(x1, y1, x2, y2), rule)


# Full-body symptom groups stored under their own "body part" key.
GENERAL_SYMPTOM_GROUPS: tuple[DetailedPart, ...] = (
    DetailedPart("SKIN RASHES"),
    DetailedPart("NAUSEA AND VOMITING"),
    DetailedPart("WEIGHT LOSS"),
)

_PARTS: dict[tuple[str, BodyView], tuple[DetailedPart, ...]] = {
    ("head", BodyView.FRONT): (
        _part("HAIR AND SCALP", 0.15, 0.02, 0.85, 0.28),
        _part("HEAD FRONT", 0.20, 0.25, 0.80, 0.65),
        _part("FACE", 0.25, 0.30, 0.75, 0.75),
        _part("EYE VISION", 0.28, 0.38, 0.48, 0.48),
        _part("EYE PHYSICAL", 0.52, 0.38, 0.72, 0.48),
        _part("NOSE", 0.42, 0.48, 0.58, 0.58),
        _part("MOUTH", 0.38, 0.60, 0.62, 0.70),
        _part("EAR PHYSICAL", 0.02, 0.44, 0.22, 0.58),
        _part("EAR HEARING", 0.78, 0.44, 0.98, 0.58),
        _part("NECK", 0.35, 0.72, 0.65, 0.95),
        _part("THROAT", 0.38, 0.74, 0.62, 0.84),
        _part("THROAT VOICE", 0.40, 0.78, 0.60, 0.88),
    ),
    ("head", BodyView.BACK): (_part("HAIR AND SCALP", 0.15, 0.02, 0.85, 0.90),),
    ("chest", BodyView.FRONT): (
        _part("SHOULDER FRONT", 0.05, 0.02, 0.95, 0.28),
        _part("CHEST UPPER", 0.20, 0.25, 0.80, 0.50),
        _part("CHEST CENTRAL", 0.25, 0.48, 0.75, 0.75),
        _part("CHEST SIDE", 0.08, 0.35, 0.92, 0.70),
        _part("BREAST", 0.15, 0.30, 0.85, 0.65),
    ),
    ("abdomen", BodyView.FRONT): (
        _part("UPPER ABDOMEN", 0.20, 0.02, 0.80, 0.32),
        _part("ABDOMEN GENERAL", 0.15, 0.20, 0.85, 0.62),
        _part("LOWER ABDOMEN LEFT", 0.15, 0.50, 0.48, 0.72),
        _part("LOWER ABDOMEN RIGHT", 0.52, 0.50, 0.85, 0.72),
        _part("FEMALE LOWER ABDOMEN", 0.20, 0.60, 0.80, 0.78, "female"),
        _part("BOWELS DIARRHOEA", 0.22, 0.35, 0.78, 0.58),
        _part("BOWELS CONSTIPATION", 0.25, 0.40, 0.75, 0.63),
        _part("BOWELS ABNORMAL STOOL", 0.27, 0.45, 0.73, 0.68),
        _part("GROIN MALE AND FEMALE", 0.25, 0.75, 0.75, 0.92),
        _part("MALE GENITALS", 0.30, 0.78, 0.70, 0.88, "male"),
        _part("FEMALE GENITALS", 0.30, 0.78, 0.70, 0.88, "female"),
        _part("URINARY PROBLEMS MALE", 0.28, 0.76, 0.72, 0.90, "male"),
        _part("URINARY PROBLEMS FEMALE", 0.28, 0.76, 0.72, 0.90, "female"),
    ),
    ("back", BodyView.BACK): (
        _part("SHOULDER BACK", 0.05, 0.02, 0.95, 0.28),
        _part("UPPER BACK", 0.15, 0.25, 0.85, 0.90),
    ),
    ("buttocks", BodyView.BACK): (
        _part("LOWER BACK", 0.20, 0.02, 0.80, 0.42),
        _part("BUTTOCKS AND ANUS", 0.15, 0.40, 0.85, 0.90),
    ),
    ("arms", BodyView.FRONT): (
        _part("UPPER ARM", 0.10, 0.02, 0.90, 0.48),
        _part("FOREARM AND WRIST", 0.15, 0.45, 0.85, 0.78),
        _part("HAND PALM", 0.20, 0.75, 0.80, 0.98),
    ),
    ("arms", BodyView.BACK): (
        _part("UPPER ARM", 0.10, 0.02, 0.90, 0.48),
        _part("ELBOW", 0.30, 0.45, 0.70, 0.58),
        _part("HAND BACK", 0.20, 0.75, 0.80, 0.98),
    ),
    ("legs", BodyView.FRONT): (
        _part("HIP FRONT", 0.15, 0.02, 0.85, 0.22),
        _part("THIGH FRONT", 0.20, 0.20, 0.80, 0.52),
        _part("KNEE FRONT", 0.25, 0.48, 0.75, 0.62),
        _part("LOWER LEG FRONT", 0.22, 0.60, 0.78, 0.85),
        _part("ANKLE", 0.30, 0.82, 0.70, 0.92),
        _part("FOOT", 0.20, 0.86, 0.80, 0.98),
        _part("FOOT UPPER", 0.25, 0.88, 0.75, 0.96),
        _part("FOOT UNDERSIDE", 0.27, 0.90, 0.73, 0.98),
    ),
    ("legs", BodyView.BACK): (
        _part("HIP BACK", 0.15, 0.02, 0.85, 0.22),
        _part("THIGH BACK", 0.20, 0.20, 0.80, 0.52),
        _part("KNEE BACK", 0.25, 0.48, 0.75, 0.62),
        _part("LOWER LEG BACK", 0.22, 0.60, 0.78, 0.85),
        _part("FOOT", 0.20, 0.86, 0.80, 0.98),
    ),
}


def part_regions(quadrant_id: str, view: BodyView | str, gender: str) -> tuple[DetailedPart, ...]:
    """Boxed parts of a quadrant that apply to ``gender``."""
    parts = _PARTS.get((quadrant_id, normalize_view(view)), ())
    return tuple(part for part in parts if part.shown_to(gender))


def detailed_parts(
    quadrant_id: str,
    view: BodyView | str,
    gender: str,
    *,
    include_general: bool = True,
) -> list[str]:
    names = [part.name for part in part_regions(quadrant_id, view, gender)]
    if include_general:
        names.extend(part.name for part in GENERAL_SYMPTOM_GROUPS if part.name not in names)
    return names


def place_parts(parts: Iterable[DetailedPart], frame: NormalizedBox) -> tuple[DetailedPart, ...]:
    """Move part boxes from quadrant-picture space into ``frame`` of a larger picture."""
    return tuple(replace(part, box=part.box.within(frame)) for part in parts if part.box is not None)


def part_at(parts: Iterable[DetailedPart], x: float, y: float) -> str | None:
    best: DetailedPart | None = None
    for part in parts:
        if part.box is None or not part.box.contains(x, y):
            continue
        # Strictly smaller wins; equal areas keep the earlier part.
        if best is None or part.box.area < best.box.area:
            best = part
    return best.name if best is not None else None
