"""Static quadrant layout for the first selection phase.

Five coarse zones per body view, expressed in normalized image coordinates so
the same table works for any canvas size. Gender only changes the base image,
never the zone geometry.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from itertools import combinations

from symptom_map.application.errors import QuadrantGeometryError
from symptom_map.domain.constants import BodyView, normalize_view
from symptom_map.domain.geometry import NormalizedBox


@dataclass(frozen=True, slots=True)
class Quadrant:
    id: str
    name: str
    description: str
    box: NormalizedBox
    color: str


_BLUE = "#3b82f6"
_GREEN = "#10b981"
_RED = "#f56565"
_PURPLE = "#a855f7"
_ORANGE = "#f59e0b"

_FRONT_QUADRANTS: tuple[Quadrant, ...] = (
    Quadrant("head", "Head & Face", "Eyes, Nose, Mouth, Ears, Hair", NormalizedBox(0.25, 0.00, 0.75, 0.28), _BLUE),
    Quadrant("chest", "Chest & Upper Body", "Chest, Shoulders, Neck", NormalizedBox(0.25, 0.28, 0.75, 0.50), _GREEN),
    Quadrant("abdomen", "Abdomen & Core", "Stomach, Bowels, Groin", NormalizedBox(0.25, 0.50, 0.75, 0.75), _RED),
    Quadrant("arms", "Arms & Hands", "Upper Arms, Forearms, Hands, Wrists", NormalizedBox(0.00, 0.25, 0.25, 0.85), _PURPLE),
    Quadrant("legs", "Legs & Feet", "Thighs, Knees, Lower Legs, Feet", NormalizedBox(0.25, 0.75, 0.75, 1.00), _ORANGE),
)

_BACK_QUADRANTS: tuple[Quadrant, ...] = (
    Quadrant("head", "Head & Scalp", "Hair, Scalp, Head Back", NormalizedBox(0.25, 0.00, 0.75, 0.18), _BLUE),
    Quadrant("back", "Back & Shoulders", "Upper Back, Lower Back, Shoulders", NormalizedBox(0.25, 0.18, 0.75, 0.62), _GREEN),
    Quadrant("buttocks", "Buttocks & Hip", "Buttocks, Anus, Hip Back", NormalizedBox(0.25, 0.62, 0.75, 0.80), _RED),
    Quadrant("arms", "Arms & Hands", "Upper Arms, Elbows, Hands Back", NormalizedBox(0.00, 0.25, 0.25, 0.85), _PURPLE),
    Quadrant("legs", "Legs & Feet", "Thighs Back, Knees Back, Lower Legs", NormalizedBox(0.25, 0.80, 0.75, 1.00), _ORANGE),
)

QUADRANT_TABLE: dict[BodyView, tuple[Quadrant, ...]] = {
    BodyView.FRONT: _FRONT_QUADRANTS,
    BodyView.BACK: _BACK_QUADRANTS,
}

_QUADRANT_TITLES: dict[tuple[str, BodyView], str] = {
    ("head", BodyView.FRONT): "Head & Face - Front View",
    ("head", BodyView.BACK): "Head - Back View",
    ("chest", BodyView.FRONT): "Chest & Upper Body - Front View",
    ("abdomen", BodyView.FRONT): "Abdomen & Core - Front View",
    ("arms", BodyView.FRONT): "Arms & Hands - Front View",
    ("arms", BodyView.BACK): "Arms & Hands - Back View",
    ("legs", BodyView.FRONT): "Legs & Feet - Front View",
    ("legs", BodyView.BACK): "Legs & Feet - Back View",
    ("back", BodyView.BACK): "Back & Shoulders",
    ("buttocks", BodyView.BACK): "Buttocks & Hip",
}


def get_quadrants(view: BodyView | str, gender: str = "M") -> tuple[Quadrant, ...]:
    _ = gender
    return QUADRANT_TABLE[normalize_view(view)]


def quadrant_at(quadrants: Iterable[Quadrant], x: float, y: float) -> str | None:
    for quadrant in quadrants:
        if quadrant.box.contains(x, y):
            return quadrant.id
    return None


def quadrant_title(quadrant_id: str, view: BodyView | str) -> str:
    normalized = normalize_view(view)
    return _QUADRANT_TITLES.get((quadrant_id, normalized), f"{quadrant_id} - {normalized.value}")


def validate_quadrant_table(table: dict[BodyView, tuple[Quadrant, ...]] | None = None) -> None:
    for view, quadrants in (table or QUADRANT_TABLE).items():
        if len(quadrants) != 5:
            raise QuadrantGeometryError(f"View {view} must define 5 quadrants, got {len(quadrants)}")
        ids = [item.id for item in quadrants]
        if len(set(ids)) != len(ids):
            raise QuadrantGeometryError(f"Duplicate quadrant ids in view {view}: {ids}")
        for quadrant in quadrants:
            if not quadrant.box.is_well_formed():
                raise QuadrantGeometryError(f"Quadrant {view}/{quadrant.id} box out of bounds: {quadrant.box}")
        for first, second in combinations(quadrants, 2):
            if first.box.intersects(second.box):
                raise QuadrantGeometryError(f"Quadrants {view}/{first.id} and {view}/{second.id} overlap")
