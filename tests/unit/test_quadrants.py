from __future__ import annotations

from itertools import combinations

import pytest

from symptom_map.application.errors import QuadrantGeometryError
from symptom_map.domain.constants import BodyView
from symptom_map.domain.geometry import NormalizedBox
from symptom_map.domain.quadrants import (
    QUADRANT_TABLE,
    Quadrant,
    get_quadrants,
    quadrant_at,
    quadrant_title,
    validate_quadrant_table,
)


@pytest.mark.parametrize("view", [BodyView.FRONT, BodyView.BACK])
def test_each_view_has_five_in_bounds_non_overlapping_zones(view: BodyView) -> None:
    quadrants = get_quadrants(view, "M")

    assert len(quadrants) == 5
    assert all(item.box.is_well_formed() for item in quadrants)
    for first, second in combinations(quadrants, 2):
        assert not first.box.intersects(second.box), (first.id, second.id)


def test_front_and_back_ids_follow_view() -> None:
    assert [q.id for q in get_quadrants("front")] == ["head", "chest", "abdomen", "arms", "legs"]
    assert [q.id for q in get_quadrants("back")] == ["head", "back", "buttocks", "arms", "legs"]


def test_gender_does_not_change_geometry() -> None:
    assert get_quadrants(BodyView.BACK, "M") == get_quadrants(BodyView.BACK, "F")


def test_point_inside_zone_returns_its_id() -> None:
    quadrants = get_quadrants(BodyView.FRONT)
    for quadrant in quadrants:
        box = quadrant.box
        center_x = (box.x1 + box.x2) / 2
        center_y = (box.y1 + box.y2) / 2
        assert quadrant_at(quadrants, center_x, center_y) == quadrant.id


def test_point_outside_every_zone_returns_none() -> None:
    quadrants = get_quadrants(BodyView.FRONT)

    assert quadrant_at(quadrants, 0.9, 0.1) is None
    assert quadrant_at(quadrants, -0.2, 0.5) is None
    assert quadrant_at(quadrants, 0.5, 1.5) is None


def test_zone_edges_are_not_inside() -> None:
    quadrants = get_quadrants(BodyView.FRONT)
    head = next(item for item in quadrants if item.id == "head")

    assert quadrant_at((head,), head.box.x1, 0.1) is None
    assert quadrant_at((head,), 0.5, head.box.y2) is None


def test_validate_quadrant_table_accepts_bundled_layout() -> None:
    validate_quadrant_table()


def test_validate_quadrant_table_rejects_overlap() -> None:
    front = list(QUADRANT_TABLE[BodyView.FRONT])
    front[1] = Quadrant("chest", "Chest", "", NormalizedBox(0.25, 0.20, 0.75, 0.50), "#000000")

    with pytest.raises(QuadrantGeometryError, match="overlap"):
        validate_quadrant_table({BodyView.FRONT: tuple(front)})


def test_validate_quadrant_table_rejects_wrong_zone_count() -> None:
    with pytest.raises(QuadrantGeometryError, match="5 quadrants"):
        validate_quadrant_table({BodyView.BACK: QUADRANT_TABLE[BodyView.BACK][:4]})


def test_validate_quadrant_table_rejects_out_of_bounds_box() -> None:
    back = list(QUADRANT_TABLE[BodyView.BACK])
    back[4] = Quadrant("legs", "Legs", "", NormalizedBox(0.25, 0.80, 0.75, 1.10), "#000000")

    with pytest.raises(QuadrantGeometryError, match="out of bounds"):
        validate_quadrant_table({BodyView.BACK: tuple(back)})


def test_quadrant_title_depends_on_view() -> None:
    assert quadrant_title("head", "front") == "Head & Face - Front View"
    assert quadrant_title("head", "back") == "Head - Back View"
    assert quadrant_title("unknown", "front") == "unknown - front"
