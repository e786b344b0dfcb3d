from __future__ import annotations

from pathlib import Path

from PySide6.QtGui import QColor, QImage
from PySide6.QtWidgets import QGraphicsRectItem

from symptom_map.config import BUNDLED_ASSETS_DIR
from symptom_map.ui.bodymap.body_assets import (
    body_image_name,
    find_quadrant_image,
    quadrant_image_name,
    resolve_body_image,
)
from symptom_map.ui.bodymap.quadrant_selector import QuadrantSelector


def _write_png(path: Path) -> None:
    image = QImage(200, 400, QImage.Format.Format_RGB32)
    image.fill(QColor("#ffffff"))
    assert image.save(str(path), "PNG")


def test_body_image_name_follows_gender_and_view() -> None:
    assert body_image_name("F", "back") == "body-back-female"
    assert body_image_name("x", "front") == "body-front-male"


def test_raster_asset_wins_over_bundled_svg(qapp, tmp_path: Path) -> None:  # noqa: ARG001
    _write_png(tmp_path / "body-front-female.png")

    assert resolve_body_image("F", "front", tmp_path) == str(tmp_path / "body-front-female.png")
    assert resolve_body_image("M", "back", tmp_path) == str(BUNDLED_ASSETS_DIR / "body-back-male.svg")


def test_quadrant_close_up_is_only_found_in_assets_dir(qapp, tmp_path: Path) -> None:  # noqa: ARG001
    _write_png(tmp_path / "legs-back-female.png")

    assert quadrant_image_name("legs", "F", "back") == "legs-back-female"
    assert find_quadrant_image("legs", "F", "back", tmp_path) == str(tmp_path / "legs-back-female.png")
    assert find_quadrant_image("legs", "M", "back", tmp_path) is None


def test_bundled_assets_exist_for_every_gender_and_view() -> None:
    for gender in ("M", "F"):
        for view in ("front", "back"):
            assert (BUNDLED_ASSETS_DIR / f"{body_image_name(gender, view)}.svg").exists()


def test_selector_draws_zones_and_emits_clicked_zone_once(qapp, wait_until, tmp_path: Path) -> None:  # noqa: ARG001
    _write_png(tmp_path / "body-front-male.png")
    selector = QuadrantSelector(assets_dir=tmp_path, canvas_size=(200, 400), init_delay_ms=0)
    selected: list[str] = []
    selector.quadrantSelected.connect(selected.append)

    selector.set_view("front", "M")
    assert wait_until(lambda: selector.canvas.is_ready)

    assert selector.overlay_ids == ["head", "chest", "abdomen", "arms", "legs"]
    selector.canvas.clicked.emit(0.5, 0.1)
    selector.canvas.clicked.emit(0.9, 0.1)
    assert selected == ["head"]
    selector.dispose()


def test_back_view_uses_posterior_zones(qapp, wait_until, tmp_path: Path) -> None:  # noqa: ARG001
    _write_png(tmp_path / "body-back-male.png")
    selector = QuadrantSelector(assets_dir=tmp_path, canvas_size=(200, 400), init_delay_ms=0)
    selected: list[str] = []
    selector.quadrantSelected.connect(selected.append)

    selector.set_view("back", "M")
    assert wait_until(lambda: selector.canvas.is_ready)
    selector.canvas.clicked.emit(0.5, 0.4)

    assert [q.id for q in selector.quadrants] == ["head", "back", "buttocks", "arms", "legs"]
    assert selected == ["back"]
    selector.dispose()


def test_reapplying_the_same_view_keeps_one_overlay_per_zone(qapp, wait_until, tmp_path: Path) -> None:  # noqa: ARG001
    _write_png(tmp_path / "body-front-male.png")
    selector = QuadrantSelector(assets_dir=tmp_path, canvas_size=(200, 400), init_delay_ms=0)
    selector.set_view("front", "M")
    assert wait_until(lambda: selector.canvas.is_ready)

    selector.set_view("front", "M")

    assert selector.canvas.is_ready
    assert selector.overlay_ids == ["head", "chest", "abdomen", "arms", "legs"]
    zone_items = [item for item in selector.canvas.scene.items() if isinstance(item, QGraphicsRectItem)]
    assert len(zone_items) == 5
    selector.dispose()
