from __future__ import annotations

from pathlib import Path

import pytest
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QImage

from symptom_map.application.dto.symptom_dto import (
    FallbackSymptomDto,
    RegionCoordinatesDto,
    SymptomContentDto,
    SymptomRegionDto,
)
from symptom_map.domain.detailed_parts import part_regions
from symptom_map.domain.geometry import NormalizedBox
from symptom_map.ui.bodymap.region_panel import PART_HINT_TEXT, RegionPanel

PLACEHOLDER = "Symptom description not available"


def _write_png(path: Path, width: int = 100, height: int = 200) -> None:
    image = QImage(width, height, QImage.Format.Format_RGB32)
    image.fill(QColor("#ffffff"))
    assert image.save(str(path), "PNG")


def _center(box: NormalizedBox) -> tuple[float, float]:
    return (box.x1 + box.x2) / 2, (box.y1 + box.y2) / 2


def _region(region_id: str, text: str, x_pct: float) -> SymptomRegionDto:
    return SymptomRegionDto(
        id=region_id,
        text=text,
        coordinates=RegionCoordinatesDto(x_pct=x_pct, y_pct=10, w_pct=20, h_pct=20),
    )


def _check_states(panel: RegionPanel) -> list[Qt.CheckState]:
    return [panel.symptom_list.item(row).checkState() for row in range(panel.symptom_list.count())]


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    _write_png(tmp_path / "body-front-male.png")
    return tmp_path


def test_parts_are_drawn_inside_the_quadrant_without_close_up(qapp, wait_until, assets_dir: Path) -> None:  # noqa: ARG001
    panel = RegionPanel(assets_dir=assets_dir, canvas_size=(100, 200), init_delay_ms=0)
    picked: list[str] = []
    panel.partSelected.connect(picked.append)

    panel.show_quadrant("head", "front", "M")
    assert wait_until(lambda: panel.parts_canvas.is_ready and panel.part_ids)

    assert panel.part_ids == [part.name for part in part_regions("head", "front", "M")]
    # Head zone of the front view spans y 0.00-0.28 on the body diagram.
    assert all(part.box.y2 <= 0.28 for part in panel.parts)
    ear = next(part for part in panel.parts if part.name == "EAR HEARING")
    panel.parts_canvas.clicked.emit(*_center(ear.box))
    panel.parts_canvas.clicked.emit(0.05, 0.9)

    assert picked == ["EAR HEARING"]
    panel.dispose()


def test_close_up_image_uses_part_boxes_as_given(qapp, wait_until, assets_dir: Path) -> None:  # noqa: ARG001
    _write_png(assets_dir / "head-front-male.png", 200, 200)
    panel = RegionPanel(assets_dir=assets_dir, canvas_size=(100, 200), init_delay_ms=0)
    picked: list[str] = []
    panel.partSelected.connect(picked.append)

    panel.show_quadrant("head", "front", "M")
    assert wait_until(lambda: panel.parts_canvas.is_ready and panel.part_ids)

    assert panel.parts[0].box == NormalizedBox(0.15, 0.02, 0.85, 0.28)
    panel.parts_canvas.clicked.emit(0.50, 0.53)
    assert picked == ["NOSE"]
    panel.dispose()


def test_hover_names_the_part_under_the_pointer(qapp, wait_until, assets_dir: Path) -> None:  # noqa: ARG001
    _write_png(assets_dir / "head-front-male.png", 200, 200)
    panel = RegionPanel(assets_dir=assets_dir, canvas_size=(100, 200), init_delay_ms=0)
    panel.show_quadrant("head", "front", "M")
    assert wait_until(lambda: panel.parts_canvas.is_ready and panel.part_ids)

    panel.parts_canvas.hovered.emit(0.50, 0.53)
    assert panel.hovered_part == "NOSE"
    assert panel.hover_label.text() == "NOSE"

    panel.parts_canvas.hovered.emit(0.99, 0.99)
    assert panel.hovered_part is None

    panel.parts_canvas.hovered.emit(0.88, 0.50)
    panel.parts_canvas.hoverLeft.emit()
    assert panel.hovered_part is None
    assert panel.hover_label.text() == PART_HINT_TEXT
    panel.dispose()


def test_switching_quadrant_on_same_image_redraws_parts(qapp, wait_until, assets_dir: Path) -> None:  # noqa: ARG001
    panel = RegionPanel(assets_dir=assets_dir, canvas_size=(100, 200), init_delay_ms=0)
    panel.show_quadrant("head", "front", "M")
    assert wait_until(lambda: panel.parts_canvas.is_ready and panel.part_ids)

    panel.show_quadrant("legs", "front", "M")

    assert panel.parts_canvas.is_ready
    assert panel.part_ids == [part.name for part in part_regions("legs", "front", "M")]
    panel.dispose()


def test_regions_sharing_a_text_are_checked_independently(qapp) -> None:  # noqa: ARG001
    panel = RegionPanel(init_delay_ms=0)
    emitted: list[list[str]] = []
    panel.symptomsChanged.connect(emitted.append)
    panel.set_checked_symptoms(["Sore throat"])
    content = SymptomContentDto(regions=[_region("neck_0", PLACEHOLDER, 5), _region("neck_1", PLACEHOLDER, 50)])
    panel.set_loading("NECK")
    panel.set_content("NECK", content)

    panel.toggle_symptom("neck_0")
    panel.toggle_symptom("neck_1")
    panel.toggle_symptom("neck_0")

    assert emitted[-1] == ["Sore throat", PLACEHOLDER]
    assert _check_states(panel) == [Qt.CheckState.Unchecked, Qt.CheckState.Checked]
    assert panel.checked_ids() == {"neck_1"}

    panel.toggle_symptom("neck_1")

    assert emitted[-1] == ["Sore throat"]
    assert _check_states(panel) == [Qt.CheckState.Unchecked, Qt.CheckState.Unchecked]
    panel.dispose()


def test_fallback_entries_are_keyed_by_their_ids(qapp) -> None:  # noqa: ARG001
    panel = RegionPanel(init_delay_ms=0)
    emitted: list[list[str]] = []
    panel.symptomsChanged.connect(emitted.append)
    content = SymptomContentDto(
        fallback_symptoms=[
            FallbackSymptomDto(id="fallback_0", text="General symptom"),
            FallbackSymptomDto(id="fallback_1", text="General symptom"),
        ]
    )
    panel.set_loading("WRIST")
    panel.set_content("WRIST", content)

    panel.toggle_symptom("fallback_1")

    assert emitted == [["General symptom"]]
    assert _check_states(panel) == [Qt.CheckState.Unchecked, Qt.CheckState.Checked]
    panel.dispose()


def test_restored_texts_check_every_matching_entry(qapp) -> None:  # noqa: ARG001
    panel = RegionPanel(init_delay_ms=0)
    content = SymptomContentDto(regions=[_region("neck_0", PLACEHOLDER, 5), _region("neck_1", "Stiff neck", 50)])
    panel.set_loading("NECK")
    panel.set_content("NECK", content)

    panel.set_checked_symptoms(["Stiff neck"])

    assert panel.checked_ids() == {"neck_1"}
    assert _check_states(panel) == [Qt.CheckState.Unchecked, Qt.CheckState.Checked]
    panel.dispose()
