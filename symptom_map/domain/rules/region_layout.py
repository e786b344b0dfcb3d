from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass

from symptom_map.domain.constants import GENERIC_FALLBACK_TEXT, PLACEHOLDER_SYMPTOM_TEXT
from symptom_map.domain.geometry import RegionBox

GRID_WIDTH_PCT = 90.0
GRID_HEIGHT_PCT = 85.0
GRID_MARGIN_PCT = 5.0
GRID_GUTTER_PCT = 2.0

_WORD_RE = re.compile(r"[a-z]+")


@dataclass(frozen=True, slots=True)
class TemplateSlot:
    key: str
    keywords: frozenset[str]
    box: RegionBox


SKIN_RASH_TEMPLATE: tuple[TemplateSlot, ...] = (
    TemplateSlot(
        "itchy_rash",
        frozenset({"itch", "itchy", "itching", "eczema", "dermatitis", "dry"}),
        RegionBox(5.0, 5.0, 43.0, 26.0),
    ),
    TemplateSlot(
        "blistering_rash",
        frozenset({"blister", "blisters", "vesicles", "chickenpox", "shingles", "weeping"}),
        RegionBox(52.0, 5.0, 43.0, 26.0),
    ),
    TemplateSlot(
        "spots",
        frozenset({"spot", "spots", "pimples", "acne", "pustules", "blackheads"}),
        RegionBox(5.0, 36.0, 43.0, 26.0),
    ),
    TemplateSlot(
        "scaly_patches",
        frozenset({"patch", "patches", "scaly", "psoriasis", "plaques", "ringworm"}),
        RegionBox(52.0, 36.0, 43.0, 26.0),
    ),
    TemplateSlot(
        "rash_with_fever",
        frozenset({"fever", "measles", "meningitis", "purple", "unwell", "glass"}),
        RegionBox(5.0, 67.0, 43.0, 26.0),
    ),
    TemplateSlot(
        "hives",
        frozenset({"hives", "weals", "wheals", "urticaria", "allergic", "swelling"}),
        RegionBox(52.0, 67.0, 43.0, 26.0),
    ),
)

REGION_TEMPLATES: dict[str, tuple[TemplateSlot, ...]] = {
    "SKIN RASHES": SKIN_RASH_TEMPLATE,
}


def template_for(body_part: str) -> tuple[TemplateSlot, ...] | None:
    return REGION_TEMPLATES.get(body_part.strip().upper())


def region_id(body_part: str, index: int) -> str:
    slug = "_".join(body_part.strip().lower().split()) or "region"
    return f"{slug}_{index}"


def region_text(symptoms: str, summary: str) -> str:
    return symptoms.strip() or summary.strip() or PLACEHOLDER_SYMPTOM_TEXT


def fallback_text(symptoms: str, summary: str) -> str:
    return summary.strip() or symptoms.strip() or GENERIC_FALLBACK_TEXT


def keyword_score(text: str, keywords: frozenset[str]) -> int:
    """Number of distinct template keywords present as whole words in ``text``."""
    words = set(_WORD_RE.findall(text.lower()))
    return len(words & keywords)


def best_slot(text: str, template: Sequence[TemplateSlot]) -> int:
    best_index = 0
    best_score = 0
    for index, slot in enumerate(template):
        score = keyword_score(text, slot.keywords)
        # Strictly greater: on a tie the earlier slot keeps the row.
        if score > best_score:
            best_index = index
            best_score = score
    return best_index


def assign_template_slots(texts: Sequence[str], template: Sequence[TemplateSlot]) -> list[int]:
    if not template:
        raise ValueError("Template must define at least one slot")
    return [best_slot(text, template) for text in texts]


def grid_shape(count: int) -> tuple[int, int]:
    if count <= 0:
        return 0, 0
    cols = math.ceil(math.sqrt(count))
    rows = math.ceil(count / cols)
    return cols, rows


def layout_grid(count: int) -> list[RegionBox]:
    cols, rows = grid_shape(count)
    if count <= 0:
        return []
    cell_w = GRID_WIDTH_PCT / cols
    cell_h = GRID_HEIGHT_PCT / rows
    gutter_w = min(GRID_GUTTER_PCT, cell_w / 4)
    gutter_h = min(GRID_GUTTER_PCT, cell_h / 4)
    boxes: list[RegionBox] = []
    for index in range(count):
        row, col = divmod(index, cols)
        boxes.append(
            RegionBox(
                x_pct=round(GRID_MARGIN_PCT + col * cell_w, 4),
                y_pct=round(GRID_MARGIN_PCT + row * cell_h, 4),
                w_pct=round(cell_w - gutter_w, 4),
                h_pct=round(cell_h - gutter_h, 4),
            )
        )
    return boxes
