from __future__ import annotations

from enum import StrEnum


class BodyView(StrEnum):
    FRONT = "front"
    BACK = "back"


class SelectionStep(StrEnum):
    QUADRANT = "quadrant"
    DETAILED = "detailed"


GENDERS = ("M", "F")
GENDER_LABELS = {"M": "Male", "F": "Female"}
VIEW_LABELS = {BodyView.FRONT: "Front", BodyView.BACK: "Back view"}

PLACEHOLDER_SYMPTOM_TEXT = "Symptom description not available"
GENERIC_FALLBACK_TEXT = "General symptom"


def normalize_gender(value: object) -> str:
    return "F" if str(value or "").strip().upper() in {"F", "FEMALE"} else "M"


def normalize_view(value: object, default: BodyView = BodyView.FRONT) -> BodyView:
    raw = str(value or "").strip().lower()
    if raw in {"back", "back view"}:
        return BodyView.BACK
    if raw == "front":
        return BodyView.FRONT
    return default
