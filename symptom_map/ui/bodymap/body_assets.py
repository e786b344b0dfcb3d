from __future__ import annotations

from pathlib import Path

from symptom_map.config import BUNDLED_ASSETS_DIR, settings
from symptom_map.domain.constants import BodyView, normalize_gender, normalize_view

# Raster files dropped into the assets directory win over the bundled outlines.
IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".svg")


def _sex(gender: str) -> str:
    return "female" if normalize_gender(gender) == "F" else "male"


def body_image_name(gender: str, view: BodyView | str) -> str:
    return f"body-{normalize_view(view).value}-{_sex(gender)}"


def quadrant_image_name(quadrant_id: str, gender: str, view: BodyView | str) -> str:
    return f"{quadrant_id}-{normalize_view(view).value}-{_sex(gender)}"


def _find_image(stem: str, directories) -> str | None:
    for directory in directories:
        for suffix in IMAGE_SUFFIXES:
            candidate = Path(directory) / f"{stem}{suffix}"
            if candidate.exists():
                return str(candidate)
    return None


def resolve_body_image(gender: str, view: BodyView | str, assets_dir: Path | None = None) -> str:
    stem = body_image_name(gender, view)
    found = _find_image(stem, (assets_dir or settings.assets_dir, BUNDLED_ASSETS_DIR))
    if found is not None:
        return found
    # Missing asset still goes through the canvas so the failure is reported there.
    return str(BUNDLED_ASSETS_DIR / f"{stem}.svg")


def find_quadrant_image(
    quadrant_id: str,
    gender: str,
    view: BodyView | str,
    assets_dir: Path | None = None,
) -> str | None:
    """Dedicated close-up of one quadrant, when the assets directory ships one."""
    return _find_image(quadrant_image_name(quadrant_id, gender, view), (assets_dir or settings.assets_dir,))
