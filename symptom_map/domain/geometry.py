"""Pure geometry used by the body map: normalized boxes and cover fitting."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NormalizedBox:
    """Axis-aligned rectangle in image-fraction space, corners (x1, y1) - (x2, y2)."""

    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def width(self) -> float:
        return self.x2 - self.x1

    @property
    def height(self) -> float:
        return self.y2 - self.y1

    def is_well_formed(self) -> bool:
        return 0.0 <= self.x1 < self.x2 <= 1.0 and 0.0 <= self.y1 < self.y2 <= 1.0

    def contains(self, x: float, y: float) -> bool:
        return self.x1 < x < self.x2 and self.y1 < y < self.y2

    @property
    def area(self) -> float:
        return self.width * self.height

    def within(self, frame: NormalizedBox) -> NormalizedBox:
        """Re-express a box given relative to ``frame`` in the frame's own space."""
        return NormalizedBox(
            frame.x1 + self.x1 * frame.width,
            frame.y1 + self.y1 * frame.height,
            frame.x1 + self.x2 * frame.width,
            frame.y1 + self.y2 * frame.height,
        )

    def intersects(self, other: NormalizedBox) -> bool:
        # Shared edges are allowed; only interiors count.
        return (
            self.x1 < other.x2
            and other.x1 < self.x2
            and self.y1 < other.y2
            and other.y1 < self.y2
        )


@dataclass(frozen=True, slots=True)
class RegionBox:
    """Rectangle in percent of the image, as consumed by region overlays."""

    x_pct: float
    y_pct: float
    w_pct: float
    h_pct: float


@dataclass(frozen=True, slots=True)
class CoverFit:
    scale: float
    scaled_width: float
    scaled_height: float
    left: float
    top: float

    def to_normalized(self, x: float, y: float) -> tuple[float, float]:
        return (x - self.left) / self.scaled_width, (y - self.top) / self.scaled_height

    def to_viewport(self, nx: float, ny: float) -> tuple[float, float]:
        return self.left + nx * self.scaled_width, self.top + ny * self.scaled_height


def compute_cover_fit(
    viewport_width: float,
    viewport_height: float,
    image_width: float,
    image_height: float,
) -> CoverFit:
    """Scale an image so it covers the whole viewport and center it.

    The larger of the two axis ratios is used, so the scaled image is never
    smaller than the viewport on either axis; the overflow is split evenly and
    shows up as negative ``left``/``top`` offsets.
    """
    if viewport_width <= 0 or viewport_height <= 0:
        raise ValueError(f"Viewport has zero size: {viewport_width}x{viewport_height}")
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Image has zero size: {image_width}x{image_height}")
    scale = max(viewport_width / image_width, viewport_height / image_height)
    scaled_width = image_width * scale
    scaled_height = image_height * scale
    return CoverFit(
        scale=scale,
        scaled_width=scaled_width,
        scaled_height=scaled_height,
        left=(viewport_width - scaled_width) / 2,
        top=(viewport_height - scaled_height) / 2,
    )
