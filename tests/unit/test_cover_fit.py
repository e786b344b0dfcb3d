from __future__ import annotations

import pytest

from symptom_map.domain.geometry import NormalizedBox, compute_cover_fit


def test_wide_image_in_landscape_viewport() -> None:
    fit = compute_cover_fit(400, 300, 800, 400)

    assert fit.scale == pytest.approx(0.75)
    assert fit.scaled_width == pytest.approx(600)
    assert fit.scaled_height == pytest.approx(300)
    assert fit.left == pytest.approx(-100)
    assert fit.top == pytest.approx(0)


@pytest.mark.parametrize(
    ("viewport", "image"),
    [
        ((420, 620), (400, 800)),
        ((420, 620), (1200, 300)),
        ((100, 100), (10, 10)),
        ((640, 480), (640, 480)),
    ],
)
def test_cover_fit_never_letterboxes(viewport: tuple[int, int], image: tuple[int, int]) -> None:
    fit = compute_cover_fit(*viewport, *image)

    assert fit.scaled_width >= viewport[0] - 1e-9
    assert fit.scaled_height >= viewport[1] - 1e-9
    assert fit.left <= 0
    assert fit.top <= 0
    assert fit.left + fit.scaled_width == pytest.approx(viewport[0] - fit.left)


def test_normalized_and_viewport_mapping_are_inverse() -> None:
    fit = compute_cover_fit(420, 620, 400, 800)
    x, y = fit.to_viewport(0.3, 0.7)

    nx, ny = fit.to_normalized(x, y)

    assert nx == pytest.approx(0.3)
    assert ny == pytest.approx(0.7)


@pytest.mark.parametrize("sizes", [(0, 300, 800, 400), (400, 0, 800, 400), (400, 300, 0, 400)])
def test_zero_sizes_are_rejected(sizes: tuple[int, int, int, int]) -> None:
    with pytest.raises(ValueError, match="zero size"):
        compute_cover_fit(*sizes)


def test_box_contains_is_strict_and_shared_edges_do_not_intersect() -> None:
    upper = NormalizedBox(0.25, 0.0, 0.75, 0.5)
    lower = NormalizedBox(0.25, 0.5, 0.75, 1.0)

    assert upper.contains(0.5, 0.25)
    assert not upper.contains(0.5, 0.5)
    assert not upper.intersects(lower)
    assert upper.intersects(NormalizedBox(0.5, 0.4, 0.9, 0.6))
