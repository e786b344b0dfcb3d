from __future__ import annotations


class AppError(RuntimeError):
    """Base application-level error."""


class CanvasLoadError(AppError):
    """Body image could not be fetched, decoded or fitted."""


class QuadrantGeometryError(AppError):
    """Static quadrant table violates its geometry invariants."""
