"""Host surface geometry used to size the layout."""

from __future__ import annotations

from event_timeline.models import Orientation


class FixedSurface:
    """A surface with an explicit size, for headless hosts and tests.

    Mirrors the ``width()``/``height()`` accessors of a Qt widget so either
    can be handed to the engine.
    """

    def __init__(self, width: float = 0.0, height: float = 0.0):
        self._width = float(width)
        self._height = float(height)

    def width(self) -> float:
        return self._width

    def height(self) -> float:
        return self._height

    def resize(self, width: float, height: float):
        self._width = float(width)
        self._height = float(height)

    def __repr__(self) -> str:
        return f"FixedSurface(width={self._width}, height={self._height})"


def is_surface(candidate) -> bool:
    """Whether ``candidate`` exposes callable ``width`` and ``height``."""
    return callable(getattr(candidate, "width", None)) and callable(getattr(candidate, "height", None))


def surface_extent(surface, orientation: Orientation) -> float:
    """Pixel extent of ``surface`` along the timeline axis."""
    if orientation is Orientation.HORIZONTAL:
        return float(surface.width())
    return float(surface.height())
