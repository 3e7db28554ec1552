"""Display-information providers.

The scale normalizer only needs one question answered: which display is
nearest to a screen coordinate, and what is its pixel-density multiplier.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Point:
    """A screen coordinate in logical pixels."""

    x: int
    y: int


@dataclass(frozen=True)
class Display:
    """A physical display: its logical bounds and scale factor."""

    scale_factor: float = 1.0
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def __post_init__(self) -> None:
        if self.scale_factor <= 0:
            raise ValueError(f"scale_factor must be positive, got {self.scale_factor}")

    def contains(self, point: Point) -> bool:
        return (
            self.x <= point.x < self.x + self.width
            and self.y <= point.y < self.y + self.height
        )

    def squared_distance_to(self, point: Point) -> int:
        """Squared distance from *point* to the closest edge of the bounds (0 inside)."""
        dx = max(self.x - point.x, 0, point.x - (self.x + self.width - 1))
        dy = max(self.y - point.y, 0, point.y - (self.y + self.height - 1))
        return dx * dx + dy * dy


class DisplayInfoProvider(Protocol):
    def nearest_display(self, point: Point) -> Display: ...


class StaticDisplayInfo:
    """Single display with a fixed scale factor, e.g. a headless browser."""

    def __init__(self, scale_factor: float = 1.0) -> None:
        self.display = Display(scale_factor=scale_factor)

    def nearest_display(self, point: Point) -> Display:
        return self.display


class DisplayLayout:
    """A multi-monitor arrangement.

    Resolves the display whose bounds contain the point, otherwise the one
    whose edge is closest.  Ties go to the display listed first.
    """

    def __init__(self, displays: list[Display]) -> None:
        if not displays:
            raise ValueError("DisplayLayout needs at least one display")
        self.displays = list(displays)

    def nearest_display(self, point: Point) -> Display:
        for display in self.displays:
            if display.contains(point):
                return display
        return min(self.displays, key=lambda d: d.squared_distance_to(point))
