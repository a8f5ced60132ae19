"""Rectangles and popup placement on the terminal grid."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """An axis-aligned area of terminal cells."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if min(self.x, self.y, self.width, self.height) < 0:
            raise ValueError("rectangle coordinates and sizes must be non-negative")

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height


def _middle_slice(start: int, length: int, percent: int) -> tuple[int, int]:
    if not 0 <= percent <= 100:
        raise ValueError(f"percentage must be between 0 and 100, got {percent}")
    margin = (100 - percent) // 2
    offset = length * margin // 100
    size = length * percent // 100
    return start + offset, size


def centered_rect(percent_x: int, percent_y: int, area: Rect) -> Rect:
    """Return a rectangle taking the given percentages of ``area``, centred in it."""
    x, width = _middle_slice(area.x, area.width, percent_x)
    y, height = _middle_slice(area.y, area.height, percent_y)
    return Rect(x, y, width, height)