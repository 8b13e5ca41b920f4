"""Vectors, rectangles and random helpers."""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass
class Vec2:
    """A point or offset in level or screen space."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle."""

    x: float
    y: float
    width: float
    height: float

    def overlaps(self, other: Rect) -> bool:
        """Tell whether the two rectangles share any interior area."""
        return (
            self.x < other.x + other.width
            and self.x + self.width > other.x
            and self.y < other.y + other.height
            and self.y + self.height > other.y
        )


def rand_from_to(start: float, stop: float) -> float:
    """Return a random number between start and stop."""
    return start + random.random() * (stop - start)


def rand_up_to(stop: float) -> float:
    """Return a random number between zero and stop."""
    return rand_from_to(0.0, stop)