"""Small vector and collision helpers shared by the simulation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto


class Facing(Enum):
    """Cardinal display orientation."""

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()


@dataclass(frozen=True)
class Vector2:
    """Immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2:
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self) -> Vector2:
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.length()
        if length == 0:
            return Vector2()
        return Vector2(self.x / length, self.y / length)

    def distance_to(self, other: Vector2) -> float:
        return (other - self).length()


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    dx = x2 - x1
    dy = y2 - y1
    return math.sqrt(dx * dx + dy * dy)


def point_to_segment_distance(
    px: float, py: float, x1: float, y1: float, x2: float, y2: float
) -> float:
    """Calculate distance from point to line segment."""
    dx = x2 - x1
    dy = y2 - y1
    length_sq = dx * dx + dy * dy

    if length_sq == 0:
        # Degenerate segment
        return distance(px, py, x1, y1)

    # Project point onto line, clamped to the segment
    t = max(0.0, min(1.0, ((px - x1) * dx + (py - y1) * dy) / length_sq))
    return distance(px, py, x1 + t * dx, y1 + t * dy)


def point_in_rect(px: float, py: float, rx: float, ry: float, rw: float, rh: float) -> bool:
    return rx <= px <= rx + rw and ry <= py <= ry + rh


def rect_intersect(
    r1x: float, r1y: float, r1w: float, r1h: float,
    r2x: float, r2y: float, r2w: float, r2h: float,
) -> bool:
    """Axis-aligned rectangle overlap. Touching edges count as overlapping."""
    return not (
        r2x > r1x + r1w
        or r2x + r2w < r1x
        or r2y > r1y + r1h
        or r2y + r2h < r1y
    )


def circle_intersect(
    c1x: float, c1y: float, c1r: float, c2x: float, c2y: float, c2r: float
) -> bool:
    return distance(c1x, c1y, c2x, c2y) < c1r + c2r


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def lerp(start: float, end: float, t: float) -> float:
    return start * (1 - t) + end * t


def ease_in_out(t: float) -> float:
    """Quadratic ease-in-out over [0, 1]."""
    return 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t


def ease_out_back(t: float) -> float:
    """Ease-out with a slight overshoot past 1 before settling."""
    c1 = 1.70158
    c3 = c1 + 1
    return 1 + c3 * (t - 1) ** 3 + c1 * (t - 1) ** 2


def dominant_facing(dx: float, dy: float, current: Facing) -> Facing:
    """
    Pick the facing for a movement vector from its dominant axis.

    Horizontal wins only when strictly larger; a zero vector keeps the
    current facing.
    """
    if abs(dx) > abs(dy):
        return Facing.RIGHT if dx > 0 else Facing.LEFT
    if dy != 0:
        return Facing.DOWN if dy > 0 else Facing.UP
    return current
