"""
2D Vector Math - Positions, Velocities, Headings

Every moving thing in the explorer lives on a flat plane:
- Position: where is it? (x, y) world units
- Velocity: how far does it move per tick? (vx, vy)
- Heading: which way is it pointing? (radians, 0 = +x, counter-clockwise)

Screen convention: +y points DOWN (canvas space), so "up" on screen is -y.
All rates are per tick, not per second.
"""

from __future__ import annotations
import math
import numpy as np
from dataclasses import dataclass


@dataclass
class Vec2:
    """A 2D vector. Treat as immutable: operators return new vectors."""
    x: float
    y: float

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vec2:
        return self * scalar

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def magnitude(self) -> float:
        """Length of the vector (Euclidean norm)."""
        return float(np.sqrt(self.x**2 + self.y**2))

    def normalized(self) -> Vec2:
        """Unit vector (same direction, length = 1)."""
        mag = self.magnitude()
        if mag < 1e-10:
            return Vec2(0.0, 0.0)
        return self / mag

    def clamped(self, max_magnitude: float) -> Vec2:
        """Rescale down to max_magnitude if longer; never scales up."""
        mag = self.magnitude()
        if mag > max_magnitude:
            return self * (max_magnitude / mag)
        return self

    def distance_to(self, other: Vec2) -> float:
        return (self - other).magnitude()

    def angle(self) -> float:
        """Heading of this vector in radians (atan2 convention)."""
        return math.atan2(self.y, self.x)

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> Vec2:
        return cls(math.cos(angle) * length, math.sin(angle) * length)

    @classmethod
    def zero(cls) -> Vec2:
        return cls(0.0, 0.0)

    def to_dict(self) -> dict:
        """For JSON serialization."""
        return {"x": self.x, "y": self.y}

    def __repr__(self) -> str:
        return f"Vec2({self.x:.2f}, {self.y:.2f})"


def wrap_angle(angle: float) -> float:
    """Wrap an angular difference into [-pi, pi] (shortest turn)."""
    while angle < -math.pi:
        angle += math.pi * 2
    while angle > math.pi:
        angle -= math.pi * 2
    return angle


def ease_heading(current: float, target: float, factor: float) -> float:
    """Move `current` a fraction of the shortest way toward `target`."""
    return current + wrap_angle(target - current) * factor
