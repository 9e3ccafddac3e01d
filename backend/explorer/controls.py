"""
Input Aggregation - Many Devices, One Intent

The player can steer with any mix of:
1. Keyboard (WASD / arrows), each held direction contributes +/-1 on its axis
2. Virtual joystick, already normalized by the browser widget
3. Pointer/touch target in world space ("fly toward my finger")

Everything collapses into ONE intent vector per tick. The magnitude is the
throttle (0..1), the direction is the desired heading. The aggregator keeps
only the latest samples; it has no memory across ticks.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Set
import math

from .vector import Vec2

# Pointer targets closer than this to the ship are ignored (no jitter when
# the finger is on top of the ship).
POINTER_DEADZONE = 30.0

UP_KEYS = {"w", "arrowup"}
DOWN_KEYS = {"s", "arrowdown"}
LEFT_KEYS = {"a", "arrowleft"}
RIGHT_KEYS = {"d", "arrowright"}
AXIS_KEYS = UP_KEYS | DOWN_KEYS | LEFT_KEYS | RIGHT_KEYS
FIRE_KEYS = {" ", "space", "f", "enter"}
KNOWN_KEYS = AXIS_KEYS | FIRE_KEYS


@dataclass
class Intent:
    """Unit-or-smaller steering vector for one tick."""
    x: float = 0.0
    y: float = 0.0

    @property
    def magnitude(self) -> float:
        return Vec2(self.x, self.y).magnitude()

    @property
    def active(self) -> bool:
        return self.x != 0 or self.y != 0

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "magnitude": self.magnitude}


class InputAggregator:
    """Merges key, joystick and pointer samples into an Intent."""

    def __init__(self):
        self.keys: Set[str] = set()
        self.joystick = Vec2.zero()
        self.pointer: Optional[Vec2] = None

    def key_down(self, key: str) -> bool:
        """Record a held key. Returns False for keys we don't care about."""
        key = key.lower()
        if key not in KNOWN_KEYS:
            return False
        self.keys.add(key)
        return True

    def key_up(self, key: str) -> None:
        self.keys.discard(key.lower())

    def set_joystick(self, x: float, y: float) -> None:
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"Joystick values must be finite, got ({x}, {y})")
        self.joystick = Vec2(x, y)

    def set_pointer(self, target: Optional[Vec2]) -> None:
        if target is not None and not (math.isfinite(target.x) and math.isfinite(target.y)):
            raise ValueError(f"Pointer target must be finite, got {target}")
        self.pointer = target

    def clear(self) -> None:
        self.keys.clear()
        self.joystick = Vec2.zero()
        self.pointer = None

    @property
    def fire_requested(self) -> bool:
        return bool(self.keys & FIRE_KEYS)

    def intent(self, ship_position: Optional[Vec2] = None) -> Intent:
        """
        Combine the current samples.

        The pointer only applies when a ship position is given (modes
        with a free-flying ship) and the ship is outside the deadzone; it
        then REPLACES the key/joystick vector with a unit vector toward
        the target.
        """
        keys = self.keys
        x = bool(keys & RIGHT_KEYS) - bool(keys & LEFT_KEYS)
        y = bool(keys & DOWN_KEYS) - bool(keys & UP_KEYS)
        vec = self.joystick + Vec2(float(x), float(y))

        if self.pointer is not None and ship_position is not None:
            to_target = self.pointer - ship_position
            if to_target.magnitude() > POINTER_DEADZONE:
                vec = to_target.normalized()

        vec = vec.clamped(1.0)
        return Intent(vec.x, vec.y)
