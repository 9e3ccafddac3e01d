"""
Entities: Things that exist in the solar-mode world.

Three kinds of things live here:
- The SHIP: the only thing the player steers. Integrated every tick.
- CELESTIAL BODIES: planets on fixed circular orbits around the Sun.
  Their position is a pure function of (angle, orbit_radius), so we only
  store the angle and advance it.
- BELT ASTEROIDS: decoration. They orbit, spin, and never collide.

Orbital kinematics for a circular orbit:

    position = R * (cos a, sin a)
    velocity = R * w * (-sin a, cos a)      (w = orbit_speed, rad/tick)

The autopilot needs the velocity term to match speed with a moving planet.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional
import math
import random

from .constants import (
    INITIAL_BODIES,
    BELT_INNER_RADIUS,
    BELT_OUTER_RADIUS,
    BELT_ASTEROID_COUNT,
)
from .vector import Vec2

TRAIL_LENGTH = 100
FUEL_MAX = 100.0


@dataclass
class Ship:
    """
    The player's ship.

    - rotation: heading in radians
    - fuel: 0..100, thrust is suppressed at 0
    - trail: recent positions, oldest dropped first
    """
    position: Vec2
    velocity: Vec2
    rotation: float = 0.0
    thrusting: bool = False
    fuel: float = FUEL_MAX
    trail: Deque[Vec2] = field(default_factory=lambda: deque(maxlen=TRAIL_LENGTH))

    def speed(self) -> float:
        return self.velocity.magnitude()

    def to_state_dict(self) -> dict:
        return {
            "position": self.position.to_dict(),
            "velocity": self.velocity.to_dict(),
            "rotation": self.rotation,
            "thrusting": self.thrusting,
            "fuel": self.fuel,
            "trail": [p.to_dict() for p in self.trail],
        }


@dataclass
class CelestialBody:
    name: str
    color: str
    radius: float
    orbit_radius: float
    orbit_speed: float
    angle: float = 0.0

    @property
    def position(self) -> Vec2:
        return Vec2(
            math.cos(self.angle) * self.orbit_radius,
            math.sin(self.angle) * self.orbit_radius,
        )

    @property
    def velocity(self) -> Vec2:
        """Tangential velocity of the circular orbit (per tick)."""
        r_w = self.orbit_radius * self.orbit_speed
        return Vec2(-math.sin(self.angle) * r_w, math.cos(self.angle) * r_w)

    def advance(self) -> None:
        if self.orbit_speed > 0:
            self.angle += self.orbit_speed

    def to_state_dict(self) -> dict:
        pos = self.position
        return {
            "name": self.name,
            "color": self.color,
            "radius": self.radius,
            "orbit_radius": self.orbit_radius,
            "angle": self.angle,
            "x": pos.x,
            "y": pos.y,
        }


@dataclass
class BeltAsteroid:
    """Purely cosmetic asteroid riding a circular orbit in the belt."""
    x: float
    y: float
    size: float
    orbit_radius: float
    orbit_speed: float
    angle: float
    rotation: float
    rotation_speed: float
    shape: List[float]

    def advance(self) -> None:
        self.angle += self.orbit_speed
        self.rotation += self.rotation_speed
        self.x = math.cos(self.angle) * self.orbit_radius
        self.y = math.sin(self.angle) * self.orbit_radius

    def to_state_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "size": self.size,
            "rotation": self.rotation,
            "shape": self.shape,
        }


def create_ship() -> Ship:
    """Ship parked outside Jupiter's orbit, drifting gently."""
    return Ship(position=Vec2(800.0, 0.0), velocity=Vec2(0.0, 2.0))


def create_bodies(rng: Optional[random.Random] = None) -> List[CelestialBody]:
    """Instantiate the body table with random starting phases (Sun stays put)."""
    rng = rng or random.Random()
    bodies = []
    for name, color, radius, orbit_radius, orbit_speed in INITIAL_BODIES:
        angle = rng.random() * math.pi * 2 if orbit_radius > 0 else 0.0
        bodies.append(CelestialBody(
            name=name,
            color=color,
            radius=float(radius),
            orbit_radius=float(orbit_radius),
            orbit_speed=orbit_speed,
            angle=angle,
        ))
    return bodies


def find_body(bodies: List[CelestialBody], name: Optional[str]) -> Optional[CelestialBody]:
    """Lookup by name. Absence is not an error."""
    if name is None:
        return None
    for body in bodies:
        if body.name == name:
            return body
    return None


def create_asteroid_belt(
    rng: Optional[random.Random] = None,
    count: int = BELT_ASTEROID_COUNT,
) -> List[BeltAsteroid]:
    rng = rng or random.Random()
    belt = []
    for _ in range(count):
        orbit_radius = BELT_INNER_RADIUS + rng.random() * (BELT_OUTER_RADIUS - BELT_INNER_RADIUS)
        angle = rng.random() * math.pi * 2
        num_points = 5 + rng.randrange(5)
        belt.append(BeltAsteroid(
            x=math.cos(angle) * orbit_radius,
            y=math.sin(angle) * orbit_radius,
            size=1.5 + rng.random() * 3,
            orbit_radius=orbit_radius,
            orbit_speed=0.003 + rng.random() * 0.004,
            angle=angle,
            rotation=rng.random() * math.pi * 2,
            rotation_speed=(rng.random() - 0.5) * 0.1,
            shape=[0.7 + rng.random() * 0.6 for _ in range(num_points)],
        ))
    return belt
