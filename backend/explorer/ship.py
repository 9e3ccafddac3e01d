"""
Ship Kinematics - Solar Mode Flight Model

Per tick, in order:
1. STEER: ease the nose toward the intent heading, thrust along the nose
2. INTEGRATE: friction (idle only), speed clamp, position += velocity
3. RECHARGE: solar panels trickle fuel, much faster close to the Sun
4. SCAN: find the nearest celestial body (edge-triggered)

This is "arcade physics", not Newtonian: there is drag in space and a
hard speed limit, because that is what makes it fun to fly.

Fuel economy:
- Thrust burns 0.1 * throttle per tick
- At fuel 0 thrust is suppressed; the ship DRIFTS, it never breaks
"""

from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING

from .constants import SHIP_ACCELERATION, SHIP_FRICTION, MAX_SPEED
from .controls import Intent
from .entities import Ship, CelestialBody, FUEL_MAX, create_ship
from .ports import AudioPort, NullAudio
from .vector import Vec2, ease_heading

if TYPE_CHECKING:
    from .autopilot import AutopilotCommand

MANUAL_TURN_RATE = 0.15       # fraction of heading error removed per tick
FUEL_BURN_RATE = 0.1          # per tick at full throttle
TRAIL_MIN_SPEED = 0.5

BASE_RECHARGE = 0.02
SOLAR_RECHARGE_RADIUS = 200.0
SOLAR_RECHARGE_FLOOR = 0.1
SCAN_RANGE = 300.0            # plus the body's radius


def recharge_rate(distance_to_sun: float) -> float:
    """
    Fuel gained per tick at a given distance from the origin.

    Inside the recharge radius the rate climbs linearly toward 0.5 at the
    center, never dropping below the floor.
    """
    if distance_to_sun < SOLAR_RECHARGE_RADIUS:
        return max(SOLAR_RECHARGE_FLOOR, (SOLAR_RECHARGE_RADIUS - distance_to_sun) / 400.0)
    return BASE_RECHARGE


def clamp_fuel(fuel: float) -> float:
    return max(0.0, min(FUEL_MAX, fuel))


class ShipKinematics:
    """Owns the Ship; everything else only reads it."""

    def __init__(self, ship: Optional[Ship] = None, audio: Optional[AudioPort] = None):
        self.ship = ship or create_ship()
        self.audio = audio or NullAudio()
        self.closest_body: Optional[str] = None

    def steer(self, intent: Intent) -> None:
        """Manual control: turn toward the intent and burn if we can."""
        ship = self.ship
        throttle = intent.magnitude
        heading = Vec2(intent.x, intent.y).angle()
        ship.rotation = ease_heading(ship.rotation, heading, MANUAL_TURN_RATE)

        if throttle > 0 and ship.fuel > 0:
            ship.velocity = ship.velocity + Vec2.from_angle(
                ship.rotation, SHIP_ACCELERATION * throttle
            )
            ship.fuel = clamp_fuel(ship.fuel - FUEL_BURN_RATE * throttle)
            ship.thrusting = True
            self.audio.set_thrust(throttle)
        else:
            self.coast()

    def apply(self, command: "AutopilotCommand") -> None:
        """Execute an autopilot command against the ship."""
        ship = self.ship
        ship.rotation = command.rotation
        ship.velocity = ship.velocity + command.delta_v
        ship.fuel = clamp_fuel(ship.fuel - command.fuel_cost)
        ship.thrusting = command.thrusting
        self.audio.set_thrust(command.thrust_level)

    def coast(self) -> None:
        self.ship.thrusting = False
        self.audio.set_thrust(0.0)

    def integrate(self, idle: bool) -> None:
        """Advance position by one tick and recharge fuel."""
        ship = self.ship
        if idle:
            ship.velocity = ship.velocity * SHIP_FRICTION
        ship.velocity = ship.velocity.clamped(MAX_SPEED * 1.5)
        speed = ship.speed()

        ship.position = ship.position + ship.velocity
        if speed > TRAIL_MIN_SPEED:
            ship.trail.append(ship.position)

        ship.fuel = clamp_fuel(ship.fuel + recharge_rate(ship.position.magnitude()))

    def nearest_body(self, bodies: List[CelestialBody]) -> Optional[CelestialBody]:
        """Closest body whose scan range (300 + radius) contains the ship."""
        nearest = None
        best = float("inf")
        for body in bodies:
            dist = body.position.distance_to(self.ship.position)
            if dist < SCAN_RANGE + body.radius and dist < best:
                nearest = body
                best = dist
        return nearest

    def scan(self, bodies: List[CelestialBody]) -> bool:
        """Update closest_body; True only on the tick it changes."""
        nearest = self.nearest_body(bodies)
        name = nearest.name if nearest else None
        if name == self.closest_body:
            return False
        self.closest_body = name
        return True
