"""
Autopilot - Rendezvous With a Moving Planet

Planets are not fixed targets: they orbit. Flying at where a planet IS
works from far away but overshoots up close, because by the time you
arrive it has moved and you are still carrying all your approach speed.

So the autopilot runs two phases:

1. APPROACH (distance > radius + 150)
   - Open loop: point at the planet, burn at 80% thrust
   - Cheap and good enough while the error is large

2. RENDEZVOUS (inside the threshold)
   - Closed loop on VELOCITY, not position:
       ideal_v = planet_v + 0.05 * offset
       delta_v = 0.1 * (ideal_v - ship_v)
   - The offset term slowly pulls us in, the planet_v term keeps us
     station-keeping alongside it
   - Burns fuel only for corrections bigger than 0.05

Splitting the phases avoids oscillating around the target.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .constants import SHIP_ACCELERATION
from .entities import Ship, CelestialBody, find_body
from .vector import Vec2, ease_heading

AUTOPILOT_TURN_RATE = 0.1
APPROACH_MARGIN = 150.0
APPROACH_THRUST = 0.8
APPROACH_FUEL_BURN = 0.08
APPROACH_THRUST_LEVEL = 0.5

POSITION_GAIN = 0.05
VELOCITY_GAIN = 0.1
CORRECTION_DEADBAND = 0.05
CORRECTION_FUEL_BURN = 0.03


class AutopilotPhase(str, Enum):
    APPROACH = "approach"
    RENDEZVOUS = "rendezvous"


@dataclass
class AutopilotCommand:
    """What the autopilot wants the ship to do this tick."""
    phase: AutopilotPhase
    rotation: float
    delta_v: Vec2
    fuel_cost: float
    thrusting: bool
    thrust_level: float


def select_phase(distance: float, target: CelestialBody) -> AutopilotPhase:
    if distance > target.radius + APPROACH_MARGIN:
        return AutopilotPhase.APPROACH
    return AutopilotPhase.RENDEZVOUS


def compute_command(ship: Ship, target: CelestialBody) -> AutopilotCommand:
    """The steering and velocity-matching law for one tick."""
    offset = target.position - ship.position
    distance = offset.magnitude()
    rotation = ease_heading(ship.rotation, offset.angle(), AUTOPILOT_TURN_RATE)
    phase = select_phase(distance, target)

    if phase == AutopilotPhase.APPROACH:
        if ship.fuel <= 0:
            return AutopilotCommand(phase, rotation, Vec2.zero(), 0.0, False, 0.0)
        return AutopilotCommand(
            phase=phase,
            rotation=rotation,
            delta_v=Vec2.from_angle(rotation, SHIP_ACCELERATION * APPROACH_THRUST),
            fuel_cost=APPROACH_FUEL_BURN,
            thrusting=True,
            thrust_level=APPROACH_THRUST_LEVEL,
        )

    ideal_v = target.velocity + offset * POSITION_GAIN
    correction = (ideal_v - ship.velocity) * VELOCITY_GAIN
    mag = correction.magnitude()
    burning = mag > CORRECTION_DEADBAND and ship.fuel > 0
    return AutopilotCommand(
        phase=phase,
        rotation=rotation,
        delta_v=correction,
        fuel_cost=CORRECTION_FUEL_BURN * mag if burning else 0.0,
        thrusting=burning,
        thrust_level=min(mag * 5, 0.3) if burning else 0.0,
    )


class AutopilotController:
    """Engage/disengage state plus per-tick command generation."""

    def __init__(self):
        self.active = False
        self.target: Optional[str] = None
        self.phase: Optional[AutopilotPhase] = None

    def engage(self, target: str) -> None:
        self.active = True
        self.target = target
        self.phase = None

    def disengage(self) -> None:
        self.active = False
        self.target = None
        self.phase = None

    def compute(self, ship: Ship, bodies: List[CelestialBody]) -> Optional[AutopilotCommand]:
        """
        Command for this tick, or None.

        An unknown target yields no command but does NOT disengage; the
        autopilot just idles until the target resolves or the pilot
        takes over.
        """
        if not self.active:
            return None
        target = find_body(bodies, self.target)
        if target is None:
            return None
        command = compute_command(ship, target)
        self.phase = command.phase
        return command

    def to_dict(self) -> dict:
        return {
            "active": self.active,
            "target": self.target,
            "phase": self.phase.value if self.phase else None,
        }
