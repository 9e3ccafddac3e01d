"""
Orbital Integrator - One Satellite, One Planet

KEY CONCEPT: Inverse-Square Gravity

    a = -(M / r^2) * r_hat

The planet is fixed at the origin and far heavier than the satellite, so
this is the classic two-body problem reduced to one moving body.

Integration uses semi-implicit (symplectic) Euler:
1. Update velocity with current acceleration
2. Update position with NEW velocity

Explicit Euler (position first) slowly pumps energy into an orbit and
spirals it outward; semi-implicit Euler keeps closed orbits closed for a
very long time at the same cost.

STATUS MACHINE:

    ready --launch--> running --(r < 45)--> crashed
                         |
                         +--(r > 5000)--> escaped

crashed/escaped are terminal until an explicit reset. The crash check runs
BEFORE the force calculation, so r never gets close to zero in a valid tick.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Optional, Tuple
import logging
import math
import random

from .constants import CENTRAL_MASS, CRASH_RADIUS, ESCAPE_RADIUS
from .ports import AudioPort, NullAudio

logger = logging.getLogger(__name__)


class OrbitStatus(str, Enum):
    READY = "ready"
    RUNNING = "running"
    CRASHED = "crashed"
    ESCAPED = "escaped"


class OrbitPreset(str, Enum):
    CIRCULAR = "circular"
    ELLIPTICAL = "elliptical"
    ESCAPE = "escape"
    CRASH = "crash"


@dataclass
class OrbitConfig:
    central_mass: float = CENTRAL_MASS
    crash_radius: float = CRASH_RADIUS
    escape_radius: float = ESCAPE_RADIUS
    trail_length: int = 500
    trail_probability: float = 0.9   # chance a tick appends a trail point


@dataclass
class OrbitParams:
    """Launch parameters, editable while the sim is ready."""
    distance: float = 250.0
    speed: float = 3.0
    angle: float = 0.0   # degrees off the tangential direction

    def to_dict(self) -> dict:
        return {"distance": self.distance, "speed": self.speed, "angle": self.angle}


@dataclass
class Satellite:
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0

    def radius(self) -> float:
        return math.hypot(self.x, self.y)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "vx": self.vx, "vy": self.vy}


@dataclass
class OrbitSimState:
    satellite: Satellite
    status: OrbitStatus = OrbitStatus.READY
    trail: Deque[Tuple[float, float]] = field(default_factory=lambda: deque(maxlen=500))

    def to_dict(self) -> dict:
        return {
            "satellite": self.satellite.to_dict(),
            "status": self.status.value,
            "trail": [{"x": x, "y": y} for x, y in self.trail],
        }


def preset_params(preset: OrbitPreset, central_mass: float = CENTRAL_MASS) -> OrbitParams:
    """
    Canned launches that demonstrate each outcome.

    Circular speed:  v = sqrt(M / r)
    Escape speed:    v = sqrt(2M / r)
    """
    preset = OrbitPreset(preset)
    if preset == OrbitPreset.CIRCULAR:
        distance = 250.0
        speed = math.sqrt(central_mass / distance)
        angle = 0.0
    elif preset == OrbitPreset.ELLIPTICAL:
        distance = 200.0
        speed = math.sqrt(central_mass / distance) * 1.15
        angle = 0.0
    elif preset == OrbitPreset.ESCAPE:
        distance = 200.0
        speed = math.sqrt(2 * central_mass / distance) + 0.5
        angle = 0.0
    else:
        distance = 300.0
        speed = 1.0
        angle = -45.0
    return OrbitParams(distance=distance, speed=round(speed, 2), angle=angle)


class OrbitIntegrator:
    def __init__(
        self,
        config: Optional[OrbitConfig] = None,
        audio: Optional[AudioPort] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or OrbitConfig()
        self.audio = audio or NullAudio()
        self.rng = rng or random.Random()
        self.params = OrbitParams()
        self.state = self._fresh_state()

    def _fresh_state(self) -> OrbitSimState:
        return OrbitSimState(
            satellite=Satellite(x=self.params.distance, y=0.0),
            trail=deque(maxlen=self.config.trail_length),
        )

    @property
    def status(self) -> OrbitStatus:
        return self.state.status

    def set_params(
        self,
        distance: Optional[float] = None,
        speed: Optional[float] = None,
        angle: Optional[float] = None,
    ) -> OrbitParams:
        """Partial update of the launch parameters."""
        if distance is not None:
            self.params.distance = distance
        if speed is not None:
            self.params.speed = speed
        if angle is not None:
            self.params.angle = angle
        return self.params

    def reset(self) -> None:
        """The only way out of a terminal state."""
        self.state = self._fresh_state()

    def apply_preset(self, preset: OrbitPreset) -> OrbitParams:
        self.params = preset_params(preset, self.config.central_mass)
        self.reset()
        return self.params

    def launch(self) -> bool:
        """
        Convert (distance, speed, angle) into an initial state vector.

        angle = 0 launches straight along +y (tangential at x = distance).
        """
        if self.state.status != OrbitStatus.READY:
            return False
        theta = math.radians(self.params.angle)
        self.state.satellite = Satellite(
            x=self.params.distance,
            y=0.0,
            vx=self.params.speed * math.sin(theta),
            vy=self.params.speed * math.cos(theta),
        )
        self.state.status = OrbitStatus.RUNNING
        self.audio.play_laser()
        logger.info(f"Orbit launch d={self.params.distance} v={self.params.speed} a={self.params.angle}")
        return True

    def tick(self) -> OrbitStatus:
        state = self.state
        sat = state.satellite

        if state.status == OrbitStatus.READY:
            # Parameters are live: keep the satellite pinned at the launch point
            sat.x, sat.y, sat.vx, sat.vy = self.params.distance, 0.0, 0.0, 0.0
            return state.status

        if state.status != OrbitStatus.RUNNING:
            return state.status

        r = sat.radius()
        if r < self.config.crash_radius:
            state.status = OrbitStatus.CRASHED
            self.audio.play_explosion()
            logger.info("Orbit sim: satellite crashed")
            return state.status
        if r > self.config.escape_radius:
            state.status = OrbitStatus.ESCAPED
            logger.info("Orbit sim: satellite escaped")
            return state.status

        accel = self.config.central_mass / (r * r)
        sat.vx += -accel * (sat.x / r)
        sat.vy += -accel * (sat.y / r)
        sat.x += sat.vx
        sat.y += sat.vy

        if self.rng.random() < self.config.trail_probability:
            state.trail.append((sat.x, sat.y))
        return state.status

    def to_dict(self) -> dict:
        data = self.state.to_dict()
        data["params"] = self.params.to_dict()
        data["central_mass"] = self.config.central_mass
        return data
