"""
Arcade Combat Engine - Asteroids on a Torus

The playfield wraps: leave the right edge, re-enter on the left.
(Topologically a torus - a donut - which is why there are no walls.)

ENTITY LIFECYCLE:

    spawn (tier 3) --hit--> 2x tier 2 --hit--> 2x tier 1 --hit--> gone

- Smaller rocks are faster and worth MORE (harder to hit)
- A bullet is consumed by the first rock it touches; one rock per bullet
- Clear the field and a bigger wave arrives (scaled by score)

Collision tests are plain circle proximity. No bounces, no impulses.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, List, Optional
import logging
import math
import random
import time

from .constants import ASTEROID_TIERS, SHIP_ACCELERATION
from .controls import Intent
from .ports import AudioPort, NullAudio
from .vector import Vec2, ease_heading

logger = logging.getLogger(__name__)


class AsteroidTier(IntEnum):
    SMALL = 1
    MEDIUM = 2
    LARGE = 3

    @property
    def size(self) -> float:
        return ASTEROID_TIERS[self.value][0]

    @property
    def speed(self) -> float:
        return ASTEROID_TIERS[self.value][1]

    @property
    def score(self) -> int:
        return ASTEROID_TIERS[self.value][2]


@dataclass
class ArcadeConfig:
    """Tuning for the arcade minigame."""
    fire_interval: float = 0.25   # seconds (wall clock) between shots
    bullet_life: int = 60         # ticks
    bullet_speed: float = 10.0
    muzzle_offset: float = 15.0   # bullets spawn at the ship's nose
    wrap_margin: float = 50.0     # rocks fully leave the screen before wrapping
    safe_zone: float = 150.0      # no spawns this close to the center
    ship_radius: float = 10.0
    ship_friction: float = 0.99
    initial_asteroids: int = 5
    wave_score_step: int = 1000   # one extra rock per this many points


@dataclass
class Bullet:
    id: int
    x: float
    y: float
    vx: float
    vy: float
    life: int

    def to_dict(self) -> dict:
        return {"id": self.id, "x": self.x, "y": self.y, "life": self.life}


@dataclass
class MinigameAsteroid:
    id: int
    x: float
    y: float
    vx: float
    vy: float
    tier: AsteroidTier
    shape: List[float]
    rotation: float
    rotation_speed: float

    @property
    def size(self) -> float:
        return self.tier.size

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "size": self.size,
            "tier": int(self.tier),
            "shape": self.shape,
            "rotation": self.rotation,
        }


@dataclass
class ArcadeShip:
    position: Vec2 = field(default_factory=Vec2.zero)
    velocity: Vec2 = field(default_factory=Vec2.zero)
    rotation: float = -math.pi / 2
    thrusting: bool = False

    def to_dict(self) -> dict:
        return {
            "position": self.position.to_dict(),
            "velocity": self.velocity.to_dict(),
            "rotation": self.rotation,
            "thrusting": self.thrusting,
        }


@dataclass
class ArcadeTickResult:
    collision: bool = False
    score_gain: int = 0
    destroyed: int = 0


def wrap(value: float, limit: float, margin: float = 0.0) -> float:
    """Toroidal wrap on one axis; the margin lets sprites leave fully first."""
    if value < -margin:
        return limit + margin
    if value > limit + margin:
        return -margin
    return value


class ArcadeEngine:
    def __init__(
        self,
        config: Optional[ArcadeConfig] = None,
        audio: Optional[AudioPort] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or ArcadeConfig()
        self.audio = audio or NullAudio()
        self.rng = rng or random.Random()
        self.clock = clock

        self.width = 800.0
        self.height = 600.0
        self.ship = ArcadeShip()
        self.bullets: List[Bullet] = []
        self.asteroids: List[MinigameAsteroid] = []
        self.score = 0
        self.game_over = False
        self._next_id = 0
        self._last_shot = -math.inf

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def reset(self, width: Optional[float] = None, height: Optional[float] = None) -> None:
        """New game: empty pools, score 0, ship centered facing up, first wave."""
        if width is not None and height is not None:
            self.width, self.height = width, height
        self.bullets.clear()
        self.asteroids.clear()
        self.score = 0
        self.game_over = False
        self._last_shot = -math.inf
        self.ship = ArcadeShip(position=Vec2(self.width / 2, self.height / 2))
        self.spawn_asteroids(self.config.initial_asteroids, self.width, self.height)

    def create_asteroid(self, x: float, y: float, tier: AsteroidTier) -> MinigameAsteroid:
        tier = AsteroidTier(tier)
        heading = self.rng.random() * math.pi * 2
        num_points = 7 + self.rng.randrange(5)
        roid = MinigameAsteroid(
            id=self._new_id(),
            x=x,
            y=y,
            vx=math.cos(heading) * tier.speed,
            vy=math.sin(heading) * tier.speed,
            tier=tier,
            shape=[0.8 + self.rng.random() * 0.4 for _ in range(num_points)],
            rotation=self.rng.random() * math.pi * 2,
            rotation_speed=(self.rng.random() - 0.5) * 0.1,
        )
        self.asteroids.append(roid)
        return roid

    def spawn_asteroids(self, count: int, width: float, height: float) -> None:
        """Drop `count` large rocks anywhere except the safe zone around the center."""
        zone = self.config.safe_zone
        for _ in range(count):
            # Rejection sampling; bounded so a tiny playfield can't hang us
            for _attempt in range(100):
                x = self.rng.random() * width
                y = self.rng.random() * height
                if not (abs(x - width / 2) < zone and abs(y - height / 2) < zone):
                    break
            self.create_asteroid(x, y, AsteroidTier.LARGE)

    def steer(self, intent: Intent) -> None:
        """Manual thrust. The arcade ship has no fuel limit."""
        ship = self.ship
        if self.game_over or not intent.active:
            ship.thrusting = False
            return
        throttle = intent.magnitude
        ship.rotation = ease_heading(ship.rotation, Vec2(intent.x, intent.y).angle(), 0.15)
        ship.velocity = ship.velocity + Vec2.from_angle(ship.rotation, SHIP_ACCELERATION * throttle)
        ship.thrusting = True
        self.audio.set_thrust(throttle)

    def fire_bullet(self, now: Optional[float] = None) -> Optional[Bullet]:
        """Shoot from the nose, inheriting ship velocity. Rate limited on wall clock."""
        if self.game_over:
            return None
        now = self.clock() if now is None else now
        if now - self._last_shot < self.config.fire_interval:
            return None
        self._last_shot = now

        ship = self.ship
        nose = ship.position + Vec2.from_angle(ship.rotation, self.config.muzzle_offset)
        muzzle = Vec2.from_angle(ship.rotation, self.config.bullet_speed) + ship.velocity
        bullet = Bullet(
            id=self._new_id(),
            x=nose.x,
            y=nose.y,
            vx=muzzle.x,
            vy=muzzle.y,
            life=self.config.bullet_life,
        )
        self.bullets.append(bullet)
        self.audio.play_laser()
        return bullet

    def _move(self, width: float, height: float) -> None:
        ship = self.ship
        if not self.game_over:
            pos = ship.position + ship.velocity
            ship.position = Vec2(wrap(pos.x, width), wrap(pos.y, height))
            ship.velocity = ship.velocity * self.config.ship_friction

        for b in self.bullets:
            b.x = wrap(b.x + b.vx, width)
            b.y = wrap(b.y + b.vy, height)
            b.life -= 1

        margin = self.config.wrap_margin
        for roid in self.asteroids:
            roid.x = wrap(roid.x + roid.vx, width, margin)
            roid.y = wrap(roid.y + roid.vy, height, margin)
            roid.rotation += roid.rotation_speed

    def _resolve_bullet_hits(self, result: ArcadeTickResult) -> None:
        for b in self.bullets:
            if b.life <= 0:
                continue
            # Newest rocks first
            for i in range(len(self.asteroids) - 1, -1, -1):
                roid = self.asteroids[i]
                if math.hypot(b.x - roid.x, b.y - roid.y) < roid.size:
                    b.life = 0
                    del self.asteroids[i]
                    result.score_gain += roid.tier.score
                    result.destroyed += 1
                    self.audio.play_explosion()
                    if roid.tier > AsteroidTier.SMALL:
                        child = AsteroidTier(roid.tier - 1)
                        self.create_asteroid(roid.x, roid.y, child)
                        self.create_asteroid(roid.x, roid.y, child)
                    break

    def _ship_hit(self) -> bool:
        pos = self.ship.position
        for roid in self.asteroids:
            if math.hypot(pos.x - roid.x, pos.y - roid.y) < roid.size + self.config.ship_radius:
                self.audio.play_explosion()
                return True
        return False

    def update(self, width: Optional[float] = None, height: Optional[float] = None) -> ArcadeTickResult:
        """
        One arcade tick.

        The ship collision is only REPORTED; the caller decides to end the
        game (see end_game).
        """
        if width is not None and height is not None:
            self.width, self.height = width, height
        result = ArcadeTickResult()

        self._move(self.width, self.height)
        self._resolve_bullet_hits(result)
        self.bullets[:] = [b for b in self.bullets if b.life > 0]

        if not self.game_over:
            result.collision = self._ship_hit()

        self.score += result.score_gain

        if not self.asteroids and not self.game_over:
            wave = self.config.initial_asteroids + self.score // self.config.wave_score_step
            logger.info(f"Arcade field cleared, spawning wave of {wave}")
            self.spawn_asteroids(wave, self.width, self.height)

        return result

    def end_game(self) -> None:
        if not self.game_over:
            self.game_over = True
            self.ship.thrusting = False
            logger.info(f"Arcade game over, score {self.score}")

    def to_dict(self) -> dict:
        return {
            "ship": self.ship.to_dict(),
            "bullets": [b.to_dict() for b in self.bullets],
            "asteroids": [a.to_dict() for a in self.asteroids],
            "score": self.score,
            "game_over": self.game_over,
        }
