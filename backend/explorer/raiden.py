"""
Raiden Combat Engine - Vertical Scrolling Shooter

The player flies at the bottom of the screen; enemies pour in from the top.

ENEMY ROSTER (scout is twice as likely as the others):
- SCOUT:        1 hp, dives straight down fast, harmless except on contact
- INTERCEPTOR:  2 hp, drifts down while bouncing between the side margins
- HEAVY:        5 hp, slow, fires an AIMED shot at the player every 120 ticks

WEAPON PROGRESSION (patterns stack):
- Level 1: one center bullet
- Level 2: + two parallel bullets at +/-10
- Level 3: + two spread bullets angled out (vx = +/-5)

DAMAGE MODEL:
Shield soaks damage first. Whatever the shield can't absorb spills over
into hp. hp hitting 0 ends the game for good (until a reset).

Each tick runs fixed-order passes: move, spawn, collide, prune. All
collections are compacted in place before the tick returns.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
import logging
import math
import random

from .constants import RAIDEN_ENEMIES
from .controls import Intent
from .ports import AudioPort, NullAudio

logger = logging.getLogger(__name__)


class EnemyType(str, Enum):
    SCOUT = "scout"
    INTERCEPTOR = "interceptor"
    HEAVY = "heavy"

    @property
    def score(self) -> int:
        return RAIDEN_ENEMIES[self.value][5]


class PowerUpType(str, Enum):
    HEALTH = "health"
    SPREAD = "spread"
    SPEED = "speed"
    SHIELD = "shield"


# Uniform pick from this list = scout double-weighted
SPAWN_TABLE = [EnemyType.SCOUT, EnemyType.SCOUT, EnemyType.INTERCEPTOR, EnemyType.HEAVY]


@dataclass
class RaidenConfig:
    """Tuning for the shooter."""
    max_hp: int = 100
    max_level: int = 3
    max_shield: float = 100.0
    base_speed: float = 8.0
    speed_per_level: float = 2.0
    edge_margin: float = 20.0
    fire_cooldown: int = 8          # ticks between volleys
    bullet_speed: float = 15.0
    spread_vx: float = 5.0
    wave_interval: int = 60         # ticks between enemy spawns
    scroll_speed: float = 3.0
    heavy_fire_interval: int = 120
    heavy_shot_speed: float = 5.0
    heavy_shot_damage: float = 10.0
    heavy_fire_buffer: float = 100.0  # heavies hold fire near the bottom
    side_margin: float = 50.0
    contact_damage: float = 20.0
    player_half_size: float = 20.0
    enemy_bullet_hit: float = 15.0
    bullet_hit_padding: float = 5.0
    powerup_chance: float = 0.15
    powerup_pickup_radius: float = 30.0
    powerup_fall_speed: float = 2.0
    health_restore: float = 25.0
    shield_boost: float = 50.0
    prune_margin: float = 50.0
    enemy_prune_margin: float = 100.0


@dataclass
class RaidenPlayer:
    x: float = 0.0
    y: float = 0.0
    hp: float = 100.0
    max_hp: float = 100.0
    cooldown: int = 0
    weapon_level: int = 1
    speed_level: int = 1
    shield: float = 0.0

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "hp": self.hp,
            "max_hp": self.max_hp,
            "cooldown": self.cooldown,
            "weapon_level": self.weapon_level,
            "speed_level": self.speed_level,
            "shield": self.shield,
        }


@dataclass
class RaidenEnemy:
    id: int
    x: float
    y: float
    type: EnemyType
    hp: float
    max_hp: float
    width: float
    height: float
    vx: float
    vy: float
    cooldown: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "type": self.type.value,
            "hp": self.hp,
            "max_hp": self.max_hp,
            "width": self.width,
            "height": self.height,
        }


@dataclass
class RaidenBullet:
    id: int
    x: float
    y: float
    vx: float
    vy: float
    is_player: bool
    damage: float
    color: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "is_player": self.is_player,
            "color": self.color,
        }


@dataclass
class RaidenParticle:
    id: int
    x: float
    y: float
    vx: float
    vy: float
    life: float
    max_life: float
    color: str
    size: float

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "life": self.life,
            "max_life": self.max_life,
            "color": self.color,
            "size": self.size,
        }


@dataclass
class RaidenPowerUp:
    id: int
    x: float
    y: float
    vy: float
    type: PowerUpType

    def to_dict(self) -> dict:
        return {"id": self.id, "x": self.x, "y": self.y, "type": self.type.value}


@dataclass
class RaidenState:
    player: RaidenPlayer = field(default_factory=RaidenPlayer)
    enemies: List[RaidenEnemy] = field(default_factory=list)
    bullets: List[RaidenBullet] = field(default_factory=list)
    particles: List[RaidenParticle] = field(default_factory=list)
    powerups: List[RaidenPowerUp] = field(default_factory=list)
    score: int = 0
    game_over: bool = False
    scroll: float = 0.0
    wave_timer: int = 0

    def to_dict(self) -> dict:
        return {
            "player": self.player.to_dict(),
            "enemies": [e.to_dict() for e in self.enemies],
            "bullets": [b.to_dict() for b in self.bullets],
            "particles": [p.to_dict() for p in self.particles],
            "powerups": [p.to_dict() for p in self.powerups],
            "score": self.score,
            "game_over": self.game_over,
            "scroll": self.scroll,
        }


@dataclass
class RaidenTickResult:
    score: int
    hp: float
    shield: float
    game_over: bool


PLAYER_BULLET_COLOR = "#0ff"
ENEMY_BULLET_COLOR = "#f0f"


class RaidenEngine:
    def __init__(
        self,
        config: Optional[RaidenConfig] = None,
        audio: Optional[AudioPort] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or RaidenConfig()
        self.audio = audio or NullAudio()
        self.rng = rng or random.Random()
        self.width = 800.0
        self.height = 600.0
        self.state = RaidenState()
        self._next_id = 0

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def reset(self, width: Optional[float] = None, height: Optional[float] = None) -> None:
        if width is not None and height is not None:
            self.width, self.height = width, height
        cfg = self.config
        self.state = RaidenState(player=RaidenPlayer(
            x=self.width / 2,
            y=self.height - 100,
            hp=cfg.max_hp,
            max_hp=cfg.max_hp,
        ))

    # ------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------

    def spawn_enemy(self, width: Optional[float] = None, enemy_type: Optional[EnemyType] = None) -> RaidenEnemy:
        width = self.width if width is None else width
        margin = self.config.side_margin
        enemy_type = enemy_type or self.rng.choice(SPAWN_TABLE)
        hp, w, h, vy, speed_x, _score = RAIDEN_ENEMIES[enemy_type.value]
        vx = 0.0
        if enemy_type == EnemyType.INTERCEPTOR:
            vx = speed_x if self.rng.random() > 0.5 else -speed_x
        enemy = RaidenEnemy(
            id=self._new_id(),
            x=margin + self.rng.random() * (width - 2 * margin),
            y=-50.0,
            type=enemy_type,
            hp=hp,
            max_hp=hp,
            width=w,
            height=h,
            vx=vx,
            vy=vy,
        )
        self.state.enemies.append(enemy)
        return enemy

    def spawn_powerup(self, x: float, y: float, kind: Optional[PowerUpType] = None) -> RaidenPowerUp:
        kind = kind or self.rng.choice(list(PowerUpType))
        powerup = RaidenPowerUp(id=self._new_id(), x=x, y=y, vy=self.config.powerup_fall_speed, type=kind)
        self.state.powerups.append(powerup)
        return powerup

    def spawn_particles(self, x: float, y: float, color: str, count: int) -> None:
        for _ in range(count):
            heading = self.rng.random() * math.pi * 2
            speed = self.rng.random() * 5
            self.state.particles.append(RaidenParticle(
                id=self._new_id(),
                x=x,
                y=y,
                vx=math.cos(heading) * speed,
                vy=math.sin(heading) * speed,
                life=30 + self.rng.random() * 20,
                max_life=50,
                color=color,
                size=2 + self.rng.random() * 4,
            ))

    # ------------------------------------------------------------
    # Player
    # ------------------------------------------------------------

    @property
    def player_speed(self) -> float:
        cfg = self.config
        return cfg.base_speed + cfg.speed_per_level * (self.state.player.speed_level - 1)

    def _player_bullet(self, x: float, y: float, vx: float, vy: float) -> RaidenBullet:
        return RaidenBullet(
            id=self._new_id(), x=x, y=y, vx=vx, vy=vy,
            is_player=True, damage=1, color=PLAYER_BULLET_COLOR,
        )

    def fire(self) -> int:
        """Emit one volley for the current weapon level. Returns bullets spawned."""
        p = self.state.player
        speed = self.config.bullet_speed
        spread = self.config.spread_vx
        volley = [self._player_bullet(p.x, p.y - 20, 0, -speed)]
        if p.weapon_level >= 2:
            volley.append(self._player_bullet(p.x - 10, p.y - 15, 0, -speed))
            volley.append(self._player_bullet(p.x + 10, p.y - 15, 0, -speed))
        if p.weapon_level >= 3:
            volley.append(self._player_bullet(p.x, p.y - 15, -spread, -speed * 0.9))
            volley.append(self._player_bullet(p.x, p.y - 15, spread, -speed * 0.9))
        self.state.bullets.extend(volley)
        p.cooldown = self.config.fire_cooldown
        self.audio.play_laser()
        return len(volley)

    def take_damage(self, amount: float) -> None:
        """Shield absorbs first; overflow spills into hp. hp 0 is game over."""
        p = self.state.player
        if p.shield > 0:
            p.shield -= amount
            if p.shield < 0:
                p.hp += p.shield
                p.shield = 0.0
        else:
            p.hp -= amount
        if p.hp <= 0:
            p.hp = 0.0
            if not self.state.game_over:
                self.state.game_over = True
                logger.info(f"Raiden game over, score {self.state.score}")
        self.spawn_particles(p.x, p.y, "#f00", 5)
        self.audio.play_explosion()

    def collect(self, kind: PowerUpType) -> None:
        p = self.state.player
        cfg = self.config
        if kind == PowerUpType.HEALTH:
            p.hp = min(p.max_hp, p.hp + cfg.health_restore)
        elif kind == PowerUpType.SPREAD:
            p.weapon_level = min(cfg.max_level, p.weapon_level + 1)
        elif kind == PowerUpType.SPEED:
            p.speed_level = min(cfg.max_level, p.speed_level + 1)
        elif kind == PowerUpType.SHIELD:
            p.shield = min(cfg.max_shield, p.shield + cfg.shield_boost)
        self.audio.play_alert()

    # ------------------------------------------------------------
    # Tick passes
    # ------------------------------------------------------------

    def _move_player(self, intent: Intent, width: float, height: float) -> None:
        p = self.state.player
        margin = self.config.edge_margin
        speed = self.player_speed
        p.x = max(margin, min(width - margin, p.x + intent.x * speed))
        p.y = max(margin, min(height - margin, p.y + intent.y * speed))

    def _update_powerups(self, height: float) -> None:
        p = self.state.player
        kept = []
        for pu in self.state.powerups:
            pu.y += pu.vy
            if math.hypot(p.x - pu.x, p.y - pu.y) < self.config.powerup_pickup_radius:
                self.collect(pu.type)
            elif pu.y <= height + self.config.prune_margin:
                kept.append(pu)
        self.state.powerups[:] = kept

    def _update_enemies(self, width: float, height: float) -> None:
        cfg = self.config
        p = self.state.player
        for e in self.state.enemies:
            e.x += e.vx
            e.y += e.vy
            if e.type == EnemyType.INTERCEPTOR and (e.x < cfg.side_margin or e.x > width - cfg.side_margin):
                e.vx *= -1
            e.cooldown -= 1
            if (e.type == EnemyType.HEAVY and e.cooldown <= 0
                    and 0 < e.y < height - cfg.heavy_fire_buffer):
                aim = math.atan2(p.y - e.y, p.x - e.x)
                self.state.bullets.append(RaidenBullet(
                    id=self._new_id(),
                    x=e.x,
                    y=e.y + 20,
                    vx=math.cos(aim) * cfg.heavy_shot_speed,
                    vy=math.sin(aim) * cfg.heavy_shot_speed,
                    is_player=False,
                    damage=cfg.heavy_shot_damage,
                    color=ENEMY_BULLET_COLOR,
                ))
                e.cooldown = cfg.heavy_fire_interval

    def _player_bullets_vs_enemies(self) -> None:
        pad = self.config.bullet_hit_padding
        state = self.state
        spent = set()
        for b in state.bullets:
            if not b.is_player:
                continue
            for e in state.enemies:
                if abs(b.x - e.x) < e.width / 2 + pad and abs(b.y - e.y) < e.height / 2 + pad:
                    e.hp -= b.damage
                    spent.add(b.id)
                    self.spawn_particles(b.x, b.y, "#fff", 3)
                    if e.hp <= 0:
                        self._kill(e)
                    break
        if spent:
            state.bullets[:] = [b for b in state.bullets if b.id not in spent]

    def _kill(self, enemy: RaidenEnemy) -> None:
        self.spawn_particles(enemy.x, enemy.y, "#f59e0b", 10)
        self.state.enemies.remove(enemy)
        self.state.score += enemy.type.score
        self.audio.play_explosion()
        if self.rng.random() < self.config.powerup_chance:
            self.spawn_powerup(enemy.x, enemy.y)

    def _hazards_vs_player(self) -> None:
        cfg = self.config
        state = self.state
        p = state.player
        survivors = []
        for e in state.enemies:
            if (abs(p.x - e.x) < cfg.player_half_size + e.width / 2
                    and abs(p.y - e.y) < cfg.player_half_size + e.height / 2):
                self.take_damage(cfg.contact_damage)
            else:
                survivors.append(e)
        state.enemies[:] = survivors

        kept = []
        for b in state.bullets:
            if (not b.is_player and abs(p.x - b.x) < cfg.enemy_bullet_hit
                    and abs(p.y - b.y) < cfg.enemy_bullet_hit):
                self.take_damage(b.damage)
            else:
                kept.append(b)
        state.bullets[:] = kept

    def _prune(self, width: float, height: float) -> None:
        cfg = self.config
        state = self.state
        margin = cfg.prune_margin
        state.bullets[:] = [
            b for b in state.bullets
            if -margin <= b.y <= height + margin and -margin <= b.x <= width + margin
        ]
        state.enemies[:] = [e for e in state.enemies if e.y < height + cfg.enemy_prune_margin]
        for particle in state.particles:
            particle.x += particle.vx
            particle.y += particle.vy
            particle.life -= 1
        state.particles[:] = [pt for pt in state.particles if pt.life > 0]

    def update(
        self,
        intent: Intent,
        should_shoot: bool,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ) -> RaidenTickResult:
        if width is not None and height is not None:
            self.width, self.height = width, height
        width, height = self.width, self.height
        state = self.state
        cfg = self.config

        if state.game_over:
            return self._result()

        state.scroll += cfg.scroll_speed
        self._move_player(intent, width, height)

        state.player.cooldown -= 1
        if should_shoot and state.player.cooldown <= 0:
            self.fire()

        state.wave_timer += 1
        if state.wave_timer >= cfg.wave_interval:
            self.spawn_enemy(width)
            state.wave_timer = 0

        self._update_powerups(height)
        self._update_enemies(width, height)
        for b in state.bullets:
            b.x += b.vx
            b.y += b.vy

        self._player_bullets_vs_enemies()
        self._hazards_vs_player()
        self._prune(width, height)
        return self._result()

    def _result(self) -> RaidenTickResult:
        p = self.state.player
        return RaidenTickResult(
            score=self.state.score,
            hp=p.hp,
            shield=p.shield,
            game_over=self.state.game_over,
        )

    def to_dict(self) -> dict:
        return self.state.to_dict()
