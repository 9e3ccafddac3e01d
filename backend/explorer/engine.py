"""
Game Engine - One Host Loop, Four Games

KEY CONCEPT: Fixed Per-Tick Simulation

Every constant in the engines is expressed PER TICK, not per second. The
host loop targets 60 ticks/s and paces itself against the wall clock, but
the simulation itself never looks at elapsed time: a slow frame makes the
game run slow, it never makes it run differently.

Per tick:
1. Input Aggregator -> intent
2. Mode Controller picks exactly ONE subsystem
   - solar:  ship kinematics + autopilot + orbiting bodies + proximity scan
   - arcade: asteroids on a torus
   - orbit:  satellite around a planet
   - raiden: vertical shooter
3. The subsystem mutates its own state (the other three stay frozen)
4. The snapshot is projected to plain dicts and handed to event handlers

The snapshot carries camera/shake scalars and the audio cues fired during
the tick. The heavier HUD projection rides along every `hud_every` ticks.
"""

from __future__ import annotations
import asyncio
import logging
import math
import random
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional

from .arcade import ArcadeConfig, ArcadeEngine
from .autopilot import AutopilotController
from .computer import DescriptionSource, ShipComputer, ComputerConfig
from .controls import InputAggregator
from .entities import CelestialBody, Ship, create_asteroid_belt, create_bodies, find_body
from .modes import GameMode, ModeController
from .orbit import OrbitConfig, OrbitIntegrator
from .persistence import GameStore
from .ports import AudioCueBuffer
from .raiden import RaidenConfig, RaidenEngine
from .ship import ShipKinematics
from .vector import Vec2

logger = logging.getLogger(__name__)

CAMERA_EASE = 0.1
SHAKE_ON_SCORE = 5.0
SHAKE_ON_CRASH = 15.0
SHAKE_DECAY = 0.9
SHAKE_FLOOR = 0.1
RAIDEN_AUTOFIRE_THRESHOLD = 0.1


@dataclass
class EngineConfig:
    """Configuration for the host loop."""
    dt: float = 1.0 / 60.0      # target wall time per tick
    real_time: bool = True      # pace ticks against the wall clock
    width: float = 800.0        # viewport, used by the screen-space games
    height: float = 600.0
    hud_every: int = 5          # attach the HUD projection every N ticks
    seed: Optional[int] = None


class GameEngine:
    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        store: Optional[GameStore] = None,
        source: Optional[DescriptionSource] = None,
        arcade_config: Optional[ArcadeConfig] = None,
        orbit_config: Optional[OrbitConfig] = None,
        raiden_config: Optional[RaidenConfig] = None,
        computer_config: Optional[ComputerConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or EngineConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.audio = AudioCueBuffer()
        self.store = store or GameStore()

        self.input = InputAggregator()
        self.modes = ModeController()
        self.kinematics = ShipKinematics(audio=self.audio)
        self.autopilot = AutopilotController()
        self.bodies: List[CelestialBody] = create_bodies(self.rng)
        self.belt = create_asteroid_belt(self.rng)
        self.arcade = ArcadeEngine(arcade_config, audio=self.audio, rng=self.rng, clock=clock)
        self.orbit = OrbitIntegrator(orbit_config, audio=self.audio, rng=self.rng)
        self.raiden = RaidenEngine(raiden_config, audio=self.audio, rng=self.rng)
        self.computer = ShipComputer(source, computer_config, audio=self.audio, store=self.store)
        self.high_scores = self.store.get_high_scores()

        self.camera = self.ship.position
        self.shake = 0.0
        self.tick_count = 0
        self._outbox: List[dict] = []
        self._running = False
        self._event_handlers: List[Callable[[dict], Awaitable[None]]] = []

        self.computer.on_event(self._emit_event)
        self._register_mode_hooks()

    def _register_mode_hooks(self) -> None:
        modes = self.modes
        modes.on_reset(GameMode.ARCADE, lambda: self.arcade.reset(self.config.width, self.config.height))
        modes.on_reset(GameMode.RAIDEN, lambda: self.raiden.reset(self.config.width, self.config.height))
        modes.on_reset(GameMode.ORBIT, self.orbit.reset)
        modes.on_leave(GameMode.SOLAR, self._leave_solar)
        modes.on_leave(GameMode.ARCADE, lambda: self._save_score("arcade", self.arcade.score))
        modes.on_leave(GameMode.RAIDEN, lambda: self._save_score("raiden", self.raiden.state.score))

    def _leave_solar(self) -> None:
        self.autopilot.disengage()
        self.computer.cancel()
        # Coming back re-triggers the scan for whatever is nearby
        self.kinematics.closest_body = None
        self.input.clear()

    def _save_score(self, game: str, score: int) -> None:
        if self.store.save_high_score(game, score):
            self.high_scores[game] = score

    # ------------------------------------------------------------
    # Events
    # ------------------------------------------------------------

    def on_event(self, handler: Callable[[dict], Awaitable[None]]) -> None:
        """Register an event handler (for WebSocket broadcast, logging, etc)."""
        self._event_handlers.append(handler)

    async def _emit_event(self, event: dict) -> None:
        for handler in self._event_handlers:
            try:
                await handler(event)
            except Exception as e:
                logger.error(f"Event handler error: {e}")

    # ------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------

    @property
    def mode(self) -> GameMode:
        return self.modes.mode

    @property
    def ship(self) -> Ship:
        return self.kinematics.ship

    def enter_mode(self, mode: GameMode) -> None:
        self.modes.enter_mode(GameMode(mode))

    def exit_mode(self) -> None:
        self.modes.exit_mode()

    def reset_mode(self, mode: GameMode) -> None:
        self.modes.reset(GameMode(mode))

    def set_viewport(self, width: float, height: float) -> None:
        if math.isfinite(width) and math.isfinite(height) and width > 0 and height > 0:
            self.config.width = width
            self.config.height = height

    def engage_autopilot(self, target: str) -> bool:
        """Fly to a body by name. False if no such body."""
        if find_body(self.bodies, target) is None:
            return False
        self.autopilot.engage(target)
        logger.info(f"Autopilot engaged: {target}")
        return True

    def disengage_autopilot(self) -> None:
        if self.autopilot.active:
            logger.info("Autopilot disengaged")
        self.autopilot.disengage()

    def fire(self) -> bool:
        """One-shot fire request (touch button). True if a shot went out."""
        if self.mode == GameMode.ARCADE:
            return self.arcade.fire_bullet() is not None
        if self.mode == GameMode.RAIDEN:
            player = self.raiden.state.player
            if self.raiden.state.game_over or player.cooldown > 0:
                return False
            return self.raiden.fire() > 0
        return False

    # ------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------

    def _step_solar(self) -> None:
        ship = self.ship
        intent = self.input.intent(ship.position)

        if intent.active and self.autopilot.active:
            # Manual input always wins
            self.disengage_autopilot()

        if intent.active:
            self.kinematics.steer(intent)
        else:
            command = self.autopilot.compute(ship, self.bodies)
            if command is not None:
                self.kinematics.apply(command)
            else:
                self.kinematics.coast()

        for body in self.bodies:
            body.advance()
        for roid in self.belt:
            roid.advance()

        self.kinematics.integrate(idle=not intent.active and not self.autopilot.active)

        self.camera = self.camera + (ship.position - self.camera) * CAMERA_EASE

        if self.kinematics.scan(self.bodies):
            closest = self.kinematics.closest_body
            self._outbox.append({"type": "proximity", "body": closest})
            self.computer.on_proximity_change(closest)

    def _step_arcade(self) -> None:
        arcade = self.arcade
        intent = self.input.intent(arcade.ship.position)
        arcade.steer(intent)
        if self.input.fire_requested:
            arcade.fire_bullet()

        result = arcade.update(self.config.width, self.config.height)
        if result.score_gain > 0:
            self.shake = SHAKE_ON_SCORE
        if result.collision and not arcade.game_over:
            arcade.end_game()
            self.shake = SHAKE_ON_CRASH
            self._save_score("arcade", arcade.score)
            self._outbox.append({"type": "game_over", "game": "arcade", "score": arcade.score})

    def _step_raiden(self) -> None:
        raiden = self.raiden
        was_over = raiden.state.game_over
        player = raiden.state.player
        intent = self.input.intent(Vec2(player.x, player.y))
        should_shoot = self.input.fire_requested or intent.magnitude > RAIDEN_AUTOFIRE_THRESHOLD

        result = raiden.update(intent, should_shoot, self.config.width, self.config.height)
        if result.game_over and not was_over:
            self._save_score("raiden", result.score)
            self._outbox.append({"type": "game_over", "game": "raiden", "score": result.score})

    def step(self) -> dict:
        """Advance the active mode by one tick and return its snapshot."""
        self.tick_count += 1
        mode = self.modes.mode
        if mode == GameMode.SOLAR:
            self._step_solar()
        elif mode == GameMode.ARCADE:
            self._step_arcade()
        elif mode == GameMode.ORBIT:
            self.orbit.tick()
        elif mode == GameMode.RAIDEN:
            self._step_raiden()

        snapshot = self.snapshot(
            include_hud=self.tick_count % self.config.hud_every == 0,
            drain_cues=True,
        )

        # Shake decays after it has been rendered once
        if self.shake > SHAKE_FLOOR:
            self.shake *= SHAKE_DECAY
        else:
            self.shake = 0.0
        return snapshot

    async def tick(self) -> None:
        snapshot = self.step()
        self.computer.start_pending()
        events, self._outbox = self._outbox, []
        for event in events:
            await self._emit_event(event)
        await self._emit_event(snapshot)

    async def run(self) -> None:
        """
        Tick forever (until cancelled or stop() is called).

        Paced against the wall clock when real_time is set.
        """
        self._running = True
        wall_start = time.monotonic()
        start_tick = self.tick_count
        logger.info("Game loop started")

        try:
            while self._running:
                await self.tick()

                if self.config.real_time:
                    expected_wall = (self.tick_count - start_tick) * self.config.dt
                    actual_wall = time.monotonic() - wall_start
                    sleep_time = expected_wall - actual_wall
                    if sleep_time > 0:
                        await asyncio.sleep(sleep_time)
                else:
                    # Still yield so websocket handlers get a turn
                    await asyncio.sleep(0)

        except asyncio.CancelledError:
            self._running = False
            self.computer.cancel()
            await asyncio.shield(self._emit_event({
                "type": "stopped",
                "ts": time.time(),
                "tick": self.tick_count,
            }))
            raise
        finally:
            logger.info(f"Game loop stopped at tick {self.tick_count}")

    def stop(self) -> None:
        self._running = False

    # ------------------------------------------------------------
    # Snapshot projection
    # ------------------------------------------------------------

    def scene(self) -> dict:
        mode = self.modes.mode
        if mode == GameMode.ARCADE:
            return self.arcade.to_dict()
        if mode == GameMode.ORBIT:
            return self.orbit.to_dict()
        if mode == GameMode.RAIDEN:
            return self.raiden.to_dict()
        return {
            "ship": self.ship.to_state_dict(),
            "bodies": [b.to_state_dict() for b in self.bodies],
            "belt": [a.to_state_dict() for a in self.belt],
            "autopilot": self.autopilot.to_dict(),
            "closest_body": self.kinematics.closest_body,
        }

    def hud(self) -> Dict[str, object]:
        """Throttled presentation state for the overlays."""
        player = self.raiden.state.player
        return {
            "fuel": self.ship.fuel,
            "speed": self.ship.speed(),
            "closest_body": self.kinematics.closest_body,
            "autopilot": self.autopilot.to_dict(),
            "computer": {
                "body": self.computer.body,
                "description": self.computer.description,
                "loading": self.computer.loading,
            },
            "arcade": {"score": self.arcade.score, "game_over": self.arcade.game_over},
            "orbit": {"status": self.orbit.status.value, "params": self.orbit.params.to_dict()},
            "raiden": {
                "score": self.raiden.state.score,
                "hp": player.hp,
                "shield": player.shield,
                "weapon_level": player.weapon_level,
                "speed_level": player.speed_level,
                "game_over": self.raiden.state.game_over,
            },
            "high_scores": dict(self.high_scores),
        }

    def snapshot(self, include_hud: bool = True, drain_cues: bool = False) -> dict:
        if drain_cues:
            audio = self.audio.drain()
        else:
            audio = {"cues": list(self.audio.cues), "thrust": self.audio.thrust}
        event = {
            "type": "state",
            "mode": self.modes.mode.value,
            "tick": self.tick_count,
            "scene": self.scene(),
            "camera": self.camera.to_dict(),
            "shake": self.shake,
            "cues": audio["cues"],
            "thrust": audio["thrust"],
        }
        if include_hud:
            event["hud"] = self.hud()
        return event
