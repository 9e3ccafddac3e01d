"""Tests for the host engine: mode dispatch, hooks, snapshots."""
import asyncio
import math
import random

import pytest

from explorer.computer import ComputerConfig
from explorer.engine import EngineConfig, GameEngine
from explorer.modes import GameMode
from explorer.orbit import OrbitStatus
from explorer.vector import Vec2


@pytest.fixture
def engine(store):
    return GameEngine(
        EngineConfig(real_time=False, width=800, height=600),
        store=store,
        computer_config=ComputerConfig(scan_delay=0.0),
        rng=random.Random(7),
    )


def park_ship_far(engine):
    engine.ship.position = Vec2(5000.0, 5000.0)
    engine.ship.velocity = Vec2(0.0, 0.0)


class TestSolar:
    def test_manual_input_disengages_autopilot(self, engine):
        assert engine.engage_autopilot("Mars")
        engine.input.key_down("w")
        engine.step()
        assert not engine.autopilot.active

    def test_unknown_autopilot_target(self, engine):
        assert engine.engage_autopilot("Vulcan") is False
        assert not engine.autopilot.active

    def test_autopilot_flies_the_ship(self, engine):
        park_ship_far(engine)
        engine.ship.rotation = -3 * math.pi / 4
        engine.engage_autopilot("Sun")
        engine.step()
        assert engine.autopilot.phase is not None
        assert engine.ship.velocity.x < 0
        assert engine.ship.velocity.y < 0

    def test_bodies_advance(self, engine):
        earth = next(b for b in engine.bodies if b.name == "Earth")
        angle = earth.angle
        engine.step()
        assert earth.angle == pytest.approx(angle + 0.01)

    def test_camera_eases(self, engine):
        engine.camera = Vec2(0.0, 0.0)
        park_ship_far(engine)
        engine.step()
        assert engine.camera.x == pytest.approx(500.0, rel=1e-3)

    def test_proximity_queues_scan(self, engine, store):
        engine.ship.position = Vec2(0.0, 0.0)
        engine.ship.velocity = Vec2(0.0, 0.0)
        engine.step()
        assert engine.kinematics.closest_body == "Sun"
        assert engine.computer.loading
        assert engine.computer.pending == "Sun"
        assert store.has_visited("Sun")

    def test_async_tick_emits_events(self, engine):
        engine.ship.position = Vec2(0.0, 0.0)
        engine.ship.velocity = Vec2(0.0, 0.0)
        events = []

        async def handler(event):
            events.append(event)

        engine.on_event(handler)

        async def scenario():
            await engine.tick()
            await asyncio.sleep(0.05)

        asyncio.run(scenario())
        types = [e["type"] for e in events]
        assert types[:2] == ["proximity", "state"]
        assert "description" in types
        assert events[0]["body"] == "Sun"

    def test_fuel_bounded(self, engine):
        engine.input.key_down("d")
        for _ in range(1200):
            engine.step()
            assert 0.0 <= engine.ship.fuel <= 100.0


class TestModes:
    def test_enter_arcade(self, engine):
        engine.engage_autopilot("Mars")
        engine.enter_mode(GameMode.ARCADE)
        assert engine.mode == GameMode.ARCADE
        assert len(engine.arcade.asteroids) == 5
        assert not engine.autopilot.active

    def test_idle_modes_frozen(self, engine):
        before = engine.ship.position
        earth = next(b for b in engine.bodies if b.name == "Earth")
        angle = earth.angle
        engine.enter_mode(GameMode.ORBIT)
        for _ in range(10):
            engine.step()
        assert engine.ship.position == before
        assert earth.angle == angle

    def test_exit_resumes_solar(self, engine):
        engine.step()
        position = engine.ship.position
        engine.enter_mode(GameMode.RAIDEN)
        engine.step()
        engine.exit_mode()
        assert engine.mode == GameMode.SOLAR
        assert engine.ship.position == position

    def test_leaving_saves_high_score(self, engine, store):
        engine.enter_mode(GameMode.ARCADE)
        engine.arcade.score = 700
        engine.exit_mode()
        assert store.get_high_scores()["arcade"] == 700
        assert engine.high_scores["arcade"] == 700

    def test_raiden_game_over_saves_score(self, engine, store):
        engine.enter_mode(GameMode.RAIDEN)
        engine.raiden.state.score = 120
        engine.raiden.take_damage(500)
        # take_damage already flipped the flag; the engine saves on exit
        engine.exit_mode()
        assert store.get_high_scores()["raiden"] == 120

    def test_arcade_crash_ends_game(self, engine):
        engine.enter_mode(GameMode.ARCADE)
        ship = engine.arcade.ship.position
        roid = engine.arcade.create_asteroid(ship.x, ship.y, 1)
        roid.vx = roid.vy = 0.0
        snapshot = engine.step()
        assert engine.arcade.game_over
        assert snapshot["shake"] == 15.0
        assert "explosion" in snapshot["cues"]
        assert engine.shake == pytest.approx(13.5)

    def test_orbit_ticks(self, engine):
        engine.enter_mode(GameMode.ORBIT)
        engine.orbit.launch()
        engine.step()
        assert engine.orbit.status == OrbitStatus.RUNNING
        assert engine.orbit.state.satellite.y > 0

    def test_raiden_autofires_while_moving(self, engine):
        engine.enter_mode(GameMode.RAIDEN)
        engine.input.key_down("a")
        snapshot = engine.step()
        assert len(engine.raiden.state.bullets) == 1
        assert "laser" in snapshot["cues"]

    def test_fire_button(self, engine):
        assert engine.fire() is False
        engine.enter_mode(GameMode.ARCADE)
        assert engine.fire() is True
        assert len(engine.arcade.bullets) == 1


class TestSnapshot:
    def test_shape(self, engine):
        snapshot = engine.step()
        assert snapshot["type"] == "state"
        assert snapshot["mode"] == "solar"
        assert snapshot["tick"] == 1
        assert len(snapshot["scene"]["bodies"]) == 14
        assert "camera" in snapshot and "shake" in snapshot

    def test_hud_throttled(self, engine):
        snapshots = [engine.step() for _ in range(10)]
        with_hud = [s["tick"] for s in snapshots if "hud" in s]
        assert with_hud == [5, 10]

    def test_cues_drained_once(self, engine):
        engine.enter_mode(GameMode.ARCADE)
        engine.input.key_down(" ")
        first = engine.step()
        engine.input.key_up(" ")
        second = engine.step()
        assert "laser" in first["cues"]
        assert "laser" not in second["cues"]

    def test_state_does_not_drain(self, engine):
        engine.audio.play_alert()
        assert engine.snapshot(drain_cues=False)["cues"] == ["alert"]
        assert engine.audio.cues == ["alert"]

    def test_scene_follows_mode(self, engine):
        engine.enter_mode(GameMode.ORBIT)
        scene = engine.step()["scene"]
        assert scene["status"] == "ready"
        assert scene["params"]["distance"] == 250.0

    def test_viewport(self, engine):
        engine.set_viewport(1024, 768)
        engine.enter_mode(GameMode.ARCADE)
        assert engine.arcade.ship.position == Vec2(512, 384)
        engine.set_viewport(0, 0)
        assert engine.config.width == 1024
        engine.set_viewport(float("nan"), 768)
        engine.set_viewport(1024, float("inf"))
        assert (engine.config.width, engine.config.height) == (1024, 768)


class TestRunLoop:
    def test_run_until_cancelled(self, engine):
        events = []

        async def handler(event):
            events.append(event["type"])

        engine.on_event(handler)

        async def scenario():
            task = asyncio.create_task(engine.run())
            await asyncio.sleep(0.05)
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        asyncio.run(scenario())
        assert engine.tick_count > 0
        assert events[-1] == "stopped"

    def test_stop(self, engine):
        async def stopper(event):
            if event["type"] == "state" and event["tick"] >= 3:
                engine.stop()

        engine.on_event(stopper)
        asyncio.run(engine.run())
        assert engine.tick_count == 3
