"""Tests for the asteroids minigame."""
import math

import pytest

from explorer.arcade import (
    ArcadeEngine,
    AsteroidTier,
    Bullet,
    wrap,
)
from explorer.controls import Intent
from explorer.vector import Vec2


def still_asteroid(engine, x, y, tier):
    roid = engine.create_asteroid(x, y, tier)
    roid.vx = 0.0
    roid.vy = 0.0
    return roid


def still_bullet(x, y):
    return Bullet(id=999, x=x, y=y, vx=0.0, vy=0.0, life=60)


class TestWrap:
    def test_exact_edge(self):
        assert wrap(-1, 800) == 800
        assert wrap(801, 800) == 0
        assert wrap(400, 800) == 400

    def test_margin(self):
        assert wrap(-40, 800, 50) == -40
        assert wrap(-60, 800, 50) == 850
        assert wrap(860, 800, 50) == -50


class TestArcadeEngine:
    def test_reset(self, rng):
        engine = ArcadeEngine(rng=rng)
        engine.reset(800, 600)
        assert len(engine.asteroids) == 5
        assert all(a.tier == AsteroidTier.LARGE for a in engine.asteroids)
        assert engine.ship.position == Vec2(400, 300)
        assert engine.ship.rotation == pytest.approx(-math.pi / 2)
        assert engine.score == 0
        assert not engine.game_over

    def test_spawns_avoid_safe_zone(self, rng):
        engine = ArcadeEngine(rng=rng)
        engine.spawn_asteroids(50, 800, 600)
        for roid in engine.asteroids:
            assert not (abs(roid.x - 400) < 150 and abs(roid.y - 300) < 150)

    def test_asteroid_wraps_with_margin(self, rng):
        engine = ArcadeEngine(rng=rng)
        roid = still_asteroid(engine, -60.0, 300.0, AsteroidTier.LARGE)
        engine.update(800, 600)
        assert roid.x == 850

    @pytest.mark.parametrize("tier,child", [
        (AsteroidTier.LARGE, AsteroidTier.MEDIUM),
        (AsteroidTier.MEDIUM, AsteroidTier.SMALL),
    ])
    def test_split_into_two(self, rng, tier, child):
        engine = ArcadeEngine(rng=rng)
        still_asteroid(engine, 100.0, 100.0, tier)
        engine.bullets.append(still_bullet(100.0, 100.0))
        result = engine.update(800, 600)
        assert result.destroyed == 1
        assert result.score_gain == tier.score
        assert len(engine.asteroids) == 2
        for roid in engine.asteroids:
            assert roid.tier == child
            assert (roid.x, roid.y) == (100.0, 100.0)
        assert engine.bullets == []

    def test_small_leaves_nothing_then_new_wave(self, rng):
        engine = ArcadeEngine(rng=rng)
        still_asteroid(engine, 100.0, 100.0, AsteroidTier.SMALL)
        engine.bullets.append(still_bullet(100.0, 100.0))
        result = engine.update(800, 600)
        assert result.score_gain == 100
        assert engine.score == 100
        # Field emptied -> fresh wave of large rocks
        assert len(engine.asteroids) == 5
        assert all(a.tier == AsteroidTier.LARGE for a in engine.asteroids)

    def test_wave_scales_with_score(self, rng):
        engine = ArcadeEngine(rng=rng)
        engine.score = 2000
        engine.update(800, 600)
        assert len(engine.asteroids) == 7

    def test_one_rock_per_bullet(self, rng):
        engine = ArcadeEngine(rng=rng)
        older = still_asteroid(engine, 100.0, 100.0, AsteroidTier.SMALL)
        still_asteroid(engine, 102.0, 100.0, AsteroidTier.SMALL)
        engine.bullets.append(still_bullet(101.0, 100.0))
        result = engine.update(800, 600)
        assert result.destroyed == 1
        # The newest overlapping rock takes the hit
        assert engine.asteroids == [older]

    def test_collision_reported_not_applied(self, rng):
        engine = ArcadeEngine(rng=rng)
        engine.ship.position = Vec2(300.0, 300.0)
        still_asteroid(engine, 310.0, 300.0, AsteroidTier.SMALL)
        result = engine.update(800, 600)
        assert result.collision
        assert not engine.game_over

    def test_game_over_freezes_ship(self, rng):
        engine = ArcadeEngine(rng=rng)
        engine.ship.position = Vec2(300.0, 300.0)
        engine.ship.velocity = Vec2(5.0, 0.0)
        still_asteroid(engine, 10.0, 10.0, AsteroidTier.LARGE)
        engine.end_game()
        engine.update(800, 600)
        assert engine.ship.position == Vec2(300.0, 300.0)
        assert engine.fire_bullet(now=100.0) is None

    def test_no_wave_after_game_over(self, rng):
        engine = ArcadeEngine(rng=rng)
        engine.end_game()
        engine.update(800, 600)
        assert engine.asteroids == []


class TestFiring:
    def test_rate_limited(self, rng, audio):
        engine = ArcadeEngine(rng=rng, audio=audio)
        assert engine.fire_bullet(now=10.0) is not None
        assert engine.fire_bullet(now=10.1) is None
        assert engine.fire_bullet(now=10.3) is not None
        assert audio.cues == ["laser", "laser"]

    def test_injected_clock(self, rng):
        ticks = iter([0.0, 0.1, 0.5])
        engine = ArcadeEngine(rng=rng, clock=lambda: next(ticks))
        assert engine.fire_bullet() is not None
        assert engine.fire_bullet() is None
        assert engine.fire_bullet() is not None

    def test_bullet_inherits_ship_velocity(self, rng):
        engine = ArcadeEngine(rng=rng)
        engine.ship.position = Vec2(100.0, 100.0)
        engine.ship.rotation = 0.0
        engine.ship.velocity = Vec2(1.0, 0.0)
        bullet = engine.fire_bullet(now=0.0)
        assert bullet.x == pytest.approx(115.0)
        assert bullet.vx == pytest.approx(11.0)
        assert bullet.life == 60

    def test_bullet_expires(self, rng):
        engine = ArcadeEngine(rng=rng)
        still_asteroid(engine, 700.0, 500.0, AsteroidTier.SMALL)
        engine.bullets.append(Bullet(id=1, x=10.0, y=10.0, vx=0.0, vy=0.0, life=2))
        engine.update(800, 600)
        assert len(engine.bullets) == 1
        engine.update(800, 600)
        assert engine.bullets == []


class TestSteering:
    def test_thrust_without_fuel_limit(self, rng):
        engine = ArcadeEngine(rng=rng)
        engine.ship.rotation = 0.0
        engine.steer(Intent(1.0, 0.0))
        assert engine.ship.thrusting
        assert engine.ship.velocity.x == pytest.approx(0.2)

    def test_idle_stops_thrusting(self, rng):
        engine = ArcadeEngine(rng=rng)
        engine.steer(Intent(1.0, 0.0))
        engine.steer(Intent(0.0, 0.0))
        assert not engine.ship.thrusting
