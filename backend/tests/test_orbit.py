"""Tests for the orbit sandbox integrator."""
import math

import pytest

from explorer.orbit import (
    OrbitIntegrator,
    OrbitPreset,
    OrbitStatus,
    Satellite,
    preset_params,
)


def running_at(integrator, x, y, vx=0.0, vy=0.0):
    integrator.state.satellite = Satellite(x=x, y=y, vx=vx, vy=vy)
    integrator.state.status = OrbitStatus.RUNNING


def run_until_terminal(integrator, max_ticks):
    for _ in range(max_ticks):
        if integrator.tick() in (OrbitStatus.CRASHED, OrbitStatus.ESCAPED):
            break
    return integrator.status


class TestLifecycle:
    def test_starts_ready_at_distance(self, rng):
        orbit = OrbitIntegrator(rng=rng)
        assert orbit.status == OrbitStatus.READY
        assert orbit.state.satellite.x == 250.0

    def test_ready_pins_satellite_to_params(self, rng):
        orbit = OrbitIntegrator(rng=rng)
        orbit.set_params(distance=320.0)
        orbit.tick()
        sat = orbit.state.satellite
        assert (sat.x, sat.y, sat.vx, sat.vy) == (320.0, 0.0, 0.0, 0.0)

    def test_partial_param_update(self, rng):
        orbit = OrbitIntegrator(rng=rng)
        orbit.set_params(speed=4.5)
        assert orbit.params.to_dict() == {"distance": 250.0, "speed": 4.5, "angle": 0.0}

    def test_launch_only_from_ready(self, rng, audio):
        orbit = OrbitIntegrator(rng=rng, audio=audio)
        assert orbit.launch() is True
        assert orbit.status == OrbitStatus.RUNNING
        assert orbit.launch() is False
        assert audio.cues == ["laser"]

    def test_launch_angle(self, rng):
        orbit = OrbitIntegrator(rng=rng)
        orbit.set_params(speed=2.0, angle=90.0)
        orbit.launch()
        sat = orbit.state.satellite
        assert sat.vx == pytest.approx(2.0)
        assert sat.vy == pytest.approx(0.0, abs=1e-9)

    def test_crash_from_rest(self, rng, audio):
        orbit = OrbitIntegrator(rng=rng, audio=audio)
        running_at(orbit, 40.0, 0.0)
        assert orbit.tick() == OrbitStatus.CRASHED
        assert audio.cues == ["explosion"]

    def test_escape_beyond_radius(self, rng):
        orbit = OrbitIntegrator(rng=rng)
        running_at(orbit, 5001.0, 0.0)
        assert orbit.tick() == OrbitStatus.ESCAPED

    def test_terminal_until_reset(self, rng):
        orbit = OrbitIntegrator(rng=rng)
        running_at(orbit, 40.0, 0.0)
        orbit.tick()
        for _ in range(10):
            assert orbit.tick() == OrbitStatus.CRASHED
        assert orbit.launch() is False
        orbit.reset()
        assert orbit.status == OrbitStatus.READY
        assert orbit.launch() is True

    def test_semi_implicit_step(self, rng):
        orbit = OrbitIntegrator(rng=rng)
        running_at(orbit, 300.0, 0.0, vx=0.0, vy=2.0)
        orbit.tick()
        sat = orbit.state.satellite
        accel = 1800.0 / (300.0 ** 2)
        assert sat.vx == pytest.approx(-accel)
        # Position uses the NEW velocity
        assert sat.x == pytest.approx(300.0 - accel)
        assert sat.y == pytest.approx(2.0)

    def test_trail_bounded(self, rng):
        orbit = OrbitIntegrator(rng=rng)
        orbit.apply_preset(OrbitPreset.CIRCULAR)
        orbit.launch()
        for _ in range(1000):
            orbit.tick()
        assert 0 < len(orbit.state.trail) <= 500


class TestPresets:
    def test_values(self):
        circular = preset_params(OrbitPreset.CIRCULAR)
        assert circular.distance == 250.0
        assert circular.speed == pytest.approx(round(math.sqrt(1800 / 250), 2))
        crash = preset_params("crash")
        assert (crash.distance, crash.speed, crash.angle) == (300.0, 1.0, -45.0)

    def test_apply_clears_terminal_state(self, rng):
        orbit = OrbitIntegrator(rng=rng)
        running_at(orbit, 40.0, 0.0)
        orbit.tick()
        orbit.state.trail.append((1.0, 1.0))
        params = orbit.apply_preset(OrbitPreset.ELLIPTICAL)
        assert orbit.status == OrbitStatus.READY
        assert len(orbit.state.trail) == 0
        assert orbit.state.satellite.x == params.distance

    def test_circular_stays_bound(self, rng):
        orbit = OrbitIntegrator(rng=rng)
        orbit.apply_preset(OrbitPreset.CIRCULAR)
        orbit.launch()
        for _ in range(2000):
            orbit.tick()
            assert 240.0 < orbit.state.satellite.radius() < 260.0
        assert orbit.status == OrbitStatus.RUNNING

    def test_escape_preset_escapes(self, rng):
        orbit = OrbitIntegrator(rng=rng)
        orbit.apply_preset(OrbitPreset.ESCAPE)
        orbit.launch()
        assert run_until_terminal(orbit, 10000) == OrbitStatus.ESCAPED

    def test_crash_preset_crashes(self, rng):
        orbit = OrbitIntegrator(rng=rng)
        orbit.apply_preset(OrbitPreset.CRASH)
        orbit.launch()
        assert run_until_terminal(orbit, 3000) == OrbitStatus.CRASHED
