"""Tests for the per-frame simulation driver."""

from __future__ import annotations

import numpy as np
import pytest

from satnet_sim.catalog import SatelliteRecord
from satnet_sim.clock import SimulatedClock
from satnet_sim.config import DEFAULT_CONFIG
from satnet_sim.fleet import SatelliteFleet
from satnet_sim.orbit import body_orbit_position
from satnet_sim.simulation import SolarSystemSimulation
from satnet_sim.time_utils import day_from_ymd


def test_step_moves_moon_and_sun_about_static_earth() -> None:
    """Earth stays at the origin; Moon and Sun sit on their scaled ellipses."""
    sim = SolarSystemSimulation(SimulatedClock(0, 0, 0, 1, 1, 1981, 200))
    state = sim.step(1.0)

    assert state.time_text == '1/1/1981 00:03:20'
    assert state.velocity == 200
    np.testing.assert_array_equal(state.positions['Earth'], [0.0, 0.0, 0.0])

    scale = DEFAULT_CONFIG.scale_factor
    for name, body in (('Moon', DEFAULT_CONFIG.moon), ('Sun', DEFAULT_CONFIG.sun)):
        a = (body.perigee + body.apogee) / 2 * scale
        distance = float(np.linalg.norm(state.positions[name]))
        assert a * (1 - body.eccentricity) - 1e-6 <= distance <= a * (1 + body.eccentricity) + 1e-6

    expected = body_orbit_position(sim.earth.frame(), sim.moon, 200.0)
    np.testing.assert_array_equal(state.positions['Moon'], expected)
    assert state.active_satellites == 0
    assert state.satellite_positions.shape == (0, 3)


def test_step_positions_are_snapshots() -> None:
    """Later frames do not mutate positions reported earlier."""
    sim = SolarSystemSimulation(SimulatedClock(0, 0, 0, 1, 1, 1981, 100000))
    first = sim.step(1.0)
    moon_before = first.positions['Moon'].copy()
    sim.step(1.0)
    np.testing.assert_array_equal(first.positions['Moon'], moon_before)
    assert sim.frame_count == 2


def test_step_with_fleet_counts_active_satellites() -> None:
    """Satellites launched before the simulated date are reported active."""
    records = [
        SatelliteRecord('a', 'Civil', 500.0, 510.0, 0.001, 51.6, 92.0, day_from_ymd(1980, 1, 1), 0.3),
        SatelliteRecord('b', 'Civil', 500.0, 510.0, 0.001, 51.6, 92.0, day_from_ymd(1990, 1, 1), 0.3),
    ]
    sim = SolarSystemSimulation(SimulatedClock(0, 0, 0, 1, 1, 1981, 200), SatelliteFleet(records))
    state = sim.step(1.0 / 60.0)
    assert state.active_satellites == 1
    assert state.satellite_positions.shape == (2, 3)
    assert state.velocity == pytest.approx(200.0 / 60.0)


def test_earth_spin_follows_time_scale() -> None:
    """Bodies spin by rotation_speed * time_scale each frame."""
    sim = SolarSystemSimulation(SimulatedClock(0, 0, 0, 1, 1, 1981, 200))
    sim.step(1.0)
    assert sim.earth.spin == pytest.approx(DEFAULT_CONFIG.earth.rotation_speed * 200)
