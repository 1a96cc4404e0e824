"""Tests for the Kepler orbit solver (satellite and planetary variants)."""

from __future__ import annotations

import math

import numpy as np
import pytest

from satnet_sim.bodies import CelestialBody
from satnet_sim.config import SimulationConfig
from satnet_sim.orbit import (
    PLANET_POLICY,
    SATELLITE_POLICY,
    OrbitalElements,
    OrbitSolver,
    OriginFrame,
    body_orbit_position,
    orbit_position,
    solve_kepler_fixed_point,
    solve_kepler_newton,
)

UNSCALED = SimulationConfig(scale_factor=1.0)


@pytest.mark.parametrize('ecc', [0.0, 0.01, 0.3, 0.7, 0.95, 0.999])
def test_solve_is_finite_for_closed_orbits(ecc: float) -> None:
    """Every eccentricity in [0, 1) gives a finite vector at many times."""
    solver = OrbitSolver(UNSCALED, SATELLITE_POLICY)
    elements = OrbitalElements(7000.0, 9000.0, ecc, 0.9, 5400.0, 1.3)
    origin = OriginFrame.of((1.0, -2.0, 3.0), 10.0)
    for t in np.linspace(-1e6, 1e6, 37):
        pos = solver.solve(origin, elements, float(t))
        assert pos.shape == (3,)
        assert np.all(np.isfinite(pos))


@pytest.mark.parametrize('ecc', [0.0, 0.125, 0.3, 0.8])
def test_time_zero_is_periapsis(ecc: float) -> None:
    """At t=0 with no phase the body sits at a*(1-e) from the origin."""
    solver = OrbitSolver(UNSCALED, SATELLITE_POLICY)
    elements = OrbitalElements(7000.0, 9000.0, ecc, 0.4, 5400.0)
    pos = solver.solve(OriginFrame.at_rest(), elements, 0.0)
    semi_major = 8000.0
    assert float(np.linalg.norm(pos)) == pytest.approx(semi_major * (1.0 - ecc), abs=1e-6)


def test_solve_is_periodic() -> None:
    """Positions one period apart coincide within the Newton tolerance."""
    solver = OrbitSolver(UNSCALED, SATELLITE_POLICY)
    elements = OrbitalElements(7000.0, 9000.0, 0.2, 1.1, 5400.0, 0.5)
    origin = OriginFrame.of((5.0, 0.0, -5.0), 10.0)
    for t in (0.0, 1234.5, 4000.0, -777.0):
        first = solver.solve(origin, elements, t)
        second = solver.solve(origin, elements, t + elements.period)
        np.testing.assert_allclose(first, second, atol=1e-3)


def test_parked_body_stays_finite_at_host() -> None:
    """The all-zero parking call lands on the host surface without NaN."""
    origin = OriginFrame.of((1.0, 2.0, 3.0), 10.0)
    pos = OrbitSolver(UNSCALED, SATELLITE_POLICY).solve(origin, OrbitalElements.parked(), 0.0)
    np.testing.assert_allclose(pos, [11.0, 2.0, 3.0])


def test_satellite_quarter_period_position() -> None:
    """Prograde quarter turn, zero inclination: the body is on +Y, origin size added."""
    elements = OrbitalElements(100.0, 100.0, 0.0, 0.0, 400.0)
    origin = OriginFrame(size=5.0)
    pos = OrbitSolver(UNSCALED, SATELLITE_POLICY).solve(origin, elements, 100.0)
    np.testing.assert_allclose(pos, [0.0, 105.0, 0.0], atol=1e-9)


def test_planet_quarter_period_position() -> None:
    """Planet variant: negated mean motion, +90 degree bias, no origin size."""
    elements = OrbitalElements(100.0, 100.0, 0.0, 0.0, 400.0)
    origin = OriginFrame(size=5.0)
    pos = OrbitSolver(UNSCALED, PLANET_POLICY).solve(origin, elements, 100.0)
    np.testing.assert_allclose(pos, [0.0, 0.0, -100.0], atol=1e-9)


def test_scale_factor_applies_to_distances() -> None:
    """Distances are multiplied by the configured scale factor before use."""
    elements = OrbitalElements(6371.0, 6371.0, 0.0, 0.0, 400.0)
    config = SimulationConfig(scale_factor=10.0 / 6371.0)
    pos = OrbitSolver(config, SATELLITE_POLICY).solve(OriginFrame.at_rest(), elements, 0.0)
    np.testing.assert_allclose(pos, [10.0, 0.0, 0.0], atol=1e-12)


def test_orbit_position_matches_solver() -> None:
    """Flat-argument entry point equals the object API."""
    origin = OriginFrame.of((3.0, 4.0, 5.0), 10.0)
    expected = OrbitSolver(UNSCALED, SATELLITE_POLICY).solve(
        origin, OrbitalElements(500.0, 800.0, 0.1, 0.7, -6000.0, 2.0), 321.0
    )
    actual = orbit_position(origin, 500.0, 800.0, 0.1, 0.7, -6000.0, 321.0, 2.0, config=UNSCALED)
    np.testing.assert_array_equal(actual, expected)


def test_newton_solves_kepler_equation() -> None:
    """Newton result satisfies E - e*sin(E) = M."""
    for ecc in (0.0, 0.2, 0.5, 0.9):
        for mean in (-2.0, 0.1, 1.0, 3.0):
            ecc_anomaly = solve_kepler_newton(mean, ecc)
            assert ecc_anomaly - ecc * math.sin(ecc_anomaly) == pytest.approx(mean, abs=1e-5)


def test_newton_iteration_cap_returns_last_iterate() -> None:
    """No iterations returns the seed; one iteration returns a single step."""
    assert solve_kepler_newton(1.0, 0.5, max_iterations=0) == 1.0
    one_step = 1.0 - (1.0 - 0.5 * math.sin(1.0) - 1.0) / (1.0 - 0.5 * math.cos(1.0))
    assert solve_kepler_newton(1.0, 0.5, max_iterations=1) == one_step


def test_fixed_point_runs_exact_iteration_count() -> None:
    """Fixed-point scheme always runs its iterations, no early exit."""
    expected = 2.0
    for _ in range(10):
        expected = 2.0 + 0.3 * math.sin(expected)
    assert solve_kepler_fixed_point(2.0, 0.3) == expected
    assert solve_kepler_fixed_point(2.0, 0.3, iterations=0) == 2.0


def test_body_without_origin_keeps_position() -> None:
    """A dominant body with no origin is left where it is."""
    body = CelestialBody(
        name='Earth',
        size=10.0,
        elements=OrbitalElements(1.0, 2.0, 0.01, 7.0, 100.0),
        position=np.array([1.0, 2.0, 3.0]),
    )
    pos = body_orbit_position(None, body, 50.0)
    np.testing.assert_array_equal(pos, [1.0, 2.0, 3.0])
    assert pos is not body.position
