"""Kepler-ellipse orbit solver for satellites and the dominant bodies.

One solver serves both orbit flavours used by the scene. A ``SolverPolicy``
selects the mean-motion sign, the Kepler iteration scheme and the
inclination handling:

- ``SATELLITE_POLICY``: Newton-Raphson with a 1e-6 tolerance and at most 100
  iterations; inclination in radians; perigee/apogee measured from the
  origin body's surface.
- ``PLANET_POLICY``: ten fixed-point iterations with no early exit; mean
  motion ``2*pi / -period``; inclination in degrees with a +90 degree bias;
  centre-to-centre distances.

Neither variant raises. Non-convergence returns the last iterate, and a zero
period gives zero mean motion so parking a body at its origin stays finite.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, Sequence

import numpy as np

from satnet_sim.config import DEFAULT_CONFIG, SimulationConfig
from satnet_sim.constants import (
    FIXED_POINT_ITERATIONS,
    NEWTON_MAX_ITERATIONS,
    NEWTON_TOLERANCE,
    PLANET_INCLINATION_BIAS_DEG,
    TWOPI,
)

if TYPE_CHECKING:
    from satnet_sim.bodies import CelestialBody


@dataclass(frozen=True)
class OrbitalElements:
    """Fixed orbital elements of one body.

    Distances are in real-world units (scaled by the solver); period is signed,
    its sign selecting prograde or retrograde motion. Eccentricity must lie in
    [0, 1); it is not validated.
    """

    perigee: float
    apogee: float
    eccentricity: float
    inclination: float
    period: float
    initial_phase: float = 0.0

    @classmethod
    def parked(cls) -> OrbitalElements:
        """All-zero elements used to park a filtered-out body at its origin."""
        return cls(0.0, 0.0, 0.0, 0.0, 0.0, 0.0)


def _zero_vector() -> np.ndarray:
    return np.zeros(3, dtype=np.float64)


@dataclass(frozen=True)
class OriginFrame:
    """Reference body of an orbit: world position and radius."""

    position: np.ndarray = field(default_factory=_zero_vector)
    size: float = 0.0

    @classmethod
    def at_rest(cls) -> OriginFrame:
        """World origin with zero radius."""
        return cls()

    @classmethod
    def of(cls, position: Sequence[float], size: float) -> OriginFrame:
        """Build a frame from any 3-sequence."""
        return cls(np.asarray(position, dtype=np.float64).reshape(3), float(size))


@dataclass(frozen=True)
class SolverPolicy:
    """Numeric conventions of one orbit variant."""

    mean_motion_sign: float = 1.0
    kepler_method: Literal['newton', 'fixed_point'] = 'newton'
    max_iterations: int = NEWTON_MAX_ITERATIONS
    tolerance: float | None = NEWTON_TOLERANCE
    inclination_bias_deg: float | None = None
    add_origin_size: bool = True


SATELLITE_POLICY = SolverPolicy()

PLANET_POLICY = SolverPolicy(
    mean_motion_sign=-1.0,
    kepler_method='fixed_point',
    max_iterations=FIXED_POINT_ITERATIONS,
    tolerance=None,
    inclination_bias_deg=PLANET_INCLINATION_BIAS_DEG,
    add_origin_size=False,
)


def solve_kepler_newton(
    mean_anomaly: float,
    eccentricity: float,
    *,
    tolerance: float | None = NEWTON_TOLERANCE,
    max_iterations: int = NEWTON_MAX_ITERATIONS,
) -> float:
    """Eccentric anomaly from ``E - e*sin(E) = M`` by Newton-Raphson.

    Starts from ``E = M``. A step smaller than ``tolerance`` ends the loop
    before it is applied.

    Parameters:
        mean_anomaly: M (radians).
        eccentricity: e in [0, 1).
        tolerance: Convergence threshold on the step; None never exits early.
        max_iterations: Iteration cap.

    Returns:
        Eccentric anomaly E (radians), last iterate if not converged.
    """
    ecc_anomaly = mean_anomaly
    for _ in range(max_iterations):
        delta = (ecc_anomaly - eccentricity * math.sin(ecc_anomaly) - mean_anomaly) / (
            1.0 - eccentricity * math.cos(ecc_anomaly)
        )
        if tolerance is not None and abs(delta) < tolerance:
            break
        ecc_anomaly -= delta
    return ecc_anomaly


def solve_kepler_fixed_point(
    mean_anomaly: float,
    eccentricity: float,
    iterations: int = FIXED_POINT_ITERATIONS,
) -> float:
    """Eccentric anomaly by a fixed number of ``E = M + e*sin(E)`` iterations."""
    ecc_anomaly = mean_anomaly
    for _ in range(iterations):
        ecc_anomaly = mean_anomaly + eccentricity * math.sin(ecc_anomaly)
    return ecc_anomaly


class OrbitSolver:
    """Stateless position solver: (origin, elements, time) -> world vector."""

    def __init__(
        self,
        config: SimulationConfig = DEFAULT_CONFIG,
        policy: SolverPolicy = SATELLITE_POLICY,
    ) -> None:
        self.config = config
        self.policy = policy

    def eccentric_anomaly(self, mean_anomaly: float, eccentricity: float) -> float:
        """Solve Kepler's equation with this solver's iteration scheme."""
        policy = self.policy
        if policy.kepler_method == 'fixed_point':
            return solve_kepler_fixed_point(mean_anomaly, eccentricity, policy.max_iterations)
        return solve_kepler_newton(
            mean_anomaly,
            eccentricity,
            tolerance=policy.tolerance,
            max_iterations=policy.max_iterations,
        )

    def inclination_radians(self, inclination: float) -> float:
        """Inclination as used in the rotation; biased degrees for planets."""
        bias = self.policy.inclination_bias_deg
        if bias is None:
            return inclination
        return math.radians(inclination + bias)

    def solve(self, origin: OriginFrame, elements: OrbitalElements, time: float) -> np.ndarray:
        """Position of a body at simulated time ``time``.

        Parameters:
            origin: Body the orbit is computed about.
            elements: Orbital elements of the orbiting body.
            time: Elapsed simulated seconds (the clock velocity).

        Returns:
            World-space position, numpy float64 array of 3.
        """
        policy = self.policy
        scale = self.config.scale_factor
        offset = origin.size if policy.add_origin_size else 0.0
        perigee = elements.perigee * scale + offset
        apogee = elements.apogee * scale + offset
        ecc = elements.eccentricity
        incl = self.inclination_radians(elements.inclination)

        semi_major = (perigee + apogee) / 2.0
        if elements.period == 0:
            mean_motion = 0.0
        else:
            mean_motion = TWOPI / (policy.mean_motion_sign * elements.period)
        mean_anomaly = mean_motion * time + elements.initial_phase

        ecc_anomaly = self.eccentric_anomaly(mean_anomaly, ecc)
        true_anomaly = 2.0 * math.atan(
            math.sqrt((1.0 + ecc) / (1.0 - ecc)) * math.tan(ecc_anomaly / 2.0)
        )
        radius = semi_major * (1.0 - ecc * math.cos(ecc_anomaly))

        x = radius * math.cos(true_anomaly)
        y = radius * math.sin(true_anomaly) * math.cos(incl)
        z = radius * math.sin(true_anomaly) * math.sin(incl)
        return np.array([x, y, z], dtype=np.float64) + origin.position


def orbit_position(
    origin: OriginFrame,
    perigee: float,
    apogee: float,
    eccentricity: float,
    inclination: float,
    period: float,
    time: float,
    initial_phase: float = 0.0,
    *,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> np.ndarray:
    """Satellite-variant position from flat arguments (inclination in radians)."""
    elements = OrbitalElements(perigee, apogee, eccentricity, inclination, period, initial_phase)
    return OrbitSolver(config, SATELLITE_POLICY).solve(origin, elements, time)


def body_orbit_position(
    origin: OriginFrame | None,
    body: CelestialBody,
    time: float,
    *,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> np.ndarray:
    """Planet-variant position of a dominant body.

    A body without an origin does not move; its current position is returned.
    """
    if origin is None:
        return body.position.copy()
    return OrbitSolver(config, PLANET_POLICY).solve(origin, body.elements, time)
