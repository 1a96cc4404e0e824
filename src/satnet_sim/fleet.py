"""Per-frame positions of the catalog satellites about their host body."""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Sequence

import numpy as np

from satnet_sim.catalog import SatelliteRecord, user_prefix
from satnet_sim.config import DEFAULT_CONFIG, SimulationConfig
from satnet_sim.constants import SECONDS_PER_MINUTE
from satnet_sim.orbit import SATELLITE_POLICY, OrbitalElements, OrbitSolver, OriginFrame

if TYPE_CHECKING:
    from satnet_sim.bodies import CelestialBody
    from satnet_sim.clock import SimulatedClock

logger = logging.getLogger(__name__)

ALL_USERS = 'all'
_PARKED = OrbitalElements.parked()


def adjust_inclination(inclination_deg: float, host_tilt_radians: float) -> float:
    """Catalog inclination (degrees) to the solver's radians on a tilted host."""
    return math.radians(inclination_deg + 90.0) + host_tilt_radians


class SatelliteFleet:
    """All catalog satellites, filtered by launch date and user category."""

    def __init__(
        self,
        satellites: Sequence[SatelliteRecord],
        config: SimulationConfig = DEFAULT_CONFIG,
    ) -> None:
        self.satellites = list(satellites)
        self.config = config
        self.solver = OrbitSolver(config, SATELLITE_POLICY)
        self.filter = ALL_USERS
        self.active_count = 0
        self.positions = np.zeros((len(self.satellites), 3), dtype=np.float64)

    def __len__(self) -> int:
        return len(self.satellites)

    def update_filter(self, label: str) -> None:
        """Show only one user category ('ALL', 'MILITARY', 'civil', ...)."""
        self.filter = user_prefix(label)
        logger.debug('Satellite filter set to %r', self.filter)

    def is_active(self, sat: SatelliteRecord, current_day: int) -> bool:
        """Launched by ``current_day`` and passing the user filter."""
        if sat.launch_day > current_day:
            return False
        return self.filter == ALL_USERS or sat.user_category == self.filter

    def _elements(self, sat: SatelliteRecord, host_tilt: float) -> OrbitalElements:
        return OrbitalElements(
            perigee=sat.perigee,
            apogee=sat.apogee,
            eccentricity=sat.eccentricity,
            inclination=adjust_inclination(sat.inclination, host_tilt),
            period=-sat.period * SECONDS_PER_MINUTE,
            initial_phase=sat.initial_phase,
        )

    def _solve_range(
        self,
        start: int,
        stop: int,
        origin: OriginFrame,
        host_tilt: float,
        time: float,
        current_day: int,
        out: np.ndarray,
    ) -> int:
        active = 0
        for i in range(start, stop):
            sat = self.satellites[i]
            if self.is_active(sat, current_day):
                out[i] = self.solver.solve(origin, self._elements(sat, host_tilt), time)
                active += 1
            else:
                out[i] = self.solver.solve(origin, _PARKED, 0.0)
        return active

    def update(
        self,
        host: CelestialBody,
        clock: SimulatedClock,
        workers: int = 1,
        chunk_size: int = 512,
    ) -> np.ndarray:
        """Recompute every satellite position for the current frame.

        Satellites not yet launched, or outside the user filter, are parked
        at the host. The clock is read once, so every satellite of the frame
        sees the same simulated time.

        Parameters:
            host: Body the satellites orbit (the Earth).
            clock: Simulated clock.
            workers: Threads used to split the fleet; 1 computes inline.
            chunk_size: Satellites per task when ``workers > 1``.

        Returns:
            (N, 3) array of positions, NaN coordinates replaced by 0.
        """
        time = clock.snapshot()
        current_day = clock.current_day()
        origin = host.frame()
        host_tilt = host.tilt_radians
        out = np.zeros((len(self.satellites), 3), dtype=np.float64)
        n = len(self.satellites)

        if workers <= 1 or n <= chunk_size:
            active = self._solve_range(0, n, origin, host_tilt, time, current_day, out)
        else:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = [
                    pool.submit(
                        self._solve_range,
                        start,
                        min(start + chunk_size, n),
                        origin,
                        host_tilt,
                        time,
                        current_day,
                        out,
                    )
                    for start in range(0, n, chunk_size)
                ]
                active = sum(f.result() for f in futures)

        out[np.isnan(out)] = 0.0
        self.positions = out
        self.active_count = active
        return self.positions
