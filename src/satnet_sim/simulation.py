"""Per-frame driver: advance the clock, then move the Moon, Earth, Sun and satellites."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from satnet_sim.bodies import CelestialBody, build_bodies
from satnet_sim.clock import SimulatedClock
from satnet_sim.config import DEFAULT_CONFIG, SimulationConfig
from satnet_sim.fleet import SatelliteFleet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameState:
    """What the renderer needs for one frame."""

    time_text: str
    velocity: float
    positions: dict[str, np.ndarray]
    satellite_positions: np.ndarray = field(
        default_factory=lambda: np.zeros((0, 3), dtype=np.float64)
    )
    active_satellites: int = 0


class SolarSystemSimulation:
    """Earth-centred scene: the Earth stays put, the Moon and Sun orbit it."""

    def __init__(
        self,
        clock: SimulatedClock,
        fleet: SatelliteFleet | None = None,
        config: SimulationConfig = DEFAULT_CONFIG,
        workers: int = 1,
    ) -> None:
        self.config = config
        self.clock = clock
        self.fleet = fleet
        self.workers = workers
        self.bodies = build_bodies(config)
        self.frame_count = 0

    @property
    def earth(self) -> CelestialBody:
        return self.bodies[self.config.earth.name]

    @property
    def moon(self) -> CelestialBody:
        return self.bodies[self.config.moon.name]

    @property
    def sun(self) -> CelestialBody:
        return self.bodies[self.config.sun.name]

    def step(self, frame_delta: float) -> FrameState:
        """Advance one frame of ``frame_delta`` real seconds.

        Parameters:
            frame_delta: Real time since the previous frame (seconds).

        Returns:
            FrameState for the new simulated instant.
        """
        clock = self.clock
        clock.update(frame_delta)
        time = clock.snapshot()
        scale = clock.time_scale

        self.moon.update(self.earth, time, scale, self.config)
        self.earth.update(None, time, scale, self.config)
        self.sun.update(self.earth, time, scale, self.config)

        if self.fleet is not None:
            sat_positions = self.fleet.update(self.earth, clock, workers=self.workers)
            active = self.fleet.active_count
        else:
            sat_positions = np.zeros((0, 3), dtype=np.float64)
            active = 0

        self.frame_count += 1
        state = FrameState(
            time_text=clock.get_formatted_time(True),
            velocity=time,
            positions={name: body.position.copy() for name, body in self.bodies.items()},
            satellite_positions=sat_positions,
            active_satellites=active,
        )
        logger.debug('Frame %d at %s (%d satellites active)', self.frame_count, state.time_text, active)
        return state
