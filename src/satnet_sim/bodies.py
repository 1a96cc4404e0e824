"""Dominant bodies of the scene (Sun, Earth, Moon) as plain simulation data."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from satnet_sim.config import DEFAULT_CONFIG, BodyConfig, SimulationConfig
from satnet_sim.orbit import OrbitalElements, OriginFrame, body_orbit_position


@dataclass
class CelestialBody:
    """Body with fixed elements and a position/spin updated every frame.

    ``elements`` carry real-world distances and inclination in degrees, as the
    planetary solver variant expects.
    """

    name: str
    size: float
    elements: OrbitalElements
    tilt_deg: float = 0.0
    rotation_speed: float = 0.0
    position: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=np.float64))
    spin: float = 0.0

    @classmethod
    def from_config(cls, body: BodyConfig) -> CelestialBody:
        """Build a body at the world origin from its configuration."""
        elements = OrbitalElements(
            perigee=body.perigee,
            apogee=body.apogee,
            eccentricity=body.eccentricity,
            inclination=body.inclination_deg,
            period=body.period,
        )
        return cls(
            name=body.name,
            size=body.size,
            elements=elements,
            tilt_deg=body.tilt_deg,
            rotation_speed=body.rotation_speed,
        )

    @property
    def tilt_radians(self) -> float:
        """Axial tilt in radians, negated to the scene's handedness."""
        return -self.tilt_deg * math.pi / 180.0

    def frame(self) -> OriginFrame:
        """This body as the origin of another orbit."""
        return OriginFrame(self.position.copy(), self.size)

    def update(
        self,
        origin: CelestialBody | None,
        time: float,
        time_scale: float,
        config: SimulationConfig = DEFAULT_CONFIG,
    ) -> np.ndarray:
        """Spin by ``rotation_speed * time_scale`` and move along the orbit.

        Parameters:
            origin: Body orbited, or None for a body that stays put.
            time: Simulated time of the frame (clock velocity).
            time_scale: Current clock rate.
            config: Simulation configuration (scale factor).

        Returns:
            The new position.
        """
        self.spin = math.fmod(self.spin + self.rotation_speed * time_scale, 2.0 * math.pi)
        frame = origin.frame() if origin is not None else None
        self.position = body_orbit_position(frame, self, time, config=config)
        return self.position


def build_bodies(config: SimulationConfig = DEFAULT_CONFIG) -> dict[str, CelestialBody]:
    """Sun, Earth and Moon keyed by name, all starting at the world origin."""
    bodies = [
        CelestialBody.from_config(config.sun),
        CelestialBody.from_config(config.earth),
        CelestialBody.from_config(config.moon),
    ]
    return {b.name: b for b in bodies}
