"""Configuration: immutable simulation settings and data paths from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from satnet_sim.constants import (
    DEFAULT_MAX_SATELLITES,
    EARTH_APOGEE,
    EARTH_ECCENTRICITY,
    EARTH_INCLINATION_DEG,
    EARTH_PERIGEE,
    EARTH_PERIOD,
    EARTH_ROTATION_SPEED,
    EARTH_SIZE,
    EARTH_TILT_DEG,
    FLOOR_YEAR,
    LAUNCH_SITE_BAR_HEIGHT,
    LAUNCH_SITE_PROXIMITY_DEG,
    MAX_TIME_SCALE,
    MAX_YEAR,
    MIN_TIME_SCALE,
    MIN_YEAR,
    MOON_APOGEE,
    MOON_ECCENTRICITY,
    MOON_INCLINATION_DEG,
    MOON_PERIGEE,
    MOON_PERIOD,
    MOON_ROTATION_SPEED,
    MOON_SIZE,
    MOON_TILT_DEG,
    REALWORLD_SCALE_FACTOR,
    SUN_ROTATION_SPEED,
    SUN_SIZE,
    SUN_TILT_DEG,
)

DEFAULT_DATA_PATH = './data/'
SATELLITE_CATALOG_NAME = 'Satellite_dataset.tsv'
LAUNCH_SITE_CATALOG_NAME = 'SpaceBase.tsv'


@dataclass(frozen=True)
class ClockConfig:
    """Operating range of the simulated clock."""

    floor_year: int = FLOOR_YEAR
    min_year: int = MIN_YEAR
    max_year: int = MAX_YEAR
    min_time_scale: float = MIN_TIME_SCALE
    max_time_scale: float = MAX_TIME_SCALE


@dataclass(frozen=True)
class BodyConfig:
    """Size, spin and orbit of one of the dominant bodies.

    Distances are real-world kilometres; inclination is in degrees, as the
    planetary solver variant expects.
    """

    name: str
    size: float
    tilt_deg: float
    rotation_speed: float
    perigee: float
    apogee: float
    eccentricity: float
    inclination_deg: float
    period: float


EARTH_CONFIG = BodyConfig(
    name='Earth',
    size=EARTH_SIZE,
    tilt_deg=EARTH_TILT_DEG,
    rotation_speed=EARTH_ROTATION_SPEED,
    perigee=EARTH_PERIGEE,
    apogee=EARTH_APOGEE,
    eccentricity=EARTH_ECCENTRICITY,
    inclination_deg=EARTH_INCLINATION_DEG,
    period=EARTH_PERIOD,
)

MOON_CONFIG = BodyConfig(
    name='Moon',
    size=MOON_SIZE,
    tilt_deg=MOON_TILT_DEG,
    rotation_speed=MOON_ROTATION_SPEED,
    perigee=MOON_PERIGEE,
    apogee=MOON_APOGEE,
    eccentricity=MOON_ECCENTRICITY,
    inclination_deg=MOON_INCLINATION_DEG,
    period=MOON_PERIOD,
)

# The scene is geocentric: the Sun travels the Earth's orbit about the Earth.
SUN_CONFIG = BodyConfig(
    name='Sun',
    size=SUN_SIZE,
    tilt_deg=SUN_TILT_DEG,
    rotation_speed=SUN_ROTATION_SPEED,
    perigee=EARTH_PERIGEE,
    apogee=EARTH_APOGEE,
    eccentricity=EARTH_ECCENTRICITY,
    inclination_deg=EARTH_INCLINATION_DEG,
    period=EARTH_PERIOD,
)


@dataclass(frozen=True)
class SimulationConfig:
    """Everything the solver, clock and bodies need, passed in explicitly."""

    scale_factor: float = REALWORLD_SCALE_FACTOR
    clock: ClockConfig = field(default_factory=ClockConfig)
    earth: BodyConfig = EARTH_CONFIG
    moon: BodyConfig = MOON_CONFIG
    sun: BodyConfig = SUN_CONFIG
    max_satellites: int = DEFAULT_MAX_SATELLITES
    launch_site_proximity_deg: float = LAUNCH_SITE_PROXIMITY_DEG
    launch_site_bar_height: float = LAUNCH_SITE_BAR_HEIGHT


DEFAULT_CONFIG = SimulationConfig()


def get_data_path() -> str:
    """Return catalog directory (SATNET_DATA_PATH env var or default).

    Returns:
        Path string.
    """
    return os.environ.get('SATNET_DATA_PATH', DEFAULT_DATA_PATH)


def get_satellite_catalog_path() -> Path:
    """Return path of the satellite catalog.

    SATNET_SATELLITES overrides the file; otherwise the catalog is looked up
    under the data directory.

    Returns:
        Path to the TSV file (may not exist).
    """
    path = os.environ.get('SATNET_SATELLITES', '').strip()
    if path:
        return Path(path)
    return Path(get_data_path()) / SATELLITE_CATALOG_NAME


def get_launch_site_catalog_path() -> Path:
    """Return path of the launch-site catalog (SATNET_LAUNCH_SITES or data dir)."""
    path = os.environ.get('SATNET_LAUNCH_SITES', '').strip()
    if path:
        return Path(path)
    return Path(get_data_path()) / LAUNCH_SITE_CATALOG_NAME
