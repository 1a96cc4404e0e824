"""Run parameters for the simulation and orbit commands (env, CLI, API)."""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass

from satnet_sim.constants import DEFAULT_MAX_SATELLITES, DEFAULT_TIME_SCALE, USER_CATEGORIES
from satnet_sim.time_utils import parse_datetime

logger = logging.getLogger(__name__)

DEFAULT_START_TIME = '1981-01-01 00:00:00'
DEFAULT_FRAMES = 10
DEFAULT_FRAME_DELTA = 1.0 / 60.0


@dataclass
class RunParams:
    """Parameters of a headless simulation run."""

    start_time: str = DEFAULT_START_TIME
    time_scale: float = DEFAULT_TIME_SCALE
    frames: int = DEFAULT_FRAMES
    frame_delta: float = DEFAULT_FRAME_DELTA
    satellites: str | None = None
    max_satellites: int = DEFAULT_MAX_SATELLITES
    users: str = 'ALL'
    seed: int | None = None
    workers: int = 1
    launch_sites: str | None = None
    output: str | None = None


@dataclass
class OrbitParams:
    """Flat orbit request for a single body about a body at rest."""

    perigee: float
    apogee: float
    eccentricity: float
    inclination: float
    period: float
    time: float = 0.0
    initial_phase: float = 0.0
    origin_size: float = 0.0
    planetary: bool = False


def parse_users(value: str) -> str:
    """Argparse type for --users: a category label or its three-letter prefix.

    Raises:
        argparse.ArgumentTypeError: Unknown category.
    """
    key = value.strip().upper()
    if key in USER_CATEGORIES:
        return key
    for label, prefix in USER_CATEGORIES.items():
        if key.lower() == prefix:
            return label
    raise argparse.ArgumentTypeError(
        f'Invalid user category {value!r}; expected one of {", ".join(USER_CATEGORIES)}'
    )


def parse_eccentricity(value: str) -> float:
    """Argparse type for eccentricity; closed orbits only (0 <= e < 1)."""
    try:
        ecc = float(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f'Invalid eccentricity {value!r}') from e
    if not 0.0 <= ecc < 1.0:
        raise argparse.ArgumentTypeError(f'Eccentricity {ecc} outside [0, 1)')
    return ecc


def parse_start_time(value: str) -> tuple[int, int, int, int, int, int] | None:
    """Clock fields (year, month, day, hours, minutes, seconds) of a start time."""
    fields = parse_datetime(value)
    if fields is None:
        logger.error('Invalid start time %r', value)
    return fields


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, '').strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        logger.error('Invalid %s %r (must be number): %s; using %s', name, raw, e, default)
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, '').strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        logger.error('Invalid %s %r (must be integer): %s; using %d', name, raw, e, default)
        return default


def run_params_from_env() -> RunParams:
    """Build RunParams from SATNET_* environment variables.

    Reads SATNET_START, SATNET_TIME_SCALE, SATNET_FRAMES, SATNET_FRAME_DELTA,
    SATNET_USERS and SATNET_SEED; unset or invalid values keep the defaults.

    Returns:
        RunParams.
    """
    users = os.environ.get('SATNET_USERS', '').strip() or 'ALL'
    try:
        users = parse_users(users)
    except argparse.ArgumentTypeError as e:
        logger.error('%s; using ALL', e)
        users = 'ALL'
    seed_raw = os.environ.get('SATNET_SEED', '').strip()
    seed: int | None = None
    if seed_raw:
        seed = _env_int('SATNET_SEED', 0)
    return RunParams(
        start_time=os.environ.get('SATNET_START', '').strip() or DEFAULT_START_TIME,
        time_scale=_env_float('SATNET_TIME_SCALE', DEFAULT_TIME_SCALE),
        frames=_env_int('SATNET_FRAMES', DEFAULT_FRAMES),
        frame_delta=_env_float('SATNET_FRAME_DELTA', DEFAULT_FRAME_DELTA),
        users=users,
        seed=seed,
    )
