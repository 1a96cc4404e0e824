"""Launch-site statistics: proximity bins by mission outcome, placed on the Earth."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence

import numpy as np

from satnet_sim.catalog import LaunchRecord
from satnet_sim.constants import (
    EARTH_SIZE,
    EARTH_TILT_DEG,
    LAUNCH_SITE_BAR_HEIGHT,
    LAUNCH_SITE_PROXIMITY_DEG,
)

OUTCOMES = ('success', 'failure', 'prelaunch_failure', 'other')


@dataclass
class LaunchSiteBin:
    """Launch counts of nearby sites and their mean coordinates (degrees)."""

    success: int = 0
    failure: int = 0
    prelaunch_failure: int = 0
    other: int = 0
    total_lat: float = 0.0
    total_lon: float = 0.0
    latitude: float = 0.0
    longitude: float = 0.0

    @property
    def count(self) -> int:
        return self.success + self.failure + self.prelaunch_failure + self.other

    def outcome_count(self, outcome: str) -> int:
        return int(getattr(self, outcome))


def _bin_key(value: float, threshold: float) -> float:
    # JavaScript Math.round: halves round up.
    return math.floor(value / threshold + 0.5) * threshold


def group_launch_sites(
    records: Sequence[LaunchRecord],
    threshold: float = LAUNCH_SITE_PROXIMITY_DEG,
) -> dict[tuple[float, float], LaunchSiteBin]:
    """Group launches whose coordinates round to the same ``threshold`` grid cell.

    'Success' and 'Failure' statuses are counted as such; every other status,
    prelaunch failures included, counts as 'other'.

    Parameters:
        records: Launch records.
        threshold: Cell size in degrees.

    Returns:
        Mapping (lat_cell, lon_cell) -> LaunchSiteBin with averaged coordinates.
    """
    grouped: dict[tuple[float, float], LaunchSiteBin] = {}
    for rec in records:
        key = (_bin_key(rec.latitude, threshold), _bin_key(rec.longitude, threshold))
        bin_ = grouped.setdefault(key, LaunchSiteBin())
        if rec.status == 'Success':
            bin_.success += 1
        elif rec.status == 'Failure':
            bin_.failure += 1
        else:
            bin_.other += 1
        bin_.total_lat += rec.latitude
        bin_.total_lon += rec.longitude
    for bin_ in grouped.values():
        bin_.latitude = bin_.total_lat / bin_.count
        bin_.longitude = bin_.total_lon / bin_.count
    return grouped


def lat_long_to_vector(
    latitude: float,
    longitude: float,
    radius: float = EARTH_SIZE,
    tilt_deg: float = EARTH_TILT_DEG,
) -> np.ndarray:
    """Point on a sphere of ``radius`` for geographic coordinates, axis tilted about Z.

    Parameters:
        latitude: Degrees north.
        longitude: Degrees east.
        radius: Sphere radius (scene units).
        tilt_deg: Axial tilt applied as a rotation about the Z axis.

    Returns:
        numpy float64 array of 3.
    """
    phi = latitude * math.pi / 180.0
    theta = (longitude - 180.0) * math.pi / 180.0
    x = -(radius * math.cos(phi) * math.cos(theta))
    y = radius * math.sin(phi)
    z = radius * math.cos(phi) * math.sin(theta)
    tilt = tilt_deg * math.pi / 180.0
    c, s = math.cos(tilt), math.sin(tilt)
    rotation = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
    return rotation @ np.array([x, y, z], dtype=np.float64)


@dataclass(frozen=True)
class BarSegment:
    """One stacked bar piece: outcome, launch count and end points on the globe."""

    outcome: str
    count: int
    bottom: np.ndarray
    top: np.ndarray

    @property
    def midpoint(self) -> np.ndarray:
        return (self.bottom + self.top) / 2.0

    @property
    def height(self) -> float:
        return float(np.linalg.norm(self.top - self.bottom))


def bin_segments(
    bin_: LaunchSiteBin,
    base_radius: float = EARTH_SIZE,
    height_scale: float = LAUNCH_SITE_BAR_HEIGHT,
    tilt_deg: float = EARTH_TILT_DEG,
) -> Iterator[BarSegment]:
    """Stacked bar of one bin, one segment per non-empty outcome, outward from the surface."""
    cumulative = 0.0
    for outcome in OUTCOMES:
        count = bin_.outcome_count(outcome)
        if count <= 0:
            continue
        height = count * height_scale
        bottom = lat_long_to_vector(
            bin_.latitude, bin_.longitude, base_radius + cumulative, tilt_deg
        )
        top = lat_long_to_vector(
            bin_.latitude, bin_.longitude, base_radius + cumulative + height, tilt_deg
        )
        yield BarSegment(outcome=outcome, count=count, bottom=bottom, top=top)
        cumulative += height
