"""Fixed-width tables: one line per simulated frame, one per launch-site bar."""

from __future__ import annotations

from typing import Sequence, TextIO

from satnet_sim.config import DEFAULT_CONFIG, SimulationConfig
from satnet_sim.launch_sites import LaunchSiteBin, bin_segments
from satnet_sim.simulation import FrameState

FRAME_COLUMNS = (
    ('frame', 6, False),
    ('date_time', 19, True),
    ('velocity', 16, False),
    ('earth_x', 12, False),
    ('earth_y', 12, False),
    ('earth_z', 12, False),
    ('moon_x', 12, False),
    ('moon_y', 12, False),
    ('moon_z', 12, False),
    ('sun_x', 12, False),
    ('sun_y', 12, False),
    ('sun_z', 12, False),
    ('active', 6, False),
)

LAUNCH_SITE_COLUMNS = (
    ('latitude', 9, False),
    ('longitude', 10, False),
    ('outcome', 17, True),
    ('count', 6, False),
    ('total', 6, False),
    ('top_x', 12, False),
    ('top_y', 12, False),
    ('top_z', 12, False),
)


class Record:
    """Line buffer: fields are joined by a single blank, capped at ``max_length``."""

    def __init__(self, max_length: int = 4096) -> None:
        self._parts: list[str] = []
        self._max_length = max_length
        self._length = 0

    def init(self) -> None:
        """Clear the line."""
        self._parts = []
        self._length = 0

    def append(self, string: str) -> None:
        """Append a field, truncated if the line is full."""
        sep = 1 if self._parts else 0
        remaining = self._max_length - self._length - sep
        if remaining <= 0:
            return
        to_add = string[:remaining]
        if sep:
            self._parts.append(' ')
        self._parts.append(to_add)
        self._length += sep + len(to_add)

    def write(self, stream: TextIO) -> None:
        """Write the line (if not blank) and clear it."""
        line = self.get_line()
        if line:
            stream.write(line + '\n')
        self.init()

    def get_line(self) -> str:
        return ''.join(self._parts).rstrip()


def _vector_fields(vector: Sequence[float]) -> list[str]:
    return [f'{float(c):12.4f}' for c in vector]


def write_header(stream: TextIO) -> None:
    """Column names aligned with ``write_frame`` output."""
    rec = Record()
    for name, width, left in FRAME_COLUMNS:
        rec.append(name.ljust(width) if left else name.rjust(width))
    rec.write(stream)


def write_frame(
    stream: TextIO,
    index: int,
    state: FrameState,
    earth: str = 'Earth',
    moon: str = 'Moon',
    sun: str = 'Sun',
) -> None:
    """Append one frame row to ``stream``.

    Parameters:
        stream: Output text stream.
        index: Frame number (1-based).
        state: Frame produced by the simulation.
        earth, moon, sun: Body names to look up in ``state.positions``.
    """
    rec = Record()
    rec.append(f'{index:6d}')
    rec.append(state.time_text.ljust(19))
    rec.append(f'{state.velocity:16.3f}')
    for name in (earth, moon, sun):
        for value in _vector_fields(state.positions[name]):
            rec.append(value)
    rec.append(f'{state.active_satellites:6d}')
    rec.write(stream)


def _write_columns(stream: TextIO, columns: Sequence[tuple[str, int, bool]]) -> None:
    rec = Record()
    for name, width, left in columns:
        rec.append(name.ljust(width) if left else name.rjust(width))
    rec.write(stream)


def write_launch_sites(
    stream: TextIO,
    bins: dict[tuple[float, float], LaunchSiteBin],
    config: SimulationConfig = DEFAULT_CONFIG,
) -> int:
    """Write the launch-site table: one row per stacked bar segment.

    Bars stand on the configured Earth (radius and axial tilt) and grow by
    ``config.launch_site_bar_height`` per launch.

    Parameters:
        stream: Output text stream.
        bins: Launch-site bins from ``group_launch_sites``.
        config: Simulation configuration.

    Returns:
        Number of rows written.
    """
    _write_columns(stream, LAUNCH_SITE_COLUMNS)
    rows = 0
    for bin_ in bins.values():
        for segment in bin_segments(
            bin_,
            base_radius=config.earth.size,
            height_scale=config.launch_site_bar_height,
            tilt_deg=config.earth.tilt_deg,
        ):
            rec = Record()
            rec.append(f'{bin_.latitude:9.4f}')
            rec.append(f'{bin_.longitude:10.4f}')
            rec.append(segment.outcome.ljust(17))
            rec.append(f'{segment.count:6d}')
            rec.append(f'{bin_.count:6d}')
            for value in _vector_fields(segment.top):
                rec.append(value)
            rec.write(stream)
            rows += 1
    return rows
