"""Satellite and launch-site catalog readers (tab-separated files)."""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from satnet_sim.constants import DEFAULT_MAX_SATELLITES, TWOPI
from satnet_sim.time_utils import parse_date

logger = logging.getLogger(__name__)

_SATELLITE_NUMERIC_COLUMNS = ('Perigee', 'Apogee', 'Eccentricity', 'Inclination', 'Period')


@dataclass(frozen=True)
class SatelliteRecord:
    """One catalog satellite.

    ``perigee``/``apogee`` in km above the surface, ``inclination`` in degrees,
    ``period`` in minutes, ``launch_day`` in days since J2000.
    """

    name: str
    users: str
    perigee: float
    apogee: float
    eccentricity: float
    inclination: float
    period: float
    launch_day: int
    initial_phase: float = 0.0

    @property
    def user_category(self) -> str:
        """First three letters of the users field, lowercased (e.g. 'mil')."""
        return user_prefix(self.users)


@dataclass(frozen=True)
class LaunchRecord:
    """One launch: site coordinates (degrees) and mission status."""

    latitude: float
    longitude: float
    status: str


def user_prefix(label: str) -> str:
    """Three-letter lowercase key of a user label ('MILITARY' -> 'mil')."""
    return label.strip()[:3].lower()


def _read_rows(path: Path) -> list[dict[str, str]]:
    """Data rows of a TSV file as stripped header -> cell dicts; blank lines dropped."""
    rows: list[dict[str, str]] = []
    with path.open(newline='') as f:
        reader = csv.reader(f, delimiter='\t')
        header = next(reader, None)
        if header is None:
            return rows
        names = [h.strip() for h in header]
        for cells in reader:
            if not any(c.strip() for c in cells):
                continue
            rows.append({name: cell.strip() for name, cell in zip(names, cells)})
    return rows


def read_satellites(
    filepath: str | Path,
    max_entries: int = DEFAULT_MAX_SATELLITES,
    rng: np.random.Generator | None = None,
) -> list[SatelliteRecord]:
    """Read the satellite catalog.

    Expected columns: ``Perigee, Apogee, Eccentricity, Inclination, Period,
    Date_of_Launch, Users`` and optionally a name column (``Name`` or
    ``Current Official Name of Satellite``). Only the first ``max_entries``
    data lines are considered. Lines with an unparseable launch date or a
    non-numeric orbit field are skipped.

    Parameters:
        filepath: Path to the TSV file.
        max_entries: Maximum number of data lines to read.
        rng: Generator for the random initial phases; a fresh default
            generator when None.

    Returns:
        List of SatelliteRecord, each with a phase drawn uniformly in [0, 2*pi).
    """
    if rng is None:
        rng = np.random.default_rng()
    path = Path(filepath)
    rows = _read_rows(path)[:max_entries]
    satellites: list[SatelliteRecord] = []
    for lineno, row in enumerate(rows, start=2):
        # The phase is drawn for every line so a seed maps to the same phases
        # whatever lines get skipped.
        phase = float(rng.uniform(0.0, TWOPI))
        try:
            values = {col: float(row[col]) for col in _SATELLITE_NUMERIC_COLUMNS}
        except (KeyError, ValueError) as e:
            logger.warning('%s:%d: skipping satellite with bad orbit field (%s)', path, lineno, e)
            continue
        launch_day = parse_date(row.get('Date_of_Launch', ''))
        if launch_day is None:
            logger.warning(
                '%s:%d: skipping satellite with bad launch date %r',
                path,
                lineno,
                row.get('Date_of_Launch', ''),
            )
            continue
        name = row.get('Name') or row.get('Current Official Name of Satellite') or ''
        satellites.append(
            SatelliteRecord(
                name=name,
                users=row.get('Users', ''),
                perigee=values['Perigee'],
                apogee=values['Apogee'],
                eccentricity=values['Eccentricity'],
                inclination=values['Inclination'],
                period=values['Period'],
                launch_day=launch_day,
                initial_phase=phase,
            )
        )
    logger.info('Loaded %d satellites from %s', len(satellites), path)
    return satellites


def read_launch_sites(filepath: str | Path) -> list[LaunchRecord]:
    """Read launch records with ``Latitude, Longitude, Status_Mission`` columns.

    Parameters:
        filepath: Path to the TSV file.

    Returns:
        List of LaunchRecord; rows with non-numeric coordinates are skipped.
    """
    path = Path(filepath)
    records: list[LaunchRecord] = []
    for lineno, row in enumerate(_read_rows(path), start=2):
        try:
            lat = float(row['Latitude'])
            lon = float(row['Longitude'])
        except (KeyError, ValueError) as e:
            logger.warning('%s:%d: skipping launch with bad coordinates (%s)', path, lineno, e)
            continue
        records.append(LaunchRecord(latitude=lat, longitude=lon, status=row.get('Status_Mission', '')))
    logger.info('Loaded %d launch records from %s', len(records), path)
    return records
