"""CLI entry point: satnet-sim run|orbit subcommands."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import NoReturn, TextIO, cast

import numpy as np

from satnet_sim.catalog import read_launch_sites, read_satellites
from satnet_sim.clock import SimulatedClock
from satnet_sim.config import (
    DEFAULT_CONFIG,
    get_launch_site_catalog_path,
    get_satellite_catalog_path,
)
from satnet_sim.fleet import SatelliteFleet
from satnet_sim.launch_sites import group_launch_sites
from satnet_sim.orbit import (
    PLANET_POLICY,
    SATELLITE_POLICY,
    OrbitalElements,
    OrbitSolver,
    OriginFrame,
)
from satnet_sim.params import (
    OrbitParams,
    RunParams,
    parse_eccentricity,
    parse_start_time,
    parse_users,
    run_params_from_env,
)
from satnet_sim.report import write_frame, write_header, write_launch_sites
from satnet_sim.simulation import SolarSystemSimulation

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or SATNET_SIM_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get('SATNET_SIM_LOG', '').upper()
    if env_level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def run_simulation(params: RunParams, out: TextIO) -> int:
    """Run ``params.frames`` frames and write the frame table to ``out``.

    With a launch-site catalog the launch-site table follows the frames.

    Parameters:
        params: Run parameters.
        out: Output stream.

    Returns:
        Number of frames written.

    Raises:
        ValueError: Invalid start time.
        OSError: Catalog file cannot be read.
    """
    fields = parse_start_time(params.start_time)
    if fields is None:
        raise ValueError(f'Invalid start time {params.start_time!r}')
    year, month, day, hours, minutes, seconds = fields
    clock = SimulatedClock(
        hours, minutes, seconds, month, day, year, config=DEFAULT_CONFIG.clock
    )
    clock.set_time_scale(params.time_scale)

    fleet = None
    if params.satellites is not None:
        rng = np.random.default_rng(params.seed)
        records = read_satellites(params.satellites, params.max_satellites, rng)
        fleet = SatelliteFleet(records, DEFAULT_CONFIG)
        fleet.update_filter(params.users)

    bins = None
    if params.launch_sites is not None:
        bins = group_launch_sites(
            read_launch_sites(params.launch_sites), DEFAULT_CONFIG.launch_site_proximity_deg
        )
        logger.info('Grouped launches into %d sites', len(bins))

    sim = SolarSystemSimulation(clock, fleet, DEFAULT_CONFIG, workers=params.workers)
    write_header(out)
    for i in range(params.frames):
        write_frame(out, i + 1, sim.step(params.frame_delta))
    if bins is not None:
        write_launch_sites(out, bins, DEFAULT_CONFIG)
    return params.frames


def _run_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Run the headless simulation (run subcommand).

    Parameters:
        parser: Argument parser (unused).
        args: Parsed args; unset options fall back to SATNET_* env vars.

    Returns:
        Exit code 0 on success, 1 on error.
    """
    params = run_params_from_env()
    if args.start is not None:
        params.start_time = args.start
    if args.time_scale is not None:
        params.time_scale = args.time_scale
    if args.frames is not None:
        params.frames = args.frames
    if args.dt is not None:
        params.frame_delta = args.dt
    if args.users is not None:
        params.users = args.users
    if args.seed is not None:
        params.seed = args.seed
    params.max_satellites = args.max_satellites
    params.workers = args.workers
    params.output = args.output
    if args.satellites is not None:
        params.satellites = args.satellites
    elif args.catalog:
        params.satellites = str(get_satellite_catalog_path())
    if args.launch_sites is not None:
        params.launch_sites = args.launch_sites
    elif args.catalog:
        params.launch_sites = str(get_launch_site_catalog_path())

    if params.frames < 0:
        print('Error: --frames must be non-negative', file=sys.stderr)
        return 1
    try:
        if params.output is not None:
            with open(params.output, 'w') as f:
                run_simulation(params, f)
        else:
            run_simulation(params, sys.stdout)
    except (ValueError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    return 0


def _orbit_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print one orbit position (orbit subcommand).

    Returns:
        Exit code 0.
    """
    params = OrbitParams(
        perigee=args.perigee,
        apogee=args.apogee,
        eccentricity=args.eccentricity,
        inclination=args.inclination,
        period=args.period,
        time=args.time,
        initial_phase=args.phase,
        origin_size=args.origin_size,
        planetary=args.planetary,
    )
    policy = PLANET_POLICY if params.planetary else SATELLITE_POLICY
    elements = OrbitalElements(
        params.perigee,
        params.apogee,
        params.eccentricity,
        params.inclination,
        params.period,
        params.initial_phase,
    )
    origin = OriginFrame(size=params.origin_size)
    position = OrbitSolver(DEFAULT_CONFIG, policy).solve(origin, elements, params.time)
    print(' '.join(f'{c:.6f}' for c in position))
    return 0


def main() -> int:
    """Entry point for satnet-sim CLI (run | orbit).

    Returns:
        Exit code 0 on success, 1 on failure.
    """
    parser = argparse.ArgumentParser(
        prog='satnet-sim',
        description='Simulated clock and Kepler orbits of the Earth, Moon, Sun and satellites.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    run_parser = subparsers.add_parser('run', help='Run the scene headless and tabulate frames')
    run_parser.add_argument(
        '--start', type=str, default=None, help='Start date/time; env: SATNET_START'
    )
    run_parser.add_argument(
        '--time-scale',
        type=float,
        default=None,
        help='Simulated seconds per real second; env: SATNET_TIME_SCALE',
    )
    run_parser.add_argument(
        '--frames', type=int, default=None, help='Number of frames; env: SATNET_FRAMES'
    )
    run_parser.add_argument(
        '--dt', type=float, default=None, help='Real seconds per frame; env: SATNET_FRAME_DELTA'
    )
    run_parser.add_argument(
        '--satellites', type=str, default=None, help='Satellite catalog (TSV)'
    )
    run_parser.add_argument(
        '--launch-sites', type=str, default=None, help='Launch-site catalog (TSV)'
    )
    run_parser.add_argument(
        '--catalog',
        action='store_true',
        help='Load both catalogs from SATNET_DATA_PATH when not given explicitly',
    )
    run_parser.add_argument(
        '--max-satellites',
        type=int,
        default=DEFAULT_CONFIG.max_satellites,
        help='Maximum catalog lines read',
    )
    run_parser.add_argument(
        '--users',
        type=parse_users,
        default=None,
        help='ALL, CIVIL, COMMERCIAL, GOVERNMENT or MILITARY; env: SATNET_USERS',
    )
    run_parser.add_argument(
        '--seed', type=int, default=None, help='Seed of the initial phases; env: SATNET_SEED'
    )
    run_parser.add_argument(
        '--workers', type=int, default=1, help='Threads for satellite positions'
    )
    run_parser.add_argument('-o', '--output', type=str, default=None, help='Output file')
    run_parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    run_parser.set_defaults(func=_run_cmd)

    orbit_parser = subparsers.add_parser('orbit', help='Position of one body at a given time')
    orbit_parser.add_argument('--perigee', type=float, required=True, help='Perigee (km)')
    orbit_parser.add_argument('--apogee', type=float, required=True, help='Apogee (km)')
    orbit_parser.add_argument(
        '--eccentricity', type=parse_eccentricity, required=True, help='Eccentricity in [0, 1)'
    )
    orbit_parser.add_argument(
        '--inclination',
        type=float,
        default=0.0,
        help='Radians (degrees with --planetary)',
    )
    orbit_parser.add_argument(
        '--period', type=float, required=True, help='Signed period (seconds)'
    )
    orbit_parser.add_argument('--time', type=float, default=0.0, help='Simulated seconds')
    orbit_parser.add_argument('--phase', type=float, default=0.0, help='Initial phase (radians)')
    orbit_parser.add_argument(
        '--origin-size', type=float, default=0.0, help='Radius of the body at the origin'
    )
    orbit_parser.add_argument(
        '--planetary', action='store_true', help='Use the Earth/Moon solver variant'
    )
    orbit_parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    orbit_parser.set_defaults(func=_orbit_cmd)

    args = parser.parse_args()
    _configure_logging(verbose=args.verbose)
    return cast(int, args.func(parser, args))


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
