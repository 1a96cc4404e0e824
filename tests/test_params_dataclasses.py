"""Tests for run parameter dataclasses and parsing helpers."""

from __future__ import annotations

import argparse

import pytest

from satnet_sim.params import (
    DEFAULT_START_TIME,
    OrbitParams,
    RunParams,
    parse_eccentricity,
    parse_start_time,
    parse_users,
    run_params_from_env,
)

_ENV_KEYS = (
    'SATNET_START',
    'SATNET_TIME_SCALE',
    'SATNET_FRAMES',
    'SATNET_FRAME_DELTA',
    'SATNET_USERS',
    'SATNET_SEED',
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_run_params_defaults() -> None:
    """RunParams default values are stable and explicit."""
    params = RunParams()
    assert params.start_time == DEFAULT_START_TIME
    assert params.time_scale == 200.0
    assert params.frames == 10
    assert params.frame_delta == pytest.approx(1.0 / 60.0)
    assert params.satellites is None
    assert params.max_satellites == 7560
    assert params.users == 'ALL'
    assert params.seed is None
    assert params.workers == 1
    assert params.launch_sites is None
    assert params.output is None


def test_orbit_params_defaults() -> None:
    """OrbitParams needs the orbit; time, phase and origin default to zero."""
    params = OrbitParams(perigee=1.0, apogee=2.0, eccentricity=0.1, inclination=0.2, period=3.0)
    assert params.time == 0.0
    assert params.initial_phase == 0.0
    assert params.origin_size == 0.0
    assert params.planetary is False


@pytest.mark.parametrize(
    ('value', 'expected'),
    [('ALL', 'ALL'), ('military', 'MILITARY'), ('mil', 'MILITARY'), (' Civil ', 'CIVIL'), ('gov', 'GOVERNMENT')],
)
def test_parse_users(value: str, expected: str) -> None:
    """User categories accept labels and three-letter prefixes, any case."""
    assert parse_users(value) == expected


def test_parse_users_rejects_unknown() -> None:
    """Unknown categories are argparse errors."""
    with pytest.raises(argparse.ArgumentTypeError):
        parse_users('scientific')


@pytest.mark.parametrize('value', ['1', '1.5', '-0.1', 'abc'])
def test_parse_eccentricity_rejects_open_orbits(value: str) -> None:
    """Only closed orbits are accepted."""
    with pytest.raises(argparse.ArgumentTypeError):
        parse_eccentricity(value)


def test_parse_eccentricity_accepts_closed_orbits() -> None:
    assert parse_eccentricity('0') == 0.0
    assert parse_eccentricity('0.9') == 0.9


def test_parse_start_time() -> None:
    """Start times become clock fields; garbage becomes None."""
    assert parse_start_time('1981-01-01 00:00:00') == (1981, 1, 1, 0, 0, 0)
    assert parse_start_time('') is None


def test_run_params_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """SATNET_* variables override defaults; invalid values fall back."""
    monkeypatch.setenv('SATNET_START', '1990-05-01 12:00:00')
    monkeypatch.setenv('SATNET_TIME_SCALE', '3600')
    monkeypatch.setenv('SATNET_FRAMES', 'many')
    monkeypatch.setenv('SATNET_USERS', 'mil')
    monkeypatch.setenv('SATNET_SEED', '42')
    params = run_params_from_env()
    assert params.start_time == '1990-05-01 12:00:00'
    assert params.time_scale == 3600.0
    assert params.frames == 10
    assert params.users == 'MILITARY'
    assert params.seed == 42


def test_run_params_from_env_bad_users(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('SATNET_USERS', 'pirates')
    assert run_params_from_env().users == 'ALL'
