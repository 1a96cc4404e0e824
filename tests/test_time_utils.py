"""Tests for the rms-julian calendar wrappers."""

from __future__ import annotations

import pytest

from satnet_sim import time_utils


def test_day_from_ymd_epoch_and_roundtrip() -> None:
    """Day 0 is 2000-01-01 and ymd_from_day inverts day_from_ymd."""
    assert time_utils.day_from_ymd(2000, 1, 1) == 0
    day = time_utils.day_from_ymd(1981, 7, 14)
    assert time_utils.ymd_from_day(day) == (1981, 7, 14)


def test_days_in_month_december_rolls_year() -> None:
    """December is measured against January 1st of the following year."""
    assert time_utils.days_in_month(12, 1999) == 31
    assert time_utils.days_in_month(1, 2000) == 31
    assert time_utils.days_in_month(2, 2100) == 28


def test_seconds_from_fields() -> None:
    """Absolute seconds count from 2000-01-01 midnight."""
    assert time_utils.seconds_from_fields(2000, 1, 1, 0, 0, 0) == 0
    assert time_utils.seconds_from_fields(2000, 1, 2, 1, 0, 0.5) == 90000.5
    assert time_utils.seconds_from_fields(1999, 12, 31, 23, 59, 59) == -1


def test_parse_date_us_and_iso_forms_agree() -> None:
    """M/D/YYYY and ISO dates give the same day number."""
    expected = time_utils.day_from_ymd(1998, 11, 20)
    assert time_utils.parse_date('11/20/1998') == expected
    assert time_utils.parse_date('11/20/1998 10:30:00') == expected
    assert time_utils.parse_date('1998-11-20') == expected


@pytest.mark.parametrize('text', ['', '   ', '2/30/2020', '13/1/2020', 'not a date'])
def test_parse_date_rejects_invalid(text: str) -> None:
    """Invalid or empty dates return None."""
    assert time_utils.parse_date(text) is None


def test_parse_datetime_fields() -> None:
    """Date/time strings split into clock fields; trailing Z is accepted."""
    assert time_utils.parse_datetime('1981-01-01 00:03:20') == (1981, 1, 1, 0, 3, 20)
    assert time_utils.parse_datetime('1981-01-01T12:30:05Z') == (1981, 1, 1, 12, 30, 5)
    assert time_utils.parse_datetime('') is None


def test_calendar_is_proleptic_gregorian() -> None:
    """No Julian-calendar switch: October 1582 is a full month and 1500 has no Feb 29."""
    assert time_utils.days_in_month(2, 1500) == 28
    assert time_utils.days_in_month(10, 1582) == 31
    assert time_utils.day_from_ymd(1582, 10, 15) - time_utils.day_from_ymd(1582, 10, 4) == 11
    day = time_utils.day_from_ymd(1500, 2, 28)
    assert time_utils.ymd_from_day(day + 1) == (1500, 3, 1)
