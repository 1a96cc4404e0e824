"""Calendar wrappers around rms-julian for the simulated clock and catalogs."""

from __future__ import annotations

import logging
import re

import julian

from satnet_sim.constants import (
    MONTHS_PER_YEAR,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)

logger = logging.getLogger(__name__)


def day_from_ymd(year: int, month: int, day: int) -> int:
    """Convert a proleptic Gregorian calendar date to days since J2000.

    Parameters:
        year, month, day: Calendar date. A day past the end of the month
            rolls into the following month.

    Returns:
        Days since J2000.
    """
    return int(julian.day_from_ymd(int(year), int(month), int(day), proleptic=True))


def ymd_from_day(day: int) -> tuple[int, int, int]:
    """Convert day since J2000 to a proleptic Gregorian calendar date.

    Parameters:
        day: Days since J2000.

    Returns:
        (year, month, day).
    """
    y, m, d = julian.ymd_from_day(day, proleptic=True)
    return (int(y), int(m), int(d))


def days_in_month(month: int, year: int) -> int:
    """Number of days in the given month, leap years included.

    Parameters:
        month: Month 1-12.
        year: Calendar year.

    Returns:
        28, 29, 30 or 31.
    """
    if month >= MONTHS_PER_YEAR:
        next_first = day_from_ymd(year + 1, 1, 1)
    else:
        next_first = day_from_ymd(year, month + 1, 1)
    return next_first - day_from_ymd(year, month, 1)


def seconds_from_fields(
    year: int,
    month: int,
    day: int,
    hours: float,
    minutes: float,
    seconds: float,
) -> float:
    """Absolute calendar seconds since J2000 midnight (no leap seconds).

    Parameters:
        year, month, day: Calendar date.
        hours, minutes, seconds: Time of day; values outside the usual range
            carry into the neighbouring fields arithmetically.

    Returns:
        Seconds since 2000-01-01 00:00:00.
    """
    return (
        day_from_ymd(year, month, day) * SECONDS_PER_DAY
        + hours * SECONDS_PER_HOUR
        + minutes * SECONDS_PER_MINUTE
        + seconds
    )


def parse_date(string: str) -> int | None:
    """Parse a date or date/time string to its day number.

    Accepts anything rms-julian parses, plus US-style ``M/D/YYYY`` dates with
    an optional trailing time (the clock's own display format).

    Parameters:
        string: Date string, e.g. ``1998-11-20`` or ``11/20/1998``.

    Returns:
        Days since J2000, or None on parse failure.
    """
    stripped = string.strip()
    if not stripped:
        return None
    us_match = re.fullmatch(r'(\d{1,2})/(\d{1,2})/(\d{1,4})(?:\s+.*)?', stripped)
    if us_match is not None:
        month, day, year = (int(x) for x in us_match.groups())
        if not 1 <= month <= MONTHS_PER_YEAR or day < 1:
            return None
        if day > days_in_month(month, year):
            return None
        return day_from_ymd(year, month, day)
    try:
        result = julian.day_sec_from_string(stripped)
    except (ValueError, TypeError, LookupError, OSError):
        logger.debug('Unparseable date %r', string)
        return None
    return int(result[0])


def parse_datetime(string: str) -> tuple[int, int, int, int, int, int] | None:
    """Parse a date/time string to clock fields.

    Parameters:
        string: Date/time string accepted by rms-julian
            (e.g. ``1981-01-01 00:00:00``).

    Returns:
        (year, month, day, hours, minutes, seconds), or None on parse failure.
    """
    stripped = string.strip()
    if not stripped:
        return None
    candidate_strings = [stripped]
    if stripped.endswith(('Z', 'z')):
        candidate_strings.append(stripped[:-1])
    for candidate in candidate_strings:
        try:
            result = julian.day_sec_from_string(candidate)
        except (ValueError, TypeError, LookupError, OSError):
            continue
        day, sec = int(result[0]), float(result[1])
        year, month, mday = ymd_from_day(day)
        whole = int(sec)
        hours, rem = divmod(whole, int(SECONDS_PER_HOUR))
        minutes, seconds = divmod(rem, int(SECONDS_PER_MINUTE))
        return (year, month, mday, hours, minutes, seconds)
    return None
