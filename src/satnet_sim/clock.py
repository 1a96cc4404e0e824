"""Simulated calendar clock with a user-scalable time rate.

The clock has two mutation paths:

- Continuous: ``update(frame_delta)`` once per frame accumulates
  ``velocity += acceleration`` and integrates the calendar with ``run``.
- Discrete: the ``set_*`` editors and ``set_specific_time`` assign fields and
  recompute ``velocity`` from the absolute calendar.

``velocity`` is the elapsed simulated seconds since the calendar instant the
clock was created at; it is the time fed to the orbit solver.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime

from satnet_sim.config import ClockConfig
from satnet_sim.constants import (
    DEFAULT_TIME_SCALE,
    DEFAULT_YEAR,
    HOURS_PER_DAY,
    MINUTES_PER_HOUR,
    MONTHS_PER_YEAR,
    SECONDS_PER_MINUTE,
)
from satnet_sim.time_utils import day_from_ymd, days_in_month, seconds_from_fields

logger = logging.getLogger(__name__)


def _wrap(value: float, bound: float) -> tuple[int, float]:
    """Split ``value`` into a carry and a remainder in ``[0, bound)``.

    ``divmod`` of a tiny negative float rounds the remainder up to ``bound``
    itself; that case is folded back into the carry.
    """
    carry, remainder = divmod(value, bound)
    if remainder >= bound:
        remainder -= bound
        carry += 1
    return int(carry), remainder


class SimulatedClock:
    """Proleptic calendar advanced at ``time_scale`` simulated seconds per real second."""

    def __init__(
        self,
        hours: float = 0,
        minutes: float = 0,
        seconds: float = 0,
        month: int = 1,
        day: int = 1,
        year: int = DEFAULT_YEAR,
        time_scale: float = DEFAULT_TIME_SCALE,
        *,
        config: ClockConfig | None = None,
    ) -> None:
        self.config = config if config is not None else ClockConfig()
        self.seconds = seconds
        self.minutes = minutes
        self.hours = hours
        self.month = month
        self.day = day
        self.year = year
        self.time_scale = time_scale

        self.start_seconds = self._absolute_seconds()
        self.velocity = 0.0
        self.acceleration = 0.0

    def __repr__(self) -> str:
        return (
            f'SimulatedClock({self.get_formatted_time(True)!r}, '
            f'time_scale={self.time_scale}, velocity={self.velocity})'
        )

    @staticmethod
    def days_in_month(month: int, year: int) -> int:
        """Days in ``month`` of ``year`` (Feb 2024 -> 29, Feb 2023 -> 28)."""
        return days_in_month(month, year)

    def _absolute_seconds(self) -> float:
        return seconds_from_fields(
            self.year, self.month, self.day, self.hours, self.minutes, self.seconds
        )

    def run(self, delta: float) -> None:
        """Advance (or rewind) the calendar by ``delta`` simulated seconds.

        Carries and borrows seconds -> minutes -> hours -> days -> months ->
        years until every field is back in range, whatever the magnitude.
        """
        self.seconds += delta

        carry, self.seconds = _wrap(self.seconds, SECONDS_PER_MINUTE)
        self.minutes += carry

        carry, self.minutes = _wrap(self.minutes, MINUTES_PER_HOUR)
        self.hours += carry

        carry, self.hours = _wrap(self.hours, HOURS_PER_DAY)
        self.day += carry

        while self.day > self.days_in_month(self.month, self.year):
            self.day -= self.days_in_month(self.month, self.year)
            self.month += 1
            if self.month > MONTHS_PER_YEAR:
                self.month = 1
                self.year += 1

        while self.day < 1:
            self.month -= 1
            if self.month < 1:
                self.month = MONTHS_PER_YEAR
                self.year -= 1
            self.day += self.days_in_month(self.month, self.year)

    def update(self, frame_delta: float) -> None:
        """Advance one rendered frame of ``frame_delta`` real seconds.

        ``acceleration`` is recomputed first and then added to ``velocity``,
        in the same call that integrates it into the calendar, so both stay in
        step: one ``update(1.0)`` at time scale 200 leaves ``velocity`` at 200
        and the calendar 200 seconds on, not one frame behind. Falling below
        the floor year stops the clock and resets the calendar to January 1st
        of the floor year.
        """
        self.acceleration = frame_delta * self.time_scale

        if self.year < self.config.floor_year:
            logger.info(
                'Clock passed below %d; stopping and resetting', self.config.floor_year
            )
            self.acceleration = 0.0
            self.velocity = 0.0
            self.time_scale = 0.0
            self.reset()

        self.velocity += self.acceleration
        self.run(self.acceleration)

    def calculate_velocity(self) -> None:
        """Recompute ``velocity`` from the calendar fields."""
        self.velocity = self._absolute_seconds() - self.start_seconds

    def snapshot(self) -> float:
        """Simulated time shared by every body of the current frame."""
        return self.velocity

    def current_day(self) -> int:
        """Day number (days since J2000) of the calendar date."""
        return day_from_ymd(self.year, self.month, self.day)

    def reset(self) -> None:
        """Jump to midnight, January 1st of the floor year."""
        self.set_specific_time(0, 0, 0, 1, 1, self.config.floor_year)

    def get_formatted_time(self, include_date: bool = False) -> str:
        """``HH:MM:SS`` or ``M/D/YYYY HH:MM:SS``; only the time is zero-padded.

        Fractional hours, minutes and seconds are floored for display only;
        ``set_hours(1.5)`` prints ``01:00:00`` while ``velocity`` keeps the
        full 5400 seconds.
        """
        formatted_time = (
            f'{math.floor(self.hours):02d}:{math.floor(self.minutes):02d}:'
            f'{math.floor(self.seconds):02d}'
        )
        if include_date:
            return f'{self.month}/{self.day}/{self.year} {formatted_time}'
        return formatted_time

    # Out-of-range edits are clamped and leave velocity untouched.

    def set_hours(self, value: float) -> None:
        if value < 0 or value >= HOURS_PER_DAY:
            self.hours = max(0, min(value, HOURS_PER_DAY - 1))
        else:
            self.hours = value
            self.calculate_velocity()

    def set_minutes(self, value: float) -> None:
        if value < 0 or value >= MINUTES_PER_HOUR:
            self.minutes = max(0, min(value, MINUTES_PER_HOUR - 1))
        else:
            self.minutes = value
            self.calculate_velocity()

    def set_seconds(self, value: float) -> None:
        limit = int(SECONDS_PER_MINUTE)
        if value < 0 or value >= limit:
            self.seconds = max(0, min(value, limit - 1))
        else:
            self.seconds = value
            self.calculate_velocity()

    def set_month(self, value: int) -> None:
        if value < 1 or value > MONTHS_PER_YEAR:
            self.month = max(1, min(value, MONTHS_PER_YEAR))
        else:
            self.month = value
            self.calculate_velocity()

    def set_day(self, value: int) -> None:
        max_day = self.days_in_month(self.month, self.year)
        if value < 1 or value > max_day:
            self.day = max(1, min(value, max_day))
        else:
            self.day = value
            self.calculate_velocity()

    def set_year(self, value: int) -> None:
        min_year = self.config.min_year
        max_year = self.config.max_year
        if value < min_year or value > max_year:
            self.year = max(min_year, min(value, max_year))
        else:
            self.year = value
            self.calculate_velocity()

    def set_specific_time(
        self,
        hours: float = 0,
        minutes: float = 0,
        seconds: float = 0,
        month: int = 1,
        day: int = 1,
        year: int = DEFAULT_YEAR,
    ) -> None:
        """Assign every calendar field at once and recompute velocity."""
        self.hours = hours
        self.minutes = minutes
        self.seconds = seconds
        self.month = month
        self.day = day
        self.year = year
        self.calculate_velocity()

    def set_current_time(self, now: datetime | None = None) -> None:
        """Jump to the wall-clock local time (or ``now`` when given)."""
        if now is None:
            now = datetime.now()
        self.set_specific_time(now.hour, now.minute, now.second, now.month, now.day, now.year)

    def set_time_scale(self, value: float) -> None:
        """Set the rate, clamped to the configured slider bounds."""
        self.time_scale = max(self.config.min_time_scale, min(value, self.config.max_time_scale))
