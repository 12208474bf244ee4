"""
eastcal.core.start_of_day
-------------------------
Definitions of when a calendar day begins, expressed as a deviation in
seconds from civil midnight. Positive deviations start the day after
midnight (e.g. at dawn), negative ones on the previous evening.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, tzinfo

from .time import midnight

HALF_DAY = 43200


class StartOfDay:
    MIDNIGHT: "StartOfDay"
    MORNING: "StartOfDay"
    EVENING: "StartOfDay"

    def deviation(self, civil_date: date, tz: tzinfo) -> int:
        """Seconds between civil midnight of civil_date in tz and the true day start."""
        raise NotImplementedError

    @staticmethod
    def fixed(seconds: int) -> "StartOfDay":
        if seconds == 0:
            return StartOfDay.MIDNIGHT
        return FixedStartOfDay(seconds)

    @staticmethod
    def at_sunrise(lat_deg: float, lon_deg_east: float) -> "StartOfDay":
        return SunriseStartOfDay(lat_deg, lon_deg_east)


@dataclass(frozen=True)
class FixedStartOfDay(StartOfDay):
    seconds: int

    def __post_init__(self) -> None:
        if not (-HALF_DAY < self.seconds <= HALF_DAY):
            raise ValueError(f"Start of day out of range: {self.seconds} seconds")

    def deviation(self, civil_date: date, tz: tzinfo) -> int:
        return self.seconds


@dataclass(frozen=True)
class SunriseStartOfDay(StartOfDay):
    """Day begins at local sunrise; polar day/night falls back to midnight."""
    lat_deg: float
    lon_deg_east: float

    def deviation(self, civil_date: date, tz: tzinfo) -> int:
        from ..reference.solar import sunrise_utc

        rise = sunrise_utc(civil_date, self.lat_deg, self.lon_deg_east)
        if rise is None:
            return 0
        return round((rise - midnight(civil_date, tz)).total_seconds())


StartOfDay.MIDNIGHT = FixedStartOfDay(0)
StartOfDay.MORNING = FixedStartOfDay(6 * 3600)
StartOfDay.EVENING = FixedStartOfDay(-6 * 3600)
