"""
eastcal.engines.system
----------------------
Table-driven lunisolar calendar system.

Validity is exposed as a cheap total predicate (is_valid) separate from the
length queries, which re-derive validity and raise InvalidDateError. Search
loops in parsing and formatting paths probe with is_valid and only then ask
for lengths.
"""

from __future__ import annotations

from numbers import Integral
from typing import Any, List, Optional, Sequence, Tuple

from eastcal.core.errors import InvalidDateError
from eastcal.core.types import CalendarEra, EastAsianMonth
from .interfaces import MonthLike
from .tabular import YearLayout, YearTable


def _as_int(x: Any) -> Optional[int]:
    if isinstance(x, bool) or not isinstance(x, Integral):
        return None
    return int(x)


class LunisolarCalendarSystem:
    """
    Implements LunisolarCalendarSystemProtocol over a decoded YearTable.
    Stateless after construction.
    """
    def __init__(self, eras: Sequence[CalendarEra], table: YearTable):
        if not eras:
            raise ValueError("A calendar system needs at least one era")
        self._eras: Tuple[CalendarEra, ...] = tuple(eras)
        self.table = table

    @property
    def eras(self) -> Tuple[CalendarEra, ...]:
        return self._eras

    # ---------------------------------------------------------
    # Lookups (total, return None on failure)
    # ---------------------------------------------------------

    def _related_year(self, era: Any, year_of_era: Any) -> Optional[int]:
        yoe = _as_int(year_of_era)
        if yoe is None or not isinstance(era, CalendarEra) or era not in self._eras:
            return None
        if not era.contains(yoe):
            return None
        g = era.related_gregorian_year(yoe)
        return g if g in self.table else None

    @staticmethod
    def _month(month_of_year: Any) -> Optional[EastAsianMonth]:
        if isinstance(month_of_year, EastAsianMonth):
            return month_of_year
        m = _as_int(month_of_year)
        if m is None or not (1 <= m <= 12):
            return None
        return EastAsianMonth(m)

    def _month_length(self, era: Any, year_of_era: Any, month_of_year: Any) -> Optional[int]:
        g = self._related_year(era, year_of_era)
        if g is None:
            return None
        m = self._month(month_of_year)
        if m is None:
            return None
        return self.table.layout(g).length_of(m)

    # ---------------------------------------------------------
    # Contract
    # ---------------------------------------------------------

    def is_valid(self, era: Any, year_of_era: Any, month_of_year: Any, day_of_month: Any) -> bool:
        length = self._month_length(era, year_of_era, month_of_year)
        dom = _as_int(day_of_month)
        if length is None or dom is None:
            return False
        return 1 <= dom <= length

    def get_length_of_month(self, era: CalendarEra, year_of_era: int, month_of_year: MonthLike) -> int:
        length = self._month_length(era, year_of_era, month_of_year)
        if length is None:
            raise InvalidDateError(f"Invalid month: era={era}, year={year_of_era}, month={month_of_year}")
        return length

    def get_length_of_year(self, era: CalendarEra, year_of_era: int) -> int:
        return self.year_layout(era, year_of_era).length

    # ---------------------------------------------------------
    # Year structure
    # ---------------------------------------------------------

    def layout(self, related_gregorian_year: int) -> YearLayout:
        if related_gregorian_year not in self.table:
            raise InvalidDateError(f"Year {related_gregorian_year} outside the year table")
        return self.table.layout(related_gregorian_year)

    def year_layout(self, era: CalendarEra, year_of_era: int) -> YearLayout:
        g = self._related_year(era, year_of_era)
        if g is None:
            raise InvalidDateError(f"Invalid year: era={era}, year={year_of_era}")
        return self.table.layout(g)

    def get_leap_month(self, era: CalendarEra, year_of_era: int) -> int:
        """Number of the leap month, or 0 if the year has none."""
        return self.year_layout(era, year_of_era).leap_month

    def months_of_year(self, era: CalendarEra, year_of_era: int) -> List[EastAsianMonth]:
        return [m for m, _ in self.year_layout(era, year_of_era).months]

    def month_of_ordinal(self, era: CalendarEra, year_of_era: int, ordinal: int) -> EastAsianMonth:
        """1-based position within the year (1..12 or 1..13) -> month label."""
        months = self.months_of_year(era, year_of_era)
        if not (1 <= ordinal <= len(months)):
            raise InvalidDateError(f"Month ordinal {ordinal} out of range 1..{len(months)}")
        return months[ordinal - 1]

    def ordinal_of_month(self, era: CalendarEra, year_of_era: int, month_of_year: MonthLike) -> int:
        m = self._month(month_of_year)
        months = self.months_of_year(era, year_of_era)
        if m not in months:
            raise InvalidDateError(f"Month {month_of_year} does not exist in year {year_of_era} ({era})")
        return months.index(m) + 1

    def year_bounds(self, era: CalendarEra) -> Tuple[int, int]:
        """Smallest and largest year of era covered by both the era and the table."""
        if era not in self._eras:
            raise InvalidDateError(f"Era {era} is not supported")
        lo = max(era.min_year_of_era, era.year_of_era(self.table.first_year))
        hi = era.year_of_era(self.table.last_year)
        if era.max_year_of_era is not None:
            hi = min(hi, era.max_year_of_era)
        if lo > hi:
            raise InvalidDateError(f"Era {era} does not overlap the year table")
        return lo, hi
