"""
eastcal.engines.calendar
------------------------
The orchestrator. Binds a LunisolarCalendarSystem to the civil time line,
translating East-Asian dates to Julian Day Numbers (JDN) and back.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Union

from eastcal.core.errors import DateRangeError, InvalidDateError
from eastcal.core.time import from_jdn, to_jdn
from eastcal.core.types import CalendarEra, DayInfo, EastAsianDate, EastAsianMonth, VariantId
from .interfaces import MonthLike, ResolverProtocol
from .system import LunisolarCalendarSystem


class CalendarVariant:
    """
    A concrete East-Asian calendar: one calendar system plus its anchoring on
    the civil time line. Immutable and safe to share.
    """
    def __init__(
        self,
        id: VariantId,
        system: LunisolarCalendarSystem,
        default_era: CalendarEra,
        home_timezone: str,
        resolver: Optional[ResolverProtocol] = None,
    ):
        if default_era not in system.eras:
            raise ValueError(f"Default era {default_era} is not one of the system eras")
        self.id = id
        self.system = system
        self.default_era = default_era
        self.home_timezone = home_timezone
        self.resolver = resolver

    @property
    def table(self):
        return self.system.table

    # ---------------------------------------------------------
    # Forward: East-Asian date to civil JDN
    # ---------------------------------------------------------

    def to_jdn(self, era: CalendarEra, year_of_era: int, month: MonthLike, day_of_month: int) -> int:
        if not self.system.is_valid(era, year_of_era, month, day_of_month):
            raise InvalidDateError(
                f"Invalid {self.id.name} date: era={era}, year={year_of_era}, month={month}, day={day_of_month}"
            )
        g = era.related_gregorian_year(year_of_era)
        m = month if isinstance(month, EastAsianMonth) else EastAsianMonth(month)
        lay = self.table.layout(g)
        return self.table.new_year_jdn(g) + lay.days_before(m) + day_of_month - 1

    def date_of(self, era: CalendarEra, year_of_era: int, month: MonthLike, day_of_month: int) -> EastAsianDate:
        jdn = self.to_jdn(era, year_of_era, month, day_of_month)
        m = month if isinstance(month, EastAsianMonth) else EastAsianMonth(month)
        return EastAsianDate(
            variant=self.id,
            related_gregorian_year=era.related_gregorian_year(year_of_era),
            month=m,
            day_of_month=day_of_month,
            jdn=jdn,
        )

    def of(self, related_gregorian_year: int, month: MonthLike, day_of_month: int) -> EastAsianDate:
        """Shortcut addressing the year by its related Gregorian year."""
        era = self.default_era
        return self.date_of(era, era.year_of_era(related_gregorian_year), month, day_of_month)

    def to_civil(self, d: EastAsianDate) -> date:
        return from_jdn(d.jdn)

    # ---------------------------------------------------------
    # Inverse: civil JDN to East-Asian date
    # ---------------------------------------------------------

    def from_jdn(self, jdn: int) -> EastAsianDate:
        g = self.table.year_at(jdn)
        if g is None:
            raise DateRangeError(
                f"JDN {jdn} outside {self.id.name} table "
                f"({from_jdn(self.table.start_jdn)} .. {from_jdn(self.table.end_jdn - 1)})"
            )
        offset = jdn - self.table.new_year_jdn(g)
        for m, length in self.table.layout(g).months:
            if offset < length:
                return EastAsianDate(self.id, g, m, offset + 1, jdn)
            offset -= length
        raise RuntimeError("unreachable: year table offsets are inconsistent")

    def from_civil(self, d: date) -> EastAsianDate:
        return self.from_jdn(to_jdn(d))

    # ---------------------------------------------------------
    # Arithmetic helpers
    # ---------------------------------------------------------

    def new_year(self, related_gregorian_year: int) -> date:
        if related_gregorian_year not in self.table:
            raise DateRangeError(f"Year {related_gregorian_year} outside {self.id.name} table")
        return from_jdn(self.table.new_year_jdn(related_gregorian_year))

    def first_day_of_month(self, d: EastAsianDate) -> EastAsianDate:
        return self.from_jdn(d.jdn - d.day_of_month + 1)

    def plus_days(self, d: EastAsianDate, days: int) -> EastAsianDate:
        return self.from_jdn(d.jdn + days)

    def day_of_year(self, d: EastAsianDate) -> int:
        return d.jdn - self.table.new_year_jdn(d.related_gregorian_year) + 1

    def length_of_month(self, d: EastAsianDate) -> int:
        era = self.default_era
        return self.system.get_length_of_month(era, d.year_of_era(era), d.month)

    # ---------------------------------------------------------
    # High-level API methods (used by api.py / cli)
    # ---------------------------------------------------------

    def info(self) -> Dict[str, Any]:
        return {
            "id": self.id.__dict__,
            "eras": [e.name for e in self.system.eras],
            "default_era": self.default_era.name,
            "home_timezone": self.home_timezone,
            "years": (self.table.first_year, self.table.last_year),
            "civil_range": (from_jdn(self.table.start_jdn), from_jdn(self.table.end_jdn - 1)),
        }

    def day_info(self, d: date, *, debug: bool = False) -> DayInfo:
        ea = self.from_civil(d)
        dbg: Optional[Dict[str, Any]] = None
        if debug:
            dbg = {
                "jdn": ea.jdn,
                "new_year": self.new_year(ea.related_gregorian_year),
                "leap_month": self.system.layout(ea.related_gregorian_year).leap_month,
                "length_of_month": self.length_of_month(ea),
            }
        return DayInfo(
            civil_date=d,
            variant=self.id,
            east_asian=ea,
            day_of_year=self.day_of_year(ea),
            debug=dbg,
        )

    def to_gregorian(self, d: Union[EastAsianDate, DayInfo]) -> date:
        if isinstance(d, DayInfo):
            d = d.east_asian
        return self.to_civil(d)
