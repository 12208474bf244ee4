from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Callable, Dict, Literal, Optional, Tuple

from .cyclic import CyclicYear
from .time import from_jdn

@dataclass(frozen=True)
class VariantId:
    family: Literal["east_asian", "custom"]
    name: str
    version: str

@dataclass(frozen=True)
class CalendarEra:
    """
    Year numbering scheme. Year-of-era y maps to the related Gregorian year
    gregorian_start + y - 1; max_year_of_era=None means open-ended.
    """
    name: str
    gregorian_start: int
    min_year_of_era: int = 1
    max_year_of_era: Optional[int] = None

    def related_gregorian_year(self, year_of_era: int) -> int:
        return self.gregorian_start + year_of_era - 1

    def year_of_era(self, related_gregorian_year: int) -> int:
        return related_gregorian_year - self.gregorian_start + 1

    def contains(self, year_of_era: int) -> bool:
        if year_of_era < self.min_year_of_era:
            return False
        return self.max_year_of_era is None or year_of_era <= self.max_year_of_era

    def __str__(self) -> str:
        return self.name


YELLOW_EMPEROR = CalendarEra("YELLOW_EMPEROR", gregorian_start=-2697)
DANGI = CalendarEra("DANGI", gregorian_start=-2332)
RELATED_GREGORIAN = CalendarEra("RELATED_GREGORIAN", gregorian_start=1)
QING_GUANGXU_1875_1909 = CalendarEra("QING_GUANGXU_1875_1909", gregorian_start=1875, max_year_of_era=34)
# new year 1912 came six days after the abdication
QING_XUANTONG_1909_1912 = CalendarEra("QING_XUANTONG_1909_1912", gregorian_start=1909, max_year_of_era=3)


@dataclass(frozen=True, order=True)
class EastAsianMonth:
    """Month label: ordinary month n sorts before leap month n, which sorts before n+1."""
    number: int
    leap: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise TypeError(f"Month number must be an int: {self.number!r}")
        if not (1 <= self.number <= 12):
            raise ValueError(f"Month number out of range: {self.number}")

    def with_leap(self) -> "EastAsianMonth":
        return EastAsianMonth(self.number, True)

    def __str__(self) -> str:
        return f"*{self.number}" if self.leap else str(self.number)


@dataclass(frozen=True)
class EastAsianDate:
    variant: VariantId
    related_gregorian_year: int
    month: EastAsianMonth
    day_of_month: int
    jdn: int  # redundant, kept for cheap civil conversion

    @property
    def cyclic_year(self) -> CyclicYear:
        return CyclicYear.for_gregorian(self.related_gregorian_year)

    @property
    def cycle(self) -> int:
        return self.cyclic_year.cycle

    @property
    def year_of_cycle(self) -> int:
        return self.cyclic_year.year_of_cycle

    @property
    def is_leap_month(self) -> bool:
        return self.month.leap

    @property
    def day_of_week(self) -> int:
        """ISO weekday, 1=Monday .. 7=Sunday."""
        return self.jdn % 7 + 1

    def year_of_era(self, era: CalendarEra) -> int:
        return era.year_of_era(self.related_gregorian_year)

    def to_gregorian(self) -> date:
        return from_jdn(self.jdn)

    def __str__(self) -> str:
        return (
            f"{self.variant.name}[{self.cyclic_year.display_name}({self.related_gregorian_year})"
            f"-{self.month}-{self.day_of_month:02d}]"
        )

@dataclass(frozen=True)
class DayInfo:
    civil_date: date
    variant: VariantId
    east_asian: EastAsianDate
    day_of_year: int
    attributes: Optional[Dict[str, Any]] = None
    debug: Optional[Dict[str, Any]] = None

@dataclass(frozen=True)
class VariantSpec:
    """Pure data payload for constructing a calendar variant."""
    id: VariantId
    year_table: Tuple[int, ...]  # packed per-year month data
    first_year: int              # related Gregorian year of year_table[0]
    first_new_year: date         # civil date of the first new year in the table
    eras: Tuple[CalendarEra, ...]
    default_era: CalendarEra
    home_timezone: str           # IANA id of the calendar's civil meridian
    resolver: Optional[Callable[..., Any]] = None
    meta: Optional[Dict[str, Any]] = None

    @staticmethod
    def like(name: str) -> "VariantSpec":
        from ..engines.specs import ALL_SPECS
        if name not in ALL_SPECS:
            raise KeyError(f"Unknown base spec '{name}'. Available: {sorted(ALL_SPECS)}")
        return ALL_SPECS[name]

    def tweak(self, **kwargs: Any) -> "VariantSpec":
        return replace(self, **kwargs)
