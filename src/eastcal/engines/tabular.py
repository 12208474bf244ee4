"""
eastcal.engines.tabular
-----------------------
Decoder for packed lunisolar year tables (Hong Kong Observatory layout).

One integer describes one year:
  bits 0-3  : number of the month followed by the leap month (0 = no leap month)
  bits 4-15 : ordinary months 1..12, bit 0x8000 >> (m-1) set = 30 days
  bit 16    : the leap month has 30 days
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from eastcal.core.types import EastAsianMonth

LEAP_MASK = 0xF
LONG_LEAP_BIT = 0x10000
FIRST_MONTH_BIT = 0x8000


@dataclass(frozen=True)
class YearLayout:
    """Months of one lunisolar year in chronological order."""
    year: int  # related Gregorian year
    months: Tuple[Tuple[EastAsianMonth, int], ...]

    @property
    def leap_month(self) -> int:
        for m, _ in self.months:
            if m.leap:
                return m.number
        return 0

    @property
    def length(self) -> int:
        return sum(n for _, n in self.months)

    def length_of(self, month: EastAsianMonth) -> Optional[int]:
        for m, n in self.months:
            if m == month:
                return n
        return None

    def days_before(self, month: EastAsianMonth) -> int:
        """Days of the year preceding the first day of month."""
        total = 0
        for m, n in self.months:
            if m == month:
                return total
            total += n
        raise KeyError(month)


def decode_year(year: int, code: int) -> YearLayout:
    leap = code & LEAP_MASK
    if leap > 12:
        raise ValueError(f"Corrupt year code {code:#x} for {year}: leap month {leap}")

    months: List[Tuple[EastAsianMonth, int]] = []
    for m in range(1, 13):
        months.append((EastAsianMonth(m), 30 if code & (FIRST_MONTH_BIT >> (m - 1)) else 29))
        if m == leap:
            months.append((EastAsianMonth(m, True), 30 if code & LONG_LEAP_BIT else 29))
    return YearLayout(year, tuple(months))


def encode_year(layout: YearLayout) -> int:
    code = layout.leap_month
    for m, n in layout.months:
        if n not in (29, 30):
            raise ValueError(f"Lunar months have 29 or 30 days, got {n} for {m}")
        if n == 30:
            code |= LONG_LEAP_BIT if m.leap else (FIRST_MONTH_BIT >> (m.number - 1))
    return code


class YearTable:
    """
    Decoded table with cumulative new-year offsets, keyed by related
    Gregorian year. Immutable after construction.
    """

    def __init__(self, first_year: int, first_new_year_jdn: int, codes: Sequence[int]):
        if not codes:
            raise ValueError("Year table must not be empty")
        self.first_year = first_year
        self.last_year = first_year + len(codes) - 1

        layouts: Dict[int, YearLayout] = {}
        starts: List[int] = []
        jdn = first_new_year_jdn
        for i, code in enumerate(codes):
            lay = decode_year(first_year + i, code)
            layouts[lay.year] = lay
            starts.append(jdn)
            jdn += lay.length
        self._layouts = layouts
        self._starts = tuple(starts)
        self.end_jdn = jdn  # exclusive

    def __contains__(self, year: object) -> bool:
        return year in self._layouts

    def layout(self, year: int) -> YearLayout:
        return self._layouts[year]

    def new_year_jdn(self, year: int) -> int:
        return self._starts[year - self.first_year]

    @property
    def start_jdn(self) -> int:
        return self._starts[0]

    def year_at(self, jdn: int) -> Optional[int]:
        """Related Gregorian year whose lunisolar year contains jdn, or None."""
        if not (self.start_jdn <= jdn < self.end_jdn):
            return None
        return self.first_year + bisect_right(self._starts, jdn) - 1
