from __future__ import annotations
from datetime import date, datetime, timezone, tzinfo
from typing import Union
from zoneinfo import ZoneInfo

TimezoneLike = Union[str, tzinfo]


def to_jdn(d: date) -> int:
    """Convert Gregorian date to Julian Day Number (JDN)."""
    y, m, day = d.year, d.month, d.day
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045

def from_jdn(jdn: int) -> date:
    """Fliegel-Van Flandern inverse of to_jdn (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return date(year, month, day)

def year_decimal_approx(d: date) -> float:
    """Approximate decimal year as float: year + doy/span."""
    start = date(d.year, 1, 1)
    end = date(d.year + 1, 1, 1)
    return d.year + (d - start).days / (end - start).days


def system_clock() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)

def system_timezone() -> tzinfo:
    """Timezone of the host environment."""
    return datetime.now().astimezone().tzinfo

def resolve_timezone(tz: TimezoneLike) -> tzinfo:
    """Accept an IANA identifier or a ready tzinfo."""
    if isinstance(tz, tzinfo):
        return tz
    return ZoneInfo(tz)

def midnight(d: date, tz: tzinfo) -> datetime:
    return datetime(d.year, d.month, d.day, tzinfo=tz)
