"""
eastcal.engines.resolvers
-------------------------
Turn a bag of parsed field values into an East-Asian date.

The year is taken, in order of preference, from the related Gregorian year,
from cycle + year of cycle, or from era + year of era. The day is then fixed
by month of year (or month ordinal) + day of month, or by day of year.

Strict resolution probes every tuple with the total is_valid predicate before
asking for lengths. Lenient resolution first normalizes out-of-range values:
month numbers beyond 12 roll into following years, a leap flag on a month
that has no leap twin is dropped, and day overflow rolls across month
boundaries.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from eastcal.core.cyclic import CyclicYear
from eastcal.core.errors import DateRangeError, InvalidDateError
from eastcal.core.options import AttributeQuery
from eastcal.core.types import CalendarEra, EastAsianDate, EastAsianMonth
from .system import _as_int

logger = logging.getLogger(__name__)

# field names
CIVIL_DATE = "civil_date"
RELATED_GREGORIAN_YEAR = "related_gregorian_year"
CYCLE = "cycle"
YEAR_OF_CYCLE = "year_of_cycle"
ERA = "era"
YEAR_OF_ERA = "year_of_era"
MONTH_OF_YEAR = "month_of_year"
LEAP_MONTH = "leap_month"
MONTH_AS_ORDINAL = "month_as_ordinal"
DAY_OF_MONTH = "day_of_month"
DAY_OF_YEAR = "day_of_year"

MISSING_YEAR = "Cannot determine East Asian year."
MISSING_MONTH = "Missing month of year."
MISSING_DAY = "Missing day of month."
INVALID_DATE = "Invalid East Asian date."


class ParsedEntity:
    """
    Field values collected by a parser. A rejected resolution leaves its
    reason in error_message.
    """
    def __init__(self, fields: Optional[Mapping[str, Any]] = None, **values: Any):
        self._fields: Dict[str, Any] = dict(fields or {})
        self._fields.update(values)
        self.error_message: Optional[str] = None

    def contains(self, key: str) -> bool:
        return self._fields.get(key) is not None

    def get(self, key: str, default: Any = None) -> Any:
        value = self._fields.get(key)
        return default if value is None else value

    def with_value(self, key: str, value: Any) -> "ParsedEntity":
        self._fields[key] = value
        return self

    def reject(self, message: str) -> None:
        logger.debug("rejected %r: %s", self, message)
        self.error_message = message

    def fields(self) -> Dict[str, Any]:
        return dict(self._fields)

    def __repr__(self) -> str:
        return f"ParsedEntity({self._fields!r})"


YearRef = Tuple[CalendarEra, int]


def _lookup_era(variant: Any, value: Any) -> Optional[CalendarEra]:
    if isinstance(value, CalendarEra):
        return value if value in variant.system.eras else None
    if isinstance(value, str):
        for era in variant.system.eras:
            if era.name == value.upper():
                return era
    return None


def _resolve_year(variant: Any, entity: ParsedEntity, lenient: bool) -> Optional[YearRef]:
    era = variant.default_era

    if entity.contains(RELATED_GREGORIAN_YEAR):
        g = _as_int(entity.get(RELATED_GREGORIAN_YEAR))
        return None if g is None else (era, era.year_of_era(g))

    if entity.contains(CYCLE) and entity.contains(YEAR_OF_CYCLE):
        cycle = _as_int(entity.get(CYCLE))
        yoc = entity.get(YEAR_OF_CYCLE)
        yoc = yoc.year_of_cycle if isinstance(yoc, CyclicYear) else _as_int(yoc)
        if cycle is None or yoc is None:
            return None
        if lenient:
            cy = CyclicYear((cycle - 1) * 60 + yoc)
        else:
            try:
                cy = CyclicYear.in_cycle(cycle, yoc)
            except ValueError:
                return None
        return era, era.year_of_era(cy.related_gregorian_year)

    if entity.contains(YEAR_OF_ERA):
        if entity.contains(ERA):
            era = _lookup_era(variant, entity.get(ERA))
        yoe = _as_int(entity.get(YEAR_OF_ERA))
        if era is None or yoe is None:
            return None
        return era, yoe

    return None


def _months_in(variant: Any, era: CalendarEra, yoe: int) -> Optional[int]:
    if not variant.system.is_valid(era, yoe, 1, 1):
        return None
    return len(variant.system.months_of_year(era, yoe))


def _resolve_month(
    variant: Any, entity: ParsedEntity, era: CalendarEra, yoe: int, lenient: bool
) -> Optional[Tuple[int, EastAsianMonth]]:
    """Returns (year_of_era, month), the year possibly moved by normalization."""
    system = variant.system

    if entity.contains(MONTH_OF_YEAR):
        raw = entity.get(MONTH_OF_YEAR)
        if isinstance(raw, EastAsianMonth):
            number, leap = raw.number, raw.leap
        else:
            number = _as_int(raw)
            if number is None:
                return None
            leap = bool(entity.get(LEAP_MONTH, False))

        if lenient and not (1 <= number <= 12):
            yoe += (number - 1) // 12
            number = (number - 1) % 12 + 1
            logger.debug("month rolled to year %s month %s", yoe, number)
        if not (1 <= number <= 12):
            return None

        if leap and lenient and system.is_valid(era, yoe, 1, 1):
            if system.get_leap_month(era, yoe) != number:
                logger.debug("dropped leap flag on month %s of year %s", number, yoe)
                leap = False
        return yoe, EastAsianMonth(number, leap)

    ordinal = _as_int(entity.get(MONTH_AS_ORDINAL))
    if ordinal is None:
        return None
    count = _months_in(variant, era, yoe)
    if count is None:
        return None
    if lenient:
        while ordinal > count:
            ordinal -= count
            yoe += 1
            count = _months_in(variant, era, yoe)
            if count is None:
                return None
        while ordinal < 1:
            yoe -= 1
            count = _months_in(variant, era, yoe)
            if count is None:
                return None
            ordinal += count
    elif not (1 <= ordinal <= count):
        return None
    return yoe, system.month_of_ordinal(era, yoe, ordinal)


def _from_day_of_year(
    variant: Any, entity: ParsedEntity, era: CalendarEra, yoe: int, lenient: bool
) -> Optional[EastAsianDate]:
    doy = _as_int(entity.get(DAY_OF_YEAR))
    if doy is None or not variant.system.is_valid(era, yoe, 1, 1):
        return None
    if not lenient and not (1 <= doy <= variant.system.get_length_of_year(era, yoe)):
        return None
    first = variant.date_of(era, yoe, 1, 1)
    return variant.plus_days(first, doy - 1)


def default_resolver(
    variant: Any,
    entity: ParsedEntity,
    attributes: AttributeQuery,
    lenient: bool,
    preparsing: bool,
) -> Optional[EastAsianDate]:
    """
    Resolver shared by the table-driven variants. preparsing has no effect
    here since a table lookup has no expensive final step to defer.
    """
    if entity.contains(CIVIL_DATE):
        try:
            return variant.from_civil(entity.get(CIVIL_DATE))
        except DateRangeError:
            entity.reject(INVALID_DATE)
            return None

    year = _resolve_year(variant, entity, lenient)
    if year is None:
        entity.reject(MISSING_YEAR)
        return None
    era, yoe = year

    try:
        if entity.contains(MONTH_OF_YEAR) or entity.contains(MONTH_AS_ORDINAL):
            dom = _as_int(entity.get(DAY_OF_MONTH))
            if dom is None:
                entity.reject(MISSING_DAY)
                return None
            resolved = _resolve_month(variant, entity, era, yoe, lenient)
            if resolved is None:
                entity.reject(INVALID_DATE)
                return None
            yoe, month = resolved

            if variant.system.is_valid(era, yoe, month, dom):
                return variant.date_of(era, yoe, month, dom)
            if lenient and variant.system.is_valid(era, yoe, month, 1):
                logger.debug("day %s rolled over month %s of year %s", dom, month, yoe)
                return variant.plus_days(variant.date_of(era, yoe, month, 1), dom - 1)
            entity.reject(INVALID_DATE)
            return None

        if entity.contains(DAY_OF_YEAR):
            result = _from_day_of_year(variant, entity, era, yoe, lenient)
            if result is None:
                entity.reject(INVALID_DATE)
            return result

    except (DateRangeError, InvalidDateError) as exc:
        logger.debug("resolution of %r failed: %s", entity, exc)
        entity.reject(INVALID_DATE)
        return None

    entity.reject(MISSING_MONTH)
    return None
