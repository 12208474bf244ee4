"""
eastcal.merger
--------------
Construction of East-Asian calendar dates from a clock or from parsed
fields, shared by every lunisolar variant.

The merger holds only the variant it produces and that variant's resolver
strategy; everything else comes in through the attribute query.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, tzinfo
from typing import Any, Callable, Optional

from .core.options import LENIENCY, START_OF_DAY, TIMEZONE_ID, AttributeQuery, Leniency
from .core.start_of_day import StartOfDay
from .core.time import resolve_timezone, system_clock, system_timezone
from .core.types import EastAsianDate
from .engines.interfaces import CalendarVariantProtocol, ResolverProtocol
from .format.patterns import DisplayStyle, get_pattern

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DEFAULT_START_OF_DAY = StartOfDay.MIDNIGHT
# two-digit years are never expanded in a cyclic calendar
PIVOT_YEAR_DISABLED = 100

# all lunisolar variants share the reference patterns of the Chinese calendar
PATTERN_CALENDAR_TYPE = "chinese"


class CalendarMerger:
    def __init__(self, variant: CalendarVariantProtocol, resolver: Optional[ResolverProtocol] = None):
        if resolver is None:
            resolver = getattr(variant, "resolver", None)
        if resolver is None:
            raise ValueError(f"Variant {variant.id.name} has no resolver strategy")
        self._variant = variant
        self._resolver = resolver

    @property
    def chrono_type(self) -> CalendarVariantProtocol:
        return self._variant

    # ---------------------------------------------------------
    # Formatting hooks
    # ---------------------------------------------------------

    def get_format_pattern(self, style: DisplayStyle, locale: Optional[str] = None) -> str:
        return get_pattern(PATTERN_CALENDAR_TYPE, style, locale)

    def preformat(self, context: EastAsianDate, attributes: AttributeQuery) -> EastAsianDate:
        return context

    def preparser(self) -> None:
        return None

    @property
    def default_start_of_day(self) -> StartOfDay:
        return DEFAULT_START_OF_DAY

    @property
    def default_pivot_year(self) -> int:
        return PIVOT_YEAR_DISABLED

    # ---------------------------------------------------------
    # Construction
    # ---------------------------------------------------------

    def _timezone(self, attributes: AttributeQuery) -> Optional[tzinfo]:
        if attributes.contains(TIMEZONE_ID):
            return resolve_timezone(attributes[TIMEZONE_ID])
        if attributes.leniency().is_lax():
            return system_timezone()
        return None

    def create_from_clock(
        self,
        clock: Clock = system_clock,
        attributes: Optional[AttributeQuery] = None,
    ) -> Optional[EastAsianDate]:
        """
        Today's date in this calendar. Returns None if no timezone is given
        and the leniency is not LAX.
        """
        attributes = attributes if attributes is not None else AttributeQuery()
        tz = self._timezone(attributes)
        if tz is None:
            logger.debug("no timezone for %s and leniency is not lax", self._variant.id.name)
            return None

        start_of_day: StartOfDay = attributes.get(START_OF_DAY, self.default_start_of_day)
        zoned = clock().astimezone(tz)
        deviation = start_of_day.deviation(zoned.date(), tz)
        civil = (zoned - timedelta(seconds=deviation)).date()
        return self._variant.from_civil(civil)

    def create_from_entity(
        self,
        entity: Any,
        attributes: Optional[AttributeQuery] = None,
        lenient: Optional[bool] = None,
        preparsing: bool = False,
    ) -> Optional[EastAsianDate]:
        attributes = attributes if attributes is not None else AttributeQuery()
        if lenient is None:
            lenient = attributes.get(LENIENCY, Leniency.SMART).is_lax()
        return self._resolver(self._variant, entity, attributes, lenient, preparsing)
