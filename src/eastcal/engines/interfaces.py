"""
eastcal.engines.interfaces
--------------------------
Boundaries between the lunisolar arithmetic (CalendarSystem), the civil
transform (CalendarVariant) and the parse-side entity resolution (Resolver).

Months are addressed either by an ordinary month number (int 1..12) or by an
EastAsianMonth, which is the only way to reach a leap month.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Protocol, Tuple, Union

from eastcal.core.options import AttributeQuery
from eastcal.core.types import CalendarEra, EastAsianDate, EastAsianMonth, VariantId

MonthLike = Union[int, EastAsianMonth]


class LunisolarCalendarSystemProtocol(Protocol):
    """
    Validation and month/year lengths for one lunisolar calendar.
    All knowledge of irregular month and year lengths lives behind this.
    """
    @property
    def eras(self) -> Tuple[CalendarEra, ...]:
        ...

    def is_valid(self, era: Any, year_of_era: Any, month_of_year: Any, day_of_month: Any) -> bool:
        """
        Total predicate: returns False, never raises, for any input.
        Required pre-check before the length queries on untrusted input.
        """
        ...

    def get_length_of_month(self, era: CalendarEra, year_of_era: int, month_of_year: MonthLike) -> int:
        """29 or 30. Raises InvalidDateError for an invalid triple."""
        ...

    def get_length_of_year(self, era: CalendarEra, year_of_era: int) -> int:
        """Sum of all month lengths of the year. Raises InvalidDateError for an invalid pair."""
        ...

    def months_of_year(self, era: CalendarEra, year_of_era: int) -> List[EastAsianMonth]:
        ...


class CalendarVariantProtocol(Protocol):
    """The civil transform capability every target calendar type provides."""
    id: VariantId
    system: LunisolarCalendarSystemProtocol
    default_era: CalendarEra

    def from_civil(self, d: date) -> EastAsianDate:
        """Civil (Gregorian) date -> East-Asian date of this variant."""
        ...

    def to_civil(self, d: EastAsianDate) -> date:
        ...

    def date_of(self, era: CalendarEra, year_of_era: int, month: MonthLike, day_of_month: int) -> EastAsianDate:
        ...

    def info(self) -> Dict[str, Any]:
        ...


class ResolverProtocol(Protocol):
    """
    Per-variant strategy turning parsed fields into a date.
    Returns None and records an error message on the entity on rejection.
    """
    def __call__(
        self,
        variant: CalendarVariantProtocol,
        entity: Any,
        attributes: AttributeQuery,
        lenient: bool,
        preparsing: bool,
    ) -> Optional[EastAsianDate]:
        ...
