"""eastcal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    day_info,
    from_gregorian,
    to_gregorian,
    today,
    from_fields,
    is_valid,
    length_of_month,
    length_of_year,
    months_in_year,
    new_year_day,
    list_variants,
    variant_info,
    get_variant,
    make_variant,
    register_variant,
    get_merger,
)
from .core.cyclic import CyclicYear
from .core.errors import DateRangeError, EastcalError, InvalidDateError, UnknownVariantError
from .core.options import AttributeQuery, Leniency
from .core.start_of_day import StartOfDay
from .core.types import EastAsianDate, EastAsianMonth
from .format.patterns import DisplayStyle
from .merger import CalendarMerger

__all__ = [
    "day_info",
    "from_gregorian",
    "to_gregorian",
    "today",
    "from_fields",
    "is_valid",
    "length_of_month",
    "length_of_year",
    "months_in_year",
    "new_year_day",
    "list_variants",
    "variant_info",
    "get_variant",
    "make_variant",
    "register_variant",
    "get_merger",
    "CyclicYear",
    "EastAsianDate",
    "EastAsianMonth",
    "StartOfDay",
    "AttributeQuery",
    "Leniency",
    "DisplayStyle",
    "CalendarMerger",
    "EastcalError",
    "InvalidDateError",
    "DateRangeError",
    "UnknownVariantError",
]
