"""
eastcal.engines.factory
-----------------------
Transforms pure data specifications into live, executable variant objects.
"""

from __future__ import annotations

from eastcal.core.time import to_jdn
from eastcal.core.types import VariantSpec
from eastcal.engines.calendar import CalendarVariant
from eastcal.engines.resolvers import default_resolver
from eastcal.engines.system import LunisolarCalendarSystem
from eastcal.engines.tabular import YearTable


def build_calendar_variant(spec: VariantSpec) -> CalendarVariant:
    """Transforms a pure data VariantSpec into a live CalendarVariant."""
    # 1. Decode the year table
    table = YearTable(spec.first_year, to_jdn(spec.first_new_year), spec.year_table)

    # 2. Build the lunisolar system
    system = LunisolarCalendarSystem(spec.eras, table)

    # 3. Orchestrate
    return CalendarVariant(
        id=spec.id,
        system=system,
        default_era=spec.default_era,
        home_timezone=spec.home_timezone,
        resolver=spec.resolver or default_resolver,
    )


def make_variant(spec: VariantSpec) -> CalendarVariant:
    """The universal entry point."""
    return build_calendar_variant(spec)
