from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .core.engine import VariantRegistry
from .core.errors import InvalidDateError
from .core.options import LENIENCY, START_OF_DAY, TIMEZONE_ID, AttributeQuery, Leniency
from .core.start_of_day import StartOfDay
from .core.time import TimezoneLike, system_clock
from .core.types import CalendarEra, DayInfo, EastAsianDate, EastAsianMonth, VariantSpec
from .attributes import standard as _standard  # noqa: F401  (registers built-in attributes)
from .attributes.registry import compute_attributes
from .engines.calendar import CalendarVariant
from .engines.factory import make_variant as _make_variant
from .engines.resolvers import ParsedEntity
from .merger import CalendarMerger, Clock

_registry: Optional[VariantRegistry] = None

def set_registry(reg: VariantRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> VariantRegistry:
    if _registry is None:
        raise RuntimeError("Variant registry not initialized")
    return _registry

def _era(var: CalendarVariant, era: Union[None, str, CalendarEra]) -> CalendarEra:
    if era is None:
        return var.default_era
    if isinstance(era, str):
        for e in var.system.eras:
            if e.name == era.upper():
                return e
        raise InvalidDateError(f"Unknown era '{era}' for {var.id.name}")
    return era

def _month(month: Union[int, EastAsianMonth], leap: bool) -> Union[int, EastAsianMonth]:
    if isinstance(month, EastAsianMonth) or not leap:
        return month
    return EastAsianMonth(month, True)

def list_variants() -> List[str]:
    return _reg().list()

def variant_info(variant: str) -> Dict[str, Any]:
    return _reg().get(variant).info()

def get_variant(name: str) -> CalendarVariant:
    return _reg().get(name)

def get_merger(variant: str = "chinese") -> CalendarMerger:
    return CalendarMerger(_reg().get(variant))

def make_variant(spec: Union[str, VariantSpec], **overrides: Any) -> CalendarVariant:
    """Build a variant from a spec, or from a built-in spec name plus field overrides."""
    if isinstance(spec, str):
        spec = VariantSpec.like(spec)
    if overrides:
        spec = spec.tweak(**overrides)
    return _make_variant(spec)

def register_variant(name: str, variant: CalendarVariant, *, overwrite: bool = False) -> None:
    _reg().register(name, variant, overwrite=overwrite)

# ============================================================
# Conversions
# ============================================================

def day_info(
    d: date,
    *,
    variant: str = "chinese",
    attributes: Sequence[str] = (),
    debug: bool = False,
) -> DayInfo:
    info = _reg().get(variant).day_info(d, debug=debug)
    if attributes:
        attrs = compute_attributes(info, attributes)
        info = replace(info, attributes=attrs)
    return info

def from_gregorian(d: date, *, variant: str = "chinese") -> EastAsianDate:
    return _reg().get(variant).from_civil(d)

def to_gregorian(
    year: Union[int, EastAsianDate],
    month: Union[None, int, EastAsianMonth] = None,
    day: Optional[int] = None,
    *,
    leap: bool = False,
    era: Union[None, str, CalendarEra] = None,
    variant: Optional[str] = None,
) -> date:
    """
    Civil date of an East-Asian date, given either as an EastAsianDate or as
    year of era (default: the variant's default era), month and day.
    """
    if isinstance(year, EastAsianDate):
        return _reg().get(variant or year.variant.name).to_civil(year)
    if month is None or day is None:
        raise TypeError("to_gregorian() needs month and day together with a year")
    var = _reg().get(variant or "chinese")
    return var.to_civil(var.date_of(_era(var, era), year, _month(month, leap), day))

def today(
    tz: Optional[TimezoneLike] = None,
    *,
    variant: str = "chinese",
    start_of_day: Optional[StartOfDay] = None,
    leniency: Leniency = Leniency.SMART,
    clock: Clock = system_clock,
) -> Optional[EastAsianDate]:
    attrs = AttributeQuery.of(**{TIMEZONE_ID: tz, START_OF_DAY: start_of_day, LENIENCY: leniency})
    return get_merger(variant).create_from_clock(clock, attrs)

def from_fields(
    fields: Union[Mapping[str, Any], ParsedEntity],
    *,
    variant: str = "chinese",
    leniency: Leniency = Leniency.SMART,
) -> Optional[EastAsianDate]:
    """Resolve parsed fields; returns None and leaves the reason on the entity when rejected."""
    entity = fields if isinstance(fields, ParsedEntity) else ParsedEntity(fields)
    return get_merger(variant).create_from_entity(entity, AttributeQuery.of(**{LENIENCY: leniency}))

# ============================================================
# Calendar system queries
# ============================================================

def is_valid(
    year: Any,
    month: Any,
    day: Any,
    *,
    era: Union[None, str, CalendarEra] = None,
    variant: str = "chinese",
) -> bool:
    var = _reg().get(variant)
    try:
        e = _era(var, era)
    except InvalidDateError:
        return False
    return var.system.is_valid(e, year, month, day)

def length_of_month(
    year: int,
    month: Union[int, EastAsianMonth],
    *,
    leap: bool = False,
    era: Union[None, str, CalendarEra] = None,
    variant: str = "chinese",
) -> int:
    var = _reg().get(variant)
    return var.system.get_length_of_month(_era(var, era), year, _month(month, leap))

def length_of_year(year: int, *, era: Union[None, str, CalendarEra] = None, variant: str = "chinese") -> int:
    var = _reg().get(variant)
    return var.system.get_length_of_year(_era(var, era), year)

def months_in_year(
    year: int,
    *,
    era: Union[None, str, CalendarEra] = None,
    variant: str = "chinese",
) -> List[Dict[str, Any]]:
    var = _reg().get(variant)
    e = _era(var, era)
    out = []
    for ordinal, m in enumerate(var.system.months_of_year(e, year), start=1):
        first = var.date_of(e, year, m, 1)
        out.append({
            "ordinal": ordinal,
            "month": m.number,
            "is_leap_month": m.leap,
            "days": var.system.get_length_of_month(e, year, m),
            "first_date": first.to_gregorian(),
        })
    return out

def new_year_day(related_gregorian_year: int, *, variant: str = "chinese") -> date:
    return _reg().get(variant).new_year(related_gregorian_year)
