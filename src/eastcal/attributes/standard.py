from __future__ import annotations
from typing import Any, Dict

from ..core.cyclic import sexagenary_name
from .registry import register_attribute, jdn

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

# JDN 2433191 (1949-10-01) is a jia-zi day
SEXAGENARY_DAY_SHIFT = 49

def weekday(info) -> Dict[str, Any]:
    # ISO convention: 1=Mon..7=Sun
    iso = jdn(info) % 7 + 1
    return {"weekday": iso, "weekday_name": WEEKDAYS[iso - 1]}

def sexagenary_year(info) -> Dict[str, Any]:
    cy = info.east_asian.cyclic_year
    return {
        "cycle": cy.cycle,
        "year_of_cycle": cy.year_of_cycle,
        "year_name": cy.display_name,
        "stem": cy.stem,
        "branch": cy.branch,
        "element": cy.element,
    }

def sexagenary_day(info) -> Dict[str, Any]:
    i = (jdn(info) + SEXAGENARY_DAY_SHIFT) % 60
    return {"day_of_cycle": i + 1, "day_name": sexagenary_name(i)}

def zodiac(info) -> Dict[str, Any]:
    return {"zodiac": info.east_asian.cyclic_year.zodiac}

register_attribute("weekday", weekday)
register_attribute("sexagenary_year", sexagenary_year)
register_attribute("sexagenary_day", sexagenary_day)
register_attribute("zodiac", zodiac)
