# tests/test_resolvers.py

from datetime import date

import pytest

from eastcal.core.cyclic import CyclicYear
from eastcal.core.options import LENIENCY, AttributeQuery, Leniency
from eastcal.core.types import EastAsianMonth
from eastcal.engines import resolvers as r
from eastcal.engines.resolvers import ParsedEntity
from eastcal.merger import CalendarMerger

from conftest import TEST_ERA

STRICT = AttributeQuery.of(**{LENIENCY: Leniency.STRICT})
LAX = AttributeQuery.of(**{LENIENCY: Leniency.LAX})


@pytest.fixture
def merger(test_variant):
    return CalendarMerger(test_variant)


def ymd(d):
    return d.related_gregorian_year, d.month, d.day_of_month


def test_related_gregorian_year(merger):
    e = ParsedEntity({r.RELATED_GREGORIAN_YEAR: 2000, r.MONTH_OF_YEAR: 6, r.DAY_OF_MONTH: 15})
    d = merger.create_from_entity(e, STRICT)
    assert ymd(d) == (2000, EastAsianMonth(6), 15)
    assert e.error_message is None


def test_cycle_and_year_of_cycle(merger):
    cy = CyclicYear.for_gregorian(2001)
    e = ParsedEntity({r.CYCLE: cy.cycle, r.YEAR_OF_CYCLE: cy.year_of_cycle, r.MONTH_OF_YEAR: 1, r.DAY_OF_MONTH: 1})
    assert merger.create_from_entity(e, STRICT).related_gregorian_year == 2001
    # a CyclicYear value is accepted for the year of cycle
    e = ParsedEntity({r.CYCLE: cy.cycle, r.YEAR_OF_CYCLE: cy, r.MONTH_OF_YEAR: 1, r.DAY_OF_MONTH: 1})
    assert merger.create_from_entity(e, STRICT).related_gregorian_year == 2001


def test_era_and_year_of_era(merger):
    e = ParsedEntity({r.YEAR_OF_ERA: 1, r.MONTH_OF_YEAR: EastAsianMonth(6, True), r.DAY_OF_MONTH: 30})
    d = merger.create_from_entity(e, STRICT)
    assert ymd(d) == (2000, EastAsianMonth(6, True), 30)
    # era by name
    e = ParsedEntity({r.ERA: "open", r.YEAR_OF_ERA: 12, r.MONTH_OF_YEAR: 1, r.DAY_OF_MONTH: 1})
    assert merger.create_from_entity(e, STRICT).related_gregorian_year == 2001


def test_leap_flag_field(merger):
    e = ParsedEntity({r.YEAR_OF_ERA: 1, r.MONTH_OF_YEAR: 6, r.LEAP_MONTH: True, r.DAY_OF_MONTH: 1})
    assert merger.create_from_entity(e, STRICT).is_leap_month


def test_month_as_ordinal(merger):
    e = ParsedEntity({r.YEAR_OF_ERA: 1, r.MONTH_AS_ORDINAL: 7, r.DAY_OF_MONTH: 1})
    assert merger.create_from_entity(e, STRICT).month == EastAsianMonth(6, True)
    e = ParsedEntity({r.YEAR_OF_ERA: 1, r.MONTH_AS_ORDINAL: 13, r.DAY_OF_MONTH: 1})
    assert merger.create_from_entity(e, STRICT).month == EastAsianMonth(12)


def test_day_of_year(merger, test_variant):
    e = ParsedEntity({r.YEAR_OF_ERA: 2, r.DAY_OF_YEAR: 1})
    assert merger.create_from_entity(e, STRICT).to_gregorian() == test_variant.new_year(2001)
    length = test_variant.system.get_length_of_year(TEST_ERA, 2)
    e = ParsedEntity({r.YEAR_OF_ERA: 2, r.DAY_OF_YEAR: length})
    assert merger.create_from_entity(e, STRICT).related_gregorian_year == 2001
    e = ParsedEntity({r.YEAR_OF_ERA: 2, r.DAY_OF_YEAR: length + 1})
    assert merger.create_from_entity(e, STRICT) is None
    assert e.error_message == r.INVALID_DATE


def test_civil_date_component(merger):
    e = ParsedEntity({r.CIVIL_DATE: date(2000, 2, 5)})
    assert ymd(merger.create_from_entity(e)) == (2000, EastAsianMonth(1), 1)
    e = ParsedEntity({r.CIVIL_DATE: date(1999, 1, 1)})
    assert merger.create_from_entity(e) is None
    assert e.error_message == r.INVALID_DATE


@pytest.mark.parametrize("fields, message", [
    ({r.MONTH_OF_YEAR: 1, r.DAY_OF_MONTH: 1}, r.MISSING_YEAR),
    ({r.CYCLE: 78, r.MONTH_OF_YEAR: 1, r.DAY_OF_MONTH: 1}, r.MISSING_YEAR),
    ({r.ERA: "nonesuch", r.YEAR_OF_ERA: 1, r.MONTH_OF_YEAR: 1, r.DAY_OF_MONTH: 1}, r.MISSING_YEAR),
    ({r.CYCLE: 78, r.YEAR_OF_CYCLE: 61, r.MONTH_OF_YEAR: 1, r.DAY_OF_MONTH: 1}, r.MISSING_YEAR),
    ({r.YEAR_OF_ERA: 1, r.MONTH_OF_YEAR: 1}, r.MISSING_DAY),
    ({r.YEAR_OF_ERA: 1}, r.MISSING_MONTH),
    ({r.YEAR_OF_ERA: 1, r.MONTH_OF_YEAR: 1, r.DAY_OF_MONTH: 31}, r.INVALID_DATE),
    ({r.YEAR_OF_ERA: 2, r.MONTH_OF_YEAR: 6, r.LEAP_MONTH: True, r.DAY_OF_MONTH: 1}, r.INVALID_DATE),
    ({r.YEAR_OF_ERA: 1, r.MONTH_OF_YEAR: 13, r.DAY_OF_MONTH: 1}, r.INVALID_DATE),
    ({r.YEAR_OF_ERA: 4, r.MONTH_OF_YEAR: 1, r.DAY_OF_MONTH: 1}, r.INVALID_DATE),
    ({r.YEAR_OF_ERA: 1, r.MONTH_AS_ORDINAL: 14, r.DAY_OF_MONTH: 1}, r.INVALID_DATE),
])
def test_strict_rejections(merger, fields, message):
    e = ParsedEntity(fields)
    assert merger.create_from_entity(e, STRICT) is None
    assert e.error_message == message


def test_lenient_month_overflow_rolls_into_next_year(merger):
    e = ParsedEntity({r.YEAR_OF_ERA: 1, r.MONTH_OF_YEAR: 14, r.DAY_OF_MONTH: 3})
    assert ymd(merger.create_from_entity(e, LAX)) == (2001, EastAsianMonth(2), 3)


def test_lenient_drops_bogus_leap_flag(merger):
    e = ParsedEntity({r.YEAR_OF_ERA: 2, r.MONTH_OF_YEAR: 6, r.LEAP_MONTH: True, r.DAY_OF_MONTH: 1})
    assert ymd(merger.create_from_entity(e, LAX)) == (2001, EastAsianMonth(6), 1)


def test_lenient_day_overflow(merger, test_variant):
    n = test_variant.system.get_length_of_month(TEST_ERA, 1, 1)
    e = ParsedEntity({r.YEAR_OF_ERA: 1, r.MONTH_OF_YEAR: 1, r.DAY_OF_MONTH: n + 2})
    assert ymd(merger.create_from_entity(e, LAX)) == (2000, EastAsianMonth(2), 2)
    e = ParsedEntity({r.YEAR_OF_ERA: 2, r.MONTH_OF_YEAR: 1, r.DAY_OF_MONTH: 0})
    assert ymd(merger.create_from_entity(e, LAX)) == (2000, EastAsianMonth(12), 30)


def test_lenient_ordinal_overflow(merger):
    # year 1 has 13 months, so ordinal 14 is the first month of year 2
    e = ParsedEntity({r.YEAR_OF_ERA: 1, r.MONTH_AS_ORDINAL: 14, r.DAY_OF_MONTH: 1})
    assert ymd(merger.create_from_entity(e, LAX)) == (2001, EastAsianMonth(1), 1)
    e = ParsedEntity({r.YEAR_OF_ERA: 2, r.MONTH_AS_ORDINAL: 0, r.DAY_OF_MONTH: 1})
    assert ymd(merger.create_from_entity(e, LAX)) == (2000, EastAsianMonth(12), 1)


def test_lenient_still_rejects_outside_table(merger):
    e = ParsedEntity({r.YEAR_OF_ERA: 3, r.MONTH_OF_YEAR: 13, r.DAY_OF_MONTH: 1})
    assert merger.create_from_entity(e, LAX) is None
    assert e.error_message == r.INVALID_DATE
