# tests/test_merger.py

from datetime import date, datetime, timedelta, timezone
from unittest.mock import Mock, patch
from zoneinfo import ZoneInfo

import pytest

import eastcal
from eastcal.core.options import LENIENCY, START_OF_DAY, TIMEZONE_ID, AttributeQuery, Leniency
from eastcal.core.start_of_day import StartOfDay
from eastcal.core.types import EastAsianMonth
from eastcal.format.patterns import DisplayStyle
from eastcal.merger import PIVOT_YEAR_DISABLED, CalendarMerger

SHANGHAI = "Asia/Shanghai"


def clock_at(*args):
    instant = datetime(*args, tzinfo=timezone.utc)
    return lambda: instant


@pytest.fixture
def merger():
    return eastcal.get_merger("chinese")


def test_chrono_type_and_defaults(merger):
    assert merger.chrono_type is eastcal.get_variant("chinese")
    assert merger.default_start_of_day is StartOfDay.MIDNIGHT
    assert merger.default_pivot_year == PIVOT_YEAR_DISABLED == 100
    assert merger.preparser() is None


def test_preformat_is_identity(merger):
    d = merger.chrono_type.from_civil(date(2024, 2, 10))
    assert merger.preformat(d, AttributeQuery()) is d


@pytest.mark.parametrize("leniency", [Leniency.STRICT, Leniency.SMART, None])
def test_no_timezone_without_lax_gives_none(merger, leniency):
    attrs = AttributeQuery.of(**{LENIENCY: leniency})
    assert merger.create_from_clock(clock_at(2024, 2, 10), attrs) is None


def test_lax_uses_system_timezone(merger):
    attrs = AttributeQuery.of(**{LENIENCY: Leniency.LAX})
    with patch("eastcal.merger.system_timezone", return_value=ZoneInfo(SHANGHAI)) as tz:
        d = merger.create_from_clock(clock_at(2024, 2, 9, 17, 0), attrs)
    tz.assert_called_once()
    assert d is not None
    assert (d.related_gregorian_year, d.month, d.day_of_month) == (2024, EastAsianMonth(1), 1)


def test_timezone_projection(merger):
    # 17:00 UTC on Feb 9 is already Feb 10 in Shanghai
    clock = clock_at(2024, 2, 9, 17, 0)
    d = merger.create_from_clock(clock, AttributeQuery.of(**{TIMEZONE_ID: SHANGHAI}))
    assert d.to_gregorian() == date(2024, 2, 10)
    d = merger.create_from_clock(clock, AttributeQuery.of(**{TIMEZONE_ID: "UTC"}))
    assert d.to_gregorian() == date(2024, 2, 9)
    # tzinfo objects work as well as ids
    d = merger.create_from_clock(clock, AttributeQuery.of(**{TIMEZONE_ID: ZoneInfo(SHANGHAI)}))
    assert d.to_gregorian() == date(2024, 2, 10)


def test_morning_start_of_day_keeps_previous_date(merger):
    # 03:00 in Shanghai on the first day of 2024, but the day only starts at 06:00
    attrs = AttributeQuery.of(**{TIMEZONE_ID: SHANGHAI, START_OF_DAY: StartOfDay.MORNING})
    d = merger.create_from_clock(clock_at(2024, 2, 9, 19, 0), attrs)
    assert d.to_gregorian() == date(2024, 2, 9)
    assert (d.related_gregorian_year, d.month, d.day_of_month) == (2023, EastAsianMonth(12), 30)


def test_evening_start_of_day_advances_date(merger):
    # 20:00 in Shanghai on Feb 9; the next day started at 18:00
    attrs = AttributeQuery.of(**{TIMEZONE_ID: SHANGHAI, START_OF_DAY: StartOfDay.EVENING})
    d = merger.create_from_clock(clock_at(2024, 2, 9, 12, 0), attrs)
    assert d.to_gregorian() == date(2024, 2, 10)


def test_sunrise_start_of_day(merger):
    rise = datetime(2024, 2, 9, 23, 10, tzinfo=timezone.utc)  # 07:10 in Shanghai
    sod = StartOfDay.at_sunrise(31.2, 121.5)
    attrs = AttributeQuery.of(**{TIMEZONE_ID: SHANGHAI, START_OF_DAY: sod})
    with patch("eastcal.reference.solar.sunrise_utc", return_value=rise):
        before = merger.create_from_clock(clock_at(2024, 2, 9, 23, 0), attrs)
        after = merger.create_from_clock(clock_at(2024, 2, 9, 23, 20), attrs)
    assert before.to_gregorian() == date(2024, 2, 9)
    assert after.to_gregorian() == date(2024, 2, 10)


@pytest.mark.parametrize("locale, expected", [
    ("en_US", "EEEE, MMMM d, r(U)"),
    ("en", "EEEE, MMMM d, r(U)"),
    ("zh-Hans-CN", "rU年MMMMd日EEEE"),
    ("zh_TW", "rU年MMMMd日 EEEE"),
    ("de_DE", "r(U) MMMM d, EEEE"),
    (None, "r(U) MMMM d, EEEE"),
])
def test_format_pattern_locale_fallback(merger, locale, expected):
    assert merger.get_format_pattern(DisplayStyle.FULL, locale) == expected


def test_format_pattern_shared_by_variants(test_variant):
    m = CalendarMerger(test_variant)
    assert m.get_format_pattern(DisplayStyle.SHORT, "en") == "M/d/r"


def test_create_from_entity_delegates(test_variant):
    resolver = Mock(return_value="resolved")
    m = CalendarMerger(test_variant, resolver)
    entity = object()

    assert m.create_from_entity(entity, AttributeQuery()) == "resolved"
    resolver.assert_called_with(test_variant, entity, AttributeQuery(), False, False)

    lax = AttributeQuery.of(**{LENIENCY: Leniency.LAX})
    m.create_from_entity(entity, lax, preparsing=True)
    resolver.assert_called_with(test_variant, entity, lax, True, True)

    m.create_from_entity(entity, lax, lenient=False)
    resolver.assert_called_with(test_variant, entity, lax, False, False)


def test_merger_needs_resolver(test_variant):
    test_variant.resolver = None
    with pytest.raises(ValueError):
        CalendarMerger(test_variant)


@pytest.mark.parametrize("seconds", [60, 3600, 6 * 3600, 12 * 3600])
def test_deviation_resolves_to_previous_day(merger, seconds):
    sod = StartOfDay.fixed(seconds)
    # one second before the shifted day start, Feb 10 in Shanghai
    instant = datetime(2024, 2, 9, 16, 0, tzinfo=timezone.utc) + timedelta(seconds=seconds - 1)
    clock = lambda: instant
    shifted = merger.create_from_clock(clock, AttributeQuery.of(**{TIMEZONE_ID: SHANGHAI, START_OF_DAY: sod}))
    plain = merger.create_from_clock(clock, AttributeQuery.of(**{TIMEZONE_ID: SHANGHAI}))
    assert plain.to_gregorian() == date(2024, 2, 10)
    assert shifted.jdn == plain.jdn - 1
