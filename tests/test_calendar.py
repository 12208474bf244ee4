# tests/test_calendar.py

import random
from datetime import date, timedelta

import pytest

import eastcal
from eastcal.core.errors import DateRangeError, InvalidDateError
from eastcal.core.types import QING_XUANTONG_1909_1912, YELLOW_EMPEROR, EastAsianMonth

from conftest import TEST_ERA


@pytest.fixture
def chinese():
    return eastcal.get_variant("chinese")


@pytest.mark.parametrize("g, new_year", [
    (1900, date(1900, 1, 31)),
    (2000, date(2000, 2, 5)),
    (2017, date(2017, 1, 28)),
    (2020, date(2020, 1, 25)),
    (2024, date(2024, 2, 10)),
])
def test_known_new_years(chinese, g, new_year):
    assert chinese.new_year(g) == new_year
    d = chinese.from_civil(new_year)
    assert (d.related_gregorian_year, d.month, d.day_of_month) == (g, EastAsianMonth(1), 1)
    # the day before belongs to the previous year
    if g > 1900:
        assert chinese.from_civil(new_year - timedelta(days=1)).related_gregorian_year == g - 1


@pytest.mark.parametrize("g, leap, leap_len", [(2017, 6, 30), (2020, 4, 29), (2023, 2, 29)])
def test_known_leap_months(chinese, g, leap, leap_len):
    era = chinese.default_era
    assert chinese.system.get_leap_month(era, g) == leap
    assert chinese.system.get_length_of_month(era, g, EastAsianMonth(leap, True)) == leap_len


def test_leap_month_2017_dates(chinese):
    d = chinese.of(2017, EastAsianMonth(6, True), 1)
    assert d.to_gregorian() == date(2017, 7, 23)
    assert str(d) == "chinese[ding-you(2017)-*6-01]"
    assert d.is_leap_month
    assert chinese.from_civil(date(2017, 7, 23)) == d


def test_round_trip_random_days(chinese):
    random.seed(42)
    start = chinese.new_year(1900)
    span = (chinese.new_year(2099) - start).days + 300
    for _ in range(2000):
        civil = start + timedelta(days=random.randint(0, span))
        d = chinese.from_civil(civil)
        assert chinese.to_civil(d) == civil
        assert chinese.date_of(chinese.default_era, d.related_gregorian_year, d.month, d.day_of_month) == d


def test_consecutive_days_advance(chinese):
    d = chinese.from_civil(date(2017, 1, 1))
    for _ in range(800):
        nxt = chinese.plus_days(d, 1)
        if nxt.day_of_month == 1:
            assert d.day_of_month in (29, 30)
            assert d.day_of_month == chinese.length_of_month(d)
        else:
            assert nxt.day_of_month == d.day_of_month + 1
            assert nxt.month == d.month
        d = nxt


def test_outside_table(chinese):
    with pytest.raises(DateRangeError):
        chinese.from_civil(date(1900, 1, 30))
    with pytest.raises(DateRangeError):
        chinese.from_civil(date(2101, 1, 1))
    with pytest.raises(DateRangeError):
        chinese.new_year(2100)


def test_invalid_date_of(chinese):
    with pytest.raises(InvalidDateError):
        chinese.of(2024, EastAsianMonth(6, True), 1)
    with pytest.raises(InvalidDateError):
        chinese.of(2024, 1, 31)


def test_other_eras(chinese):
    # Huangdi year 4722 is related Gregorian year 2024
    d = chinese.date_of(YELLOW_EMPEROR, 4722, 1, 1)
    assert d.to_gregorian() == date(2024, 2, 10)
    assert d.year_of_era(YELLOW_EMPEROR) == 4722
    # Xuantong 3 = 1911; Xuantong 4 does not exist
    assert chinese.date_of(QING_XUANTONG_1909_1912, 3, 1, 1).related_gregorian_year == 1911
    assert not chinese.system.is_valid(QING_XUANTONG_1909_1912, 4, 1, 1)


def test_day_helpers(chinese):
    d = chinese.from_civil(date(2024, 3, 1))
    assert chinese.day_of_year(d) == (date(2024, 3, 1) - date(2024, 2, 10)).days + 1
    first = chinese.first_day_of_month(d)
    assert first.day_of_month == 1 and first.month == d.month
    assert d.day_of_week == date(2024, 3, 1).isoweekday()


def test_info(chinese):
    info = chinese.info()
    assert info["years"] == (1900, 2099)
    assert info["home_timezone"] == "Asia/Shanghai"
    assert info["civil_range"][0] == date(1900, 1, 31)


def test_synthetic_variant_bounds(test_variant):
    first = test_variant.date_of(TEST_ERA, 1, 1, 1)
    assert first.to_gregorian() == date(2000, 2, 5)
    last_year_len = test_variant.system.get_length_of_year(TEST_ERA, 3)
    end = test_variant.new_year(2002) + timedelta(days=last_year_len - 1)
    assert test_variant.from_civil(end).related_gregorian_year == 2002
    with pytest.raises(DateRangeError):
        test_variant.from_civil(end + timedelta(days=1))


def test_year_length_sum_over_whole_table(chinese):
    system = chinese.system
    for era in system.eras:
        lo, hi = system.year_bounds(era)
        for y in range(lo, hi + 1):
            months = system.months_of_year(era, y)
            lengths = [system.get_length_of_month(era, y, m) for m in months]
            assert set(lengths) <= {29, 30}
            assert system.get_length_of_year(era, y) == sum(lengths)
            assert len(months) in (12, 13)
