# tests/test_attributes.py

from datetime import date

import pytest

import eastcal
from eastcal.attributes.registry import compute_attributes, list_attributes, register_attribute


def test_builtin_attributes_registered():
    assert {"weekday", "sexagenary_year", "sexagenary_day", "zodiac"} <= set(list_attributes())


def test_weekday():
    info = eastcal.day_info(date(2024, 2, 10), attributes=("weekday",))
    assert info.attributes == {"weekday": 6, "weekday_name": "saturday"}


@pytest.mark.parametrize("d, name, day_of_cycle", [
    (date(1949, 10, 1), "jia-zi", 1),
    (date(2000, 1, 1), "wu-wu", 55),
])
def test_sexagenary_day(d, name, day_of_cycle):
    attrs = eastcal.day_info(d, attributes=("sexagenary_day",)).attributes
    assert attrs == {"day_of_cycle": day_of_cycle, "day_name": name}


def test_sexagenary_year_follows_lunar_new_year():
    # 2024-02-09 still belongs to the gui-mao (rabbit) year
    before = eastcal.day_info(date(2024, 2, 9), attributes=("sexagenary_year", "zodiac")).attributes
    after = eastcal.day_info(date(2024, 2, 10), attributes=("sexagenary_year", "zodiac")).attributes
    assert before["year_name"] == "gui-mao" and before["zodiac"] == "rabbit"
    assert after["year_name"] == "jia-chen" and after["zodiac"] == "dragon"
    assert after["cycle"] == 78 and after["year_of_cycle"] == 41
    assert after["element"] == "wood"


def test_unknown_attribute():
    with pytest.raises(KeyError):
        eastcal.day_info(date(2024, 2, 10), attributes=("nonesuch",))


def test_custom_attribute():
    register_attribute("month_is_leap", lambda info: {"month_is_leap": info.east_asian.is_leap_month})
    info = eastcal.day_info(date(2017, 7, 23))
    assert compute_attributes(info, ["month_is_leap"]) == {"month_is_leap": True}
