# tests/conftest.py

from datetime import date

import pytest

from eastcal.core.types import CalendarEra, VariantId, VariantSpec
from eastcal.engines.factory import make_variant
from eastcal.engines.resolvers import default_resolver

TEST_ERA = CalendarEra("TEST", gregorian_start=2000, max_year_of_era=3)
OPEN_ERA = CalendarEra("OPEN", gregorian_start=1990)

# year 1: leap month after month 6 (30 days); year 2: no leap; year 3: leap 4
TEST_CODES = (0x15176, 0x04B60, 0x07954)


@pytest.fixture
def test_spec():
    return VariantSpec(
        id=VariantId("custom", "test", "synthetic-3y"),
        year_table=TEST_CODES,
        first_year=2000,
        first_new_year=date(2000, 2, 5),
        eras=(TEST_ERA, OPEN_ERA),
        default_era=TEST_ERA,
        home_timezone="UTC",
        resolver=default_resolver,
    )


@pytest.fixture
def test_variant(test_spec):
    return make_variant(test_spec)


@pytest.fixture
def test_system(test_variant):
    return test_variant.system
