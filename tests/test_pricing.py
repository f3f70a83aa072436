"""Price humanization tiers."""

import pytest

from appraiser.utils.pricing import floor_to_unit, humanize_optional, humanize_price, rounding_unit

SAMPLES = [0, 3, 47, 94, 95, 99.9, 100, 237, 468, 975, 999, 1000, 1234, 9_960, 9_999, 12_345, 99_999, 250_600]


@pytest.mark.parametrize("price,expected", [(47, 50), (237, 250), (468, 450), (1234, 1200), (12_345, 12_500), (250_600, 251_000)])
def test_humanize_price(price, expected):
    assert humanize_price(price) == expected


@pytest.mark.parametrize("price", SAMPLES)
def test_humanize_is_idempotent(price):
    once = humanize_price(price)
    assert humanize_price(once) == once


@pytest.mark.parametrize("price", [47, 237, 1234, 12_345, 250_600])
def test_result_is_multiple_of_tier_unit(price):
    assert humanize_price(price) % rounding_unit(price) == 0


def test_half_rounds_up():
    assert humanize_price(25) == 30
    assert humanize_price(1250) == 1300


@pytest.mark.parametrize("value", [None, 0, -10, "abc", True, float("nan"), {"min": 1}])
def test_humanize_optional_rejects(value):
    assert humanize_optional(value) is None


def test_humanize_optional_accepts_numeric_strings():
    assert humanize_optional("1234") == 1200


def test_floor_to_unit_never_exceeds_input():
    assert floor_to_unit(1199.9) == 1100
    assert floor_to_unit(540) == 500
    assert floor_to_unit(120) <= 120
