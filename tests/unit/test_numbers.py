"""Unit tests for rounding and lenient numeric parsing"""

import pytest
from guarantee_quote.utils.numbers import round_half_away, parse_int, parse_float


@pytest.mark.parametrize(
    "value, expected",
    [
        (4.5, 5),  # round() would give 4
        (2.5, 3),
        (-2.5, -3),
        (0.5, 1),
        (2.4, 2),
        (79.2, 79),
        (-16.666, -17),
        (0.0, 0),
    ],
)
def test_round_half_away(value, expected):
    assert round_half_away(value) == expected


def test_round_half_away_non_finite():
    assert round_half_away(float("nan")) == 0
    assert round_half_away(float("inf")) == 0


def test_parse_int():
    assert parse_int("12") == 12
    assert parse_int(" 24 ") == 24
    assert parse_int(36) == 36
    assert parse_int("") == 0
    assert parse_int("doce") == 0
    assert parse_int("12.5") == 0
    assert parse_int(None) == 0


def test_parse_float():
    assert parse_float("1000.50") == 1000.5
    assert parse_float(200) == 200.0
    assert parse_float("") == 0.0
    assert parse_float("mil") == 0.0
    assert parse_float("inf") == 0.0
    assert parse_float("nan") == 0.0
    assert parse_float(None) == 0.0


def test_parse_float_oversized_integer():
    """Integers beyond float range price as zero"""
    assert parse_float(10**400) == 0.0
    assert parse_float(-(10**400)) == 0.0
