"""Tests for money helpers."""

from decimal import Decimal

from costbook.utils.money import (
    all_equal,
    first_max_index,
    first_min_index,
    piece_divisor,
    round2,
    to_decimal,
    weight_divisor_kg,
)


def test_round2_half_up():
    assert round2(Decimal("2.345")) == Decimal("2.35")
    assert round2(Decimal("2.344")) == Decimal("2.34")
    assert round2(Decimal("-2.345")) == Decimal("-2.35")
    assert round2(None) == Decimal("0.00")


def test_to_decimal_goes_through_str_for_floats():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(3) == Decimal("3")


def test_piece_divisor_floor():
    assert piece_divisor(12) == Decimal("12")
    assert piece_divisor(0) == Decimal("1")
    assert piece_divisor(None) == Decimal("1")
    assert piece_divisor(-4) == Decimal("1")


def test_weight_divisor():
    assert weight_divisor_kg(Decimal("1500"), [Decimal("10")]) == Decimal("1.5")
    assert weight_divisor_kg(Decimal("0"), [Decimal("200"), Decimal("300")]) == Decimal("0.5")
    assert weight_divisor_kg(None, []) == Decimal("0.001")


def test_first_extremes():
    values = [Decimal("1"), Decimal("5"), Decimal("-2"), Decimal("5"), Decimal("-2")]
    assert first_max_index(values) == 1
    assert first_min_index(values) == 2


def test_all_equal():
    assert all_equal([Decimal("100")] * 12)
    assert all_equal([Decimal("1.0"), Decimal("1.00")])
    assert not all_equal([Decimal("1"), Decimal("2")])
