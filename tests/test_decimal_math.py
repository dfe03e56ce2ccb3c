from decimal import Decimal, InvalidOperation

import pytest

from calculator.decimal_math import (
    format_money,
    format_percentage,
    max_decimal,
    money,
    non_negative,
    percent,
    sum_decimal,
    to_decimal,
)


class TestConversion:

    def test_float_goes_through_str(self):
        assert to_decimal(0.1) == Decimal("0.1")
        assert to_decimal(0.1) + to_decimal(0.2) == Decimal("0.3")

    def test_boolean_rejected(self):
        with pytest.raises(InvalidOperation):
            to_decimal(True)


class TestRounding:

    def test_money_rounds_half_up(self):
        assert money("5648.505") == Decimal("5648.51")
        assert money("0.004") == Decimal("0.00")
        assert str(money(100)) == "100.00"

    def test_percent(self):
        assert percent(80000, "0.075") == Decimal("6000")

    def test_non_negative(self):
        assert non_negative(-3) == Decimal("0")
        assert non_negative("12.5") == Decimal("12.5")

    def test_max_decimal(self):
        assert max_decimal(0, -1) == Decimal("0")
        assert max_decimal("2.5", 3) == Decimal("3")

    def test_sum_is_exact(self):
        assert sum_decimal([0.1] * 10) == Decimal("1.0")


class TestFormatting:

    def test_format_money(self):
        assert format_money(1234567.891) == "$1,234,567.89"

    def test_format_percentage(self):
        assert format_percentage("0.2245") == "22.45%"
        assert format_percentage("0.1", decimal_places=0) == "10%"
