"""
Tests for progressive bracket walking and bracket table validation.
"""

from decimal import Decimal

import pytest

from calculator.bracket_walker import build_brackets, compute_bracket_tax, validate_brackets
from calculator.errors import ConfigurationError, InvalidInputError
from calculator.tax_tables import TaxTables
from models.taxpayer import FilingStatus
from models.tax_result import TaxBracket


TWO_BRACKETS = build_brackets([(0, "0.10"), (10000, "0.12")])


class TestComputeBracketTax:
    """Tests for compute_bracket_tax()."""

    def test_income_at_upper_bound_stays_in_lower_bracket(self):
        tax, calculations = compute_bracket_tax(10_000, TWO_BRACKETS)

        assert tax == Decimal("1000.00")
        assert len(calculations) == 1
        assert calculations[0].taxable_income_in_bracket == Decimal("10000")

    def test_one_dollar_over_boundary_touches_next_bracket(self):
        tax, calculations = compute_bracket_tax(10_001, TWO_BRACKETS)

        assert tax == Decimal("1000.12")
        assert len(calculations) == 2
        assert calculations[1].taxable_income_in_bracket == Decimal("1")

    def test_zero_income(self):
        tax, calculations = compute_bracket_tax(0, TWO_BRACKETS)

        assert tax == Decimal("0.00")
        assert calculations == ()

    def test_empty_table_yields_zero(self):
        tax, calculations = compute_bracket_tax(50_000, ())

        assert tax == Decimal("0.00")
        assert calculations == ()

    def test_negative_income_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            compute_bracket_tax(-1, TWO_BRACKETS)
        assert exc_info.value.details["field"] == "taxable_income"

    def test_portions_sum_to_taxable_income(self):
        brackets = TaxTables.for_2025().federal.get_brackets(FilingStatus.SINGLE)

        for income in (1, 11_925, 48_476, 250_000, 1_000_000):
            _, calculations = compute_bracket_tax(income, brackets)
            portions = sum(c.taxable_income_in_bracket for c in calculations)
            assert portions == Decimal(income)

    def test_total_is_rounded_sum_of_bracket_taxes(self):
        brackets = build_brackets([(0, "0.10"), (11000, "0.12"), (44725, "0.22")])

        tax, calculations = compute_bracket_tax("70400.05", brackets)

        exact = sum(c.tax_paid_in_bracket for c in calculations)
        assert exact == Decimal("10795.511")
        assert tax == Decimal("10795.51")

    def test_monotonic_in_income(self):
        brackets = TaxTables.for_2025().federal.get_brackets(FilingStatus.MARRIED_JOINT)

        previous = Decimal("-1")
        for income in range(0, 900_000, 7_531):
            tax, _ = compute_bracket_tax(income, brackets)
            assert tax >= previous
            previous = tax

    def test_top_bracket_is_unbounded(self):
        tax, calculations = compute_bracket_tax(25_000, TWO_BRACKETS)

        # 10% on 10,000 + 12% on 15,000
        assert tax == Decimal("2800.00")
        assert calculations[-1].bracket.upper_bound is None

    def test_crosses_bracket_2025_single(self):
        brackets = TaxTables.for_2025().federal.get_brackets(FilingStatus.SINGLE)

        # 10% on first 11,925 = 1,192.50
        # 12% on remaining 8,075 = 969.00
        tax, _ = compute_bracket_tax(20_000, brackets)
        assert tax == Decimal("2161.50")

    def test_crosses_bracket_2025_married_joint(self):
        brackets = TaxTables.for_2025().federal.get_brackets(FilingStatus.MARRIED_JOINT)

        # 10% on first 23,850 = 2,385.00
        # 12% on remaining 6,150 = 738.00
        tax, _ = compute_bracket_tax(30_000, brackets)
        assert tax == Decimal("3123.00")


class TestBuildBrackets:

    def test_thresholds_become_contiguous_bands(self):
        brackets = build_brackets([(0, 0.10), (11925, 0.12), (48475, 0.22)])

        assert [b.lower_bound for b in brackets] == [Decimal("0"), Decimal("11925"), Decimal("48475")]
        assert [b.upper_bound for b in brackets] == [Decimal("11925"), Decimal("48475"), None]
        assert brackets[0].rate == Decimal("0.1")

    def test_empty_table(self):
        assert build_brackets([]) == ()


class TestValidateBrackets:

    def _bracket(self, lower, upper, rate="0.10"):
        return TaxBracket(
            lower_bound=Decimal(lower),
            upper_bound=Decimal(upper) if upper is not None else None,
            rate=Decimal(rate),
        )

    def test_valid_table_passes(self):
        table = [self._bracket(0, 100), self._bracket(100, None, "0.2")]
        assert validate_brackets(table) == tuple(table)

    def test_must_start_at_zero(self):
        with pytest.raises(ConfigurationError):
            validate_brackets([self._bracket(1, None)])

    def test_gap_rejected(self):
        with pytest.raises(ConfigurationError):
            validate_brackets([self._bracket(0, 100), self._bracket(101, None)])

    def test_overlap_rejected(self):
        with pytest.raises(ConfigurationError):
            validate_brackets([self._bracket(0, 100), self._bracket(90, None)])

    def test_unbounded_bracket_must_be_last(self):
        with pytest.raises(ConfigurationError):
            validate_brackets([self._bracket(0, None), self._bracket(100, None)])

    def test_last_bracket_must_be_unbounded(self):
        with pytest.raises(ConfigurationError):
            validate_brackets([self._bracket(0, 100), self._bracket(100, 200)])

    def test_rate_out_of_range(self):
        with pytest.raises(ConfigurationError):
            validate_brackets([self._bracket(0, None, "1.5")])

    def test_descending_thresholds_rejected(self):
        with pytest.raises(ConfigurationError):
            build_brackets([(0, "0.10"), (500, "0.12"), (400, "0.22")])
