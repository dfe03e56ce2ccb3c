"""
Tests for TaxEngine: deduction election, per-jurisdiction policies,
input validation and result assembly.
"""

from decimal import Decimal

import pytest

from calculator.errors import InvalidInputError
from calculator.tax_engine import TaxEngine
from models.tax_request import TaxRequest
from models.taxpayer import FilingStatus


def _request(**overrides):
    data = {
        "gross_income": 85000,
        "jurisdiction_code": "TX",
        "filing_status": "single",
    }
    data.update(overrides)
    return TaxRequest(**data)


class TestEndToEnd:

    def test_85000_single_standard_deduction(self, simple_tables):
        engine = TaxEngine(simple_tables)

        result = engine.calculate(_request())

        federal = result.federal
        assert federal.standard_deduction == Decimal("14600")
        assert federal.deduction_type == "standard"
        assert federal.taxable_income == Decimal("70400")
        # 1,100 + 4,047 + 5,648.50
        assert federal.tax_paid == Decimal("10795.50")
        assert [c.tax_paid_in_bracket for c in federal.bracket_calculations] == [
            Decimal("1100.00"),
            Decimal("4047.00"),
            Decimal("5648.50"),
        ]
        assert federal.marginal_rate == Decimal("0.22")

        assert result.state.tax_paid == Decimal("0.00")
        assert result.state.bracket_calculations == ()
        assert result.total_tax_paid == Decimal("10795.50")

    def test_2025_california(self, tables_2025):
        engine = TaxEngine(tables_2025)

        result = engine.calculate(_request(gross_income=100000, jurisdiction_code="ca"))

        assert result.jurisdiction_code == "CA"
        assert result.federal.taxable_income == Decimal("84250")
        assert result.federal.tax_paid == Decimal("13449.00")
        assert result.state.taxable_income == Decimal("94294")
        assert result.state.tax_paid == Decimal("5207.98")
        assert result.total_tax_paid == Decimal("18656.98")
        assert result.tax_year == 2025

    def test_total_is_federal_plus_state(self, tables_2025):
        engine = TaxEngine(tables_2025)

        for gross in (0, 15000, 64000, 250000):
            result = engine.calculate(_request(gross_income=gross, jurisdiction_code="NY"))
            assert result.total_tax_paid == result.federal.tax_paid + result.state.tax_paid

    def test_zero_income(self, tables_2025):
        result = TaxEngine(tables_2025).calculate(_request(gross_income=0, jurisdiction_code="CA"))

        assert result.total_tax_paid == Decimal("0.00")
        assert result.effective_rate == Decimal("0")
        assert result.federal.taxable_income == Decimal("0")

    def test_idempotent(self, tables_2025):
        engine = TaxEngine(tables_2025)
        request = _request(
            gross_income=123456.78,
            jurisdiction_code="NY",
            use_itemized=True,
            itemized_category_amounts={"salt": 14000, "mortgage_interest": 9000},
        )

        first = engine.calculate(request)
        second = engine.calculate(request)

        assert first == second
        assert first.to_dict() == second.to_dict()


class TestDeductionElection:

    def test_itemized_total_used_verbatim(self, simple_tables):
        engine = TaxEngine(simple_tables)

        result = engine.calculate(
            _request(gross_income=50000, use_itemized=True, itemized_total=20000)
        )

        assert result.federal.deduction_type == "itemized"
        assert result.federal.deduction_used == Decimal("20000")
        assert result.federal.taxable_income == Decimal("30000")
        assert result.federal.itemized_breakdown is None

    def test_election_is_authoritative_when_smaller(self, simple_tables):
        result = TaxEngine(simple_tables).calculate(
            _request(gross_income=50000, use_itemized=True, itemized_total=5000)
        )

        assert result.federal.deduction_used == Decimal("5000")
        assert result.federal.taxable_income == Decimal("45000")

    def test_choose_larger_deduction_switch(self, simple_tables):
        engine = TaxEngine(simple_tables, choose_larger_deduction=True)

        result = engine.calculate(
            _request(gross_income=50000, use_itemized=True, itemized_total=5000)
        )

        assert result.federal.deduction_type == "standard"
        assert result.federal.deduction_used == Decimal("14600")
        assert result.federal.itemized_deductions == Decimal("5000")

    def test_itemized_ignored_when_not_elected(self, simple_tables):
        result = TaxEngine(simple_tables).calculate(
            _request(gross_income=50000, itemized_total=30000)
        )

        assert result.federal.deduction_type == "standard"
        assert result.federal.itemized_deductions == Decimal("0")

    def test_deduction_larger_than_income_floors_taxable_income(self, simple_tables):
        result = TaxEngine(simple_tables).calculate(
            _request(gross_income=10000, use_itemized=True, itemized_total=25000)
        )

        assert result.federal.taxable_income == Decimal("0")
        assert result.federal.tax_paid == Decimal("0.00")

    def test_each_jurisdiction_applies_its_own_caps(self, tables_2025):
        result = TaxEngine(tables_2025).calculate(
            _request(
                gross_income=100000,
                jurisdiction_code="CA",
                use_itemized=True,
                itemized_category_amounts={"salt": 15000, "mortgageInterest": 12000},
            )
        )

        # Federal caps SALT at 10,000; California does not
        assert result.federal.itemized_deductions == Decimal("22000")
        assert result.state.itemized_deductions == Decimal("27000")
        assert result.federal.taxable_income == Decimal("78000")
        assert result.state.taxable_income == Decimal("73000")
        assert result.federal.itemized_breakdown.total == Decimal("22000")

    def test_external_limits_from_request(self, simple_tables):
        result = TaxEngine(simple_tables).calculate(
            _request(
                gross_income=60000,
                use_itemized=True,
                itemized_category_amounts={"gambling_losses": 4000, "investment_interest": 900},
                gambling_winnings=2500,
                net_investment_income=1200,
            )
        )

        assert result.federal.itemized_deductions == Decimal("3400")

    def test_tithe_added_to_charitable_cash(self, simple_tables):
        result = TaxEngine(simple_tables).calculate(
            _request(
                gross_income=100000,
                use_itemized=True,
                itemized_category_amounts={"charitable_cash": 2000, "mortgage_interest": 9000},
                tithe=8000,
            )
        )

        breakdown = result.federal.itemized_breakdown
        charitable = breakdown.lines[0]
        assert charitable.claimed == Decimal("10000")
        assert charitable.allowed == Decimal("10000")
        assert breakdown.total == Decimal("19000")

    def test_tithe_shares_the_charitable_cap(self, simple_tables):
        result = TaxEngine(simple_tables).calculate(
            _request(
                gross_income=20000,
                use_itemized=True,
                itemized_category_amounts={"charitable_cash": 5000},
                tithe=10000,
            )
        )

        # 60% of 20,000
        assert result.federal.itemized_deductions == Decimal("12000")

    def test_tithe_with_itemized_total(self, simple_tables):
        result = TaxEngine(simple_tables).calculate(
            _request(gross_income=85000, use_itemized=True, itemized_total=12000, tithe=8000)
        )

        assert result.federal.itemized_deductions == Decimal("20000")
        assert result.federal.taxable_income == Decimal("65000")

    def test_tithe_over_cap_with_itemized_total(self, simple_tables):
        result = TaxEngine(simple_tables).calculate(
            _request(gross_income=10000, use_itemized=True, itemized_total=1000, tithe=9000)
        )

        assert result.federal.itemized_deductions == Decimal("7000")

    def test_tithe_ignored_without_itemizing(self, simple_tables):
        result = TaxEngine(simple_tables).calculate(_request(tithe=8000))

        assert result.federal.deduction_type == "standard"
        assert result.federal.itemized_deductions == Decimal("0")


class TestInvalidInput:

    def test_negative_gross_income(self, simple_tables):
        with pytest.raises(InvalidInputError) as exc_info:
            TaxEngine(simple_tables).calculate(_request(gross_income=-1))
        assert exc_info.value.details["field"] == "grossIncome"

    def test_unknown_state(self, simple_tables):
        with pytest.raises(InvalidInputError) as exc_info:
            TaxEngine(simple_tables).calculate(_request(jurisdiction_code="ZZ"))
        assert exc_info.value.details["field"] == "state"

    def test_federal_code_is_not_a_state(self, simple_tables):
        with pytest.raises(InvalidInputError):
            TaxEngine(simple_tables).calculate(_request(jurisdiction_code="US"))

    def test_filing_status_without_tables(self, simple_tables):
        with pytest.raises(InvalidInputError) as exc_info:
            TaxEngine(simple_tables).calculate(
                _request(filing_status=FilingStatus.MARRIED_JOINT)
            )
        assert exc_info.value.details["field"] == "filingStatus"

    def test_negative_itemized_total(self, simple_tables):
        with pytest.raises(InvalidInputError) as exc_info:
            TaxEngine(simple_tables).calculate(
                _request(use_itemized=True, itemized_total=-100)
            )
        assert exc_info.value.details["field"] == "itemizedDeductions"

    def test_negative_tithe(self, simple_tables):
        with pytest.raises(InvalidInputError) as exc_info:
            TaxEngine(simple_tables).calculate(_request(use_itemized=True, tithe=-1))
        assert exc_info.value.details["field"] == "tithe"

    def test_all_errors_reported(self, simple_tables):
        with pytest.raises(InvalidInputError) as exc_info:
            TaxEngine(simple_tables).calculate(
                _request(gross_income=-5, jurisdiction_code="ZZ")
            )
        fields = [issue["field"] for issue in exc_info.value.details["issues"]]
        assert fields == ["grossIncome", "state"]


class TestResultSerialization:

    def test_wire_shape(self, simple_tables):
        data = TaxEngine(simple_tables).calculate(_request()).to_dict()

        assert data["totalTaxPaid"] == 10795.5
        assert data["taxPaid"] == 10795.5
        assert data["taxYear"] == 2024
        assert data["filingStatus"] == "single"

        calcs = data["taxCalculations"]
        assert calcs["grossIncome"] == 85000.0
        federal = calcs["federalTaxCalculations"]
        assert federal["taxableIncome"] == 70400.0
        assert federal["deductionType"] == "standard"
        assert federal["marginalRate"] == 0.22

        top = federal["taxBracketCalculations"][-1]
        assert top["taxBracket"] == {
            "taxRate": 0.22,
            "lowerBound": 44725.0,
            "upperBound": 70400.0,
            "isUnbounded": True,
        }
        assert federal["taxBracketCalculations"][0]["taxBracket"]["upperBound"] == 11000.0
        assert federal["taxBracketCalculations"][0]["taxBracket"]["isUnbounded"] is False
        assert top["taxableIncome"] == 25675.0
        assert top["taxPaid"] == 5648.5

        assert calcs["stateTaxCalculations"]["taxBracketCalculations"] == []
