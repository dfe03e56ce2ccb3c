"""Tests for the step-by-step calculation log."""

from calculator.calculation_log import describe_calculation
from calculator.tax_engine import TaxEngine
from models.tax_request import TaxRequest


def _logs(tables, **overrides):
    data = {"gross_income": 85000, "jurisdiction_code": "TX", "filing_status": "single"}
    data.update(overrides)
    return describe_calculation(TaxEngine(tables).calculate(TaxRequest(**data)))


class TestDescribeCalculation:

    def test_standard_deduction_walk(self, simple_tables):
        logs = _logs(simple_tables)

        assert logs[0].startswith("Tax year 2024")
        assert logs[1] == "Gross income: $85,000.00"
        assert "[Federal] Taxable income: $85,000.00 - $14,600.00 = $70,400.00" in logs
        assert "[Federal]   10.00% on $11,000.00 ($0.00 to $11,000.00) = $1,100.00" in logs
        assert "[Federal]   22.00% on $25,675.00 ($44,725.00 and up) = $5,648.50" in logs
        assert "[Federal] Tax: $10,795.50 (marginal rate 22.00%)" in logs
        assert logs[-1] == "Total tax: $10,795.50 (effective rate 12.70%)"

    def test_state_without_income_tax(self, simple_tables):
        logs = _logs(simple_tables)

        assert "[TX]   No income tax" in logs
        assert "[TX] Tax: $0.00 (marginal rate 0.00%)" in logs

    def test_itemized_lines(self, simple_tables):
        logs = _logs(
            simple_tables,
            use_itemized=True,
            itemized_category_amounts={"salt": 15000},
            tithe=3000,
        )

        assert any("using itemized" in line for line in logs)
        assert "[Federal]   State & Local Taxes (Income + Property): claimed $15,000.00, allowed $10,000.00" in logs
        assert any("Charitable" in line and "claimed $3,000.00" in line for line in logs)

    def test_zero_income(self, tables_2025):
        logs = _logs(tables_2025, gross_income=0, jurisdiction_code="CA")

        assert "[Federal]   No income tax" in logs
        assert logs[-1] == "Total tax: $0.00 (effective rate 0.00%)"
