"""
Calculation result models.

Engine outputs are frozen dataclasses holding exact Decimals. Rounding to
cents happens once for the total tax, and again only when serializing to
the wire format the tax estimator frontend reads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from models._decimal_utils import wire_money, wire_rate
from models.deductions import DeductionCategory
from models.taxpayer import FilingStatus

_ZERO = Decimal("0")


@dataclass(frozen=True)
class TaxBracket:
    """One marginal-rate band: [lower_bound, upper_bound) taxed at rate."""
    lower_bound: Decimal
    upper_bound: Optional[Decimal]  # None = unbounded top bracket
    rate: Decimal

    @property
    def is_unbounded(self) -> bool:
        return self.upper_bound is None

    def to_dict(self, reached: Optional[Decimal] = None) -> Dict[str, Any]:
        """
        upperBound is always a number. For the unbounded top bracket it is
        the income reached inside the bracket (or the lower bound when no
        income is given) and isUnbounded is true.
        """
        upper = self.upper_bound
        if upper is None:
            upper = reached if reached is not None else self.lower_bound
        return {
            "taxRate": wire_rate(self.rate),
            "lowerBound": wire_money(self.lower_bound),
            "upperBound": wire_money(upper),
            "isUnbounded": self.is_unbounded,
        }


@dataclass(frozen=True)
class BracketCalculation:
    bracket: TaxBracket
    taxable_income_in_bracket: Decimal
    tax_paid_in_bracket: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "taxBracket": self.bracket.to_dict(
                reached=self.bracket.lower_bound + self.taxable_income_in_bracket
            ),
            "taxableIncome": wire_money(self.taxable_income_in_bracket),
            "taxPaid": wire_money(self.tax_paid_in_bracket),
        }


@dataclass(frozen=True)
class ItemizedLine:
    """One category's raw amount, the limit applied, and what survived."""
    category: DeductionCategory
    claimed: Decimal
    allowed: Decimal
    limit: Optional[Decimal] = None  # ceiling, or floor for floor-style rules

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.wire_name,
            "claimed": wire_money(self.claimed),
            "allowed": wire_money(self.allowed),
            "limit": wire_money(self.limit),
        }


@dataclass(frozen=True)
class ItemizedBreakdown:
    lines: Tuple[ItemizedLine, ...] = ()
    total: Decimal = _ZERO

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lines": [line.to_dict() for line in self.lines],
            "total": wire_money(self.total),
        }


@dataclass(frozen=True)
class TaxCalculationInfo:
    """Per-jurisdiction outcome: deduction choice, taxable income, brackets."""
    jurisdiction: str
    tax_paid: Decimal
    taxable_income: Decimal
    standard_deduction: Decimal
    itemized_deductions: Decimal
    deduction_used: Decimal
    deduction_type: str  # "standard" or "itemized"
    bracket_calculations: Tuple[BracketCalculation, ...] = ()
    itemized_breakdown: Optional[ItemizedBreakdown] = None

    @property
    def marginal_rate(self) -> Decimal:
        if not self.bracket_calculations:
            return _ZERO
        return self.bracket_calculations[-1].bracket.rate

    def effective_rate(self, gross_income: Decimal) -> Decimal:
        if gross_income <= 0:
            return _ZERO
        return self.tax_paid / gross_income

    def to_dict(self, gross_income: Optional[Decimal] = None) -> Dict[str, Any]:
        data = {
            "taxPaid": wire_money(self.tax_paid),
            "taxableIncome": wire_money(self.taxable_income),
            "standardDeduction": wire_money(self.standard_deduction),
            "itemizedDeductions": wire_money(self.itemized_deductions),
            "deductionType": self.deduction_type,
            "marginalRate": wire_rate(self.marginal_rate),
            "taxBracketCalculations": [calc.to_dict() for calc in self.bracket_calculations],
        }
        if gross_income is not None:
            data["effectiveRate"] = wire_rate(self.effective_rate(gross_income))
        if self.itemized_breakdown is not None:
            data["itemizedBreakdown"] = self.itemized_breakdown.to_dict()
        return data


@dataclass(frozen=True)
class TaxResult:
    gross_income: Decimal
    jurisdiction_code: str
    filing_status: FilingStatus
    tax_year: int
    federal: TaxCalculationInfo
    state: TaxCalculationInfo
    total_tax_paid: Decimal = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "total_tax_paid", self.federal.tax_paid + self.state.tax_paid)

    @property
    def effective_rate(self) -> Decimal:
        if self.gross_income <= 0:
            return _ZERO
        return self.total_tax_paid / self.gross_income

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the calculate-tax response body."""
        total = wire_money(self.total_tax_paid)
        return {
            "totalTaxPaid": total,
            "taxPaid": total,
            "effectiveRate": wire_rate(self.effective_rate),
            "taxYear": self.tax_year,
            "state": self.jurisdiction_code,
            "filingStatus": self.filing_status.value,
            "taxCalculations": {
                "grossIncome": wire_money(self.gross_income),
                "federalTaxCalculations": self.federal.to_dict(self.gross_income),
                "stateTaxCalculations": self.state.to_dict(self.gross_income),
            },
        }
