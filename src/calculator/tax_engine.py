"""
Tax Engine - federal plus state income tax for one filer.

Each jurisdiction is handled independently with its own standard deduction,
itemized caps and brackets:

1. Validate the request against the year's tables
2. Standard deduction for the filing status
3. Itemized total, either pre-aggregated or capped per category
4. Deduction election (itemizing is authoritative unless
   choose_larger_deduction is set)
5. Taxable income = max(gross - deduction, 0)
6. Progressive bracket walk, rounded once to pennies
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Tuple

from calculator.bracket_walker import compute_bracket_tax
from calculator.decimal_math import ZERO, max_decimal, non_negative
from calculator.deduction_policy import ItemizedDeductionAggregator
from calculator.jurisdiction import JurisdictionConfig
from calculator.tax_tables import TaxTables
from calculator.validation import TaxRequestValidator
from models.deductions import DeductionCategory
from models.tax_request import TaxRequest
from models.tax_result import ItemizedBreakdown, TaxCalculationInfo, TaxResult

logger = logging.getLogger(__name__)


class TaxEngine:
    """
    Federal + state income tax calculation over immutable reference tables.

    For each jurisdiction:
    - Standard deduction from that jurisdiction's policy
    - Itemized total from the request, or aggregated from raw categories
      under that jurisdiction's caps
    - Deduction used follows the filer's election; with
      choose_larger_deduction the larger of the two is used when itemizing
      is elected
    - Taxable income = max(0, gross - deduction used), walked through the
      jurisdiction's brackets

    The engine holds no mutable state; one instance may serve concurrent
    callers.
    """

    def __init__(
        self,
        tables: Optional[TaxTables] = None,
        choose_larger_deduction: bool = False,
    ):
        self.tables = tables or TaxTables.for_2025()
        self.choose_larger_deduction = choose_larger_deduction
        self._validator = TaxRequestValidator()

    def calculate(self, request: TaxRequest) -> TaxResult:
        """
        Execute the federal and state calculation.

        Raises:
            InvalidInputError: Negative gross income, unknown state, or a
                filing status the jurisdiction has no tables for
            ConfigurationError: Reference data inconsistent with the request
                (e.g. an itemized category without a cap rule)
        """
        self._validator.raise_for_errors(request, self.tables)

        state_config = self.tables.state(request.jurisdiction_code)
        federal = self._calculate_jurisdiction(self.tables.federal, request)
        state = self._calculate_jurisdiction(state_config, request)

        result = TaxResult(
            gross_income=request.gross_income,
            jurisdiction_code=state_config.code,
            filing_status=request.filing_status,
            tax_year=self.tables.tax_year,
            federal=federal,
            state=state,
        )
        logger.debug(
            f"Calculated {self.tables.tax_year} tax for {state_config.code}/"
            f"{request.filing_status.value}: federal={federal.tax_paid} "
            f"state={state.tax_paid} total={result.total_tax_paid}"
        )
        return result

    def _calculate_jurisdiction(
        self,
        jurisdiction: JurisdictionConfig,
        request: TaxRequest,
    ) -> TaxCalculationInfo:
        policy = jurisdiction.deduction_policy
        standard = policy.get_standard_deduction(request.filing_status)

        itemized, breakdown = self._itemized_deductions(jurisdiction, request)

        if request.use_itemized:
            deduction_used = itemized
            deduction_type = "itemized"
            if self.choose_larger_deduction and standard > itemized:
                deduction_used = standard
                deduction_type = "standard"
        else:
            deduction_used = standard
            deduction_type = "standard"

        taxable_income = max_decimal(ZERO, request.gross_income - deduction_used)
        tax_paid, calculations = compute_bracket_tax(
            taxable_income, jurisdiction.get_brackets(request.filing_status)
        )

        return TaxCalculationInfo(
            jurisdiction=jurisdiction.code,
            tax_paid=tax_paid,
            taxable_income=taxable_income,
            standard_deduction=standard,
            itemized_deductions=itemized,
            deduction_used=deduction_used,
            deduction_type=deduction_type,
            bracket_calculations=calculations,
            itemized_breakdown=breakdown,
        )

    def _itemized_deductions(
        self,
        jurisdiction: JurisdictionConfig,
        request: TaxRequest,
    ) -> Tuple[Decimal, Optional[ItemizedBreakdown]]:
        if not request.use_itemized:
            return ZERO, None

        policy = jurisdiction.deduction_policy

        # Pre-aggregated by the caller: used verbatim, plus the separately
        # entered tithe under the charitable cash cap
        if request.itemized_total is not None:
            total = non_negative(request.itemized_total)
            if request.tithe:
                allowed, _ = policy.rule_for(DeductionCategory.CHARITABLE_CASH).apply(
                    request.tithe, request.gross_income
                )
                total += allowed
            return total, None

        amounts = dict(request.itemized_category_amounts)
        if request.tithe:
            charitable = DeductionCategory.CHARITABLE_CASH
            amounts[charitable] = amounts.get(charitable, ZERO) + request.tithe

        breakdown = ItemizedDeductionAggregator(policy).aggregate(
            amounts,
            request.gross_income,
            request.external_limits,
        )
        return breakdown.total, breakdown
