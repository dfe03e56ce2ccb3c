"""
Human-readable calculation log.

Walks a TaxResult section by section (income, deductions, brackets, tax)
and renders one line per step, for the estimator's "Show detailed
calculation logs" option.
"""

from __future__ import annotations

from typing import List

from calculator.decimal_math import format_money, format_percentage
from calculator.jurisdiction import FEDERAL_CODE
from models.tax_result import TaxCalculationInfo, TaxResult


def describe_calculation(result: TaxResult) -> List[str]:
    """
    Render every step of a calculation as text.

    Examples:
        Gross income: $85,000.00
        [Federal] Taxable income: $85,000.00 - $15,750.00 = $69,250.00
        [Federal]   10.00% on $11,925.00 ($0.00 to $11,925.00) = $1,192.50
    """
    lines = [
        f"Tax year {result.tax_year}, {result.filing_status.label}, state {result.jurisdiction_code}",
        f"Gross income: {format_money(result.gross_income)}",
    ]
    lines.extend(_describe_jurisdiction(result.federal, result))
    lines.extend(_describe_jurisdiction(result.state, result))
    lines.append(
        f"Total tax: {format_money(result.total_tax_paid)} "
        f"(effective rate {format_percentage(result.effective_rate)})"
    )
    return lines


def _describe_jurisdiction(info: TaxCalculationInfo, result: TaxResult) -> List[str]:
    tag = "[Federal]" if info.jurisdiction == FEDERAL_CODE else f"[{info.jurisdiction}]"
    lines = [
        f"{tag} Standard deduction: {format_money(info.standard_deduction)}; "
        f"itemized deductions: {format_money(info.itemized_deductions)}; "
        f"using {info.deduction_type}"
    ]

    if info.itemized_breakdown is not None:
        for line in info.itemized_breakdown.lines:
            lines.append(
                f"{tag}   {line.category.label}: claimed {format_money(line.claimed)}, "
                f"allowed {format_money(line.allowed)}"
            )

    lines.append(
        f"{tag} Taxable income: {format_money(result.gross_income)} - "
        f"{format_money(info.deduction_used)} = {format_money(info.taxable_income)}"
    )

    for calc in info.bracket_calculations:
        bracket = calc.bracket
        if bracket.is_unbounded:
            span = f"{format_money(bracket.lower_bound)} and up"
        else:
            span = f"{format_money(bracket.lower_bound)} to {format_money(bracket.upper_bound)}"
        lines.append(
            f"{tag}   {format_percentage(bracket.rate)} on {format_money(calc.taxable_income_in_bracket)} "
            f"({span}) = {format_money(calc.tax_paid_in_bracket)}"
        )

    if not info.bracket_calculations:
        lines.append(f"{tag}   No income tax")

    lines.append(
        f"{tag} Tax: {format_money(info.tax_paid)} "
        f"(marginal rate {format_percentage(info.marginal_rate)})"
    )
    return lines
