"""
Progressive bracket walking.

Reference data is written the way the IRS publishes it: a list of
(threshold, rate) pairs where each rate applies from its threshold up to
the next one. build_brackets() turns that into explicit TaxBracket bands,
so contiguity holds by construction; validate_brackets() guards tables
assembled by hand.

Boundary rule: lower bounds are inclusive and upper bounds exclusive, so
income exactly at an upper bound is taxed entirely in the bands below it.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Sequence, Tuple

from calculator.decimal_math import Numeric, ZERO, money, to_decimal
from calculator.errors import ConfigurationError, InvalidInputError
from models.tax_result import BracketCalculation, TaxBracket

logger = logging.getLogger(__name__)

# Type alias for published bracket tables: [(threshold, rate), ...]
ThresholdTable = Sequence[Tuple[Numeric, Numeric]]


def build_brackets(thresholds: ThresholdTable) -> Tuple[TaxBracket, ...]:
    """
    Build contiguous brackets from (threshold, rate) pairs.

    Examples:
        >>> [b.upper_bound for b in build_brackets([(0, 0.10), (11925, 0.12)])]
        [Decimal('11925'), None]
    """
    pairs = [(to_decimal(floor), to_decimal(rate_value)) for floor, rate_value in thresholds]
    brackets: List[TaxBracket] = []
    for idx, (floor, rate_value) in enumerate(pairs):
        ceiling = pairs[idx + 1][0] if idx + 1 < len(pairs) else None
        brackets.append(TaxBracket(lower_bound=floor, upper_bound=ceiling, rate=rate_value))
    return validate_brackets(brackets)


def validate_brackets(brackets: Sequence[TaxBracket]) -> Tuple[TaxBracket, ...]:
    """
    Check the bracket table invariant.

    Brackets must start at 0, be sorted ascending, touch without gaps or
    overlaps, carry rates in [0, 1], and only the last may be unbounded.
    An empty table is valid (jurisdictions without an income tax).

    Raises:
        ConfigurationError: If the table breaks any of the above
    """
    table = tuple(brackets)
    if not table:
        return table

    if table[0].lower_bound != ZERO:
        raise ConfigurationError(
            "First tax bracket must start at 0",
            details={"lower_bound": str(table[0].lower_bound)},
        )

    for idx, bracket in enumerate(table):
        if not ZERO <= bracket.rate <= Decimal("1"):
            raise ConfigurationError(
                f"Tax bracket rate out of range: {bracket.rate}",
                details={"index": idx, "rate": str(bracket.rate)},
            )
        is_last = idx == len(table) - 1
        if bracket.upper_bound is None:
            if not is_last:
                raise ConfigurationError(
                    "Only the top tax bracket may be unbounded",
                    details={"index": idx},
                )
            continue
        if bracket.upper_bound <= bracket.lower_bound:
            raise ConfigurationError(
                "Tax bracket upper bound must exceed its lower bound",
                details={"index": idx, "lower_bound": str(bracket.lower_bound),
                         "upper_bound": str(bracket.upper_bound)},
            )
        if is_last:
            raise ConfigurationError(
                "Top tax bracket must be unbounded",
                details={"index": idx, "upper_bound": str(bracket.upper_bound)},
            )
        next_floor = table[idx + 1].lower_bound
        if next_floor != bracket.upper_bound:
            raise ConfigurationError(
                "Tax brackets must be contiguous and non-overlapping",
                details={"index": idx, "upper_bound": str(bracket.upper_bound),
                         "next_lower_bound": str(next_floor)},
            )

    return table


def compute_bracket_tax(
    taxable_income: Numeric,
    brackets: Sequence[TaxBracket],
) -> Tuple[Decimal, Tuple[BracketCalculation, ...]]:
    """
    Calculate tax using progressive brackets.

    Each bracket taxes the slice of income in [lower_bound,
    min(upper_bound, taxable_income)). Per-bracket amounts stay exact;
    only the total is rounded to pennies.

    Args:
        taxable_income: Income after deductions (must be >= 0)
        brackets: Contiguous brackets in ascending order

    Returns:
        (total tax rounded to pennies, calculations for touched brackets)

    Examples:
        >>> table = build_brackets([(0, "0.10"), (10000, "0.12")])
        >>> compute_bracket_tax(10000, table)[0]
        Decimal('1000.00')
    """
    income = to_decimal(taxable_income)
    if income < ZERO:
        raise InvalidInputError(
            "Taxable income cannot be negative",
            field="taxable_income",
            details={"value": str(income)},
        )

    total_tax = ZERO
    calculations: List[BracketCalculation] = []

    for bracket in brackets:
        if income <= bracket.lower_bound:
            break

        if bracket.upper_bound is None or income < bracket.upper_bound:
            top = income
        else:
            top = bracket.upper_bound

        portion = top - bracket.lower_bound
        bracket_tax = portion * bracket.rate
        total_tax += bracket_tax
        calculations.append(
            BracketCalculation(
                bracket=bracket,
                taxable_income_in_bracket=portion,
                tax_paid_in_bracket=bracket_tax,
            )
        )

    return money(total_tax), tuple(calculations)
