"""
Request validation for the tax engine.

Checks run before any calculation. Errors abort the request with an
InvalidInputError; warnings are returned to the caller alongside the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from calculator.errors import InvalidInputError
from calculator.tax_tables import TaxTables
from models.tax_request import TaxRequest


@dataclass
class ValidationIssue:
    field: str
    message: str
    severity: str = "error"  # "error" | "warning"

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message, "severity": self.severity}


class TaxRequestValidator:
    """
    Collects every problem with a TaxRequest against one year's tables.

    Errors cover negative amounts, unknown states and filing statuses that
    have no brackets. Warnings flag itemized amounts that will be ignored.
    """

    def validate(self, request: TaxRequest, tables: TaxTables) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []

        if request.gross_income < 0:
            issues.append(ValidationIssue("grossIncome", "Gross income cannot be negative."))

        try:
            jurisdiction = tables.state(request.jurisdiction_code)
        except InvalidInputError as exc:
            issues.append(ValidationIssue("state", exc.message))
        else:
            if not jurisdiction.supports(request.filing_status):
                issues.append(
                    ValidationIssue(
                        "filingStatus",
                        f"Filing status '{request.filing_status.value}' is not supported "
                        f"for {jurisdiction.name}.",
                    )
                )

        if not tables.federal.supports(request.filing_status):
            issues.append(
                ValidationIssue(
                    "filingStatus",
                    f"Filing status '{request.filing_status.value}' has no federal tax tables.",
                )
            )

        if request.itemized_total is not None and request.itemized_total < 0:
            issues.append(ValidationIssue("itemizedDeductions", "Itemized deductions cannot be negative."))

        if request.tithe is not None and request.tithe < 0:
            issues.append(ValidationIssue("tithe", "Tithe cannot be negative."))

        # Election sanity checks
        if not request.use_itemized and (
            request.itemized_category_amounts or request.itemized_total or request.tithe
        ):
            issues.append(
                ValidationIssue(
                    "useItemizedDeductions",
                    "Itemized amounts were provided but itemizing was not elected; "
                    "the standard deduction will be used.",
                    severity="warning",
                )
            )

        if request.itemized_total is not None and request.itemized_category_amounts:
            issues.append(
                ValidationIssue(
                    "itemized",
                    "Both an itemized total and category amounts were provided; the total is used.",
                    severity="warning",
                )
            )

        return issues

    def raise_for_errors(self, request: TaxRequest, tables: TaxTables) -> List[ValidationIssue]:
        """
        Validate and raise on the first error-severity issues.

        Returns:
            The remaining warnings

        Raises:
            InvalidInputError: Naming the first offending field, with every
                error listed in details["issues"]
        """
        issues = self.validate(request, tables)
        errors = [issue for issue in issues if issue.severity == "error"]
        if errors:
            first = errors[0]
            raise InvalidInputError(
                first.message,
                field=first.field,
                details={"issues": [issue.to_dict() for issue in errors]},
            )
        return issues
