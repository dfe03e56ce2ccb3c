"""Jurisdiction configuration: bracket tables plus deduction policy."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import InvalidOperation
from types import MappingProxyType
from typing import Any, Dict, Mapping, Sequence, Tuple

from calculator.bracket_walker import ThresholdTable, build_brackets, validate_brackets
from calculator.deduction_policy import DeductionPolicy
from calculator.errors import ConfigurationError
from models.tax_result import TaxBracket
from models.taxpayer import FilingStatus

# Type alias for bracket tables: filing_status -> brackets
BracketTable = Mapping[FilingStatus, Tuple[TaxBracket, ...]]

FEDERAL_CODE = "FEDERAL"


@dataclass(frozen=True)
class JurisdictionConfig:
    """
    Configuration for one jurisdiction (federal or a state) and tax year.

    Holds all the static data needed to calculate income tax: brackets per
    filing status and the deduction policy. Instances are immutable after
    construction and safe to share between threads.
    """

    code: str
    name: str
    brackets: BracketTable
    deduction_policy: DeductionPolicy
    has_income_tax: bool = True

    def __post_init__(self):
        table: Dict[FilingStatus, Tuple[TaxBracket, ...]] = {}
        for status, brackets in dict(self.brackets).items():
            try:
                filing_status = FilingStatus.parse(status)
            except ValueError:
                raise ConfigurationError(
                    f"Unknown filing status '{status}' in {self.code} brackets",
                    details={"jurisdiction": self.code, "filing_status": str(status)},
                ) from None
            try:
                table[filing_status] = validate_brackets(brackets)
            except ConfigurationError as exc:
                exc.details.setdefault("jurisdiction", self.code)
                exc.details.setdefault("filing_status", str(status))
                raise
        object.__setattr__(self, "code", self.code.upper())
        object.__setattr__(self, "brackets", MappingProxyType(table))

    @classmethod
    def from_thresholds(
        cls,
        code: str,
        name: str,
        thresholds: Mapping[Any, ThresholdTable],
        deduction_policy: DeductionPolicy,
    ) -> "JurisdictionConfig":
        """Build from published (threshold, rate) lists per filing status."""
        return cls(
            code=code,
            name=name,
            brackets={status: build_brackets(pairs) for status, pairs in thresholds.items()},
            deduction_policy=deduction_policy,
        )

    @classmethod
    def from_config(cls, code: str, data: Mapping[str, Any]) -> "JurisdictionConfig":
        """
        Build from a parameter-file section.

        Expected shape:
            name: California
            has_income_tax: true
            brackets: {single: [[0, 0.01], [10756, 0.02], ...], ...}
            standard_deduction: {single: 5540, ...}
            itemized_caps: {salt: {kind: unlimited}, ...}
        """
        has_income_tax = bool(data.get("has_income_tax", True))
        brackets = {
            status: _brackets_from_rows(code, status, rows)
            for status, rows in (data.get("brackets") or {}).items()
        }
        if has_income_tax and not brackets:
            raise ConfigurationError(
                f"Jurisdiction {code} has income tax but no brackets",
                details={"jurisdiction": code},
            )
        return cls(
            code=code,
            name=str(data.get("name", code)),
            brackets=brackets,
            deduction_policy=DeductionPolicy.from_config(data),
            has_income_tax=has_income_tax,
        )

    def supports(self, filing_status: FilingStatus) -> bool:
        """Whether this jurisdiction has tables for the filing status."""
        if not self.has_income_tax:
            return True
        return filing_status in self.brackets

    def get_brackets(self, filing_status: FilingStatus) -> Sequence[TaxBracket]:
        if not self.has_income_tax:
            return ()
        return self.brackets[filing_status]

    @property
    def filing_statuses(self) -> Tuple[FilingStatus, ...]:
        if not self.has_income_tax:
            return tuple(FilingStatus)
        return tuple(status for status in FilingStatus if status in self.brackets)


def _brackets_from_rows(code: str, status: Any, rows: Any) -> Tuple[TaxBracket, ...]:
    """Parameter-file rows are [threshold, rate] pairs."""
    pairs = []
    for row in rows or ():
        try:
            threshold, rate_value = row[0], row[1]
        except (IndexError, KeyError, TypeError):
            raise ConfigurationError(
                f"Bracket row for {code}/{status} must be [threshold, rate]: {row!r}",
                details={"jurisdiction": code, "filing_status": str(status), "row": repr(row)},
            ) from None
        pairs.append((threshold, rate_value))
    try:
        return build_brackets(pairs)
    except (InvalidOperation, TypeError, ValueError):
        raise ConfigurationError(
            f"Bracket table for {code}/{status} has non-numeric entries",
            details={"jurisdiction": code, "filing_status": str(status), "rows": repr(rows)},
        ) from None
