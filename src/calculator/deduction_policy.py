"""
Standard deduction amounts and itemized deduction caps.

A DeductionPolicy belongs to one jurisdiction. It holds the standard
deduction per filing status and one CapRule per itemized category. Rules
are data (inline tables or YAML), so a policy that omits a category is a
configuration defect and surfaces as ConfigurationError.

Cap kinds:
- income_percent_limit: min(amount, rate * AGI)      e.g. cash charity, 60%
- flat_limit:           min(amount, cap)             e.g. SALT, $10,000
- unlimited:            amount                       e.g. mortgage interest
- income_percent_floor: max(0, amount - rate * AGI)  e.g. medical, 7.5%
- external_limit:       min(amount, caller figure)   e.g. gambling losses
                        up to winnings; falls back to the rule's value
                        when the caller supplies no figure

Negative claimed amounts are floored to zero before any rule applies.
Gross income stands in for AGI.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from calculator.decimal_math import Numeric, ONE, ZERO, non_negative, percent, sum_decimal, to_decimal
from calculator.errors import ConfigurationError
from models.deductions import DeductionCategory
from models.tax_result import ItemizedBreakdown, ItemizedLine
from models.taxpayer import FilingStatus

logger = logging.getLogger(__name__)

CategoryKey = Union[DeductionCategory, str]


class CapKind(str, Enum):
    INCOME_PERCENT_LIMIT = "income_percent_limit"
    FLAT_LIMIT = "flat_limit"
    UNLIMITED = "unlimited"
    INCOME_PERCENT_FLOOR = "income_percent_floor"
    EXTERNAL_LIMIT = "external_limit"


_RATE_KINDS = frozenset({CapKind.INCOME_PERCENT_LIMIT, CapKind.INCOME_PERCENT_FLOOR})


@dataclass(frozen=True)
class CapRule:
    """How much of one itemized category is deductible."""
    kind: CapKind
    value: Optional[Decimal] = None

    def __post_init__(self):
        if self.value is not None:
            try:
                object.__setattr__(self, "value", to_decimal(self.value))
            except (InvalidOperation, TypeError, ValueError):
                raise ConfigurationError(
                    f"Cap rule '{self.kind.value}' has a non-numeric value: {self.value!r}",
                    details={"kind": self.kind.value, "value": repr(self.value)},
                ) from None
        if self.kind != CapKind.UNLIMITED and self.value is None:
            raise ConfigurationError(
                f"Cap rule '{self.kind.value}' requires a value",
                details={"kind": self.kind.value},
            )
        # Caps only ever reduce a claimed amount toward zero
        if self.value is not None and self.value < ZERO:
            raise ConfigurationError(
                f"Cap rule '{self.kind.value}' value cannot be negative: {self.value}",
                details={"kind": self.kind.value, "value": str(self.value)},
            )
        if self.kind in _RATE_KINDS and self.value > ONE:
            raise ConfigurationError(
                f"Cap rule '{self.kind.value}' rate must be between 0 and 1: {self.value}",
                details={"kind": self.kind.value, "value": str(self.value)},
            )

    @classmethod
    def income_percent_limit(cls, rate_value: Numeric) -> "CapRule":
        return cls(CapKind.INCOME_PERCENT_LIMIT, rate_value)

    @classmethod
    def flat_limit(cls, cap: Numeric) -> "CapRule":
        return cls(CapKind.FLAT_LIMIT, cap)

    @classmethod
    def unlimited(cls) -> "CapRule":
        return cls(CapKind.UNLIMITED)

    @classmethod
    def income_percent_floor(cls, rate_value: Numeric) -> "CapRule":
        return cls(CapKind.INCOME_PERCENT_FLOOR, rate_value)

    @classmethod
    def external_limit(cls, default: Numeric = 0) -> "CapRule":
        """Cap at a caller-supplied figure; ``default`` applies when none is given."""
        return cls(CapKind.EXTERNAL_LIMIT, default)

    @classmethod
    def from_config(cls, data: Mapping[str, Any]) -> "CapRule":
        """Build a rule from a parameter-file entry like {kind: flat_limit, value: 10000}."""
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Invalid cap rule: {data!r}",
                details={"rule": repr(data)},
            )
        rule = {str(k): str(v) for k, v in data.items()}
        try:
            kind = CapKind(str(data["kind"]).lower())
        except (KeyError, ValueError):
            raise ConfigurationError(
                f"Invalid cap rule: {rule}",
                details={"rule": rule},
            ) from None
        try:
            return cls(kind, data.get("value"))
        except ConfigurationError as exc:
            exc.details.setdefault("rule", rule)
            raise

    def limit_for(self, gross_income: Decimal, external: Optional[Decimal] = None) -> Optional[Decimal]:
        """
        The ceiling this rule imposes (or the floor, for floor rules).

        None means no ceiling.
        """
        if self.kind == CapKind.INCOME_PERCENT_LIMIT:
            return percent(non_negative(gross_income), self.value)
        if self.kind == CapKind.FLAT_LIMIT:
            return self.value
        if self.kind == CapKind.INCOME_PERCENT_FLOOR:
            return percent(non_negative(gross_income), self.value)
        if self.kind == CapKind.EXTERNAL_LIMIT:
            return non_negative(external if external is not None else self.value)
        return None

    def apply(
        self,
        amount: Numeric,
        gross_income: Decimal,
        external: Optional[Decimal] = None,
    ) -> Tuple[Decimal, Optional[Decimal]]:
        """Return (allowed amount, limit used)."""
        claimed = non_negative(amount)
        limit = self.limit_for(gross_income, external)
        if limit is None:
            return claimed, None
        if self.kind == CapKind.INCOME_PERCENT_FLOOR:
            return non_negative(claimed - limit), limit
        return min(claimed, limit), limit


def federal_cap_rules(
    charitable_cash_rate: Numeric = "0.60",
    salt_cap: Numeric = 10000,
    medical_floor_rate: Numeric = "0.075",
    gambling_default_limit: Numeric = 0,
    investment_default_limit: Numeric = 0,
) -> Dict[DeductionCategory, CapRule]:
    """The Schedule A caps the tax estimator applies."""
    return {
        DeductionCategory.CHARITABLE_CASH: CapRule.income_percent_limit(charitable_cash_rate),
        DeductionCategory.SALT: CapRule.flat_limit(salt_cap),
        DeductionCategory.MORTGAGE_INTEREST: CapRule.unlimited(),
        DeductionCategory.MEDICAL_EXPENSES: CapRule.income_percent_floor(medical_floor_rate),
        DeductionCategory.GAMBLING_LOSSES: CapRule.external_limit(gambling_default_limit),
        DeductionCategory.INVESTMENT_INTEREST: CapRule.external_limit(investment_default_limit),
    }


def _category(key: CategoryKey) -> DeductionCategory:
    try:
        return DeductionCategory.parse(key)
    except ValueError:
        raise ConfigurationError(
            f"No deduction policy rule for category '{key}'",
            details={"category": str(key)},
        ) from None


@dataclass(frozen=True)
class DeductionPolicy:
    """Per-jurisdiction deduction rules."""

    standard_deduction: Mapping[FilingStatus, Decimal]
    cap_rules: Mapping[DeductionCategory, CapRule] = field(default_factory=dict)

    def __post_init__(self):
        standard = {}
        for status, amount in dict(self.standard_deduction).items():
            try:
                standard[FilingStatus.parse(status)] = to_decimal(amount)
            except (InvalidOperation, TypeError, ValueError):
                raise ConfigurationError(
                    f"Invalid standard deduction entry {status}: {amount!r}",
                    details={"filing_status": str(status), "amount": repr(amount)},
                ) from None
        rules = {_category(key): rule for key, rule in dict(self.cap_rules).items()}
        object.__setattr__(self, "standard_deduction", MappingProxyType(standard))
        object.__setattr__(self, "cap_rules", MappingProxyType(rules))

    @classmethod
    def from_config(cls, data: Mapping[str, Any]) -> "DeductionPolicy":
        """
        Build a policy from parameter-file data.

        Expected shape:
            standard_deduction: {single: 14600, ...}
            itemized_caps: {salt: {kind: flat_limit, value: 10000}, ...}
        """
        rules = {
            key: CapRule.from_config(rule)
            for key, rule in (data.get("itemized_caps") or {}).items()
        }
        return cls(standard_deduction=data.get("standard_deduction") or {}, cap_rules=rules)

    def get_standard_deduction(self, filing_status: FilingStatus) -> Decimal:
        """
        Raises:
            ConfigurationError: If the policy has no amount for the status
        """
        try:
            return self.standard_deduction[filing_status]
        except KeyError:
            raise ConfigurationError(
                f"No standard deduction configured for '{filing_status.value}'",
                details={"filing_status": filing_status.value},
            ) from None

    def rule_for(self, category: CategoryKey) -> CapRule:
        """
        Raises:
            ConfigurationError: If the category has no rule in this policy
        """
        resolved = _category(category)
        rule = self.cap_rules.get(resolved)
        if rule is None:
            raise ConfigurationError(
                f"No deduction policy rule for category '{resolved.value}'",
                details={"category": resolved.value},
            )
        return rule

    def category_limits(
        self,
        gross_income: Numeric,
        external_limits: Optional[Mapping[DeductionCategory, Numeric]] = None,
    ) -> Dict[DeductionCategory, Optional[Decimal]]:
        """Effective ceiling (or floor) per category at this income."""
        gross = to_decimal(gross_income)
        external = {k: to_decimal(v) for k, v in (external_limits or {}).items()}
        return {
            category: rule.limit_for(gross, external.get(category))
            for category, rule in self.cap_rules.items()
        }


class ItemizedDeductionAggregator:
    """Applies a DeductionPolicy's caps to raw category amounts."""

    def __init__(self, policy: DeductionPolicy):
        self.policy = policy

    def aggregate(
        self,
        category_amounts: Mapping[CategoryKey, Numeric],
        gross_income: Numeric,
        external_limits: Optional[Mapping[CategoryKey, Numeric]] = None,
    ) -> ItemizedBreakdown:
        """
        Cap each category, then sum.

        Lines come back in DeductionCategory declaration order regardless
        of input order, so identical inputs serialize identically.

        Raises:
            ConfigurationError: For a category the policy has no rule for
        """
        gross = to_decimal(gross_income)
        external = {_category(k): to_decimal(v) for k, v in (external_limits or {}).items()}

        claimed: Dict[DeductionCategory, Decimal] = {}
        for key, amount in category_amounts.items():
            category = _category(key)
            claimed[category] = claimed.get(category, ZERO) + to_decimal(amount)

        lines: List[ItemizedLine] = []
        for category in DeductionCategory:
            if category not in claimed:
                continue
            rule = self.policy.rule_for(category)
            allowed, limit = rule.apply(claimed[category], gross, external.get(category))
            lines.append(
                ItemizedLine(
                    category=category,
                    claimed=non_negative(claimed[category]),
                    allowed=allowed,
                    limit=limit,
                )
            )

        total = sum_decimal(line.allowed for line in lines)
        logger.debug(f"Itemized deductions aggregated: {len(lines)} categories, total={total}")
        return ItemizedBreakdown(lines=tuple(lines), total=total)


def aggregate_itemized(
    category_amounts: Mapping[CategoryKey, Numeric],
    gross_income: Numeric,
    policy: DeductionPolicy,
    external_limits: Optional[Mapping[CategoryKey, Numeric]] = None,
) -> Decimal:
    """
    Sum of capped itemized deductions.

    Examples:
        >>> policy = DeductionPolicy({"single": 14600}, federal_cap_rules())
        >>> aggregate_itemized({"salt": 15000}, 100000, policy)
        Decimal('10000')
    """
    breakdown = ItemizedDeductionAggregator(policy).aggregate(
        category_amounts, gross_income, external_limits
    )
    return breakdown.total
