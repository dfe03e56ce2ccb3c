from .errors import TaxEngineError, InvalidInputError, ConfigurationError
from .bracket_walker import build_brackets, validate_brackets, compute_bracket_tax
from .deduction_policy import (
    CapKind,
    CapRule,
    DeductionPolicy,
    ItemizedDeductionAggregator,
    aggregate_itemized,
    federal_cap_rules,
)
from .jurisdiction import JurisdictionConfig
from .tax_tables import TaxTables
from .validation import TaxRequestValidator, ValidationIssue
from .tax_engine import TaxEngine
from .state import NO_INCOME_TAX_STATES

__all__ = [
    "TaxEngineError",
    "InvalidInputError",
    "ConfigurationError",
    "build_brackets",
    "validate_brackets",
    "compute_bracket_tax",
    "CapKind",
    "CapRule",
    "DeductionPolicy",
    "ItemizedDeductionAggregator",
    "aggregate_itemized",
    "federal_cap_rules",
    "JurisdictionConfig",
    "TaxTables",
    "TaxRequestValidator",
    "ValidationIssue",
    "TaxEngine",
    "NO_INCOME_TAX_STATES",
]
