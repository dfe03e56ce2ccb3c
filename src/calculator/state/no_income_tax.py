"""States without a tax on wage income."""

from __future__ import annotations

from calculator.deduction_policy import DeductionPolicy, federal_cap_rules
from calculator.jurisdiction import JurisdictionConfig
from models.taxpayer import FilingStatus


# States without income tax
NO_INCOME_TAX_STATES = frozenset({
    "AK",  # Alaska
    "FL",  # Florida
    "NV",  # Nevada
    "SD",  # South Dakota
    "TX",  # Texas
    "WA",  # Washington
    "WY",  # Wyoming
    "TN",  # Tennessee (no tax on wages)
    "NH",  # New Hampshire (no tax on wages)
})


def get_no_income_tax_config(code: str, name: str) -> JurisdictionConfig:
    """
    A jurisdiction with an empty bracket table.

    Every filing status is accepted and the walk always yields zero tax;
    deductions are still reported so the breakdown has the same shape as
    for taxing states.
    """
    policy = DeductionPolicy(
        standard_deduction={status: 0 for status in FilingStatus},
        cap_rules=federal_cap_rules(),
    )
    return JurisdictionConfig(
        code=code,
        name=name,
        brackets={},
        deduction_policy=policy,
        has_income_tax=False,
    )
