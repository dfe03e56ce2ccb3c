"""New York state tax configuration for 2025."""

from calculator.deduction_policy import DeductionPolicy, federal_cap_rules
from calculator.jurisdiction import JurisdictionConfig
from models.taxpayer import FilingStatus


def get_new_york_config() -> JurisdictionConfig:
    single = [
        (0, "0.04"),
        (8500, "0.045"),
        (11700, "0.0525"),
        (13900, "0.055"),
        (80650, "0.06"),
        (215400, "0.0685"),
        (1077550, "0.0965"),
        (5000000, "0.103"),
        (25000000, "0.109"),
    ]
    joint = [
        (0, "0.04"),
        (17150, "0.045"),
        (23600, "0.0525"),
        (27900, "0.055"),
        (161550, "0.06"),
        (323200, "0.0685"),
        (2155350, "0.0965"),
        (5000000, "0.103"),
        (25000000, "0.109"),
    ]
    head_of_household = [
        (0, "0.04"),
        (12800, "0.045"),
        (17650, "0.0525"),
        (20900, "0.055"),
        (107650, "0.06"),
        (269300, "0.0685"),
        (1616450, "0.0965"),
        (5000000, "0.103"),
        (25000000, "0.109"),
    ]

    policy = DeductionPolicy(
        standard_deduction={
            FilingStatus.SINGLE: 8000,
            FilingStatus.MARRIED_JOINT: 16050,
            FilingStatus.MARRIED_SEPARATE: 8000,
            FilingStatus.HEAD_OF_HOUSEHOLD: 11200,
        },
        cap_rules=federal_cap_rules(),
    )

    return JurisdictionConfig.from_thresholds(
        code="NY",
        name="New York",
        thresholds={
            FilingStatus.SINGLE: single,
            FilingStatus.MARRIED_JOINT: joint,
            FilingStatus.MARRIED_SEPARATE: single,
            FilingStatus.HEAD_OF_HOUSEHOLD: head_of_household,
        },
        deduction_policy=policy,
    )
