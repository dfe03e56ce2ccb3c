"""California state tax configuration for 2025."""

from calculator.deduction_policy import CapRule, DeductionPolicy, federal_cap_rules
from calculator.jurisdiction import JurisdictionConfig
from models.deductions import DeductionCategory
from models.taxpayer import FilingStatus


def get_california_config() -> JurisdictionConfig:
    """
    California: 9 brackets from 1% to 12.3%.

    California does not conform to the federal SALT cap, so property and
    other deductible state/local taxes pass through uncapped.
    """
    single = [
        (0, "0.01"),
        (11079, "0.02"),
        (26264, "0.04"),
        (41452, "0.06"),
        (57542, "0.08"),
        (72724, "0.093"),
        (371479, "0.103"),
        (445771, "0.113"),
        (742953, "0.123"),
    ]
    joint = [
        (0, "0.01"),
        (22158, "0.02"),
        (52528, "0.04"),
        (82904, "0.06"),
        (115084, "0.08"),
        (145448, "0.093"),
        (742958, "0.103"),
        (891542, "0.113"),
        (1485906, "0.123"),
    ]
    head_of_household = [
        (0, "0.01"),
        (22173, "0.02"),
        (52530, "0.04"),
        (67716, "0.06"),
        (83805, "0.08"),
        (98990, "0.093"),
        (505208, "0.103"),
        (606251, "0.113"),
        (1010417, "0.123"),
    ]

    rules = federal_cap_rules()
    rules[DeductionCategory.SALT] = CapRule.unlimited()

    policy = DeductionPolicy(
        standard_deduction={
            FilingStatus.SINGLE: 5706,
            FilingStatus.MARRIED_JOINT: 11412,
            FilingStatus.MARRIED_SEPARATE: 5706,
            FilingStatus.HEAD_OF_HOUSEHOLD: 11412,
        },
        cap_rules=rules,
    )

    return JurisdictionConfig.from_thresholds(
        code="CA",
        name="California",
        thresholds={
            FilingStatus.SINGLE: single,
            FilingStatus.MARRIED_JOINT: joint,
            FilingStatus.MARRIED_SEPARATE: single,
            FilingStatus.HEAD_OF_HOUSEHOLD: head_of_household,
        },
        deduction_policy=policy,
    )
