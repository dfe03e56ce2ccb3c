from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, List, Mapping, Optional

from calculator.deduction_policy import DeductionPolicy, federal_cap_rules
from calculator.errors import InvalidInputError
from calculator.jurisdiction import FEDERAL_CODE, JurisdictionConfig
from calculator.state import get_state_configs
from models.taxpayer import FilingStatus

if TYPE_CHECKING:
    from config.tax_config_loader import TaxConfigLoader

logger = logging.getLogger(__name__)

CURRENT_TAX_YEAR = 2025

_FEDERAL_ALIASES = frozenset({FEDERAL_CODE, "US", "FED"})


@dataclass(frozen=True)
class TaxTables:
    """
    All reference data for one tax year: federal plus supported states.

    Immutable once built. The engine receives a TaxTables explicitly, so
    tests can hand it arbitrary bracket tables without touching globals.

    NOTE: Values here should be reviewed annually against published
    figures. The structure keeps updates localized and testable.
    """

    tax_year: int
    federal: JurisdictionConfig
    states: Mapping[str, JurisdictionConfig] = field(default_factory=dict)

    def __post_init__(self):
        states = {code.upper(): config for code, config in dict(self.states).items()}
        object.__setattr__(self, "states", MappingProxyType(states))

    def jurisdiction(self, code: str) -> JurisdictionConfig:
        """
        Look up a jurisdiction by code (case-insensitive).

        Raises:
            InvalidInputError: If the code is not a supported jurisdiction
        """
        key = (code or "").strip().upper()
        if key in _FEDERAL_ALIASES:
            return self.federal
        config = self.states.get(key)
        if config is None:
            raise InvalidInputError(
                f"Unsupported state '{code}'. Supported: {', '.join(self.supported_states())}",
                field="state",
                details={"value": code, "tax_year": self.tax_year},
            )
        return config

    def state(self, code: str) -> JurisdictionConfig:
        """Like jurisdiction(), but the federal aliases are not accepted."""
        key = (code or "").strip().upper()
        if key in _FEDERAL_ALIASES:
            raise InvalidInputError(
                "A state code is required",
                field="state",
                details={"value": code},
            )
        return self.jurisdiction(key)

    def supported_states(self) -> List[str]:
        return sorted(self.states)

    def with_states(self, *configs: JurisdictionConfig) -> "TaxTables":
        """Copy with the given state configs added or replaced."""
        states = dict(self.states)
        states.update({config.code: config for config in configs})
        return replace(self, states=states)

    @staticmethod
    def for_2025() -> "TaxTables":
        # Ordinary income brackets (marginal rates) for tax year 2025 (filing in 2026).
        brackets = {
            FilingStatus.SINGLE: [
                (0, "0.10"),
                (11925, "0.12"),
                (48475, "0.22"),
                (103350, "0.24"),
                (197300, "0.32"),
                (250525, "0.35"),
                (626350, "0.37"),
            ],
            FilingStatus.MARRIED_JOINT: [
                (0, "0.10"),
                (23850, "0.12"),
                (96950, "0.22"),
                (206700, "0.24"),
                (394600, "0.32"),
                (501050, "0.35"),
                (751600, "0.37"),
            ],
            FilingStatus.MARRIED_SEPARATE: [
                (0, "0.10"),
                (11925, "0.12"),
                (48475, "0.22"),
                (103350, "0.24"),
                (197300, "0.32"),
                (250525, "0.35"),
                (375800, "0.37"),
            ],
            FilingStatus.HEAD_OF_HOUSEHOLD: [
                (0, "0.10"),
                (17050, "0.12"),
                (64850, "0.22"),
                (103350, "0.24"),
                (197300, "0.32"),
                (250525, "0.35"),
                (626350, "0.37"),
            ],
        }

        # Standard deduction amounts (tax year 2025). IRS Rev. Proc. 2024-40.
        std = {
            FilingStatus.SINGLE: 15750,
            FilingStatus.MARRIED_JOINT: 31500,
            FilingStatus.MARRIED_SEPARATE: 15750,
            FilingStatus.HEAD_OF_HOUSEHOLD: 23625,
        }

        # Schedule A caps: 60% of AGI for cash charity, $10,000 SALT,
        # 7.5% of AGI medical floor, gambling/investment interest limited
        # to winnings/net investment income (0 when not reported).
        policy = DeductionPolicy(standard_deduction=std, cap_rules=federal_cap_rules())

        federal = JurisdictionConfig.from_thresholds(
            code=FEDERAL_CODE,
            name="Federal",
            thresholds=brackets,
            deduction_policy=policy,
        )
        return TaxTables(tax_year=2025, federal=federal, states=get_state_configs())

    @staticmethod
    def for_year(tax_year: int, loader: Optional["TaxConfigLoader"] = None) -> "TaxTables":
        """
        Reference tables for any supported year.

        2025 is built inline; other years come from the YAML parameter
        files (config/tax_parameters/tax_year_<year>.yaml).

        Raises:
            InvalidInputError: If no tables exist for the year
        """
        if tax_year == CURRENT_TAX_YEAR:
            return TaxTables.for_2025()

        if loader is None:
            from config.tax_config_loader import get_config_loader
            loader = get_config_loader()

        if not loader.has_year(tax_year):
            supported = sorted(set(loader.available_years()) | {CURRENT_TAX_YEAR})
            raise InvalidInputError(
                f"Tax year {tax_year} is not supported. "
                f"Supported years: {', '.join(str(y) for y in supported)}",
                field="taxYear",
                details={"value": tax_year},
            )

        data = loader.load_config(tax_year)
        federal = JurisdictionConfig.from_config(FEDERAL_CODE, data["federal"])
        states = {
            code.upper(): JurisdictionConfig.from_config(code, section)
            for code, section in (data.get("states") or {}).items()
        }
        logger.info(f"Built tax tables for {tax_year}: federal + {len(states)} states")
        return TaxTables(tax_year=tax_year, federal=federal, states=states)

    @staticmethod
    def supported_years(loader: Optional["TaxConfigLoader"] = None) -> List[int]:
        if loader is None:
            from config.tax_config_loader import get_config_loader
            loader = get_config_loader()
        return sorted(set(loader.available_years()) | {CURRENT_TAX_YEAR})
