"""State tax configurations for tax year 2025."""

from __future__ import annotations

from typing import Dict

from calculator.jurisdiction import JurisdictionConfig
from calculator.state.configs.state_2025.california import get_california_config
from calculator.state.configs.state_2025.new_york import get_new_york_config
from calculator.state.no_income_tax import get_no_income_tax_config


def get_state_configs() -> Dict[str, JurisdictionConfig]:
    """All state configurations shipped for 2025, keyed by state code."""
    configs = [
        get_california_config(),
        get_new_york_config(),
        get_no_income_tax_config("TX", "Texas"),
        get_no_income_tax_config("FL", "Florida"),
    ]
    return {config.code: config for config in configs}


__all__ = ["get_state_configs", "get_california_config", "get_new_york_config"]
