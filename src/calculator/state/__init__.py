"""State tax configuration module."""

from calculator.state.no_income_tax import NO_INCOME_TAX_STATES, get_no_income_tax_config
from calculator.state.configs.state_2025 import get_state_configs

__all__ = [
    "NO_INCOME_TAX_STATES",
    "get_no_income_tax_config",
    "get_state_configs",
]
