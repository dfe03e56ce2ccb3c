"""Pytest configuration and fixtures for test suite."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


def _reset_cached_globals():
    """Drop cached settings, config loader and engines."""
    from config.settings import get_settings
    from config.tax_config_loader import clear_config_cache
    from web.routers.calculations import get_engine

    get_settings.cache_clear()
    get_engine.cache_clear()
    clear_config_cache()


@pytest.fixture(autouse=True)
def reset_cached_globals():
    """Each test sees settings and tax tables built from its own environment."""
    _reset_cached_globals()
    yield
    _reset_cached_globals()


# =============================================================================
# TAX TABLE FIXTURES
# =============================================================================

@pytest.fixture
def simple_federal():
    """Three-bracket federal table with a 14,600 single standard deduction."""
    from calculator.deduction_policy import DeductionPolicy, federal_cap_rules
    from calculator.jurisdiction import FEDERAL_CODE, JurisdictionConfig

    return JurisdictionConfig.from_thresholds(
        code=FEDERAL_CODE,
        name="Federal",
        thresholds={
            "single": [(0, "0.10"), (11000, "0.12"), (44725, "0.22")],
        },
        deduction_policy=DeductionPolicy(
            standard_deduction={"single": 14600},
            cap_rules=federal_cap_rules(),
        ),
    )


@pytest.fixture
def simple_tables(simple_federal):
    """Federal single-only tables plus Texas (no income tax)."""
    from calculator.state import get_no_income_tax_config
    from calculator.tax_tables import TaxTables

    return TaxTables(
        tax_year=2024,
        federal=simple_federal,
        states={"TX": get_no_income_tax_config("TX", "Texas")},
    )


@pytest.fixture
def tables_2025():
    from calculator.tax_tables import TaxTables

    return TaxTables.for_2025()
