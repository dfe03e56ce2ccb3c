"""
Calculations Routes - Federal and state tax estimates.

Routes:
- POST /calculate-tax    - Federal + state tax with per-bracket breakdown
- GET  /jurisdictions    - Supported states, filing statuses and tax years
- GET  /deduction-limits - Effective itemized caps at a given income
"""

from __future__ import annotations

import logging
from decimal import Decimal
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from calculator.calculation_log import describe_calculation
from calculator.tax_engine import TaxEngine
from calculator.tax_tables import TaxTables
from calculator.validation import TaxRequestValidator
from config.settings import get_settings
from config.tax_config_loader import TaxConfigLoader, get_config_loader
from models.deductions import DeductionCategory
from models.tax_request import TaxRequest
from models.taxpayer import FilingStatus
from models._decimal_utils import wire_money

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Calculations"])


# =============================================================================
# REQUEST MODELS
# =============================================================================

class CalculateTaxRequest(BaseModel):
    """Body of POST /calculate-tax, as the tax estimator form sends it."""

    model_config = ConfigDict(populate_by_name=True)

    gross_income: Decimal = Field(..., alias="grossIncome", description="Gross income (>= 0)")
    state: str = Field(..., description="Two-letter state code")
    filing_status: FilingStatus = Field(default=FilingStatus.SINGLE, alias="filingStatus")
    use_itemized: bool = Field(
        default=False,
        validation_alias=AliasChoices("useItemizedDeductions", "useItemized", "use_itemized"),
    )
    itemized_total: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("itemizedDeductions", "totalItemizedDeductions", "itemized_total"),
        description="Pre-aggregated itemized total; used verbatim when present",
    )
    itemized: Dict[DeductionCategory, Decimal] = Field(
        default_factory=dict,
        description="Raw category amounts keyed by form field name",
    )
    gambling_winnings: Optional[Decimal] = Field(default=None, alias="gamblingWinnings")
    net_investment_income: Optional[Decimal] = Field(default=None, alias="netInvestmentIncome")
    tithe: Optional[Decimal] = Field(default=None, description="Cash giving; counts as charitable cash")
    tax_year: Optional[int] = Field(default=None, alias="taxYear")
    log_calculations: bool = Field(default=False, alias="logCalculations")

    @field_validator("filing_status", mode="before")
    @classmethod
    def _parse_filing_status(cls, value):
        return FilingStatus.parse(value)

    @field_validator("itemized", mode="before")
    @classmethod
    def _parse_itemized(cls, value):
        if value is None:
            return {}
        parsed = {}
        for key, amount in dict(value).items():
            # The form submits blank inputs as empty strings
            if amount is None or (isinstance(amount, str) and not amount.strip()):
                amount = 0
            parsed[DeductionCategory.parse(key)] = amount
        return parsed

    def to_tax_request(self) -> TaxRequest:
        return TaxRequest(
            gross_income=self.gross_income,
            jurisdiction_code=self.state,
            filing_status=self.filing_status,
            use_itemized=self.use_itemized,
            itemized_category_amounts=self.itemized,
            itemized_total=self.itemized_total,
            tithe=self.tithe,
            gambling_winnings=self.gambling_winnings,
            net_investment_income=self.net_investment_income,
        )


# =============================================================================
# ENGINE PROVIDER
# =============================================================================

def _config_loader() -> TaxConfigLoader:
    settings = get_settings()
    if settings.tax_parameters_dir:
        return TaxConfigLoader(settings.tax_parameters_dir)
    return get_config_loader()


@lru_cache(maxsize=8)
def get_engine(tax_year: int) -> TaxEngine:
    """One engine per tax year; tables are immutable so instances are shared."""
    settings = get_settings()
    tables = TaxTables.for_year(tax_year, loader=_config_loader())
    logger.info(f"Initialized tax engine for {tax_year} ({len(tables.states)} states)")
    return TaxEngine(tables, choose_larger_deduction=settings.choose_larger_deduction)


def _resolve_year(tax_year: Optional[int]) -> int:
    return tax_year or get_settings().default_tax_year


# =============================================================================
# ROUTES
# =============================================================================

@router.post("/calculate-tax")
def calculate_tax(body: CalculateTaxRequest):
    """
    Calculate federal and state income tax.

    Itemizing applies only when useItemizedDeductions is true. A
    pre-aggregated itemizedDeductions total is used as given; otherwise the
    raw category amounts in "itemized" are capped per jurisdiction. A tithe
    is added to charitable cash giving and capped with it. With
    logCalculations the response carries a step-by-step "logs" list.
    """
    engine = get_engine(_resolve_year(body.tax_year))
    request = body.to_tax_request()

    result = engine.calculate(request)

    warnings = [
        issue.to_dict()
        for issue in TaxRequestValidator().validate(request, engine.tables)
        if issue.severity == "warning"
    ]

    content: Dict[str, Any] = result.to_dict()
    content["warnings"] = warnings
    content["logs"] = describe_calculation(result) if body.log_calculations else []
    return JSONResponse(content)


@router.get("/jurisdictions")
def list_jurisdictions(tax_year: Optional[int] = Query(default=None, alias="taxYear")):
    """Supported states, filing statuses and tax years."""
    year = _resolve_year(tax_year)
    tables = get_engine(year).tables

    states = [
        {
            "code": config.code,
            "name": config.name,
            "hasIncomeTax": config.has_income_tax,
            "filingStatuses": [status.value for status in config.filing_statuses],
        }
        for config in (tables.states[code] for code in tables.supported_states())
    ]

    return {
        "taxYear": year,
        "taxYears": TaxTables.supported_years(_config_loader()),
        "states": states,
        "filingStatuses": [
            {"value": status.value, "label": status.label} for status in FilingStatus
        ],
    }


@router.get("/deduction-limits")
def deduction_limits(
    gross_income: Decimal = Query(..., alias="grossIncome", ge=0),
    state: str = Query(...),
    gambling_winnings: Optional[Decimal] = Query(default=None, alias="gamblingWinnings"),
    net_investment_income: Optional[Decimal] = Query(default=None, alias="netInvestmentIncome"),
    tax_year: Optional[int] = Query(default=None, alias="taxYear"),
):
    """
    Effective itemized limits at this income, for "deductible up to" hints.

    Floor-style categories (medical) report the floor below which nothing
    is deductible.
    """
    tables = get_engine(_resolve_year(tax_year)).tables
    state_config = tables.state(state)

    external: Dict[DeductionCategory, Decimal] = {}
    if gambling_winnings is not None:
        external[DeductionCategory.GAMBLING_LOSSES] = gambling_winnings
    if net_investment_income is not None:
        external[DeductionCategory.INVESTMENT_INTEREST] = net_investment_income

    def _limits(config) -> Dict[str, Any]:
        policy = config.deduction_policy
        limits = policy.category_limits(gross_income, external)
        return {
            category.wire_name: {
                "label": category.label,
                "kind": policy.cap_rules[category].kind.value,
                "limit": wire_money(limit),
            }
            for category, limit in limits.items()
        }

    return {
        "grossIncome": wire_money(gross_income),
        "state": state_config.code,
        "federal": _limits(tables.federal),
        "stateLimits": _limits(state_config),
    }
