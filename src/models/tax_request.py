"""Input model for a single tax calculation."""

from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.deductions import DeductionCategory
from models.taxpayer import FilingStatus


class TaxRequest(BaseModel):
    """
    Everything the engine needs for one federal + state calculation.

    Built fresh per call and frozen afterwards. Range checks that depend on
    the reference tables (known jurisdiction, filing status supported by
    that jurisdiction, non-negative income) happen in the engine so they
    surface as InvalidInputError rather than a model validation error.
    """

    model_config = ConfigDict(frozen=True)

    gross_income: Decimal
    jurisdiction_code: str = Field(description="Two-letter state code, e.g. 'CA'")
    filing_status: FilingStatus = FilingStatus.SINGLE
    use_itemized: bool = False

    # Raw Schedule A amounts before caps
    itemized_category_amounts: Dict[DeductionCategory, Decimal] = Field(default_factory=dict)

    # Pre-aggregated total (the estimator form caps client-side and sends
    # only this). Takes precedence over itemized_category_amounts.
    itemized_total: Optional[Decimal] = None

    # Tithe / cash giving entered on its own; counts as charitable_cash
    tithe: Optional[Decimal] = None

    # Figures that bound gambling losses and investment interest
    gambling_winnings: Optional[Decimal] = None
    net_investment_income: Optional[Decimal] = None

    @field_validator("filing_status", mode="before")
    @classmethod
    def _parse_filing_status(cls, value):
        return FilingStatus.parse(value)

    @field_validator("jurisdiction_code", mode="before")
    @classmethod
    def _normalize_jurisdiction(cls, value):
        return str(value).strip().upper()

    @field_validator("itemized_category_amounts", mode="before")
    @classmethod
    def _parse_categories(cls, value):
        if value is None:
            return {}
        return {DeductionCategory.parse(key): amount for key, amount in dict(value).items()}

    @property
    def external_limits(self) -> Dict[DeductionCategory, Decimal]:
        """Caller-supplied limits for the externally bounded categories."""
        limits: Dict[DeductionCategory, Decimal] = {}
        if self.gambling_winnings is not None:
            limits[DeductionCategory.GAMBLING_LOSSES] = self.gambling_winnings
        if self.net_investment_income is not None:
            limits[DeductionCategory.INVESTMENT_INTEREST] = self.net_investment_income
        return limits
