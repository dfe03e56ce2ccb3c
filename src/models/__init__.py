from .taxpayer import FilingStatus
from .deductions import DeductionCategory
from .tax_request import TaxRequest
from .tax_result import (
    TaxBracket,
    BracketCalculation,
    ItemizedLine,
    ItemizedBreakdown,
    TaxCalculationInfo,
    TaxResult,
)

__all__ = [
    'FilingStatus',
    'DeductionCategory',
    'TaxRequest',
    'TaxBracket',
    'BracketCalculation',
    'ItemizedLine',
    'ItemizedBreakdown',
    'TaxCalculationInfo',
    'TaxResult',
]
