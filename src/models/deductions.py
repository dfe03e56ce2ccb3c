from enum import Enum


class DeductionCategory(str, Enum):
    """
    Itemized deduction categories (Schedule A lines the estimator collects).

    Each category carries the field name the tax estimator form submits,
    so payloads keyed either way resolve to the same member.
    """
    CHARITABLE_CASH = "charitable_cash"
    SALT = "salt"
    MORTGAGE_INTEREST = "mortgage_interest"
    MEDICAL_EXPENSES = "medical_expenses"
    GAMBLING_LOSSES = "gambling_losses"
    INVESTMENT_INTEREST = "investment_interest"

    @property
    def wire_name(self) -> str:
        return _WIRE_NAMES[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value) -> "DeductionCategory":
        """
        Resolve a category from its value or its form field name.

        Raises:
            ValueError: If the key names no known category
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip()
        if key in _BY_WIRE_NAME:
            return _BY_WIRE_NAME[key]
        try:
            return cls(key.lower())
        except ValueError:
            raise ValueError(f"Unknown itemized deduction category '{value}'") from None


_WIRE_NAMES = {
    DeductionCategory.CHARITABLE_CASH: "charitableContributionsCash",
    DeductionCategory.SALT: "salt",
    DeductionCategory.MORTGAGE_INTEREST: "mortgageInterest",
    DeductionCategory.MEDICAL_EXPENSES: "medicalExpenses",
    DeductionCategory.GAMBLING_LOSSES: "gamblingLosses",
    DeductionCategory.INVESTMENT_INTEREST: "investmentInterest",
}

_BY_WIRE_NAME = {wire: category for category, wire in _WIRE_NAMES.items()}

_LABELS = {
    DeductionCategory.CHARITABLE_CASH: "Charitable Contributions (Cash / Tithe)",
    DeductionCategory.SALT: "State & Local Taxes (Income + Property)",
    DeductionCategory.MORTGAGE_INTEREST: "Mortgage Interest",
    DeductionCategory.MEDICAL_EXPENSES: "Medical & Dental Expenses",
    DeductionCategory.GAMBLING_LOSSES: "Gambling Losses",
    DeductionCategory.INVESTMENT_INTEREST: "Investment Interest Expense",
}
