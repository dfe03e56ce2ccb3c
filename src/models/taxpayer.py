from enum import Enum


class FilingStatus(str, Enum):
    """IRS filing status options"""
    SINGLE = "single"
    MARRIED_JOINT = "married_filing_jointly"
    MARRIED_SEPARATE = "married_filing_separately"
    HEAD_OF_HOUSEHOLD = "head_of_household"

    @classmethod
    def parse(cls, value) -> "FilingStatus":
        """
        Resolve a filing status from its value or a common alias.

        Accepts the short keys older configs use ("married_joint",
        "married_separate"), any case, and dashes or spaces for underscores.

        Raises:
            ValueError: If the value names no known filing status
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        key = _FILING_STATUS_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            valid = ", ".join(status.value for status in cls)
            raise ValueError(f"Unknown filing status '{value}'. Expected one of: {valid}") from None

    @property
    def label(self) -> str:
        return _FILING_STATUS_LABELS[self]


_FILING_STATUS_ALIASES = {
    "married_joint": "married_filing_jointly",
    "mfj": "married_filing_jointly",
    "married_separate": "married_filing_separately",
    "mfs": "married_filing_separately",
    "hoh": "head_of_household",
}

_FILING_STATUS_LABELS = {
    FilingStatus.SINGLE: "Single",
    FilingStatus.MARRIED_JOINT: "Married Filing Jointly",
    FilingStatus.MARRIED_SEPARATE: "Married Filing Separately",
    FilingStatus.HEAD_OF_HOUSEHOLD: "Head of Household",
}
