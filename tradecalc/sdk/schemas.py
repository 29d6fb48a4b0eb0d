"""Shared enumerations and helpers for trade-calc data.

Input and result schemas live beside the engine that owns them
(taxes/, payroll/, rigging/). This module holds the vocabulary they share.
"""

from datetime import date, datetime
from enum import Enum
from typing import Union


class PayFrequency(str, Enum):
    """How often an employee is paid."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    SEMIMONTHLY = "semimonthly"
    MONTHLY = "monthly"

    @property
    def periods(self) -> int:
        """Pay periods per calendar year."""
        return PAY_PERIODS[self.value]

    @property
    def label(self) -> str:
        names = {
            "weekly": "Weekly",
            "biweekly": "Biweekly",
            "semimonthly": "Semi-monthly",
            "monthly": "Monthly",
        }
        return f"{names[self.value]} ({self.periods})"


# Pay periods by frequency
PAY_PERIODS = {
    "weekly": 52,
    "biweekly": 26,
    "semimonthly": 24,
    "monthly": 12,
}


class Province(str, Enum):
    """Canadian provinces and territories."""

    AB = "AB"
    BC = "BC"
    MB = "MB"
    NB = "NB"
    NL = "NL"
    NS = "NS"
    NT = "NT"
    NU = "NU"
    ON = "ON"
    PE = "PE"
    QC = "QC"
    SK = "SK"
    YT = "YT"

    @property
    def display_name(self) -> str:
        return PROVINCE_NAMES[self.value]


PROVINCE_NAMES = {
    "AB": "Alberta",
    "BC": "British Columbia",
    "MB": "Manitoba",
    "NB": "New Brunswick",
    "NL": "Newfoundland & Labrador",
    "NS": "Nova Scotia",
    "NT": "Northwest Territories",
    "NU": "Nunavut",
    "ON": "Ontario",
    "PE": "Prince Edward Island",
    "QC": "Quebec",
    "SK": "Saskatchewan",
    "YT": "Yukon",
}


class HitchType(str, Enum):
    """Rigging hitch configuration. Capacity factors live in the rigging rules."""

    VERTICAL = "vertical"
    CHOKER = "choker"
    BASKET = "basket"


HITCH_DESCRIPTIONS = {
    "vertical": "Straight vertical lift with sling legs perpendicular to load",
    "choker": "Sling wrapped around load with reduced capacity",
    "basket": "Sling forms cradle under load with doubled capacity",
}


DateLike = Union[date, datetime, str]


def parse_date(value: DateLike) -> date:
    """Coerce a date, datetime or YYYY-MM-DD string to a calendar date.

    Raises:
        ValueError: If a string is not in YYYY-MM-DD format
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, "%Y-%m-%d").date()


def province_code(province: Union["Province", str]) -> str:
    """Normalize a Province or string code to an upper-case code."""
    if isinstance(province, Province):
        return province.value
    return str(province).strip().upper()


def get_pay_periods(frequency: Union[PayFrequency, str]) -> int:
    """Pay periods per year for a frequency (e.g., "biweekly" -> 26).

    Raises:
        ValueError: If the frequency is not recognized
    """
    return PayFrequency(frequency.lower() if isinstance(frequency, str) else frequency).periods
