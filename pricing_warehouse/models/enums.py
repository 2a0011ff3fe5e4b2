"""Enumeration types for portfolio entities."""

from enum import Enum


class ProductType(str, Enum):
    TERM_LIFE = "Term Life"
    WHOLE_LIFE = "Whole Life"
    CRITICAL_ILLNESS = "Critical Illness"
    DISABILITY_INCOME = "Disability Income"


class BenefitType(str, Enum):
    """How a product settles a claim relative to sum insured."""

    LIFE = "LIFE"
    CRITICAL_ILLNESS = "CRITICAL_ILLNESS"
    DISABILITY = "DISABILITY"


class PolicyStatus(str, Enum):
    ACTIVE = "Active"
    LAPSED = "Lapsed"


class ClaimStatus(str, Enum):
    PAID = "Paid"


class Gender(str, Enum):
    MALE = "M"
    FEMALE = "F"


class Region(str, Enum):
    NORTH = "North"
    SOUTH = "South"
    EAST = "East"
    WEST = "West"
    CENTRAL = "Central"


class IncomeBand(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class DurationBand(str, Enum):
    """Policy duration bands in presentation order."""

    YEAR_1 = "Year 1"
    YEAR_2 = "Year 2"
    YEAR_3 = "Year 3"
    YEAR_4_PLUS = "Year 4+"
