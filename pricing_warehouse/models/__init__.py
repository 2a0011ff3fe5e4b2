"""Domain models for portfolio analysis."""

from pricing_warehouse.models.analysis import (
    AnalysisResult,
    CohortFrequency,
    DurationLossRatio,
    PortfolioSummary,
    ProductLossRatio,
    RegionLossRatio,
    TrendPoint,
)
from pricing_warehouse.models.enums import (
    BenefitType,
    ClaimStatus,
    DurationBand,
    Gender,
    IncomeBand,
    PolicyStatus,
    ProductType,
    Region,
)
from pricing_warehouse.models.portfolio import Claim, EntityId, Policy, Policyholder, Premium

__all__ = [
    "AnalysisResult",
    "BenefitType",
    "Claim",
    "ClaimStatus",
    "CohortFrequency",
    "DurationBand",
    "DurationLossRatio",
    "EntityId",
    "Gender",
    "IncomeBand",
    "Policy",
    "PolicyStatus",
    "Policyholder",
    "PortfolioSummary",
    "Premium",
    "ProductLossRatio",
    "ProductType",
    "Region",
    "RegionLossRatio",
    "TrendPoint",
]
