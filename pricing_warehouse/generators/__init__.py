"""Portfolio entity generators."""

from pricing_warehouse.generators.claim import ClaimGenerator
from pricing_warehouse.generators.policy import PolicyGenerator
from pricing_warehouse.generators.policyholder import PolicyholderGenerator
from pricing_warehouse.generators.premium import PremiumGenerator

__all__ = [
    "ClaimGenerator",
    "PolicyGenerator",
    "PolicyholderGenerator",
    "PremiumGenerator",
]
