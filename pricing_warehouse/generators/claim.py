"""Claim generator."""

from __future__ import annotations

import itertools
import math
from datetime import date, timedelta
from decimal import ROUND_FLOOR, Decimal

from pricing_warehouse.config import ProductSpec
from pricing_warehouse.generators.base import BaseGenerator
from pricing_warehouse.models import BenefitType, Claim, ClaimStatus, Policy
from pricing_warehouse.periods import elapsed_days


class ClaimGenerator(BaseGenerator):
    """Generate at most one claim per policy.

    Claim probability is the product's claim frequency scaled by a
    regional multiplier keyed on ``policyholder_id % 5``. Severity is a
    share of sum insured that depends on the product's benefit type.
    """

    MAX_EXPOSURE_DAYS = 1095  # 3 years
    MIN_EXPOSURE_DAYS = 30

    REGIONAL_MULTIPLIERS = {0: 1.15, 1: 0.90}
    DEFAULT_MULTIPLIER = 1.0

    # (base share, random spread) of sum insured
    SEVERITY = {
        BenefitType.LIFE: (0.95, 0.05),
        BenefitType.CRITICAL_ILLNESS: (0.70, 0.30),
        BenefitType.DISABILITY: (0.12, 0.20),
    }

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._ids = itertools.count(1)

    @classmethod
    def regional_multiplier(cls, policyholder_id: int) -> float:
        """Claim frequency multiplier for a policyholder."""
        return cls.REGIONAL_MULTIPLIERS.get(policyholder_id % 5, cls.DEFAULT_MULTIPLIER)

    def claim_probability(self, policy: Policy, product: ProductSpec) -> float:
        return product.claim_frequency * self.regional_multiplier(int(policy.policyholder_id))

    def generate_for_policy(
        self,
        policy: Policy,
        product: ProductSpec,
        as_of: date,
    ) -> Claim | None:
        """Draw a claim for a policy.

        Returns
        -------
        Claim | None
            The claim, or None when the trial fails or the policy has
            not been in force long enough to be eligible.
        """
        if self.rng.random() >= self.claim_probability(policy, product):
            return None

        days_active = min(elapsed_days(policy.issue_date, as_of), self.MAX_EXPOSURE_DAYS)
        if days_active <= self.MIN_EXPOSURE_DAYS:
            return None

        claim_date = policy.issue_date + timedelta(
            days=math.floor(self.rng.random() * days_active)
        )

        base, spread = self.SEVERITY[product.benefit_type]
        share = Decimal(str(base + self.rng.random() * spread))
        amount = (policy.sum_insured * share).to_integral_value(rounding=ROUND_FLOOR)

        return Claim(
            claim_id=next(self._ids),
            policy_id=policy.policy_id,
            claim_date=claim_date,
            claim_amount=amount,
            claim_type=policy.product_type,
            claim_status=ClaimStatus.PAID.value,
        )
