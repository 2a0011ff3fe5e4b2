"""Premium schedule generator."""

from __future__ import annotations

import itertools
from datetime import date
from decimal import ROUND_FLOOR, Decimal
from typing import Iterator

from pricing_warehouse.config import ProductSpec
from pricing_warehouse.generators.base import BaseGenerator
from pricing_warehouse.models import Policy, Premium
from pricing_warehouse.periods import add_months, elapsed_months


def _floor(value: Decimal) -> Decimal:
    return value.to_integral_value(rounding=ROUND_FLOOR)


class PremiumGenerator(BaseGenerator):
    """Generate monthly premium installments for policies.

    Only the trailing ``WINDOW_MONTHS`` installments of a policy's elapsed
    lifetime are emitted, and the lifetime is capped at
    ``MAX_LIFETIME_MONTHS``; both bounds limit dataset volume.
    """

    MAX_LIFETIME_MONTHS = 36
    WINDOW_MONTHS = 12

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._ids = itertools.count(1)

    @staticmethod
    def monthly_installment(policy: Policy, product: ProductSpec) -> Decimal:
        """Whole-dollar monthly premium for a policy."""
        annual = _floor(policy.sum_insured * Decimal(str(product.premium_rate)))
        return _floor(annual / 12)

    def generate_for_policy(
        self,
        policy: Policy,
        product: ProductSpec,
        as_of: date,
    ) -> Iterator[Premium]:
        """Generate the premium installments for a policy.

        Parameters
        ----------
        policy : Policy
            Policy the premiums are paid on.
        product : ProductSpec
            Catalog product supplying the premium rate.
        as_of : date
            Reference date for the elapsed lifetime.

        Yields
        ------
        Premium
            One installment per elapsed month within the window.
        """
        monthly = self.monthly_installment(policy, product)
        months_active = min(
            max(0, elapsed_months(policy.issue_date, as_of)), self.MAX_LIFETIME_MONTHS
        )
        first_month = max(0, months_active - self.WINDOW_MONTHS)

        for month in range(first_month, months_active):
            yield Premium(
                premium_id=next(self._ids),
                policy_id=policy.policy_id,
                premium_amount=monthly,
                payment_date=add_months(policy.issue_date, month),
            )
