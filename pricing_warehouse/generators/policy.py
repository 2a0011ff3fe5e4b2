"""Policy generator."""

from __future__ import annotations

import itertools
from datetime import date
from decimal import Decimal

from faker import Faker

from pricing_warehouse.config import ProductSpec
from pricing_warehouse.generators.base import BaseGenerator
from pricing_warehouse.models import EntityId, Policy, PolicyStatus


class PolicyGenerator(BaseGenerator):
    """Generate policies drawn from a product catalog."""

    # Sum insured in 10k steps: 100k - 540k
    SUM_INSURED_STEP = 10_000
    SUM_INSURED_STEPS = (10, 54)

    def __init__(
        self,
        catalog: tuple[ProductSpec, ...],
        issue_start_year: int = 2020,
        issue_end_year: int = 2024,
        active_probability: float = 0.85,
        seed: int | None = None,
        fake: Faker | None = None,
    ) -> None:
        super().__init__(seed=seed, fake=fake)
        self.catalog = catalog
        self.issue_start = date(issue_start_year, 1, 1)
        self.issue_end = date(issue_end_year, 12, 31)
        self.active_probability = active_probability
        self._ids = itertools.count(1)

    def generate(self, policyholder_id: EntityId) -> tuple[Policy, ProductSpec]:
        """Generate a policy for a policyholder.

        Parameters
        ----------
        policyholder_id : EntityId
            Owner of the policy; must already exist in the target store.

        Returns
        -------
        tuple[Policy, ProductSpec]
            The policy and the catalog product it was written under.
        """
        product = self.fake.random_element(self.catalog)
        steps = self.fake.random_int(*self.SUM_INSURED_STEPS)
        status = (
            PolicyStatus.ACTIVE
            if self.rng.random() < self.active_probability
            else PolicyStatus.LAPSED
        )

        policy = Policy(
            policy_id=next(self._ids),
            policyholder_id=policyholder_id,
            product_type=product.name,
            issue_date=self.fake.date_between_dates(self.issue_start, self.issue_end),
            sum_insured=Decimal(steps * self.SUM_INSURED_STEP),
            policy_status=status,
            lapse_date=None,
        )
        return policy, product
