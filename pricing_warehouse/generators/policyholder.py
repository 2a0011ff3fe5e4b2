"""Policyholder generator."""

from __future__ import annotations

import itertools
from typing import Iterator

from pricing_warehouse.generators.base import BaseGenerator
from pricing_warehouse.models import Gender, IncomeBand, Policyholder, Region


class PolicyholderGenerator(BaseGenerator):
    """Generate policyholders with independent uniform attributes."""

    MIN_AGE = 25
    MAX_AGE = 74
    GENDERS = [g.value for g in Gender]
    REGIONS = [r.value for r in Region]
    INCOME_BANDS = [b.value for b in IncomeBand]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._ids = itertools.count(1)

    def generate(self) -> Policyholder:
        """Generate a single policyholder.

        Returns
        -------
        Policyholder
            Generated policyholder with the next sequential id.
        """
        return Policyholder(
            policyholder_id=next(self._ids),
            age=self.fake.random_int(self.MIN_AGE, self.MAX_AGE),
            gender=self.fake.random_element(self.GENDERS),
            region=self.fake.random_element(self.REGIONS),
            income_band=self.fake.random_element(self.INCOME_BANDS),
        )

    def generate_batch(self, count: int) -> Iterator[Policyholder]:
        """Generate multiple policyholders.

        Parameters
        ----------
        count : int
            Number of policyholders to generate.

        Yields
        ------
        Policyholder
            Generated policyholders.
        """
        for _ in range(count):
            yield self.generate()
