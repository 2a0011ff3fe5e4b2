"""Synthetic life & health portfolio scenario."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from faker import Faker

from pricing_warehouse.config import GeneratorConfig
from pricing_warehouse.exceptions import InvalidEntityStateError
from pricing_warehouse.generators import (
    ClaimGenerator,
    PolicyGenerator,
    PolicyholderGenerator,
    PremiumGenerator,
)
from pricing_warehouse.store.portfolio import PortfolioStore

logger = logging.getLogger(__name__)


class PortfolioScenario:
    """Generate a referentially consistent insurance portfolio.

    This scenario creates:
    - Policyholders with uniform demographics
    - Policies written across the configured product catalog
    - Trailing monthly premium installments per policy
    - At most one claim per policy, with product-driven severity

    All generators share one Faker instance, so a given seed reproduces
    the whole dataset.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        seed: int | None = None,
        *,
        fake: Faker | None = None,
    ) -> None:
        """Initialize the portfolio scenario.

        Parameters
        ----------
        config : GeneratorConfig | None
            Generation parameters; defaults to ``GeneratorConfig()``.
        seed : int | None
            Random seed for reproducibility.
        fake : Faker | None
            Faker instance to draw from; reseeded when ``seed`` is given.

        Raises
        ------
        ConfigError
            If the configuration is invalid.
        """
        self.config = config or GeneratorConfig()
        self.config.validate()
        self.seed = seed

        self.fake = fake or Faker("en_US")
        if seed is not None:
            self.fake.seed_instance(seed)

        self.store = PortfolioStore()
        self._holder_gen = PolicyholderGenerator(fake=self.fake)
        self._policy_gen = PolicyGenerator(
            catalog=self.config.catalog,
            issue_start_year=self.config.issue_start_year,
            issue_end_year=self.config.issue_end_year,
            active_probability=self.config.active_probability,
            fake=self.fake,
        )
        self._premium_gen = PremiumGenerator(fake=self.fake)
        self._claim_gen = ClaimGenerator(fake=self.fake)

    def generate(self) -> PortfolioStore:
        """Generate all data for the portfolio.

        Returns
        -------
        PortfolioStore
            Store containing all generated data.

        Raises
        ------
        InvalidEntityStateError
            If this scenario has already generated its portfolio.
        """
        if self.store.policyholders:
            raise InvalidEntityStateError(
                "Portfolio already generated; create a new scenario for another population"
            )

        as_of = self.config.reference_date()
        logger.info(
            "Starting portfolio scenario: %d policyholders, %d policies, %d products (as of %s)",
            self.config.num_policyholders,
            self.config.num_policies,
            len(self.config.catalog),
            as_of,
        )

        for holder in self._holder_gen.generate_batch(self.config.num_policyholders):
            self.store.add_policyholder(holder)

        holder_ids = list(self.store.policyholders)
        for _ in range(self.config.num_policies):
            holder_id = self.fake.random_element(holder_ids)
            policy, product = self._policy_gen.generate(holder_id)
            self.store.add_policy(policy)

            for premium in self._premium_gen.generate_for_policy(policy, product, as_of):
                self.store.add_premium(premium)

        logger.info(
            "Generated %d policies with %d premiums",
            len(self.store.policies),
            len(self.store.premiums),
        )

        # Claims drawn after all premiums, one trial per policy
        for policy in self.store.policies.values():
            product = self.config.product(policy.product_type)
            claim = self._claim_gen.generate_for_policy(policy, product, as_of)
            if claim is not None:
                self.store.add_claim(claim)

        logger.info("Generated %d claims", len(self.store.claims))
        return self.store

    def export(self, sinks: list[Any]) -> None:
        """Export generated data to sinks.

        Parameters
        ----------
        sinks : list[Any]
            Sink instances exposing ``write_dataset``.
        """
        for sink in sinks:
            sink.write_dataset(self.store)

        logger.info("Exported portfolio to %d sinks", len(sinks))

    def get_calibration_summary(self) -> dict[str, dict[str, Any]]:
        """Compare realized experience with the catalog targets.

        Returns
        -------
        dict[str, dict[str, Any]]
            Per product: policy and claim counts, target and realized loss
            ratio, target and realized claim frequency (as fractions).
        """
        summary: dict[str, dict[str, Any]] = {}
        for product in self.config.catalog:
            summary[product.name] = {
                "policies": 0,
                "claims": 0,
                "premiums": Decimal("0"),
                "claim_amount": Decimal("0"),
                "target_loss_ratio": product.target_loss_ratio,
                "target_claim_frequency": product.claim_frequency,
            }

        for policy in self.store.policies.values():
            entry = summary[policy.product_type]
            claim_amount, claim_count = self.store.claims_for(policy.policy_id)
            entry["policies"] += 1
            entry["claims"] += claim_count
            entry["premiums"] += self.store.premiums_for(policy.policy_id)
            entry["claim_amount"] += claim_amount

        for entry in summary.values():
            premiums = entry["premiums"]
            entry["realized_loss_ratio"] = (
                float(entry["claim_amount"] / premiums) if premiums else None
            )
            entry["realized_claim_frequency"] = (
                entry["claims"] / entry["policies"] if entry["policies"] else None
            )

        return summary


def generate_portfolio(config: GeneratorConfig | None = None, seed: int | None = None) -> PortfolioStore:
    """Generate a synthetic portfolio in one call.

    Parameters
    ----------
    config : GeneratorConfig | None
        Generation parameters.
    seed : int | None
        Random seed for reproducibility.

    Returns
    -------
    PortfolioStore
        The generated dataset.
    """
    return PortfolioScenario(config, seed=seed).generate()
