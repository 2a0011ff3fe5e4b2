"""Dimensional aggregation of portfolio experience.

Each view groups policies by a dimension key and accumulates premium and
claim roll-ups into a lazily created ``GroupTotals`` bucket. Bucket order
is whatever the input produced; callers sort explicitly for presentation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from pricing_warehouse.analysis.metrics import ZERO, per_unit, percentage
from pricing_warehouse.models import DurationBand, EntityId, Policy, Policyholder
from pricing_warehouse.periods import elapsed_months
from pricing_warehouse.store.portfolio import PortfolioStore

logger = logging.getLogger(__name__)

KeyFn = Callable[[Policy, Policyholder], Hashable]


@dataclass(frozen=True)
class GroupMetrics:
    """Derived metrics for one group."""

    loss_ratio: float | None
    claim_frequency: float | None
    avg_claim_severity: int
    pure_premium: int | None
    avg_premium_per_policy: int | None


@dataclass
class GroupTotals:
    """Mutable accumulator for one dimension value."""

    total_premiums: Decimal = ZERO
    total_claims: Decimal = ZERO
    policy_count: int = 0
    claim_count: int = 0

    def add_policy(self, premiums: Decimal, claims: Decimal, claim_count: int) -> None:
        self.total_premiums += premiums
        self.total_claims += claims
        self.policy_count += 1
        self.claim_count += claim_count

    def metrics(self) -> GroupMetrics:
        """Compute derived metrics; undefined ratios are None."""
        return GroupMetrics(
            loss_ratio=percentage(self.total_claims, self.total_premiums, 2),
            claim_frequency=percentage(self.claim_count, self.policy_count, 3),
            avg_claim_severity=per_unit(self.total_claims, self.claim_count) or 0,
            pure_premium=per_unit(self.total_claims, self.policy_count),
            avg_premium_per_policy=per_unit(self.total_premiums, self.policy_count),
        )


def aggregate_by(store: PortfolioStore, key_fn: KeyFn) -> dict[Hashable, GroupTotals]:
    """Group every policy by ``key_fn`` and accumulate its roll-ups.

    Parameters
    ----------
    store : PortfolioStore
        Dataset to aggregate; read only.
    key_fn : KeyFn
        Maps ``(policy, policyholder)`` to the group key.

    Returns
    -------
    dict[Hashable, GroupTotals]
        Buckets in order of first appearance.

    Raises
    ------
    ReferentialIntegrityError
        If a policy's policyholder is missing.
    """
    groups: dict[Hashable, GroupTotals] = {}
    for policy in store.policies.values():
        holder = store.get_policyholder(policy.policyholder_id)
        key = key_fn(policy, holder)
        bucket = groups.get(key)
        if bucket is None:
            bucket = groups[key] = GroupTotals()

        claims, claim_count = store.claims_for(policy.policy_id)
        bucket.add_policy(store.premiums_for(policy.policy_id), claims, claim_count)

    logger.debug("Aggregated %d policies into %d groups", len(store.policies), len(groups))
    return groups


def by_product(policy: Policy, holder: Policyholder) -> str:
    return policy.product_type


def by_issue_year(policy: Policy, holder: Policyholder) -> str:
    return str(policy.issue_date.year)


def by_region(policy: Policy, holder: Policyholder) -> str:
    return holder.region


def duration_band(issue_date: date, as_of: date) -> DurationBand:
    """Band a policy by whole 30-day months in force at ``as_of``."""
    months = elapsed_months(issue_date, as_of)
    if months < 12:
        return DurationBand.YEAR_1
    if months < 24:
        return DurationBand.YEAR_2
    if months < 36:
        return DurationBand.YEAR_3
    return DurationBand.YEAR_4_PLUS


def by_duration(as_of: date) -> KeyFn:
    """Key function banding policies by duration at ``as_of``."""

    def key(policy: Policy, holder: Policyholder) -> DurationBand:
        return duration_band(policy.issue_date, as_of)

    return key


def aggregate_by_calendar_year(store: PortfolioStore) -> dict[str, GroupTotals]:
    """Group cash transactions by the calendar year they occurred in.

    Unlike the policy-level views, premiums are bucketed by payment year
    and claims by claim year directly. Years are opened by premiums only:
    a claim dated in a year without premium activity is left out of this
    view. A policy counts once in every year it has a booked premium or
    claim in.
    """
    groups: dict[str, GroupTotals] = {}
    policies_seen: dict[str, set[EntityId]] = {}

    def book(bucket: GroupTotals, year: str, policy_id: EntityId) -> None:
        if policy_id not in policies_seen[year]:
            policies_seen[year].add(policy_id)
            bucket.policy_count += 1

    for premium in store.premiums:
        year = str(premium.payment_date.year)
        bucket = groups.get(year)
        if bucket is None:
            bucket = groups[year] = GroupTotals()
            policies_seen[year] = set()
        book(bucket, year, premium.policy_id)
        bucket.total_premiums += premium.premium_amount

    dropped, dropped_count = ZERO, 0
    for claim in store.claims:
        year = str(claim.claim_date.year)
        bucket = groups.get(year)
        if bucket is None:
            dropped += claim.claim_amount
            dropped_count += 1
            continue
        book(bucket, year, claim.policy_id)
        bucket.total_claims += claim.claim_amount
        bucket.claim_count += 1

    if dropped_count:
        logger.debug(
            "Left %d claims totalling %s out of the calendar-year view: no premiums in their year",
            dropped_count,
            dropped,
        )
    return groups
