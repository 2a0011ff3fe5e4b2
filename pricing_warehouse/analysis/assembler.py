"""Assemble all portfolio views into one immutable analysis result."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Hashable
from concurrent.futures import ThreadPoolExecutor
from datetime import date

from pricing_warehouse.analysis.aggregator import (
    GroupTotals,
    aggregate_by,
    aggregate_by_calendar_year,
    by_duration,
    by_issue_year,
    by_product,
    by_region,
)
from pricing_warehouse.analysis.metrics import percentage, whole
from pricing_warehouse.analysis.ranking import apply_lag, rank_by_loss_ratio
from pricing_warehouse.models import (
    AnalysisResult,
    CohortFrequency,
    DurationBand,
    DurationLossRatio,
    PortfolioSummary,
    ProductLossRatio,
    RegionLossRatio,
    TrendPoint,
)
from pricing_warehouse.store.portfolio import PortfolioStore

logger = logging.getLogger(__name__)

Groups = dict[Hashable, GroupTotals]


def _aggregations(store: PortfolioStore, as_of: date) -> dict[str, Callable[[], Groups]]:
    return {
        "product": lambda: aggregate_by(store, by_product),
        "cohort": lambda: aggregate_by(store, by_issue_year),
        "region": lambda: aggregate_by(store, by_region),
        "calendar_year": lambda: aggregate_by_calendar_year(store),
        "duration": lambda: aggregate_by(store, by_duration(as_of)),
    }


def _run_aggregations(
    store: PortfolioStore,
    as_of: date,
    parallel: bool,
) -> dict[str, Groups]:
    jobs = _aggregations(store, as_of)
    if not parallel:
        return {name: job() for name, job in jobs.items()}

    # Each worker reads the shared store and fills its own buckets
    with ThreadPoolExecutor(max_workers=len(jobs)) as executor:
        futures = {name: executor.submit(job) for name, job in jobs.items()}
        return {name: future.result() for name, future in futures.items()}


def _product_view(groups: Groups) -> tuple[ProductLossRatio, ...]:
    entries = []
    for product, totals in groups.items():
        m = totals.metrics()
        entries.append(
            ProductLossRatio(
                product=str(product),
                rank=0,
                loss_ratio=m.loss_ratio,
                total_premiums=totals.total_premiums,
                total_claims=totals.total_claims,
                policy_count=totals.policy_count,
                claim_count=totals.claim_count,
                avg_premium_per_policy=m.avg_premium_per_policy,
                avg_claim_severity=m.avg_claim_severity,
                claim_frequency=m.claim_frequency,
                pure_premium=m.pure_premium,
            )
        )
    return rank_by_loss_ratio(entries)


def _cohort_view(groups: Groups) -> tuple[CohortFrequency, ...]:
    entries = []
    for cohort, totals in groups.items():
        m = totals.metrics()
        entries.append(
            CohortFrequency(
                cohort=str(cohort),
                frequency=m.claim_frequency,
                loss_ratio=m.loss_ratio,
                total_premiums=totals.total_premiums,
                total_claims=totals.total_claims,
                policy_count=totals.policy_count,
                claim_count=totals.claim_count,
            )
        )
    return apply_lag(entries, lambda e: int(e.cohort))


def _region_view(groups: Groups) -> tuple[RegionLossRatio, ...]:
    entries = [
        RegionLossRatio(
            region=str(region),
            loss_ratio=totals.metrics().loss_ratio,
            total_premiums=totals.total_premiums,
            total_claims=totals.total_claims,
            policy_count=totals.policy_count,
            claim_count=totals.claim_count,
        )
        for region, totals in groups.items()
    ]
    return tuple(sorted(entries, key=lambda e: e.region))


def _trend_view(groups: Groups) -> tuple[TrendPoint, ...]:
    entries = [
        TrendPoint(
            year=str(year),
            loss_ratio=totals.metrics().loss_ratio,
            premiums=whole(totals.total_premiums / 1000),
            claims=whole(totals.total_claims / 1000),
            total_premiums=totals.total_premiums,
            total_claims=totals.total_claims,
            policy_count=totals.policy_count,
            claim_count=totals.claim_count,
        )
        for year, totals in groups.items()
    ]
    return apply_lag(entries, lambda e: int(e.year))


def _duration_view(groups: Groups) -> tuple[DurationLossRatio, ...]:
    return tuple(
        DurationLossRatio(
            duration=band.value,
            loss_ratio=groups[band].metrics().loss_ratio,
            total_premiums=groups[band].total_premiums,
            total_claims=groups[band].total_claims,
            policy_count=groups[band].policy_count,
            claim_count=groups[band].claim_count,
        )
        for band in DurationBand
        if band in groups
    )


def _summary(store: PortfolioStore) -> PortfolioSummary:
    total_premiums = store.total_premiums()
    total_claims = store.total_claims()
    return PortfolioSummary(
        total_policies=len(store.policies),
        total_policyholders=len(store.policyholders),
        total_premiums=total_premiums,
        total_claims=total_claims,
        claim_count=len(store.claims),
        overall_loss_ratio=percentage(total_claims, total_premiums, 2),
    )


def compute_analysis(
    store: PortfolioStore,
    as_of: date | None = None,
    parallel: bool = False,
) -> AnalysisResult:
    """Run every aggregation, ranking and lag derivation over a dataset.

    Parameters
    ----------
    store : PortfolioStore
        Dataset snapshot; must not be mutated while the analysis runs.
    as_of : date | None
        Reference date for duration bands (default: today).
    parallel : bool
        Run the five aggregations on worker threads.

    Returns
    -------
    AnalysisResult
        The complete result. Nothing is returned if any step fails.

    Raises
    ------
    ReferentialIntegrityError
        If the store holds a policy whose policyholder is missing.
    """
    as_of = as_of or date.today()
    t0 = time.perf_counter()
    logger.info(
        "Running portfolio analysis: %d policies, %d premiums, %d claims",
        len(store.policies),
        len(store.premiums),
        len(store.claims),
    )

    groups = _run_aggregations(store, as_of, parallel)

    result = AnalysisResult(
        loss_ratio_by_product=_product_view(groups["product"]),
        frequency_by_cohort=_cohort_view(groups["cohort"]),
        loss_ratio_by_region=_region_view(groups["region"]),
        trend_data=_trend_view(groups["calendar_year"]),
        duration_data=_duration_view(groups["duration"]),
        summary=_summary(store),
    )

    elapsed = time.perf_counter() - t0
    logger.info(
        "Analysis complete in %.2fs: overall loss ratio %s%%",
        elapsed,
        result.summary.overall_loss_ratio,
        extra={"elapsed_s": round(elapsed, 3), "parallel": parallel},
    )
    return result
