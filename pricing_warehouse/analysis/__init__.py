"""Portfolio aggregation, ranking and trend analysis."""

from pricing_warehouse.analysis.aggregator import (
    GroupMetrics,
    GroupTotals,
    aggregate_by,
    aggregate_by_calendar_year,
    by_duration,
    by_issue_year,
    by_product,
    by_region,
    duration_band,
)
from pricing_warehouse.analysis.assembler import compute_analysis
from pricing_warehouse.analysis.ranking import apply_lag, lag_delta, rank_by_loss_ratio

__all__ = [
    "GroupMetrics",
    "GroupTotals",
    "aggregate_by",
    "aggregate_by_calendar_year",
    "apply_lag",
    "by_duration",
    "by_issue_year",
    "by_product",
    "by_region",
    "compute_analysis",
    "duration_band",
    "lag_delta",
    "rank_by_loss_ratio",
]
