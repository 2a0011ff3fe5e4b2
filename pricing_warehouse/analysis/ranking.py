"""Ranking and year-over-year lag derivation over aggregated views."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import replace
from decimal import Decimal
from typing import TypeVar

from pricing_warehouse.analysis.metrics import HUNDRED, ratio, round1
from pricing_warehouse.exceptions import DivisionUndefined
from pricing_warehouse.models import CohortFrequency, ProductLossRatio, TrendPoint

T = TypeVar("T", CohortFrequency, TrendPoint)


def rank_by_loss_ratio(entries: Iterable[ProductLossRatio]) -> tuple[ProductLossRatio, ...]:
    """Rank products by loss ratio, worst first.

    Ranks are positional: equal loss ratios still receive distinct,
    consecutive ranks and keep their input order. Undefined loss ratios
    sort last.
    """
    ordered = sorted(
        entries,
        key=lambda e: (e.loss_ratio is None, -(e.loss_ratio or 0.0)),
    )
    return tuple(replace(entry, rank=i + 1) for i, entry in enumerate(ordered))


def lag_delta(
    current: float | None,
    previous: float | None,
) -> tuple[float | None, float | None]:
    """Relative (%) and absolute change from ``previous`` to ``current``.

    Returns ``(yoy_change, yoy_change_abs)``. Both are None when either
    value is missing; the relative change alone is None when ``previous``
    is zero.
    """
    if current is None or previous is None:
        return None, None

    # Published ratios are exact decimals; subtract them as such
    diff = Decimal(str(current)) - Decimal(str(previous))
    try:
        change = round1(ratio(diff, Decimal(str(previous))) * HUNDRED)
    except DivisionUndefined:
        change = None
    return change, round1(diff)


def apply_lag(entries: Iterable[T], time_key: Callable[[T], int]) -> tuple[T, ...]:
    """Order a time series ascending and attach lag deltas.

    Parameters
    ----------
    entries : Iterable[T]
        Cohort or calendar-year entries.
    time_key : Callable[[T], int]
        Sort key for the period, e.g. the cohort year.

    Returns
    -------
    tuple[T, ...]
        Entries in period order; the first has no baseline and keeps
        ``yoy_change`` and ``yoy_change_abs`` as None.
    """
    ordered = sorted(entries, key=time_key)
    result: list[T] = []
    previous: T | None = None
    for entry in ordered:
        if previous is None:
            result.append(replace(entry, yoy_change=None, yoy_change_abs=None))
        else:
            change, change_abs = lag_delta(entry.loss_ratio, previous.loss_ratio)
            result.append(replace(entry, yoy_change=change, yoy_change_abs=change_abs))
        previous = entry
    return tuple(result)
