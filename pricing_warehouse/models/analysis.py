"""Immutable analysis result models.

Every result record serializes to the camelCase JSON shape consumed by
dashboards and the narrative collaborator, e.g. ``loss_ratio`` becomes
``lossRatio``. Monetary totals are kept as ``Decimal`` and emitted as JSON
numbers; ratios are already rounded floats (or ``None`` when undefined).
"""

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any, TypeVar

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from pricing_warehouse.models.portfolio import Money
from pricing_warehouse.models.validation import validate_as

R = TypeVar("R", bound="_ResultRecord")

# Validation reads the camelCase keys written by to_dict
_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel)


def json_number(value: Decimal) -> int | float:
    """Convert a Decimal to the narrowest JSON number."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


class _ResultRecord:
    """Shared camelCase (de)serialization for result dataclasses."""

    __pydantic_config__ = _CAMEL_CONFIG

    def to_dict(self) -> dict[str, Any]:
        result = {}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if isinstance(value, Decimal):
                value = json_number(value)
            result[to_camel(f.name)] = value
        return result

    @classmethod
    def from_dict(cls: type[R], data: dict[str, Any]) -> R:
        """Validate a camelCase mapping into a record.

        Raises
        ------
        MalformedInputError
            If a field is missing or has the wrong type.
        """
        return validate_as(cls, data)


@dataclass(frozen=True)
class ProductLossRatio(_ResultRecord):
    """Product line metrics, ranked by loss ratio."""

    product: str
    rank: int
    loss_ratio: float | None
    total_premiums: Money
    total_claims: Money
    policy_count: int
    claim_count: int
    avg_premium_per_policy: int | None
    avg_claim_severity: int
    claim_frequency: float | None
    pure_premium: int | None


@dataclass(frozen=True)
class CohortFrequency(_ResultRecord):
    """Issue-year cohort metrics with year-over-year deltas."""

    cohort: str
    frequency: float | None
    loss_ratio: float | None
    total_premiums: Money
    total_claims: Money
    policy_count: int
    claim_count: int
    yoy_change: float | None = None
    yoy_change_abs: float | None = None


@dataclass(frozen=True)
class RegionLossRatio(_ResultRecord):
    region: str
    loss_ratio: float | None
    total_premiums: Money
    total_claims: Money
    policy_count: int
    claim_count: int


@dataclass(frozen=True)
class TrendPoint(_ResultRecord):
    """Calendar-year cash view; ``premiums``/``claims`` are in thousands."""

    year: str
    loss_ratio: float | None
    premiums: int
    claims: int
    total_premiums: Money
    total_claims: Money
    policy_count: int
    claim_count: int
    yoy_change: float | None = None
    yoy_change_abs: float | None = None


@dataclass(frozen=True)
class DurationLossRatio(_ResultRecord):
    duration: str
    loss_ratio: float | None
    total_premiums: Money
    total_claims: Money
    policy_count: int
    claim_count: int


@dataclass(frozen=True)
class PortfolioSummary(_ResultRecord):
    """Portfolio-wide totals."""

    total_policies: int
    total_policyholders: int
    total_premiums: Money
    total_claims: Money
    claim_count: int
    overall_loss_ratio: float | None


@dataclass(frozen=True)
class AnalysisResult:
    """Complete output of one analysis run."""

    __pydantic_config__ = _CAMEL_CONFIG

    loss_ratio_by_product: tuple[ProductLossRatio, ...]
    frequency_by_cohort: tuple[CohortFrequency, ...]
    loss_ratio_by_region: tuple[RegionLossRatio, ...]
    trend_data: tuple[TrendPoint, ...]
    duration_data: tuple[DurationLossRatio, ...]
    summary: PortfolioSummary

    _SECTIONS = (
        "loss_ratio_by_product",
        "frequency_by_cohort",
        "loss_ratio_by_region",
        "trend_data",
        "duration_data",
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the documented JSON-compatible shape."""
        result: dict[str, Any] = {
            to_camel(name): [entry.to_dict() for entry in getattr(self, name)]
            for name in self._SECTIONS
        }
        result["summary"] = self.summary.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisResult":
        """Rebuild a result from its JSON-compatible shape.

        Raises
        ------
        MalformedInputError
            If a section or field is missing or mistyped.
        """
        return validate_as(cls, data)
