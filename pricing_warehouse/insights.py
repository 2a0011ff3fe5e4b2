"""Boundary to the narrative-insight collaborator.

The collaborator (a hosted language model, reached by code outside this
package) reads a finished ``AnalysisResult`` and answers with a JSON array
of ``{category, finding, recommendation}`` objects. This module builds the
request text, parses the reply, and supplies a fallback when the
collaborator fails. The analysis result itself is never affected.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from pricing_warehouse.exceptions import InsightError
from pricing_warehouse.models import AnalysisResult

logger = logging.getLogger(__name__)

InsightProvider = Callable[[str], str]

INSIGHT_CATEGORIES = (
    "Portfolio Risk",
    "Pricing Adequacy",
    "Credibility & Limitations",
    "Cohort Trends",
    "Product Strategy",
    "Regional Performance",
    "Duration Analysis",
)

# Segments below this size are flagged as having limited credibility
CREDIBILITY_THRESHOLD = 200

_FENCE = re.compile(r"```(?:json)?")


@dataclass(frozen=True)
class Insight:
    category: str
    finding: str
    recommendation: str

    def to_dict(self) -> dict[str, str]:
        return {
            "category": self.category,
            "finding": self.finding,
            "recommendation": self.recommendation,
        }


def _pct(value: float | None) -> str:
    return "n/a" if value is None else f"{value}%"


def _money(value) -> str:
    return f"${round(value):,}"


def build_insight_prompt(result: AnalysisResult) -> str:
    """Render the analysis as a review request for the collaborator."""
    summary = result.summary
    products = "\n".join(
        f"{p.rank}. {p.product}: {_pct(p.loss_ratio)} LR | {p.policy_count} policies | "
        f"{_pct(p.claim_frequency)} frequency | ${p.avg_premium_per_policy or 0:,} avg premium | "
        f"${p.avg_claim_severity:,} avg severity"
        for p in result.loss_ratio_by_product
    )
    cohorts = "\n".join(
        f"{c.cohort}: {_pct(c.loss_ratio)} LR ({c.policy_count} policies)"
        + (f" | YoY: {c.yoy_change:+}%" if c.yoy_change is not None else "")
        for c in result.frequency_by_cohort
    )
    regions = "\n".join(
        f"{r.region}: {_pct(r.loss_ratio)} LR | {r.policy_count} policies | {r.claim_count} claims"
        for r in result.loss_ratio_by_region
    )
    durations = "\n".join(
        f"{d.duration}: {_pct(d.loss_ratio)} LR ({d.policy_count} policies)"
        for d in result.duration_data
    )
    categories = ", ".join(f'"{c}"' for c in INSIGHT_CATEGORIES)

    return f"""You are a senior actuarial consultant preparing a measured, professional portfolio review. Provide analytical insights using regulatory-safe language.

PORTFOLIO CONTEXT:
This is a {summary.total_policies}-policy life and health insurance portfolio across {len(result.loss_ratio_by_product)} product lines.

DATA QUALITY & ASSUMPTIONS:
- Premium figures represent written premium (not earned premium)
- No IBNR (Incurred But Not Reported) adjustment applied
- Claims assumed fully developed and settled
- No expense loading or reinsurance adjustments included
- Exposure approximated by policy count
- Statistical credibility may be limited for smaller segments

PORTFOLIO METRICS:
Overall Performance:
- Total Policies: {summary.total_policies}
- Written Premium: {_money(summary.total_premiums)}
- Claims Incurred: {_money(summary.total_claims)}
- Portfolio Loss Ratio: {_pct(summary.overall_loss_ratio)}

Product Performance (Ranked by Loss Ratio):
{products}

Cohort Analysis (YoY Deterioration):
{cohorts}

Regional Distribution:
{regions}

Duration Analysis:
{durations}

INSTRUCTIONS:
Provide 6-8 insights as a JSON array with "category", "finding", and "recommendation" fields.

Categories to use: {categories}

Tone Guidelines:
- Analytical and measured (not dramatic)
- Use phrases like "warrants review", "suggests consideration", "indicates potential", "may benefit from"
- AVOID: "emergency", "immediate moratorium", "crisis", "severe", "urgent"
- Acknowledge statistical limitations where sample sizes are small (<{CREDIBILITY_THRESHOLD} policies)
- Reference exposure-based metrics (frequency, severity, pure premium)
- Note data quality assumptions where relevant

Return ONLY valid JSON array, no markdown formatting."""


def parse_insights(text: str) -> list[Insight]:
    """Parse the collaborator's reply.

    Raises
    ------
    InsightError
        If the reply is not a JSON array of insight objects.
    """
    cleaned = _FENCE.sub("", text).strip()
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise InsightError(f"Insight reply is not valid JSON: {e}") from e
    if not isinstance(payload, list):
        raise InsightError("Insight reply must be a JSON array")

    insights = []
    for i, item in enumerate(payload):
        if not isinstance(item, dict):
            raise InsightError(f"Insight {i} is not an object")
        try:
            insights.append(
                Insight(
                    category=str(item["category"]),
                    finding=str(item["finding"]),
                    recommendation=str(item["recommendation"]),
                )
            )
        except KeyError as e:
            raise InsightError(f"Insight {i} missing field {e}") from e
    return insights


def fallback_insights() -> list[Insight]:
    """Placeholder shown when the collaborator is unavailable."""
    return [
        Insight(
            category="Analysis Status",
            finding="AI-powered insights are currently unavailable due to a technical error.",
            recommendation=(
                "Please review the quantitative analytics for detailed portfolio "
                "performance metrics."
            ),
        )
    ]


def generate_insights(result: AnalysisResult, provider: InsightProvider) -> list[Insight]:
    """Ask ``provider`` for insights on a finished analysis.

    Parameters
    ----------
    result : AnalysisResult
        Completed analysis; read only.
    provider : InsightProvider
        Sends the prompt to the collaborator and returns its raw reply.

    Returns
    -------
    list[Insight]
        Parsed insights, or ``fallback_insights()`` if the provider or
        the reply fails.
    """
    prompt = build_insight_prompt(result)
    try:
        return parse_insights(provider(prompt))
    except Exception:
        logger.exception("Insight generation failed, using fallback")
        return fallback_insights()
