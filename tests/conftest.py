"""Pytest configuration and fixtures."""

from datetime import date
from typing import Any

import pytest

from pricing_warehouse.config import GeneratorConfig
from pricing_warehouse.loader import parse_dataset, sample_template
from pricing_warehouse.store.portfolio import PortfolioStore


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def as_of() -> date:
    """Fixed reference date for elapsed-time calculations."""
    return date(2025, 6, 30)


@pytest.fixture
def small_config(as_of: date) -> GeneratorConfig:
    """Small generator configuration."""
    return GeneratorConfig(num_policyholders=40, num_policies=60, as_of=as_of)


@pytest.fixture
def template_store() -> PortfolioStore:
    """The one-record input template."""
    return parse_dataset(sample_template())


@pytest.fixture
def portfolio_document() -> dict[str, Any]:
    """Hand-built four-policy dataset with known aggregates.

    Policy 4 has no premiums, so every view containing it alone reports
    an undefined loss ratio.
    """
    return {
        "policyholders": [
            {"policyholder_id": 1, "age": 40, "gender": "F", "region": "North", "income_band": "High"},
            {"policyholder_id": 2, "age": 52, "gender": "M", "region": "South", "income_band": "Low"},
            {"policyholder_id": 3, "age": 29, "gender": "F", "region": "North", "income_band": "Medium"},
        ],
        "policies": [
            {"policy_id": 1, "policyholder_id": 1, "product_type": "Term Life",
             "issue_date": "2022-03-01", "sum_insured": 100000, "policy_status": "Active"},
            {"policy_id": 2, "policyholder_id": 2, "product_type": "Term Life",
             "issue_date": "2023-05-10", "sum_insured": 200000, "policy_status": "Active"},
            {"policy_id": 3, "policyholder_id": 3, "product_type": "Disability Income",
             "issue_date": "2023-07-01", "sum_insured": 150000, "policy_status": "Lapsed",
             "lapse_date": "2024-09-01"},
            {"policy_id": 4, "policyholder_id": 2, "product_type": "Critical Illness",
             "issue_date": "2024-02-01", "sum_insured": 100000, "policy_status": "Active"},
        ],
        "premiums": [
            {"premium_id": 1, "policy_id": 1, "premium_amount": 1000, "payment_date": "2022-03-01"},
            {"premium_id": 2, "policy_id": 1, "premium_amount": 1000, "payment_date": "2023-03-01"},
            {"premium_id": 3, "policy_id": 2, "premium_amount": 2000, "payment_date": "2023-05-10"},
            {"premium_id": 4, "policy_id": 2, "premium_amount": 2000, "payment_date": "2024-05-10"},
            {"premium_id": 5, "policy_id": 3, "premium_amount": 1500, "payment_date": "2023-07-01"},
        ],
        "claims": [
            {"claim_id": 1, "policy_id": 1, "claim_date": "2023-06-01", "claim_amount": 500,
             "claim_type": "Term Life", "claim_status": "Paid"},
            {"claim_id": 2, "policy_id": 2, "claim_date": "2024-06-01", "claim_amount": 1000,
             "claim_type": "Term Life", "claim_status": "Paid"},
            {"claim_id": 3, "policy_id": 2, "claim_date": "2024-07-01", "claim_amount": 1000,
             "claim_type": "Term Life", "claim_status": "Paid"},
            {"claim_id": 4, "policy_id": 3, "claim_date": "2024-01-01", "claim_amount": 3000,
             "claim_type": "Disability Income", "claim_status": "Paid"},
        ],
    }


@pytest.fixture
def portfolio_store(portfolio_document: dict[str, Any]) -> PortfolioStore:
    """Store built from ``portfolio_document``."""
    return parse_dataset(portfolio_document)
