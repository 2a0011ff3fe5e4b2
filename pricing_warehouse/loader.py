"""Load portfolio datasets from JSON documents.

A dataset document has four top-level arrays: ``policyholders``,
``policies``, ``premiums`` and ``claims``. Records are validated against
the entity dataclasses with pydantic; unknown fields are ignored, and any
missing or mistyped required field rejects the whole dataset.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from pricing_warehouse.exceptions import MalformedInputError
from pricing_warehouse.models import Claim, Policy, Policyholder, Premium
from pricing_warehouse.models.validation import describe_validation_error
from pricing_warehouse.store.portfolio import PortfolioStore

logger = logging.getLogger(__name__)


class DatasetDocument(BaseModel):
    """Schema of a dataset document."""

    policyholders: list[Policyholder]
    policies: list[Policy]
    premiums: list[Premium]
    claims: list[Claim]


def parse_dataset(payload: Any) -> PortfolioStore:
    """Build a store from a decoded dataset document.

    Parameters
    ----------
    payload : Any
        Decoded JSON document.

    Returns
    -------
    PortfolioStore
        Store holding every record.

    Raises
    ------
    MalformedInputError
        If the document shape or a record is invalid.
    ReferentialIntegrityError
        If a record references a missing parent.
    InvalidEntityStateError
        If ids repeat or a claim predates its policy.
    """
    # Validate everything before touching the store
    try:
        document = DatasetDocument.model_validate(payload)
    except ValidationError as e:
        raise MalformedInputError(describe_validation_error(e)) from e

    store = PortfolioStore()
    for holder in document.policyholders:
        store.add_policyholder(holder)
    for policy in document.policies:
        store.add_policy(policy)
    for premium in document.premiums:
        store.add_premium(premium)
    for claim in document.claims:
        store.add_claim(claim)

    logger.info("Loaded dataset: %s", store.summary())
    return store


def loads_dataset(text: str) -> PortfolioStore:
    """Parse a dataset from a JSON string."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Dataset is not valid JSON: {e}") from e
    return parse_dataset(payload)


def load_dataset(path: str | Path) -> PortfolioStore:
    """Load a dataset from a JSON file.

    Raises
    ------
    MalformedInputError
        If the file cannot be decoded or fails validation.
    """
    path = Path(path)
    logger.info("Loading dataset from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"{path}: not UTF-8 text") from e
    return loads_dataset(text)


def sample_template() -> dict[str, list[dict[str, Any]]]:
    """Return a minimal dataset document illustrating the input format."""
    return {
        "policyholders": [
            {"policyholder_id": 1, "age": 35, "gender": "M", "region": "North", "income_band": "Medium"}
        ],
        "policies": [
            {
                "policy_id": 1,
                "policyholder_id": 1,
                "product_type": "Term Life",
                "issue_date": "2023-01-15",
                "sum_insured": 100000,
                "policy_status": "Active",
                "lapse_date": None,
            }
        ],
        "premiums": [
            {"premium_id": 1, "policy_id": 1, "premium_amount": 291, "payment_date": "2023-01-15"}
        ],
        "claims": [
            {
                "claim_id": 1,
                "policy_id": 1,
                "claim_date": "2023-06-20",
                "claim_amount": 25000,
                "claim_type": "Critical Illness",
                "claim_status": "Paid",
            }
        ],
    }
