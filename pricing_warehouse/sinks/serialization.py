"""Shared serialization utilities for sinks."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pricing_warehouse.models.analysis import json_number


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary.

    Objects exposing ``to_dict`` (analysis results) use their own shape;
    other dataclasses are serialized field by field.
    """
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    elif is_dataclass(obj):
        return to_dict_fast(obj)
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": str(obj)}


def to_dict_fast(obj: Any) -> dict:
    """Convert a flat dataclass without deep copy.

    Parameters
    ----------
    obj : Any
        A dataclass instance.

    Returns
    -------
    dict
        Serialized dictionary.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return json_number(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def dataset_to_dict(store: Any) -> dict[str, list[dict]]:
    """Serialize a portfolio store to the dataset document shape."""
    return {
        "policyholders": [to_dict_fast(h) for h in store.policyholders.values()],
        "policies": [to_dict_fast(p) for p in store.policies.values()],
        "premiums": [to_dict_fast(p) for p in store.premiums],
        "claims": [to_dict_fast(c) for c in store.claims],
    }
