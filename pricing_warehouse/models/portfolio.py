"""Portfolio entity models: policyholders, policies, premiums and claims.

Field annotations double as the input schema: the loader validates raw
dataset records against these dataclasses with pydantic, so constraints
such as non-negative amounts live on the types below.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BeforeValidator, Field, StrictInt, StrictStr

from pricing_warehouse.models.enums import PolicyStatus


def _identifier(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, str)) or value == "":
        raise ValueError(f"invalid identifier {value!r}")
    return value


def _number(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got {value!r}")
    if isinstance(value, float):
        # Keep the shortest decimal form, not the binary expansion
        return Decimal(str(value))
    return value


def _iso_text(value: Any) -> Any:
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected an ISO date string, got {value!r}")
    return value


EntityId = Annotated[int | str, BeforeValidator(_identifier)]
Money = Annotated[Decimal, BeforeValidator(_number), Field(ge=0, allow_inf_nan=False)]
PositiveMoney = Annotated[Decimal, BeforeValidator(_number), Field(gt=0, allow_inf_nan=False)]
Day = Annotated[date, BeforeValidator(_iso_text)]


@dataclass(frozen=True)
class Policyholder:
    """Insured person owning one or more policies."""

    policyholder_id: EntityId
    age: StrictInt
    gender: StrictStr
    region: StrictStr
    income_band: StrictStr


@dataclass(frozen=True)
class Policy:
    """Insurance contract entity."""

    policy_id: EntityId
    policyholder_id: EntityId
    product_type: StrictStr
    issue_date: Day
    sum_insured: PositiveMoney
    policy_status: PolicyStatus
    lapse_date: Day | None = None


@dataclass(frozen=True)
class Premium:
    """Premium payment received on a policy."""

    premium_id: EntityId
    policy_id: EntityId
    premium_amount: Money
    payment_date: Day


@dataclass(frozen=True)
class Claim:
    """Claim paid (or reported) against a policy."""

    claim_id: EntityId
    policy_id: EntityId
    claim_date: Day
    claim_amount: Money
    claim_type: StrictStr
    claim_status: StrictStr
