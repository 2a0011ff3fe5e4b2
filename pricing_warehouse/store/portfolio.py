"""Portfolio data store with referential integrity and roll-up indexes."""

from dataclasses import dataclass, field
from decimal import Decimal

from pricing_warehouse.exceptions import InvalidEntityStateError, ReferentialIntegrityError
from pricing_warehouse.models import Claim, EntityId, Policy, Policyholder, Premium


@dataclass
class PortfolioStore:
    """In-memory store for portfolio entities with relationship tracking.

    Premiums and claims are indexed by ``policy_id`` as they are added, so
    the per-policy roll-ups used by every aggregation pass are O(1) lookups
    instead of scans over the full transaction lists.
    """

    # Primary entities
    policyholders: dict[EntityId, Policyholder] = field(default_factory=dict)
    policies: dict[EntityId, Policy] = field(default_factory=dict)

    # Transactions
    premiums: list[Premium] = field(default_factory=list)
    claims: list[Claim] = field(default_factory=list)

    # Relationship indexes
    _policy_premiums: dict[EntityId, list[int]] = field(default_factory=dict)
    _policy_claims: dict[EntityId, list[int]] = field(default_factory=dict)

    def add_policyholder(self, holder: Policyholder) -> None:
        """Add a policyholder to the store."""
        if holder.policyholder_id in self.policyholders:
            raise InvalidEntityStateError(f"Policyholder {holder.policyholder_id} already exists")
        self.policyholders[holder.policyholder_id] = holder

    def add_policy(self, policy: Policy) -> None:
        """Add a policy to the store."""
        if policy.policyholder_id not in self.policyholders:
            raise ReferentialIntegrityError(f"Policyholder {policy.policyholder_id} not found")
        if policy.policy_id in self.policies:
            raise InvalidEntityStateError(f"Policy {policy.policy_id} already exists")

        self.policies[policy.policy_id] = policy
        self._policy_premiums[policy.policy_id] = []
        self._policy_claims[policy.policy_id] = []

    def add_premium(self, premium: Premium) -> None:
        """Add a premium payment to the store."""
        if premium.policy_id not in self.policies:
            raise ReferentialIntegrityError(f"Policy {premium.policy_id} not found")

        idx = len(self.premiums)
        self.premiums.append(premium)
        self._policy_premiums[premium.policy_id].append(idx)

    def add_claim(self, claim: Claim) -> None:
        """Add a claim to the store."""
        policy = self.policies.get(claim.policy_id)
        if policy is None:
            raise ReferentialIntegrityError(f"Policy {claim.policy_id} not found")
        if claim.claim_date < policy.issue_date:
            raise InvalidEntityStateError(
                f"Claim {claim.claim_id} dated {claim.claim_date} precedes "
                f"policy {policy.policy_id} issue date {policy.issue_date}"
            )

        idx = len(self.claims)
        self.claims.append(claim)
        self._policy_claims[claim.policy_id].append(idx)

    # Query methods
    def get_policyholder(self, policyholder_id: EntityId) -> Policyholder:
        """Get a policyholder by id."""
        try:
            return self.policyholders[policyholder_id]
        except KeyError:
            raise ReferentialIntegrityError(f"Policyholder {policyholder_id} not found") from None

    def get_policy_premiums(self, policy_id: EntityId) -> list[Premium]:
        """Get all premium payments for a policy."""
        indices = self._policy_premiums.get(policy_id, [])
        return [self.premiums[i] for i in indices]

    def get_policy_claims(self, policy_id: EntityId) -> list[Claim]:
        """Get all claims for a policy."""
        indices = self._policy_claims.get(policy_id, [])
        return [self.claims[i] for i in indices]

    # Roll-ups
    def premiums_for(self, policy_id: EntityId) -> Decimal:
        """Total premium paid on a policy."""
        return sum((p.premium_amount for p in self.get_policy_premiums(policy_id)), Decimal("0"))

    def claims_for(self, policy_id: EntityId) -> tuple[Decimal, int]:
        """Total claim amount and claim count for a policy."""
        claims = self.get_policy_claims(policy_id)
        return sum((c.claim_amount for c in claims), Decimal("0")), len(claims)

    def total_premiums(self) -> Decimal:
        return sum((p.premium_amount for p in self.premiums), Decimal("0"))

    def total_claims(self) -> Decimal:
        return sum((c.claim_amount for c in self.claims), Decimal("0"))

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "policyholders": len(self.policyholders),
            "policies": len(self.policies),
            "premiums": len(self.premiums),
            "claims": len(self.claims),
        }
