"""Tests for data generators."""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from faker import Faker

from pricing_warehouse.config import DEFAULT_CATALOG, ProductSpec
from pricing_warehouse.generators import (
    ClaimGenerator,
    PolicyGenerator,
    PolicyholderGenerator,
    PremiumGenerator,
)
from pricing_warehouse.models import (
    BenefitType,
    Gender,
    IncomeBand,
    Policy,
    PolicyStatus,
    Region,
)
from pricing_warehouse.periods import add_months, elapsed_months

AS_OF = date(2025, 6, 30)


def _policy(
    issue_date: date = date(2023, 1, 15),
    sum_insured: int = 100000,
    holder_id: int = 2,
    product_type: str = "Term Life",
) -> Policy:
    return Policy(
        policy_id=1,
        policyholder_id=holder_id,
        product_type=product_type,
        issue_date=issue_date,
        sum_insured=Decimal(sum_insured),
        policy_status=PolicyStatus.ACTIVE,
    )


def _always_claims(benefit_type: BenefitType = BenefitType.LIFE) -> ProductSpec:
    return ProductSpec("Test", 0.5, 1.0, 0.03, benefit_type)


class TestPeriods:
    """Tests for calendar helpers."""

    def test_elapsed_months_uses_30_day_months(self) -> None:
        assert elapsed_months(date(2024, 1, 1), date(2024, 1, 30)) == 0
        assert elapsed_months(date(2024, 1, 1), date(2024, 1, 31)) == 1
        assert elapsed_months(date(2024, 1, 1), date(2023, 12, 1)) < 0

    def test_add_months_clamps_day(self) -> None:
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
        assert add_months(date(2023, 11, 15), 14) == date(2025, 1, 15)


class TestPolicyholderGenerator:
    """Tests for PolicyholderGenerator."""

    def test_generate_batch(self, seed: int) -> None:
        gen = PolicyholderGenerator(seed=seed)
        holders = list(gen.generate_batch(200))

        assert [h.policyholder_id for h in holders] == list(range(1, 201))
        for holder in holders:
            assert 25 <= holder.age <= 74
            assert holder.gender in {g.value for g in Gender}
            assert holder.region in {r.value for r in Region}
            assert holder.income_band in {b.value for b in IncomeBand}

    def test_reproducible(self, seed: int) -> None:
        first = list(PolicyholderGenerator(seed=seed).generate_batch(20))
        second = list(PolicyholderGenerator(seed=seed).generate_batch(20))
        assert first == second

    def test_shared_faker(self, seed: int) -> None:
        fake = Faker("en_US")
        fake.seed_instance(seed)
        gen = PolicyholderGenerator(fake=fake)
        assert gen.fake is fake
        assert gen.rng is fake.random


class TestPolicyGenerator:
    """Tests for PolicyGenerator."""

    def test_generate(self, seed: int) -> None:
        gen = PolicyGenerator(DEFAULT_CATALOG, seed=seed)
        names = {p.name for p in DEFAULT_CATALOG}

        for i in range(1, 201):
            policy, product = gen.generate(policyholder_id=7)

            assert policy.policy_id == i
            assert policy.policyholder_id == 7
            assert policy.product_type == product.name
            assert product.name in names
            assert date(2020, 1, 1) <= policy.issue_date <= date(2024, 12, 31)
            assert Decimal("100000") <= policy.sum_insured <= Decimal("540000")
            assert policy.sum_insured % 10000 == 0
            assert policy.lapse_date is None

    def test_status_probability(self, seed: int) -> None:
        always = PolicyGenerator(DEFAULT_CATALOG, active_probability=1.0, seed=seed)
        never = PolicyGenerator(DEFAULT_CATALOG, active_probability=0.0, seed=seed)

        assert all(always.generate(1)[0].policy_status is PolicyStatus.ACTIVE for _ in range(50))
        assert all(never.generate(1)[0].policy_status is PolicyStatus.LAPSED for _ in range(50))

    def test_issue_window(self, seed: int) -> None:
        gen = PolicyGenerator(DEFAULT_CATALOG, issue_start_year=2022, issue_end_year=2022, seed=seed)
        for _ in range(50):
            assert gen.generate(1)[0].issue_date.year == 2022


class TestPremiumGenerator:
    """Tests for PremiumGenerator."""

    def test_monthly_installment_floors(self) -> None:
        term = DEFAULT_CATALOG[0]
        whole_life = DEFAULT_CATALOG[1]

        assert PremiumGenerator.monthly_installment(_policy(), term) == Decimal("208")
        assert PremiumGenerator.monthly_installment(_policy(), whole_life) == Decimal("291")

    def test_trailing_window(self, seed: int) -> None:
        premiums = list(
            PremiumGenerator(seed=seed).generate_for_policy(_policy(), DEFAULT_CATALOG[0], AS_OF)
        )

        # 897 days in force: 29 elapsed months, installments 17..28
        assert len(premiums) == 12
        assert premiums[0].payment_date == date(2024, 6, 15)
        assert premiums[-1].payment_date == date(2025, 5, 15)
        assert {p.premium_amount for p in premiums} == {Decimal("208")}
        assert [p.premium_id for p in premiums] == list(range(1, 13))

    def test_young_policy(self, seed: int) -> None:
        policy = _policy(issue_date=date(2025, 3, 1))
        premiums = list(PremiumGenerator(seed=seed).generate_for_policy(policy, DEFAULT_CATALOG[0], AS_OF))

        assert len(premiums) == elapsed_months(policy.issue_date, AS_OF)
        assert premiums[0].payment_date == policy.issue_date

    def test_lifetime_capped(self, seed: int) -> None:
        policy = _policy(issue_date=date(2020, 1, 1))
        premiums = list(PremiumGenerator(seed=seed).generate_for_policy(policy, DEFAULT_CATALOG[0], AS_OF))

        # Capped at 36 months: installments 24..35
        assert len(premiums) == 12
        assert premiums[0].payment_date == date(2022, 1, 1)
        assert premiums[-1].payment_date == date(2022, 12, 1)

    @pytest.mark.parametrize("issue_date", [date(2025, 6, 20), date(2025, 12, 1)])
    def test_no_premiums_before_first_month(self, seed: int, issue_date: date) -> None:
        policy = _policy(issue_date=issue_date)
        gen = PremiumGenerator(seed=seed)
        assert list(gen.generate_for_policy(policy, DEFAULT_CATALOG[0], AS_OF)) == []


class TestClaimGenerator:
    """Tests for ClaimGenerator."""

    def test_regional_multiplier(self) -> None:
        assert ClaimGenerator.regional_multiplier(10) == 1.15
        assert ClaimGenerator.regional_multiplier(11) == 0.90
        assert ClaimGenerator.regional_multiplier(12) == 1.0
        assert ClaimGenerator.regional_multiplier(14) == 1.0

    def test_claim_probability(self) -> None:
        gen = ClaimGenerator(seed=1)
        product = DEFAULT_CATALOG[0]

        assert gen.claim_probability(_policy(holder_id=5), product) == pytest.approx(0.023)
        assert gen.claim_probability(_policy(holder_id=6), product) == pytest.approx(0.018)

    def test_zero_frequency_never_claims(self, seed: int) -> None:
        gen = ClaimGenerator(seed=seed)
        product = ProductSpec("None", 0.5, 0.0, 0.03)
        assert all(gen.generate_for_policy(_policy(), product, AS_OF) is None for _ in range(100))

    @pytest.mark.parametrize(
        "benefit_type,low,high",
        [
            (BenefitType.LIFE, 95000, 100000),
            (BenefitType.CRITICAL_ILLNESS, 70000, 100000),
            (BenefitType.DISABILITY, 12000, 32000),
        ],
    )
    def test_severity_by_benefit(self, seed: int, benefit_type: BenefitType, low: int, high: int) -> None:
        gen = ClaimGenerator(seed=seed)
        policy = _policy()

        for _ in range(100):
            claim = gen.generate_for_policy(policy, _always_claims(benefit_type), AS_OF)
            assert claim is not None
            assert Decimal(low) <= claim.claim_amount <= Decimal(high)
            assert claim.claim_amount == claim.claim_amount.to_integral_value()

    def test_claim_fields(self, seed: int) -> None:
        policy = _policy()
        claim = ClaimGenerator(seed=seed).generate_for_policy(policy, _always_claims(), AS_OF)

        assert claim.claim_id == 1
        assert claim.policy_id == policy.policy_id
        assert claim.claim_type == "Term Life"
        assert claim.claim_status == "Paid"

    def test_claim_date_within_exposure(self, seed: int) -> None:
        gen = ClaimGenerator(seed=seed)
        policy = _policy(issue_date=date(2020, 1, 1))

        for _ in range(100):
            claim = gen.generate_for_policy(policy, _always_claims(), AS_OF)
            assert policy.issue_date <= claim.claim_date < policy.issue_date + timedelta(days=1095)

    def test_minimum_exposure(self, seed: int) -> None:
        gen = ClaimGenerator(seed=seed)
        product = _always_claims()

        thirty = _policy(issue_date=AS_OF - timedelta(days=30))
        thirty_one = _policy(issue_date=AS_OF - timedelta(days=31))

        assert gen.generate_for_policy(thirty, product, AS_OF) is None
        claim = gen.generate_for_policy(thirty_one, product, AS_OF)
        assert claim is not None
        assert claim.claim_date < AS_OF

    def test_reproducible(self, seed: int) -> None:
        product = DEFAULT_CATALOG[3]
        policies = [_policy(holder_id=i) for i in range(1, 300)]

        def draw() -> list:
            gen = ClaimGenerator(seed=seed)
            return [gen.generate_for_policy(p, product, AS_OF) for p in policies]

        assert draw() == draw()
