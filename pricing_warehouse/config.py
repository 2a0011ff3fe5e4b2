"""Configuration management for pricing-warehouse."""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from pricing_warehouse.exceptions import ConfigError
from pricing_warehouse.models.enums import BenefitType, ProductType


@dataclass(frozen=True)
class ProductSpec:
    """Catalog entry describing how a product is priced and claimed."""

    name: str
    target_loss_ratio: float
    claim_frequency: float  # Annual claim probability per policy
    premium_rate: float  # Annual premium as a share of sum insured
    benefit_type: BenefitType = BenefitType.LIFE

    def validate(self) -> None:
        """Check rates are within their valid ranges.

        Raises
        ------
        ConfigError
            If any rate is out of range.
        """
        if not self.name:
            raise ConfigError("Product name must not be empty")
        if not 0.0 <= self.target_loss_ratio <= 1.0:
            raise ConfigError(
                f"Product {self.name}: target loss ratio {self.target_loss_ratio} outside [0, 1]"
            )
        if not 0.0 <= self.claim_frequency <= 1.0:
            raise ConfigError(
                f"Product {self.name}: claim frequency {self.claim_frequency} outside [0, 1]"
            )
        if self.premium_rate <= 0:
            raise ConfigError(f"Product {self.name}: premium rate must be positive")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductSpec":
        """Build a product from a camelCase or snake_case mapping."""
        try:
            return cls(
                name=data["name"],
                target_loss_ratio=float(data.get("targetLossRatio", data.get("target_loss_ratio"))),
                claim_frequency=float(data.get("claimFrequency", data.get("claim_frequency"))),
                premium_rate=float(data.get("premiumRate", data.get("premium_rate"))),
                benefit_type=BenefitType(
                    data.get("benefitType", data.get("benefit_type", BenefitType.LIFE.value))
                ),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid product definition {data!r}: {e}") from e


# Target loss ratios 42-52%, typical of a mature life/health book
DEFAULT_CATALOG: tuple[ProductSpec, ...] = (
    ProductSpec(ProductType.TERM_LIFE.value, 0.42, 0.020, 0.025, BenefitType.LIFE),
    ProductSpec(ProductType.WHOLE_LIFE.value, 0.52, 0.025, 0.035, BenefitType.LIFE),
    ProductSpec(
        ProductType.CRITICAL_ILLNESS.value, 0.48, 0.032, 0.028, BenefitType.CRITICAL_ILLNESS
    ),
    ProductSpec(
        ProductType.DISABILITY_INCOME.value, 0.45, 0.045, 0.032, BenefitType.DISABILITY
    ),
)


@dataclass
class GeneratorConfig:
    """Configuration for synthetic portfolio generation."""

    catalog: tuple[ProductSpec, ...] = DEFAULT_CATALOG
    num_policyholders: int = 3500
    num_policies: int = 5000
    issue_start_year: int = 2020
    issue_end_year: int = 2024
    active_probability: float = 0.85
    as_of: date | None = None  # Reference "today"; None means date.today()

    def validate(self) -> None:
        """Validate the configuration.

        Raises
        ------
        ConfigError
            If the catalog is empty, a product is invalid, or a size or
            window would produce an empty or inverted dataset.
        """
        if not self.catalog:
            raise ConfigError("Product catalog must not be empty")
        names = [product.name for product in self.catalog]
        if len(set(names)) != len(names):
            raise ConfigError(f"Duplicate product names in catalog: {names}")
        for product in self.catalog:
            product.validate()
        if self.num_policyholders < 1:
            raise ConfigError("num_policyholders must be at least 1")
        if self.num_policies < 1:
            raise ConfigError("num_policies must be at least 1")
        if self.issue_start_year > self.issue_end_year:
            raise ConfigError(
                f"Issue window inverted: {self.issue_start_year} > {self.issue_end_year}"
            )
        if not 0.0 <= self.active_probability <= 1.0:
            raise ConfigError("active_probability must be within [0, 1]")

    def reference_date(self) -> date:
        """Return the date elapsed lifetimes are measured against."""
        return self.as_of or date.today()

    def product(self, name: str) -> ProductSpec:
        """Look up a catalog product by name."""
        for product in self.catalog:
            if product.name == name:
                return product
        raise ConfigError(f"Product {name} not in catalog")


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class WarehouseConfig:
    """Main configuration for pricing-warehouse."""

    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    seed: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "WarehouseConfig":
        """Create config from environment variables."""
        import json
        import os

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        catalog_str = os.getenv("PRODUCT_CATALOG")
        if catalog_str:
            try:
                raw_catalog = json.loads(catalog_str)
            except json.JSONDecodeError as e:
                raise ConfigError(f"PRODUCT_CATALOG is not valid JSON: {e}") from e
            catalog = tuple(ProductSpec.from_dict(item) for item in raw_catalog)
        else:
            catalog = DEFAULT_CATALOG

        try:
            generator = GeneratorConfig(
                catalog=catalog,
                num_policyholders=int(os.getenv("NUM_POLICYHOLDERS", "3500")),
                num_policies=int(os.getenv("NUM_POLICIES", "5000")),
            )
            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except ValueError as e:
            raise ConfigError(f"Invalid numeric environment setting: {e}") from e

        return cls(
            generator=generator,
            output=output,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
