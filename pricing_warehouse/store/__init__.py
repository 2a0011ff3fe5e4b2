"""In-memory data stores for maintaining entity relationships."""

from pricing_warehouse.store.portfolio import PortfolioStore

__all__ = ["PortfolioStore"]
