"""Scenarios for generating synthetic insurance portfolios."""

from pricing_warehouse.scenarios.portfolio import PortfolioScenario, generate_portfolio

__all__ = ["PortfolioScenario", "generate_portfolio"]
