"""Synthetic data generators."""

from rent_ledger.generators.portfolio import PortfolioGenerator

__all__ = ["PortfolioGenerator"]
