"""Rent-collection ledger for a small property portfolio."""

from rent_ledger.service import LedgerService

__version__ = "0.1.0"

__all__ = ["LedgerService", "__version__"]
