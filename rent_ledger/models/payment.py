"""Payments and cash handovers."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from rent_ledger.models.enums import PaymentMethod


@dataclass(frozen=True)
class Payment:
    """Rent payment against a unit. Append-only."""

    payment_id: str
    unit_id: str
    amount: Decimal
    method: PaymentMethod
    timestamp: datetime
    collector_id: str
    receipt_reference: str | None = None


@dataclass(frozen=True)
class CashHandover:
    """Cash passed from a collector to the manager. Not tied to any unit."""

    handover_id: str
    collector_id: str
    amount: Decimal
    timestamp: datetime
