"""Locations and rentable units."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from rent_ledger.models.base import ZERO


@dataclass
class Location:
    """Named grouping of units, e.g. a building or compound."""

    location_id: str
    name: str


@dataclass
class Unit:
    """A single rentable property (apartment, villa, shop).

    ``due_amount`` is the authoritative running balance. ``unpaid_months``
    lists the month-keys of billing periods still open, oldest first.
    ``last_accrual_date`` is ``None`` while the unit has never been billed.
    """

    unit_id: str
    location_id: str
    name: str
    rent_amount: Decimal
    tenant_id: str | None = None
    due_amount: Decimal = ZERO
    unpaid_amount: Decimal = ZERO  # Legacy arrears carried over from seed data
    unpaid_months: list[str] = field(default_factory=list)
    last_accrual_date: datetime | None = None

    @property
    def is_occupied(self) -> bool:
        return self.tenant_id is not None
