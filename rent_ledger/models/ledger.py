"""Ledger aggregate with referential integrity."""

from dataclasses import dataclass, field
from decimal import Decimal

from rent_ledger.exceptions import (
    EntityNotFoundError,
    HasDependentsError,
    ReferentialIntegrityError,
    UnitOccupiedError,
)
from rent_ledger.models.base import ZERO
from rent_ledger.models.enums import PaymentMethod
from rent_ledger.models.payment import CashHandover, Payment
from rent_ledger.models.property import Location, Unit
from rent_ledger.models.tenancy import LeaseRequest, Tenant


@dataclass
class Ledger:
    """Aggregate root holding every collection of the rent ledger.

    The ledger is always loaded and saved as a whole. Mapping collections
    keep insertion order, which is also the order used when serialized.
    """

    # Primary entities
    locations: dict[str, Location] = field(default_factory=dict)
    units: dict[str, Unit] = field(default_factory=dict)
    tenants: dict[str, Tenant] = field(default_factory=dict)
    lease_requests: dict[str, LeaseRequest] = field(default_factory=dict)

    # Append-only records
    payments: list[Payment] = field(default_factory=list)
    handovers: list[CashHandover] = field(default_factory=list)

    def add_location(self, location: Location) -> None:
        """Add a location to the ledger."""
        self.locations[location.location_id] = location

    def add_unit(self, unit: Unit) -> None:
        """Add a unit to the ledger."""
        if unit.location_id not in self.locations:
            raise ReferentialIntegrityError(f"Location {unit.location_id} not found")
        if unit.tenant_id is not None and unit.tenant_id not in self.tenants:
            raise ReferentialIntegrityError(f"Tenant {unit.tenant_id} not found")

        self.units[unit.unit_id] = unit

    def add_tenant(self, tenant: Tenant) -> None:
        """Add a tenant to the ledger."""
        self.tenants[tenant.tenant_id] = tenant

    def add_lease_request(self, request: LeaseRequest) -> None:
        """Add a lease request to the ledger."""
        if request.unit_id not in self.units:
            raise ReferentialIntegrityError(f"Unit {request.unit_id} not found")

        self.lease_requests[request.request_id] = request

    def add_payment(self, payment: Payment) -> None:
        """Append a payment record."""
        if payment.unit_id not in self.units:
            raise ReferentialIntegrityError(f"Unit {payment.unit_id} not found")

        self.payments.append(payment)

    def add_handover(self, handover: CashHandover) -> None:
        """Append a cash handover record."""
        self.handovers.append(handover)

    def remove_location(self, location_id: str) -> Location:
        """Remove a location that no unit references."""
        location = self.get_location(location_id)
        dependents = self.get_location_units(location_id)
        if dependents:
            raise HasDependentsError(
                f"Location {location_id} still has {len(dependents)} unit(s); "
                "delete or move them first"
            )
        del self.locations[location_id]
        return location

    def remove_unit(self, unit_id: str) -> Unit:
        """Remove a vacant unit with no pending lease request."""
        unit = self.get_unit(unit_id)
        if unit.is_occupied:
            raise UnitOccupiedError(f"Unit {unit_id} is occupied; vacate it first")
        pending = self.get_pending_requests(unit_id)
        if pending:
            raise HasDependentsError(
                f"Unit {unit_id} has {len(pending)} pending lease request(s); "
                "approve or reject them first"
            )
        del self.units[unit_id]
        return unit

    # Query methods
    def get_location(self, location_id: str) -> Location:
        """Get a location or raise ``EntityNotFoundError``."""
        try:
            return self.locations[location_id]
        except KeyError:
            raise EntityNotFoundError(f"Location {location_id} not found") from None

    def get_unit(self, unit_id: str) -> Unit:
        """Get a unit or raise ``EntityNotFoundError``."""
        try:
            return self.units[unit_id]
        except KeyError:
            raise EntityNotFoundError(f"Unit {unit_id} not found") from None

    def get_tenant(self, tenant_id: str) -> Tenant:
        """Get a tenant or raise ``EntityNotFoundError``."""
        try:
            return self.tenants[tenant_id]
        except KeyError:
            raise EntityNotFoundError(f"Tenant {tenant_id} not found") from None

    def get_lease_request(self, request_id: str) -> LeaseRequest:
        """Get a lease request or raise ``EntityNotFoundError``."""
        try:
            return self.lease_requests[request_id]
        except KeyError:
            raise EntityNotFoundError(f"Lease request {request_id} not found") from None

    def get_location_units(self, location_id: str) -> list[Unit]:
        """Get all units at a location."""
        return [u for u in self.units.values() if u.location_id == location_id]

    def get_unit_payments(self, unit_id: str) -> list[Payment]:
        """Get all payments recorded against a unit."""
        return [p for p in self.payments if p.unit_id == unit_id]

    def get_pending_requests(self, unit_id: str | None = None) -> list[LeaseRequest]:
        """Get pending lease requests, optionally for a single unit."""
        return [
            r
            for r in self.lease_requests.values()
            if r.is_pending and (unit_id is None or r.unit_id == unit_id)
        ]

    def get_unit_tenant(self, unit_id: str) -> Tenant | None:
        """Get the current tenant of a unit, if any."""
        unit = self.get_unit(unit_id)
        if unit.tenant_id is None:
            return None
        return self.tenants.get(unit.tenant_id)

    def summary(self) -> dict[str, int | Decimal]:
        """Return portfolio totals.

        ``cash_on_hand`` is cash collected by collectors that has not yet
        been handed over to the manager.
        """
        occupied = sum(1 for u in self.units.values() if u.is_occupied)
        cash_collected = sum(
            (p.amount for p in self.payments if p.method == PaymentMethod.CASH), ZERO
        )
        cash_handed_over = sum((h.amount for h in self.handovers), ZERO)
        return {
            "locations": len(self.locations),
            "units": len(self.units),
            "occupied": occupied,
            "vacant": len(self.units) - occupied,
            "tenants": len(self.tenants),
            "pending_requests": len(self.get_pending_requests()),
            "payments": len(self.payments),
            "total_collected": sum((p.amount for p in self.payments), ZERO),
            "total_due": sum((u.due_amount for u in self.units.values()), ZERO),
            "cash_collected": cash_collected,
            "cash_handed_over": cash_handed_over,
            "cash_on_hand": cash_collected - cash_handed_over,
        }
