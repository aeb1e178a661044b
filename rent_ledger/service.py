"""Ledger mutation gateway.

Every operation follows the same shape: validate input, load the ledger
(which runs accrual), apply one domain operation, save, and return the
affected entities. Domain errors are raised before anything is saved.

The store is read and written as a whole, so a single ``LedgerService``
must be the only writer of its store.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from rent_ledger.billing import (
    LeaseApproval,
    accrue_ledger,
    apply_payment,
    approve_lease_request,
    reject_lease_request,
    submit_lease_request,
    vacate_unit,
)
from rent_ledger.clock import Clock, SystemClock
from rent_ledger.exceptions import EntityNotFoundError, InvalidEntityStateError, ValidationError
from rent_ledger.identity import CredentialTable
from rent_ledger.models import (
    CashHandover,
    LeaseRequest,
    Ledger,
    Location,
    Payment,
    PaymentMethod,
    Tenant,
    Unit,
    UserRole,
)
from rent_ledger.models.base import new_id
from rent_ledger.store import LedgerStore

logger = logging.getLogger(__name__)


def _require_text(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def _to_amount(value: Any, field_name: str, allow_zero: bool = False) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number, got {value!r}")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{field_name} must be a number, got {value!r}") from exc
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be finite, got {value!r}")
    if amount < 0 or (amount == 0 and not allow_zero):
        bound = "zero or more" if allow_zero else "positive"
        raise ValidationError(f"{field_name} must be {bound}, got {amount}")
    return amount


class LedgerService:
    """Command and query surface used by the presentation layer.

    Parameters
    ----------
    store : LedgerStore
        Whole-document store.
    clock : Clock | None
        Source of "now" for accrual and timestamps (system clock by default).
    credentials : CredentialTable | None
        Login table (demo credentials by default).
    collector_id : str
        Collector recorded on payments and handovers when none is given.
    """

    def __init__(
        self,
        store: LedgerStore,
        clock: Clock | None = None,
        credentials: CredentialTable | None = None,
        collector_id: str = "collector1",
    ) -> None:
        self.store = store
        self.clock = clock or SystemClock()
        self.credentials = credentials or CredentialTable()
        self.collector_id = collector_id

    # --- Reads ---

    def load(self) -> Ledger:
        """Load the ledger with every occupied unit's rent brought current."""
        ledger = self.store.load()
        changes = accrue_ledger(ledger, self.clock.now())
        if changes:
            charged = sum(len(c.charged_months) for c in changes)
            logger.info("Accrual updated %d unit(s), %d month(s) charged", len(changes), charged)
            self.store.save(ledger)
        return ledger

    def authenticate(self, email: str, password: str) -> UserRole | None:
        return self.credentials.authenticate(email, password)

    def list_units(
        self,
        location_id: str | None = None,
        occupied: bool | None = None,
        search: str | None = None,
    ) -> list[Unit]:
        """Filter units by location, occupancy and unit or tenant name."""
        ledger = self.load()
        needle = search.strip() if search else ""
        units = []
        for unit in ledger.units.values():
            if location_id is not None and unit.location_id != location_id:
                continue
            if occupied is not None and unit.is_occupied != occupied:
                continue
            if needle:
                tenant = ledger.tenants.get(unit.tenant_id) if unit.tenant_id else None
                tenant_name = tenant.name if tenant else ""
                if needle.lower() not in unit.name.lower() and needle.lower() not in tenant_name.lower():
                    continue
            units.append(unit)
        return units

    def pending_lease_requests(self) -> list[LeaseRequest]:
        return self.load().get_pending_requests()

    def recent_payments(self, limit: int = 5) -> list[Payment]:
        """Most recent payments, newest first."""
        if limit <= 0:
            return []
        return list(reversed(self.load().payments[-limit:]))

    def tenant_for(self, unit_id: str) -> Tenant | None:
        return self.load().get_unit_tenant(unit_id)

    def summary(self) -> dict[str, int | Decimal]:
        return self.load().summary()

    # --- Payments and cash ---

    def record_payment(
        self,
        unit_id: str,
        amount: Any,
        method: PaymentMethod = PaymentMethod.CASH,
        receipt_reference: str | None = None,
        collector_id: str | None = None,
    ) -> Payment:
        """Record a payment and settle it against the unit's balance."""
        value = _to_amount(amount, "amount")
        try:
            method = PaymentMethod(method)
        except ValueError as exc:
            raise ValidationError(f"Unknown payment method {method!r}") from exc

        ledger = self.load()
        unit = ledger.get_unit(unit_id)
        if not unit.is_occupied:
            raise InvalidEntityStateError(f"Unit {unit_id} is vacant; nothing to collect")

        payment = Payment(
            payment_id=new_id("pay"),
            unit_id=unit_id,
            amount=value,
            method=method,
            timestamp=self.clock.now(),
            collector_id=collector_id or self.collector_id,
            receipt_reference=receipt_reference,
        )
        apply_payment(unit, value)
        ledger.add_payment(payment)
        self.store.save(ledger)
        logger.info("Recorded %s payment %s for unit %s", method.value, value, unit_id)
        return payment

    def record_cash_handover(self, amount: Any, collector_id: str | None = None) -> CashHandover:
        value = _to_amount(amount, "amount")

        ledger = self.load()
        handover = CashHandover(
            handover_id=new_id("hand"),
            collector_id=collector_id or self.collector_id,
            amount=value,
            timestamp=self.clock.now(),
        )
        ledger.add_handover(handover)
        self.store.save(ledger)
        logger.info("Recorded cash handover %s from %s", value, handover.collector_id)
        return handover

    # --- Lease lifecycle ---

    def submit_lease_request(
        self,
        unit_id: str,
        tenant_name: str,
        tenant_id_number: str,
        rent_amount: Any,
        signature: str,
        id_photo_reference: str | None = None,
    ) -> LeaseRequest:
        name = _require_text(tenant_name, "tenant_name")
        id_number = _require_text(tenant_id_number, "tenant_id_number")
        sig = _require_text(signature, "signature")
        rent = _to_amount(rent_amount, "rent_amount", allow_zero=True)

        ledger = self.load()
        request = submit_lease_request(
            ledger, unit_id, name, id_number, rent, sig, id_photo_reference=id_photo_reference
        )
        self.store.save(ledger)
        logger.info("Submitted lease request %s for unit %s", request.request_id, unit_id)
        return request

    def approve_lease_request(self, request_id: str) -> LeaseApproval:
        ledger = self.load()
        approval = approve_lease_request(ledger, request_id, self.clock.now())
        self.store.save(ledger)
        return approval

    def reject_lease_request(self, request_id: str) -> LeaseRequest:
        ledger = self.load()
        request = reject_lease_request(ledger, request_id)
        self.store.save(ledger)
        return request

    def vacate_unit(self, unit_id: str) -> Unit:
        ledger = self.load()
        unit = vacate_unit(ledger, unit_id)
        self.store.save(ledger)
        return unit

    # --- Locations ---

    def add_location(self, name: str) -> Location:
        clean = _require_text(name, "name")

        ledger = self.load()
        location = Location(location_id=new_id("loc"), name=clean)
        ledger.add_location(location)
        self.store.save(ledger)
        logger.info("Added location %s (%s)", location.location_id, clean)
        return location

    def rename_location(self, location_id: str, name: str) -> Location:
        clean = _require_text(name, "name")

        ledger = self.load()
        location = ledger.get_location(location_id)
        location.name = clean
        self.store.save(ledger)
        return location

    def delete_location(self, location_id: str) -> None:
        ledger = self.load()
        ledger.remove_location(location_id)
        self.store.save(ledger)
        logger.info("Deleted location %s", location_id)

    # --- Units ---

    def add_unit(self, location_id: str, name: str, rent_amount: Any) -> Unit:
        clean = _require_text(name, "name")
        rent = _to_amount(rent_amount, "rent_amount", allow_zero=True)

        ledger = self.load()
        unit = Unit(unit_id=new_id("house"), location_id=location_id, name=clean, rent_amount=rent)
        ledger.add_unit(unit)
        self.store.save(ledger)
        logger.info("Added unit %s (%s) at %s", unit.unit_id, clean, location_id)
        return unit

    def update_unit(
        self,
        unit_id: str,
        name: str | None = None,
        rent_amount: Any = None,
        location_id: str | None = None,
    ) -> Unit:
        """Edit a unit. A new rent only affects months accrued from now on."""
        clean = _require_text(name, "name") if name is not None else None
        rent = _to_amount(rent_amount, "rent_amount", allow_zero=True) if rent_amount is not None else None

        ledger = self.load()
        unit = ledger.get_unit(unit_id)
        if location_id is not None and location_id not in ledger.locations:
            raise EntityNotFoundError(f"Location {location_id} not found")

        if clean is not None:
            unit.name = clean
        if rent is not None:
            unit.rent_amount = rent
        if location_id is not None:
            unit.location_id = location_id
        self.store.save(ledger)
        return unit

    def delete_unit(self, unit_id: str) -> None:
        ledger = self.load()
        ledger.remove_unit(unit_id)
        self.store.save(ledger)
        logger.info("Deleted unit %s", unit_id)
