"""Conversion between the ledger aggregate and its JSON document."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from rent_ledger.billing.months import parse_month_key
from rent_ledger.exceptions import StorageCorruptError
from rent_ledger.models import (
    CashHandover,
    LeaseRequest,
    LeaseStatus,
    Ledger,
    Location,
    Payment,
    PaymentMethod,
    Tenant,
    Unit,
)

# Document collection name -> (model class, id field)
COLLECTIONS: dict[str, tuple[type, str]] = {
    "locations": (Location, "location_id"),
    "units": (Unit, "unit_id"),
    "tenants": (Tenant, "tenant_id"),
    "payments": (Payment, "payment_id"),
    "lease_requests": (LeaseRequest, "request_id"),
    "handovers": (CashHandover, "handover_id"),
}

DECIMAL_FIELDS = {"rent_amount", "due_amount", "unpaid_amount", "amount", "proposed_rent"}
DATETIME_FIELDS = {"last_accrual_date", "timestamp"}
ENUM_FIELDS: dict[str, type[Enum]] = {"method": PaymentMethod, "status": LeaseStatus}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        return to_dict(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def to_dict(obj: Any) -> dict:
    """Convert a flat dataclass to a JSON-ready dict without deep copying."""
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def ledger_to_dict(ledger: Ledger) -> dict[str, list[dict]]:
    """Serialize the whole ledger into its persisted document form."""
    return {
        "locations": [to_dict(x) for x in ledger.locations.values()],
        "units": [to_dict(x) for x in ledger.units.values()],
        "tenants": [to_dict(x) for x in ledger.tenants.values()],
        "payments": [to_dict(x) for x in ledger.payments],
        "lease_requests": [to_dict(x) for x in ledger.lease_requests.values()],
        "handovers": [to_dict(x) for x in ledger.handovers],
    }


def _hydrate_value(name: str, value: Any) -> Any:
    if value is None:
        return None
    if name in DECIMAL_FIELDS:
        return Decimal(str(value))
    if name in DATETIME_FIELDS:
        return datetime.fromisoformat(value)
    if name in ENUM_FIELDS:
        return ENUM_FIELDS[name](value)
    if name == "unpaid_months":
        for key in value:
            parse_month_key(key)
        return list(value)
    return value


def from_dict(cls: type, record: dict[str, Any]) -> Any:
    """Build one model instance from its serialized record.

    Unknown keys are ignored; missing required keys raise ``TypeError``.
    """
    kwargs = {
        f.name: _hydrate_value(f.name, record[f.name]) for f in fields(cls) if f.name in record
    }
    return cls(**kwargs)


def ledger_from_dict(document: Any) -> Ledger:
    """Rebuild a ledger from its persisted document.

    Raises
    ------
    StorageCorruptError
        If the document is not a valid ledger.
    """
    if not isinstance(document, dict):
        raise StorageCorruptError(
            f"Ledger document must be an object, got {type(document).__name__}"
        )

    try:
        collections: dict[str, list] = {}
        for name, (cls, _) in COLLECTIONS.items():
            records = document.get(name, [])
            if not isinstance(records, list):
                raise TypeError(f"collection {name!r} must be a list")
            collections[name] = [from_dict(cls, record) for record in records]
    except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
        raise StorageCorruptError(f"Malformed ledger document: {exc}") from exc

    for name, (_, id_field) in COLLECTIONS.items():
        ids = [getattr(x, id_field) for x in collections[name]]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise StorageCorruptError(f"Duplicate {id_field} in {name}: {duplicates}")

    def index(name: str) -> dict[str, Any]:
        id_field = COLLECTIONS[name][1]
        return {getattr(x, id_field): x for x in collections[name]}

    ledger = Ledger(
        locations=index("locations"),
        units=index("units"),
        tenants=index("tenants"),
        lease_requests=index("lease_requests"),
        payments=collections["payments"],
        handovers=collections["handovers"],
    )
    _check_references(ledger)
    return ledger


def _check_references(ledger: Ledger) -> None:
    """Reject units and pending requests that point at missing entities.

    Payments and settled requests may outlive their unit.
    """
    for unit in ledger.units.values():
        if unit.location_id not in ledger.locations:
            raise StorageCorruptError(
                f"Unit {unit.unit_id} references missing location {unit.location_id}"
            )
        if unit.tenant_id is not None and unit.tenant_id not in ledger.tenants:
            raise StorageCorruptError(
                f"Unit {unit.unit_id} references missing tenant {unit.tenant_id}"
            )
    for request in ledger.get_pending_requests():
        if request.unit_id not in ledger.units:
            raise StorageCorruptError(
                f"Pending lease request {request.request_id} references missing unit {request.unit_id}"
            )
