"""Domain models for the rent ledger."""

from rent_ledger.models.enums import LeaseStatus, PaymentMethod, UserRole
from rent_ledger.models.ledger import Ledger
from rent_ledger.models.payment import CashHandover, Payment
from rent_ledger.models.property import Location, Unit
from rent_ledger.models.tenancy import LeaseRequest, Tenant

__all__ = [
    "CashHandover",
    "LeaseRequest",
    "LeaseStatus",
    "Ledger",
    "Location",
    "Payment",
    "PaymentMethod",
    "Tenant",
    "Unit",
    "UserRole",
]
