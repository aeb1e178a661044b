"""Tenants and lease requests."""

from dataclasses import dataclass
from decimal import Decimal

from rent_ledger.models.enums import LeaseStatus


@dataclass
class Tenant:
    """Tenant created when a lease request is approved."""

    tenant_id: str
    name: str
    id_number: str
    id_photo_reference: str | None = None


@dataclass
class LeaseRequest:
    """Collector-submitted request to lease a vacant unit."""

    request_id: str
    unit_id: str
    tenant_name: str
    tenant_id_number: str
    proposed_rent: Decimal
    signature: str  # Opaque reference to the captured signature
    status: LeaseStatus = LeaseStatus.PENDING
    id_photo_reference: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == LeaseStatus.PENDING
