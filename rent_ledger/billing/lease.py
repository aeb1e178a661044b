"""Lease lifecycle: vacant -> pending request -> occupied -> vacant.

Approval is the only path that creates a tenant and occupies a unit.
Vacating clears all billing state so the next approval starts fresh.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from rent_ledger.billing.months import month_key
from rent_ledger.exceptions import InvalidEntityStateError, UnitOccupiedError
from rent_ledger.models import LeaseRequest, LeaseStatus, Ledger, Tenant, Unit
from rent_ledger.models.base import ZERO, new_id

logger = logging.getLogger(__name__)


@dataclass
class LeaseApproval:
    """Entities touched by approving a lease request."""

    tenant: Tenant
    unit: Unit
    request: LeaseRequest


def submit_lease_request(
    ledger: Ledger,
    unit_id: str,
    tenant_name: str,
    tenant_id_number: str,
    proposed_rent: Decimal,
    signature: str,
    id_photo_reference: str | None = None,
) -> LeaseRequest:
    """Create a pending lease request for a vacant unit."""
    unit = ledger.get_unit(unit_id)
    if unit.is_occupied:
        raise UnitOccupiedError(f"Unit {unit_id} is already occupied")
    if ledger.get_pending_requests(unit_id):
        raise InvalidEntityStateError(f"Unit {unit_id} already has a pending lease request")

    request = LeaseRequest(
        request_id=new_id("req"),
        unit_id=unit_id,
        tenant_name=tenant_name,
        tenant_id_number=tenant_id_number,
        proposed_rent=proposed_rent,
        signature=signature,
        id_photo_reference=id_photo_reference,
    )
    ledger.add_lease_request(request)
    return request


def approve_lease_request(ledger: Ledger, request_id: str, now: datetime) -> LeaseApproval:
    """Approve a pending request, creating the tenant and occupying the unit.

    The unit is billed for the current month immediately and accrual
    resumes at the next month boundary.

    Raises
    ------
    EntityNotFoundError
        If the request or its unit does not exist.
    InvalidEntityStateError
        If the request is no longer pending.
    UnitOccupiedError
        If the unit was occupied after the request was filed.
    """
    request = ledger.get_lease_request(request_id)
    if not request.is_pending:
        raise InvalidEntityStateError(
            f"Lease request {request_id} is already {request.status.value}"
        )
    unit = ledger.get_unit(request.unit_id)
    if unit.is_occupied:
        raise UnitOccupiedError(f"Unit {unit.unit_id} is already occupied")

    tenant = Tenant(
        tenant_id=new_id("ten"),
        name=request.tenant_name,
        id_number=request.tenant_id_number,
        id_photo_reference=request.id_photo_reference,
    )
    ledger.add_tenant(tenant)

    unit.tenant_id = tenant.tenant_id
    unit.rent_amount = request.proposed_rent
    unit.due_amount = request.proposed_rent
    unit.unpaid_amount = ZERO
    unit.unpaid_months = [month_key(now)]
    unit.last_accrual_date = now

    request.status = LeaseStatus.APPROVED
    logger.info("Approved lease %s: unit %s -> tenant %s", request_id, unit.unit_id, tenant.tenant_id)
    return LeaseApproval(tenant=tenant, unit=unit, request=request)


def reject_lease_request(ledger: Ledger, request_id: str) -> LeaseRequest:
    """Reject a pending request. The unit is not touched."""
    request = ledger.get_lease_request(request_id)
    if not request.is_pending:
        raise InvalidEntityStateError(
            f"Lease request {request_id} is already {request.status.value}"
        )
    request.status = LeaseStatus.REJECTED
    logger.info("Rejected lease %s for unit %s", request_id, request.unit_id)
    return request


def vacate_unit(ledger: Ledger, unit_id: str) -> Unit:
    """Move the tenant out and clear all billing state."""
    unit = ledger.get_unit(unit_id)
    if not unit.is_occupied:
        raise InvalidEntityStateError(f"Unit {unit_id} is already vacant")

    previous_tenant = unit.tenant_id
    unit.tenant_id = None
    unit.due_amount = ZERO
    unit.unpaid_amount = ZERO
    unit.unpaid_months = []
    unit.last_accrual_date = None
    logger.info("Vacated unit %s (tenant %s)", unit_id, previous_tenant)
    return unit
