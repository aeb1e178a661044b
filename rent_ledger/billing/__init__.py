"""Rent accrual, settlement and lease lifecycle rules."""

from rent_ledger.billing.accrual import AccrualResult, accrue_ledger, accrue_unit
from rent_ledger.billing.lease import (
    LeaseApproval,
    approve_lease_request,
    reject_lease_request,
    submit_lease_request,
    vacate_unit,
)
from rent_ledger.billing.months import add_months, month_key, months_between, parse_month_key
from rent_ledger.billing.settlement import apply_payment, months_covered

__all__ = [
    "AccrualResult",
    "LeaseApproval",
    "accrue_ledger",
    "accrue_unit",
    "add_months",
    "apply_payment",
    "approve_lease_request",
    "month_key",
    "months_between",
    "months_covered",
    "parse_month_key",
    "reject_lease_request",
    "submit_lease_request",
    "vacate_unit",
]
