"""Payment settlement against unit balances."""

import logging
from decimal import Decimal

from rent_ledger.exceptions import ValidationError
from rent_ledger.models import Unit
from rent_ledger.models.base import ZERO

logger = logging.getLogger(__name__)


def months_covered(amount: Decimal, rent_amount: Decimal) -> int:
    """Number of whole rent months a payment pays for.

    A unit with no positive rent counts any positive payment as a single
    month.
    """
    if amount <= 0:
        return 0
    if rent_amount <= 0:
        return 1
    return int(amount // rent_amount)


def apply_payment(unit: Unit, amount: Decimal) -> Unit:
    """Reduce a unit's balance and retire its oldest unpaid months.

    ``due_amount`` never goes below zero. Only whole months are retired;
    a partial-month remainder shows up in ``due_amount`` alone.

    Parameters
    ----------
    unit : Unit
        Unit to update in place.
    amount : Decimal
        Payment amount, zero or more.

    Returns
    -------
    Unit
        The same unit, updated.
    """
    if amount < 0:
        raise ValidationError(f"Payment amount must not be negative, got {amount}")

    unit.due_amount = max(ZERO, unit.due_amount - amount)

    covered = min(months_covered(amount, unit.rent_amount), len(unit.unpaid_months))
    retired = unit.unpaid_months[:covered]
    del unit.unpaid_months[:covered]

    logger.debug(
        "Applied %s to unit %s: due=%s retired=%s",
        amount,
        unit.unit_id,
        unit.due_amount,
        retired,
    )
    return unit
