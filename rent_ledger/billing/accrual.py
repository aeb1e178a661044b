"""Monthly rent accrual.

Each occupied unit is charged one ``rent_amount`` per calendar month
boundary crossed since its ``last_accrual_date``. The month-key of every
charged month is appended to ``unpaid_months``. Running the engine again
within the same month is a no-op.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_CEILING, Decimal

from rent_ledger.billing.months import add_months, month_key, months_between
from rent_ledger.models import Ledger, Unit

logger = logging.getLogger(__name__)


@dataclass
class AccrualResult:
    """What one accrual pass did to a single unit."""

    unit_id: str
    charged_months: list[str] = field(default_factory=list)
    bootstrapped: bool = False

    @property
    def changed(self) -> bool:
        return self.bootstrapped or bool(self.charged_months)


def arrears_months(due_amount: Decimal, rent_amount: Decimal, now: datetime) -> list[str]:
    """Month-keys for an opening balance, oldest first, ending at ``now``.

    One month per started rent amount; a unit with no positive rent owes a
    single month.
    """
    if due_amount <= 0:
        return []
    if rent_amount <= 0:
        count = 1
    else:
        count = int((due_amount / rent_amount).to_integral_value(rounding=ROUND_CEILING))
    return [month_key(add_months(now, -n)) for n in range(count - 1, -1, -1)]


def accrue_unit(unit: Unit, now: datetime) -> AccrualResult:
    """Bring a unit's balance current as of ``now``.

    A unit without billing history only gets ``last_accrual_date = now``;
    its first charge happens at the next month boundary. An opening
    balance with no month-keys is spread over the months ending at
    ``now`` (see ``arrears_months``). Vacant units are left untouched.

    Parameters
    ----------
    unit : Unit
        Unit to update in place.
    now : datetime
        Current time.

    Returns
    -------
    AccrualResult
        Months charged and whether the unit was bootstrapped.
    """
    result = AccrualResult(unit_id=unit.unit_id)
    if not unit.is_occupied:
        return result

    if unit.last_accrual_date is None:
        unit.last_accrual_date = now
        if not unit.unpaid_months:
            unit.unpaid_months = arrears_months(unit.due_amount, unit.rent_amount, now)
        result.bootstrapped = True
        logger.debug("Initialized billing date for unit %s", unit.unit_id)
        return result

    while months_between(unit.last_accrual_date, now) > 0:
        unit.last_accrual_date = add_months(unit.last_accrual_date, 1)
        key = month_key(unit.last_accrual_date)
        unit.due_amount += unit.rent_amount
        unit.unpaid_months.append(key)
        result.charged_months.append(key)
        logger.info("Charged rent %s for unit %s (%s)", unit.rent_amount, unit.unit_id, key)

    return result


def accrue_ledger(ledger: Ledger, now: datetime) -> list[AccrualResult]:
    """Run accrual over every unit of the ledger.

    Returns
    -------
    list[AccrualResult]
        Results for the units that changed; empty when nothing changed.
    """
    results = [accrue_unit(unit, now) for unit in ledger.units.values()]
    return [r for r in results if r.changed]
