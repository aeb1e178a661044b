"""Synthetic rental portfolio generator."""

from __future__ import annotations

import random
from datetime import datetime
from decimal import Decimal

from rent_ledger.billing.months import add_months, month_key
from rent_ledger.generators.base import BaseGenerator
from rent_ledger.models import Ledger, Location, Tenant, Unit
from rent_ledger.models.base import new_id


class PortfolioGenerator(BaseGenerator):
    """Generate a ledger of locations, units and tenants.

    Occupied units are billed up to ``now`` and may carry a few months of
    arrears, so ``due_amount`` always equals ``rent_amount`` times the
    number of ``unpaid_months``.
    """

    UNIT_KINDS = ["Apartment", "Villa", "Shop", "Studio"]
    UNIT_KIND_WEIGHTS = [0.60, 0.15, 0.15, 0.10]

    # Monthly rent ranges by unit kind, in hundreds
    RENT_RANGES = {
        "Apartment": (15, 40),
        "Villa": (40, 120),
        "Shop": (20, 80),
        "Studio": (10, 20),
    }

    MAX_ARREARS_MONTHS = 3

    def generate(
        self,
        num_locations: int = 3,
        units_per_location: int = 4,
        occupancy_rate: float = 0.7,
        now: datetime | None = None,
    ) -> Ledger:
        """Generate a complete ledger.

        Parameters
        ----------
        num_locations : int
            Number of locations.
        units_per_location : int
            Units created at each location.
        occupancy_rate : float
            Probability that a unit is occupied (0.0 to 1.0).
        now : datetime | None
            Billing reference time (default: current time).

        Returns
        -------
        Ledger
            Generated ledger with no payments, requests or handovers.
        """
        now = now or datetime.now()
        ledger = Ledger()
        for _ in range(num_locations):
            location = self.generate_location()
            ledger.add_location(location)
            for number in range(1, units_per_location + 1):
                unit = self.generate_unit(location.location_id, number)
                if random.random() < occupancy_rate:
                    tenant = self.generate_tenant()
                    ledger.add_tenant(tenant)
                    self._occupy(unit, tenant, now)
                ledger.add_unit(unit)
        return ledger

    def generate_location(self) -> Location:
        """Generate a location named after a residential complex."""
        name = f"{self.fake.last_name()} {random.choice(['Residences', 'Towers', 'Court', 'Plaza'])}"
        return Location(location_id=new_id("loc"), name=name)

    def generate_unit(self, location_id: str, number: int) -> Unit:
        """Generate a vacant unit."""
        kind = random.choices(self.UNIT_KINDS, weights=self.UNIT_KIND_WEIGHTS, k=1)[0]
        low, high = self.RENT_RANGES[kind]
        return Unit(
            unit_id=new_id("house"),
            location_id=location_id,
            name=f"{kind} {number:03d}",
            rent_amount=Decimal(random.randint(low, high) * 100),
        )

    def generate_tenant(self) -> Tenant:
        """Generate a tenant with a ten-digit national id."""
        return Tenant(
            tenant_id=new_id("ten"),
            name=self.fake.name(),
            id_number=self.fake.numerify("##########"),
        )

    def _occupy(self, unit: Unit, tenant: Tenant, now: datetime) -> None:
        """Occupy ``unit`` with zero or more months of arrears."""
        arrears = random.randint(0, self.MAX_ARREARS_MONTHS)
        unit.tenant_id = tenant.tenant_id
        unit.unpaid_months = [month_key(add_months(now, -n)) for n in range(arrears, -1, -1)]
        unit.due_amount = unit.rent_amount * len(unit.unpaid_months)
        unit.last_accrual_date = now
