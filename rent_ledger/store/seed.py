"""Initial demo ledger installed on first use."""

from decimal import Decimal

from rent_ledger.models import Ledger, Location, Tenant, Unit


def build_seed_ledger() -> Ledger:
    """Build the demo portfolio: three locations, four units, two tenants.

    Occupied units carry an opening balance but no billing date or
    month-keys. The first accrual pass stamps them and spreads the balance
    over the months ending at that moment; charging starts at the next
    month boundary.
    """
    ledger = Ledger()

    ledger.add_location(Location(location_id="loc1", name="Riyadh Residential Compound"))
    ledger.add_location(Location(location_id="loc2", name="Jeddah Towers"))
    ledger.add_location(Location(location_id="loc3", name="Dammam Model District"))

    ledger.add_tenant(Tenant(tenant_id="ten1", name="Abdullah Mohammed", id_number="1234567890"))
    ledger.add_tenant(Tenant(tenant_id="ten2", name="Fatima Ali", id_number="0987654321"))

    ledger.add_unit(
        Unit(
            unit_id="house1",
            location_id="loc1",
            name="Apartment 101",
            rent_amount=Decimal("2500"),
            tenant_id="ten1",
            due_amount=Decimal("2500"),
        )
    )
    ledger.add_unit(
        Unit(
            unit_id="house2",
            location_id="loc1",
            name="Apartment 102",
            rent_amount=Decimal("2800"),
            tenant_id="ten2",
            due_amount=Decimal("5600"),
            unpaid_amount=Decimal("2800"),
        )
    )
    ledger.add_unit(
        Unit(unit_id="house3", location_id="loc1", name="Apartment 103", rent_amount=Decimal("2600"))
    )
    ledger.add_unit(
        Unit(unit_id="house4", location_id="loc2", name="Villa A", rent_amount=Decimal("5000"))
    )
    return ledger
