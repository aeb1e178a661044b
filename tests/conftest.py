"""Pytest configuration and fixtures."""

from datetime import datetime
from decimal import Decimal

import pytest

from rent_ledger.clock import FixedClock
from rent_ledger.models import Ledger, Location, Unit
from rent_ledger.service import LedgerService
from rent_ledger.store import InMemoryLedgerStore


@pytest.fixture
def now() -> datetime:
    """Fixed reference time in the middle of a month."""
    return datetime(2024, 1, 15, 10, 30)


@pytest.fixture
def clock(now: datetime) -> FixedClock:
    """Manually advanced clock."""
    return FixedClock(now)


@pytest.fixture
def ledger() -> Ledger:
    """Ledger with one location and one vacant unit."""
    ledger = Ledger()
    ledger.add_location(Location(location_id="loc-test-001", name="Test Towers"))
    ledger.add_unit(
        Unit(
            unit_id="unit-test-001",
            location_id="loc-test-001",
            name="Apartment 101",
            rent_amount=Decimal("2500"),
        )
    )
    return ledger


@pytest.fixture
def store() -> InMemoryLedgerStore:
    """Empty in-memory store (seeds an empty ledger)."""
    return InMemoryLedgerStore(seed_factory=Ledger)


@pytest.fixture
def service(store: InMemoryLedgerStore, clock: FixedClock) -> LedgerService:
    """Service over an empty store and a fixed clock."""
    return LedgerService(store, clock=clock)
