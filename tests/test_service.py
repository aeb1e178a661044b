"""Tests for the ledger mutation gateway."""

from datetime import datetime
from decimal import Decimal

import pytest

from rent_ledger.clock import FixedClock
from rent_ledger.exceptions import (
    EntityNotFoundError,
    HasDependentsError,
    InvalidEntityStateError,
    UnitOccupiedError,
    ValidationError,
)
from rent_ledger.models import LeaseStatus, Ledger, PaymentMethod, Unit, UserRole
from rent_ledger.service import LedgerService
from rent_ledger.store import InMemoryLedgerStore
from rent_ledger.store.serialization import ledger_to_dict


@pytest.fixture
def unit(service: LedgerService) -> Unit:
    """Vacant unit renting at 2500."""
    location = service.add_location("Test Towers")
    return service.add_unit(location.location_id, "Apartment 101", 2500)


def _occupy(service: LedgerService, unit_id: str, rent: object = 2500) -> None:
    request = service.submit_lease_request(unit_id, "Tenant X", "1029384756", rent, "sig-001")
    service.approve_lease_request(request.request_id)


class _CountingStore(InMemoryLedgerStore):
    """In-memory store that counts saves."""

    def __init__(self) -> None:
        super().__init__(seed_factory=Ledger)
        self.saves = 0

    def save(self, ledger: Ledger) -> None:
        self.saves += 1
        super().save(ledger)


class TestEndToEnd:
    """Lease, accrue over two months, then pay."""

    def test_scenario(self, service: LedgerService, clock: FixedClock, unit: Unit) -> None:
        request = service.submit_lease_request(unit.unit_id, "X", "1029384756", 2500, "sig-001")
        approval = service.approve_lease_request(request.request_id)

        assert approval.unit.is_occupied
        assert approval.unit.due_amount == Decimal("2500")
        assert approval.unit.unpaid_months == ["2024-01"]

        clock.advance_months(2)
        reloaded = service.load().units[unit.unit_id]

        assert reloaded.due_amount == Decimal("7500")
        assert reloaded.unpaid_months == ["2024-01", "2024-02", "2024-03"]

        service.record_payment(unit.unit_id, 5000)
        settled = service.load().units[unit.unit_id]

        assert settled.due_amount == Decimal("2500")
        assert settled.unpaid_months == ["2024-03"]


class TestLoad:
    """Tests for load-time accrual."""

    def test_accrual_is_persisted(self, service: LedgerService, clock: FixedClock, unit: Unit) -> None:
        _occupy(service, unit.unit_id)
        clock.advance_months(1)

        service.load()

        stored = service.store.load()
        assert stored.units[unit.unit_id].due_amount == Decimal("5000")

    def test_no_save_when_nothing_changes(self, clock: FixedClock) -> None:
        store = _CountingStore()
        service = LedgerService(store, clock=clock)
        location = service.add_location("Harbor Court")
        service.add_unit(location.location_id, "Shop 1", 900)
        saves = store.saves

        service.load()
        service.load()

        assert store.saves == saves

    def test_idempotent_within_month(self, service: LedgerService, clock: FixedClock, unit: Unit) -> None:
        _occupy(service, unit.unit_id)
        clock.advance_months(1)
        first = ledger_to_dict(service.load())

        clock.set(datetime(2024, 2, 28, 23, 0))
        second = ledger_to_dict(service.load())

        assert first == second

    def test_seed_units_bootstrapped_on_first_load(self, clock: FixedClock) -> None:
        service = LedgerService(InMemoryLedgerStore(), clock=clock)

        ledger = service.load()

        house1 = ledger.units["house1"]
        assert house1.last_accrual_date == clock.now()
        assert house1.due_amount == Decimal("2500")
        assert house1.unpaid_months == ["2024-01"]
        assert ledger.units["house2"].unpaid_months == ["2023-12", "2024-01"]
        assert service.store.exists()

    def test_seed_balances_match_open_months(self, clock: FixedClock) -> None:
        service = LedgerService(InMemoryLedgerStore(), clock=clock)
        service.load()
        clock.advance_months(1)

        ledger = service.load()

        for unit in ledger.units.values():
            if unit.is_occupied:
                assert unit.due_amount == unit.rent_amount * len(unit.unpaid_months)
        assert ledger.units["house2"].due_amount == Decimal("8400")

    def test_seed_payment_retires_oldest_month(self, clock: FixedClock) -> None:
        service = LedgerService(InMemoryLedgerStore(), clock=clock)

        service.record_payment("house2", 2800)

        house2 = service.load().units["house2"]
        assert house2.due_amount == Decimal("2800")
        assert house2.unpaid_months == ["2024-01"]


class TestRecordPayment:
    """Tests for record_payment."""

    def test_records_payment(self, service: LedgerService, unit: Unit) -> None:
        _occupy(service, unit.unit_id)

        payment = service.record_payment(
            unit.unit_id, "1000", PaymentMethod.BANK_TRANSFER, receipt_reference="rcpt-9"
        )

        assert payment.amount == Decimal("1000")
        assert payment.method == PaymentMethod.BANK_TRANSFER
        assert payment.collector_id == "collector1"
        assert payment.receipt_reference == "rcpt-9"
        assert payment.timestamp == datetime(2024, 1, 15, 10, 30)
        ledger = service.load()
        assert ledger.payments == [payment]
        assert ledger.units[unit.unit_id].due_amount == Decimal("1500")

    def test_method_from_string(self, service: LedgerService, unit: Unit) -> None:
        _occupy(service, unit.unit_id)
        payment = service.record_payment(unit.unit_id, 10, "BANK_TRANSFER")
        assert payment.method is PaymentMethod.BANK_TRANSFER

    def test_custom_collector(self, service: LedgerService, unit: Unit) -> None:
        _occupy(service, unit.unit_id)
        payment = service.record_payment(unit.unit_id, 10, collector_id="collector2")
        assert payment.collector_id == "collector2"

    @pytest.mark.parametrize("amount", [0, -5, "abc", None, True, float("nan")])
    def test_invalid_amount_rejected_before_load(self, clock: FixedClock, amount: object) -> None:
        store = _CountingStore()
        service = LedgerService(store, clock=clock)

        with pytest.raises(ValidationError):
            service.record_payment("house1", amount)
        assert store.saves == 0
        assert not store.exists()

    def test_unknown_method(self, service: LedgerService, unit: Unit) -> None:
        with pytest.raises(ValidationError, match="Unknown payment method"):
            service.record_payment(unit.unit_id, 10, "CHEQUE")

    def test_unknown_unit(self, service: LedgerService) -> None:
        with pytest.raises(EntityNotFoundError):
            service.record_payment("missing", 100)

    def test_vacant_unit(self, service: LedgerService, unit: Unit) -> None:
        with pytest.raises(InvalidEntityStateError, match="vacant"):
            service.record_payment(unit.unit_id, 100)
        assert service.load().payments == []


class TestLeaseOperations:
    """Tests for lease operations through the gateway."""

    def test_submit_validation(self, service: LedgerService, unit: Unit) -> None:
        with pytest.raises(ValidationError, match="tenant_name"):
            service.submit_lease_request(unit.unit_id, "  ", "1", 100, "sig")
        with pytest.raises(ValidationError, match="signature"):
            service.submit_lease_request(unit.unit_id, "Jane", "1", 100, "")
        with pytest.raises(ValidationError, match="rent_amount"):
            service.submit_lease_request(unit.unit_id, "Jane", "1", -1, "sig")

    def test_submit_persists(self, service: LedgerService, unit: Unit) -> None:
        request = service.submit_lease_request(unit.unit_id, " Jane ", "1", "2600", "sig")

        assert request.tenant_name == "Jane"
        assert service.pending_lease_requests() == [request]

    def test_approve_returns_slice(self, service: LedgerService, unit: Unit) -> None:
        request = service.submit_lease_request(unit.unit_id, "Jane", "1", 2600, "sig")

        approval = service.approve_lease_request(request.request_id)

        assert approval.request.status == LeaseStatus.APPROVED
        assert approval.unit.rent_amount == Decimal("2600")
        assert service.tenant_for(unit.unit_id) == approval.tenant
        assert service.pending_lease_requests() == []

    def test_double_approval_leaves_ledger_unchanged(self, service: LedgerService, unit: Unit) -> None:
        request = service.submit_lease_request(unit.unit_id, "Jane", "1", 2600, "sig")
        service.approve_lease_request(request.request_id)
        before = ledger_to_dict(service.load())

        with pytest.raises(InvalidEntityStateError):
            service.approve_lease_request(request.request_id)

        assert ledger_to_dict(service.load()) == before

    def test_reject(self, service: LedgerService, unit: Unit) -> None:
        request = service.submit_lease_request(unit.unit_id, "Jane", "1", 2600, "sig")

        rejected = service.reject_lease_request(request.request_id)

        assert rejected.status == LeaseStatus.REJECTED
        assert not service.load().units[unit.unit_id].is_occupied

    def test_reject_unknown(self, service: LedgerService) -> None:
        with pytest.raises(EntityNotFoundError):
            service.reject_lease_request("req-missing")

    def test_vacate(self, service: LedgerService, clock: FixedClock, unit: Unit) -> None:
        _occupy(service, unit.unit_id)
        clock.advance_months(3)

        vacated = service.vacate_unit(unit.unit_id)

        assert vacated.tenant_id is None
        assert vacated.due_amount == Decimal("0")
        assert vacated.unpaid_months == []
        assert vacated.last_accrual_date is None

        clock.advance_months(2)
        assert service.load().units[unit.unit_id].due_amount == Decimal("0")

    def test_relet_after_vacate_starts_fresh(
        self, service: LedgerService, clock: FixedClock, unit: Unit
    ) -> None:
        _occupy(service, unit.unit_id)
        clock.advance_months(2)
        service.vacate_unit(unit.unit_id)

        _occupy(service, unit.unit_id, rent=3000)

        relet = service.load().units[unit.unit_id]
        assert relet.due_amount == Decimal("3000")
        assert relet.unpaid_months == ["2024-03"]


class TestCashHandover:
    """Tests for record_cash_handover."""

    def test_records_handover(self, service: LedgerService, unit: Unit) -> None:
        _occupy(service, unit.unit_id)
        service.record_payment(unit.unit_id, 2000)

        handover = service.record_cash_handover("1500")

        assert handover.amount == Decimal("1500")
        assert handover.collector_id == "collector1"
        summary = service.summary()
        assert summary["cash_on_hand"] == Decimal("500")
        assert service.load().units[unit.unit_id].due_amount == Decimal("500")

    def test_invalid_amount(self, service: LedgerService) -> None:
        with pytest.raises(ValidationError):
            service.record_cash_handover(0)


class TestLocationsAndUnits:
    """Tests for location and unit management."""

    def test_add_location_requires_name(self, service: LedgerService) -> None:
        with pytest.raises(ValidationError, match="name is required"):
            service.add_location("   ")

    def test_rename_location(self, service: LedgerService) -> None:
        location = service.add_location("Old Name")

        renamed = service.rename_location(location.location_id, "New Name")

        assert renamed.name == "New Name"
        assert service.load().locations[location.location_id].name == "New Name"

    def test_rename_unknown_location(self, service: LedgerService) -> None:
        with pytest.raises(EntityNotFoundError):
            service.rename_location("loc-missing", "Name")

    def test_delete_location_with_units(self, service: LedgerService, unit: Unit) -> None:
        before = ledger_to_dict(service.load())

        with pytest.raises(HasDependentsError):
            service.delete_location(unit.location_id)

        assert ledger_to_dict(service.load()) == before

    def test_delete_empty_location(self, service: LedgerService) -> None:
        location = service.add_location("Empty Lot")

        service.delete_location(location.location_id)

        assert location.location_id not in service.load().locations

    def test_add_unit_is_vacant(self, unit: Unit) -> None:
        assert not unit.is_occupied
        assert unit.rent_amount == Decimal("2500")
        assert unit.due_amount == Decimal("0")
        assert unit.unpaid_months == []

    def test_add_unit_unknown_location(self, service: LedgerService) -> None:
        with pytest.raises(EntityNotFoundError):
            service.add_unit("loc-missing", "Shop", 100)

    def test_delete_occupied_unit(self, service: LedgerService, unit: Unit) -> None:
        _occupy(service, unit.unit_id)
        before = ledger_to_dict(service.load())

        with pytest.raises(UnitOccupiedError):
            service.delete_unit(unit.unit_id)

        assert ledger_to_dict(service.load()) == before

    def test_delete_unit_with_pending_request(self, service: LedgerService, unit: Unit) -> None:
        request = service.submit_lease_request(unit.unit_id, "Jane", "1", 2500, "sig")
        before = ledger_to_dict(service.load())

        with pytest.raises(HasDependentsError):
            service.delete_unit(unit.unit_id)

        assert ledger_to_dict(service.load()) == before
        assert service.pending_lease_requests() == [request]

    def test_delete_unit_after_rejection(self, service: LedgerService, unit: Unit) -> None:
        request = service.submit_lease_request(unit.unit_id, "Jane", "1", 2500, "sig")
        service.reject_lease_request(request.request_id)

        service.delete_unit(unit.unit_id)

        assert unit.unit_id not in service.load().units
        assert service.pending_lease_requests() == []

    def test_delete_vacant_unit(self, service: LedgerService, unit: Unit) -> None:
        service.delete_unit(unit.unit_id)
        assert unit.unit_id not in service.load().units

    def test_update_unit(self, service: LedgerService, clock: FixedClock, unit: Unit) -> None:
        _occupy(service, unit.unit_id)
        other = service.add_location("Annex")

        updated = service.update_unit(
            unit.unit_id, name="Apartment 201", rent_amount=3000, location_id=other.location_id
        )

        assert updated.name == "Apartment 201"
        assert updated.location_id == other.location_id
        assert updated.due_amount == Decimal("2500")

        clock.advance_months(1)
        assert service.load().units[unit.unit_id].due_amount == Decimal("5500")

    def test_update_unit_unknown_location(self, service: LedgerService, unit: Unit) -> None:
        with pytest.raises(EntityNotFoundError):
            service.update_unit(unit.unit_id, location_id="loc-missing")
        assert service.load().units[unit.unit_id].location_id == unit.location_id


class TestQueries:
    """Tests for read-only queries."""

    def test_list_units_filters(self, service: LedgerService, unit: Unit) -> None:
        other = service.add_unit(unit.location_id, "Villa A", 5000)
        annex = service.add_location("Annex")
        shop = service.add_unit(annex.location_id, "Shop 1", 900)
        _occupy(service, other.unit_id)

        assert [u.unit_id for u in service.list_units(occupied=True)] == [other.unit_id]
        assert {u.unit_id for u in service.list_units(occupied=False)} == {unit.unit_id, shop.unit_id}
        assert [u.unit_id for u in service.list_units(location_id=annex.location_id)] == [shop.unit_id]
        assert [u.unit_id for u in service.list_units(search="villa")] == [other.unit_id]
        assert [u.unit_id for u in service.list_units(search="tenant x")] == [other.unit_id]

    def test_recent_payments_newest_first(self, service: LedgerService, unit: Unit) -> None:
        _occupy(service, unit.unit_id)
        amounts = [100, 200, 300]
        for amount in amounts:
            service.record_payment(unit.unit_id, amount)

        recent = service.recent_payments(limit=2)

        assert [p.amount for p in recent] == [Decimal("300"), Decimal("200")]
        assert service.recent_payments(limit=0) == []

    def test_tenant_for_vacant_unit(self, service: LedgerService, unit: Unit) -> None:
        assert service.tenant_for(unit.unit_id) is None

    def test_summary(self, service: LedgerService, unit: Unit) -> None:
        _occupy(service, unit.unit_id)
        service.record_payment(unit.unit_id, 1000, PaymentMethod.BANK_TRANSFER)

        summary = service.summary()

        assert summary["occupied"] == 1
        assert summary["vacant"] == 0
        assert summary["total_collected"] == Decimal("1000")
        assert summary["total_due"] == Decimal("1500")
        assert summary["cash_on_hand"] == Decimal("0")


class TestAuthenticate:
    """Tests for authenticate."""

    def test_default_credentials(self, service: LedgerService) -> None:
        assert service.authenticate("MANAGER@example.com", "manager@1234") == UserRole.MANAGER
        assert service.authenticate("manager@example.com", "wrong") is None
