from __future__ import annotations

from datetime import datetime

import pytest

from src.payroll_ledger.payroll_ledger.audit.memory_audit_repository import InMemoryAuditRepository
from src.payroll_ledger.payroll_ledger.audit.repository import AuditRepository
from src.payroll_ledger.payroll_ledger.audit.service import AuditTrail
from src.payroll_ledger.payroll_ledger.core.enums import AuditAction, EntityType, Role, StaffStatus
from src.payroll_ledger.payroll_ledger.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.payroll_ledger.payroll_ledger.database.memory import InMemoryStore
from src.payroll_ledger.payroll_ledger.payments.memory_payment_repository import InMemoryPaymentRepository
from src.payroll_ledger.payroll_ledger.payments.service import PaymentService
from src.payroll_ledger.payroll_ledger.staff.memory_staff_repository import InMemoryStaffRepository
from src.payroll_ledger.payroll_ledger.staff.service import StaffService


class FailingAuditRepo:
    def append(self, **kwargs):
        raise RuntimeError("audit store unavailable")


def test_audit_repository_has_no_mutators():
    for name in ("update", "delete", "delete_by_id", "save"):
        assert not hasattr(AuditRepository, name)
        assert not hasattr(InMemoryAuditRepository, name)


def test_record_uses_clock_and_returns_id(fixed_now):
    trail = AuditTrail(InMemoryAuditRepository(InMemoryStore()), clock=lambda: fixed_now)

    audit_id = trail.record(
        actor="Owner",
        action=AuditAction.CREATE,
        entity_type=EntityType.STAFF,
        entity_id=3,
        summary="Created staff Kelvin Mwangi (Safety Coordinator)",
    )

    entry = trail.get_entry(current_role=Role.OWNER, audit_id=audit_id)
    assert entry.timestamp == fixed_now
    assert entry.entity_id == 3


def test_list_entries_filters_and_orders_newest_first():
    trail = AuditTrail(InMemoryAuditRepository(InMemoryStore()))
    for entity_type, entity_id in [(EntityType.STAFF, 1), (EntityType.PAYMENT, 1), (EntityType.PAYMENT, 2)]:
        trail.record(
            actor="Owner",
            action=AuditAction.CREATE,
            entity_type=entity_type,
            entity_id=entity_id,
            summary=f"{entity_type.value} {entity_id}",
        )

    payments = trail.list_entries(current_role=Role.OWNER, entity_type=EntityType.PAYMENT)
    assert [e.summary for e in payments] == ["payment 2", "payment 1"]

    one = trail.list_entries(current_role=Role.OWNER, entity_type=EntityType.PAYMENT, entity_id=1)
    assert [e.summary for e in one] == ["payment 1"]

    limited = trail.list_entries(current_role=Role.OWNER, limit=1)
    assert [e.summary for e in limited] == ["payment 2"]


def test_only_owner_reads_audit_log():
    trail = AuditTrail(InMemoryAuditRepository(InMemoryStore()))
    with pytest.raises(AuthorizationError):
        trail.list_entries(current_role=Role.EMPLOYEE)
    with pytest.raises(ValidationError):
        trail.list_entries(current_role=Role.OWNER, limit=0)
    with pytest.raises(NotFoundError):
        trail.get_entry(current_role=Role.OWNER, audit_id=1)


def test_failed_audit_append_rolls_back_payment(owner, payment_data):
    store = InMemoryStore()
    staff_repo = InMemoryStaffRepository(store)
    payments_repo = InMemoryPaymentRepository(store)
    staff_id = staff_repo.create(
        full_name="Brian Otieno",
        job_title="Dispatcher",
        status=StaffStatus.ACTIVE,
        email=None,
        now=datetime(2026, 1, 1),
    )
    service = PaymentService(payments_repo, staff_repo, AuditTrail(FailingAuditRepo()), store)

    with pytest.raises(RuntimeError):
        service.create_payment(actor=owner, data=payment_data(staff_id))

    assert payments_repo.list_payments() == []


def test_failed_audit_append_rolls_back_staff_creation(owner):
    store = InMemoryStore()
    staff_repo = InMemoryStaffRepository(store)
    service = StaffService(staff_repo, AuditTrail(FailingAuditRepo()), store)

    with pytest.raises(RuntimeError):
        service.create_staff(actor=owner, full_name="Kelvin Mwangi", job_title="Safety Coordinator")

    assert staff_repo.list_all() == []
    # Sequence is rolled back too, so ids stay gap-free.
    assert store.next_id("staff") == 1

