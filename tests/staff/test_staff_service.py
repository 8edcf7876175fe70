from __future__ import annotations

import pytest

from src.payroll_ledger.payroll_ledger.core.enums import AuditAction, EntityType, Role, StaffStatus
from src.payroll_ledger.payroll_ledger.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.payroll_ledger.payroll_ledger.staff.service import StaffPatch


def _latest_audit(container):
    return container.audit_trail.list_entries(current_role=Role.OWNER, limit=1)[0]


def test_create_staff_trims_and_audits(container, owner):
    staff = container.staff_service.create_staff(
        actor=owner,
        full_name="  Fatma Noor ",
        job_title="Accounting Assistant",
        email="Fatma@ReadyCarriers.com",
    )

    assert staff.full_name == "Fatma Noor"
    assert staff.email == "fatma@readycarriers.com"
    assert staff.status == StaffStatus.ACTIVE

    entry = _latest_audit(container)
    assert entry.action == AuditAction.CREATE
    assert entry.entity_type == EntityType.STAFF
    assert entry.entity_id == staff.staff_id
    assert entry.summary == "Created staff Fatma Noor (Accounting Assistant)"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"full_name": "", "job_title": "Dispatcher"},
        {"full_name": "A", "job_title": "   "},
        {"full_name": "A", "job_title": "B", "email": "not-an-email"},
        {"full_name": "A", "job_title": "B", "status": "retired"},
        {"full_name": "F" * 151, "job_title": "Dispatcher"},
        {"full_name": "A", "job_title": "J" * 151},
        {"full_name": "A", "job_title": "B", "email": "x" * 250 + "@example.com"},
    ],
)
def test_create_staff_validation(container, owner, kwargs):
    with pytest.raises(ValidationError):
        container.staff_service.create_staff(actor=owner, **kwargs)


def test_toggle_status_flips_between_two_values(container, owner, staff_member):
    first = container.staff_service.toggle_status(actor=owner, staff_id=staff_member.staff_id)
    assert first.status == StaffStatus.INACTIVE
    assert _latest_audit(container).summary == "Updated staff Brian Otieno status to inactive"

    second = container.staff_service.toggle_status(actor=owner, staff_id=staff_member.staff_id)
    assert second.status == StaffStatus.ACTIVE
    assert _latest_audit(container).summary == "Updated staff Brian Otieno status to active"


def test_toggle_unknown_staff(container, owner):
    with pytest.raises(NotFoundError):
        container.staff_service.toggle_status(actor=owner, staff_id=42)


def test_employee_cannot_manage_staff(container, employee, staff_member):
    with pytest.raises(AuthorizationError):
        container.staff_service.toggle_status(actor=employee, staff_id=staff_member.staff_id)
    with pytest.raises(AuthorizationError):
        container.staff_service.list_staff(actor=employee)


def test_update_staff_records_changed_fields(container, owner, staff_member):
    updated = container.staff_service.update_staff(
        actor=owner,
        staff_id=staff_member.staff_id,
        patch=StaffPatch.from_dict({"job_title": "Senior Dispatcher", "email": None}),
    )

    assert updated.job_title == "Senior Dispatcher"
    assert updated.email is None
    assert _latest_audit(container).summary == "Updated staff Brian Otieno: job_title, email"


def test_update_staff_rejects_overlong_name(container, owner, staff_member):
    with pytest.raises(ValidationError, match="at most 150"):
        container.staff_service.update_staff(
            actor=owner,
            staff_id=staff_member.staff_id,
            patch=StaffPatch.from_dict({"full_name": "B" * 151}),
        )

    assert container.staff_service.get_staff(staff_member.staff_id).full_name == "Brian Otieno"


def test_staff_patch_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        StaffPatch.from_dict({"status": "inactive"})


def test_delete_staff_with_payments_is_refused(container, owner, staff_member, payment_data):
    container.payment_service.create_payment(actor=owner, data=payment_data(staff_member.staff_id))

    with pytest.raises(ValidationError):
        container.staff_service.delete_staff(actor=owner, staff_id=staff_member.staff_id)

    assert container.staff_repo.get_by_id(staff_member.staff_id) is not None


def test_delete_staff_with_login_account_is_refused(container, owner, staff_member):
    container.user_service.create_account(
        actor=owner,
        email="brian@readycarriers.com",
        display_name="Brian",
        password="staff123",
        role="employee",
        staff_id=staff_member.staff_id,
    )

    with pytest.raises(ValidationError):
        container.staff_service.delete_staff(actor=owner, staff_id=staff_member.staff_id)


def test_delete_unreferenced_staff(container, owner, staff_member):
    container.staff_service.delete_staff(actor=owner, staff_id=staff_member.staff_id)

    assert container.staff_repo.get_by_id(staff_member.staff_id) is None
    entry = _latest_audit(container)
    assert entry.action == AuditAction.DELETE
    assert entry.summary == "Deleted staff Brian Otieno"


def test_list_staff_filters_by_status(container, owner, staff_member, other_staff_member):
    container.staff_service.toggle_status(actor=owner, staff_id=other_staff_member.staff_id)

    everyone = container.staff_service.list_staff(actor=owner)
    assert [s.full_name for s in everyone] == ["Amina Hassan", "Brian Otieno"]

    active = container.staff_service.list_staff(actor=owner, status="active")
    assert [s.full_name for s in active] == ["Brian Otieno"]
