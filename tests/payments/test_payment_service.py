from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from src.payroll_ledger.payroll_ledger.core.enums import AuditAction, EntityType, ReceiptStatus, Role
from src.payroll_ledger.payroll_ledger.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def _audit(container):
    return container.audit_trail.list_entries(current_role=Role.OWNER, limit=1000)


def test_create_payment_appends_exactly_one_audit_entry(container, owner, staff_member, payment_data):
    before = len(_audit(container))

    payment = container.payment_service.create_payment(actor=owner, data=payment_data(staff_member.staff_id))

    entries = _audit(container)
    assert len(entries) == before + 1
    entry = entries[0]
    assert entry.action == AuditAction.CREATE
    assert entry.entity_type == EntityType.PAYMENT
    assert entry.entity_id == payment.payment_id
    assert f"payment {payment.payment_id}" in entry.summary
    assert "$900.00" in entry.summary
    assert entry.summary == (
        f"Created payment {payment.payment_id} for Brian Otieno ($900.00) | Month earned 2025-12"
    )
    assert entry.actor == "Owner"


def test_create_payment_normalizes_fields(container, owner, staff_member, payment_data):
    payment = container.payment_service.create_payment(
        actor=owner,
        data=payment_data(staff_member.staff_id, amount="1250.5", date_sent="2026-01-03T10:45:00+03:00"),
    )

    assert payment.amount == Decimal("1250.50")
    assert payment.currency == "USD"
    assert payment.date_sent == datetime(2026, 1, 3, 7, 45)
    assert payment.receipt_status == ReceiptStatus.MISSING
    assert payment.receipt_name is None
    assert payment.created_at == payment.updated_at


def test_receipt_name_dropped_when_receipt_missing(container, owner, staff_member, payment_data):
    payment = container.payment_service.create_payment(
        actor=owner,
        data=payment_data(staff_member.staff_id, receipt_status="missing", receipt_name="stray.pdf"),
    )
    assert payment.receipt_name is None


def test_payment_must_reference_existing_staff(container, owner, payment_data):
    before = len(_audit(container))

    with pytest.raises(ValidationError):
        container.payment_service.create_payment(actor=owner, data=payment_data(999))

    assert container.payments_repo.list_payments() == []
    assert len(_audit(container)) == before


def test_payment_for_inactive_staff_is_rejected(container, owner, staff_member, payment_data):
    container.staff_service.toggle_status(actor=owner, staff_id=staff_member.staff_id)

    with pytest.raises(ValidationError):
        container.payment_service.create_payment(actor=owner, data=payment_data(staff_member.staff_id))


@pytest.mark.parametrize(
    "field, value",
    [
        ("amount", ""),
        ("amount", "0"),
        ("amount", "-5"),
        ("amount", "abc"),
        ("amount", "0.001"),
        ("amount", "1e30"),
        ("amount", "-1e30"),
        ("amount", "100000000000"),
        ("reference_id", "R" * 101),
        ("notes", "n" * 10001),
        ("receipt_name", "r" * 256),
        ("month_earned", "2025-13"),
        ("month_earned", "12-2025"),
        ("date_sent", "yesterday"),
        ("method", "Cash"),
        ("category", "Gift"),
        ("currency", "EUR"),
    ],
)
def test_invalid_payment_fields_are_rejected(container, owner, staff_member, payment_data, field, value):
    with pytest.raises(ValidationError):
        container.payment_service.create_payment(
            actor=owner,
            data=payment_data(staff_member.staff_id, **{field: value}),
        )


def test_missing_required_field_is_rejected(container, owner, staff_member, payment_data):
    data = payment_data(staff_member.staff_id)
    del data["date_sent"]

    with pytest.raises(ValidationError, match="date_sent"):
        container.payment_service.create_payment(actor=owner, data=data)


def test_unknown_fields_are_rejected(container, owner, staff_member, payment_data):
    with pytest.raises(ValidationError):
        container.payment_service.create_payment(
            actor=owner,
            data=payment_data(staff_member.staff_id, payment_id=77),
        )


def test_employee_cannot_create_payment(container, employee, staff_member, payment_data):
    with pytest.raises(AuthorizationError):
        container.payment_service.create_payment(actor=employee, data=payment_data(staff_member.staff_id))


def test_update_payment_refreshes_updated_at_and_audits(container, owner, staff_member, payment_data, fixed_now):
    payment = container.payment_service.create_payment(actor=owner, data=payment_data(staff_member.staff_id))
    container.payment_service._clock = lambda: fixed_now

    updated = container.payment_service.update_payment(
        actor=owner,
        payment_id=payment.payment_id,
        patch={"amount": "950", "notes": "December salary + fuel"},
    )

    assert updated.amount == Decimal("950.00")
    assert updated.updated_at == fixed_now
    assert updated.created_at == payment.created_at
    entry = _audit(container)[0]
    assert entry.action == AuditAction.UPDATE
    assert entry.summary == f"Updated payment {payment.payment_id}: amount, notes"


def test_update_to_unknown_staff_is_rejected(container, owner, staff_member, payment_data):
    payment = container.payment_service.create_payment(actor=owner, data=payment_data(staff_member.staff_id))

    with pytest.raises(ValidationError):
        container.payment_service.update_payment(actor=owner, payment_id=payment.payment_id, patch={"staff_id": 999})

    assert container.payments_repo.get_by_id(payment.payment_id).staff_id == staff_member.staff_id


def test_update_without_changes_is_rejected(container, owner, staff_member, payment_data):
    payment = container.payment_service.create_payment(actor=owner, data=payment_data(staff_member.staff_id))

    with pytest.raises(ValidationError):
        container.payment_service.update_payment(actor=owner, payment_id=payment.payment_id, patch={})
    with pytest.raises(ValidationError):
        container.payment_service.update_payment(actor=owner, payment_id=payment.payment_id, patch={"amount": "900"})


def test_attach_and_detach_receipt(container, owner, staff_member, payment_data):
    payment = container.payment_service.create_payment(actor=owner, data=payment_data(staff_member.staff_id))

    attached = container.payment_service.attach_receipt(
        actor=owner, payment_id=payment.payment_id, receipt_name="sendwave-dec.pdf"
    )
    assert attached.receipt_status == ReceiptStatus.ATTACHED
    assert attached.receipt_name == "sendwave-dec.pdf"

    detached = container.payment_service.detach_receipt(actor=owner, payment_id=payment.payment_id)
    assert detached.receipt_status == ReceiptStatus.MISSING
    assert detached.receipt_name is None

    summaries = [e.summary for e in _audit(container)[:2]]
    assert summaries[1].startswith(f"Attached receipt sendwave-dec.pdf to payment {payment.payment_id}")
    assert summaries[0].startswith(f"Removed receipt from payment {payment.payment_id}")


def test_delete_payment_audits_and_removes(container, owner, staff_member, payment_data):
    payment = container.payment_service.create_payment(actor=owner, data=payment_data(staff_member.staff_id))

    container.payment_service.delete_payment(actor=owner, payment_id=payment.payment_id)

    assert container.payments_repo.get_by_id(payment.payment_id) is None
    entry = _audit(container)[0]
    assert entry.action == AuditAction.DELETE
    assert entry.summary == f"Deleted payment {payment.payment_id}"

    with pytest.raises(NotFoundError):
        container.payment_service.delete_payment(actor=owner, payment_id=payment.payment_id)


def test_employee_sees_only_own_payments(container, owner, employee, staff_member, other_staff_member, payment_data):
    mine = container.payment_service.create_payment(actor=owner, data=payment_data(staff_member.staff_id))
    container.payment_service.create_payment(
        actor=owner, data=payment_data(other_staff_member.staff_id, amount="1250")
    )

    views = container.payment_service.list_visible(actor=employee)
    assert [v.payment.payment_id for v in views] == [mine.payment_id]

    # Asking for someone else's staff id does not widen the scope.
    views = container.payment_service.list_visible(actor=employee, staff_id=other_staff_member.staff_id)
    assert all(v.payment.staff_id == staff_member.staff_id for v in views)


def test_owner_sees_all_payments_newest_first(container, owner, staff_member, other_staff_member, payment_data):
    older = container.payment_service.create_payment(
        actor=owner, data=payment_data(staff_member.staff_id, date_sent="2026-01-03T11:05:00Z")
    )
    newer = container.payment_service.create_payment(
        actor=owner, data=payment_data(other_staff_member.staff_id, date_sent="2026-01-06T09:10:00Z")
    )

    views = container.payment_service.list_visible(actor=owner)
    assert [v.payment.payment_id for v in views] == [newer.payment_id, older.payment_id]
    assert views[0].staff_name == "Amina Hassan"


def test_employee_cannot_read_other_staff_payment(container, owner, employee, other_staff_member, payment_data):
    theirs = container.payment_service.create_payment(actor=owner, data=payment_data(other_staff_member.staff_id))

    with pytest.raises(NotFoundError):
        container.payment_service.get_visible(actor=employee, payment_id=theirs.payment_id)


def test_search_matches_staff_name_and_reference(container, owner, staff_member, other_staff_member, payment_data):
    container.payment_service.create_payment(actor=owner, data=payment_data(staff_member.staff_id))
    container.payment_service.create_payment(
        actor=owner,
        data=payment_data(other_staff_member.staff_id, method="Wise", reference_id="WISE-7H2K9Q", notes=None),
    )

    by_name = container.payment_service.list_visible(actor=owner, query="amina")
    assert [v.staff_name for v in by_name] == ["Amina Hassan"]

    by_ref = container.payment_service.list_visible(actor=owner, query="  sw-9021 ")
    assert [v.staff_name for v in by_ref] == ["Brian Otieno"]

    assert container.payment_service.list_visible(actor=owner, query="nothing-like-this") == []


def test_amount_is_rounded_to_cents_before_the_positive_check(container, owner, staff_member, payment_data):
    payment = container.payment_service.create_payment(
        actor=owner,
        data=payment_data(staff_member.staff_id, amount="0.005"),
    )

    assert payment.amount == Decimal("0.01")


def test_largest_amount_the_ledger_column_holds(container, owner, staff_member, payment_data):
    payment = container.payment_service.create_payment(
        actor=owner,
        data=payment_data(staff_member.staff_id, amount="9999999999.99"),
    )

    assert payment.amount == Decimal("9999999999.99")


def test_rejected_amount_leaves_no_payment_or_audit(container, owner, staff_member, payment_data):
    with pytest.raises(ValidationError, match="greater than 0"):
        container.payment_service.create_payment(
            actor=owner,
            data=payment_data(staff_member.staff_id, amount="0.001"),
        )

    assert container.payments_repo.list_payments() == []
    assert container.audit_repo.list_entries(entity_type=EntityType.PAYMENT) == []


def test_overlong_receipt_name_is_rejected_on_attach(container, owner, staff_member, payment_data):
    payment = container.payment_service.create_payment(actor=owner, data=payment_data(staff_member.staff_id))

    with pytest.raises(ValidationError, match="at most 255"):
        container.payment_service.attach_receipt(actor=owner, payment_id=payment.payment_id, receipt_name="r" * 256)
