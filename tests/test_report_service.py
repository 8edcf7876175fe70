from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from src.payroll_ledger.payroll_ledger.core.enums import PaymentCategory, PaymentMethod, ReceiptStatus, StaffStatus
from src.payroll_ledger.payroll_ledger.core.exceptions import ValidationError
from src.payroll_ledger.payroll_ledger.payments.model import Payment
from src.payroll_ledger.payroll_ledger.reports.service import LedgerReportService
from src.payroll_ledger.payroll_ledger.staff.model import Staff


class FakePaymentsRepo:
    def __init__(self, payments):
        self._payments = payments
        self.last_args = None

    def list_payments(self, *, staff_id=None, month_earned=None, receipt_status=None, month_from=None, month_to=None, limit=None):
        self.last_args = {"staff_id": staff_id, "month_from": month_from, "month_to": month_to}
        return self._payments


class FakeStaffRepo:
    def list_all(self, *, status=None):
        now = datetime(2026, 1, 1)
        return [
            Staff(1, "Amina Hassan", "Operations Manager", StaffStatus.ACTIVE, None, now, now),
            Staff(2, "Brian Otieno", "Dispatcher", StaffStatus.ACTIVE, None, now, now),
        ]


def _payment(payment_id: int, staff_id: int, amount: str, month: str = "2025-12") -> Payment:
    sent = datetime(2026, 1, 3, 10, 45)
    return Payment(
        payment_id=payment_id,
        staff_id=staff_id,
        month_earned=month,
        date_sent=sent,
        amount=Decimal(amount),
        currency="USD",
        method=PaymentMethod.WISE,
        category=PaymentCategory.SALARY,
        reference_id=None,
        notes=None,
        receipt_status=ReceiptStatus.MISSING,
        receipt_name=None,
        created_at=sent,
        updated_at=sent,
    )


def test_report_totals_per_staff(owner):
    payments = [
        _payment(1, 1, "1250.00"),
        _payment(2, 2, "900.00"),
        _payment(3, 2, "500.00", month="2026-01"),
    ]
    svc = LedgerReportService(FakePaymentsRepo(payments), FakeStaffRepo())

    report = svc.build_ledger_report(actor=owner, start_month="2025-12", end_month="2026-01")

    assert [s["staff_name"] for s in report.summary] == ["Brian Otieno", "Amina Hassan"]
    assert report.summary[0]["total"] == Decimal("1400.00")
    assert report.summary[0]["payment_count"] == 2
    assert report.summary[0]["total_formatted"] == "$1,400.00"
    assert report.rows[0]["amount"] == "$1,250.00"
    assert report.rows[0]["month_label"] == "December 2025"
    assert report.rows[0]["date_sent"] == "2026-01-03 10:45"


def test_report_forwards_filters(owner):
    repo = FakePaymentsRepo([])
    svc = LedgerReportService(repo, FakeStaffRepo())

    svc.build_ledger_report(actor=owner, start_month="2026-01", end_month="2026-03", staff_id=2)

    assert repo.last_args == {"staff_id": 2, "month_from": "2026-01", "month_to": "2026-03"}


def test_report_rejects_reversed_range(owner):
    svc = LedgerReportService(FakePaymentsRepo([]), FakeStaffRepo())

    with pytest.raises(ValidationError):
        svc.build_ledger_report(actor=owner, start_month="2026-02", end_month="2026-01")
