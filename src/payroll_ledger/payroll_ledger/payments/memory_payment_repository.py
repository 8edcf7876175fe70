from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PaymentCategory, PaymentMethod, ReceiptStatus
from ..database.memory import InMemoryStore
from .model import Payment
from .repository import PaymentRepository


class InMemoryPaymentRepository(PaymentRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    def _all(self) -> list[Payment]:
        with self._store.lock():
            return list(self._store.tables["payments"].values())

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        with self._store.lock():
            return self._store.tables["payments"].get(int(payment_id))

    def list_payments(
        self,
        *,
        staff_id: Optional[int] = None,
        month_earned: Optional[str] = None,
        receipt_status: Optional[ReceiptStatus] = None,
        month_from: Optional[str] = None,
        month_to: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Sequence[Payment]:
        items = self._all()
        if staff_id is not None:
            items = [p for p in items if p.staff_id == int(staff_id)]
        if month_earned is not None:
            items = [p for p in items if p.month_earned == month_earned]
        if receipt_status is not None:
            items = [p for p in items if p.receipt_status == receipt_status]
        if month_from is not None:
            items = [p for p in items if p.month_earned >= month_from]
        if month_to is not None:
            items = [p for p in items if p.month_earned <= month_to]

        items.sort(key=lambda p: (p.date_sent, p.payment_id), reverse=True)
        if limit is not None:
            items = items[: int(limit)]
        return items

    def create(
        self,
        *,
        staff_id: int,
        month_earned: str,
        date_sent: datetime,
        amount: Decimal,
        currency: str,
        method: PaymentMethod,
        category: PaymentCategory,
        reference_id: Optional[str],
        notes: Optional[str],
        receipt_status: ReceiptStatus,
        receipt_name: Optional[str],
        now: datetime,
    ) -> int:
        with self._store.lock():
            payment_id = self._store.next_id("payments")
            self._store.tables["payments"][payment_id] = Payment(
                payment_id=payment_id,
                staff_id=int(staff_id),
                month_earned=month_earned,
                date_sent=date_sent,
                amount=amount,
                currency=currency,
                method=method,
                category=category,
                reference_id=reference_id,
                notes=notes,
                receipt_status=receipt_status,
                receipt_name=receipt_name,
                created_at=now,
                updated_at=now,
            )
            return payment_id

    def save(self, payment: Payment) -> bool:
        with self._store.lock():
            rows = self._store.tables["payments"]
            if payment.payment_id not in rows:
                return False
            rows[payment.payment_id] = payment
            return True

    def delete_by_id(self, payment_id: int) -> bool:
        with self._store.lock():
            return self._store.tables["payments"].pop(int(payment_id), None) is not None

    def count_for_staff(self, staff_id: int) -> int:
        return sum(1 for p in self._all() if p.staff_id == int(staff_id))

    def count_by_receipt_status(self, receipt_status: ReceiptStatus) -> int:
        return sum(1 for p in self._all() if p.receipt_status == receipt_status)

    def total_for_month(self, month_earned: str) -> Decimal:
        return sum((p.amount for p in self._all() if p.month_earned == month_earned), Decimal("0"))
