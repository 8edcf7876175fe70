from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentCategory, PaymentMethod, ReceiptStatus
from .model import Payment


class PaymentRepository(Protocol):
    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        raise NotImplementedError

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
        """Newest ``date_sent`` first. Month bounds are inclusive."""

        raise NotImplementedError

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
        raise NotImplementedError

    def save(self, payment: Payment) -> bool:
        """Overwrite every mutable column of an existing payment."""

        raise NotImplementedError

    def delete_by_id(self, payment_id: int) -> bool:
        raise NotImplementedError

    def count_for_staff(self, staff_id: int) -> int:
        raise NotImplementedError

    def count_by_receipt_status(self, receipt_status: ReceiptStatus) -> int:
        raise NotImplementedError

    def total_for_month(self, month_earned: str) -> Decimal:
        raise NotImplementedError
