from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..common.serialization import to_json
from ..core.enums import PaymentCategory, PaymentMethod, ReceiptStatus


@dataclass(frozen=True)
class Payment:
    """Domain entity: one disbursement to a staff member."""

    payment_id: int
    staff_id: int
    month_earned: str  # YYYY-MM
    date_sent: datetime
    amount: Decimal
    currency: str
    method: PaymentMethod
    category: PaymentCategory
    reference_id: Optional[str]
    notes: Optional[str]
    receipt_status: ReceiptStatus
    receipt_name: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PaymentView:
    """A payment joined with the name of the staff member it was paid to."""

    payment: Payment
    staff_name: str

    def as_dict(self) -> dict:
        data = to_json(self.payment)
        data["staff_name"] = self.staff_name
        return data
