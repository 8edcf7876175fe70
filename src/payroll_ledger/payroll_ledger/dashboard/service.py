from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

from ..common.datetime_utils import current_month, now_utc
from ..common.validators import require_month
from ..core.actor import Actor
from ..core.constants import DEFAULT_CURRENCY, DEFAULT_RECENT_PAYMENTS
from ..core.enums import ReceiptStatus
from ..core.exceptions import AuthorizationError
from ..payments.model import PaymentView
from ..payments.repository import PaymentRepository
from ..staff.repository import StaffRepository


@dataclass(frozen=True)
class DashboardData:
    month: str
    month_total: Decimal
    currency: str
    missing_receipts_count: int
    recent_payments: list[PaymentView]


class DashboardService:
    def __init__(self, payments: PaymentRepository, staff: StaffRepository, *, clock: Callable = now_utc):
        self._payments = payments
        self._staff = staff
        self._clock = clock

    def missing_receipts_count(self) -> int:
        return self._payments.count_by_receipt_status(ReceiptStatus.MISSING)

    def month_total(self, month: Optional[str] = None) -> Decimal:
        return self._payments.total_for_month(month or current_month(self._clock()))

    def recent_payments(self, limit: int = DEFAULT_RECENT_PAYMENTS) -> list[PaymentView]:
        names = {s.staff_id: s.full_name for s in self._staff.list_all()}
        return [
            PaymentView(payment=p, staff_name=names.get(p.staff_id, "Staff"))
            for p in self._payments.list_payments(limit=int(limit))
        ]

    def build(self, *, actor: Actor, month: Optional[str] = None) -> DashboardData:
        if not actor.is_owner:
            raise AuthorizationError("You do not have permission")

        month = require_month(month, "Month") if month else current_month(self._clock())
        return DashboardData(
            month=month,
            month_total=self.month_total(month),
            currency=DEFAULT_CURRENCY,
            missing_receipts_count=self.missing_receipts_count(),
            recent_payments=self.recent_payments(),
        )
