from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..common.formatting import format_money, month_label
from ..common.validators import require_month
from ..core.actor import Actor
from ..core.exceptions import AuthorizationError, ValidationError
from ..payments.repository import PaymentRepository
from ..staff.repository import StaffRepository


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class LedgerReportService:
    def __init__(self, payments: PaymentRepository, staff: StaffRepository):
        self._payments = payments
        self._staff = staff

    def build_ledger_report(
        self,
        *,
        actor: Actor,
        start_month: str,
        end_month: str,
        staff_id: Optional[int] = None,
    ) -> ReportData:
        if not actor.is_owner:
            raise AuthorizationError("You do not have permission")

        start_month = require_month(start_month, "Start month")
        end_month = require_month(end_month, "End month")
        if end_month < start_month:
            raise ValidationError("End month must be >= start month")

        payments = self._payments.list_payments(month_from=start_month, month_to=end_month, staff_id=staff_id)
        names = {s.staff_id: s.full_name for s in self._staff.list_all()}

        summary_map: dict[int, dict] = {}
        out_rows: list[dict] = []

        for p in payments:
            staff_name = names.get(p.staff_id, "Staff")
            out_rows.append(
                {
                    "payment_id": p.payment_id,
                    "staff_id": p.staff_id,
                    "staff_name": staff_name,
                    "month_earned": p.month_earned,
                    "month_label": month_label(p.month_earned),
                    "date_sent": p.date_sent.strftime("%Y-%m-%d %H:%M"),
                    "amount": format_money(p.amount, p.currency),
                    "method": p.method.value,
                    "category": p.category.value,
                    "reference_id": p.reference_id or "",
                    "receipt_status": p.receipt_status.value,
                }
            )

            s = summary_map.get(p.staff_id)
            if not s:
                s = {
                    "staff_id": p.staff_id,
                    "staff_name": staff_name,
                    "currency": p.currency,
                    "payment_count": 0,
                    "total": Decimal("0"),
                }
                summary_map[p.staff_id] = s
            s["payment_count"] += 1
            s["total"] += p.amount

        summary = sorted(summary_map.values(), key=lambda x: x["total"], reverse=True)
        for s in summary:
            s["total_formatted"] = format_money(s["total"], s["currency"])
        return ReportData(rows=out_rows, summary=summary)
