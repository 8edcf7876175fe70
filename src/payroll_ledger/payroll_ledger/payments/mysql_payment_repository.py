from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PaymentCategory, PaymentMethod, ReceiptStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Payment
from .repository import PaymentRepository

_COLUMNS = """
    payment_id, staff_id, month_earned, date_sent, amount, currency, method, category,
    reference_id, notes, receipt_status, receipt_name, created_at, updated_at
"""


def _row_to_payment(r: dict) -> Payment:
    return Payment(
        payment_id=int(r["payment_id"]),
        staff_id=int(r["staff_id"]),
        month_earned=r["month_earned"],
        date_sent=r["date_sent"],
        amount=Decimal(str(r["amount"])),
        currency=r["currency"],
        method=PaymentMethod(r["method"]),
        category=PaymentCategory(r["category"]),
        reference_id=r.get("reference_id"),
        notes=r.get("notes"),
        receipt_status=ReceiptStatus(r["receipt_status"]),
        receipt_name=r.get("receipt_name"),
        created_at=r["created_at"],
        updated_at=r["updated_at"],
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payments WHERE payment_id=%s", (int(payment_id),))
            row = fetchone(cur)
            return _row_to_payment(row) if row else None

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
        where = []
        params: list = []
        if staff_id is not None:
            where.append("staff_id=%s")
            params.append(int(staff_id))
        if month_earned is not None:
            where.append("month_earned=%s")
            params.append(month_earned)
        if receipt_status is not None:
            where.append("receipt_status=%s")
            params.append(receipt_status.value)
        if month_from is not None:
            where.append("month_earned>=%s")
            params.append(month_from)
        if month_to is not None:
            where.append("month_earned<=%s")
            params.append(month_to)

        sql = f"SELECT {_COLUMNS} FROM payments"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY date_sent DESC, payment_id DESC"
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_payment(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payments(
                    staff_id, month_earned, date_sent, amount, currency, method, category,
                    reference_id, notes, receipt_status, receipt_name, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(staff_id),
                    month_earned,
                    date_sent,
                    amount,
                    currency,
                    method.value,
                    category.value,
                    reference_id,
                    notes,
                    receipt_status.value,
                    receipt_name,
                    now,
                    now,
                ),
            )
            return int(cur.lastrowid)

    def save(self, payment: Payment) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payments
                SET staff_id=%s, month_earned=%s, date_sent=%s, amount=%s, currency=%s,
                    method=%s, category=%s, reference_id=%s, notes=%s,
                    receipt_status=%s, receipt_name=%s, updated_at=%s
                WHERE payment_id=%s
                """,
                (
                    payment.staff_id,
                    payment.month_earned,
                    payment.date_sent,
                    payment.amount,
                    payment.currency,
                    payment.method.value,
                    payment.category.value,
                    payment.reference_id,
                    payment.notes,
                    payment.receipt_status.value,
                    payment.receipt_name,
                    payment.updated_at,
                    payment.payment_id,
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, payment_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payments WHERE payment_id=%s", (int(payment_id),))
            return cur.rowcount > 0

    def count_for_staff(self, staff_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM payments WHERE staff_id=%s", (int(staff_id),))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def count_by_receipt_status(self, receipt_status: ReceiptStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM payments WHERE receipt_status=%s", (receipt_status.value,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def total_for_month(self, month_earned: str) -> Decimal:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COALESCE(SUM(amount), 0) AS total FROM payments WHERE month_earned=%s",
                (month_earned,),
            )
            row = fetchone(cur)
            return Decimal(str(row["total"])) if row else Decimal("0")
