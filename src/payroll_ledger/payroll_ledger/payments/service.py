from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Optional, Sequence

from ..audit.service import AuditTrail
from ..common.datetime_utils import now_utc, parse_iso_datetime
from ..common.formatting import format_money
from ..common.validators import (
    optional_text,
    require_amount,
    require_choice,
    require_max_length,
    require_month,
    require_non_empty,
    require_positive_id,
    require_text,
)
from ..core.actor import Actor
from ..core.constants import (
    DEFAULT_CURRENCY,
    MAX_NOTES_LENGTH,
    MAX_REFERENCE_LENGTH,
    MAX_TEXT_LENGTH,
    SUPPORTED_CURRENCIES,
)
from ..core.enums import AuditAction, EntityType, PaymentCategory, PaymentMethod, ReceiptStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..database.unit_of_work import TransactionManager
from ..staff.model import Staff
from ..staff.repository import StaffRepository
from .model import Payment, PaymentView
from .repository import PaymentRepository

logger = logging.getLogger(__name__)

PAYMENT_FIELDS = (
    "staff_id",
    "month_earned",
    "date_sent",
    "amount",
    "currency",
    "method",
    "category",
    "reference_id",
    "notes",
    "receipt_status",
    "receipt_name",
)
REQUIRED_FIELDS = ("staff_id", "month_earned", "date_sent", "amount")
_TEXT_LIMITS = {
    "reference_id": ("Reference id", MAX_REFERENCE_LENGTH),
    "notes": ("Notes", MAX_NOTES_LENGTH),
    "receipt_name": ("Receipt name", MAX_TEXT_LENGTH),
}


def _clean_field(name: str, value: Any) -> Any:
    if name == "staff_id":
        return require_positive_id(value, "Staff")
    if name == "month_earned":
        return require_month(value)
    if name == "date_sent":
        return parse_iso_datetime(value)
    if name == "amount":
        return require_amount(value)
    if name == "currency":
        currency = require_non_empty(value, "Currency").upper()
        if currency not in SUPPORTED_CURRENCIES:
            raise ValidationError(f"Currency must be one of: {', '.join(SUPPORTED_CURRENCIES)}")
        return currency
    if name == "method":
        return require_choice(value, PaymentMethod, "Method")
    if name == "category":
        return require_choice(value, PaymentCategory, "Category")
    if name == "receipt_status":
        return require_choice(value, ReceiptStatus, "Receipt status")
    # reference_id, notes, receipt_name
    label, max_len = _TEXT_LIMITS[name]
    return require_max_length(optional_text(value), label, max_len)


def clean_payment_fields(data: dict, *, partial: bool) -> dict:
    """Validate raw payment input; returns only the fields present."""
    unknown = set(data) - set(PAYMENT_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown payment fields: {', '.join(sorted(unknown))}")

    if not partial:
        missing = [f for f in REQUIRED_FIELDS if data.get(f) in (None, "")]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    return {name: _clean_field(name, value) for name, value in data.items()}


def _normalize_receipt(status: ReceiptStatus, name: Optional[str]) -> Optional[str]:
    return name if status == ReceiptStatus.ATTACHED else None


def creation_summary(payment: Payment, staff_name: str) -> str:
    return (
        f"Created payment {payment.payment_id} for {staff_name} "
        f"({format_money(payment.amount, payment.currency)}) | Month earned {payment.month_earned}"
    )


def _matches(view: PaymentView, q: str) -> bool:
    p = view.payment
    haystack = (
        str(p.payment_id),
        p.month_earned,
        p.method.value,
        p.category.value,
        p.reference_id or "",
        p.notes or "",
        view.staff_name,
    )
    return any(q in value.lower() for value in haystack)


class PaymentService:
    """Use cases: record, correct and browse payments."""

    def __init__(
        self,
        payments: PaymentRepository,
        staff: StaffRepository,
        audit: AuditTrail,
        tx: TransactionManager,
        *,
        clock: Callable = now_utc,
    ):
        self._payments = payments
        self._staff = staff
        self._audit = audit
        self._tx = tx
        self._clock = clock

    @staticmethod
    def _require_owner(actor: Actor) -> None:
        if not actor.is_owner:
            raise AuthorizationError("You do not have permission")

    def _require_staff(self, staff_id: int) -> Staff:
        staff = self._staff.get_by_id(int(staff_id))
        if not staff:
            raise ValidationError(f"Staff {staff_id} does not exist")
        return staff

    def _get(self, payment_id: int) -> Payment:
        payment = self._payments.get_by_id(int(payment_id))
        if not payment:
            raise NotFoundError("Payment not found")
        return payment

    def _staff_names(self) -> dict[int, str]:
        return {s.staff_id: s.full_name for s in self._staff.list_all()}

    def create_payment(self, *, actor: Actor, data: dict) -> Payment:
        self._require_owner(actor)
        fields = clean_payment_fields(data, partial=False)

        fields.setdefault("currency", DEFAULT_CURRENCY)
        fields.setdefault("method", PaymentMethod.WISE)
        fields.setdefault("category", PaymentCategory.SALARY)
        fields.setdefault("receipt_status", ReceiptStatus.MISSING)
        fields.setdefault("reference_id", None)
        fields.setdefault("notes", None)
        fields["receipt_name"] = _normalize_receipt(fields["receipt_status"], fields.get("receipt_name"))

        with self._tx.transaction():
            staff = self._require_staff(fields["staff_id"])
            if not staff.is_active:
                raise ValidationError(f"Staff {staff.full_name} is inactive")

            payment_id = self._payments.create(now=self._clock(), **fields)
            payment = self._get(payment_id)
            self._audit.record(
                actor=actor.name,
                action=AuditAction.CREATE,
                entity_type=EntityType.PAYMENT,
                entity_id=payment_id,
                summary=creation_summary(payment, staff.full_name),
            )

        return payment

    def _apply(self, *, actor: Actor, payment: Payment, changes: dict, summary_prefix: str) -> Payment:
        """Persist ``changes`` on ``payment`` and record one audit entry. Caller holds the transaction."""
        changed = [name for name, value in changes.items() if getattr(payment, name) != value]
        if not changed:
            raise ValidationError("Nothing to update")

        updated = replace(payment, updated_at=self._clock(), **changes)
        if not self._payments.save(updated):
            raise NotFoundError("Payment not found")

        self._audit.record(
            actor=actor.name,
            action=AuditAction.UPDATE,
            entity_type=EntityType.PAYMENT,
            entity_id=payment.payment_id,
            summary=f"{summary_prefix}: {', '.join(changed)}",
        )
        return updated

    def update_payment(self, *, actor: Actor, payment_id: int, patch: dict) -> Payment:
        self._require_owner(actor)
        if not patch:
            raise ValidationError("Nothing to update")
        changes = clean_payment_fields(patch, partial=True)

        with self._tx.transaction():
            payment = self._get(payment_id)
            if "staff_id" in changes and changes["staff_id"] != payment.staff_id:
                self._require_staff(changes["staff_id"])

            status = changes.get("receipt_status", payment.receipt_status)
            name = changes.get("receipt_name", payment.receipt_name)
            if "receipt_status" in changes or "receipt_name" in changes:
                changes["receipt_name"] = _normalize_receipt(status, name)

            return self._apply(
                actor=actor,
                payment=payment,
                changes=changes,
                summary_prefix=f"Updated payment {payment.payment_id}",
            )

    def attach_receipt(self, *, actor: Actor, payment_id: int, receipt_name: str) -> Payment:
        self._require_owner(actor)
        name = require_text(receipt_name, "Receipt name", MAX_TEXT_LENGTH)

        with self._tx.transaction():
            payment = self._get(payment_id)
            return self._apply(
                actor=actor,
                payment=payment,
                changes={"receipt_status": ReceiptStatus.ATTACHED, "receipt_name": name},
                summary_prefix=f"Attached receipt {name} to payment {payment.payment_id}",
            )

    def detach_receipt(self, *, actor: Actor, payment_id: int) -> Payment:
        self._require_owner(actor)

        with self._tx.transaction():
            payment = self._get(payment_id)
            return self._apply(
                actor=actor,
                payment=payment,
                changes={"receipt_status": ReceiptStatus.MISSING, "receipt_name": None},
                summary_prefix=f"Removed receipt from payment {payment.payment_id}",
            )

    def delete_payment(self, *, actor: Actor, payment_id: int) -> None:
        self._require_owner(actor)

        with self._tx.transaction():
            payment = self._get(payment_id)
            if not self._payments.delete_by_id(payment.payment_id):
                raise NotFoundError("Payment not found")
            self._audit.record(
                actor=actor.name,
                action=AuditAction.DELETE,
                entity_type=EntityType.PAYMENT,
                entity_id=payment.payment_id,
                summary=f"Deleted payment {payment.payment_id}",
            )

        logger.info("Deleted payment %s", payment_id)

    def _visible_staff_id(self, actor: Actor, requested: Optional[int]) -> Optional[int]:
        if actor.role == Role.OWNER:
            return requested
        if actor.staff_id is None:
            raise AuthorizationError("Account is not linked to a staff member")
        return actor.staff_id

    def list_visible(
        self,
        *,
        actor: Actor,
        query: str = "",
        staff_id: Optional[int] = None,
        month_earned: Optional[str] = None,
        receipt_status: Optional[str] = None,
    ) -> Sequence[PaymentView]:
        """Owners see every payment; employees only their own, whatever they ask for."""
        scoped_staff_id = self._visible_staff_id(actor, staff_id)
        month = require_month(month_earned) if month_earned else None
        status = require_choice(receipt_status, ReceiptStatus, "Receipt status") if receipt_status else None

        payments = self._payments.list_payments(staff_id=scoped_staff_id, month_earned=month, receipt_status=status)
        names = self._staff_names()
        views = [PaymentView(payment=p, staff_name=names.get(p.staff_id, "Staff")) for p in payments]

        q = (query or "").strip().lower()
        if not q:
            return views
        return [v for v in views if _matches(v, q)]

    def get_visible(self, *, actor: Actor, payment_id: int) -> PaymentView:
        payment = self._get(payment_id)
        if actor.role != Role.OWNER and payment.staff_id != self._visible_staff_id(actor, None):
            raise NotFoundError("Payment not found")
        staff = self._staff.get_by_id(payment.staff_id)
        return PaymentView(payment=payment, staff_name=staff.full_name if staff else "Staff")
