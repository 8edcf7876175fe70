from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    OWNER = "owner"
    EMPLOYEE = "employee"


class StaffStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"

    def toggled(self) -> "StaffStatus":
        return StaffStatus.INACTIVE if self is StaffStatus.ACTIVE else StaffStatus.ACTIVE


class PaymentMethod(str, Enum):
    WISE = "Wise"
    SENDWAVE = "Sendwave"
    WORLDREMIT = "WorldRemit"


class PaymentCategory(str, Enum):
    SALARY = "Salary"
    BONUS = "Bonus"
    REIMBURSEMENT = "Reimbursement"
    OTHER = "Other"


class ReceiptStatus(str, Enum):
    ATTACHED = "attached"
    MISSING = "missing"


class AuditAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class EntityType(str, Enum):
    """Kinds of records the audit trail can reference."""

    PAYMENT = "payment"
    STAFF = "staff"
    USER = "user"
