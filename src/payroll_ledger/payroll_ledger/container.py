from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .audit.memory_audit_repository import InMemoryAuditRepository
from .audit.mysql_audit_repository import MySQLAuditRepository
from .audit.repository import AuditRepository
from .audit.service import AuditTrail
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .database.memory import InMemoryStore
from .database.unit_of_work import TransactionManager
from .payments.memory_payment_repository import InMemoryPaymentRepository
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService
from .reports.service import LedgerReportService
from .staff.memory_staff_repository import InMemoryStaffRepository
from .staff.mysql_staff_repository import MySQLStaffRepository
from .staff.repository import StaffRepository
from .staff.service import StaffService
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService

BACKENDS = ("mysql", "memory")


@dataclass(frozen=True)
class Container:
    backend: str
    tx: TransactionManager

    staff_repo: StaffRepository
    payments_repo: PaymentRepository
    audit_repo: AuditRepository
    users_repo: UserRepository

    audit_trail: AuditTrail
    auth_service: AuthService
    user_service: UserService
    staff_service: StaffService
    payment_service: PaymentService
    dashboard_service: DashboardService
    report_service: LedgerReportService


def build_container(*, backend: str = "mysql", db_config: Optional[dict] = None, database_url: str = "") -> Container:
    if backend == "mysql":
        if database_url:
            config = DBConfig.from_url(database_url)
        else:
            config = DBConfig.from_dict(db_config or {})
        conn = DatabaseConnection.get_instance(config)
        tx: TransactionManager = conn
        staff_repo = MySQLStaffRepository(conn)
        payments_repo = MySQLPaymentRepository(conn)
        audit_repo = MySQLAuditRepository(conn)
        users_repo = MySQLUserRepository(conn)
    elif backend == "memory":
        store = InMemoryStore()
        tx = store
        staff_repo = InMemoryStaffRepository(store)
        payments_repo = InMemoryPaymentRepository(store)
        audit_repo = InMemoryAuditRepository(store)
        users_repo = InMemoryUserRepository(store)
    else:
        raise ValueError(f"Unknown storage backend {backend!r}; expected one of {BACKENDS}")

    audit_trail = AuditTrail(audit_repo)

    def staff_references(staff_id: int) -> int:
        return payments_repo.count_for_staff(staff_id) + users_repo.count_for_staff(staff_id)

    return Container(
        backend=backend,
        tx=tx,
        staff_repo=staff_repo,
        payments_repo=payments_repo,
        audit_repo=audit_repo,
        users_repo=users_repo,
        audit_trail=audit_trail,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, staff_repo, audit_trail, tx),
        staff_service=StaffService(staff_repo, audit_trail, tx, references=staff_references),
        payment_service=PaymentService(payments_repo, staff_repo, audit_trail, tx),
        dashboard_service=DashboardService(payments_repo, staff_repo),
        report_service=LedgerReportService(payments_repo, staff_repo),
    )
