"""Demo data, created through the services so the audit trail is complete."""

from __future__ import annotations

import logging

from ..container import Container
from ..core.actor import Actor
from ..core.enums import Role

logger = logging.getLogger(__name__)

OWNER_EMAIL = "owner@readycarriers.com"
OWNER_PASSWORD = "owner123"
EMPLOYEE_PASSWORD = "staff123"

_STAFF = (
    ("Amina Hassan", "Operations Manager", "amina@readycarriers.com"),
    ("Brian Otieno", "Dispatcher", "brian@readycarriers.com"),
    ("Fatma Noor", "Accounting Assistant", "fatma@readycarriers.com"),
    ("Kelvin Mwangi", "Safety Coordinator", "kelvin@readycarriers.com"),
)

_PAYMENTS = (
    {
        "staff": "Amina Hassan",
        "month_earned": "2025-12",
        "date_sent": "2026-01-03T10:45:00Z",
        "amount": "1250",
        "method": "Wise",
        "category": "Salary",
        "reference_id": "WISE-7H2K9Q",
        "notes": "December salary",
        "receipt_status": "attached",
        "receipt_name": "wise-receipt-dec-2025.pdf",
    },
    {
        "staff": "Brian Otieno",
        "month_earned": "2025-12",
        "date_sent": "2026-01-03T11:05:00Z",
        "amount": "900",
        "method": "Sendwave",
        "category": "Salary",
        "reference_id": "SW-902113",
        "notes": "December salary",
        "receipt_status": "missing",
    },
    {
        "staff": "Fatma Noor",
        "month_earned": "2026-01",
        "date_sent": "2026-01-06T09:10:00Z",
        "amount": "650",
        "method": "WorldRemit",
        "category": "Reimbursement",
        "reference_id": "WR-11902",
        "notes": "Receipts: office supplies",
        "receipt_status": "attached",
        "receipt_name": "worldremit-office-supplies.jpg",
    },
)


def seed_demo_data(container: Container) -> bool:
    """Create demo staff, payments and accounts once; returns False if already seeded."""
    if container.users_repo.get_by_email(OWNER_EMAIL):
        logger.info("Demo data already present; skipping seed")
        return False

    actor = Actor.system()
    staff_ids: dict[str, int] = {}
    for full_name, job_title, email in _STAFF:
        staff = container.staff_service.create_staff(actor=actor, full_name=full_name, job_title=job_title, email=email)
        staff_ids[full_name] = staff.staff_id

    for item in _PAYMENTS:
        data = {k: v for k, v in item.items() if k != "staff"}
        data["staff_id"] = staff_ids[item["staff"]]
        container.payment_service.create_payment(actor=actor, data=data)

    container.user_service.create_account(
        actor=actor,
        email=OWNER_EMAIL,
        display_name="Owner",
        password=OWNER_PASSWORD,
        role=Role.OWNER,
    )
    container.user_service.create_account(
        actor=actor,
        email="brian@readycarriers.com",
        display_name="Brian Otieno",
        password=EMPLOYEE_PASSWORD,
        role=Role.EMPLOYEE,
        staff_id=staff_ids["Brian Otieno"],
    )

    logger.info("Seeded demo data: %d staff, %d payments", len(_STAFF), len(_PAYMENTS))
    return True
