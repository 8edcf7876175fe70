from __future__ import annotations

from datetime import datetime

import pytest

from src.payroll_ledger.payroll_ledger.container import build_container
from src.payroll_ledger.payroll_ledger.core.actor import Actor
from src.payroll_ledger.payroll_ledger.core.enums import Role


@pytest.fixture
def fixed_now():
    return datetime(2026, 1, 15, 9, 30, 0)


@pytest.fixture
def container():
    return build_container(backend="memory")


@pytest.fixture
def owner():
    return Actor(user_id=100, name="Owner", role=Role.OWNER)


@pytest.fixture
def staff_member(container, owner):
    return container.staff_service.create_staff(
        actor=owner,
        full_name="Brian Otieno",
        job_title="Dispatcher",
        email="brian@readycarriers.com",
    )


@pytest.fixture
def other_staff_member(container, owner):
    return container.staff_service.create_staff(
        actor=owner,
        full_name="Amina Hassan",
        job_title="Operations Manager",
    )


@pytest.fixture
def employee(staff_member):
    return Actor(user_id=101, name="Brian Otieno", role=Role.EMPLOYEE, staff_id=staff_member.staff_id)


@pytest.fixture
def payment_data():
    def build(staff_id: int, **overrides) -> dict:
        data = {
            "staff_id": staff_id,
            "month_earned": "2025-12",
            "date_sent": "2026-01-03T11:05:00Z",
            "amount": "900",
            "method": "Sendwave",
            "category": "Salary",
            "reference_id": "SW-902113",
            "notes": "December salary",
        }
        data.update(overrides)
        return data

    return build
