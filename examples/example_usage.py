"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

from src.payroll_ledger.payroll_ledger.container import build_container
from src.payroll_ledger.payroll_ledger.core.actor import Actor
from src.payroll_ledger.payroll_ledger.database.demo import seed_demo_data


def main():
    container = build_container(backend="memory")
    seed_demo_data(container)

    owner = Actor.system()
    for view in container.payment_service.list_visible(actor=owner, query="salary"):
        print(view.as_dict())

    for entry in container.audit_trail.list_entries(current_role=owner.role, limit=5):
        print(entry.timestamp, entry.summary)


if __name__ == "__main__":
    main()
