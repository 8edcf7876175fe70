from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.payroll_ledger.payroll_ledger.container import build_container
from src.payroll_ledger.payroll_ledger.database.demo import seed_demo_data


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        backend="mysql",
        db_config=dict(settings.DB_CONFIG),
        database_url=getattr(settings, "DATABASE_URL", ""),
    )

    if seed_demo_data(container):
        print("OK: Seeded demo staff, payments and accounts")
    else:
        print("OK: Demo data already present, nothing to do")


if __name__ == "__main__":
    main()
