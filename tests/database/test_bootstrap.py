from pathlib import Path

from src.payroll_ledger.payroll_ledger.database.bootstrap import iter_sql_statements

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_splitter_ignores_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\nSELECT \"x;y\";\n  \nSELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'SELECT "x;y"',
        "SELECT 1",
    ]


def test_schema_declares_all_tables():
    sql = SCHEMA.read_text(encoding="utf-8")
    statements = list(iter_sql_statements(sql))

    for table in ("staff", "payments", "users", "audit_logs"):
        assert any(f"CREATE TABLE IF NOT EXISTS {table}" in s for s in statements), table
