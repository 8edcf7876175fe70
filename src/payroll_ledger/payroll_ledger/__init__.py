"""Payroll Ledger package.

Organized by feature modules (staff, payments, audit, users, ...) with a thin
Flask controller layer over service/repository layers.
"""
