from __future__ import annotations

from flask import Flask, request

from ..common.http import current_actor, domain_error, ok, owner_required, server_error
from ..common.serialization import to_json
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @owner_required
    def dashboard():
        try:
            data = container.dashboard_service.build(actor=current_actor(), month=request.args.get("month"))
            return ok(
                {
                    "month": data.month,
                    "month_total": to_json(data.month_total),
                    "currency": data.currency,
                    "missing_receipts_count": data.missing_receipts_count,
                    "recent_payments": [v.as_dict() for v in data.recent_payments],
                }
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("building the dashboard")
