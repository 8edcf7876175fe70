from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import current_month
from ..common.http import current_actor, domain_error, ok, optional_int_arg, owner_required, server_error
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/ledger", methods=["GET"], endpoint="ledger_report")
    @owner_required
    def ledger_report():
        try:
            this_month = current_month()
            report = container.report_service.build_ledger_report(
                actor=current_actor(),
                start_month=request.args.get("from") or this_month,
                end_month=request.args.get("to") or this_month,
                staff_id=optional_int_arg("staff_id"),
            )
            return ok({"rows": report.rows, "summary": report.summary})
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("building the ledger report")
