from __future__ import annotations

from flask import Flask, request

from ..common.http import current_actor, domain_error, ok, optional_int_arg, owner_required, server_error
from ..common.validators import require_choice
from ..container import Container
from ..core.constants import DEFAULT_AUDIT_LIMIT
from ..core.enums import EntityType
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/audit", methods=["GET"], endpoint="list_audit")
    @owner_required
    def list_audit():
        try:
            entity_type_s = request.args.get("entity_type")
            limit = optional_int_arg("limit")
            entries = container.audit_trail.list_entries(
                current_role=current_actor().role,
                entity_type=require_choice(entity_type_s, EntityType, "Entity type") if entity_type_s else None,
                entity_id=optional_int_arg("entity_id"),
                limit=DEFAULT_AUDIT_LIMIT if limit is None else limit,
            )
            return ok(entries, count=len(entries))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("reading the audit log")

    @app.route("/api/audit/<int:audit_id>", methods=["GET"], endpoint="get_audit_entry")
    @owner_required
    def get_audit_entry(audit_id: int):
        try:
            return ok(container.audit_trail.get_entry(current_role=current_actor().role, audit_id=audit_id))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("reading the audit log")
