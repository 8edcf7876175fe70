from __future__ import annotations

from flask import Flask, request

from ..common.http import current_actor, domain_error, json_body, ok, owner_required, server_error
from ..container import Container
from ..core.exceptions import DomainError
from .service import StaffPatch


def register(app: Flask, container: Container) -> None:
    @app.route("/api/staff", methods=["GET"], endpoint="list_staff")
    @owner_required
    def list_staff():
        try:
            staff = container.staff_service.list_staff(actor=current_actor(), status=request.args.get("status"))
            return ok(staff)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("listing staff")

    @app.route("/api/staff", methods=["POST"], endpoint="create_staff")
    @owner_required
    def create_staff():
        try:
            data = json_body()
            staff = container.staff_service.create_staff(
                actor=current_actor(),
                full_name=data.get("full_name", ""),
                job_title=data.get("job_title", ""),
                email=data.get("email"),
                status=data.get("status") or "active",
            )
            return ok(staff, status=201)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("adding staff")

    @app.route("/api/staff/<int:staff_id>", methods=["PATCH"], endpoint="update_staff")
    @owner_required
    def update_staff(staff_id: int):
        try:
            staff = container.staff_service.update_staff(
                actor=current_actor(),
                staff_id=staff_id,
                patch=StaffPatch.from_dict(json_body()),
            )
            return ok(staff)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("updating staff")

    @app.route("/api/staff/<int:staff_id>/toggle-status", methods=["POST"], endpoint="toggle_staff_status")
    @owner_required
    def toggle_staff_status(staff_id: int):
        try:
            return ok(container.staff_service.toggle_status(actor=current_actor(), staff_id=staff_id))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("changing staff status")

    @app.route("/api/staff/<int:staff_id>", methods=["DELETE"], endpoint="delete_staff")
    @owner_required
    def delete_staff(staff_id: int):
        try:
            container.staff_service.delete_staff(actor=current_actor(), staff_id=staff_id)
            return ok(None, message="Staff member deleted")
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("deleting staff")
