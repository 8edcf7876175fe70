from __future__ import annotations

from flask import Flask, request

from ..common.http import (
    current_actor,
    domain_error,
    json_body,
    login_required,
    ok,
    optional_int_arg,
    owner_required,
    server_error,
)
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    def _view(payment_id: int):
        return container.payment_service.get_visible(actor=current_actor(), payment_id=payment_id).as_dict()

    @app.route("/api/payments", methods=["GET"], endpoint="list_payments")
    @login_required
    def list_payments():
        try:
            views = container.payment_service.list_visible(
                actor=current_actor(),
                query=request.args.get("q", ""),
                staff_id=optional_int_arg("staff_id"),
                month_earned=request.args.get("month_earned"),
                receipt_status=request.args.get("receipt_status"),
            )
            return ok([v.as_dict() for v in views], count=len(views))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("listing payments")

    @app.route("/api/payments/<int:payment_id>", methods=["GET"], endpoint="get_payment")
    @login_required
    def get_payment(payment_id: int):
        try:
            return ok(_view(payment_id))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("loading a payment")

    @app.route("/api/payments", methods=["POST"], endpoint="create_payment")
    @owner_required
    def create_payment():
        try:
            payment = container.payment_service.create_payment(actor=current_actor(), data=json_body())
            return ok(_view(payment.payment_id), status=201)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("recording a payment")

    @app.route("/api/payments/<int:payment_id>", methods=["PATCH"], endpoint="update_payment")
    @owner_required
    def update_payment(payment_id: int):
        try:
            container.payment_service.update_payment(actor=current_actor(), payment_id=payment_id, patch=json_body())
            return ok(_view(payment_id))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("updating a payment")

    @app.route("/api/payments/<int:payment_id>/receipt", methods=["POST"], endpoint="attach_receipt")
    @owner_required
    def attach_receipt(payment_id: int):
        try:
            data = json_body()
            container.payment_service.attach_receipt(
                actor=current_actor(),
                payment_id=payment_id,
                receipt_name=data.get("receipt_name", ""),
            )
            return ok(_view(payment_id))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("attaching a receipt")

    @app.route("/api/payments/<int:payment_id>/receipt", methods=["DELETE"], endpoint="detach_receipt")
    @owner_required
    def detach_receipt(payment_id: int):
        try:
            container.payment_service.detach_receipt(actor=current_actor(), payment_id=payment_id)
            return ok(_view(payment_id))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("removing a receipt")

    @app.route("/api/payments/<int:payment_id>", methods=["DELETE"], endpoint="delete_payment")
    @owner_required
    def delete_payment(payment_id: int):
        try:
            container.payment_service.delete_payment(actor=current_actor(), payment_id=payment_id)
            return ok(None, message="Payment deleted")
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("deleting a payment")
