from __future__ import annotations

import logging

from flask import Flask, session

from ..common.http import current_actor, domain_error, fail, json_body, login_required, ok, owner_required, server_error
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        try:
            data = json_body()
            actor = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

            session.clear()
            session.permanent = bool(data.get("remember_me"))
            session["user_id"] = actor.user_id
            session["name"] = actor.name
            session["role"] = actor.role.value
            session["staff_id"] = actor.staff_id

            logger.info("User %s signed in as %s", actor.user_id, actor.role.value)
            return ok(actor)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("signing in")

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok(None, message="Signed out")

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return ok(current_actor())

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @owner_required
    def list_users():
        try:
            users = container.user_service.list_accounts(actor=current_actor())
            return ok([u.public_view() for u in users])
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("listing accounts")

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @owner_required
    def create_user():
        try:
            data = json_body()
            user = container.user_service.create_account(
                actor=current_actor(),
                email=data.get("email", ""),
                display_name=data.get("display_name", ""),
                password=data.get("password", ""),
                role=data.get("role", ""),
                staff_id=data.get("staff_id"),
            )
            return ok(user.public_view(), status=201)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("creating an account")

    @app.route("/api/users/<int:user_id>/active", methods=["POST"], endpoint="set_user_active")
    @owner_required
    def set_user_active(user_id: int):
        try:
            data = json_body()
            if not isinstance(data.get("is_active"), bool):
                return fail("is_active must be true or false", 400)
            user = container.user_service.set_active(
                actor=current_actor(),
                user_id=user_id,
                is_active=data["is_active"],
            )
            return ok(user.public_view())
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return server_error("updating an account")
