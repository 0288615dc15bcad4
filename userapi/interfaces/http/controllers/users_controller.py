# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, g, jsonify, request

from userapi.application.use_cases.admin.create_user import CreateUserUseCase
from userapi.application.use_cases.admin.delete_user import DeleteUserUseCase
from userapi.application.use_cases.admin.list_users import ListUsersUseCase
from userapi.application.use_cases.admin.show_user import ShowUserUseCase
from userapi.application.use_cases.admin.update_user import UpdateUserUseCase
from userapi.application.use_cases.admin.update_user_password import UpdateUserPasswordUseCase
from userapi.infrastructure.auth.middleware import BearerTokenAuthenticator
from userapi.interfaces.http.dto.users import (
    MessageDTO,
    UserDTO,
    UserEnvelopeDTO,
    UserListDTO,
)


def _json_payload() -> dict[str, Any]:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


class UsersController:
    """User management endpoints; every route requires a bearer token."""

    def __init__(
        self,
        *,
        list_users: ListUsersUseCase,
        show_user: ShowUserUseCase,
        create_user: CreateUserUseCase,
        update_user: UpdateUserUseCase,
        update_user_password: UpdateUserPasswordUseCase,
        delete_user: DeleteUserUseCase,
        authenticator: BearerTokenAuthenticator,
        url_prefix: str = "/api",
    ) -> None:
        self._list_users = list_users
        self._show_user = show_user
        self._create_user = create_user
        self._update_user = update_user
        self._update_user_password = update_user_password
        self._delete_user = delete_user
        self._authenticator = authenticator
        self._url_prefix = url_prefix

    def index(self) -> tuple[Response, int]:
        page = self._list_users.execute(g.user_id, request.args.to_dict())
        return jsonify(UserListDTO.from_page(page).model_dump(mode="json")), 200

    def show(self, user_id: int) -> tuple[Response, int]:
        user = self._show_user.execute(g.user_id, user_id)
        payload = UserEnvelopeDTO(
            message="User retrieved successfully.",
            data=UserDTO.from_entity(user),
        )
        return jsonify(payload.model_dump(mode="json")), 200

    def store(self) -> tuple[Response, int]:
        user = self._create_user.execute(g.user_id, _json_payload())
        payload = UserEnvelopeDTO(
            message="User are successfully saved.",
            data=UserDTO.from_entity(user),
        )
        return jsonify(payload.model_dump(mode="json")), 201

    def update(self, user_id: int) -> tuple[Response, int]:
        user = self._update_user.execute(g.user_id, user_id, _json_payload())
        payload = UserEnvelopeDTO(
            message="User are successfully updated.",
            data=UserDTO.from_entity(user),
        )
        return jsonify(payload.model_dump(mode="json")), 200

    def update_password(self, user_id: int) -> tuple[Response, int]:
        self._update_user_password.execute(g.user_id, user_id, _json_payload())
        payload = MessageDTO(message="User password are successfully updated.")
        return jsonify(payload.model_dump()), 200

    def destroy(self, user_id: int) -> tuple[Response, int]:
        self._delete_user.execute(g.user_id, user_id, _json_payload())
        return jsonify(MessageDTO(message="User are successfully deleted.").model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix=f"{self._url_prefix}/users")
        bp.before_request(self._authenticator.authenticate)

        bp.add_url_rule("", view_func=self.index, methods=["GET"])
        bp.add_url_rule("", view_func=self.store, methods=["POST"])
        bp.add_url_rule("/<int:user_id>", view_func=self.show, methods=["GET"])
        bp.add_url_rule("/<int:user_id>", view_func=self.update, methods=["PUT", "PATCH"])
        bp.add_url_rule("/<int:user_id>", view_func=self.destroy, methods=["DELETE"])
        bp.add_url_rule(
            "/<int:user_id>/password", view_func=self.update_password, methods=["PATCH"]
        )
        return bp


__all__ = ["UsersController"]
