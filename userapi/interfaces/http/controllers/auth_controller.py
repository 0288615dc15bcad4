# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, g, jsonify, request

from userapi.application.use_cases.users.login_user import LoginUserUseCase
from userapi.application.use_cases.users.logout_user import LogoutUserUseCase
from userapi.application.use_cases.users.register_user import RegisterUserUseCase
from userapi.infrastructure.auth.middleware import BearerTokenAuthenticator
from userapi.interfaces.http.dto.users import LoginSuccessDTO, MessageDTO
from userapi.shared.logging import logger


def _json_payload() -> dict[str, Any]:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        authenticator: BearerTokenAuthenticator,
        url_prefix: str = "/api",
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._authenticator = authenticator
        self._url_prefix = url_prefix

    def register(self) -> tuple[Response, int]:
        user = self._register_use_case.execute(_json_payload())
        logger.info(f"auth.register: ok user_id={user.id}")
        payload = MessageDTO(message="Register successfully. You can login now.")
        return jsonify(payload.model_dump()), 200

    def login(self) -> tuple[Response, int]:
        result = self._login_use_case.execute(_json_payload())
        payload = LoginSuccessDTO.build(result.user, result.token)
        return jsonify(payload.model_dump(mode="json")), 200

    def logout(self) -> tuple[Response, int]:
        self._logout_use_case.execute(g.access_token)
        logger.info(f"auth.logout: ok user_id={g.user_id}")
        return jsonify(MessageDTO(message="Logged out successfully.").model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix=self._url_prefix or None)
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule(
            "/logout",
            endpoint="logout",
            view_func=self._authenticator.required(self.logout),
            methods=["POST"],
        )
        return bp


__all__ = ["AuthController"]
