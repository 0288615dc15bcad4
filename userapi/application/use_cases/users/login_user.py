# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from userapi.application.schemas import LoginSchema, validate_payload
from userapi.domain.users.entities import SessionToken, User
from userapi.domain.users.exceptions import InvalidCredentialsError
from userapi.domain.users.repositories import PasswordHasher, SessionTokenRepository, UserRepository
from userapi.shared.logging import logger


@dataclass(slots=True, frozen=True)
class LoginResult:
    user: User
    token: SessionToken


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: SessionTokenRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, payload: Mapping[str, Any]) -> LoginResult:
        dto = validate_payload(LoginSchema, payload)

        user = self._users.find_by_username(dto.username)
        if user is None or not self._password_hasher.verify(dto.password, user.password_hash):
            logger.warning("auth.login: rejected credentials")
            raise InvalidCredentialsError()

        token = self._tokens.issue(user.id)
        logger.info(f"auth.login: ok user_id={user.id}")
        return LoginResult(user=user, token=token)
