# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from userapi.application.schemas import RegisterSchema, validate_payload
from userapi.application.use_cases.uniqueness import unique_identity_check
from userapi.domain.users.entities import User
from userapi.domain.users.exceptions import UserPersistenceError
from userapi.domain.users.repositories import PasswordHasher, UserRepository
from userapi.shared.errors import StorageError
from userapi.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, payload: Mapping[str, Any]) -> User:
        unique = unique_identity_check(self._users, RegisterSchema.messages)
        dto = validate_payload(RegisterSchema, payload, checks=unique)

        now = datetime.now(UTC)
        user = User(
            id=0,
            name=dto.name,
            username=dto.username,
            email=dto.email,
            password_hash=self._password_hasher.hash(dto.password),
            created_at=now,
            updated_at=now,
        )
        try:
            persisted = self._users.add(user)
        except StorageError as exc:
            # lost a race against a concurrent insert of the same identity
            duplicates = unique(payload)
            if duplicates:
                raise RegisterSchema.failure(duplicates) from exc
            raise UserPersistenceError("Failed to register user.", exc.detail) from exc

        logger.info(f"auth.register: created user_id={persisted.id}")
        return persisted
