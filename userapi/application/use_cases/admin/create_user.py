# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from userapi.application.schemas import CreateUserSchema, validate_payload
from userapi.application.use_cases.uniqueness import unique_identity_check
from userapi.domain.users.entities import User
from userapi.domain.users.exceptions import UserPersistenceError
from userapi.domain.users.repositories import PasswordHasher, UserRepository
from userapi.shared.errors import StorageError
from userapi.shared.logging import logger


class CreateUserUseCase:
    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, actor_id: int, payload: Mapping[str, Any]) -> User:
        unique = unique_identity_check(self._users, CreateUserSchema.messages)
        dto = validate_payload(CreateUserSchema, payload, checks=unique)

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
            created = self._users.add(user)
        except StorageError as exc:
            logger.error(f"admin.create_user: actor={actor_id} failed: {exc.detail}")
            raise UserPersistenceError("Failed to create user.", exc.detail) from exc

        logger.info(f"admin.create_user: actor={actor_id} created user_id={created.id}")
        return created


__all__ = ["CreateUserUseCase"]
