# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from userapi.application.schemas import UpdatePasswordSchema, validate_payload
from userapi.domain.users.exceptions import UserNotFoundError, UserPersistenceError
from userapi.domain.users.repositories import PasswordHasher, UserRepository
from userapi.shared.errors import StorageError
from userapi.shared.logging import logger


class UpdateUserPasswordUseCase:
    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, actor_id: int, user_id: int, payload: Mapping[str, Any]) -> None:
        user = self._users.find_by_id(user_id)
        if not user:
            raise UserNotFoundError()

        dto = validate_payload(UpdatePasswordSchema, payload)

        changed = replace(
            user,
            password_hash=self._password_hasher.hash(dto.password),
            updated_at=datetime.now(UTC),
        )
        try:
            saved = self._users.save(changed)
        except StorageError as exc:
            logger.error(f"admin.update_password: actor={actor_id} user_id={user_id} failed: {exc.detail}")
            raise UserPersistenceError("Failed to update password.", exc.detail) from exc

        if saved is None:
            raise UserNotFoundError()

        logger.info(f"admin.update_password: actor={actor_id} user_id={user_id}")


__all__ = ["UpdateUserPasswordUseCase"]
