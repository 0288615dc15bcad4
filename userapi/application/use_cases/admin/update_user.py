# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from userapi.application.schemas import UpdateUserSchema, validate_payload
from userapi.domain.users.entities import User
from userapi.domain.users.exceptions import UserNotFoundError, UserPersistenceError
from userapi.domain.users.repositories import PasswordHasher, UserRepository
from userapi.shared.errors import StorageError
from userapi.shared.logging import logger


class UpdateUserUseCase:
    """Full update of identity fields with optional e-mail and password.

    ``name`` and ``username`` are re-validated on every call. An absent or
    empty ``email``/``password`` keeps the stored value.
    """

    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, actor_id: int, user_id: int, payload: Mapping[str, Any]) -> User:
        user = self._users.find_by_id(user_id)
        if not user:
            raise UserNotFoundError()

        dto = validate_payload(UpdateUserSchema, payload)

        password_hash = user.password_hash
        if dto.password:
            password_hash = self._password_hasher.hash(dto.password)

        changed = replace(
            user,
            name=dto.name,
            username=dto.username,
            email=dto.email or user.email,
            password_hash=password_hash,
            updated_at=datetime.now(UTC),
        )
        try:
            saved = self._users.save(changed)
        except StorageError as exc:
            logger.error(f"admin.update_user: actor={actor_id} user_id={user_id} failed: {exc.detail}")
            raise UserPersistenceError("Failed to update user.", exc.detail) from exc

        if saved is None:
            raise UserNotFoundError()

        logger.info(f"admin.update_user: actor={actor_id} updated user_id={user_id}")
        return saved


__all__ = ["UpdateUserUseCase"]
