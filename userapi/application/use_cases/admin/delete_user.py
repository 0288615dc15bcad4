# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from userapi.application.schemas import DeleteUserSchema, validate_payload
from userapi.domain.users.exceptions import (
    ConfirmPasswordMismatchError,
    SelfDeletionError,
    UserNotFoundError,
    UserPersistenceError,
)
from userapi.domain.users.repositories import PasswordHasher, UserRepository
from userapi.shared.errors import StorageError
from userapi.shared.logging import logger


class DeleteUserUseCase:
    """Hard-delete a user after the actor re-enters their own password.

    Checks run in a fixed order: target exists, target is not the actor,
    payload shape, then the actor's password.
    """

    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, actor_id: int, user_id: int, payload: Mapping[str, Any]) -> None:
        target = self._users.find_by_id(user_id)
        if not target:
            raise UserNotFoundError()

        if target.id == actor_id:
            logger.warning(f"admin.delete_user: actor={actor_id} attempted self-deletion")
            raise SelfDeletionError()

        dto = validate_payload(DeleteUserSchema, payload)

        actor = self._users.find_by_id(actor_id)
        if not actor or not self._password_hasher.verify(dto.confirm_password, actor.password_hash):
            logger.warning(f"admin.delete_user: actor={actor_id} failed reauthorization")
            raise ConfirmPasswordMismatchError()

        try:
            deleted = self._users.delete(target.id)
        except StorageError as exc:
            logger.error(f"admin.delete_user: actor={actor_id} user_id={user_id} failed: {exc.detail}")
            raise UserPersistenceError("Failed to delete user.", exc.detail) from exc

        if not deleted:
            raise UserNotFoundError()

        logger.info(f"admin.delete_user: actor={actor_id} deleted user_id={user_id}")


__all__ = ["DeleteUserUseCase"]
