# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from userapi.domain.users.entities import User
from userapi.domain.users.exceptions import UserNotFoundError
from userapi.domain.users.repositories import UserRepository


class ShowUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, actor_id: int, user_id: int) -> User:
        user = self._users.find_by_id(user_id)
        if not user:
            raise UserNotFoundError()
        return user


__all__ = ["ShowUserUseCase"]
