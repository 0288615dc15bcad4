# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from userapi.application.schemas import ListUsersSchema, validate_payload
from userapi.domain.users.entities import UserPage
from userapi.domain.users.repositories import UserRepository
from userapi.shared.logging import logger


class ListUsersUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, actor_id: int, params: Mapping[str, Any]) -> UserPage:
        dto = validate_payload(ListUsersSchema, params)
        page = self._users.search(dto.search, page=dto.page, per_page=dto.per_page)
        logger.info(
            f"admin.users: actor={actor_id} page={page.page} returned {len(page.items)} of {page.total}"
        )
        return page


__all__ = ["ListUsersUseCase"]
