# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from userapi.domain.users.entities import User
from userapi.domain.users.repositories import PasswordHasher, UserRepository
from userapi.shared.config import AdminConfig
from userapi.shared.errors import StorageError
from userapi.shared.logging import logger


class AdminSetupError(Exception):
    pass


class AdminSetup:
    """Make sure the configured administrator account exists.

    Every authenticated user may manage other users, so this account is only
    the first way in on an empty database. An existing account with the same
    username is left untouched.
    """

    def __init__(
        self,
        *,
        config: AdminConfig,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._config = config
        self._users = users
        self._password_hasher = password_hasher

    def run(self) -> User | None:
        credentials = self._config.credentials()
        if credentials is None:
            logger.info("admin_setup: ADMIN_USERNAME/EMAIL/PASSWORD not configured, skipping")
            return None

        username, email, password = credentials

        existing = self._users.find_by_username(username)
        if existing:
            logger.info(f"admin_setup: user '{username}' already exists")
            return existing

        if self._users.email_exists(email):
            logger.warning(
                f"admin_setup: email for '{username}' is taken by another user, skipping"
            )
            return None

        now = datetime.now(UTC)
        try:
            admin = self._users.add(
                User(
                    id=0,
                    name=self._config.name,
                    username=username,
                    email=email,
                    password_hash=self._password_hasher.hash(password),
                    created_at=now,
                    updated_at=now,
                )
            )
        except StorageError as exc:
            logger.error(f"admin_setup: failed to create admin user: {exc.detail}")
            raise AdminSetupError(f"Failed to setup admin user: {exc.detail}") from exc

        logger.info(f"admin_setup: created admin user '{admin.username}' id={admin.id}")
        return admin


__all__ = ["AdminSetup", "AdminSetupError"]
