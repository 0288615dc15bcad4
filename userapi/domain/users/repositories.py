# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import SessionToken, User, UserPage


class UserRepository(Protocol):
    """Persistence for user records.

    Every mutating method runs in its own transaction and raises
    ``StorageError`` after rolling back if the write fails.
    """

    def find_by_id(self, user_id: int) -> User | None: ...
    def find_by_username(self, username: str) -> User | None: ...
    def username_exists(self, username: str) -> bool: ...
    def email_exists(self, email: str) -> bool: ...
    def search(self, term: str | None, *, page: int, per_page: int) -> UserPage: ...
    def add(self, user: User) -> User: ...
    def save(self, user: User) -> User | None: ...
    def delete(self, user_id: int) -> bool: ...


class SessionTokenRepository(Protocol):
    def issue(self, user_id: int) -> SessionToken: ...
    def resolve(self, token: str) -> int | None: ...
    def revoke(self, token: str) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
