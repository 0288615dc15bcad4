# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import SessionToken, User, UserPage
from .exceptions import (
    ConfirmPasswordMismatchError,
    InvalidCredentialsError,
    SelfDeletionError,
    UnauthenticatedError,
    UserNotFoundError,
    UserPersistenceError,
)
from .repositories import PasswordHasher, SessionTokenRepository, UserRepository

__all__ = [
    "ConfirmPasswordMismatchError",
    "InvalidCredentialsError",
    "PasswordHasher",
    "SelfDeletionError",
    "SessionToken",
    "SessionTokenRepository",
    "UnauthenticatedError",
    "User",
    "UserNotFoundError",
    "UserPage",
    "UserPersistenceError",
    "UserRepository",
]
