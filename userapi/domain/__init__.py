# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users import (
    PasswordHasher,
    SessionToken,
    SessionTokenRepository,
    User,
    UserPage,
    UserRepository,
)

__all__ = [
    "PasswordHasher",
    "SessionToken",
    "SessionTokenRepository",
    "User",
    "UserPage",
    "UserRepository",
]
