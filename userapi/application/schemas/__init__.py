# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .auth import LoginSchema, RegisterSchema
from .base import RequestSchema, validate_payload
from .users import (
    CreateUserSchema,
    DeleteUserSchema,
    ListUsersSchema,
    UpdatePasswordSchema,
    UpdateUserSchema,
)

__all__ = [
    "CreateUserSchema",
    "DeleteUserSchema",
    "ListUsersSchema",
    "LoginSchema",
    "RegisterSchema",
    "RequestSchema",
    "UpdatePasswordSchema",
    "UpdateUserSchema",
    "validate_payload",
]
