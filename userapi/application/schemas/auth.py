# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import ClassVar

from pydantic import Field

from .base import RequestSchema


class RegisterSchema(RequestSchema):
    name: str = Field(min_length=1, max_length=255)
    username: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=8)

    failure_message: ClassVar[str] = "Invalid input."
    failure_status: ClassVar[HTTPStatus] = HTTPStatus.UNPROCESSABLE_ENTITY
    errors_key: ClassVar[str] = "errors"
    messages: ClassVar[dict[str, str]] = {
        "name.missing": "Name is required.",
        "name.string_too_short": "Name is required.",
        "name.string_type": "Name must be a string.",
        "name.string_too_long": "Name must not exceed 255 characters.",
        "username.missing": "Username is required.",
        "username.string_too_short": "Username is required.",
        "username.string_type": "Username must be a string.",
        "username.string_too_long": "Username must not exceed 255 characters.",
        "username.unique": "Username is already taken.",
        "email.missing": "Email is required.",
        "email.string_too_short": "Email is required.",
        "email.string_type": "Email must be a string.",
        "email.string_too_long": "Email must not exceed 255 characters.",
        "email.unique": "This email is already registered.",
        "password.missing": "Password is required.",
        "password.string_type": "Password must be a string.",
        "password.string_too_short": "Password must be at least 8 characters long.",
    }


class LoginSchema(RequestSchema):
    username: str = Field(min_length=1)
    password: str = Field(min_length=8)

    failure_message: ClassVar[str] = "Invalid input"
    failure_status: ClassVar[HTTPStatus] = HTTPStatus.UNPROCESSABLE_ENTITY
    errors_key: ClassVar[str] = "validation"
    messages: ClassVar[dict[str, str]] = {
        "username.missing": "Username is required.",
        "username.string_too_short": "Username is required.",
        "username.string_type": "Username must be a string.",
        "password.missing": "Password is required.",
        "password.string_type": "Password must be a string.",
        "password.string_too_short": "Password must be at least 8 characters long.",
    }


__all__ = ["LoginSchema", "RegisterSchema"]
