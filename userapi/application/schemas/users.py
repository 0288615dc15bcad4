# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Any, ClassVar

from pydantic import Field, field_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from .base import RequestSchema

# keeps (page - 1) * per_page inside a signed 64-bit OFFSET
MAX_PAGE = (2**63 - 1) // 100

_CONFIRM_PASSWORD_MESSAGES = {
    "confirm_password.missing": "Confirm password is required.",
    "confirm_password.string_type": "Confirm password must be a string.",
    "confirm_password.string_too_short": "Confirm password must be at least 8 characters.",
    "confirm_password.string_too_long": "Confirm password may not be greater than 100 characters.",
    "confirm_password.same": "Confirm password must match the password.",
}


class ListUsersSchema(RequestSchema):
    search: str | None = Field(None, max_length=255)
    per_page: int = Field(10, ge=1, le=100)
    page: int = Field(1, ge=1, le=MAX_PAGE)

    failure_message: ClassVar[str] = "Invalid input."
    failure_status: ClassVar[HTTPStatus] = HTTPStatus.BAD_REQUEST
    errors_key: ClassVar[str] = "validation"
    messages: ClassVar[dict[str, str]] = {
        "search.string_type": "The search field must be a string.",
        "search.string_too_long": "The search field may not be greater than 255 characters.",
        "per_page.int_type": "The per page field must be an integer.",
        "per_page.int_parsing": "The per page field must be an integer.",
        "per_page.int_from_float": "The per page field must be an integer.",
        "per_page.greater_than_equal": "The per page field must be at least 1.",
        "per_page.less_than_equal": "The per page field may not be greater than 100.",
        "page.int_type": "The page field must be an integer.",
        "page.int_parsing": "The page field must be an integer.",
        "page.int_from_float": "The page field must be an integer.",
        "page.greater_than_equal": "The page field must be at least 1.",
        "page.less_than_equal": f"The page field may not be greater than {MAX_PAGE}.",
    }

    @field_validator("search", mode="before")
    @classmethod
    def _blank_search_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class CreateUserSchema(RequestSchema):
    name: str = Field(min_length=1, max_length=255)
    username: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=8)
    confirm_password: str = Field(min_length=8)

    failure_message: ClassVar[str] = "Invalid Input."
    failure_status: ClassVar[HTTPStatus] = HTTPStatus.BAD_REQUEST
    errors_key: ClassVar[str] = "validation"
    messages: ClassVar[dict[str, str]] = {
        "name.missing": "Name is required.",
        "name.string_too_short": "Name is required.",
        "name.string_type": "Name must be a valid string.",
        "name.string_too_long": "Name cannot exceed 255 characters.",
        "username.missing": "Username is required.",
        "username.string_too_short": "Username is required.",
        "username.string_type": "Username must be a valid string.",
        "username.string_too_long": "Username cannot exceed 255 characters.",
        "username.unique": "Username already exists.",
        "email.missing": "Email is required.",
        "email.string_too_short": "Email is required.",
        "email.string_type": "Email must be a string.",
        "email.string_too_long": "Email cannot exceed 255 characters.",
        "email.unique": "This email is already registered.",
        "password.missing": "Password is required.",
        "password.string_type": "Password must be a string.",
        "password.string_too_short": "Password must be at least 8 characters.",
        **_CONFIRM_PASSWORD_MESSAGES,
    }

    same_as: ClassVar[dict[str, str]] = {"confirm_password": "password"}

    @field_validator("email")
    @classmethod
    def _validate_email_format(cls, value: str) -> str:
        try:
            validate_email(value)
        except PydanticCustomError as exc:
            raise PydanticCustomError("email", "Email format is invalid.") from exc
        return value


class UpdateUserSchema(RequestSchema):
    name: str = Field(min_length=4, max_length=100)
    username: str = Field(min_length=4, max_length=100)
    email: str | None = None
    password: str | None = None

    failure_message: ClassVar[str] = "Invalid input."
    failure_status: ClassVar[HTTPStatus] = HTTPStatus.BAD_REQUEST
    errors_key: ClassVar[str] = "validation"
    messages: ClassVar[dict[str, str]] = {
        "name.missing": "Name is required.",
        "name.string_type": "Name must be a valid string.",
        "name.string_too_short": "Name must be at least 4 characters.",
        "name.string_too_long": "Name may not be greater than 100 characters.",
        "username.missing": "Username is required.",
        "username.string_type": "Username must be a string.",
        "username.string_too_short": "Username must be at least 4 characters.",
        "username.string_too_long": "Username cannot exceed 100 characters.",
        "email.string_type": "Email must be a string.",
        "password.string_type": "Password must be a string.",
    }


class UpdatePasswordSchema(RequestSchema):
    password: str = Field(min_length=8, max_length=100)
    confirm_password: str = Field(min_length=8, max_length=100)

    failure_message: ClassVar[str] = "Validation failed."
    failure_status: ClassVar[HTTPStatus] = HTTPStatus.UNPROCESSABLE_ENTITY
    errors_key: ClassVar[str] = "errors"
    messages: ClassVar[dict[str, str]] = {
        "password.missing": "Password is required.",
        "password.string_type": "Password must be a string.",
        "password.string_too_short": "Password must be at least 8 characters.",
        "password.string_too_long": "Password may not be greater than 100 characters.",
        **_CONFIRM_PASSWORD_MESSAGES,
    }

    same_as: ClassVar[dict[str, str]] = {"confirm_password": "password"}


class DeleteUserSchema(RequestSchema):
    confirm_password: str = Field(min_length=8, max_length=100)

    failure_message: ClassVar[str] = "Validation failed."
    failure_status: ClassVar[HTTPStatus] = HTTPStatus.UNPROCESSABLE_ENTITY
    errors_key: ClassVar[str] = "errors"
    messages: ClassVar[dict[str, str]] = dict(_CONFIRM_PASSWORD_MESSAGES)


__all__ = [
    "CreateUserSchema",
    "DeleteUserSchema",
    "ListUsersSchema",
    "UpdatePasswordSchema",
    "UpdateUserSchema",
]
