# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from userapi.shared.errors.base import AppError, DomainError


class UserNotFoundError(DomainError):
    default_message = "User not found."
    default_status = HTTPStatus.NOT_FOUND


class InvalidCredentialsError(DomainError):
    default_message = "The username or password is incorrect."
    default_status = HTTPStatus.UNAUTHORIZED


class UnauthenticatedError(DomainError):
    default_message = "Unauthenticated."
    default_status = HTTPStatus.UNAUTHORIZED


class SelfDeletionError(DomainError):
    default_message = "You cannot delete your own account."
    default_status = HTTPStatus.FORBIDDEN


class ConfirmPasswordMismatchError(DomainError):
    default_message = "The confirm password does not match."
    default_status = HTTPStatus.FORBIDDEN


class UserPersistenceError(AppError):
    def __init__(self, message: str, detail: str) -> None:
        super().__init__(
            message=message,
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            payload={"errors": detail},
        )
        self.detail = detail
