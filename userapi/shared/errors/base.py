# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True, eq=False)
class AppError(Exception):
    message: str
    status: HTTPStatus
    payload: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.message}
        if self.payload:
            body.update(self.payload)
        return body


class DomainError(AppError):
    def __init__(
        self,
        *,
        message: str | None = None,
        status: HTTPStatus | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_message = message or cast(
            str, getattr(self, "default_message", "Domain error.")
        )
        resolved_status = status or cast(
            HTTPStatus, getattr(self, "default_status", HTTPStatus.BAD_REQUEST)
        )
        super().__init__(message=resolved_message, status=resolved_status, payload=payload)


class InfrastructureError(AppError):
    def __init__(
        self,
        message: str = "Server Error.",
        *,
        status: HTTPStatus | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(message=message, status=resolved_status, payload=payload)


class StorageError(InfrastructureError):
    """A write to the backing store failed and was rolled back."""

    def __init__(self, detail: str) -> None:
        super().__init__("Storage failure.")
        self.detail = detail


class ValidationError(AppError):
    def __init__(
        self,
        errors: Mapping[str, Sequence[str]],
        *,
        message: str = "Invalid input.",
        status: HTTPStatus = HTTPStatus.UNPROCESSABLE_ENTITY,
        errors_key: str = "errors",
    ) -> None:
        self.errors = {field: list(messages) for field, messages in errors.items()}
        self.errors_key = errors_key
        super().__init__(
            message=message,
            status=status,
            payload={errors_key: self.errors},
        )
