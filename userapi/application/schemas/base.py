# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Request schemas and the validation entry point used by every use case.

Each schema carries its own wire contract for failures: the top-level
``message``, the HTTP status and the key the field errors are nested under.
Endpoints deliberately differ here (400 vs 422, ``errors`` vs
``validation``), so the contract lives next to the rules it reports on.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from http import HTTPStatus
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from userapi.shared.errors import ValidationError, format_pydantic_errors, merge_errors

FieldErrors = Mapping[str, list[str]]
PayloadCheck = Callable[[Mapping[str, Any]], FieldErrors]


class RequestSchema(BaseModel):
    failure_message: ClassVar[str] = "Invalid input."
    failure_status: ClassVar[HTTPStatus] = HTTPStatus.UNPROCESSABLE_ENTITY
    errors_key: ClassVar[str] = "errors"
    messages: ClassVar[dict[str, str]] = {}
    # field -> field it must equal; compared on the raw payload
    same_as: ClassVar[dict[str, str]] = {}

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def failure(cls, errors: FieldErrors) -> ValidationError:
        return ValidationError(
            merge_errors(errors, order=cls.model_fields),
            message=cls.failure_message,
            status=cls.failure_status,
            errors_key=cls.errors_key,
        )

    @classmethod
    def mismatched_fields(cls, payload: Mapping[str, Any]) -> FieldErrors:
        errors: dict[str, list[str]] = {}
        for field_name, other in cls.same_as.items():
            value = payload.get(field_name)
            if isinstance(value, str) and value and value != payload.get(other):
                default = f"The {field_name} must match {other}."
                errors[field_name] = [cls.messages.get(f"{field_name}.same", default)]
        return errors


SchemaT = TypeVar("SchemaT", bound=RequestSchema)


def validate_payload(
    schema: type[SchemaT],
    payload: Mapping[str, Any],
    *,
    checks: PayloadCheck | None = None,
) -> SchemaT:
    """Validate ``payload`` against ``schema`` and run extra ``checks``.

    ``checks`` receives the raw payload and returns additional field errors
    (e.g. uniqueness against the store). All errors are reported together,
    including a ``same_as`` mismatch when the compared field is itself invalid.

    Raises:
        ValidationError: at least one field failed.
    """
    extra_errors = merge_errors(
        schema.mismatched_fields(payload),
        checks(payload) if checks else {},
    )

    try:
        dto = schema.model_validate(payload)
    except PydanticValidationError as exc:
        shape_errors = format_pydantic_errors(exc, schema.messages)
        raise schema.failure(merge_errors(shape_errors, extra_errors)) from exc

    if extra_errors:
        raise schema.failure(extra_errors)

    return dto


__all__ = ["FieldErrors", "PayloadCheck", "RequestSchema", "validate_payload"]
