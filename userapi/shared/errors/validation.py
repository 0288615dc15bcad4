# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pydantic import ValidationError as PydanticValidationError


def format_pydantic_errors(
    exc: PydanticValidationError,
    messages: Mapping[str, str] | None = None,
) -> dict[str, list[str]]:
    """Collapse pydantic errors into ``{field: [message, ...]}``.

    ``messages`` overrides pydantic's default text per ``"<field>.<error type>"``
    key, e.g. ``{"name.missing": "Name is required."}``.
    """
    overrides = messages or {}
    errors: dict[str, list[str]] = {}

    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None) or "unknown"
        error_type = error.get("type", "value_error")

        message = overrides.get(f"{field_path}.{error_type}") or error.get("msg") or "Invalid value."
        bucket = errors.setdefault(field_path, [])
        if message not in bucket:
            bucket.append(message)

    return errors


def merge_errors(
    *sources: Mapping[str, Iterable[str]],
    order: Iterable[str] = (),
) -> dict[str, list[str]]:
    merged: dict[str, list[str]] = {}
    for source in sources:
        for field_path, field_messages in source.items():
            bucket = merged.setdefault(field_path, [])
            bucket.extend(m for m in field_messages if m not in bucket)

    ranking = {name: index for index, name in enumerate(order)}
    return dict(
        sorted(merged.items(), key=lambda item: ranking.get(item[0], len(ranking)))
    )


__all__ = [
    "format_pydantic_errors",
    "merge_errors",
]
