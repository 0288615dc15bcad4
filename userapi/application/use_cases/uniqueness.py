# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from userapi.application.schemas.base import FieldErrors, PayloadCheck
from userapi.domain.users.repositories import UserRepository


def unique_identity_check(users: UserRepository, messages: Mapping[str, str]) -> PayloadCheck:
    """Build a payload check reporting a taken ``username`` or ``email``."""

    def check(payload: Mapping[str, Any]) -> FieldErrors:
        errors: dict[str, list[str]] = {}

        username = payload.get("username")
        if isinstance(username, str) and username and users.username_exists(username):
            errors["username"] = [messages["username.unique"]]

        email = payload.get("email")
        if isinstance(email, str) and email and users.email_exists(email):
            errors["email"] = [messages["email.unique"]]

        return errors

    return check


__all__ = ["unique_identity_check"]
