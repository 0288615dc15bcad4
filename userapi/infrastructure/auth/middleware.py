# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import g, request

from userapi.domain.users.exceptions import UnauthenticatedError
from userapi.domain.users.repositories import SessionTokenRepository
from userapi.shared.logging import logger

# CORS preflight carries no credentials
UNAUTHENTICATED_METHODS: tuple[str, ...] = ("OPTIONS",)


def bearer_token() -> str:
    auth_header = request.headers.get("Authorization", "")
    scheme, _, value = auth_header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return value.strip()


class BearerTokenAuthenticator:
    """Resolve the ``Authorization: Bearer`` header to the acting user.

    On success ``g.user_id`` and ``g.access_token`` are set for the rest of
    the request.
    """

    def __init__(self, tokens: SessionTokenRepository) -> None:
        self._tokens = tokens

    def authenticate(self) -> None:
        if request.method in UNAUTHENTICATED_METHODS:
            return

        token_value = bearer_token()
        if not token_value:
            logger.warning(f"No bearer token on {request.method} {request.path}")
            raise UnauthenticatedError()

        user_id = self._tokens.resolve(token_value)
        if user_id is None:
            token_hash = hashlib.sha256(token_value.encode()).hexdigest()[:8]
            logger.warning(
                f"Auth failed (token <hash:{token_hash}> not found/expired) on "
                f"{request.method} {request.path}"
            )
            raise UnauthenticatedError()

        g.user_id = user_id
        g.access_token = token_value
        logger.debug(f"Auth OK: user={user_id} {request.method} {request.path}")

    def required(self, func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            self.authenticate()
            return func(*args, **kwargs)

        return wrapper


__all__ = ["UNAUTHENTICATED_METHODS", "BearerTokenAuthenticator", "bearer_token"]
