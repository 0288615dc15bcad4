# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    name: str
    username: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True, frozen=True)
class SessionToken:

    user_id: int
    token: str
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class UserPage:
    """One page of a user listing plus the numbers needed to walk the rest."""

    items: Sequence[User]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return math.ceil(self.total / self.per_page)
