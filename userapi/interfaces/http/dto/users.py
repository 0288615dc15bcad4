# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from userapi.domain.users.entities import SessionToken, User, UserPage

EXPIRY_FORMAT = "%Y-%m-%d %H:%M:%S"


class UserDTO(BaseModel):
    """Public projection of a user; the password hash is never part of it."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    username: str
    email: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> UserDTO:
        return cls.model_validate(user)


class PageMetaDTO(BaseModel):
    current_page: int
    per_page: int
    total: int
    last_page: int


class UserListDTO(BaseModel):
    message: str = "Users retrieved successfully."
    data: list[UserDTO] = Field(default_factory=list)
    meta: PageMetaDTO

    @classmethod
    def from_page(cls, page: UserPage) -> UserListDTO:
        return cls(
            data=[UserDTO.from_entity(user) for user in page.items],
            meta=PageMetaDTO(
                current_page=page.page,
                per_page=page.per_page,
                total=page.total,
                last_page=page.last_page,
            ),
        )


class UserEnvelopeDTO(BaseModel):
    message: str
    data: UserDTO


class MessageDTO(BaseModel):
    message: str


class LoginDataDTO(BaseModel):
    token: str
    user: UserDTO
    expired_at: datetime

    @field_serializer("expired_at")
    def _format_expiry(self, value: datetime) -> str:
        return value.strftime(EXPIRY_FORMAT)


class LoginSuccessDTO(BaseModel):
    message: str = "Logged in successfully."
    data: LoginDataDTO

    @classmethod
    def build(cls, user: User, token: SessionToken) -> LoginSuccessDTO:
        return cls(
            data=LoginDataDTO(
                token=token.token,
                user=UserDTO.from_entity(user),
                expired_at=token.expires_at,
            )
        )


__all__ = [
    "EXPIRY_FORMAT",
    "LoginDataDTO",
    "LoginSuccessDTO",
    "MessageDTO",
    "PageMetaDTO",
    "UserDTO",
    "UserEnvelopeDTO",
    "UserListDTO",
]
