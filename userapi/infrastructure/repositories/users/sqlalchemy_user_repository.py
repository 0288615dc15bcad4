# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy import or_
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session

from userapi.domain.users.entities import SessionToken as DomainSessionToken
from userapi.domain.users.entities import User as DomainUser
from userapi.domain.users.entities import UserPage
from userapi.domain.users.repositories import SessionTokenRepository, UserRepository
from userapi.infrastructure.db.models import SessionToken, User
from userapi.infrastructure.unit_of_work import unit_of_work_scope
from userapi.shared.errors import StorageError
from userapi.shared.logging import logger


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _failure_detail(exc: SQLAlchemyError) -> str:
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        name=row.name,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def find_by_username(self, username: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.query(User).filter(User.username == username).first()
            return _to_domain(row) if row else None

    def username_exists(self, username: str) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            return session.query(User.id).filter(User.username == username).first() is not None

    def email_exists(self, email: str) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            return session.query(User.id).filter(User.email == email).first() is not None

    def search(self, term: str | None, *, page: int, per_page: int) -> UserPage:
        with unit_of_work_scope(self._session_factory) as session:
            query = session.query(User)

            if term:
                pattern = f"%{_escape_like(term)}%"
                query = query.filter(
                    or_(
                        User.name.ilike(pattern, escape="\\"),
                        User.username.ilike(pattern, escape="\\"),
                        User.email.ilike(pattern, escape="\\"),
                    )
                )

            total = query.count()
            rows = (
                query.order_by(User.id.asc())
                .offset((page - 1) * per_page)
                .limit(per_page)
                .all()
            )
            items = [_to_domain(row) for row in rows]

        return UserPage(items=items, total=total, page=page, per_page=per_page)

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(
                    name=user.name,
                    username=user.username,
                    email=user.email,
                    password_hash=user.password_hash,
                    created_at=user.created_at,
                    updated_at=user.updated_at,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                created = _to_domain(row)
        except SQLAlchemyError as exc:
            logger.warning(f"users.add: rolled back ({type(exc).__name__})")
            raise StorageError(_failure_detail(exc)) from exc
        return created

    def save(self, user: DomainUser) -> DomainUser | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(User, user.id)
                if row is None:
                    return None
                row.name = user.name
                row.username = user.username
                row.email = user.email
                row.password_hash = user.password_hash
                row.updated_at = user.updated_at
                session.flush()
                saved = _to_domain(row)
        except SQLAlchemyError as exc:
            logger.warning(f"users.save: rolled back user_id={user.id} ({type(exc).__name__})")
            raise StorageError(_failure_detail(exc)) from exc
        return saved

    def delete(self, user_id: int) -> bool:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(User, user_id)
                if row is None:
                    return False
                session.query(SessionToken).filter(SessionToken.user_id == user_id).delete(
                    synchronize_session=False
                )
                session.delete(row)
        except SQLAlchemyError as exc:
            logger.warning(f"users.delete: rolled back user_id={user_id} ({type(exc).__name__})")
            raise StorageError(_failure_detail(exc)) from exc
        return True


def _digest(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class SqlAlchemySessionTokenRepository(SessionTokenRepository):
    """Opaque bearer tokens; only a SHA-256 digest of each token is stored."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        ttl: timedelta,
        token_bytes: int = 40,
    ) -> None:
        self._session_factory = session_factory
        self._ttl = ttl
        self._token_bytes = token_bytes

    def issue(self, user_id: int) -> DomainSessionToken:
        token_value = secrets.token_urlsafe(self._token_bytes)
        expires_at = datetime.now(UTC) + self._ttl
        with unit_of_work_scope(self._session_factory) as session:
            session.add(
                SessionToken(
                    user_id=user_id,
                    token_digest=_digest(token_value),
                    expires_at=expires_at,
                )
            )

        logger.info(f"Issued token for user={user_id} exp={expires_at.isoformat()}")
        return DomainSessionToken(user_id=user_id, token=token_value, expires_at=expires_at)

    def resolve(self, token: str) -> int | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = (
                session.query(SessionToken)
                .filter(SessionToken.token_digest == _digest(token))
                .first()
            )
            if not row:
                return None
            if _as_utc(row.expires_at) <= datetime.now(UTC):
                logger.debug(f"Token expired for user={row.user_id}")
                return None
            return row.user_id

    def revoke(self, token: str) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            removed = (
                session.query(SessionToken)
                .filter(SessionToken.token_digest == _digest(token))
                .delete(synchronize_session=False)
            )
        logger.info(f"Revoked {removed} token(s)")
