from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from userapi.domain.users.entities import SessionToken, User, UserPage
from userapi.domain.users.repositories import PasswordHasher, SessionTokenRepository, UserRepository
from userapi.shared.config import AppConfig, AuthConfig, DatabaseConfig
from userapi.shared.errors import StorageError


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1
        self.fail_writes: str | None = None

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def find_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def username_exists(self, username: str) -> bool:
        return self.find_by_username(username) is not None

    def email_exists(self, email: str) -> bool:
        return any(u.email == email for u in self._users.values())

    def search(self, term: str | None, *, page: int, per_page: int) -> UserPage:
        users = sorted(self._users.values(), key=lambda u: u.id)
        if term:
            needle = term.lower()
            users = [
                u
                for u in users
                if needle in u.name.lower()
                or needle in u.username.lower()
                or needle in u.email.lower()
            ]
        start = (page - 1) * per_page
        return UserPage(
            items=users[start : start + per_page],
            total=len(users),
            page=page,
            per_page=per_page,
        )

    def add(self, user: User) -> User:
        if self.fail_writes:
            raise StorageError(self.fail_writes)
        created = replace(user, id=self._seq)
        self._seq += 1
        self._users[created.id] = created
        return created

    def save(self, user: User) -> User | None:
        if self.fail_writes:
            raise StorageError(self.fail_writes)
        if user.id not in self._users:
            return None
        self._users[user.id] = user
        return user

    def delete(self, user_id: int) -> bool:
        if self.fail_writes:
            raise StorageError(self.fail_writes)
        return self._users.pop(user_id, None) is not None


class InMemoryTokenRepository(SessionTokenRepository):
    def __init__(self, ttl: timedelta = timedelta(minutes=60)) -> None:
        self._tokens: dict[str, SessionToken] = {}
        self._seq = 1
        self._ttl = ttl

    def issue(self, user_id: int) -> SessionToken:
        token = SessionToken(
            user_id=user_id,
            token=f"token-{self._seq}",
            expires_at=datetime.now(UTC) + self._ttl,
        )
        self._seq += 1
        self._tokens[token.token] = token
        return token

    def resolve(self, token: str) -> int | None:
        found = self._tokens.get(token)
        if not found or found.expires_at <= datetime.now(UTC):
            return None
        return found.user_id

    def revoke(self, token: str) -> None:
        self._tokens.pop(token, None)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


def make_user(users: InMemoryUserRepository, username: str, **overrides: str) -> User:
    now = datetime.now(UTC)
    return users.add(
        User(
            id=0,
            name=overrides.get("name", username.title()),
            username=username,
            email=overrides.get("email", f"{username}@example.com"),
            password_hash=f"hashed:{overrides.get('password', 'secret123')}",
            created_at=now,
            updated_at=now,
        )
    )


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def tokens() -> InMemoryTokenRepository:
    return InMemoryTokenRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def app_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[AppConfig]:
    for name in ("ADMIN_USERNAME", "ADMIN_EMAIL", "ADMIN_PASSWORD", "API_PREFIX", "LOG_FILE"):
        monkeypatch.delenv(name, raising=False)

    yield AppConfig(
        APP_ENV="test",
        database=DatabaseConfig(DATABASE_URL="sqlite://"),
        auth=AuthConfig(PASSWORD_HASH_METHOD="pbkdf2:sha256:1000"),
    )
