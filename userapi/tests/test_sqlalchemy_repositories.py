from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.orm import Session, sessionmaker

from userapi.domain.users.entities import User
from userapi.infrastructure.db import create_db_engine, create_session_factory, init_db
from userapi.infrastructure.db.models import SessionToken as SessionTokenRow
from userapi.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionTokenRepository,
    SqlAlchemyUserRepository,
)
from userapi.shared.config import DatabaseConfig
from userapi.shared.errors import StorageError


@pytest.fixture()
def session_factory() -> sessionmaker[Session]:
    engine = create_db_engine(DatabaseConfig(DATABASE_URL="sqlite://"))
    init_db(engine)
    return create_session_factory(engine)


@pytest.fixture()
def repo(session_factory: sessionmaker[Session]) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(session_factory)


def _new_user(username: str, *, name: str | None = None, email: str | None = None) -> User:
    now = datetime.now(UTC)
    return User(
        id=0,
        name=name or username.title(),
        username=username,
        email=email or f"{username}@example.com",
        password_hash="hash",
        created_at=now,
        updated_at=now,
    )


def test_add_assigns_id_and_round_trips(repo: SqlAlchemyUserRepository) -> None:
    created = repo.add(_new_user("alice"))

    assert created.id > 0
    assert repo.find_by_id(created.id) == created
    assert repo.find_by_username("alice") == created
    assert repo.username_exists("alice")
    assert repo.email_exists("alice@example.com")
    assert not repo.username_exists("bob")
    assert created.created_at.tzinfo is not None


def test_unique_constraints_raise_storage_error(repo: SqlAlchemyUserRepository) -> None:
    repo.add(_new_user("alice"))

    with pytest.raises(StorageError) as exc_info:
        repo.add(_new_user("alice", email="other@example.com"))
    assert "UNIQUE" in exc_info.value.detail

    with pytest.raises(StorageError):
        repo.add(_new_user("alice2", email="alice@example.com"))

    assert repo.search(None, page=1, per_page=10).total == 1


def test_search_is_case_insensitive_and_paginated(repo: SqlAlchemyUserRepository) -> None:
    repo.add(_new_user("bob", name="Robert Smith"))
    repo.add(_new_user("carol", email="carol@SMITHS.org"))
    repo.add(_new_user("dave"))
    repo.add(_new_user("smithy"))

    page = repo.search("SMITH", page=1, per_page=2)
    second = repo.search("SMITH", page=2, per_page=2)

    assert page.total == 3
    assert page.last_page == 2
    assert [u.username for u in page.items] == ["bob", "carol"]
    assert [u.username for u in second.items] == ["smithy"]


def test_search_treats_wildcards_literally(repo: SqlAlchemyUserRepository) -> None:
    repo.add(_new_user("under_score"))
    repo.add(_new_user("underxscore"))

    assert [u.username for u in repo.search("r_s", page=1, per_page=10).items] == ["under_score"]
    assert repo.search("%", page=1, per_page=10).total == 0


def test_save_and_delete(repo: SqlAlchemyUserRepository) -> None:
    alice = repo.add(_new_user("alice"))
    renamed = User(
        id=alice.id,
        name="Alice Liddell",
        username="alice",
        email="liddell@example.com",
        password_hash="new-hash",
        created_at=alice.created_at,
        updated_at=alice.updated_at + timedelta(seconds=1),
    )

    saved = repo.save(renamed)

    assert saved is not None
    assert saved.email == "liddell@example.com"
    assert repo.find_by_id(alice.id) == saved
    assert repo.save(_missing(saved)) is None

    assert repo.delete(alice.id) is True
    assert repo.find_by_id(alice.id) is None
    assert repo.delete(alice.id) is False


def _missing(user: User) -> User:
    return User(
        id=999,
        name=user.name,
        username=user.username,
        email=user.email,
        password_hash=user.password_hash,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def test_save_conflict_rolls_back(repo: SqlAlchemyUserRepository) -> None:
    repo.add(_new_user("alice"))
    bob = repo.add(_new_user("bob"))

    with pytest.raises(StorageError):
        repo.save(
            User(
                id=bob.id,
                name="Bob",
                username="alice",
                email=bob.email,
                password_hash=bob.password_hash,
                created_at=bob.created_at,
                updated_at=bob.updated_at,
            )
        )

    assert repo.find_by_id(bob.id) == bob


def test_tokens_are_stored_as_digests(
    repo: SqlAlchemyUserRepository, session_factory: sessionmaker[Session]
) -> None:
    alice = repo.add(_new_user("alice"))
    tokens = SqlAlchemySessionTokenRepository(
        session_factory, ttl=timedelta(minutes=5), token_bytes=32
    )

    issued = tokens.issue(alice.id)

    assert tokens.resolve(issued.token) == alice.id
    assert tokens.resolve("not-a-token") is None
    with session_factory() as session:
        digests = [row.token_digest for row in session.query(SessionTokenRow).all()]
    assert len(digests) == 1
    assert issued.token not in digests
    assert len(digests[0]) == 64


def test_revoke_removes_only_one_session(
    repo: SqlAlchemyUserRepository, session_factory: sessionmaker[Session]
) -> None:
    alice = repo.add(_new_user("alice"))
    tokens = SqlAlchemySessionTokenRepository(session_factory, ttl=timedelta(minutes=5))

    first = tokens.issue(alice.id)
    second = tokens.issue(alice.id)
    tokens.revoke(first.token)

    assert tokens.resolve(first.token) is None
    assert tokens.resolve(second.token) == alice.id


def test_expired_token_does_not_resolve(
    repo: SqlAlchemyUserRepository, session_factory: sessionmaker[Session]
) -> None:
    alice = repo.add(_new_user("alice"))
    tokens = SqlAlchemySessionTokenRepository(session_factory, ttl=timedelta(seconds=-5))

    expired = tokens.issue(alice.id)

    assert tokens.resolve(expired.token) is None


def test_delete_user_removes_tokens(
    repo: SqlAlchemyUserRepository, session_factory: sessionmaker[Session]
) -> None:
    alice = repo.add(_new_user("alice"))
    tokens = SqlAlchemySessionTokenRepository(session_factory, ttl=timedelta(minutes=5))
    issued = tokens.issue(alice.id)

    repo.delete(alice.id)

    assert tokens.resolve(issued.token) is None
    with session_factory() as session:
        assert session.query(SessionTokenRow).count() == 0
