from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from conftest import InMemoryTokenRepository
from userapi.application.use_cases.users.login_user import LoginResult, LoginUserUseCase
from userapi.application.use_cases.users.register_user import RegisterUserUseCase
from userapi.domain.users.entities import SessionToken, User, UserPage
from userapi.domain.users.exceptions import SelfDeletionError, UserNotFoundError
from userapi.infrastructure.auth.middleware import BearerTokenAuthenticator
from userapi.interfaces.http.controllers.auth_controller import AuthController
from userapi.interfaces.http.controllers.users_controller import UsersController
from userapi.shared.errors import ValidationError
from userapi.shared.middleware.error_handler import configure_error_handling

NOW = datetime(2025, 3, 1, 12, 30, tzinfo=UTC)


def _user(user_id: int = 7, username: str = "alice") -> User:
    return User(
        id=user_id,
        name=username.title(),
        username=username,
        email=f"{username}@example.com",
        password_hash="pbkdf2:sha256:secret",
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


@pytest.fixture()
def session_tokens() -> InMemoryTokenRepository:
    return InMemoryTokenRepository()


@pytest.fixture()
def authenticator(session_tokens: InMemoryTokenRepository) -> BearerTokenAuthenticator:
    return BearerTokenAuthenticator(session_tokens)


def _auth_controller(authenticator: BearerTokenAuthenticator, **use_cases: Any) -> AuthController:
    return AuthController(
        register_use_case=use_cases.get("register", MagicMock()),
        login_use_case=use_cases.get("login", MagicMock()),
        logout_use_case=use_cases.get("logout", MagicMock()),
        authenticator=authenticator,
    )


def _users_controller(authenticator: BearerTokenAuthenticator, **use_cases: Any) -> UsersController:
    return UsersController(
        list_users=use_cases.get("list_users", MagicMock()),
        show_user=use_cases.get("show_user", MagicMock()),
        create_user=use_cases.get("create_user", MagicMock()),
        update_user=use_cases.get("update_user", MagicMock()),
        update_user_password=use_cases.get("update_user_password", MagicMock()),
        delete_user=use_cases.get("delete_user", MagicMock()),
        authenticator=authenticator,
    )


def test_register_endpoint_returns_message(
    flask_app: Flask, authenticator: BearerTokenAuthenticator
) -> None:
    received: dict[str, Any] = {}

    class StubRegister:
        def execute(self, payload: dict[str, Any]) -> User:
            received.update(payload)
            return _user()

    controller = _auth_controller(
        authenticator, register=cast(RegisterUserUseCase, StubRegister())
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/register", json={"username": "alice"})

    assert response.status_code == 200
    assert response.get_json() == {"message": "Register successfully. You can login now."}
    assert received == {"username": "alice"}


def test_register_validation_error_is_rendered(
    flask_app: Flask, authenticator: BearerTokenAuthenticator
) -> None:
    register = MagicMock()
    register.execute.side_effect = ValidationError({"name": ["Name is required."]})
    flask_app.register_blueprint(_auth_controller(authenticator, register=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/register", data="not json")

    assert response.status_code == 422
    assert response.get_json() == {
        "message": "Invalid input.",
        "errors": {"name": ["Name is required."]},
    }
    register.execute.assert_called_once_with({})


def test_login_endpoint_shapes_token_payload(
    flask_app: Flask, authenticator: BearerTokenAuthenticator
) -> None:
    expires_at = datetime(2025, 3, 2, 12, 30, 5, tzinfo=UTC)
    login = MagicMock()
    login.execute.return_value = LoginResult(
        user=_user(),
        token=SessionToken(user_id=7, token="opaque-token", expires_at=expires_at),
    )
    controller = _auth_controller(authenticator, login=cast(LoginUserUseCase, login))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/login", json={"username": "alice", "password": "secret123"})

    body = response.get_json()
    assert response.status_code == 200
    assert body["message"] == "Logged in successfully."
    assert body["data"]["token"] == "opaque-token"
    assert body["data"]["expired_at"] == "2025-03-02 12:30:05"
    assert body["data"]["user"]["username"] == "alice"
    assert "password_hash" not in body["data"]["user"]
    assert "password" not in body["data"]["user"]


def test_logout_requires_bearer_token(
    flask_app: Flask, authenticator: BearerTokenAuthenticator
) -> None:
    logout = MagicMock()
    flask_app.register_blueprint(_auth_controller(authenticator, logout=logout).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/logout")

    assert response.status_code == 401
    assert response.get_json() == {"message": "Unauthenticated."}
    assert response.headers["WWW-Authenticate"] == "Bearer"
    logout.execute.assert_not_called()


def test_logout_passes_presented_token(
    flask_app: Flask,
    authenticator: BearerTokenAuthenticator,
    session_tokens: InMemoryTokenRepository,
) -> None:
    token = session_tokens.issue(7)
    logout = MagicMock()
    flask_app.register_blueprint(_auth_controller(authenticator, logout=logout).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/logout", headers={"Authorization": f"Bearer {token.token}"})

    assert response.status_code == 200
    assert response.get_json() == {"message": "Logged out successfully."}
    logout.execute.assert_called_once_with(token.token)


def test_users_routes_reject_expired_token(flask_app: Flask) -> None:
    expiring_tokens = InMemoryTokenRepository(ttl=timedelta(seconds=-1))
    authenticator = BearerTokenAuthenticator(expiring_tokens)
    expired = expiring_tokens.issue(7)
    list_users = MagicMock()
    flask_app.register_blueprint(
        _users_controller(authenticator, list_users=list_users).as_blueprint()
    )

    with flask_app.test_client() as client:
        response = client.get("/api/users", headers={"Authorization": f"Bearer {expired.token}"})

    assert response.status_code == 401
    list_users.execute.assert_not_called()


def test_list_users_passes_actor_and_query(
    flask_app: Flask,
    authenticator: BearerTokenAuthenticator,
    session_tokens: InMemoryTokenRepository,
) -> None:
    token = session_tokens.issue(7)
    list_users = MagicMock()
    list_users.execute.return_value = UserPage(
        items=[_user(1, "bob"), _user(2, "carol")], total=5, page=1, per_page=2
    )
    flask_app.register_blueprint(
        _users_controller(authenticator, list_users=list_users).as_blueprint()
    )

    with flask_app.test_client() as client:
        response = client.get(
            "/api/users?search=o&per_page=2",
            headers={"Authorization": f"Bearer {token.token}"},
        )

    body = response.get_json()
    assert response.status_code == 200
    assert [user["id"] for user in body["data"]] == [1, 2]
    assert body["meta"] == {"current_page": 1, "per_page": 2, "total": 5, "last_page": 3}
    list_users.execute.assert_called_once_with(7, {"search": "o", "per_page": "2"})


def test_show_user_not_found(
    flask_app: Flask,
    authenticator: BearerTokenAuthenticator,
    session_tokens: InMemoryTokenRepository,
) -> None:
    token = session_tokens.issue(7)
    show_user = MagicMock()
    show_user.execute.side_effect = UserNotFoundError()
    flask_app.register_blueprint(
        _users_controller(authenticator, show_user=show_user).as_blueprint()
    )

    with flask_app.test_client() as client:
        response = client.get("/api/users/99", headers={"Authorization": f"Bearer {token.token}"})

    assert response.status_code == 404
    assert response.get_json() == {"message": "User not found."}
    show_user.execute.assert_called_once_with(7, 99)


def test_create_user_returns_201(
    flask_app: Flask,
    authenticator: BearerTokenAuthenticator,
    session_tokens: InMemoryTokenRepository,
) -> None:
    token = session_tokens.issue(7)
    create_user = MagicMock()
    create_user.execute.return_value = _user(8, "bob")
    flask_app.register_blueprint(
        _users_controller(authenticator, create_user=create_user).as_blueprint()
    )

    with flask_app.test_client() as client:
        response = client.post(
            "/api/users",
            json={"username": "bob"},
            headers={"Authorization": f"Bearer {token.token}"},
        )

    body = response.get_json()
    assert response.status_code == 201
    assert body["message"] == "User are successfully saved."
    assert body["data"]["id"] == 8
    assert set(body["data"]) == {"id", "name", "username", "email", "created_at", "updated_at"}


@pytest.mark.parametrize("method", ["put", "patch"])
def test_update_user_accepts_put_and_patch(
    method: str,
    flask_app: Flask,
    authenticator: BearerTokenAuthenticator,
    session_tokens: InMemoryTokenRepository,
) -> None:
    token = session_tokens.issue(7)
    update_user = MagicMock()
    update_user.execute.return_value = _user(8, "bobby")
    flask_app.register_blueprint(
        _users_controller(authenticator, update_user=update_user).as_blueprint()
    )

    with flask_app.test_client() as client:
        response = getattr(client, method)(
            "/api/users/8",
            json={"name": "Bobby", "username": "bobby"},
            headers={"Authorization": f"Bearer {token.token}"},
        )

    assert response.status_code == 200
    assert response.get_json()["message"] == "User are successfully updated."
    update_user.execute.assert_called_once_with(7, 8, {"name": "Bobby", "username": "bobby"})


def test_update_password_endpoint(
    flask_app: Flask,
    authenticator: BearerTokenAuthenticator,
    session_tokens: InMemoryTokenRepository,
) -> None:
    token = session_tokens.issue(7)
    update_password = MagicMock()
    flask_app.register_blueprint(
        _users_controller(authenticator, update_user_password=update_password).as_blueprint()
    )

    with flask_app.test_client() as client:
        response = client.patch(
            "/api/users/8/password",
            json={"password": "new-password", "confirm_password": "new-password"},
            headers={"Authorization": f"Bearer {token.token}"},
        )

    assert response.status_code == 200
    assert response.get_json() == {"message": "User password are successfully updated."}


def test_delete_user_forbidden_for_self(
    flask_app: Flask,
    authenticator: BearerTokenAuthenticator,
    session_tokens: InMemoryTokenRepository,
) -> None:
    token = session_tokens.issue(7)
    delete_user = MagicMock()
    delete_user.execute.side_effect = SelfDeletionError()
    flask_app.register_blueprint(
        _users_controller(authenticator, delete_user=delete_user).as_blueprint()
    )

    with flask_app.test_client() as client:
        response = client.delete(
            "/api/users/7",
            json={"confirm_password": "whatever1"},
            headers={"Authorization": f"Bearer {token.token}"},
        )

    assert response.status_code == 403
    assert response.get_json() == {"message": "You cannot delete your own account."}
    delete_user.execute.assert_called_once_with(7, 7, {"confirm_password": "whatever1"})


def test_unexpected_error_is_masked(
    flask_app: Flask,
    authenticator: BearerTokenAuthenticator,
    session_tokens: InMemoryTokenRepository,
) -> None:
    token = session_tokens.issue(7)
    show_user = MagicMock()
    show_user.execute.side_effect = RuntimeError("boom")
    flask_app.register_blueprint(
        _users_controller(authenticator, show_user=show_user).as_blueprint()
    )

    with flask_app.test_client() as client:
        response = client.get("/api/users/1", headers={"Authorization": f"Bearer {token.token}"})

    assert response.status_code == 500
    assert response.get_json() == {"message": "Server Error."}


def test_options_request_bypasses_bearer_check(
    flask_app: Flask, authenticator: BearerTokenAuthenticator
) -> None:
    list_users = MagicMock()
    flask_app.register_blueprint(
        _users_controller(authenticator, list_users=list_users).as_blueprint()
    )

    with flask_app.test_client() as client:
        response = client.options("/api/users")

    assert response.status_code == 200
    assert "GET" in response.headers["Allow"]
    list_users.execute.assert_not_called()
