# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from userapi.application.services.password_hashing import WerkzeugPasswordHasher
from userapi.application.use_cases.admin.create_user import CreateUserUseCase
from userapi.application.use_cases.admin.delete_user import DeleteUserUseCase
from userapi.application.use_cases.admin.list_users import ListUsersUseCase
from userapi.application.use_cases.admin.show_user import ShowUserUseCase
from userapi.application.use_cases.admin.update_user import UpdateUserUseCase
from userapi.application.use_cases.admin.update_user_password import UpdateUserPasswordUseCase
from userapi.application.use_cases.users.login_user import LoginUserUseCase
from userapi.application.use_cases.users.logout_user import LogoutUserUseCase
from userapi.application.use_cases.users.register_user import RegisterUserUseCase
from userapi.infrastructure.admin_setup import AdminSetup
from userapi.infrastructure.auth.middleware import BearerTokenAuthenticator
from userapi.infrastructure.db import create_db_engine, create_session_factory
from userapi.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionTokenRepository,
    SqlAlchemyUserRepository,
)
from userapi.interfaces.http.controllers.auth_controller import AuthController
from userapi.interfaces.http.controllers.users_controller import UsersController
from userapi.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    @cached_property
    def engine(self) -> Engine:
        return create_db_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return create_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self.config.auth.password_hash_method)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def session_token_repository(self) -> SqlAlchemySessionTokenRepository:
        return SqlAlchemySessionTokenRepository(
            self.session_factory,
            ttl=timedelta(minutes=self.config.auth.token_expiration_minutes),
            token_bytes=self.config.auth.token_bytes,
        )

    @cached_property
    def authenticator(self) -> BearerTokenAuthenticator:
        return BearerTokenAuthenticator(self.session_token_repository)

    @cached_property
    def admin_setup(self) -> AdminSetup:
        return AdminSetup(
            config=self.config.admin,
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    # Auth use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.session_token_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(tokens=self.session_token_repository)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            authenticator=self.authenticator,
            url_prefix=self.config.api_prefix,
        )

    # User management use cases

    @cached_property
    def list_users_use_case(self) -> ListUsersUseCase:
        return ListUsersUseCase(users=self.user_repository)

    @cached_property
    def show_user_use_case(self) -> ShowUserUseCase:
        return ShowUserUseCase(users=self.user_repository)

    @cached_property
    def create_user_use_case(self) -> CreateUserUseCase:
        return CreateUserUseCase(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def update_user_use_case(self) -> UpdateUserUseCase:
        return UpdateUserUseCase(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def update_user_password_use_case(self) -> UpdateUserPasswordUseCase:
        return UpdateUserPasswordUseCase(
            users=self.user_repository, password_hasher=self.password_hasher
        )

    @cached_property
    def delete_user_use_case(self) -> DeleteUserUseCase:
        return DeleteUserUseCase(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            list_users=self.list_users_use_case,
            show_user=self.show_user_use_case,
            create_user=self.create_user_use_case,
            update_user=self.update_user_use_case,
            update_user_password=self.update_user_password_use_case,
            delete_user=self.delete_user_use_case,
            authenticator=self.authenticator,
            url_prefix=self.config.api_prefix,
        )


__all__ = ["Container"]
