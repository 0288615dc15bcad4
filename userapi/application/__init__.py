# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.admin.create_user import CreateUserUseCase
from .use_cases.admin.delete_user import DeleteUserUseCase
from .use_cases.admin.list_users import ListUsersUseCase
from .use_cases.admin.show_user import ShowUserUseCase
from .use_cases.admin.update_user import UpdateUserUseCase
from .use_cases.admin.update_user_password import UpdateUserPasswordUseCase
from .use_cases.users.login_user import LoginResult, LoginUserUseCase
from .use_cases.users.logout_user import LogoutUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "CreateUserUseCase",
    "DeleteUserUseCase",
    "ListUsersUseCase",
    "LoginResult",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "RegisterUserUseCase",
    "ShowUserUseCase",
    "UpdateUserPasswordUseCase",
    "UpdateUserUseCase",
]
