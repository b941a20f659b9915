"""
USER ADMIN USE CASES PACKAGE (Public API / Exports)
"""

from __future__ import annotations

from .manage_users import (
    CreateUserInput,
    CreateUserUseCase,
    DeleteUserUseCase,
    ListUsersUseCase,
    ToggleUserActiveUseCase,
    UpdateUserInput,
    UpdateUserUseCase,
)
from .user_results import (
    DeleteUserResult,
    UserError,
    UserErrorCode,
    UserListResult,
    UserResult,
)

__all__ = [
    "ListUsersUseCase",
    "CreateUserUseCase",
    "UpdateUserUseCase",
    "ToggleUserActiveUseCase",
    "DeleteUserUseCase",
    "CreateUserInput",
    "UpdateUserInput",
    "UserError",
    "UserErrorCode",
    "UserResult",
    "UserListResult",
    "DeleteUserResult",
]
