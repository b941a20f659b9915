"""
AUTH USE CASES PACKAGE (Public API / Exports)
"""

from __future__ import annotations

from .auth_results import (
    INVALID_CREDENTIALS_MESSAGE,
    AuthError,
    AuthErrorCode,
    CurrentUserResult,
    LoginResult,
    SessionResult,
    UserSummary,
)
from .login import LoginUseCase
from .session import CurrentUserUseCase, ValidateSessionUseCase

__all__ = [
    "LoginUseCase",
    "ValidateSessionUseCase",
    "CurrentUserUseCase",
    "AuthError",
    "AuthErrorCode",
    "LoginResult",
    "SessionResult",
    "CurrentUserResult",
    "UserSummary",
    "INVALID_CREDENTIALS_MESSAGE",
]
