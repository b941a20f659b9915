"""
===============================================================================
AUTH USE CASE RESULTS
===============================================================================

Modelos de resultado para login / validación de sesión / usuario actual.

Decisiones:
    - Un solo código para cualquier fallo de login (INVALID_CREDENTIALS) y un
      solo mensaje: no se distingue "usuario inexistente" de "password
      incorrecto" ni de "usuario inactivo".
    - UserSummary nunca incluye password_hash.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ....domain.entities import User, UserRole

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password."


class AuthErrorCode(str, Enum):
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    UNAUTHENTICATED = "UNAUTHENTICATED"


@dataclass(frozen=True)
class AuthError:
    code: AuthErrorCode
    message: str


@dataclass(frozen=True)
class UserSummary:
    id: int
    username: str
    email: Optional[str]
    role: UserRole
    display_name: Optional[str]
    supervisor_id: Optional[int]
    is_active: bool = True

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role,
            display_name=user.display_name,
            supervisor_id=user.supervisor_id,
            is_active=user.is_active,
        )


@dataclass
class LoginResult:
    token: str | None = None
    user: UserSummary | None = None
    error: AuthError | None = None


@dataclass
class SessionResult:
    valid: bool = False
    error: AuthError | None = None


@dataclass
class CurrentUserResult:
    user: UserSummary | None = None
    error: AuthError | None = None


def invalid_credentials() -> AuthError:
    return AuthError(
        code=AuthErrorCode.INVALID_CREDENTIALS, message=INVALID_CREDENTIALS_MESSAGE
    )


def unauthenticated(message: str = "Authentication required.") -> AuthError:
    return AuthError(code=AuthErrorCode.UNAUTHENTICATED, message=message)
