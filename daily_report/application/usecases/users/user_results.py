"""
===============================================================================
USER ADMIN USE CASE RESULTS
===============================================================================

Modelos compartidos por los casos de uso de administración de usuarios
(solo admin). Reutilizan UserSummary del paquete auth para no exponer nunca
password_hash.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from ..auth.auth_results import UserSummary


class UserErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class UserError:
    code: UserErrorCode
    message: str
    details: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class UserResult:
    user: UserSummary | None = None
    error: UserError | None = None


@dataclass
class UserListResult:
    users: List[UserSummary] = field(default_factory=list)
    error: UserError | None = None


@dataclass
class DeleteUserResult:
    deleted: bool = False
    error: UserError | None = None


def forbidden_error() -> UserError:
    return UserError(code=UserErrorCode.FORBIDDEN, message="Admin role required.")


def not_found_error() -> UserError:
    return UserError(code=UserErrorCode.NOT_FOUND, message="User not found.")


def validation_error(message: str, field_name: str | None = None) -> UserError:
    details = [{"field": field_name, "msg": message}] if field_name else []
    return UserError(
        code=UserErrorCode.VALIDATION_ERROR, message=message, details=details
    )


def conflict_error(message: str) -> UserError:
    return UserError(code=UserErrorCode.CONFLICT, message=message)
