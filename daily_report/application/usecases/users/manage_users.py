"""
===============================================================================
USE CASES: User Administration (admin only)
===============================================================================

Business Goal:
    Alta, edición, activación/desactivación, borrado y listado de usuarios.

Reglas comunes:
    - Solo actores con rol ADMIN (is_role) => sino FORBIDDEN.
    - Passwords se hashean con el CredentialVerifier; nunca se devuelven.
    - Supervisor: existente, activo, distinto del usuario y no subordinado
      del usuario.
    - Un admin no puede desactivarse ni borrarse a sí mismo.
    - No se desactiva a un usuario con subordinados directos (hay que
      reasignarlos antes).
    - Borrar un usuario borra sus reportes; sus subordinados quedan sin
      supervisor.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Classes:
    ListUsersUseCase, CreateUserUseCase, UpdateUserUseCase,
    ToggleUserActiveUseCase, DeleteUserUseCase

Collaborators:
    - UserRepository / DailyReportRepository
    - identity.credentials.CredentialVerifier
    - domain.report_policy.is_role
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ....crosscutting.logger import logger
from ....domain.entities import User, UserRole, stamp_new, touch, utcnow
from ....domain.report_policy import is_role
from ....domain.repositories import DailyReportRepository, UserRepository
from ....identity.credentials import CredentialVerifier
from ..auth.auth_results import UserSummary
from .user_results import (
    DeleteUserResult,
    UserListResult,
    UserResult,
    forbidden_error,
    not_found_error,
    validation_error,
)
from .user_rules import (
    check_lengths,
    check_supervisor,
    check_unique,
    normalize_optional,
    parse_role,
)

USERNAME_MAX_CHARS = 50


@dataclass(frozen=True)
class CreateUserInput:
    username: str
    password: str
    role: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    supervisor_id: Optional[int] = None


@dataclass(frozen=True)
class UpdateUserInput:
    """Reemplazo completo de los campos editables (password opcional)."""

    role: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    supervisor_id: Optional[int] = None
    password: Optional[str] = None


class ListUsersUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, actor: User) -> UserListResult:
        if not is_role(actor, UserRole.ADMIN):
            return UserListResult(error=forbidden_error())
        return UserListResult(
            users=[UserSummary.from_user(u) for u in self._users.list_users()]
        )


class CreateUserUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        credential_verifier: CredentialVerifier,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._users = user_repository
        self._verifier = credential_verifier
        self._clock = clock or utcnow

    def execute(self, actor: User, data: CreateUserInput) -> UserResult:
        if not is_role(actor, UserRole.ADMIN):
            return UserResult(error=forbidden_error())

        username = (data.username or "").strip()
        if not username or len(username) > USERNAME_MAX_CHARS:
            return UserResult(
                error=validation_error(
                    f"username is required (max {USERNAME_MAX_CHARS} characters).",
                    "username",
                )
            )
        if not data.password:
            return UserResult(error=validation_error("password is required.", "password"))

        role = parse_role(data.role)
        if role is None:
            return UserResult(error=validation_error("Unknown role.", "role"))

        email = normalize_optional(data.email)
        display_name = normalize_optional(data.display_name)
        error = check_lengths(email=email, display_name=display_name)
        if error is None:
            error = check_unique(
                self._users, user_id=None, username=username, email=email
            )
        if error is None:
            error = check_supervisor(
                self._users, user_id=None, supervisor_id=data.supervisor_id
            )
        if error is not None:
            return UserResult(error=error)

        user = self._users.save(
            User(
                id=None,
                username=username,
                email=email,
                password_hash=self._verifier.hash(data.password),
                role=role,
                display_name=display_name,
                supervisor_id=data.supervisor_id,
                is_active=True,
                timestamps=stamp_new(self._clock()),
            )
        )
        logger.info("Usuario creado", extra={"user_id": user.id, "actor_id": actor.id})
        return UserResult(user=UserSummary.from_user(user))


class UpdateUserUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        credential_verifier: CredentialVerifier,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._users = user_repository
        self._verifier = credential_verifier
        self._clock = clock or utcnow

    def execute(self, actor: User, user_id: int, data: UpdateUserInput) -> UserResult:
        if not is_role(actor, UserRole.ADMIN):
            return UserResult(error=forbidden_error())

        user = self._users.find_by_id(user_id)
        if user is None:
            return UserResult(error=not_found_error())

        role = parse_role(data.role)
        if role is None:
            return UserResult(error=validation_error("Unknown role.", "role"))

        email = normalize_optional(data.email)
        display_name = normalize_optional(data.display_name)
        error = check_lengths(email=email, display_name=display_name)
        if error is None:
            error = check_unique(
                self._users, user_id=user.id, username=user.username, email=email
            )
        if error is None:
            error = check_supervisor(
                self._users, user_id=user.id, supervisor_id=data.supervisor_id
            )
        if error is not None:
            return UserResult(error=error)

        user.email = email
        user.display_name = display_name
        user.role = role
        user.supervisor_id = data.supervisor_id
        if data.password:
            user.password_hash = self._verifier.hash(data.password)
        user.timestamps = touch(user.timestamps, self._clock())

        saved = self._users.save(user)
        logger.info("Usuario actualizado", extra={"user_id": saved.id, "actor_id": actor.id})
        return UserResult(user=UserSummary.from_user(saved))


class ToggleUserActiveUseCase:
    """Soft delete: invierte is_active. No desactiva a quien todavía supervisa usuarios."""

    def __init__(
        self,
        user_repository: UserRepository,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._users = user_repository
        self._clock = clock or utcnow

    def execute(self, actor: User, user_id: int) -> UserResult:
        if not is_role(actor, UserRole.ADMIN):
            return UserResult(error=forbidden_error())
        if actor.id == user_id:
            return UserResult(error=validation_error("Admins cannot deactivate themselves."))

        user = self._users.find_by_id(user_id)
        if user is None:
            return UserResult(error=not_found_error())

        # R: supervisor_id siempre apunta a un usuario activo.
        if user.is_active and self._users.find_by_supervisor_id(user.id):
            return UserResult(
                error=validation_error(
                    "User still supervises other users; reassign them first."
                )
            )

        user.is_active = not user.is_active
        user.timestamps = touch(user.timestamps, self._clock())
        saved = self._users.save(user)
        logger.info(
            "Usuario activado/desactivado",
            extra={"user_id": saved.id, "is_active": saved.is_active, "actor_id": actor.id},
        )
        return UserResult(user=UserSummary.from_user(saved))


class DeleteUserUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        report_repository: DailyReportRepository,
    ) -> None:
        self._users = user_repository
        self._reports = report_repository

    def execute(self, actor: User, user_id: int) -> DeleteUserResult:
        if not is_role(actor, UserRole.ADMIN):
            return DeleteUserResult(error=forbidden_error())
        if actor.id == user_id:
            return DeleteUserResult(error=validation_error("Admins cannot delete themselves."))

        user = self._users.find_by_id(user_id)
        if user is None:
            return DeleteUserResult(error=not_found_error())

        # R: en Postgres lo cubre el FK con CASCADE; el store en memoria no lo tiene.
        for report in self._reports.find_by_user(user.id):
            self._reports.delete(report)
        self._users.delete(user)

        logger.info("Usuario eliminado", extra={"user_id": user_id, "actor_id": actor.id})
        return DeleteUserResult(deleted=True)
