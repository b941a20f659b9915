"""
===============================================================================
USER ADMIN RULES (helpers compartidos)
===============================================================================

Responsabilidades:
  - Parsear rol.
  - Validar la asignación de supervisor (un solo nivel):
      * debe existir y estar activo
      * no puede ser el mismo usuario
      * no puede ser un subordinado directo del usuario (evita ciclos A<->B)
  - Validar unicidad de username / email.
  - Acotar email / display_name al largo de las columnas (001_foundation).

Colaboradores:
  - UserRepository (lookups por id / username / email)
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from ....domain.entities import UserRole
from ....domain.repositories import UserRepository
from .user_results import UserError, conflict_error, validation_error

# R: mismos límites que users.email / users.display_name en la migración.
EMAIL_MAX_CHARS = 255
DISPLAY_NAME_MAX_CHARS = 100


def parse_role(raw: Optional[str]) -> Optional[UserRole]:
    try:
        return UserRole((raw or "").strip().lower())
    except ValueError:
        return None


def check_supervisor(
    users: UserRepository,
    *,
    user_id: Optional[int],
    supervisor_id: Optional[int],
) -> Optional[UserError]:
    """None si la asignación es válida; UserError si no."""
    if supervisor_id is None:
        return None

    if user_id is not None and supervisor_id == user_id:
        return validation_error(
            "A user cannot supervise themselves.", "supervisor_id"
        )

    supervisor = users.find_by_id(supervisor_id)
    if supervisor is None or not supervisor.is_active:
        return validation_error(
            "Supervisor does not exist or is inactive.", "supervisor_id"
        )

    if user_id is not None and supervisor.supervisor_id == user_id:
        return validation_error(
            "Supervisor cannot be a subordinate of the user.", "supervisor_id"
        )
    return None


def check_unique(
    users: UserRepository,
    *,
    user_id: Optional[int],
    username: str,
    email: Optional[str],
) -> Optional[UserError]:
    holder = users.find_by_username(username)
    if holder is not None and holder.id != user_id:
        return conflict_error(f"Username '{username}' is already taken.")

    if email:
        holder = users.find_by_email(email)
        if holder is not None and holder.id != user_id:
            return conflict_error(f"Email '{email}' is already taken.")
    return None


def normalize_optional(value: Optional[str]) -> Optional[str]:
    cleaned = (value or "").strip()
    return cleaned or None


def check_lengths(
    *, email: Optional[str], display_name: Optional[str]
) -> Optional[UserError]:
    if email is not None and len(email) > EMAIL_MAX_CHARS:
        return validation_error(
            f"email must be at most {EMAIL_MAX_CHARS} characters.", "email"
        )
    if display_name is not None and len(display_name) > DISPLAY_NAME_MAX_CHARS:
        return validation_error(
            f"display_name must be at most {DISPLAY_NAME_MAX_CHARS} characters.",
            "display_name",
        )
    return None
