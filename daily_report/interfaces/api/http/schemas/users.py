"""
===============================================================================
TARJETA CRC — schemas/users.py
===============================================================================

DTOs HTTP de usuarios: respuesta pública (sin password_hash), login y
administración (alta / edición).
===============================================================================
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .....application.usecases.auth import UserSummary
from .....application.usecases.users import CreateUserInput, UpdateUserInput
from .....application.usecases.users.user_rules import (
    DISPLAY_NAME_MAX_CHARS,
    EMAIL_MAX_CHARS,
)
from .....domain.entities import UserRole


class UserRes(BaseModel):
    id: int
    username: str
    email: str | None = None
    role: UserRole
    display_name: str | None = None
    supervisor_id: int | None = None
    is_active: bool = True

    @classmethod
    def from_summary(cls, summary: UserSummary) -> "UserRes":
        return cls(
            id=summary.id,
            username=summary.username,
            email=summary.email,
            role=summary.role,
            display_name=summary.display_name,
            supervisor_id=summary.supervisor_id,
            is_active=summary.is_active,
        )


class LoginReq(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=512)


class LoginRes(UserRes):
    """Token + datos del usuario (forma plana)."""

    token: str


class SessionRes(BaseModel):
    valid: bool


class CreateUserReq(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=512)
    role: str = Field(..., description="admin | supervisor | employee")
    email: str | None = Field(default=None, max_length=EMAIL_MAX_CHARS)
    display_name: str | None = Field(default=None, max_length=DISPLAY_NAME_MAX_CHARS)
    supervisor_id: int | None = None

    def to_input(self) -> CreateUserInput:
        return CreateUserInput(
            username=self.username,
            password=self.password,
            role=self.role,
            email=self.email,
            display_name=self.display_name,
            supervisor_id=self.supervisor_id,
        )


class UpdateUserReq(BaseModel):
    role: str = Field(..., description="admin | supervisor | employee")
    email: str | None = Field(default=None, max_length=EMAIL_MAX_CHARS)
    display_name: str | None = Field(default=None, max_length=DISPLAY_NAME_MAX_CHARS)
    supervisor_id: int | None = None
    password: str | None = Field(default=None, min_length=1, max_length=512)

    def to_input(self) -> UpdateUserInput:
        return UpdateUserInput(
            role=self.role,
            email=self.email,
            display_name=self.display_name,
            supervisor_id=self.supervisor_id,
            password=self.password,
        )
