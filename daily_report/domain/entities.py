"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (User, DailyReport, Timestamps, TokenClaims)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Brindar helpers mínimos para mantener invariantes simples
      (submitted_at <=> status == submitted).
    - Mantener tipos claros para casos de uso y repositorios.

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - domain.report_policy: decide permisos a partir de User/DailyReport.
    - application/usecases: construyen/consumen estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - Timestamps es un valor compuesto; stamp_new()/touch() son funciones puras
      aplicadas al escribir (sin clase base ni hooks de ciclo de vida).
    - El supervisor es un id (lookup en el repositorio), nunca una referencia
      a otro objeto User.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional


def utcnow() -> datetime:
    """Fecha/hora UTC (reloj por defecto de casos de uso y tokens)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Timestamps:
    """Marcas de creación/actualización embebidas en cada entidad."""

    created_at: datetime
    updated_at: datetime


def stamp_new(now: datetime) -> Timestamps:
    """Timestamps para una entidad recién creada."""
    return Timestamps(created_at=now, updated_at=now)


def touch(timestamps: Timestamps, now: datetime) -> Timestamps:
    """Devuelve timestamps con updated_at avanzado; created_at no cambia."""
    return replace(timestamps, updated_at=now)


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------


class UserRole(str, Enum):
    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    EMPLOYEE = "employee"


@dataclass
class User:
    """
    Usuario del sistema.

    Importante:
      - password_hash es opaco (lo interpreta el CredentialVerifier).
      - id es None hasta que el repositorio lo persiste.
    """

    id: Optional[int]
    username: str
    password_hash: str
    role: UserRole
    timestamps: Timestamps
    email: Optional[str] = None
    display_name: Optional[str] = None
    supervisor_id: Optional[int] = None
    is_active: bool = True


# ---------------------------------------------------------------------------
# DailyReport
# ---------------------------------------------------------------------------


class ReportStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"


@dataclass
class DailyReport:
    """
    Reporte diario de un usuario.

    Invariantes:
      - submitted_at is not None <=> status == SUBMITTED
      - (user_id, report_date) único; lo garantiza el repositorio
      - user_id no cambia después de la creación
    """

    id: Optional[int]
    user_id: int
    title: str
    work_content: str
    status: ReportStatus
    report_date: date
    timestamps: Timestamps
    submitted_at: Optional[datetime] = None

    @property
    def is_submitted(self) -> bool:
        return self.status == ReportStatus.SUBMITTED

    def apply_status(self, status: ReportStatus, now: datetime) -> None:
        """
        Transición draft <-> submitted.

        - submitted conserva el submitted_at original si ya existía.
        - draft limpia submitted_at siempre.
        """
        self.status = status
        if status == ReportStatus.SUBMITTED:
            if self.submitted_at is None:
                self.submitted_at = now
        else:
            self.submitted_at = None


# ---------------------------------------------------------------------------
# Token claims (transitorio, nunca se persiste)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TokenClaims:
    subject: str
    role: str
    issued_at: datetime
    expires_at: datetime
