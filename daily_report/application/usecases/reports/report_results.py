"""
===============================================================================
REPORT USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Business Goal:
    Proveer modelos compartidos de resultados y errores para los casos de uso
    de reportes diarios, con un contrato estable y explícito para:
      - validaciones
      - autorización
      - recursos no encontrados
      - duplicados (un reporte por usuario y día)

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar excepciones
      “hacia afuera”. FORBIDDEN se mantiene distinto de NOT_FOUND acá; es la
      capa HTTP la que decide ocultarlo como 404.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    report_results models (module)

Responsibilities:
    - ReportErrorCode / ReportError (code + message + details).
    - ReportView (detalle con datos del owner) y ReportSummary (fila de listado
      con preview del contenido).
    - Resultados: ReportResult, ReportListResult, DeleteReportResult,
      TodayReportResult.

Collaborators:
    - domain.entities.DailyReport, User
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from ....domain.entities import DailyReport, ReportStatus, User

PREVIEW_MAX_CHARS = 100
PREVIEW_ELLIPSIS = "..."


class ReportErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: inputs inválidos o incompletos.
      - NOT_FOUND: reporte inexistente.
      - FORBIDDEN: el actor no puede ver/modificar el reporte.
      - CONFLICT: ya existe un reporte para (usuario, fecha).
      - UNKNOWN_USER: el actor no existe en el repositorio de usuarios.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    UNKNOWN_USER = "UNKNOWN_USER"


@dataclass(frozen=True)
class ReportError:
    code: ReportErrorCode
    message: str
    # R: detalle por campo para VALIDATION_ERROR ([{"field": ..., "msg": ...}]).
    details: List[Dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class ReportView:
    """Reporte completo + datos del owner (username / display_name)."""

    id: int
    user_id: int
    username: str
    display_name: Optional[str]
    title: str
    work_content: str
    status: ReportStatus
    report_date: date
    submitted_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ReportSummary:
    """Fila de listado: como ReportView pero con work_content recortado."""

    id: int
    user_id: int
    username: str
    display_name: Optional[str]
    title: str
    work_content: str
    status: ReportStatus
    report_date: date
    submitted_at: Optional[datetime]
    created_at: datetime


def preview(work_content: str) -> str:
    """Más de 100 caracteres => primeros 100 + '...'; si no, sin cambios."""
    if len(work_content) > PREVIEW_MAX_CHARS:
        return work_content[:PREVIEW_MAX_CHARS] + PREVIEW_ELLIPSIS
    return work_content


def to_view(report: DailyReport, owner: User) -> ReportView:
    return ReportView(
        id=report.id,
        user_id=report.user_id,
        username=owner.username,
        display_name=owner.display_name,
        title=report.title,
        work_content=report.work_content,
        status=report.status,
        report_date=report.report_date,
        submitted_at=report.submitted_at,
        created_at=report.timestamps.created_at,
        updated_at=report.timestamps.updated_at,
    )


def to_summary(report: DailyReport, owner: User) -> ReportSummary:
    return ReportSummary(
        id=report.id,
        user_id=report.user_id,
        username=owner.username,
        display_name=owner.display_name,
        title=report.title,
        work_content=preview(report.work_content),
        status=report.status,
        report_date=report.report_date,
        submitted_at=report.submitted_at,
        created_at=report.timestamps.created_at,
    )


@dataclass
class ReportResult:
    """
    Contrato:
      - error is None => report presente
      - error != None => report None
    """

    report: ReportView | None = None
    error: ReportError | None = None


@dataclass
class ReportListResult:
    reports: List[ReportSummary] = field(default_factory=list)
    error: ReportError | None = None


@dataclass
class DeleteReportResult:
    deleted: bool = False
    error: ReportError | None = None


@dataclass
class TodayReportResult:
    exists: bool = False
    error: ReportError | None = None


# ---------------------------------------------------------------------------
# Factories de error (evitan mensajes inconsistentes entre casos de uso)
# ---------------------------------------------------------------------------
def not_found_error() -> ReportError:
    return ReportError(code=ReportErrorCode.NOT_FOUND, message="Report not found.")


def forbidden_error() -> ReportError:
    return ReportError(code=ReportErrorCode.FORBIDDEN, message="Access denied.")


def conflict_error(report_date: date) -> ReportError:
    return ReportError(
        code=ReportErrorCode.CONFLICT,
        message=f"A report for {report_date.isoformat()} already exists.",
    )


def unknown_user_error() -> ReportError:
    return ReportError(code=ReportErrorCode.UNKNOWN_USER, message="User not found.")
