"""
===============================================================================
TARJETA CRC — schemas/reports.py
===============================================================================

Módulo:
    Schemas HTTP para Reportes Diarios

Responsabilidades:
    - Definir DTOs de request/response para /api/daily-reports.
    - Solo validar TIPOS acá (fecha ISO, strings). Las reglas de negocio
      (largos, status permitido) las valida el caso de uso y vuelven como
      VALIDATION_ERROR con detalle por campo.

Colaboradores:
    - application.usecases.reports (ReportInput, ReportView, ReportSummary)
===============================================================================
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from .....application.usecases.reports import ReportInput, ReportSummary, ReportView
from .....domain.entities import ReportStatus


class ReportReq(BaseModel):
    """Request para crear / actualizar un reporte (PUT reemplaza todo)."""

    title: str | None = Field(default=None, description="Título (máx. 200)")
    work_content: str | None = Field(
        default=None, description="Contenido del trabajo (10 a 1000 caracteres)"
    )
    report_date: date | None = Field(default=None, description="Fecha del reporte")
    status: str | None = Field(default=None, description="draft | submitted")

    def to_input(self) -> ReportInput:
        return ReportInput(
            title=self.title,
            work_content=self.work_content,
            report_date=self.report_date,
            status=self.status,
        )


class ReportRes(BaseModel):
    id: int
    user_id: int
    username: str
    display_name: str | None = None
    title: str
    work_content: str
    status: ReportStatus
    report_date: date
    submitted_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: ReportView) -> "ReportRes":
        return cls(
            id=view.id,
            user_id=view.user_id,
            username=view.username,
            display_name=view.display_name,
            title=view.title,
            work_content=view.work_content,
            status=view.status,
            report_date=view.report_date,
            submitted_at=view.submitted_at,
            created_at=view.created_at,
            updated_at=view.updated_at,
        )


class ReportSummaryRes(BaseModel):
    """Fila de listado; work_content viene recortado (preview)."""

    id: int
    user_id: int
    username: str
    display_name: str | None = None
    title: str
    work_content: str
    status: ReportStatus
    report_date: date
    submitted_at: datetime | None = None
    created_at: datetime

    @classmethod
    def from_summary(cls, summary: ReportSummary) -> "ReportSummaryRes":
        return cls(
            id=summary.id,
            user_id=summary.user_id,
            username=summary.username,
            display_name=summary.display_name,
            title=summary.title,
            work_content=summary.work_content,
            status=summary.status,
            report_date=summary.report_date,
            submitted_at=summary.submitted_at,
            created_at=summary.created_at,
        )
