"""
===============================================================================
USE CASE: Create Daily Report
===============================================================================

Business Goal:
    Registrar el reporte diario del actor para una fecha, respetando la regla
    de un reporte por usuario y día.

Why (Context / Intención):
    - El chequeo previo (exists_for_user_and_date) da un error claro en el caso
      común; el constraint del repositorio (ReportConflictError) cubre la
      carrera entre dos creates concurrentes.
    - submitted_at se setea solo si el reporte nace como "submitted".

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateReportUseCase

Responsibilities:
    - Validar el input antes de tocar repositorios.
    - Rechazar duplicados (CONFLICT) y actores inexistentes (UNKNOWN_USER).
    - Persistir y devolver ReportView con datos del owner.

Collaborators:
    - DailyReportRepository: exists_for_user_and_date, save
    - UserRepository: find_by_id
    - report_input.validate_report_input
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from ....crosscutting.exceptions import ReportConflictError
from ....crosscutting.logger import logger
from ....domain.entities import DailyReport, ReportStatus, stamp_new, utcnow
from ....domain.repositories import DailyReportRepository, UserRepository
from .report_input import ReportInput, validate_report_input
from .report_results import (
    ReportResult,
    conflict_error,
    to_view,
    unknown_user_error,
)


class CreateReportUseCase:
    def __init__(
        self,
        report_repository: DailyReportRepository,
        user_repository: UserRepository,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._reports = report_repository
        self._users = user_repository
        self._clock = clock or utcnow

    def execute(self, actor_id: int, data: ReportInput) -> ReportResult:
        # 1) Validación de input (sin I/O)
        valid, error = validate_report_input(data)
        if error is not None:
            return ReportResult(error=error)

        # 2) Un reporte por usuario y día
        if self._reports.exists_for_user_and_date(actor_id, valid.report_date):
            return ReportResult(error=conflict_error(valid.report_date))

        # 3) El actor tiene que existir
        owner = self._users.find_by_id(actor_id)
        if owner is None:
            return ReportResult(error=unknown_user_error())

        # 4) Construir y persistir
        now = self._clock()
        report = DailyReport(
            id=None,
            user_id=actor_id,
            title=valid.title,
            work_content=valid.work_content,
            status=ReportStatus.DRAFT,
            report_date=valid.report_date,
            timestamps=stamp_new(now),
        )
        report.apply_status(valid.status, now)

        try:
            saved = self._reports.save(report)
        except ReportConflictError:
            # R: otro request ganó la carrera entre el chequeo y el insert.
            return ReportResult(error=conflict_error(valid.report_date))

        logger.info(
            "Reporte creado",
            extra={
                "report_id": saved.id,
                "user_id": actor_id,
                "status": saved.status.value,
            },
        )
        return ReportResult(report=to_view(saved, owner))
