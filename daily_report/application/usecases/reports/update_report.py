"""
===============================================================================
USE CASE: Update Daily Report
===============================================================================

Business Goal:
    Sobrescribir título, contenido, fecha y estado de un reporte propio.

Reglas:
    - Reporte inexistente => NOT_FOUND.
    - Solo el owner puede modificar (el supervisor solo lee) => FORBIDDEN.
    - submitted y sin submitted_at => submitted_at = now (se conserva si ya estaba).
    - draft => submitted_at = None siempre.
    - Mover la fecha sobre otro reporte del mismo usuario => CONFLICT.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    UpdateReportUseCase

Collaborators:
    - DailyReportRepository: find_by_id, exists_for_user_and_date, save
    - UserRepository: find_by_id
    - report_policy.can_mutate_report
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from ....crosscutting.exceptions import ReportConflictError
from ....crosscutting.logger import logger
from ....domain.entities import touch, utcnow
from ....domain.report_policy import can_mutate_report
from ....domain.repositories import DailyReportRepository, UserRepository
from .report_input import ReportInput, validate_report_input
from .report_results import (
    ReportResult,
    conflict_error,
    forbidden_error,
    not_found_error,
    to_view,
)


class UpdateReportUseCase:
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

    def execute(
        self, report_id: int, actor_id: int, data: ReportInput
    ) -> ReportResult:
        valid, error = validate_report_input(data)
        if error is not None:
            return ReportResult(error=error)

        report = self._reports.find_by_id(report_id)
        if report is None:
            return ReportResult(error=not_found_error())

        actor = self._users.find_by_id(actor_id)
        if actor is None or not can_mutate_report(actor, report):
            return ReportResult(error=forbidden_error())

        if valid.report_date != report.report_date and (
            self._reports.exists_for_user_and_date(report.user_id, valid.report_date)
        ):
            return ReportResult(error=conflict_error(valid.report_date))

        now = self._clock()
        report.title = valid.title
        report.work_content = valid.work_content
        report.report_date = valid.report_date
        report.apply_status(valid.status, now)
        report.timestamps = touch(report.timestamps, now)

        try:
            saved = self._reports.save(report)
        except ReportConflictError:
            return ReportResult(error=conflict_error(valid.report_date))

        logger.info(
            "Reporte actualizado",
            extra={
                "report_id": saved.id,
                "user_id": actor_id,
                "status": saved.status.value,
            },
        )
        return ReportResult(report=to_view(saved, actor))
