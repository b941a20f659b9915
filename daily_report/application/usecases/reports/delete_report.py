"""
===============================================================================
USE CASE: Delete Daily Report
===============================================================================

Business Goal:
    Borrado físico de un reporte propio. Mismos chequeos que update:
    inexistente => NOT_FOUND, no-owner => FORBIDDEN.

Collaborators:
    - DailyReportRepository: find_by_id, delete
    - UserRepository: find_by_id
    - report_policy.can_mutate_report
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.report_policy import can_mutate_report
from ....domain.repositories import DailyReportRepository, UserRepository
from .report_results import DeleteReportResult, forbidden_error, not_found_error


class DeleteReportUseCase:
    def __init__(
        self,
        report_repository: DailyReportRepository,
        user_repository: UserRepository,
    ) -> None:
        self._reports = report_repository
        self._users = user_repository

    def execute(self, report_id: int, actor_id: int) -> DeleteReportResult:
        report = self._reports.find_by_id(report_id)
        if report is None:
            return DeleteReportResult(error=not_found_error())

        actor = self._users.find_by_id(actor_id)
        if actor is None or not can_mutate_report(actor, report):
            return DeleteReportResult(error=forbidden_error())

        self._reports.delete(report)
        logger.info(
            "Reporte eliminado", extra={"report_id": report_id, "user_id": actor_id}
        )
        return DeleteReportResult(deleted=True)
