"""
===============================================================================
USE CASE: Get Daily Report
===============================================================================

Business Goal:
    Devolver el detalle de un reporte si el actor es el owner o el supervisor
    directo del owner.

Notas:
    - NOT_FOUND y FORBIDDEN son distintos acá; afuera ambos salen como 404
      para no revelar la existencia del reporte.
    - El owner se carga acá y se le pasa a la policy (la policy no hace I/O).

Collaborators:
    - DailyReportRepository: find_by_id
    - UserRepository: find_by_id (actor + owner)
    - report_policy.can_access_report
===============================================================================
"""

from __future__ import annotations

from ....domain.report_policy import can_access_report
from ....domain.repositories import DailyReportRepository, UserRepository
from .report_results import ReportResult, forbidden_error, not_found_error, to_view


class GetReportUseCase:
    def __init__(
        self,
        report_repository: DailyReportRepository,
        user_repository: UserRepository,
    ) -> None:
        self._reports = report_repository
        self._users = user_repository

    def execute(self, report_id: int, actor_id: int) -> ReportResult:
        report = self._reports.find_by_id(report_id)
        if report is None:
            return ReportResult(error=not_found_error())

        actor = self._users.find_by_id(actor_id)
        owner = (
            actor
            if actor is not None and actor.id == report.user_id
            else self._users.find_by_id(report.user_id)
        )

        if actor is None or not can_access_report(actor, report, owner):
            return ReportResult(error=forbidden_error())

        if owner is None:
            # R: el FK con CASCADE impide reportes huérfanos; por las dudas.
            return ReportResult(error=not_found_error())

        return ReportResult(report=to_view(report, owner))
