"""
===============================================================================
USE CASE: List Subordinate Reports
===============================================================================

Business Goal:
    Listar los reportes de los subordinados directos de un supervisor.

Reglas:
    - Un solo nivel: subordinados = usuarios con supervisor_id == supervisor.
    - Sin subordinados => [] sin consultar el repositorio de reportes.
    - Orden: report_date DESC, user_id ASC.
    - Mismo filtro de estado que "mis reportes".

Collaborators:
    - UserRepository.find_by_supervisor_id
    - DailyReportRepository.find_by_users
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from ....domain.repositories import DailyReportRepository, UserRepository
from .report_input import parse_status_filter, status_filter_error
from .report_results import ReportListResult, to_summary


class ListSubordinateReportsUseCase:
    def __init__(
        self,
        report_repository: DailyReportRepository,
        user_repository: UserRepository,
    ) -> None:
        self._reports = report_repository
        self._users = user_repository

    def execute(
        self, supervisor_id: int, status: Optional[str] = None
    ) -> ReportListResult:
        status_filter, ok = parse_status_filter(status)
        if not ok:
            return ReportListResult(error=status_filter_error(status))

        subordinates = self._users.find_by_supervisor_id(supervisor_id)
        if not subordinates:
            return ReportListResult(reports=[])

        owners = {u.id: u for u in subordinates}
        reports = self._reports.find_by_users(list(owners), status_filter)
        return ReportListResult(
            reports=[to_summary(r, owners[r.user_id]) for r in reports]
        )
