"""
===============================================================================
USE CASE: List My Reports
===============================================================================

Business Goal:
    Listar los reportes del actor, fecha más reciente primero, con filtro
    opcional por estado.

Reglas:
    - status vacío o blanco => sin filtro.
    - status desconocido => VALIDATION_ERROR.
    - Filas con preview del contenido (100 caracteres + "...").
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from ....domain.repositories import DailyReportRepository, UserRepository
from .report_input import parse_status_filter, status_filter_error
from .report_results import ReportListResult, to_summary, unknown_user_error


class ListMyReportsUseCase:
    def __init__(
        self,
        report_repository: DailyReportRepository,
        user_repository: UserRepository,
    ) -> None:
        self._reports = report_repository
        self._users = user_repository

    def execute(self, actor_id: int, status: Optional[str] = None) -> ReportListResult:
        status_filter, ok = parse_status_filter(status)
        if not ok:
            return ReportListResult(error=status_filter_error(status))

        actor = self._users.find_by_id(actor_id)
        if actor is None:
            return ReportListResult(error=unknown_user_error())

        reports = self._reports.find_by_user(actor_id, status_filter)
        return ReportListResult(reports=[to_summary(r, actor) for r in reports])
