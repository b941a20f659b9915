"""
USE CASE: Has Today Report

¿El actor ya cargó su reporte de hoy? "Hoy" es la fecha local del servidor
salvo que se pase una explícita.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from ....domain.repositories import DailyReportRepository
from .report_results import TodayReportResult


class HasTodayReportUseCase:
    def __init__(
        self,
        report_repository: DailyReportRepository,
        *,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self._reports = report_repository
        self._today = today or date.today

    def execute(self, actor_id: int, today: Optional[date] = None) -> TodayReportResult:
        target = today or self._today()
        return TodayReportResult(
            exists=self._reports.exists_for_user_and_date(actor_id, target)
        )
