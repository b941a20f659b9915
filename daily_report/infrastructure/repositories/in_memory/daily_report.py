"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/daily_report.py
============================================================
Class: InMemoryDailyReportRepository

Responsibilities:
  - Almacenar reportes diarios en memoria (tests / app_env=test).
  - Garantizar unicidad (user_id, report_date) dentro de save(), bajo lock,
    como lo hace el constraint uq_daily_reports_user_id_report_date en Postgres.
  - Ordering determinístico alineado con Postgres:
      find_by_user:  report_date DESC, id DESC
      find_by_users: report_date DESC, user_id ASC

Collaborators:
  - domain.entities.DailyReport, ReportStatus
  - domain.repositories.DailyReportRepository
  - crosscutting.exceptions.ReportConflictError

Constraints / Notes:
  - Thread-safe: el chequeo de unicidad y la escritura son atómicos.
  - Copias defensivas: mutar un reporte devuelto no toca la "tabla".
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from threading import Lock
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ....crosscutting.exceptions import ReportConflictError
from ....domain.entities import DailyReport, ReportStatus
from ....domain.repositories import DailyReportRepository


class InMemoryDailyReportRepository(DailyReportRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._reports: Dict[int, DailyReport] = {}
        # Índice único (user_id, report_date) -> report_id
        self._by_user_date: Dict[Tuple[int, date], int] = {}
        self._next_id = 1

    @staticmethod
    def _copy(report: DailyReport) -> DailyReport:
        return replace(report)

    @staticmethod
    def _matches(report: DailyReport, status: Optional[ReportStatus]) -> bool:
        return status is None or report.status == status

    def find_by_id(self, report_id: int) -> Optional[DailyReport]:
        with self._lock:
            report = self._reports.get(report_id)
            return self._copy(report) if report else None

    def exists_for_user_and_date(self, user_id: int, report_date: date) -> bool:
        with self._lock:
            return (user_id, report_date) in self._by_user_date

    def find_by_user(
        self, user_id: int, status: Optional[ReportStatus] = None
    ) -> List[DailyReport]:
        with self._lock:
            items = [
                self._copy(r)
                for r in self._reports.values()
                if r.user_id == user_id and self._matches(r, status)
            ]
        return sorted(items, key=lambda r: (r.report_date, r.id), reverse=True)

    def find_by_users(
        self, user_ids: Sequence[int], status: Optional[ReportStatus] = None
    ) -> List[DailyReport]:
        wanted = set(user_ids)
        if not wanted:
            return []
        with self._lock:
            items = [
                self._copy(r)
                for r in self._reports.values()
                if r.user_id in wanted and self._matches(r, status)
            ]
        return self._sorted_for_users(items)

    @staticmethod
    def _sorted_for_users(items: Iterable[DailyReport]) -> List[DailyReport]:
        # report_date DESC, user_id ASC
        return sorted(items, key=lambda r: (-r.report_date.toordinal(), r.user_id))

    def save(self, report: DailyReport) -> DailyReport:
        with self._lock:
            report_id = report.id if report.id is not None else self._next_id
            key = (report.user_id, report.report_date)

            holder = self._by_user_date.get(key)
            if holder is not None and holder != report_id:
                raise ReportConflictError(report.user_id, report.report_date)

            previous = self._reports.get(report_id)
            if previous is not None:
                self._by_user_date.pop((previous.user_id, previous.report_date), None)

            stored = replace(report, id=report_id)
            self._reports[report_id] = stored
            self._by_user_date[key] = report_id
            self._next_id = max(self._next_id, report_id + 1)
            return self._copy(stored)

    def delete(self, report: DailyReport) -> None:
        with self._lock:
            stored = self._reports.pop(report.id, None)
            if stored is not None:
                self._by_user_date.pop((stored.user_id, stored.report_date), None)
