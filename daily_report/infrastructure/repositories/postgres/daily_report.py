"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/daily_report.py
============================================================
Class: PostgresDailyReportRepository

Responsibilities:
  - CRUD de reportes diarios en PostgreSQL (SQL crudo, psycopg 3).
  - Traducir la violación de uq_daily_reports_user_id_report_date a
    ReportConflictError (la carrera entre dos creates la gana la DB).
  - Listados determinísticos:
      find_by_user:  ORDER BY report_date DESC, id DESC
      find_by_users: ORDER BY report_date DESC, user_id ASC

Collaborators:
  - psycopg_pool.ConnectionPool / psycopg.errors.UniqueViolation
  - domain.entities.DailyReport, ReportStatus, Timestamps
  - crosscutting.exceptions.DatabaseError, ReportConflictError

Constraints / Notes:
  - Sin lógica de negocio (permisos y transiciones viven en los casos de uso).
  - Queries siempre parametrizadas.
============================================================
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError, ReportConflictError
from ....crosscutting.logger import logger
from ....domain.entities import DailyReport, ReportStatus, Timestamps

_REPORT_COLUMNS = """
    id, user_id, title, work_content, status, report_date,
    submitted_at, created_at, updated_at
"""

_UNIQUE_USER_DATE = "uq_daily_reports_user_id_report_date"


class PostgresDailyReportRepository:
    """R: Implementación PostgreSQL del repositorio de reportes diarios."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    # =========================================================
    # Mapping
    # =========================================================
    @staticmethod
    def _row_to_report(row: tuple) -> DailyReport:
        (
            report_id,
            user_id,
            title,
            work_content,
            status,
            report_date,
            submitted_at,
            created_at,
            updated_at,
        ) = row
        try:
            parsed_status = ReportStatus(status)
        except ValueError as exc:
            raise DatabaseError(f"Invalid report status in database: {status}") from exc

        return DailyReport(
            id=report_id,
            user_id=user_id,
            title=title,
            work_content=work_content,
            status=parsed_status,
            report_date=report_date,
            submitted_at=submitted_at,
            timestamps=Timestamps(created_at=created_at, updated_at=updated_at),
        )

    # =========================================================
    # Helpers de ejecución
    # =========================================================
    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    def _write(
        self, *, report: DailyReport, query: str, params: Sequence[object], context_msg: str
    ) -> tuple | None:
        """Como _fetchone, pero la violación del único (user, fecha) es un conflicto."""
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except pg_errors.UniqueViolation as exc:
            constraint = getattr(exc.diag, "constraint_name", None)
            if constraint in (None, _UNIQUE_USER_DATE):
                logger.info(
                    "Reporte duplicado rechazado por la DB",
                    extra={"user_id": report.user_id, "report_date": str(report.report_date)},
                )
                raise ReportConflictError(report.user_id, report.report_date) from exc
            logger.exception(context_msg, extra={"error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc
        except Exception as exc:
            logger.exception(
                context_msg, extra={"report_id": report.id, "error": str(exc)}
            )
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    # =========================================================
    # Public API
    # =========================================================
    def find_by_id(self, report_id: int) -> Optional[DailyReport]:
        row = self._fetchone(
            query=f"SELECT {_REPORT_COLUMNS} FROM daily_reports WHERE id = %s",
            params=[report_id],
            context_msg="PostgresDailyReportRepository: find_by_id failed",
            extra={"report_id": report_id},
        )
        return self._row_to_report(row) if row else None

    def exists_for_user_and_date(self, user_id: int, report_date: date) -> bool:
        row = self._fetchone(
            query="""
                SELECT EXISTS (
                    SELECT 1 FROM daily_reports
                    WHERE user_id = %s AND report_date = %s
                )
            """,
            params=[user_id, report_date],
            context_msg="PostgresDailyReportRepository: exists check failed",
            extra={"user_id": user_id, "report_date": str(report_date)},
        )
        return bool(row and row[0])

    def find_by_user(
        self, user_id: int, status: Optional[ReportStatus] = None
    ) -> list[DailyReport]:
        conditions = ["user_id = %s"]
        params: list[object] = [user_id]
        if status is not None:
            conditions.append("status = %s")
            params.append(status.value)

        rows = self._fetchall(
            query=f"""
                SELECT {_REPORT_COLUMNS}
                FROM daily_reports
                WHERE {" AND ".join(conditions)}
                ORDER BY report_date DESC, id DESC
            """,
            params=params,
            context_msg="PostgresDailyReportRepository: find_by_user failed",
            extra={"user_id": user_id},
        )
        return [self._row_to_report(r) for r in rows]

    def find_by_users(
        self, user_ids: Sequence[int], status: Optional[ReportStatus] = None
    ) -> list[DailyReport]:
        if not user_ids:
            return []

        # R: ANY(%s) evita construir SQL con N placeholders.
        conditions = ["user_id = ANY(%s)"]
        params: list[object] = [list(user_ids)]
        if status is not None:
            conditions.append("status = %s")
            params.append(status.value)

        rows = self._fetchall(
            query=f"""
                SELECT {_REPORT_COLUMNS}
                FROM daily_reports
                WHERE {" AND ".join(conditions)}
                ORDER BY report_date DESC, user_id ASC
            """,
            params=params,
            context_msg="PostgresDailyReportRepository: find_by_users failed",
            extra={"user_count": len(user_ids)},
        )
        return [self._row_to_report(r) for r in rows]

    def save(self, report: DailyReport) -> DailyReport:
        params = [
            report.user_id,
            report.title,
            report.work_content,
            report.status.value,
            report.report_date,
            report.submitted_at,
            report.timestamps.created_at,
            report.timestamps.updated_at,
        ]
        if report.id is None:
            row = self._write(
                report=report,
                query=f"""
                    INSERT INTO daily_reports (
                        user_id, title, work_content, status, report_date,
                        submitted_at, created_at, updated_at
                    )
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_REPORT_COLUMNS}
                """,
                params=params,
                context_msg="PostgresDailyReportRepository: insert failed",
            )
        else:
            row = self._write(
                report=report,
                query=f"""
                    UPDATE daily_reports
                    SET user_id = %s, title = %s, work_content = %s, status = %s,
                        report_date = %s, submitted_at = %s,
                        created_at = %s, updated_at = %s
                    WHERE id = %s
                    RETURNING {_REPORT_COLUMNS}
                """,
                params=[*params, report.id],
                context_msg="PostgresDailyReportRepository: update failed",
            )

        if not row:
            raise DatabaseError(
                "PostgresDailyReportRepository: save failed: no row returned"
            )
        return self._row_to_report(row)

    def delete(self, report: DailyReport) -> None:
        self._fetchone(
            query="DELETE FROM daily_reports WHERE id = %s RETURNING id",
            params=[report.id],
            context_msg="PostgresDailyReportRepository: delete failed",
            extra={"report_id": report.id},
        )
