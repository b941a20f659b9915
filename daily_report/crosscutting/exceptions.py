"""
Excepciones internas de daily-report.

Cada una lleva un `error_code` estable y un `error_id` (uuid) que aparece
tanto en el log como en la respuesta problem+json, así un reporte de
soporte se puede cruzar con la línea de log exacta.

El mapeo a HTTP vive en api/exception_handlers.py; acá no se conoce FastAPI.
"""

from __future__ import annotations

from datetime import date
from uuid import uuid4


class DailyReportError(Exception):
    """Base de los errores que no son resultado de un caso de uso."""

    error_code: str = "DAILY_REPORT_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_id = error_id or uuid4().hex
        self.original_error = original_error

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.error_code}, error_id={self.error_id})"


class DatabaseError(DailyReportError):
    """Postgres no respondió o rechazó la operación (no es un error del usuario)."""

    error_code: str = "DATABASE_ERROR"


class ReportConflictError(DailyReportError):
    """El par (user_id, report_date) ya está ocupado por otro reporte."""

    error_code: str = "REPORT_CONFLICT"

    def __init__(
        self, user_id: int, report_date: date, error_id: str | None = None
    ):
        self.user_id = user_id
        self.report_date = report_date
        super().__init__(
            f"User {user_id} already has a report for {report_date.isoformat()}",
            error_id=error_id,
        )
