"""
===============================================================================
REPORT INPUT (DTO + validación)
===============================================================================

Reglas (se validan ANTES de tocar cualquier repositorio):
  - title: obligatorio (no blanco), máximo 200 caracteres.
  - work_content: obligatorio, entre 10 y 1000 caracteres.
  - report_date: obligatorio.
  - status: obligatorio, "draft" o "submitted".

La validación junta todos los errores por campo en una sola respuesta.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from ....domain.entities import ReportStatus
from .report_results import ReportError, ReportErrorCode

TITLE_MAX_CHARS = 200
WORK_CONTENT_MIN_CHARS = 10
WORK_CONTENT_MAX_CHARS = 1000


@dataclass(frozen=True)
class ReportInput:
    title: Optional[str]
    work_content: Optional[str]
    report_date: Optional[date]
    status: Optional[str]


@dataclass(frozen=True)
class ValidReportInput:
    """ReportInput ya validado (status tipado, fecha presente)."""

    title: str
    work_content: str
    report_date: date
    status: ReportStatus


def parse_status(raw: Optional[str]) -> Optional[ReportStatus]:
    """'draft' / 'submitted' -> ReportStatus; cualquier otra cosa -> None."""
    try:
        return ReportStatus(raw)
    except ValueError:
        return None


def parse_status_filter(raw: Optional[str]) -> tuple[Optional[ReportStatus], bool]:
    """
    Interpreta el filtro ?status= de los listados.

    Devuelve (status, ok):
      - blanco / None => (None, True): sin filtro
      - valor válido => (ReportStatus, True)
      - valor desconocido => (None, False)
    """
    if raw is None or not raw.strip():
        return None, True
    status = parse_status(raw.strip())
    return status, status is not None


def status_filter_error(raw: str) -> ReportError:
    return ReportError(
        code=ReportErrorCode.VALIDATION_ERROR,
        message=f"Unknown status filter: {raw!r}.",
        details=[{"field": "status", "msg": "must be 'draft' or 'submitted'"}],
    )


def validate_report_input(
    data: ReportInput,
) -> tuple[Optional[ValidReportInput], Optional[ReportError]]:
    """Devuelve (input validado, None) o (None, VALIDATION_ERROR)."""
    errors: List[Dict[str, str]] = []

    title = data.title or ""
    if not title.strip():
        errors.append({"field": "title", "msg": "title is required"})
    elif len(title) > TITLE_MAX_CHARS:
        errors.append(
            {"field": "title", "msg": f"title must be at most {TITLE_MAX_CHARS} characters"}
        )

    work_content = data.work_content or ""
    if not work_content.strip():
        errors.append({"field": "work_content", "msg": "work_content is required"})
    elif not WORK_CONTENT_MIN_CHARS <= len(work_content) <= WORK_CONTENT_MAX_CHARS:
        errors.append(
            {
                "field": "work_content",
                "msg": (
                    f"work_content must be between {WORK_CONTENT_MIN_CHARS} and "
                    f"{WORK_CONTENT_MAX_CHARS} characters"
                ),
            }
        )

    if data.report_date is None:
        errors.append({"field": "report_date", "msg": "report_date is required"})

    status = parse_status(data.status)
    if status is None:
        errors.append({"field": "status", "msg": "status must be 'draft' or 'submitted'"})

    if errors:
        return None, ReportError(
            code=ReportErrorCode.VALIDATION_ERROR,
            message="Invalid report input.",
            details=errors,
        )

    return (
        ValidReportInput(
            title=title,
            work_content=work_content,
            report_date=data.report_date,
            status=status,
        ),
        None,
    )
