"""
===============================================================================
REPORT USE CASES PACKAGE (Public API / Exports)
===============================================================================

Punto único de importación para el ciclo de vida de reportes diarios:
casos de uso, DTO de entrada y modelos de resultado.
===============================================================================
"""

from __future__ import annotations

# -----------------------------------------------------------------------------
# Use Cases
# -----------------------------------------------------------------------------
from .create_report import CreateReportUseCase
from .delete_report import DeleteReportUseCase
from .get_report import GetReportUseCase
from .has_today_report import HasTodayReportUseCase
from .list_my_reports import ListMyReportsUseCase
from .list_subordinate_reports import ListSubordinateReportsUseCase
from .update_report import UpdateReportUseCase

# -----------------------------------------------------------------------------
# Input / Results
# -----------------------------------------------------------------------------
from .report_input import ReportInput, validate_report_input
from .report_results import (
    DeleteReportResult,
    ReportError,
    ReportErrorCode,
    ReportListResult,
    ReportResult,
    ReportSummary,
    ReportView,
    TodayReportResult,
    preview,
)

__all__ = [
    "CreateReportUseCase",
    "UpdateReportUseCase",
    "DeleteReportUseCase",
    "GetReportUseCase",
    "ListMyReportsUseCase",
    "ListSubordinateReportsUseCase",
    "HasTodayReportUseCase",
    "ReportInput",
    "validate_report_input",
    "ReportError",
    "ReportErrorCode",
    "ReportResult",
    "ReportListResult",
    "DeleteReportResult",
    "TodayReportResult",
    "ReportView",
    "ReportSummary",
    "preview",
]
