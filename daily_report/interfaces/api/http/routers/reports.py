"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/reports.py
===============================================================================

Class/Module:
    Daily Report Router

Responsibilities:
    - Exponer /api/daily-reports (crear, leer, actualizar, borrar, listar).
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir ReportError -> RFC7807 (FORBIDDEN se oculta como 404).
    - Resolver el actor en el borde (require_actor).

Collaborators:
    - application.usecases.reports
    - container (factories DI)
    - dependencies.require_actor
    - schemas.reports (DTOs Pydantic)

Notas:
    - Las rutas fijas (/my, /subordinates, /today/exists) se declaran antes de
      /{report_id} para que no las capture el parámetro.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from .....application.usecases.reports import (
    CreateReportUseCase,
    DeleteReportUseCase,
    GetReportUseCase,
    HasTodayReportUseCase,
    ListMyReportsUseCase,
    ListSubordinateReportsUseCase,
    ReportListResult,
    UpdateReportUseCase,
)
from .....container import (
    get_create_report_use_case,
    get_delete_report_use_case,
    get_get_report_use_case,
    get_has_today_report_use_case,
    get_list_my_reports_use_case,
    get_list_subordinate_reports_use_case,
    get_update_report_use_case,
)
from .....domain.entities import User
from ..dependencies import require_actor
from ..error_mapping import raise_report_error
from ..schemas.reports import ReportReq, ReportRes, ReportSummaryRes

router = APIRouter(prefix="/daily-reports", tags=["daily-reports"])


def _to_summary_list(result: ReportListResult) -> list[ReportSummaryRes]:
    if result.error is not None:
        raise_report_error(result.error)
    return [ReportSummaryRes.from_summary(s) for s in result.reports]


# =============================================================================
# Endpoints
# =============================================================================


@router.post("", response_model=ReportRes, status_code=status.HTTP_201_CREATED)
def create_report(
    req: ReportReq,
    actor: User = Depends(require_actor),
    use_case: CreateReportUseCase = Depends(get_create_report_use_case),
):
    result = use_case.execute(actor.id, req.to_input())
    if result.error is not None:
        raise_report_error(result.error)
    return ReportRes.from_view(result.report)


@router.get("/my", response_model=list[ReportSummaryRes])
def list_my_reports(
    status_filter: str | None = Query(None, alias="status"),
    actor: User = Depends(require_actor),
    use_case: ListMyReportsUseCase = Depends(get_list_my_reports_use_case),
):
    return _to_summary_list(use_case.execute(actor.id, status_filter))


@router.get("/subordinates", response_model=list[ReportSummaryRes])
def list_subordinate_reports(
    status_filter: str | None = Query(None, alias="status"),
    actor: User = Depends(require_actor),
    use_case: ListSubordinateReportsUseCase = Depends(
        get_list_subordinate_reports_use_case
    ),
):
    return _to_summary_list(use_case.execute(actor.id, status_filter))


@router.get("/today/exists", response_model=bool)
def has_today_report(
    actor: User = Depends(require_actor),
    use_case: HasTodayReportUseCase = Depends(get_has_today_report_use_case),
):
    return use_case.execute(actor.id).exists


@router.get("/{report_id}", response_model=ReportRes)
def get_report(
    report_id: int,
    actor: User = Depends(require_actor),
    use_case: GetReportUseCase = Depends(get_get_report_use_case),
):
    result = use_case.execute(report_id, actor.id)
    if result.error is not None:
        raise_report_error(result.error, report_id)
    return ReportRes.from_view(result.report)


@router.put("/{report_id}", response_model=ReportRes)
def update_report(
    report_id: int,
    req: ReportReq,
    actor: User = Depends(require_actor),
    use_case: UpdateReportUseCase = Depends(get_update_report_use_case),
):
    result = use_case.execute(report_id, actor.id, req.to_input())
    if result.error is not None:
        raise_report_error(result.error, report_id)
    return ReportRes.from_view(result.report)


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_report(
    report_id: int,
    actor: User = Depends(require_actor),
    use_case: DeleteReportUseCase = Depends(get_delete_report_use_case),
):
    result = use_case.execute(report_id, actor.id)
    if result.error is not None:
        raise_report_error(result.error, report_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
