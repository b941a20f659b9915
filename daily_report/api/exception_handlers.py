"""
===============================================================================
TARJETA CRC — api/exception_handlers.py
===============================================================================

Responsabilidades:
  - Registrar en la app el mapeo excepción tipada -> problem+json.
  - Loguear cada error con su error_id (el request_id lo pone el contexto).
  - Excepciones no tipadas: 500 genérico; en producción sin el mensaje original.

Colaboradores:
  - crosscutting.error_responses (AppHTTPException, ErrorCode)
  - crosscutting.exceptions (DailyReportError, DatabaseError, ReportConflictError)
  - crosscutting.config.get_settings
===============================================================================
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
)
from ..crosscutting.exceptions import DailyReportError, DatabaseError, ReportConflictError
from ..crosscutting.logger import logger

# R: orden de registro = más específico primero.
_TYPED_ERRORS: tuple[tuple[type[DailyReportError], ErrorCode], ...] = (
    (DatabaseError, ErrorCode.DATABASE_ERROR),
    # El caso de uso ya lo traduce a CONFLICT; esto cubre el repo usado directo.
    (ReportConflictError, ErrorCode.CONFLICT),
    (DailyReportError, ErrorCode.INTERNAL_ERROR),
)


def _code_for(exc: DailyReportError) -> ErrorCode:
    for exc_type, code in _TYPED_ERRORS:
        if isinstance(exc, exc_type):
            return code
    return ErrorCode.INTERNAL_ERROR


async def typed_error_handler(request: Request, exc: DailyReportError) -> JSONResponse:
    code = _code_for(exc)
    logger.error(
        "Error tipado en request",
        extra={
            "code": code.value,
            "error_code": exc.error_code,
            "error_id": exc.error_id,
            "error_message": exc.message,
        },
    )
    return await app_exception_handler(
        request,
        AppHTTPException.of(code, exc.message, errors=[{"error_id": exc.error_id}]),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Excepción no controlada", exc_info=exc)

    detail = "Error interno." if get_settings().is_production() else str(exc)
    return await app_exception_handler(
        request, AppHTTPException.of(ErrorCode.INTERNAL_ERROR, detail)
    )


def register_exception_handlers(app: FastAPI) -> None:
    for exc_type, _ in _TYPED_ERRORS:
        app.add_exception_handler(exc_type, typed_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    # Fallback: siempre último.
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
