"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir códigos de error de casos de uso a HTTP Exceptions RFC7807.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener el dominio libre de HTTP.

Reglas:
  - Reportes: FORBIDDEN sale como 404 (no se revela que el reporte existe).
  - Usuarios (admin): FORBIDDEN sale como 403.
  - Login: cualquier fallo sale como 401 con un único mensaje.

Colaboradores:
  - application.usecases.reports.ReportError
  - application.usecases.users.UserError
  - application.usecases.auth.AuthError
  - crosscutting.error_responses
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn

from ....application.usecases.auth import AuthError
from ....application.usecases.reports import ReportError, ReportErrorCode
from ....application.usecases.users import UserError, UserErrorCode
from ....crosscutting.error_responses import (
    conflict,
    forbidden,
    internal_error,
    not_found,
    unauthorized,
    validation_error,
)


def raise_report_error(error: ReportError, report_id: int | None = None) -> NoReturn:
    if error.code == ReportErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message, error.details or None)

    if error.code in (ReportErrorCode.NOT_FOUND, ReportErrorCode.FORBIDDEN):
        raise not_found("Report", str(report_id if report_id is not None else "-"))

    if error.code == ReportErrorCode.UNKNOWN_USER:
        raise not_found("User", "-")

    if error.code == ReportErrorCode.CONFLICT:
        raise conflict(error.message)

    # Fallback defensivo (no debería ocurrir)
    raise internal_error(error.message)


def raise_user_error(error: UserError, user_id: int | None = None) -> NoReturn:
    if error.code == UserErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message, error.details or None)

    if error.code == UserErrorCode.FORBIDDEN:
        raise forbidden(error.message)

    if error.code == UserErrorCode.NOT_FOUND:
        raise not_found("User", str(user_id if user_id is not None else "-"))

    if error.code == UserErrorCode.CONFLICT:
        raise conflict(error.message)

    raise internal_error(error.message)


def raise_auth_error(error: AuthError) -> NoReturn:
    raise unauthorized(error.message)
