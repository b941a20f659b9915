"""
===============================================================================
MÓDULO: Errores HTTP como Problem Details (RFC 7807)
===============================================================================

Todo error que sale de la API (auth, reportes, administración de usuarios)
tiene la misma forma: `application/problem+json` con un `code` estable que
el cliente puede usar sin parsear mensajes.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  ErrorCode + ErrorDetail + AppHTTPException

Responsabilidades:
  - Catálogo de códigos y su status HTTP por defecto
  - Factories para los errores que usan routers y dependencias
  - Handler FastAPI que serializa AppHTTPException

Colaboradores:
  - interfaces/api/http/error_mapping.py (ReportError / UserAdminError -> HTTP)
  - api/exception_handlers.py (excepciones tipadas -> HTTP)
  - crosscutting/middleware.py (request.state.request_id)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"

    @property
    def status(self) -> int:
        return _STATUS_BY_CODE[self]

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()


_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.DATABASE_ERROR: 503,
}


class ErrorDetail(BaseModel):
    """
    Cuerpo problem+json.

    `errors` lleva detalles por campo ({"field": "work_content", "message": ...})
    y, cuando existe, el request_id para soporte.
    """

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


class AppHTTPException(HTTPException):
    """HTTPException con ErrorCode y detalles opcionales por campo."""

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code
        self.errors = errors

    @classmethod
    def of(
        cls,
        code: ErrorCode,
        detail: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
    ) -> "AppHTTPException":
        return cls(code.status, code, detail, errors, headers)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException.of(ErrorCode.VALIDATION_ERROR, detail, errors=errors)


def not_found(resource: str, identifier: str) -> AppHTTPException:
    return AppHTTPException.of(
        ErrorCode.NOT_FOUND, f"{resource} '{identifier}' no encontrado"
    )


def conflict(detail: str) -> AppHTTPException:
    return AppHTTPException.of(ErrorCode.CONFLICT, detail)


def unauthorized(detail: str = "Autenticación requerida") -> AppHTTPException:
    # R: 401 siempre anuncia el esquema Bearer.
    return AppHTTPException.of(
        ErrorCode.UNAUTHORIZED, detail, headers={"WWW-Authenticate": "Bearer"}
    )


def forbidden(detail: str = "Acceso denegado") -> AppHTTPException:
    return AppHTTPException.of(ErrorCode.FORBIDDEN, detail)


def internal_error(detail: str = "Ocurrió un error inesperado") -> AppHTTPException:
    return AppHTTPException.of(ErrorCode.INTERNAL_ERROR, detail)


# ---------------------------------------------------------------------------
# OpenAPI
# ---------------------------------------------------------------------------
def _problem_response(description: str) -> dict[str, Any]:
    return {
        "description": description,
        "model": ErrorDetail,
        "content": {
            PROBLEM_JSON_MEDIA_TYPE: {
                "schema": {"$ref": "#/components/schemas/ErrorDetail"}
            }
        },
    }


OPENAPI_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    code.status: _problem_response(code.label)
    for code in (
        ErrorCode.UNAUTHORIZED,
        ErrorCode.FORBIDDEN,
        ErrorCode.NOT_FOUND,
        ErrorCode.CONFLICT,
        ErrorCode.VALIDATION_ERROR,
    )
}
OPENAPI_ERROR_RESPONSES["default"] = _problem_response("Unexpected error")


# ---------------------------------------------------------------------------
# Handler
# ---------------------------------------------------------------------------
def to_problem(request: Request, exc: AppHTTPException) -> ErrorDetail:
    errors = list(exc.errors or [])
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        errors.append({"request_id": request_id})

    return ErrorDetail(
        type=f"about:blank/{exc.code.value.lower()}",
        title=exc.code.label,
        status=exc.status_code,
        detail=str(exc.detail),
        code=exc.code,
        instance=request.url.path,
        errors=errors or None,
    )


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    problem = to_problem(request, exc)
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(mode="json", exclude_none=True),
        headers=exc.headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )
