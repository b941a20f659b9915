"""
===============================================================================
TARJETA CRC — crosscutting/middleware.py
===============================================================================

Componente:
  RequestContextMiddleware

Responsabilidades:
  - Tomar X-Request-Id del cliente (si es usable) o generar uno.
  - Publicarlo en request.state y en el contexto de logging.
  - Devolverlo en la respuesta y loguear una línea por request con latencia.
  - Limpiar el contexto al terminar, pase lo que pase.

Colaboradores:
  - daily_report/context.py
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger

REQUEST_ID_HEADER = "X-Request-Id"

# Visible ASCII, sin espacios; largo acotado para no inflar logs.
_REQUEST_ID_RE = re.compile(r"^[!-~]{1,128}$")

# Probes de liveness: no generan línea de log.
_SILENT_PATHS = frozenset({"/healthz"})


def pick_request_id(incoming: str | None) -> str:
    candidate = (incoming or "").strip()
    if _REQUEST_ID_RE.match(candidate):
        return candidate
    return uuid.uuid4().hex


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = pick_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )

        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            if request.url.path not in _SILENT_PATHS:
                elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
                log = logger.warning if status_code >= 500 else logger.info
                log(
                    f"{request.method} {request.url.path} -> {status_code}",
                    extra={"status_code": status_code, "latency_ms": elapsed_ms},
                )
            clear_context()
