"""
===============================================================================
TARJETA CRC — api/main.py (ASGI app)
===============================================================================

Responsabilidades:
  - Armar la app FastAPI: middleware, CORS, routers bajo /api, handlers.
  - Lifespan: pool de Postgres (salvo APP_ENV=test) + seed demo local.
  - /healthz con estado de storage y request_id.

Colaboradores:
  - container (repositorios / verificador de credenciales)
  - infrastructure.db.pool
  - interfaces.api.http.router, api.auth_routes
  - api.exception_handlers

Notas:
  - Orden efectivo de middleware: RequestContext envuelve a CORS.
  - Con AUTH_ENFORCED=false se loguea un warning al arrancar.
===============================================================================
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..application.dev_seed import ensure_dev_demo
from ..container import (
    get_credential_verifier,
    get_report_repository,
    get_user_repository,
)
from ..crosscutting.config import Settings, get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from ..infrastructure.db import pool as db_pool
from ..interfaces.api.http.router import router as api_router
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers

API_PREFIX = "/api"

OPENAPI_TAGS = [
    {"name": "auth", "description": "Login y sesión (JWT Bearer)"},
    {"name": "daily-reports", "description": "Reportes diarios de trabajo"},
    {"name": "users", "description": "Administración de usuarios (solo admin)"},
]


def _open_storage(settings: Settings) -> None:
    if settings.is_test():
        return
    db_pool.init_pool(
        database_url=settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        statement_timeout_ms=settings.db_statement_timeout_ms,
    )


def _close_storage(settings: Settings) -> None:
    if not settings.is_test():
        db_pool.close_pool()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    _open_storage(settings)
    try:
        ensure_dev_demo(
            settings,
            get_user_repository(),
            get_report_repository(),
            get_credential_verifier(),
        )
        if not settings.auth_enforced:
            logger.warning(
                "AUTH_ENFORCED=false: todas las requests usan el usuario de debug",
                extra={"username": settings.debug_default_username},
            )
        logger.info(
            "daily-report API lista",
            extra={"app_env": settings.app_env, "auth_enforced": settings.auth_enforced},
        )
        yield
    finally:
        _close_storage(settings)
        logger.info("daily-report API detenida")


def _storage_status() -> str:
    if get_settings().is_test():
        return "in-memory"
    try:
        return "connected" if db_pool.ping() else "disconnected"
    except Exception as exc:
        logger.warning("healthz: DB no disponible", extra={"error": str(exc)})
        return "disconnected"


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Daily Report API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )
    # R: el último agregado es el más externo; el request_id existe antes que CORS.
    app.add_middleware(RequestContextMiddleware)

    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(api_router, prefix=API_PREFIX)
    register_exception_handlers(app)

    @app.get("/healthz", tags=["health"])
    def healthz(request: Request) -> dict:
        db_status = _storage_status()
        return {
            "ok": db_status != "disconnected",
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    return app


app = create_app()
