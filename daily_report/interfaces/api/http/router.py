"""
===============================================================================
TARJETA CRC — router.py (Composición del router raíz)
===============================================================================

Responsabilidades:
  - Componer los routers por feature bajo un único APIRouter.
  - El prefijo /api lo aplica api/main.py.

Colaboradores:
  - routers.reports, routers.users
===============================================================================
"""

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers import reports_router, users_router

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)
router.include_router(reports_router)
router.include_router(users_router)

__all__ = ["router"]
