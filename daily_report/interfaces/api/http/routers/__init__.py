"""Routers HTTP por feature (reportes, usuarios)."""

from .reports import router as reports_router
from .users import router as users_router

__all__ = ["reports_router", "users_router"]
