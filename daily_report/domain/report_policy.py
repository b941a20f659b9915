"""
===============================================================================
TARJETA CRC — domain/report_policy.py
===============================================================================

Módulo:
    Política de Acceso a Reportes Diarios (lectura / mutación / rol)

Responsabilidades:
    - Definir reglas puras de acceso a reportes (sin DB, sin FastAPI).
    - Separar "policy" de "repos" (repos solo traen datos, policy decide).
    - Ser 100% testeable: funciones puras, inputs explícitos.

Colaboradores:
    - domain.entities.User, DailyReport, UserRole
    - application/usecases/reports: consultan la policy antes de actuar.
    - application/usecases/users: is_role() para operaciones de admin.

Reglas:
    - Owner puede leer y mutar su reporte.
    - El supervisor directo del owner puede leer (un solo nivel, sin cadena).
    - Nadie más puede leer; solo el owner puede mutar.
    - El owner lo carga el caller; la policy no hace lookups.
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from .entities import DailyReport, User, UserRole


def _is_owner(actor: User, report: DailyReport) -> bool:
    return actor.id is not None and actor.id == report.user_id


def _is_direct_supervisor(actor: User, owner: Optional[User]) -> bool:
    if owner is None or owner.supervisor_id is None:
        return False
    return actor.id == owner.supervisor_id


def can_access_report(
    actor: User, report: DailyReport, owner: Optional[User]
) -> bool:
    """Evalúa permiso de lectura: owner o supervisor directo del owner."""
    return _is_owner(actor, report) or _is_direct_supervisor(actor, owner)


def can_mutate_report(actor: User, report: DailyReport) -> bool:
    """Evalúa permiso de escritura/borrado: solo el owner."""
    return _is_owner(actor, report)


def is_role(actor: Optional[User], role: UserRole) -> bool:
    """Coincidencia exacta de rol (sin jerarquía)."""
    return actor is not None and actor.role == role
