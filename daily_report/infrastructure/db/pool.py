"""
===============================================================================
TARJETA CRC — infrastructure/db/pool.py
===============================================================================

Componente:
  Pool psycopg compartido por el proceso

Responsabilidades:
  - init_pool / get_pool / close_pool (ciclo de vida explícito, lo maneja el lifespan).
  - Fijar statement_timeout en cada conexión nueva.
  - ping() para /healthz.

Colaboradores:
  - psycopg_pool.ConnectionPool
  - api/main.py
  - infrastructure/repositories/postgres/*
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

from psycopg import Connection
from psycopg_pool import ConnectionPool

from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError

_state_lock = threading.Lock()
_pool: Optional[ConnectionPool] = None


def _session_setup(statement_timeout_ms: int) -> Callable[[Connection], None]:
    def configure(conn: Connection) -> None:
        if statement_timeout_ms <= 0:
            return
        # SET no acepta parámetros; el valor ya es int.
        conn.execute(f"SET statement_timeout = {int(statement_timeout_ms)}")
        conn.commit()

    return configure


def init_pool(
    database_url: str,
    min_size: int,
    max_size: int,
    *,
    statement_timeout_ms: int = 0,
) -> ConnectionPool:
    global _pool

    with _state_lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("init_pool() ya fue llamado en este proceso.")
        _pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            configure=_session_setup(statement_timeout_ms),
            open=True,
        )

    logger.info(
        "Pool DB abierto",
        extra={
            "min_size": min_size,
            "max_size": max_size,
            "statement_timeout_ms": statement_timeout_ms,
        },
    )
    return _pool


def get_pool() -> ConnectionPool:
    pool = _pool
    if pool is None:
        raise PoolNotInitializedError("Pool DB no disponible: falta init_pool().")
    return pool


def close_pool() -> None:
    """Idempotente: sin pool abierto no hace nada."""
    global _pool

    with _state_lock:
        pool, _pool = _pool, None
    if pool is not None:
        pool.close()
        logger.info("Pool DB cerrado")


def ping() -> bool:
    with get_pool().connection() as conn:
        row = conn.execute("SELECT 1").fetchone()
    return row is not None and row[0] == 1
