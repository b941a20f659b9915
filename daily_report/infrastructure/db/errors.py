"""
===============================================================================
CRC CARD — infrastructure/db/errors.py
===============================================================================

Componente:
  Errores del ciclo de vida del pool psycopg

Responsabilidades:
  - Distinguir "pool sin abrir" de "pool abierto dos veces".
  - Heredar de DatabaseError: un request que llega sin pool termina en 503
    por el mismo handler que cualquier otra falla de DB.
===============================================================================
"""

from ...crosscutting.exceptions import DatabaseError


class PoolAlreadyInitializedError(DatabaseError):
    """init_pool() llamado con un pool ya abierto en este proceso."""

    error_code: str = "POOL_ALREADY_INITIALIZED"


class PoolNotInitializedError(DatabaseError):
    """get_pool() antes de init_pool() (o después de close_pool())."""

    error_code: str = "POOL_NOT_INITIALIZED"
