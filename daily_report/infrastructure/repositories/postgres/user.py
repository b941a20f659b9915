"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Cargar usuarios por id / username / email / supervisor.
  - Insertar (id None) o actualizar usuarios.
  - Mapear filas crudas -> entidad de dominio `User` y validar `UserRole`.
  - Exponer fallos consistentes vía `DatabaseError` con logging estructurado.

Collaborators:
  - psycopg_pool.ConnectionPool (pool de conexiones)
  - infrastructure.db.pool.get_pool
  - domain.entities.User / UserRole / Timestamps
  - crosscutting.exceptions.DatabaseError

Constraints / Notes:
  - Repositorio puro: NO define reglas de negocio.
  - Retorna None cuando no existe el recurso (no exception por “not found”).
  - SQL parametrizado siempre (nunca interpolar input de usuario).
  - Orden estable en listados: id ASC.
  - supervisor_id tiene ON DELETE SET NULL (ver migración 001_foundation).
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import Timestamps, User, UserRole

# R: Lista explícita de columnas para mantener el contrato estable con migraciones.
_USER_COLUMNS = """
    id, username, email, password_hash, role, display_name,
    supervisor_id, is_active, created_at, updated_at
"""


class PostgresUserRepository:
    """R: Implementación PostgreSQL del repositorio de usuarios."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        # R: Pool inyectable para tests; en producción se obtiene por factory global.
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    # =========================================================
    # Mapping
    # =========================================================
    @staticmethod
    def _row_to_user(row: tuple) -> User:
        (
            user_id,
            username,
            email,
            password_hash,
            role,
            display_name,
            supervisor_id,
            is_active,
            created_at,
            updated_at,
        ) = row
        try:
            parsed_role = UserRole(role)
        except ValueError as exc:
            raise DatabaseError(f"Invalid user role in database: {role}") from exc

        return User(
            id=user_id,
            username=username,
            email=email,
            password_hash=password_hash,
            role=parsed_role,
            display_name=display_name,
            supervisor_id=supervisor_id,
            is_active=is_active,
            timestamps=Timestamps(created_at=created_at, updated_at=updated_at),
        )

    # =========================================================
    # Helpers de ejecución (DRY + errores consistentes)
    # =========================================================
    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    def _select_one(self, where_sql: str, value: object, context_msg: str) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users {where_sql}",
            params=[value],
            context_msg=context_msg,
            extra={"lookup": where_sql},
        )
        return self._row_to_user(row) if row else None

    # =========================================================
    # Public API
    # =========================================================
    def find_by_id(self, user_id: int) -> Optional[User]:
        return self._select_one(
            "WHERE id = %s", user_id, "PostgresUserRepository: find_by_id failed"
        )

    def find_by_username(self, username: str) -> Optional[User]:
        return self._select_one(
            "WHERE username = %s",
            username,
            "PostgresUserRepository: find_by_username failed",
        )

    def find_by_email(self, email: str) -> Optional[User]:
        return self._select_one(
            "WHERE email = %s", email, "PostgresUserRepository: find_by_email failed"
        )

    def find_by_supervisor_id(self, supervisor_id: int) -> list[User]:
        rows = self._fetchall(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE supervisor_id = %s
                ORDER BY id ASC
            """,
            params=[supervisor_id],
            context_msg="PostgresUserRepository: find_by_supervisor_id failed",
            extra={"supervisor_id": supervisor_id},
        )
        return [self._row_to_user(r) for r in rows]

    def list_users(self) -> list[User]:
        rows = self._fetchall(
            query=f"SELECT {_USER_COLUMNS} FROM users ORDER BY id ASC",
            params=[],
            context_msg="PostgresUserRepository: list_users failed",
            extra={},
        )
        return [self._row_to_user(r) for r in rows]

    def save(self, user: User) -> User:
        params = [
            user.username,
            user.email,
            user.password_hash,
            user.role.value,
            user.display_name,
            user.supervisor_id,
            user.is_active,
            user.timestamps.created_at,
            user.timestamps.updated_at,
        ]
        if user.id is None:
            row = self._fetchone(
                query=f"""
                    INSERT INTO users (
                        username, email, password_hash, role, display_name,
                        supervisor_id, is_active, created_at, updated_at
                    )
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_USER_COLUMNS}
                """,
                params=params,
                context_msg="PostgresUserRepository: insert failed",
                extra={"username": user.username},
            )
        else:
            row = self._fetchone(
                query=f"""
                    UPDATE users
                    SET username = %s, email = %s, password_hash = %s, role = %s,
                        display_name = %s, supervisor_id = %s, is_active = %s,
                        created_at = %s, updated_at = %s
                    WHERE id = %s
                    RETURNING {_USER_COLUMNS}
                """,
                params=[*params, user.id],
                context_msg="PostgresUserRepository: update failed",
                extra={"user_id": user.id},
            )

        if not row:
            raise DatabaseError(
                "PostgresUserRepository: save failed: no row returned"
            )
        return self._row_to_user(row)

    def delete(self, user: User) -> None:
        self._fetchone(
            query="DELETE FROM users WHERE id = %s RETURNING id",
            params=[user.id],
            context_msg="PostgresUserRepository: delete failed",
            extra={"user_id": user.id},
        )
