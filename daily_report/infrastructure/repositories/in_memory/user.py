"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar usuarios en memoria (tests / app_env=test).
  - Asignar ids incrementales al insertar (id None).
  - Índices por username / email para lookups O(1).
  - Al borrar un usuario, desvincular a sus subordinados (supervisor_id -> None),
    igual que el ON DELETE SET NULL de Postgres.

Collaborators:
  - domain.entities.User
  - domain.repositories.UserRepository (contrato a implementar)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Copias defensivas: los callers nunca comparten la instancia almacenada.
  - Unicidad de username/email: ValueError si se viola (los casos de uso
    chequean antes; esto solo protege la "tabla").
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from threading import Lock
from typing import Dict, List, Optional

from ....domain.entities import User
from ....domain.repositories import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[int, User] = {}
        self._by_username: Dict[str, int] = {}
        self._by_email: Dict[str, int] = {}
        self._next_id = 1

    @staticmethod
    def _copy(user: User) -> User:
        return replace(user)

    def find_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return self._copy(user) if user else None

    def find_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            user_id = self._by_username.get(username)
            return self._copy(self._users[user_id]) if user_id is not None else None

    def find_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user_id = self._by_email.get(email)
            return self._copy(self._users[user_id]) if user_id is not None else None

    def find_by_supervisor_id(self, supervisor_id: int) -> List[User]:
        with self._lock:
            return [
                self._copy(u)
                for _, u in sorted(self._users.items())
                if u.supervisor_id == supervisor_id
            ]

    def list_users(self) -> List[User]:
        with self._lock:
            return [self._copy(u) for _, u in sorted(self._users.items())]

    def save(self, user: User) -> User:
        with self._lock:
            user_id = user.id
            if user_id is None:
                user_id = self._next_id
            self._check_unique(user, user_id)

            previous = self._users.get(user_id)
            if previous is not None:
                self._by_username.pop(previous.username, None)
                if previous.email:
                    self._by_email.pop(previous.email, None)

            stored = replace(user, id=user_id)
            self._users[user_id] = stored
            self._by_username[stored.username] = user_id
            if stored.email:
                self._by_email[stored.email] = user_id
            self._next_id = max(self._next_id, user_id + 1)
            return self._copy(stored)

    def delete(self, user: User) -> None:
        with self._lock:
            stored = self._users.pop(user.id, None)
            if stored is None:
                return
            self._by_username.pop(stored.username, None)
            if stored.email:
                self._by_email.pop(stored.email, None)
            for other in self._users.values():
                if other.supervisor_id == stored.id:
                    other.supervisor_id = None

    def _check_unique(self, user: User, user_id: int) -> None:
        owner = self._by_username.get(user.username)
        if owner is not None and owner != user_id:
            raise ValueError(f"username already taken: {user.username}")
        if user.email:
            owner = self._by_email.get(user.email)
            if owner is not None and owner != user_id:
                raise ValueError(f"email already taken: {user.email}")
