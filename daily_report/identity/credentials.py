"""
===============================================================================
TARJETA CRC — identity/credentials.py
===============================================================================

Módulo:
    Credential Verifier (hash / verificación de passwords)

Responsabilidades:
    - Hashear passwords en alta de usuarios (Argon2).
    - Verificar password en claro vs hash almacenado.
    - Nunca levantar excepciones por hash inválido: devuelve False.

Colaboradores:
    - application/usecases/auth.LoginUseCase: verifica credenciales.
    - application/usecases/users.CreateUserUseCase: hashea al crear.
    - application/dev_seed: hashea passwords de demo.

Decisiones:
    - El hash es opaco para el resto del sistema; el formato lo define argon2.
===============================================================================
"""

from __future__ import annotations

from typing import Protocol

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError


class CredentialVerifier(Protocol):
    """Contrato de verificación de credenciales."""

    def matches(self, plaintext: str, password_hash: str) -> bool:
        ...

    def hash(self, plaintext: str) -> str:
        ...


class Argon2CredentialVerifier:
    """Implementación Argon2id (argon2-cffi)."""

    def __init__(self, hasher: PasswordHasher | None = None):
        self._hasher = hasher or PasswordHasher()

    def hash(self, plaintext: str) -> str:
        return self._hasher.hash(plaintext)

    def matches(self, plaintext: str, password_hash: str) -> bool:
        if not password_hash:
            return False
        try:
            return self._hasher.verify(password_hash, plaintext)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False
